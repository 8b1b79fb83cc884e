"""Collection-level data audit: counts of records with missing or inconsistent data."""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel

from rtcatalog.review.revision import SENTINEL_REVISION_DATE, parse_iso_date
from rtcatalog.schemas.models import ProductRecord

AUTO_CONTOURING = "Auto-Contouring"


class DataAuditResult(BaseModel):
    category: str = "Unknown"
    total: int = 0
    missing_dates: int = 0
    sentinel_dates: int = 0
    missing_urls: int = 0
    scalar_modalities: int = 0
    missing_structures: int = 0
    incomplete_regulatory: int = 0


def audit_product_data(products: list[ProductRecord]) -> DataAuditResult:
    """Count data problems across a (usually single-category) product list."""
    categories = Counter(p.category for p in products if p.category)
    result = DataAuditResult(
        category=categories.most_common(1)[0][0] if categories else "Unknown",
        total=len(products),
    )
    for p in products:
        if not p.last_revised or not p.last_updated:
            result.missing_dates += 1
        if parse_iso_date(p.last_revised) == SENTINEL_REVISION_DATE:
            result.sentinel_dates += 1
        if not p.company_url or not p.product_url:
            result.missing_urls += 1
        if isinstance(p.modality, str):
            result.scalar_modalities += 1
        if p.category == AUTO_CONTOURING and not p.structure_entries:
            result.missing_structures += 1
        reg = p.regulatory
        if reg is None or reg.ce is None or not reg.ce.status or not reg.fda:
            result.incomplete_regulatory += 1
    return result


def data_fix_recommendations(result: DataAuditResult) -> list[str]:
    recs: list[str] = []
    if result.missing_dates or result.sentinel_dates:
        recs.append(
            f"Fix date information: {result.missing_dates} products missing dates, "
            f"{result.sentinel_dates} with placeholder dates."
        )
    if result.missing_urls:
        recs.append(f"Add missing URLs: {result.missing_urls} products need URL validation.")
    if result.scalar_modalities:
        recs.append(
            f"Convert modalities to lists: {result.scalar_modalities} products "
            "have a single-string modality."
        )
    if result.missing_structures:
        recs.append(
            f"Add supported structures: {result.missing_structures} auto-contouring "
            "products need structure information."
        )
    if result.incomplete_regulatory:
        recs.append(
            f"Standardize regulatory data: {result.incomplete_regulatory} products "
            "have incomplete regulatory information."
        )
    return recs
