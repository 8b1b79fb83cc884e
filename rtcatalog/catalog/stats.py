"""Catalog statistics: facet option lists, distinct counts and model counting."""

from __future__ import annotations

from collections import Counter
from typing import Literal

from pydantic import BaseModel

from rtcatalog.catalog.filters import matches_task
from rtcatalog.schemas.models import ProductRecord

# Display order of the radiotherapy workflow tasks; unknown tasks sort after, alphabetically
TASK_ORDER = [
    "Reconstruction",
    "Image Enhancement",
    "Image Synthesis",
    "Auto-Contouring",
    "Treatment Planning",
    "Clinical Prediction",
    "Registration",
    "Performance Monitor",
]

FacetField = Literal["category", "anatomical_location", "company", "certification", "modality"]
CountingMode = Literal["models", "products"]


class ProductStats(BaseModel):
    total_products: int = 0
    companies_count: int = 0
    categories_count: int = 0
    modalities_count: int = 0
    top_categories: list[tuple[str, int]] = []
    top_companies: list[tuple[str, int]] = []


def _task_sort_key(task: str) -> tuple[int, str]:
    if task in TASK_ORDER:
        return (TASK_ORDER.index(task), "")
    return (len(TASK_ORDER), task)


def facet_options(products: list[ProductRecord], field: FacetField) -> list[str]:
    """Distinct values available for a filter facet."""
    if field == "category":
        return sorted({p.category for p in products if p.category}, key=_task_sort_key)
    if field == "anatomical_location":
        return sorted({loc for p in products for loc in p.anatomy_list if loc})
    if field == "company":
        return sorted({p.company for p in products if p.company})
    if field == "certification":
        return sorted({p.certification for p in products if p.certification})
    if field == "modality":
        return sorted({m for p in products for m in p.modality_list if m})
    return []


def product_stats(products: list[ProductRecord], top: int = 5) -> ProductStats:
    categories = Counter(p.category for p in products)
    companies = Counter(p.company for p in products)
    return ProductStats(
        total_products=len(products),
        companies_count=len(companies),
        categories_count=len(categories),
        modalities_count=len({m for p in products for m in p.modality_list if m}),
        top_categories=categories.most_common(top),
        top_companies=companies.most_common(top),
    )


def count_models_in_product(product: ProductRecord, mode: CountingMode = "models") -> int:
    """Auto-contouring products ship one model per modality; everything else counts once."""
    if mode == "products":
        return 1
    if product.category == "Auto-Contouring":
        return max(1, len(product.modality_list))
    return 1


def count_total_models(products: list[ProductRecord], mode: CountingMode = "models") -> int:
    return sum(count_models_in_product(p, mode) for p in products)


def count_models_for_task(
    products: list[ProductRecord],
    task: str,
    mode: CountingMode = "models",
) -> int:
    return count_total_models([p for p in products if matches_task(p, task)], mode)
