"""Product review: format validation, completeness checks, revision age and summaries."""

from rtcatalog.review.checks import run_review_checks, summarize_checks
from rtcatalog.review.data_audit import audit_product_data, data_fix_recommendations
from rtcatalog.review.revision import (
    FixedClock,
    SystemClock,
    calculate_revision_stats,
    days_since_revision,
    revision_label,
    urgency_level,
)
from rtcatalog.review.summary import build_review_summary, review_dashboard, review_products
from rtcatalog.review.validator import validate_product, validate_products

__all__ = [
    "FixedClock",
    "SystemClock",
    "audit_product_data",
    "build_review_summary",
    "calculate_revision_stats",
    "data_fix_recommendations",
    "days_since_revision",
    "review_dashboard",
    "review_products",
    "revision_label",
    "run_review_checks",
    "summarize_checks",
    "urgency_level",
    "validate_product",
    "validate_products",
]
