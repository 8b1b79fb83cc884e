"""Review aggregation: one ReviewSummary per product from checks + revision age."""

from __future__ import annotations

from datetime import date

from rtcatalog.review.checks import count_by_status, run_review_checks
from rtcatalog.review.revision import (
    SENTINEL_REVISION_DATE,
    Clock,
    FixedClock,
    SystemClock,
    days_since_revision,
    urgency_for_days,
)
from rtcatalog.schemas.models import (
    ProductRecord,
    ReviewDashboardStats,
    ReviewStatus,
    ReviewSummary,
    Urgency,
)
from rtcatalog.vocabulary import DEFAULT_VOCABULARY, Vocabulary


def status_for_counts(failures: int, warnings: int) -> ReviewStatus:
    """Any failure makes the product critical, whatever the warning count."""
    if failures > 0:
        return ReviewStatus.CRITICAL
    if warnings > 0:
        return ReviewStatus.WARNING
    return ReviewStatus.OK


def build_review_summary(
    product: ProductRecord,
    clock: Clock | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    sentinel: date = SENTINEL_REVISION_DATE,
) -> ReviewSummary:
    failures, warnings = count_by_status(run_review_checks(product, vocabulary))
    days = days_since_revision(product, clock, sentinel)
    return ReviewSummary(
        id=product.id,
        name=product.name,
        company=product.company,
        category=product.category,
        status=status_for_counts(failures, warnings),
        urgency=urgency_for_days(days),
        days_since_review=days,
        issue_count=failures + warnings,
    )


def review_products(
    products: list[ProductRecord],
    clock: Clock | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    sentinel: date = SENTINEL_REVISION_DATE,
) -> list[ReviewSummary]:
    """Summaries for a collection, in input order. All rows share one 'today'."""
    today = (clock or SystemClock()).today()
    pinned = FixedClock(today)
    return [build_review_summary(p, pinned, vocabulary, sentinel) for p in products]


def filter_review_summaries(
    summaries: list[ReviewSummary],
    category: str | None = None,
    company: str | None = None,
    status: ReviewStatus | str | None = None,
    urgency: Urgency | str | None = None,
) -> list[ReviewSummary]:
    """Exact-match narrowing for the review table; None leaves a column unfiltered."""
    status = ReviewStatus(status) if status else None
    urgency = Urgency(urgency) if urgency else None
    return [
        s
        for s in summaries
        if (not category or s.category == category)
        and (not company or s.company == company)
        and (status is None or s.status == status)
        and (urgency is None or s.urgency == urgency)
    ]


def review_dashboard(summaries: list[ReviewSummary]) -> ReviewDashboardStats:
    return ReviewDashboardStats(
        critical_count=sum(1 for s in summaries if s.status == ReviewStatus.CRITICAL),
        warning_count=sum(1 for s in summaries if s.status == ReviewStatus.WARNING),
        overdue_count=sum(1 for s in summaries if s.urgency == Urgency.HIGH),
    )
