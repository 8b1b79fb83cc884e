"""Revision freshness: days since last revision, urgency and four-band revision labels.

Two separate scales are derived from the same day count and must not be merged:

* **urgency** (3 bands) drives the review queue: ``>365`` high, ``>180`` medium, else low.
* **revision label** (4 bands) is for display: 0-90 recent, 91-180 due soon,
  181-365 overdue, >365 critical.

"Today" always comes from an injected ``Clock`` so results are reproducible in tests.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Protocol

from rtcatalog.schemas.models import (
    ProductRecord,
    RevisionAgeGroups,
    RevisionLabel,
    RevisionStats,
    Urgency,
)

logger = logging.getLogger(__name__)

SENTINEL_REVISION_DATE = date(2000, 1, 1)

URGENCY_HIGH_AFTER_DAYS = 365
URGENCY_MEDIUM_AFTER_DAYS = 180
LABEL_RECENT_MAX_DAYS = 90


class Clock(Protocol):
    def today(self) -> date: ...


class SystemClock:
    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to one day."""

    def __init__(self, today: date | str):
        self._today = today if isinstance(today, date) else date.fromisoformat(today)

    def today(self) -> date:
        return self._today


def parse_iso_date(value: str | None) -> date | None:
    """Parse an ISO-8601 date or datetime string; None when absent or unparseable."""
    if not value:
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        logger.debug("Unparseable date %r", value)
        return None


def days_since_revision(
    product: ProductRecord,
    clock: Clock | None = None,
    sentinel: date = SENTINEL_REVISION_DATE,
) -> int:
    """Whole days between today and lastRevised; never-revised products count from the sentinel."""
    clock = clock or SystemClock()
    revised = parse_iso_date(product.last_revised) or sentinel
    return abs((clock.today() - revised).days)


def urgency_for_days(days: int) -> Urgency:
    if days > URGENCY_HIGH_AFTER_DAYS:
        return Urgency.HIGH
    if days > URGENCY_MEDIUM_AFTER_DAYS:
        return Urgency.MEDIUM
    return Urgency.LOW


def urgency_level(
    product: ProductRecord,
    clock: Clock | None = None,
    sentinel: date = SENTINEL_REVISION_DATE,
) -> Urgency:
    return urgency_for_days(days_since_revision(product, clock, sentinel))


def revision_label_for_days(days: int) -> RevisionLabel:
    if days <= LABEL_RECENT_MAX_DAYS:
        return RevisionLabel.RECENT
    if days <= URGENCY_MEDIUM_AFTER_DAYS:
        return RevisionLabel.DUE_SOON
    if days <= URGENCY_HIGH_AFTER_DAYS:
        return RevisionLabel.OVERDUE
    return RevisionLabel.CRITICAL


def revision_label(
    product: ProductRecord,
    clock: Clock | None = None,
    sentinel: date = SENTINEL_REVISION_DATE,
) -> RevisionLabel:
    return revision_label_for_days(days_since_revision(product, clock, sentinel))


def needs_revision(
    product: ProductRecord,
    clock: Clock | None = None,
    sentinel: date = SENTINEL_REVISION_DATE,
) -> bool:
    """True after six months without a revision."""
    return days_since_revision(product, clock, sentinel) > URGENCY_MEDIUM_AFTER_DAYS


def calculate_revision_stats(
    products: list[ProductRecord],
    clock: Clock | None = None,
    sentinel: date = SENTINEL_REVISION_DATE,
) -> RevisionStats:
    """Collection-wide freshness: stale products (most stale first), share up to date, age bands."""
    if not products:
        return RevisionStats()
    clock = clock or SystemClock()
    aged = [(p, days_since_revision(p, clock, sentinel)) for p in products]

    stale = [(p, d) for p, d in aged if d > URGENCY_MEDIUM_AFTER_DAYS]
    stale.sort(key=lambda pd: pd[1], reverse=True)

    groups = RevisionAgeGroups()
    for _, d in aged:
        label = revision_label_for_days(d)
        if label == RevisionLabel.CRITICAL:
            groups.critical += 1
        elif label == RevisionLabel.OVERDUE:
            groups.long_term += 1
        elif label == RevisionLabel.DUE_SOON:
            groups.medium_term += 1
        else:
            groups.short_term += 1

    up_to_date = len(products) - len(stale)
    return RevisionStats(
        products_needing_revision=[p for p, _ in stale],
        revision_percentage=round(up_to_date / len(products) * 100),
        average_days_since_revision=round(sum(d for _, d in aged) / len(products)),
        revision_age_groups=groups,
    )
