"""Tests for review aggregation and the review dashboard."""

import pytest

from rtcatalog.review.summary import (
    build_review_summary,
    filter_review_summaries,
    review_dashboard,
    review_products,
    status_for_counts,
)
from rtcatalog.schemas.models import ReviewStatus, Urgency


class TestStatus:

    def test_fail_takes_precedence(self):
        assert status_for_counts(1, 5) == ReviewStatus.CRITICAL

    def test_warning_only(self):
        assert status_for_counts(0, 2) == ReviewStatus.WARNING

    def test_ok(self):
        assert status_for_counts(0, 0) == ReviewStatus.OK


class TestBuildReviewSummary:

    def test_complete_recent_product(self, make_product, clock):
        summary = build_review_summary(make_product(), clock)
        assert summary.status == ReviewStatus.OK
        assert summary.issue_count == 0
        assert summary.urgency == Urgency.LOW
        assert summary.days_since_review == 60

    def test_one_fail_five_warnings(self, make_product, clock):
        product = make_product(
            modality=["CT", "XYZ"],
            description="",
            contactPhone=None,
            pricing=None,
            market=None,
            limitations=[],
        )
        summary = build_review_summary(product, clock)
        assert summary.status == ReviewStatus.CRITICAL
        assert summary.issue_count == 6

    def test_warnings_only(self, make_product, clock):
        summary = build_review_summary(make_product(description="", evidence=None), clock)
        assert summary.status == ReviewStatus.WARNING
        assert summary.issue_count == 2

    def test_never_revised_is_high_urgency(self, make_product, clock):
        summary = build_review_summary(make_product(lastRevised=None), clock)
        assert summary.urgency == Urgency.HIGH

    def test_deterministic_for_fixed_clock(self, make_product, clock):
        product = make_product(description="")
        assert build_review_summary(product, clock) == build_review_summary(product, clock)


class TestCollections:

    def test_review_products_keeps_order(self, sample_products, clock):
        summaries = review_products(sample_products, clock)
        assert [s.id for s in summaries] == [p.id for p in sample_products]

    def test_filter_by_status_and_urgency(self, sample_products, clock):
        summaries = review_products(sample_products, clock)
        critical = filter_review_summaries(summaries, status="critical")
        assert [s.id for s in critical] == ["bare"]
        stale = filter_review_summaries(summaries, urgency=Urgency.HIGH)
        assert {s.id for s in stale} == {"plan-optimizer", "bare"}

    def test_filter_by_company_and_category(self, sample_products, clock):
        summaries = review_products(sample_products, clock)
        rows = filter_review_summaries(summaries, category="Auto-Contouring", company="Acme Oncology")
        assert [s.id for s in rows] == ["contour-ai-pro"]

    def test_invalid_status_raises(self, sample_products, clock):
        with pytest.raises(ValueError):
            filter_review_summaries(review_products(sample_products, clock), status="broken")

    def test_dashboard_counts(self, sample_products, clock):
        stats = review_dashboard(review_products(sample_products, clock))
        assert stats.critical_count == 1
        assert stats.warning_count == 0
        assert stats.overdue_count == 2
