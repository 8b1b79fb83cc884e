"""Tests for completeness review checks and reviewer notes."""

from rtcatalog.review.checks import (
    MINUTES_PER_FAILURE,
    REVIEW_RULES,
    count_by_status,
    run_review_checks,
    summarize_checks,
)
from rtcatalog.schemas.models import CheckSeverity, CheckStatus, ProductRecord


def _by_field(checks):
    return {c.field: c for c in checks}


class TestRunReviewChecks:

    def test_complete_product_passes_everything(self, make_product):
        checks = run_review_checks(make_product())
        assert len(checks) == len(REVIEW_RULES)
        assert all(c.status == CheckStatus.PASS for c in checks)
        assert count_by_status(checks) == (0, 0)

    def test_missing_description_is_a_warning(self, make_product):
        check = _by_field(run_review_checks(make_product(description="")))["Description"]
        assert check.status == CheckStatus.WARNING
        assert check.severity == CheckSeverity.MEDIUM
        assert check.message == "Description is missing"

    def test_missing_technical_specifications_is_a_warning(self, make_product):
        check = _by_field(run_review_checks(make_product(technicalSpecifications=None)))[
            "Technical Specifications"
        ]
        assert check.status == CheckStatus.WARNING
        assert check.message == "Technical Specifications are missing"

    def test_missing_high_severity_field_fails(self, make_product):
        check = _by_field(run_review_checks(make_product(company="")))["Company"]
        assert check.status == CheckStatus.FAIL
        assert check.severity == CheckSeverity.HIGH

    def test_url_alternatives(self, make_product):
        checks = _by_field(run_review_checks(make_product(productUrl=None, url="https://x.example")))
        assert checks["URL"].status == CheckStatus.PASS
        checks = _by_field(run_review_checks(make_product(productUrl=None)))
        assert checks["URL"].status == CheckStatus.WARNING

    def test_blank_modality_fails_modality_rule(self, make_product):
        check = _by_field(run_review_checks(make_product(modality="")))["Modality"]
        assert check.status == CheckStatus.FAIL

    def test_legacy_anatomy_satisfies_anatomy_rule(self, make_product):
        product = make_product(anatomicalLocation=None, anatomy=["Brain"])
        assert _by_field(run_review_checks(product))["Anatomy"].status == CheckStatus.PASS

    def test_vocabulary_issue_becomes_fail(self, make_product):
        checks = run_review_checks(make_product(modality=["CT", "XYZ"]))
        fails = [c for c in checks if c.status == CheckStatus.FAIL]
        assert len(fails) == 1
        assert fails[0].field == "modality"
        assert fails[0].message == "Contains invalid modality values: XYZ"

    def test_same_missing_field_same_severity(self, make_product):
        first = _by_field(run_review_checks(make_product(pricing=None)))["Pricing Information"]
        second = _by_field(run_review_checks(make_product(pricing=None, name="Other")))[
            "Pricing Information"
        ]
        assert (first.status, first.severity) == (second.status, second.severity)

    def test_checks_carry_product_context(self, make_product):
        check = run_review_checks(make_product())[0]
        assert check.product_id == "contour-ai-pro"
        assert check.company == "Acme Oncology"


class TestSummarizeChecks:

    def test_progress_counters(self):
        product = ProductRecord(id="bare", name="Bare")
        checks = run_review_checks(product)
        failures, warnings = count_by_status(checks)
        notes = summarize_checks(product, checks)
        assert notes.progress.total_checks == len(checks)
        assert notes.progress.failures == failures
        assert notes.progress.warnings == warnings
        assert notes.progress.estimated_minutes_remaining == failures * MINUTES_PER_FAILURE
        assert notes.progress.passed_checks + failures + warnings == len(checks)

    def test_note_sections(self):
        product = ProductRecord(id="bare", name="Bare")
        notes = summarize_checks(product, run_review_checks(product)).notes
        assert "Critical Issues:" in notes
        assert "Warnings:" in notes
        assert "Next Steps:" in notes
        assert "- Verify product information with official sources" in notes
        assert notes.index("Critical Issues:") < notes.index("Warnings:") < notes.index("Next Steps:")

    def test_clean_product_has_no_notes(self, make_product):
        product = make_product()
        assert summarize_checks(product, run_review_checks(product)).notes == []
