"""Completeness review checks: required business fields plus vocabulary failures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from rtcatalog.review.validator import validate_product
from rtcatalog.schemas.models import (
    CheckSeverity,
    CheckStatus,
    ProductRecord,
    ReviewCheck,
    ReviewNotes,
    ReviewProgress,
)
from rtcatalog.vocabulary import DEFAULT_VOCABULARY, Vocabulary

MINUTES_PER_FAILURE = 5


@dataclass(frozen=True)
class FieldRule:
    """One completeness rule; a failed high-severity rule is a fail, anything else a warning."""

    field_name: str
    check: Callable[[ProductRecord], bool]
    severity: CheckSeverity
    success_message: str
    failure_message: str


def _filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (list, tuple, set, dict, str)):
        return len(value) > 0
    return True


def _any_filled(product: ProductRecord, *fields: str) -> bool:
    return any(_filled(getattr(product, f, None)) for f in fields)


def _rule(
    field_name: str,
    check: Callable[[ProductRecord], bool],
    severity: CheckSeverity,
    plural: bool = False,
    failure_message: str | None = None,
) -> FieldRule:
    verb = "are" if plural else "is"
    return FieldRule(
        field_name=field_name,
        check=check,
        severity=severity,
        success_message=f"{field_name} {verb} valid",
        failure_message=failure_message or f"{field_name} {verb} missing",
    )


HIGH, MEDIUM, LOW = CheckSeverity.HIGH, CheckSeverity.MEDIUM, CheckSeverity.LOW

REVIEW_RULES: tuple[FieldRule, ...] = (
    _rule("Name", lambda p: _filled(p.name), HIGH),
    _rule("Company", lambda p: _filled(p.company), HIGH),
    _rule("Category", lambda p: _filled(p.category), HIGH),
    _rule("Description", lambda p: _filled(p.description), MEDIUM),
    _rule("URL", lambda p: _any_filled(p, "product_url", "url"), LOW),
    FieldRule(
        field_name="GitHub URL",
        check=lambda p: _filled(p.github_url),
        severity=LOW,
        success_message="GitHub URL is specified",
        failure_message="GitHub URL is missing - consider adding for easier code access",
    ),
    _rule("Contact Email", lambda p: _any_filled(p, "support_email", "contact_email"), MEDIUM),
    _rule("Contact Phone", lambda p: _filled(p.contact_phone), LOW),
    _rule("Modality", lambda p: _filled(p.modality_list), HIGH),
    _rule("Anatomy", lambda p: _any_filled(p, "anatomical_location", "anatomy"), MEDIUM),
    _rule("Features", lambda p: _filled(p.features), LOW, plural=True),
    _rule("Technical Specifications", lambda p: _filled(p.technical_specifications), LOW, plural=True),
    _rule("Regulatory Information", lambda p: _filled(p.regulatory), LOW),
    _rule("Market Information", lambda p: _filled(p.market), LOW),
    _rule("Pricing Information", lambda p: _filled(p.pricing), LOW),
    _rule("Evidence", lambda p: _filled(p.evidence), LOW),
    _rule("Limitations", lambda p: _filled(p.limitations), LOW, plural=True),
    _rule("Last Updated", lambda p: _filled(p.last_updated), MEDIUM),
    _rule("Last Revised", lambda p: _filled(p.last_revised), MEDIUM),
    _rule("Company URL", lambda p: _filled(p.company_url), LOW),
)


def _make_check(
    product: ProductRecord,
    field_name: str,
    status: CheckStatus,
    severity: CheckSeverity,
    message: str,
) -> ReviewCheck:
    return ReviewCheck(
        field=field_name,
        status=status,
        severity=severity,
        message=message,
        product_id=product.id,
        product_name=product.name,
        company=product.company,
        category=product.category,
    )


def run_review_checks(
    product: ProductRecord,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    rules: tuple[FieldRule, ...] = REVIEW_RULES,
) -> list[ReviewCheck]:
    """Run every completeness rule, then add one fail per vocabulary issue."""
    checks: list[ReviewCheck] = []
    for rule in rules:
        if rule.check(product):
            checks.append(
                _make_check(product, rule.field_name, CheckStatus.PASS, rule.severity, rule.success_message)
            )
        else:
            status = CheckStatus.FAIL if rule.severity == CheckSeverity.HIGH else CheckStatus.WARNING
            checks.append(
                _make_check(product, rule.field_name, status, rule.severity, rule.failure_message)
            )

    for issue in validate_product(product, vocabulary):
        checks.append(
            _make_check(
                product,
                issue.field,
                CheckStatus.FAIL,
                CheckSeverity.HIGH,
                f"{issue.message}: {', '.join(issue.invalid_values)}",
            )
        )
    return checks


def count_by_status(checks: list[ReviewCheck]) -> tuple[int, int]:
    """Return (failures, warnings)."""
    failures = sum(1 for c in checks if c.status == CheckStatus.FAIL)
    warnings = sum(1 for c in checks if c.status == CheckStatus.WARNING)
    return failures, warnings


def summarize_checks(product: ProductRecord, checks: list[ReviewCheck]) -> ReviewNotes:
    """Progress counters and reviewer notes (critical issues, warnings, next steps)."""
    failures, warnings = count_by_status(checks)
    progress = ReviewProgress(
        total_checks=len(checks),
        completed_checks=sum(1 for c in checks if c.status != CheckStatus.WARNING),
        passed_checks=sum(1 for c in checks if c.status == CheckStatus.PASS),
        warnings=warnings,
        failures=failures,
        estimated_minutes_remaining=failures * MINUTES_PER_FAILURE,
    )

    notes: list[str] = []
    critical = [
        c for c in checks if c.status == CheckStatus.FAIL and c.severity == CheckSeverity.HIGH
    ]
    if critical:
        notes.append("Critical Issues:")
        notes.extend(f"- {c.field}: {c.message}" for c in critical)

    minor = [
        c
        for c in checks
        if c.status == CheckStatus.WARNING
        or (c.status == CheckStatus.FAIL and c.severity != CheckSeverity.HIGH)
    ]
    if minor:
        notes.append("Warnings:")
        notes.extend(f"- {c.field}: {c.message}" for c in minor)

    actions: list[str] = []
    if critical:
        actions.append("Address critical issues first to ensure data quality")
    if minor:
        actions.append("Review and update missing information where possible")
    if not product.last_verified:
        actions.append("Verify product information with official sources")
    if actions:
        notes.append("Next Steps:")
        notes.extend(f"- {a}" for a in actions)

    return ReviewNotes(progress=progress, notes=notes)
