"""Pydantic models: single source of truth for all data shapes."""

from rtcatalog.schemas.models import (
    CheckSeverity,
    CheckStatus,
    FilterState,
    NamedStructure,
    ParsedStructures,
    PlainLabel,
    ProductRecord,
    ReviewCheck,
    ReviewStatus,
    ReviewSummary,
    RevisionLabel,
    RevisionStats,
    StructureGroup,
    Urgency,
    ValidationIssue,
)

__all__ = [
    "CheckSeverity",
    "CheckStatus",
    "FilterState",
    "NamedStructure",
    "ParsedStructures",
    "PlainLabel",
    "ProductRecord",
    "ReviewCheck",
    "ReviewStatus",
    "ReviewSummary",
    "RevisionLabel",
    "RevisionStats",
    "StructureGroup",
    "Urgency",
    "ValidationIssue",
]
