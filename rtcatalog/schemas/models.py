"""Pydantic models: single source of truth for ProductRecord, review and filter shapes."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CatalogModel(BaseModel):
    """Accepts the catalog's camelCase keys as well as snake_case names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class _OpenGroup(BaseModel):
    """Nested info group: known keys are typed, anything else is kept."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )


# ── Structure entries ────────────────────────────────────────────────────

class PlainLabel(BaseModel):
    """A structure given as a bare label, e.g. "Head & Neck: Brainstem"."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["label"] = "label"
    label: str


class NamedStructure(BaseModel):
    """A structure given as an object with a name (type, accuracy, ...)."""

    model_config = ConfigDict(frozen=True, extra="allow")

    kind: Literal["named"] = "named"
    name: str
    # passed through untouched
    type: Any = None


def to_structure_entry(raw: Any) -> PlainLabel | NamedStructure:
    """Turn a raw structure value from the catalog bundle into a tagged entry."""
    match raw:
        case PlainLabel() | NamedStructure():
            return raw
        case str():
            return PlainLabel(label=raw)
        case {"kind": "label", "label": str() as label}:
            return PlainLabel(label=label)
        case {"name": str() as name, **rest}:
            extra = {k: v for k, v in rest.items() if k != "kind"}
            return NamedStructure(name=name, **extra)
        case None:
            return PlainLabel(label="")
        case _:
            return PlainLabel(label=str(raw))


StructureEntry = Annotated[PlainLabel | NamedStructure, BeforeValidator(to_structure_entry)]


# ── Nested product groups ────────────────────────────────────────────────

class TechnicalSpecifications(_OpenGroup):
    population: str | None = None
    input: list[str] | str | None = None
    input_format: list[str] | str | None = None
    output: list[str] | str | None = None
    output_format: list[str] | str | None = None


class TechnologyInfo(_OpenGroup):
    integration: list[str] | str | None = None
    deployment: list[str] | str | None = None
    trigger_for_analysis: str | None = None
    processing_time: str | None = None


class CEMark(_OpenGroup):
    status: str | None = None
    ce_class: str | None = Field(default=None, alias="class")
    type: str | None = None


class RegulatoryInfo(_OpenGroup):
    ce: CEMark | None = None
    fda: str | None = None
    intended_use_statement: str | None = None


class MarketInfo(_OpenGroup):
    on_market_since: str | None = None
    distribution_channels: list[str] | str | None = None
    countries_present: int | str | None = None
    paying_customers: str | None = None
    research_users: str | None = None


class PricingInfo(_OpenGroup):
    model: list[str] | str | None = None
    based_on: list[str] | str | None = None


class EvidenceEntry(_OpenGroup):
    type: str | None = None
    description: str | None = None
    link: str | None = None


# ── Product record ───────────────────────────────────────────────────────

class ProductRecord(_CatalogModel):
    """One catalog entry describing an AI product in radiotherapy."""

    id: str
    name: str = ""
    company: str = ""
    category: str = ""
    secondary_categories: list[str] = []

    modality: str | list[str] | None = None
    anatomical_location: list[str] | str | None = None
    anatomy: list[str] | str | None = None
    certification: str | None = None
    regulatory: RegulatoryInfo | None = Field(
        default=None, validation_alias=AliasChoices("regulatory", "regulatoryInfo")
    )

    # ISO-8601 date strings, parsed on demand
    release_date: str | None = None
    last_updated: str | None = None
    last_revised: str | None = None
    last_verified: str | None = None

    description: str = ""
    features: list[str] = []
    key_features: list[str] | None = None
    limitations: list[str] = []
    evidence: list[EvidenceEntry | str] | str | None = None
    structures: list[StructureEntry] | None = None
    supported_structures: list[StructureEntry] | None = None

    company_url: str | None = None
    product_url: str | None = None
    url: str | None = None
    github_url: str | None = None
    contact_email: str | None = None
    support_email: str | None = None
    contact_phone: str | None = None

    technical_specifications: TechnicalSpecifications | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "technical_specifications", "technicalSpecifications", "technicalSpecs"
        ),
    )
    technology: TechnologyInfo | None = None
    market: MarketInfo | None = Field(
        default=None, validation_alias=AliasChoices("market", "marketInfo")
    )
    pricing: PricingInfo | None = Field(
        default=None, validation_alias=AliasChoices("pricing", "pricingInfo")
    )

    @property
    def modality_list(self) -> list[str]:
        if self.modality is None:
            return []
        if isinstance(self.modality, str):
            return [self.modality] if self.modality.strip() else []
        return list(self.modality)

    @property
    def anatomy_list(self) -> list[str]:
        """anatomicalLocation, falling back to the legacy anatomy field."""
        value = self.anatomical_location or self.anatomy
        if not value:
            return []
        if isinstance(value, str):
            value = [value]
        return [loc for loc in value if loc and loc.strip()]

    @property
    def display_features(self) -> list[str]:
        """keyFeatures take precedence over features when both are present."""
        return list(self.key_features) if self.key_features else list(self.features)

    @property
    def structure_entries(self) -> list[PlainLabel | NamedStructure]:
        if self.supported_structures is not None:
            return list(self.supported_structures)
        return list(self.structures or [])


# ── Validation / review ──────────────────────────────────────────────────

class ValidationIssue(BaseModel):
    """A known-field format problem; one issue per field, listing every offending value."""

    field: str
    message: str
    invalid_values: list[str] = []


class CheckStatus(str, Enum):
    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


class CheckSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ReviewCheck(BaseModel):
    """Outcome of one completeness / vocabulary rule for one product."""

    field: str
    status: CheckStatus
    severity: CheckSeverity
    message: str
    product_id: str | None = None
    product_name: str | None = None
    company: str | None = None
    category: str | None = None


class ReviewProgress(BaseModel):
    total_checks: int = 0
    completed_checks: int = 0
    passed_checks: int = 0
    warnings: int = 0
    failures: int = 0
    estimated_minutes_remaining: int = 0


class ReviewNotes(BaseModel):
    """Reviewer-facing digest of a product's checks."""

    progress: ReviewProgress = ReviewProgress()
    notes: list[str] = []


class ReviewStatus(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    OK = "ok"


class Urgency(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    RECENT = "recent"  # accepted by dashboards, never produced by the calculator


class RevisionLabel(str, Enum):
    RECENT = "recent"
    DUE_SOON = "due soon"
    OVERDUE = "overdue"
    CRITICAL = "critical"


class ReviewSummary(BaseModel):
    """Per-product review row; derived, never stored."""

    id: str
    name: str = ""
    company: str = ""
    category: str = ""
    status: ReviewStatus
    urgency: Urgency
    days_since_review: int
    issue_count: int


class ReviewDashboardStats(BaseModel):
    critical_count: int = 0
    warning_count: int = 0
    overdue_count: int = 0


class RevisionAgeGroups(BaseModel):
    short_term: int = 0   # 0-90 days
    medium_term: int = 0  # 91-180 days
    long_term: int = 0    # 181-365 days
    critical: int = 0     # >365 days


class RevisionStats(BaseModel):
    products_needing_revision: list[ProductRecord] = []
    revision_percentage: int = 0
    average_days_since_revision: int = 0
    revision_age_groups: RevisionAgeGroups = RevisionAgeGroups()


# ── Filtering / display ──────────────────────────────────────────────────

class FilterState(BaseModel):
    """Selected values per facet; an empty list leaves that facet inactive."""

    tasks: list[str] = []
    locations: list[str] = []
    companies: list[str] = []
    certifications: list[str] = []
    modalities: list[str] = []


class StructureGroup(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_name: str
    structures: list[str] = []


class ParsedStructures(BaseModel):
    groups: list[StructureGroup] = []
    ungrouped: list[str] = []


class StructureTypeCounts(BaseModel):
    oars: int = 0
    gtv: int = 0
    elective: int = 0
    total: int = 0
