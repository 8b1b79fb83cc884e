"""Known-field format validation of product records against the vocabulary registry."""

from __future__ import annotations

from dataclasses import dataclass, field

from rtcatalog.schemas.models import ProductRecord, ValidationIssue
from rtcatalog.vocabulary import DEFAULT_VOCABULARY, Vocabulary


@dataclass
class ValidationResult:
    """Validation outcome with the boolean shape older callers expect."""

    product_id: str
    errors: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_product(
    product: ProductRecord,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> list[ValidationIssue]:
    """
    Check modality, anatomical location and certification values.

    Each field yields at most one issue listing every offending value.
    Issues come back in field order: modality, anatomicalLocation, certification.
    An empty list only means the known fields are well-formed.
    """
    issues: list[ValidationIssue] = []

    invalid_modalities = [m for m in product.modality_list if not vocabulary.is_valid_modality(m)]
    if invalid_modalities:
        issues.append(
            ValidationIssue(
                field="modality",
                message="Contains invalid modality values",
                invalid_values=invalid_modalities,
            )
        )

    # Only the list form of anatomicalLocation is checked; the legacy anatomy alias is not
    if isinstance(product.anatomical_location, list):
        invalid_locations = [
            loc for loc in product.anatomical_location if not vocabulary.is_valid_anatomy(loc)
        ]
        if invalid_locations:
            issues.append(
                ValidationIssue(
                    field="anatomicalLocation",
                    message="Contains invalid anatomical location values",
                    invalid_values=invalid_locations,
                )
            )

    if product.certification and not vocabulary.is_valid_certification(product.certification):
        issues.append(
            ValidationIssue(
                field="certification",
                message="Contains invalid certification value",
                invalid_values=[product.certification],
            )
        )

    return issues


def validate_product_result(
    product: ProductRecord,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> ValidationResult:
    return ValidationResult(product_id=product.id, errors=validate_product(product, vocabulary))


def validate_products(
    products: list[ProductRecord],
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> dict[str, list[ValidationIssue]]:
    """Validate a whole collection; keyed by product id, products with no issues included."""
    return {p.id: validate_product(p, vocabulary) for p in products}
