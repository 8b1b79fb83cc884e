"""Multi-facet product filtering: AND across facets, OR within a facet."""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

from rtcatalog.schemas.models import FilterState, ProductRecord

T = TypeVar("T")
Predicate = Callable[[T], bool]

ALL = "all"


def apply_filters(items: Iterable[T], predicates: list[Predicate]) -> list[T]:
    """Keep items passing every predicate, preserving input order."""
    return [item for item in items if all(pred(item) for pred in predicates)]


# ── Single-value predicates ──────────────────────────────────────────────

def matches_search(product: ProductRecord, query: str) -> bool:
    """Case-insensitive substring match over name, company, description, category and features."""
    needle = (query or "").strip().lower()
    if not needle:
        return True
    fields = [
        product.name,
        product.company,
        product.description,
        product.category,
        *product.features,
        *(product.key_features or []),
    ]
    return any(f and needle in f.lower() for f in fields)


def matches_task(product: ProductRecord, task: str) -> bool:
    if task == ALL:
        return True
    return product.category == task or task in product.secondary_categories


def matches_location(product: ProductRecord, location: str) -> bool:
    """Either string containing the other counts ("Head & Neck" vs "Neck")."""
    if location == ALL:
        return True
    wanted = location.lower()
    return any(
        wanted in str(loc).lower() or str(loc).lower() in wanted
        for loc in product.anatomy_list
    )


def matches_modality(product: ProductRecord, modality: str) -> bool:
    if modality == ALL:
        return True
    return modality in product.modality_list


def matches_certification(product: ProductRecord, certification: str) -> bool:
    if not product.certification:
        return False
    return certification.lower() in product.certification.lower()


def matches_company(product: ProductRecord, company: str) -> bool:
    return product.company == company


# ── Facet composition ────────────────────────────────────────────────────

def _any_of(values: list[str], match: Callable[[ProductRecord, str], bool]) -> Predicate:
    def predicate(product: ProductRecord) -> bool:
        if not values:
            return True
        return any(match(product, v) for v in values)

    return predicate


def build_predicates(
    filters: FilterState,
    search: str = "",
    first_value_only: bool = False,
) -> list[Predicate]:
    """
    One predicate per facet.

    first_value_only keeps the legacy catalog behaviour where the
    location and modality facets only honour the first selected value.
    """
    locations = filters.locations[:1] if first_value_only else filters.locations
    modalities = filters.modalities[:1] if first_value_only else filters.modalities
    return [
        lambda p: matches_search(p, search),
        _any_of(filters.tasks, matches_task),
        _any_of(filters.companies, matches_company),
        _any_of(locations, matches_location),
        _any_of(modalities, matches_modality),
        _any_of(filters.certifications, matches_certification),
    ]


def filter_products(
    products: list[ProductRecord],
    filters: FilterState | None = None,
    search: str = "",
    first_value_only: bool = False,
) -> list[ProductRecord]:
    filters = filters or FilterState()
    return apply_filters(products, build_predicates(filters, search, first_value_only))


def filter_products_by_facets(
    products: list[ProductRecord],
    task: str = ALL,
    location: str = ALL,
    modality: str = ALL,
) -> list[ProductRecord]:
    """Single-select filtering used by the task taxonomy pages; "all" disables a facet.

    Location here is exact list membership, unlike the fuzzy match in filter_products.
    """

    def keep(p: ProductRecord) -> bool:
        if task != ALL and not matches_task(p, task):
            return False
        if location != ALL and location not in p.anatomy_list:
            return False
        if modality != ALL and not matches_modality(p, modality):
            return False
        return True

    return [p for p in products if keep(p)]
