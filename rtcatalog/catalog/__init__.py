"""Catalog browsing: facet filtering, structure grouping and statistics."""

from rtcatalog.catalog.filters import filter_products, filter_products_by_facets
from rtcatalog.catalog.stats import facet_options, product_stats
from rtcatalog.catalog.structures import (
    count_structure_types,
    format_grouped_structures,
    parse_and_group_structures,
)

__all__ = [
    "count_structure_types",
    "facet_options",
    "filter_products",
    "filter_products_by_facets",
    "format_grouped_structures",
    "parse_and_group_structures",
    "product_stats",
]
