"""Catalog primitives: records, safe access, aggregation, shape classification."""

from metaspine.catalog.access import is_blank, iter_nested, matches_literal, read_field, read_nested
from metaspine.catalog.aggregate import AggregationSummary, aggregate_names, collect_names
from metaspine.catalog.categories import ALL_CATEGORIES, Category, Selection, parse_selection
from metaspine.catalog.record import CatalogRecord
from metaspine.catalog.shapes import classify, field_edt_or_enum, shape_of
from metaspine.catalog.tally import CategoryCount, CategoryTally

__all__ = [
    "is_blank",
    "iter_nested",
    "matches_literal",
    "read_field",
    "read_nested",
    "AggregationSummary",
    "aggregate_names",
    "collect_names",
    "ALL_CATEGORIES",
    "Category",
    "Selection",
    "parse_selection",
    "CatalogRecord",
    "classify",
    "field_edt_or_enum",
    "shape_of",
    "CategoryCount",
    "CategoryTally",
]
