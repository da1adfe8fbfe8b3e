"""Category extractors, in report order."""

from metaspine.extraction.extractors.code import ClassExtractor, QueryExtractor, ServiceExtractor
from metaspine.extraction.extractors.listing import (
    CompositeAggregateExtractor,
    NameOnlyExtractor,
    NameOnlyGroup,
    SecurityObjectsExtractor,
)
from metaspine.extraction.extractors.navigation import FormExtractor, MenuItemExtractor
from metaspine.extraction.extractors.tables import DataEntityExtractor, MapExtractor, TableExtractor, ViewExtractor
from metaspine.extraction.extractors.types import EdtExtractor, EnumExtractor

# Report order. Each entry runs when any of its categories is enabled.
EXTRACTION_PLAN = (
    EnumExtractor,
    EdtExtractor,
    TableExtractor,
    ViewExtractor,
    DataEntityExtractor,
    ClassExtractor,
    FormExtractor,
    MenuItemExtractor,
    QueryExtractor,
    ServiceExtractor,
    MapExtractor,
    SecurityObjectsExtractor,
    CompositeAggregateExtractor,
)

__all__ = [
    "EXTRACTION_PLAN",
    "ClassExtractor",
    "CompositeAggregateExtractor",
    "DataEntityExtractor",
    "EdtExtractor",
    "EnumExtractor",
    "FormExtractor",
    "MapExtractor",
    "MenuItemExtractor",
    "NameOnlyExtractor",
    "NameOnlyGroup",
    "QueryExtractor",
    "SecurityObjectsExtractor",
    "ServiceExtractor",
    "TableExtractor",
    "ViewExtractor",
]
