"""
Type/Shape Classifier.

The platform models storage kinds as a deep hierarchy of concrete shapes:
``AxTableFieldString``, ``AxTableFieldEnum``, ``AxEdtUtcDateTime``,
``AxMapFieldInt64`` and so on. The report only needs a short label per
field. Each shape family has a fixed table of known shapes, and any shape
the table does not know (a newer platform release, a custom subtype) gets a
label derived from its own name with the family prefix stripped.

Architecture:
    ::

        classify(record, TABLE_FIELD)
              │
              ├── shape_of(record) = "AxTableFieldGuid"
              ├── known[shape]?        ──► "Guid"
              └── otherwise            ──► strip "AxTableField" ──► residual
                                           (never empty: raw shape or "Unknown")

Examples:
    >>> from metaspine.catalog.record import CatalogRecord
    >>> classify(CatalogRecord("AxTableFieldUtcDateTime"), TABLE_FIELD)
    'UtcDateTime'
    >>> classify(CatalogRecord("AxEdtEnum", {"EnumType": "NoYes"}), EDT)
    'Enum (NoYes)'
    >>> classify(CatalogRecord("AxTableFieldRecId"), TABLE_FIELD)
    'RecId'

Tags:
    classification, shapes, type-resolution, metaspine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from metaspine.catalog.access import is_blank, read_field
from metaspine.catalog.record import CatalogRecord

UNKNOWN_LABEL = "Unknown"

_BASE_LABELS = ["String", "Int", "Int64", "Real", "Date", "UtcDateTime", "Guid", "Container"]


@dataclass(frozen=True)
class ShapeFamily:
    """A family of related shapes sharing a name prefix."""

    name: str
    prefixes: tuple[str, ...]
    labels: Mapping[str, str] = field(default_factory=dict)

    def strip(self, shape: str) -> str:
        residual = shape
        for prefix in self.prefixes:
            residual = residual.replace(prefix, "")
        return residual


def _labels(prefix: str, extra: list[str]) -> dict[str, str]:
    return {f"{prefix}{label}": label for label in _BASE_LABELS + extra}


EDT = ShapeFamily("edt", ("AxEdt",), _labels("AxEdt", ["Enum"]))
TABLE_FIELD = ShapeFamily("table_field", ("AxTableField",), _labels("AxTableField", ["Enum", "Time"]))
MAP_FIELD = ShapeFamily("map_field", ("AxMapField",), _labels("AxMapField", ["Enum"]))
VIEW_FIELD = ShapeFamily("view_field", ("AxViewField",))
DATA_ENTITY_FIELD = ShapeFamily("data_entity_field", ("AxDataEntityViewField", "AxViewField"))


def shape_of(record: Any) -> str:
    """Name of the record's concrete shape.

    ``CatalogRecord.shape``, a mapping's ``"shape"`` key, or the Python type
    name for any other object.
    """
    try:
        if isinstance(record, CatalogRecord):
            return record.shape
        if isinstance(record, Mapping):
            return str(record.get("shape") or "")
        if record is None:
            return ""
        return type(record).__name__
    except Exception:
        return ""


def classify(record: Any, family: ShapeFamily) -> str:
    """Map a record's shape to its canonical label; never empty."""
    shape = shape_of(record)
    label = family.labels.get(shape)
    if label is None:
        label = family.strip(shape) or shape or UNKNOWN_LABEL

    if family is EDT and label == "Enum":
        # Enum EDTs name the enum they wrap
        return f"Enum ({read_field(record, 'EnumType')})"
    return label


def classify_edt(edt: Any) -> str:
    return classify(edt, EDT)


def classify_table_field(field: Any) -> str:
    return classify(field, TABLE_FIELD)


def classify_map_field(field: Any) -> str:
    return classify(field, MAP_FIELD)


def classify_view_field(field: Any) -> str:
    return classify(field, VIEW_FIELD)


def classify_data_entity_field(field: Any) -> str:
    return classify(field, DATA_ENTITY_FIELD)


def field_edt_or_enum(field: Any) -> str:
    """Extended data type of a table field, else the enum of an enum field."""
    edt = read_field(field, "ExtendedDataType")
    if not is_blank(edt):
        return edt
    if classify_table_field(field) == "Enum":
        enum_type = read_field(field, "EnumType")
        if not is_blank(enum_type):
            return enum_type
    return ""


__all__ = [
    "UNKNOWN_LABEL",
    "ShapeFamily",
    "EDT",
    "TABLE_FIELD",
    "MAP_FIELD",
    "VIEW_FIELD",
    "DATA_ENTITY_FIELD",
    "shape_of",
    "classify",
    "classify_edt",
    "classify_table_field",
    "classify_map_field",
    "classify_view_field",
    "classify_data_entity_field",
    "field_edt_or_enum",
]
