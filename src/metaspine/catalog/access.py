"""
Safe Field Reader: total, default-on-absence attribute access.

Catalog records come from a provider whose exact shape is a versioned,
external contract. A property that exists in one platform release may be
missing in the next, may hold ``None``, or may raise when computed. Every
attribute read in the extractors goes through this module, and every fault
degrades to "no data" instead of aborting the run.

Manifesto:
    A missing attribute is a normal condition, not an error. The reader
    never raises; callers decide what an empty string means for their
    output.

Architecture:
    ::

        read_field(record, "Label")          read_nested(record, "Fields")
              │                                     │
              ▼                                     ▼
        _lookup(record, name) ──► Mapping.get / getattr, any fault = MISSING
              │                                     │
              ▼                                     ▼
        _to_text(value)                       raw value or None
        (Enum -> member name, None -> default)

        iter_nested(record, "Fields") ──► list(...) or None

Features:
    - Works on mappings, ``CatalogRecord`` trees, and arbitrary objects
    - ``None`` records and empty records read as absent
    - Enum members render as their symbolic name (``Yes``, not ``NoYes.Yes``)
    - ``matches_literal()`` for provider-version-dependent literal sets

Examples:
    >>> read_field({"Label": "Customers"}, "Label")
    'Customers'
    >>> read_field(None, "Label", default="-")
    '-'
    >>> read_field(object(), "Label")
    ''
    >>> matches_literal("yes", ["Yes", "1"])
    True

Guardrails:
    ❌ DON'T: ``record.Label`` directly in extractors
    ✅ DO: ``read_field(record, "Label")``

Tags:
    safe-access, duck-typing, schema-tolerance, metaspine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

_MISSING = object()


def _lookup(record: Any, name: str) -> Any:
    if record is None:
        return _MISSING
    try:
        if isinstance(record, Mapping):
            return record.get(name, _MISSING)
        return getattr(record, name, _MISSING)
    except Exception:
        return _MISSING


def _to_text(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.name)
    return str(value)


def read_field(record: Any, name: str, default: str = "") -> str:
    """Read an attribute as text, or return ``default``.

    Args:
        record: Any record (mapping, CatalogRecord, object) or None
        name: Attribute name, e.g. ``"Label"``
        default: Returned when the attribute is absent, None, or unreadable

    Returns:
        The attribute's text value, or ``default``
    """
    value = _lookup(record, name)
    if value is _MISSING or value is None:
        return default
    try:
        return _to_text(value)
    except Exception:
        return default


def read_nested(record: Any, name: str) -> Any | None:
    """Read an attribute's raw value (sub-record or collection), or None."""
    value = _lookup(record, name)
    if value is _MISSING:
        return None
    return value


def iter_nested(record: Any, name: str) -> list[Any] | None:
    """Materialize a nested collection.

    Returns None when the attribute is absent, is not a collection (text,
    mappings and records do not count), or iterating it faults. An existing
    but empty collection returns ``[]``.
    """
    value = read_nested(record, name)
    if value is None or isinstance(value, (str, bytes, Mapping)):
        return None
    if not isinstance(value, Iterable):
        return None
    try:
        return list(value)
    except Exception:
        return None


def is_blank(text: str | None) -> bool:
    return not text or not text.strip()


def matches_literal(value: str, literals: Iterable[str]) -> bool:
    """Case-insensitive membership test against a configurable literal set."""
    if is_blank(value):
        return False
    needle = value.strip().lower()
    return any(needle == literal.strip().lower() for literal in literals)


__all__ = [
    "read_field",
    "read_nested",
    "iter_nested",
    "is_blank",
    "matches_literal",
]
