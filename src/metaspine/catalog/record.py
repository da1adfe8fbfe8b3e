"""
CatalogRecord: an attribute-sparse catalog object.

Providers that parse metadata themselves (XML packages, YAML snapshots) hand
records to the extractors as ``CatalogRecord`` trees. Attribute access mirrors
the platform object model (``record.Name``, ``record.Fields``), and the
``shape`` names the concrete kind (``AxTableFieldString``) for the
classifier.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class CatalogRecord:
    """One catalog object or sub-object.

    Attributes:
        shape: Concrete kind of the record (``AxTable``, ``AxEdtString``, ...)
        attributes: Attribute name -> text, nested ``CatalogRecord``, or list
    """

    shape: str
    attributes: dict[str, Any] = field(default_factory=dict)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails; attributes may not exist yet
        # during unpickling or copying.
        try:
            return self.__dict__["attributes"][name]
        except KeyError:
            raise AttributeError(name) from None

    @classmethod
    def from_mapping(cls, data: dict[str, Any], shape: str = "") -> CatalogRecord:
        """Build a record tree from plain data.

        The ``shape`` key, when present, names the record's kind; nested
        mappings become records and lists are converted element by element.
        Booleans become the platform's ``"Yes"``/``"No"`` literals.
        """
        attributes = {
            key: _convert(value) for key, value in data.items() if key != "shape"
        }
        return cls(shape=str(data.get("shape") or shape), attributes=attributes)


def _convert(value: Any) -> Any:
    # YAML 1.1 loads unquoted Yes/No as booleans; metadata spells them out
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, dict):
        return CatalogRecord.from_mapping(value)
    if isinstance(value, list):
        return [_convert(item) for item in value]
    return value


__all__ = ["CatalogRecord"]
