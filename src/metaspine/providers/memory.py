"""
In-memory metadata provider built from a catalog snapshot.

A snapshot is a YAML (or JSON) document::

    partitions: [ApplicationSuite, Foundation]
    objects:
      enums:
        ApplicationSuite:
          - shape: AxEnum
            Name: NoYes
            EnumValues:
              - {shape: AxEnumValue, Name: "No", Value: 0}
              - {shape: AxEnumValue, Name: "Yes", Value: 1}
      tables:
        Foundation:
          - shape: AxTable
            Name: CustTable
            Fields:
              - {shape: AxTableFieldString, Name: AccountNum, ExtendedDataType: CustAccount}

Keys under ``objects`` are :class:`ObjectKind` values. ``partitions`` is
optional; it defaults to every partition mentioned under ``objects``.
Unquoted ``Yes``/``No`` values, which YAML loads as booleans, read back as
the ``"Yes"``/``"No"`` literals.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

from metaspine.catalog.access import read_field
from metaspine.catalog.record import CatalogRecord
from metaspine.core.errors import ConfigError, PartitionNotFoundError
from metaspine.providers.protocol import ObjectKind


class InMemoryStore:
    """Object store over ``{partition: [record, ...]}``."""

    def __init__(
        self,
        kind: ObjectKind,
        partitions: Iterable[str],
        records: Mapping[str, list[Any]] | None = None,
    ):
        self.kind = kind
        self._partitions = list(partitions)
        self._records: dict[str, list[Any]] = {p: list(r) for p, r in (records or {}).items()}

    def list_objects(self, partition: str) -> list[str]:
        if partition not in self._partitions:
            raise PartitionNotFoundError(f"Unknown partition: {partition}").with_context(
                partition=partition, object_kind=self.kind.value
            )
        return [read_field(record, "Name") for record in self._records.get(partition, [])]

    def read(self, name: str) -> Any | None:
        for partition in self._partitions:
            for record in self._records.get(partition, []):
                if read_field(record, "Name") == name:
                    return record
        return None


class InMemoryProvider:
    """Metadata provider over plain data."""

    def __init__(
        self,
        partitions: Iterable[str],
        objects: Mapping[ObjectKind, Mapping[str, list[Any]]] | None = None,
    ):
        self._partitions = list(partitions)
        self._stores = {
            kind: InMemoryStore(kind, self._partitions, (objects or {}).get(kind))
            for kind in ObjectKind
        }

    def discover_partitions(self) -> list[str]:
        return sorted(set(self._partitions))

    def objects(self, kind: ObjectKind) -> InMemoryStore:
        return self._stores[kind]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> InMemoryProvider:
        """Build a provider from a parsed snapshot document.

        Raises:
            ConfigError: Unknown object kind or malformed sections.
        """
        raw_objects = data.get("objects") or {}
        if not isinstance(raw_objects, Mapping):
            raise ConfigError("Catalog 'objects' must be a mapping of kind -> partitions")

        objects: dict[ObjectKind, dict[str, list[Any]]] = {}
        mentioned: list[str] = []
        for kind_name, by_partition in raw_objects.items():
            try:
                kind = ObjectKind(kind_name)
            except ValueError as e:
                raise ConfigError(f"Unknown object kind in catalog: {kind_name}", cause=e) from e
            if not isinstance(by_partition, Mapping):
                raise ConfigError(f"Catalog section '{kind_name}' must map partition -> records")

            objects[kind] = {}
            for partition, records in by_partition.items():
                objects[kind][partition] = [
                    CatalogRecord.from_mapping(r) if isinstance(r, Mapping) else r
                    for r in (records or [])
                ]
                if partition not in mentioned:
                    mentioned.append(partition)

        partitions = data.get("partitions") or mentioned
        return cls(partitions=[str(p) for p in partitions], objects=objects)

    @classmethod
    def from_file(cls, path: Path) -> InMemoryProvider:
        """Load a YAML or JSON snapshot file."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigError(f"Cannot read catalog file: {path}", cause=e).with_context(path=str(path)) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid catalog file: {path}", cause=e).with_context(path=str(path)) from e
        if not isinstance(data, Mapping):
            raise ConfigError(f"Catalog file must contain a mapping: {path}").with_context(path=str(path))
        return cls.from_mapping(data)


__all__ = ["InMemoryStore", "InMemoryProvider"]
