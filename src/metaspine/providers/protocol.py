"""
Metadata provider protocol.

The extraction core talks to the catalog through two operations per object
kind and nothing else:

    list_objects(partition) -> identifiers      (may raise)
    read(name)              -> record or None   (may raise)

plus partition discovery. Any binding that keeps these fault/absent semantics
works: a parsed packages directory, a YAML snapshot, an RPC client.

Architecture:
    ::

        MetadataProvider
        ├── discover_partitions() -> ["ApplicationFoundation", ...]
        └── objects(ObjectKind.TABLES) -> ObjectStore
                                          ├── list_objects(partition)
                                          └── read(name)

        Implementations:
        ├── PackagesDirectoryProvider  (AOT XML files on disk)
        └── InMemoryProvider           (YAML/JSON snapshot, tests)

Tags:
    protocol, provider, metadata, metaspine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class ObjectKind(str, Enum):
    """Provider object stores, one per AOT node type."""

    ENUMS = "enums"
    EDTS = "edts"
    TABLES = "tables"
    VIEWS = "views"
    DATA_ENTITY_VIEWS = "data-entity-views"
    CLASSES = "classes"
    FORMS = "forms"
    MENU_ITEM_DISPLAYS = "menu-item-displays"
    MENU_ITEM_ACTIONS = "menu-item-actions"
    MENU_ITEM_OUTPUTS = "menu-item-outputs"
    QUERIES = "queries"
    SERVICES = "services"
    MAPS = "maps"
    SECURITY_ROLES = "security-roles"
    SECURITY_DUTIES = "security-duties"
    SECURITY_PRIVILEGES = "security-privileges"
    COMPOSITE_DATA_ENTITY_VIEWS = "composite-data-entity-views"
    AGGREGATE_DATA_ENTITIES = "aggregate-data-entities"

    @property
    def folder(self) -> str:
        """AOT folder holding this kind's XML files inside a model."""
        return _FOLDERS[self]


_FOLDERS = {
    ObjectKind.ENUMS: "AxEnum",
    ObjectKind.EDTS: "AxEdt",
    ObjectKind.TABLES: "AxTable",
    ObjectKind.VIEWS: "AxView",
    ObjectKind.DATA_ENTITY_VIEWS: "AxDataEntityView",
    ObjectKind.CLASSES: "AxClass",
    ObjectKind.FORMS: "AxForm",
    ObjectKind.MENU_ITEM_DISPLAYS: "AxMenuItemDisplay",
    ObjectKind.MENU_ITEM_ACTIONS: "AxMenuItemAction",
    ObjectKind.MENU_ITEM_OUTPUTS: "AxMenuItemOutput",
    ObjectKind.QUERIES: "AxQuery",
    ObjectKind.SERVICES: "AxService",
    ObjectKind.MAPS: "AxMap",
    ObjectKind.SECURITY_ROLES: "AxSecurityRole",
    ObjectKind.SECURITY_DUTIES: "AxSecurityDuty",
    ObjectKind.SECURITY_PRIVILEGES: "AxSecurityPrivilege",
    ObjectKind.COMPOSITE_DATA_ENTITY_VIEWS: "AxCompositeDataEntityView",
    ObjectKind.AGGREGATE_DATA_ENTITIES: "AxAggregateDataEntity",
}


@runtime_checkable
class ObjectStore(Protocol):
    """Listing and reading for one object kind."""

    def list_objects(self, partition: str) -> Iterable[str]:
        """Identifiers defined in ``partition``. May raise."""
        ...

    def read(self, name: str) -> Any | None:
        """The record named ``name``, or None. May raise."""
        ...


@runtime_checkable
class MetadataProvider(Protocol):
    """A metadata catalog split into partitions."""

    def discover_partitions(self) -> list[str]:
        """Partition names, distinct and sorted. Raises DiscoveryError."""
        ...

    def objects(self, kind: ObjectKind) -> ObjectStore:
        """The object store for ``kind``."""
        ...


__all__ = ["ObjectKind", "ObjectStore", "MetadataProvider"]
