"""
Packages-directory provider: reads AOT metadata XML straight from disk.

A PackagesLocalDirectory looks like::

    PackagesLocalDirectory/
    ├── ApplicationSuite/              <- partition (has a Descriptor folder)
    │   ├── Descriptor/
    │   └── Foundation/                <- model
    │       ├── AxTable/CustTable.xml
    │       ├── AxEnum/NoYes.xml
    │       └── ...
    └── ApplicationFoundation/
        └── ...

Each XML file holds one object. Elements become ``CatalogRecord``
attributes, the ``i:type`` attribute (or the element tag) becomes the shape,
and child lists (``Fields``, ``Indexes``, ``EnumValues``, ...) become Python
lists. The platform omits properties that hold their default value; the
defaults the extractors depend on are restored on read.

Guardrails:
    - Partition discovery failure is fatal (DiscoveryError)
    - Listing an unknown partition raises PartitionNotFoundError
    - A missing object reads as None; a malformed file raises ParseError

Tags:
    provider, xml, aot, packages, metaspine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import glob
import re
from pathlib import Path
from typing import Any
from xml.etree import ElementTree

from metaspine.catalog.record import CatalogRecord
from metaspine.core.errors import DiscoveryError, ParseError, PartitionNotFoundError, ProviderError
from metaspine.core.logging import get_logger
from metaspine.providers.protocol import ObjectKind

logger = get_logger(__name__)

_XSI_TYPE = "{http://www.w3.org/2001/XMLSchema-instance}type"

# Elements that are lists even when they hold zero or one child
_COLLECTION_TAGS = frozenset({
    "DataSources",
    "EnumValues",
    "FieldGroups",
    "Fields",
    "Indexes",
    "Mappings",
    "Methods",
    "Relations",
    "ServiceOperations",
})

# Properties the platform omits from XML when they equal the default
_SHAPE_DEFAULTS: dict[str, dict[str, str]] = {
    "AxTableIndex": {"AllowDuplicates": "No"},
    "AxEnumValue": {"Value": "0"},
}

_STATIC_SIGNATURE = re.compile(r"\bstatic\b")
_COMMENTS = re.compile(r"//[^\n]*|/\*.*?\*/", re.S)
_ATTRIBUTE_LINES = re.compile(r"^\s*\[.*\]\s*$", re.M)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _shape(element: ElementTree.Element) -> str:
    xsi_type = element.get(_XSI_TYPE)
    if xsi_type:
        return xsi_type.rsplit(":", 1)[-1]
    return _local(element.tag)


def _is_collection(element: ElementTree.Element, children: list[ElementTree.Element]) -> bool:
    if _local(element.tag) in _COLLECTION_TAGS:
        return True
    tags = [_local(child.tag) for child in children]
    if all(tag.startswith("Ax") for tag in tags):
        return True
    return len(tags) > 1 and len(set(tags)) == 1


def _element_value(element: ElementTree.Element) -> Any:
    children = list(element)
    if not children:
        if _local(element.tag) in _COLLECTION_TAGS:
            return []
        if element.get(_XSI_TYPE):
            return element_to_record(element)
        return (element.text or "").strip()
    if _is_collection(element, children):
        return [element_to_record(child) for child in children]
    return element_to_record(element)


def _derive_static(attributes: dict[str, Any]) -> None:
    """X++ methods carry static-ness in their source signature only."""
    source = attributes.get("Source")
    if "IsStatic" in attributes or not isinstance(source, str):
        return
    # Doc comments and [Attribute] lines precede the declaration
    declaration = _ATTRIBUTE_LINES.sub("", _COMMENTS.sub("", source))
    signature = declaration.split("(", 1)[0]
    attributes["IsStatic"] = "Yes" if _STATIC_SIGNATURE.search(signature) else "No"


def element_to_record(element: ElementTree.Element) -> CatalogRecord:
    """Convert one metadata element (and its subtree) to a CatalogRecord."""
    shape = _shape(element)
    attributes: dict[str, Any] = {}
    for child in element:
        name = _local(child.tag)
        value = _element_value(child)
        if name in attributes:
            existing = attributes[name]
            attributes[name] = existing + [value] if isinstance(existing, list) else [existing, value]
        else:
            attributes[name] = value

    for key, default in _SHAPE_DEFAULTS.get(shape, {}).items():
        attributes.setdefault(key, default)
    if shape == "Method":
        _derive_static(attributes)

    return CatalogRecord(shape=shape, attributes=attributes)


def parse_metadata_file(path: Path) -> CatalogRecord:
    """Parse one AOT XML file.

    Raises:
        ParseError: The file is not well-formed XML
        ProviderError: The file cannot be read
    """
    try:
        tree = ElementTree.parse(path)
    except ElementTree.ParseError as e:
        raise ParseError(f"Malformed metadata file: {path.name}", cause=e).with_context(path=str(path)) from e
    except OSError as e:
        raise ProviderError(f"Cannot read metadata file: {path.name}", cause=e).with_context(path=str(path)) from e
    return element_to_record(tree.getroot())


class XmlObjectStore:
    """Object store for one kind inside a packages directory."""

    def __init__(self, provider: PackagesDirectoryProvider, kind: ObjectKind):
        self.provider = provider
        self.kind = kind
        self._index: dict[str, Path] = {}

    def list_objects(self, partition: str) -> list[str]:
        package_dir = self.provider.packages_dir / partition
        if not package_dir.is_dir():
            raise PartitionNotFoundError(f"Package directory not found: {partition}").with_context(
                partition=partition, object_kind=self.kind.value, path=str(package_dir)
            )

        names = []
        for path in sorted(package_dir.glob(f"*/{self.kind.folder}/*.xml")):
            names.append(path.stem)
            self._index.setdefault(path.stem, path)
        return names

    def _locate(self, name: str) -> Path | None:
        pattern = f"*/{self.kind.folder}/{glob.escape(name)}.xml"
        for partition in self.provider.discover_partitions():
            for path in sorted((self.provider.packages_dir / partition).glob(pattern)):
                self._index[name] = path
                return path
        return None

    def read(self, name: str) -> CatalogRecord | None:
        path = self._index.get(name) or self._locate(name)
        if path is None:
            logger.debug("object.not_found", object_kind=self.kind.value, name=name)
            return None
        return parse_metadata_file(path)


class PackagesDirectoryProvider:
    """Metadata provider over a PackagesLocalDirectory tree."""

    def __init__(self, packages_dir: Path, partition_marker: str = "Descriptor"):
        self.packages_dir = Path(packages_dir)
        self.partition_marker = partition_marker
        self._stores: dict[ObjectKind, XmlObjectStore] = {}
        self._partitions: list[str] | None = None

    def discover_partitions(self) -> list[str]:
        """Package directories that contain the partition marker folder."""
        if self._partitions is not None:
            return self._partitions
        if not self.packages_dir.is_dir():
            raise DiscoveryError(f"Packages directory not found: {self.packages_dir}").with_context(
                path=str(self.packages_dir)
            )
        try:
            names = {
                entry.name
                for entry in self.packages_dir.iterdir()
                if entry.is_dir() and (entry / self.partition_marker).is_dir()
            }
        except OSError as e:
            raise DiscoveryError(f"Cannot scan packages directory: {self.packages_dir}", cause=e).with_context(
                path=str(self.packages_dir)
            ) from e
        self._partitions = sorted(names)
        return self._partitions

    def objects(self, kind: ObjectKind) -> XmlObjectStore:
        if kind not in self._stores:
            self._stores[kind] = XmlObjectStore(self, kind)
        return self._stores[kind]


__all__ = [
    "element_to_record",
    "parse_metadata_file",
    "XmlObjectStore",
    "PackagesDirectoryProvider",
]
