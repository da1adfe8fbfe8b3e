"""Metadata providers: the catalog boundary the extraction core reads through."""

from metaspine.providers.memory import InMemoryProvider, InMemoryStore
from metaspine.providers.protocol import MetadataProvider, ObjectKind, ObjectStore
from metaspine.providers.xml_packages import PackagesDirectoryProvider, XmlObjectStore, parse_metadata_file

__all__ = [
    "InMemoryProvider",
    "InMemoryStore",
    "MetadataProvider",
    "ObjectKind",
    "ObjectStore",
    "PackagesDirectoryProvider",
    "XmlObjectStore",
    "parse_metadata_file",
]
