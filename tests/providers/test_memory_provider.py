"""Tests for the in-memory (snapshot) metadata provider."""

import pytest

from metaspine.catalog.access import read_field
from metaspine.catalog.record import CatalogRecord
from metaspine.core.errors import ConfigError, PartitionNotFoundError
from metaspine.providers.memory import InMemoryProvider
from metaspine.providers.protocol import MetadataProvider, ObjectKind, ObjectStore


class TestFromMapping:
    """Snapshot documents become record trees."""

    def test_protocol_conformance(self, memory_provider):
        """The provider and its stores satisfy the protocols."""
        assert isinstance(memory_provider, MetadataProvider)
        assert isinstance(memory_provider.objects(ObjectKind.TABLES), ObjectStore)

    def test_partitions_sorted(self, memory_provider):
        """Partitions are returned sorted."""
        assert memory_provider.discover_partitions() == ["ApplicationSuite", "Foundation"]

    def test_partitions_default_to_mentioned(self):
        """Without a partitions key, every mentioned partition counts."""
        provider = InMemoryProvider.from_mapping(
            {"objects": {"forms": {"ModB": [{"Name": "F1"}], "ModA": []}}}
        )
        assert provider.discover_partitions() == ["ModA", "ModB"]

    def test_records_are_catalog_records(self, memory_provider):
        """Snapshot entries become CatalogRecord trees."""
        table = memory_provider.objects(ObjectKind.TABLES).read("CustTable")
        assert isinstance(table, CatalogRecord)
        assert table.shape == "AxTable"
        assert table.Fields[0].shape == "AxTableFieldString"

    def test_unknown_kind_raises(self):
        """An unknown object kind is rejected."""
        with pytest.raises(ConfigError, match="Unknown object kind"):
            InMemoryProvider.from_mapping({"objects": {"widgets": {}}})

    def test_objects_must_be_mapping(self):
        """The objects section must be a mapping."""
        with pytest.raises(ConfigError):
            InMemoryProvider.from_mapping({"objects": ["tables"]})

    def test_section_must_be_mapping(self):
        """Each kind section must map partitions to lists."""
        with pytest.raises(ConfigError, match="must map partition"):
            InMemoryProvider.from_mapping({"objects": {"tables": ["CustTable"]}})


class TestStore:
    """Listing and reading semantics."""

    def test_list_objects(self, memory_provider):
        """Names are listed in snapshot order."""
        enums = memory_provider.objects(ObjectKind.ENUMS)
        assert enums.list_objects("Foundation") == ["NoYes", "ABC"]

    def test_list_unknown_partition_raises(self, memory_provider):
        """Listing an unknown partition raises with its name."""
        with pytest.raises(PartitionNotFoundError) as exc_info:
            memory_provider.objects(ObjectKind.ENUMS).list_objects("Nope")
        assert exc_info.value.context.partition == "Nope"

    def test_list_known_partition_without_objects(self, memory_provider):
        """A known partition without objects lists nothing."""
        assert memory_provider.objects(ObjectKind.MAPS).list_objects("Foundation") == []

    def test_read_first_definition_wins(self, memory_provider):
        """The first partition defining a name wins."""
        record = memory_provider.objects(ObjectKind.ENUMS).read("NoYes")
        assert read_field(record, "Label") == "No/Yes"

    def test_read_missing_is_none(self, memory_provider):
        """Reading an absent name returns None."""
        assert memory_provider.objects(ObjectKind.ENUMS).read("Missing") is None


class TestFromFile:
    """YAML snapshot files."""

    def test_yaml_file(self, tmp_path):
        """Snapshots load from YAML with scalars read as text."""
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "partitions: [ModA]\n"
            "objects:\n"
            "  enums:\n"
            "    ModA:\n"
            "      - shape: AxEnum\n"
            "        Name: EnumFoo\n"
            "        EnumValues:\n"
            "          - {shape: AxEnumValue, Name: None, Value: 0}\n",
            encoding="utf-8",
        )
        provider = InMemoryProvider.from_file(path)
        record = provider.objects(ObjectKind.ENUMS).read("EnumFoo")
        assert read_field(record.EnumValues[0], "Name") == "None"
        assert read_field(record.EnumValues[0], "Value") == "0"

    def test_unquoted_yes_no_stay_text(self, tmp_path):
        """Unquoted Yes/No scalars read back as the literals, not True/False."""
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "objects:\n"
            "  enums:\n"
            "    ModA:\n"
            "      - shape: AxEnum\n"
            "        Name: NoYes\n"
            "        EnumValues:\n"
            "          - {shape: AxEnumValue, Name: No, Value: 0}\n"
            "          - {shape: AxEnumValue, Name: Yes, Value: 1}\n"
            "  tables:\n"
            "    ModA:\n"
            "      - shape: AxTable\n"
            "        Name: CustTable\n"
            "        Fields:\n"
            "          - {shape: AxTableFieldString, Name: AccountNum, Mandatory: Yes}\n",
            encoding="utf-8",
        )
        provider = InMemoryProvider.from_file(path)
        enum = provider.objects(ObjectKind.ENUMS).read("NoYes")
        assert [read_field(v, "Name") for v in enum.EnumValues] == ["No", "Yes"]
        table = provider.objects(ObjectKind.TABLES).read("CustTable")
        assert table.Fields[0].Mandatory == "Yes"

    def test_missing_file(self, tmp_path):
        """An unreadable snapshot is a configuration error."""
        with pytest.raises(ConfigError, match="Cannot read catalog"):
            InMemoryProvider.from_file(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Malformed YAML is a configuration error."""
        path = tmp_path / "bad.yaml"
        path.write_text("objects: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid catalog"):
            InMemoryProvider.from_file(path)

    def test_non_mapping_document(self, tmp_path):
        """A snapshot that is not a mapping is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            InMemoryProvider.from_file(path)
