"""Tests for CatalogRecord attribute access and construction."""

import copy
import pickle

import pytest

from metaspine.catalog.record import CatalogRecord


class TestAttributeAccess:
    """Attributes read like platform object properties."""

    def test_getattr(self):
        """Attribute names resolve against the attribute mapping."""
        record = CatalogRecord("AxTable", {"Name": "CustTable", "Label": "Customers"})
        assert record.Name == "CustTable"
        assert record.Label == "Customers"

    def test_missing_attribute_raises_attribute_error(self):
        """An absent attribute behaves like a missing Python attribute."""
        with pytest.raises(AttributeError):
            CatalogRecord("AxTable").Label

    def test_none_valued_attribute_is_present(self):
        """An attribute set to None is returned, not treated as missing."""
        record = CatalogRecord("AxTable", {"Extends": None})
        assert record.Extends is None
        assert getattr(record, "Label", "-") == "-"

    def test_copy_and_pickle(self):
        """Records survive deepcopy and pickling."""
        record = CatalogRecord("AxEnum", {"Name": "NoYes"})
        assert copy.deepcopy(record) == record
        assert pickle.loads(pickle.dumps(record)) == record


class TestFromMapping:
    """Plain data becomes a record tree."""

    def test_nested_conversion(self):
        """Nested mappings become records and lists convert per element."""
        record = CatalogRecord.from_mapping(
            {
                "Name": "CustTable",
                "Fields": [{"shape": "AxTableFieldString", "Name": "AccountNum"}],
                "ViewMetadata": {"Name": "inner"},
            },
            shape="AxTable",
        )
        assert record.shape == "AxTable"
        assert record.Fields[0].shape == "AxTableFieldString"
        assert record.Fields[0].Name == "AccountNum"
        assert isinstance(record.ViewMetadata, CatalogRecord)
        assert "shape" not in record.Fields[0].attributes

    def test_shape_key_overrides_default(self):
        """A shape key in the data wins over the shape argument."""
        record = CatalogRecord.from_mapping({"shape": "AxEdtEnum"}, shape="AxEdt")
        assert record.shape == "AxEdtEnum"

    def test_booleans_become_yes_no(self):
        """Booleans, including nested ones, read back as Yes/No text."""
        record = CatalogRecord.from_mapping(
            {"Name": "NoYes", "IsExtensible": True, "EnumValues": [{"Name": False, "Value": 0}]}
        )
        assert record.IsExtensible == "Yes"
        assert record.EnumValues[0].Name == "No"
        assert record.EnumValues[0].Value == 0
