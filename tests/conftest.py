"""
Shared pytest fixtures and configuration for metaspine tests.

This module provides:
- State cleanup (settings cache, structlog config, bound log context)
- Isolated settings writing into tmp_path
- A deterministic clock for byte-identical reports
- A small catalog snapshot and an on-disk PackagesLocalDirectory tree

Usage:
    Fixtures are auto-discovered by pytest; take them as test arguments.

    def test_something(settings, memory_provider):
        ...
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest
import structlog

# Ensure metaspine package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from metaspine.core.config import MetaspineSettings
from metaspine.providers.memory import InMemoryProvider
from tests._support.clock import FixedClock
from tests._support.packages import (
    CUST_ACCOUNT_XML,
    CUST_TABLE_XML,
    NO_YES_XML,
    NUMBER_SEQ_CLASS_XML,
    write_object,
)


# =============================================================================
# State Cleanup
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_state(monkeypatch):
    """Keep env and logging state from leaking between tests."""
    for key in list(os.environ):
        if key.startswith("METASPINE_"):
            monkeypatch.delenv(key)
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


# =============================================================================
# Settings & Clock
# =============================================================================


@pytest.fixture
def settings(tmp_path: Path) -> MetaspineSettings:
    """Settings writing the report under tmp_path, progress logging off."""
    return MetaspineSettings(
        output_dir=tmp_path / "output",
        progress_interval=0,
        _env_file=None,
    )


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(datetime(2025, 1, 15, 9, 30, 0))


# =============================================================================
# Catalog Snapshot
# =============================================================================


@pytest.fixture
def sample_catalog() -> dict[str, Any]:
    """A two-model catalog touching every category.

    ``"No"``/``"Yes"`` are quoted: unquoted they load as booleans in YAML.
    """
    return {
        "partitions": ["ApplicationSuite", "Foundation"],
        "objects": {
            "enums": {
                "ApplicationSuite": [
                    {
                        "shape": "AxEnum",
                        "Name": "NoYes",
                        "Label": "No/Yes",
                        "EnumValues": [
                            {"shape": "AxEnumValue", "Name": "No", "Value": 0},
                            {"shape": "AxEnumValue", "Name": "Yes", "Value": 1},
                        ],
                    },
                ],
                "Foundation": [
                    {"shape": "AxEnum", "Name": "NoYes"},
                    {"shape": "AxEnum", "Name": "ABC", "EnumValues": []},
                ],
            },
            "edts": {
                "ApplicationSuite": [
                    {"shape": "AxEdtString", "Name": "CustAccount", "Extends": "AccountNum", "StringSize": "20"},
                    {"shape": "AxEdtEnum", "Name": "CustBlocked", "EnumType": "CustVendorBlocked"},
                    {"shape": "AxEdtReal", "Name": "AmountMST", "Label": "Amount | MST"},
                ],
            },
            "tables": {
                "ApplicationSuite": [
                    {
                        "shape": "AxTable",
                        "Name": "CustTable",
                        "Label": "Customers",
                        "TableGroup": "Main",
                        "PrimaryIndex": "AccountIdx",
                        "Fields": [
                            {
                                "shape": "AxTableFieldString",
                                "Name": "AccountNum",
                                "ExtendedDataType": "CustAccount",
                                "Mandatory": "Yes",
                            },
                            {"shape": "AxTableFieldEnum", "Name": "Blocked", "EnumType": "CustVendorBlocked"},
                        ],
                        "FieldGroups": [
                            {
                                "shape": "AxTableFieldGroup",
                                "Name": "Overview",
                                "Fields": [{"DataField": "AccountNum"}, {"DataField": "Blocked"}],
                            },
                        ],
                        "Indexes": [
                            {
                                "shape": "AxTableIndex",
                                "Name": "AccountIdx",
                                "AllowDuplicates": "No",
                                "Fields": [{"DataField": "AccountNum"}],
                            },
                        ],
                        "Relations": [{"shape": "AxTableRelation", "Name": "CustGroup", "RelatedTable": "CustGroup"}],
                    },
                ],
            },
            "classes": {
                "ApplicationSuite": [
                    {
                        "shape": "AxClass",
                        "Name": "NumberSeqFormHandler",
                        "Methods": [
                            {"shape": "Method", "Name": "newForm", "IsStatic": "Yes"},
                            {"shape": "Method", "Name": "formMethodClose", "IsStatic": "No"},
                        ],
                    },
                    {"shape": "AxClass", "Name": "CustPostInvoice"},
                ],
            },
            "forms": {"ApplicationSuite": [{"shape": "AxForm", "Name": "CustTable", "Label": "Customers"}]},
            "menu-item-displays": {
                "ApplicationSuite": [{"shape": "AxMenuItemDisplay", "Name": "CustTable", "Object": "CustTable"}],
            },
            "security-roles": {
                "ApplicationSuite": [{"shape": "AxSecurityRole", "Name": "AccountsReceivableClerk"}],
            },
        },
    }


@pytest.fixture
def memory_provider(sample_catalog) -> InMemoryProvider:
    return InMemoryProvider.from_mapping(sample_catalog)


# =============================================================================
# PackagesLocalDirectory Tree
# =============================================================================


@pytest.fixture
def packages_dir(tmp_path: Path) -> Path:
    """A PackagesLocalDirectory with two packages and one non-package folder.

    ApplicationSuite/Foundation holds CustTable, NoYes, CustAccount and
    NumberSeqFormHandler; ApplicationFoundation/ApplicationFoundation lists
    NoYes again.
    """
    root = tmp_path / "PackagesLocalDirectory"
    for package in ("ApplicationSuite", "ApplicationFoundation"):
        (root / package / "Descriptor").mkdir(parents=True)
    (root / "bin").mkdir()

    write_object(root, "ApplicationSuite", "Foundation", "AxTable", "CustTable", CUST_TABLE_XML)
    write_object(root, "ApplicationSuite", "Foundation", "AxEnum", "NoYes", NO_YES_XML)
    write_object(root, "ApplicationSuite", "Foundation", "AxEdt", "CustAccount", CUST_ACCOUNT_XML)
    write_object(root, "ApplicationSuite", "Foundation", "AxClass", "NumberSeqFormHandler", NUMBER_SEQ_CLASS_XML)
    write_object(root, "ApplicationFoundation", "ApplicationFoundation", "AxEnum", "NoYes", NO_YES_XML)
    return root
