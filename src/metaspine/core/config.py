"""
Centralized settings for metaspine.

One validated settings object covers where the metadata comes from,
where the report goes, and the handful of literal sets that differ between
provider versions (what counts as "Yes", what an "allow duplicates = false"
looks like). Values resolve from, in order of precedence: keyword arguments
(including a YAML config file loaded with :func:`load_settings`), then
``METASPINE_*`` environment variables, then a ``.env`` file, then defaults.

Quick start::

    from metaspine.core.config import load_settings

    settings = load_settings()
    settings.output_path          # Path("output/D365FO_Metadata.md")

    settings = load_settings(Path("metaspine.yaml"), output_file="aot.md")

Tags:
    metaspine, configuration, settings, pydantic, yaml

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from metaspine.core.errors import ConfigError

DEFAULT_KEY_CLASS_PREFIXES = [
    "NumberSeq",
    "DimensionDefaulting",
    "InventPosting",
    "LedgerVoucher",
    "SalesFormLetter",
    "PurchFormLetter",
    "InventMov",
    "InventUpd",
    "InventTrans",
    "TaxCalc",
    "MarkupCalc",
    "SysOperation",
    "SysDataEntity",
    "DMF",
    "BatchHeader",
    "RunBase",
    "Query",
    "SysQuery",
    "FormLetter",
    "SysLookup",
    "EventHandler",
]


class MetaspineSettings(BaseSettings):
    """metaspine configuration.

    All fields can be set via ``METASPINE_*`` environment variables (e.g.
    ``METASPINE_PACKAGES_DIR=/mnt/PackagesLocalDirectory``); list fields take
    JSON (``METASPINE_TRUTHY_LITERALS='["Yes", "1"]'``).
    """

    model_config = SettingsConfigDict(
        env_prefix="METASPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Metadata source ──────────────────────────────────────────
    packages_dir: Path | None = Field(default=None, description="PackagesLocalDirectory root")
    catalog_file: Path | None = Field(default=None, description="YAML/JSON catalog snapshot")
    partition_marker: str = Field(default="Descriptor", description="Folder marking a package directory")
    expected_partitions: list[str] = Field(default_factory=lambda: ["ApplicationSuite"])

    # ── Output ───────────────────────────────────────────────────
    output_dir: Path = Field(default=Path("output"))
    output_file: str = Field(default="D365FO_Metadata.md")
    report_title: str = Field(default="D365FO Metadata Extraction")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="auto", description="console, json or auto")

    # ── Extraction ───────────────────────────────────────────────
    key_class_prefixes: list[str] = Field(default_factory=lambda: list(DEFAULT_KEY_CLASS_PREFIXES))
    allow_duplicates_false_literals: list[str] = Field(
        default_factory=lambda: ["No", "0", "False"],
        description="AllowDuplicates values that mark an index as unique",
    )
    truthy_literals: list[str] = Field(
        default_factory=lambda: ["Yes", "1", "True"],
        description="Values read as true for Mandatory / IsStatic",
    )
    hidden_table_groups: list[str] = Field(default_factory=lambda: ["Miscellaneous"])
    progress_interval: int = Field(default=500, ge=0, description="Log progress every N objects (0 = off)")

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("console", "json", "auto"):
            raise ValueError(f"log_format must be console, json or auto, got {value!r}")
        return value

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.output_file

    @property
    def json_logs(self) -> bool | None:
        """Tri-state flag for :func:`metaspine.core.logging.configure_logging`."""
        if self.log_format == "auto":
            return None
        return self.log_format == "json"


def load_settings(config_file: Path | None = None, **overrides: Any) -> MetaspineSettings:
    """Build settings from an optional YAML file plus explicit overrides.

    Overrides whose value is ``None`` are ignored so CLI options that were not
    given fall through to the file, the environment, and the defaults.

    Raises:
        ConfigError: The file is missing, is not a YAML mapping, or a value
            fails validation.
    """
    data: dict[str, Any] = {}
    if config_file is not None:
        try:
            with open(config_file, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigError(f"Cannot read config file: {config_file}", cause=e).with_context(
                path=str(config_file)
            ) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {config_file}", cause=e).with_context(
                path=str(config_file)
            ) from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file must contain a mapping: {config_file}").with_context(
                path=str(config_file)
            )
        data.update(loaded)

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return MetaspineSettings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}", cause=e) from e


__all__ = [
    "DEFAULT_KEY_CLASS_PREFIXES",
    "MetaspineSettings",
    "load_settings",
]
