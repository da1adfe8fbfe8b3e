"""
Structured error types for metaspine.

Every failure the extractor can raise carries a category and a small
structured context (partition, object kind, object name, path) so that the
per-object diagnostics and the fatal-error message printed by the CLI say
exactly where the catalog misbehaved.

Manifesto:
    - **Typed hierarchy:** One subclass per failure domain (config, provider,
      discovery, parse, output)
    - **Rich context:** Errors carry metadata for structured logging
    - **Error chaining:** The original exception is kept as ``cause``

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                      MetaspineError                           │
        │              (category, context, cause)                       │
        ├──────────────────────────────────────────────────────────────┤
        │                                                               │
        │  ConfigError      ProviderError            OutputError        │
        │  (CONFIG)         (SOURCE)                 (STORAGE)          │
        │                       │                                       │
        │        DiscoveryError │ PartitionNotFoundError                │
        │        ObjectNotFoundError   ParseError (PARSE)               │
        └──────────────────────────────────────────────────────────────┘

    Fatal: ConfigError, DiscoveryError, OutputError (abort the run).
    Non-fatal: PartitionNotFoundError, ObjectNotFoundError, ParseError and
    any other ProviderError raised for a single partition or object.

Examples:
    >>> error = ObjectNotFoundError("Table not found").with_context(
    ...     object_kind="tables", object_name="CustTable"
    ... )
    >>> error.to_dict()["context"]["object_name"]
    'CustTable'

Tags:
    error-handling, exception-hierarchy, error-context, metaspine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and log routing."""

    SOURCE = "SOURCE"  # Provider listing/reading, partition discovery
    PARSE = "PARSE"  # Malformed metadata documents
    CONFIG = "CONFIG"  # Missing or invalid settings
    STORAGE = "STORAGE"  # Output file cannot be written
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


@dataclass
class ErrorContext:
    """Structured metadata attached to an error.

    Attributes:
        partition: Partition (model/package) being processed
        object_kind: Provider object store (``tables``, ``enums``, ...)
        object_name: Identifier of the catalog object
        path: File system path involved, if any
        metadata: Additional key-value pairs
    """

    partition: str | None = None
    object_kind: str | None = None
    object_name: str | None = None
    path: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["partition", "object_kind", "object_name", "path"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class MetaspineError(Exception):
    """
    Base exception for all metaspine errors.

    Subclasses set ``default_category`` so call sites only pass a message
    and, where they have one, the underlying exception as ``cause``.

    Examples:
        >>> error = MetaspineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> try:
        ...     raise OSError("disk full")
        ... except OSError as e:
        ...     error = OutputError("Cannot write report", cause=e)
        >>> error.cause
        OSError('disk full')
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> MetaspineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise PartitionNotFoundError("Unknown partition").with_context(
                partition="ApplicationSuite",
                object_kind="tables",
            )
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION
# =============================================================================


class ConfigError(MetaspineError):
    """Missing or invalid configuration (no metadata source, bad YAML, ...)."""

    default_category = ErrorCategory.CONFIG


# =============================================================================
# PROVIDER / SOURCE
# =============================================================================


class ProviderError(MetaspineError):
    """Base for failures raised by a metadata provider."""

    default_category = ErrorCategory.SOURCE


class DiscoveryError(ProviderError):
    """Partition discovery failed. Fatal for the run."""


class PartitionNotFoundError(ProviderError):
    """A listed partition does not exist in the provider."""


class ObjectNotFoundError(ProviderError):
    """A catalog object could not be located or read back as empty."""


class ParseError(ProviderError):
    """A metadata document exists but cannot be parsed."""

    default_category = ErrorCategory.PARSE


# =============================================================================
# OUTPUT
# =============================================================================


class OutputError(MetaspineError):
    """The report file cannot be opened or written. Fatal for the run."""

    default_category = ErrorCategory.STORAGE


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "MetaspineError",
    "ConfigError",
    "ProviderError",
    "DiscoveryError",
    "PartitionNotFoundError",
    "ObjectNotFoundError",
    "ParseError",
    "OutputError",
]
