"""Core primitives: errors, results, logging, configuration."""

from metaspine.core.errors import (
    ConfigError,
    DiscoveryError,
    ErrorCategory,
    ErrorContext,
    MetaspineError,
    ObjectNotFoundError,
    OutputError,
    ParseError,
    PartitionNotFoundError,
    ProviderError,
)
from metaspine.core.result import Err, Ok, Result, try_result

__all__ = [
    "ConfigError",
    "DiscoveryError",
    "ErrorCategory",
    "ErrorContext",
    "MetaspineError",
    "ObjectNotFoundError",
    "OutputError",
    "ParseError",
    "PartitionNotFoundError",
    "ProviderError",
    "Err",
    "Ok",
    "Result",
    "try_result",
]
