"""
Partitioned Name Aggregator.

The platform splits its catalog into partitions (packages/models). The same
object can be listed by several of them, and any one partition may be
restricted, corrupt, or simply gone. Aggregation walks every partition once,
unions what it finds, and ignores partitions that fail.

Architecture:
    ::

        partitions ──► for each (in order):
                          list_fn(partition)
                            ├── ok, n > 0  ──► add to set, count "with objects"
                            ├── ok, n == 0 ──► count "empty"
                            └── raises     ──► count "errored", log, continue
                       ──► sorted(set)

Guardrails:
    - A failing partition is never retried and never raises to the caller
    - The returned identifiers are unique and sorted ascending

Tags:
    aggregation, deduplication, fault-tolerance, metaspine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from metaspine.core.logging import get_logger

logger = get_logger(__name__)

ListFn = Callable[[str], Iterable[str]]


@dataclass
class AggregationSummary:
    """Diagnostic counts for one aggregation pass."""

    partitions: int = 0
    with_objects: int = 0
    empty: int = 0
    errored: list[str] = field(default_factory=list)
    unique_names: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "partitions": self.partitions,
            "with_objects": self.with_objects,
            "empty": self.empty,
            "errored": len(self.errored),
            "unique_names": self.unique_names,
        }


@dataclass
class NameAggregate:
    names: list[str]
    summary: AggregationSummary


def collect_names(partitions: Sequence[str], list_fn: ListFn) -> NameAggregate:
    """Aggregate identifiers across partitions and keep the diagnostics.

    Args:
        partitions: Partition names, walked in the given order
        list_fn: Lists the identifiers of one partition; may raise

    Returns:
        NameAggregate with sorted unique names and the pass summary
    """
    found: set[str] = set()
    summary = AggregationSummary(partitions=len(partitions))
    total = len(partitions)

    for position, partition in enumerate(partitions, start=1):
        try:
            names = list(list_fn(partition))
        except Exception as e:
            summary.errored.append(partition)
            logger.warning(
                "partition.failed",
                partition=partition,
                position=f"{position}/{total}",
                error=str(e),
            )
            continue

        if names:
            found.update(names)
            summary.with_objects += 1
            logger.debug(
                "partition.listed",
                partition=partition,
                position=f"{position}/{total}",
                count=len(names),
            )
        else:
            summary.empty += 1

    summary.unique_names = len(found)
    logger.info("aggregation.summary", **summary.to_dict())
    return NameAggregate(names=sorted(found), summary=summary)


def aggregate_names(partitions: Sequence[str], list_fn: ListFn) -> list[str]:
    """Sorted, deduplicated union of identifiers across all partitions.

    Example:
        >>> listing = {"ModA": ["b", "a"], "ModB": ["b", "c"]}
        >>> aggregate_names(["ModA", "ModB"], listing.__getitem__)
        ['a', 'b', 'c']
    """
    return collect_names(partitions, list_fn).names


__all__ = ["AggregationSummary", "NameAggregate", "collect_names", "aggregate_names"]
