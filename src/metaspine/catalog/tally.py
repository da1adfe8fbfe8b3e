"""
Category Tally: success/failure counters per report section.

Created empty by the orchestrator at the start of a run, filled in by each
extractor under its own labels, read once at the end for the summary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class CategoryCount:
    succeeded: int = 0
    failed: int = 0


class CategoryTally:
    """Ordered mapping of section label -> :class:`CategoryCount`."""

    def __init__(self) -> None:
        self._counts: dict[str, CategoryCount] = {}

    def record(self, label: str, succeeded: int, failed: int = 0) -> None:
        self._counts[label] = CategoryCount(succeeded=succeeded, failed=failed)

    def get(self, label: str) -> CategoryCount | None:
        return self._counts.get(label)

    def __contains__(self, label: object) -> bool:
        return label in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def labels(self) -> list[str]:
        return list(self._counts)

    def by_count(self) -> list[tuple[str, CategoryCount]]:
        """Entries sorted by success count, largest first (stable on ties)."""
        return sorted(self._counts.items(), key=lambda item: item[1].succeeded, reverse=True)

    @property
    def total(self) -> int:
        return sum(count.succeeded for count in self._counts.values())

    @property
    def total_failed(self) -> int:
        return sum(count.failed for count in self._counts.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            label: {"succeeded": count.succeeded, "failed": count.failed}
            for label, count in self._counts.items()
        }


__all__ = ["CategoryCount", "CategoryTally"]
