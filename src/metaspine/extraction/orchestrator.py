"""
Extraction Orchestrator.

Opens the report, writes the run header, runs every enabled category
extractor in report order, and closes the report.

Example:
    >>> provider = PackagesDirectoryProvider(Path("K:/AosService/PackagesLocalDirectory"))
    >>> orchestrator = ExtractionOrchestrator(provider, provider.discover_partitions(), settings)
    >>> report = orchestrator.run({Category.ENUMS, Category.TABLES})
    >>> report.tally.total
    48213
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from metaspine.catalog.categories import Category
from metaspine.catalog.tally import CategoryTally
from metaspine.core.config import MetaspineSettings
from metaspine.core.logging import LogContext, get_logger
from metaspine.extraction.base import ExtractionContext
from metaspine.extraction.extractors import EXTRACTION_PLAN
from metaspine.extraction.sink import MarkdownSink
from metaspine.providers.protocol import MetadataProvider

logger = get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExtractionReport:
    """What one run produced."""

    tally: CategoryTally
    categories: list[Category]
    started_at: datetime
    elapsed_seconds: float
    output_path: Path | None = None
    blocks_written: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "categories": [c.value for c in self.categories],
            "started_at": self.started_at.isoformat(),
            "elapsed_seconds": self.elapsed_seconds,
            "output_path": str(self.output_path) if self.output_path else None,
            "blocks_written": self.blocks_written,
            "total": self.tally.total,
            "failed": self.tally.total_failed,
            "counts": self.tally.to_dict(),
        }


class ExtractionOrchestrator:
    """Run the enabled category extractors against one provider.

    Manifesto:
        Categories always appear in the same order in the report, whatever
        order the user picked them in. Per-object faults end up in the
        tally; only setup faults (sink cannot be opened or written) abort.

    Architecture:
        ::

            run(enabled)
              ├── open sink (file, or the given stream)
              ├── write header   # title / Extracted / Models / ---
              ├── for extractor in EXTRACTION_PLAN:
              │       enabled ∩ extractor.categories?
              │         └── LogContext(category=...) ──► extractor.run()
              ├── close sink
              └── log extraction.summary ──► ExtractionReport

    Tags:
        orchestrator, pipeline, metaspine

    Doc-Types:
        - API Reference
        - Architecture (section: "Extraction Pipeline")
    """

    def __init__(
        self,
        provider: MetadataProvider,
        partitions: Iterable[str],
        settings: MetaspineSettings,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.provider = provider
        self.partitions = list(partitions)
        self.settings = settings
        self.clock = clock

    def header_lines(self, started_at: datetime) -> list[str]:
        return [
            f"# {self.settings.report_title}",
            "",
            f"**Extracted:** {started_at.strftime(TIMESTAMP_FORMAT)}",
            f"**Models:** {len(self.partitions)}",
            "",
            "---",
            "",
        ]

    def run(self, enabled: Iterable[Category], *, stream: TextIO | None = None) -> ExtractionReport:
        """Extract the enabled categories into the report.

        Args:
            enabled: Categories to extract; order does not matter
            stream: Write here instead of ``settings.output_path``

        Raises:
            OutputError: The report cannot be opened or written
        """
        enabled_set = frozenset(enabled)
        ordered = [category for category in Category if category in enabled_set]
        started_at = self.clock()
        tally = CategoryTally()

        if stream is not None:
            sink = MarkdownSink(stream)
            output_path = None
        else:
            sink = MarkdownSink.open(self.settings.output_path)
            output_path = self.settings.output_path

        logger.info(
            "extraction.started",
            partitions=len(self.partitions),
            categories=[c.value for c in ordered],
            output=str(output_path) if output_path else "<stream>",
        )

        context = ExtractionContext(
            provider=self.provider,
            partitions=self.partitions,
            sink=sink,
            tally=tally,
            settings=self.settings,
            enabled=enabled_set,
        )

        with sink:
            sink.write_block(self.header_lines(started_at))
            for extractor_cls in EXTRACTION_PLAN:
                selected = [c for c in extractor_cls.categories if c in enabled_set]
                if not selected:
                    continue
                with LogContext(category=selected[0].value):
                    logger.info("category.started", extractor=extractor_cls.__name__)
                    extractor_cls(context).run()
            sink.flush()

        elapsed = (self.clock() - started_at).total_seconds()
        report = ExtractionReport(
            tally=tally,
            categories=ordered,
            started_at=started_at,
            elapsed_seconds=elapsed,
            output_path=output_path,
            blocks_written=sink.blocks_written,
        )
        logger.info(
            "extraction.summary",
            total=tally.total,
            failed=tally.total_failed,
            blocks=sink.blocks_written,
            elapsed_seconds=round(elapsed, 1),
            counts={label: count.succeeded for label, count in tally.by_count()},
        )
        return report


__all__ = ["TIMESTAMP_FORMAT", "ExtractionReport", "ExtractionOrchestrator"]
