"""
Base category extractor.

Every category runs the same loop; subclasses only say which object kind
they read, what their section looks like, and how one record renders.

Manifesto:
    One object's fault is one failure in the tally, never a stopped run.
    Reading and rendering happen inside a Result; only the sink write (which
    is fatal when it fails) happens outside it.

Architecture:
    ::

        run()
          ├── list_names(kind)  ──► collect_names(partitions, store.list_objects)
          ├── write_header()    ──► "# Title", intro
          ├── extract_each(kind, names, render)
          │     for name in names:
          │        try_result(read + render)
          │          ├── Err ──► failed += 1, log object.skipped
          │          └── Ok  ──► sink.write_block(lines), succeeded += 1
          ├── write_footer()    ──► "---"
          └── tally.record(label, succeeded, failed)

Guardrails:
    ❌ DON'T: write lines to the sink while a record is still rendering
    ✅ DO: render the whole block, then ``write_block()`` it

    ❌ DON'T: catch OutputError inside an extractor
    ✅ DO: let sink failures abort the run

Tags:
    extractor, protocol, fault-isolation, metaspine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import partial
from typing import Any

from metaspine.catalog.access import is_blank, iter_nested, read_field, read_nested
from metaspine.catalog.aggregate import collect_names
from metaspine.catalog.categories import Category
from metaspine.catalog.tally import CategoryTally
from metaspine.core.config import MetaspineSettings
from metaspine.core.errors import ObjectNotFoundError
from metaspine.core.logging import get_logger
from metaspine.core.result import Err, try_result
from metaspine.extraction.sink import MarkdownSink, clean
from metaspine.providers.protocol import MetadataProvider, ObjectKind

logger = get_logger(__name__)

RenderFn = Callable[[str, Any], list[str]]


@dataclass
class ExtractionContext:
    """Everything an extractor needs for one run."""

    provider: MetadataProvider
    partitions: list[str]
    sink: MarkdownSink
    tally: CategoryTally
    settings: MetaspineSettings
    enabled: frozenset[Category] = frozenset(Category)


@dataclass
class PassOutcome:
    total: int = 0
    succeeded: int = 0
    failed: int = 0


# ── Rendering helpers ────────────────────────────────────────────────────


def table_row(*cells: str) -> str:
    return "| " + " | ".join(clean(cell) for cell in cells) + " |"


def label_line(record: Any) -> list[str]:
    label = read_field(record, "Label")
    return [] if is_blank(label) else [f"Label: {label}"]


def label_suffix(record: Any) -> str:
    label = read_field(record, "Label")
    return "" if is_blank(label) else f" - {clean(label)}"


def isolated_lines(items: Iterable[Any], render: Callable[[Any], list[str]], what: str) -> list[str]:
    """Render sub-records one by one, dropping any that fault."""
    lines: list[str] = []
    for item in items:
        try:
            lines.extend(render(item))
        except Exception as e:
            logger.debug("subrecord.skipped", subrecord=what, name=read_field(item, "Name"), error=str(e))
    return lines


def nested_list(record: Any, *paths: str) -> list[Any] | None:
    """First collection found along the dotted attribute paths, or None.

    ``nested_list(view, "ViewMetadata.Fields", "Fields")``
    """
    for path in paths:
        current = record
        *parents, leaf = path.split(".")
        for parent in parents:
            current = read_nested(current, parent)
        items = iter_nested(current, leaf)
        if items is not None:
            return items
    return None


# ── Extractor base ───────────────────────────────────────────────────────


class CategoryExtractor(ABC):
    """Base class for one report section.

    Subclasses set the class attributes and implement :meth:`render`.
    Grouped extractors (menu items, security objects) override :meth:`run`.
    """

    # Categories this extractor serves (most serve exactly one)
    categories: tuple[Category, ...] = ()

    # Provider store read by the default run()
    kind: ObjectKind | None = None

    # Section heading, optional intro sentence, and tally label
    title: str = ""
    intro: str | None = None
    label: str = ""

    # Extra blank line before the terminator (list-style sections)
    pad_footer: bool = False

    def __init__(self, context: ExtractionContext):
        self.context = context
        self.sink = context.sink
        self.settings = context.settings

    # ── Protocol ─────────────────────────────────────────────────────────

    def run(self) -> None:
        if self.kind is None:
            raise NotImplementedError(f"{type(self).__name__} must set kind or override run()")
        names = self.list_names(self.kind)
        self.write_header()
        outcome = self.extract_each(self.kind, names, self.render)
        self.write_footer()
        self.context.tally.record(self.label, outcome.succeeded, outcome.failed)

    @abstractmethod
    def render(self, name: str, record: Any) -> list[str]:
        """Render one record as a complete block of lines."""

    # ── Steps ────────────────────────────────────────────────────────────

    def list_names(self, kind: ObjectKind) -> list[str]:
        store = self.context.provider.objects(kind)
        return collect_names(self.context.partitions, store.list_objects).names

    def header_lines(self) -> list[str]:
        lines = [f"# {self.title}", ""]
        if self.intro:
            lines += [self.intro, ""]
        return lines

    def write_header(self) -> None:
        self.sink.write_lines(self.header_lines())

    def write_footer(self) -> None:
        if self.pad_footer:
            self.sink.write_line()
        self.sink.terminate_section()

    def extract_each(self, kind: ObjectKind, names: list[str], render: RenderFn) -> PassOutcome:
        store = self.context.provider.objects(kind)
        outcome = PassOutcome(total=len(names))
        interval = self.settings.progress_interval

        for position, name in enumerate(names, start=1):
            result = try_result(partial(_read_and_render, store, kind, name, render))
            if isinstance(result, Err):
                outcome.failed += 1
                logger.warning(
                    "object.skipped",
                    object_kind=kind.value,
                    name=name,
                    error=str(result.error),
                    error_type=type(result.error).__name__,
                )
            else:
                self.sink.write_block(result.unwrap())
                outcome.succeeded += 1

            if interval and position % interval == 0:
                logger.info("extraction.progress", object_kind=kind.value, done=position, total=outcome.total)

        if outcome.failed:
            logger.info(
                "extraction.failures",
                object_kind=kind.value,
                failed=outcome.failed,
                total=outcome.total,
            )
        return outcome

    def is_enabled(self, category: Category) -> bool:
        return category in self.context.enabled


def _read_and_render(store: Any, kind: ObjectKind, name: str, render: RenderFn) -> list[str]:
    record = store.read(name)
    if record is None:
        raise ObjectNotFoundError(f"{kind.value} object not found: {name}").with_context(
            object_kind=kind.value, object_name=name
        )
    return render(name, record)


__all__ = [
    "ExtractionContext",
    "PassOutcome",
    "CategoryExtractor",
    "table_row",
    "label_line",
    "label_suffix",
    "isolated_lines",
    "nested_list",
]
