"""
Output Sink: the append-only Markdown report.

Blocks are written whole and flushed immediately, so a run killed part-way
leaves a report that is complete up to the last finished object.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from metaspine.core.errors import OutputError

SECTION_TERMINATOR = ["---", ""]


def clean(text: str | None) -> str:
    """Make text safe inside a Markdown table cell (escape pipes, one line)."""
    if not text:
        return ""
    return (
        text.replace("|", "\\|")
        .replace("\r\n", " ")
        .replace("\n", " ")
        .replace("\r", " ")
        .strip()
    )


class MarkdownSink:
    """Append-only line writer over a text stream."""

    def __init__(self, stream: TextIO, *, path: Path | None = None, owns_stream: bool = False):
        self._stream = stream
        self.path = path
        self._owns_stream = owns_stream
        self.blocks_written = 0

    @classmethod
    def open(cls, path: Path) -> MarkdownSink:
        """Create (or truncate) the report file, creating parent directories.

        Raises:
            OutputError: The file cannot be created
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            stream = open(path, "w", encoding="utf-8", newline="\n")
        except OSError as e:
            raise OutputError(f"Cannot open report file: {path}", cause=e).with_context(path=str(path)) from e
        return cls(stream, path=path, owns_stream=True)

    def _write(self, text: str) -> None:
        try:
            self._stream.write(text)
        except OSError as e:
            raise OutputError("Cannot write report", cause=e).with_context(
                path=str(self.path) if self.path else None
            ) from e

    def write_line(self, text: str = "") -> None:
        self._write(text + "\n")

    def write_lines(self, lines: Iterable[str]) -> None:
        self._write("".join(line + "\n" for line in lines))

    def write_block(self, lines: Iterable[str]) -> None:
        """Write a complete record block and flush it."""
        self.write_lines(lines)
        self.blocks_written += 1
        self.flush()

    def terminate_section(self) -> None:
        self.write_lines(SECTION_TERMINATOR)
        self.flush()

    def flush(self) -> None:
        try:
            self._stream.flush()
        except OSError as e:
            raise OutputError("Cannot flush report", cause=e) from e

    def close(self) -> None:
        if self._owns_stream and not self._stream.closed:
            self.flush()
            self._stream.close()

    def __enter__(self) -> MarkdownSink:
        return self

    def __exit__(self, *args) -> None:
        self.close()


__all__ = ["SECTION_TERMINATOR", "clean", "MarkdownSink"]
