"""
CLI utility helpers: consoles, provider construction, and output formatting.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from metaspine.catalog.categories import Category
from metaspine.catalog.tally import CategoryTally
from metaspine.core.config import MetaspineSettings
from metaspine.core.errors import ConfigError
from metaspine.providers.memory import InMemoryProvider
from metaspine.providers.protocol import MetadataProvider
from metaspine.providers.xml_packages import PackagesDirectoryProvider

console = Console()
err_console = Console(stderr=True)

# Partitions listed before the rest are summarised as "... and N more"
PARTITION_PREVIEW = 20


# ── Provider helper ──────────────────────────────────────────────────────


def make_provider(settings: MetaspineSettings) -> MetadataProvider:
    """Build the metadata provider the settings point at.

    A catalog snapshot wins over a packages directory when both are set.

    Raises:
        ConfigError: Neither source is configured, or the snapshot is invalid
    """
    if settings.catalog_file is not None:
        return InMemoryProvider.from_file(settings.catalog_file)
    if settings.packages_dir is not None:
        return PackagesDirectoryProvider(settings.packages_dir, partition_marker=settings.partition_marker)
    raise ConfigError(
        "No metadata source configured. Pass --packages-dir or --catalog, "
        "or set METASPINE_PACKAGES_DIR."
    )


def missing_partitions(partitions: Sequence[str], expected: Sequence[str]) -> list[str]:
    present = set(partitions)
    return [name for name in expected if name not in present]


# ── Output helpers ───────────────────────────────────────────────────────


def print_banner(settings: MetaspineSettings) -> None:
    console.print(Panel.fit("[bold]D365FO Metadata Extractor[/bold]", border_style="cyan"))
    console.print(f"  Output   : {settings.output_path}")
    console.print()


def print_partitions(partitions: Sequence[str], limit: int = PARTITION_PREVIEW) -> None:
    console.print(f"  Found {len(partitions)} models:")
    for name in partitions[:limit]:
        console.print(f"    - {name}")
    if len(partitions) > limit:
        console.print(f"    [dim]... and {len(partitions) - limit} more[/dim]")


def print_menu() -> None:
    """Numbered category menu used by the interactive prompt."""
    table = Table(title="Select Metadata to Extract", show_header=False, box=None)
    table.add_column("No.", justify="right", style="cyan")
    table.add_column("Category")
    for category in Category:
        table.add_row(f"{category.number}.", category.display_name)
    table.add_row("0.", "All categories")
    console.print(table)


def print_tally(tally: CategoryTally) -> None:
    """Object counts per section, largest first, with a TOTAL row."""
    table = Table(title="Object counts")
    table.add_column("Section")
    table.add_column("Objects", justify="right")
    table.add_column("Failed", justify="right")

    for label, count in tally.by_count():
        failed = f"[red]{count.failed:,}[/red]" if count.failed else ""
        table.add_row(label, f"{count.succeeded:,}", failed)

    table.add_section()
    total_failed = f"[red]{tally.total_failed:,}[/red]" if tally.total_failed else ""
    table.add_row("[bold]TOTAL[/bold]", f"[bold]{tally.total:,}[/bold]", total_failed)
    console.print(table)


__all__ = [
    "console",
    "err_console",
    "make_provider",
    "missing_partitions",
    "print_banner",
    "print_partitions",
    "print_menu",
    "print_tally",
]
