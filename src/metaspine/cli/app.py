"""
Root Typer application for the metaspine CLI.

Usage:
    metaspine extract --packages-dir K:/AosService/PackagesLocalDirectory --all
    metaspine extract --catalog snapshot.yaml -c tables -c 1
    metaspine categories
    metaspine models --packages-dir K:/AosService/PackagesLocalDirectory
"""

from __future__ import annotations

from pathlib import Path

import typer
from typer import Typer

from metaspine.catalog.categories import ALL_CATEGORIES, Category, Selection, parse_selection
from metaspine.cli.utils import (
    console,
    err_console,
    make_provider,
    missing_partitions,
    print_banner,
    print_menu,
    print_partitions,
    print_tally,
)
from metaspine.core.config import MetaspineSettings, load_settings
from metaspine.core.errors import MetaspineError
from metaspine.core.logging import configure_logging, get_logger
from metaspine.extraction.orchestrator import ExtractionOrchestrator

logger = get_logger(__name__)

app = Typer(
    name="metaspine",
    help="metaspine: extract D365FO AOT metadata into a Markdown reference.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        from metaspine import __version__

        try:
            v = pkg_version("metaspine")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"metaspine {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """metaspine CLI: list models, pick categories, write the metadata report."""


# ── Shared options ───────────────────────────────────────────────────────

PackagesDirOption = typer.Option(None, "--packages-dir", "-p", help="PackagesLocalDirectory root.")
CatalogOption = typer.Option(None, "--catalog", help="YAML/JSON catalog snapshot instead of a packages directory.")
ConfigOption = typer.Option(None, "--config", help="YAML settings file.")


def _settings(config: Path | None, **overrides) -> MetaspineSettings:
    settings = load_settings(config, **overrides)
    configure_logging(level=settings.log_level, json_format=settings.json_logs)
    return settings


def _fatal(error: MetaspineError) -> typer.Exit:
    err_console.print(f"[bold red]FATAL ERROR[/bold red]: {error.message}")
    if error.cause is not None:
        err_console.print(f"  [dim]{type(error.cause).__name__}: {error.cause}[/dim]")
    logger.error("run.failed", **error.to_dict())
    return typer.Exit(code=1)


def _select(categories: list[str] | None, select_all: bool) -> Selection:
    if select_all:
        return Selection(categories=set(ALL_CATEGORIES))
    if categories:
        return parse_selection(",".join(categories))

    print_menu()
    text = typer.prompt(
        "Enter numbers (comma-separated, e.g. 1,3,5 or 0 for all)",
        default="",
        show_default=False,
    )
    return parse_selection(text)


# ── Commands ─────────────────────────────────────────────────────────────


@app.command("extract")
def extract(
    packages_dir: Path | None = PackagesDirOption,
    catalog: Path | None = CatalogOption,
    category: list[str] | None = typer.Option(
        None, "--category", "-c", help="Category number or name (repeatable)."
    ),
    select_all: bool = typer.Option(False, "--all", "-a", help="Extract every category."),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help="Report directory."),
    output_file: str | None = typer.Option(None, "--output-file", help="Report file name."),
    config: Path | None = ConfigOption,
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR."),
    log_format: str | None = typer.Option(None, "--log-format", help="console, json or auto."),
) -> None:
    """Extract the selected categories into the Markdown report."""
    try:
        settings = _settings(
            config,
            packages_dir=packages_dir,
            catalog_file=catalog,
            output_dir=output_dir,
            output_file=output_file,
            log_level=log_level,
            log_format=log_format,
        )
        print_banner(settings)

        console.print("> Initializing metadata provider...")
        provider = make_provider(settings)

        console.print("> Discovering models...")
        partitions = provider.discover_partitions()
        print_partitions(partitions)
        for name in missing_partitions(partitions, settings.expected_partitions):
            console.print(f"  [yellow]✗ {name} package NOT found - standard objects will be missing![/yellow]")

        selection = _select(category, select_all)
        for token in selection.invalid:
            console.print(f"  [yellow]Warning: Invalid selection '{token}' - skipped[/yellow]")
        if not selection.categories:
            console.print("No categories selected. Exiting...")
            raise typer.Exit(code=0)

        ordered = selection.ordered()
        console.print(f"Selected {len(ordered)} category(ies):")
        for selected in ordered:
            console.print(f"  - {selected.display_name}")

        report = ExtractionOrchestrator(provider, partitions, settings).run(selection.categories)
    except MetaspineError as e:
        raise _fatal(e) from e

    console.print()
    print_tally(report.tally)
    console.print(f"[green]══ Done in {report.elapsed_seconds / 60:.1f} minutes ══[/green]")
    console.print(f"   Output: {report.output_path.resolve() if report.output_path else '-'}")


@app.command("categories")
def categories() -> None:
    """Show the numbered category menu."""
    print_menu()
    console.print()
    console.print("[dim]Names work too: " + ", ".join(c.value for c in Category) + "[/dim]")


@app.command("models")
def models(
    packages_dir: Path | None = PackagesDirOption,
    catalog: Path | None = CatalogOption,
    config: Path | None = ConfigOption,
) -> None:
    """List the models (packages) the provider can see."""
    try:
        settings = _settings(config, packages_dir=packages_dir, catalog_file=catalog)
        partitions = make_provider(settings).discover_partitions()
    except MetaspineError as e:
        raise _fatal(e) from e

    print_partitions(partitions, limit=len(partitions))
    for name in missing_partitions(partitions, settings.expected_partitions):
        console.print(f"  [yellow]✗ {name} package NOT found[/yellow]")
