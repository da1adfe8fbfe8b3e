"""
Tests for the extraction orchestrator.

Tests verify:
- The EnumFoo/EnumBar scenario: sorted aggregate, one skip, one block
- Fixed category order whatever the selection order
- Byte-identical reports for a fixed clock
- Report file creation and OutputError on unwritable paths
"""

import io
from datetime import datetime, timedelta

import pytest

from metaspine.catalog.categories import Category
from metaspine.core.errors import OutputError
from metaspine.extraction.orchestrator import ExtractionOrchestrator
from metaspine.providers.protocol import ObjectKind
from tests._support.clock import FixedClock
from tests._support.scripted import ScriptedProvider, ScriptedStore


@pytest.fixture
def enum_store():
    return ScriptedStore(
        listings={"ModA": ["EnumFoo"], "ModB": ["EnumFoo", "EnumBar"]},
        records={
            "EnumFoo": {
                "Name": "EnumFoo",
                "EnumValues": [{"Value": 0, "Name": "None"}, {"Value": 1, "Name": "Active"}],
            },
            "EnumBar": RuntimeError("read failed"),
        },
    )


@pytest.fixture
def scenario_provider(enum_store):
    return ScriptedProvider(["ModA", "ModB"], {ObjectKind.ENUMS: enum_store})


def run_to_string(orchestrator, enabled):
    buffer = io.StringIO()
    report = orchestrator.run(enabled, stream=buffer)
    return buffer.getvalue(), report


class TestScenario:
    """Two models, one shared enum, one faulting enum."""

    def test_report_content(self, scenario_provider, settings, fixed_clock):
        """The report holds the header and the one readable enum."""
        orchestrator = ExtractionOrchestrator(
            scenario_provider, scenario_provider.discover_partitions(), settings, clock=fixed_clock
        )
        output, _ = run_to_string(orchestrator, {Category.ENUMS})
        assert output == (
            "# D365FO Metadata Extraction\n"
            "\n"
            "**Extracted:** 2025-01-15 09:30:00\n"
            "**Models:** 2\n"
            "\n"
            "---\n"
            "\n"
            "# Base Enums\n"
            "\n"
            "Each enum lists its symbolic values. Use these exact names in X++ code.\n"
            "\n"
            "## EnumFoo\n"
            "| Value | Name |\n"
            "|-------|------|\n"
            "| 0 | None |\n"
            "| 1 | Active |\n"
            "\n"
            "---\n"
            "\n"
        )

    def test_tally_and_read_order(self, scenario_provider, enum_store, settings, fixed_clock):
        """One success, one skip, names read in sorted order."""
        orchestrator = ExtractionOrchestrator(scenario_provider, ["ModA", "ModB"], settings, clock=fixed_clock)
        _, report = run_to_string(orchestrator, {Category.ENUMS})

        assert enum_store.read_calls == ["EnumBar", "EnumFoo"]
        count = report.tally.get("Base Enums")
        assert count.succeeded == 1
        assert count.failed == 1
        assert report.tally.total == 1
        assert report.tally.total_failed == 1
        assert report.blocks_written == 2


class TestOrdering:
    """Report order is fixed by category declaration order."""

    def test_selection_order_ignored(self, memory_provider, settings, fixed_clock):
        """Categories run in report order whatever the selection order."""
        orchestrator = ExtractionOrchestrator(memory_provider, ["ApplicationSuite", "Foundation"], settings, fixed_clock)
        output, report = run_to_string(orchestrator, [Category.SECURITY_ROLES, Category.TABLES, Category.ENUMS])

        assert output.index("# Base Enums") < output.index("# Tables") < output.index("# Security Roles")
        assert report.categories == [Category.ENUMS, Category.TABLES, Category.SECURITY_ROLES]

    def test_unselected_categories_absent(self, memory_provider, settings, fixed_clock):
        """Only selected categories appear."""
        orchestrator = ExtractionOrchestrator(memory_provider, ["ApplicationSuite", "Foundation"], settings, fixed_clock)
        output, report = run_to_string(orchestrator, {Category.SECURITY_DUTIES})

        assert "# Security Duties" in output
        assert "# Security Roles" not in output
        assert "# Base Enums" not in output
        assert report.tally.labels() == ["Security Duties"]

    def test_nothing_enabled_writes_header_only(self, memory_provider, settings, fixed_clock):
        """An empty selection writes only the header."""
        orchestrator = ExtractionOrchestrator(memory_provider, ["ApplicationSuite"], settings, fixed_clock)
        output, report = run_to_string(orchestrator, set())
        assert output.endswith("**Models:** 1\n\n---\n\n")
        assert len(report.tally) == 0
        assert report.blocks_written == 1


class TestDeterminism:
    """Same catalog, same clock: same bytes."""

    def test_repeat_runs_identical(self, memory_provider, settings):
        """Two runs with the same clock produce the same bytes."""
        partitions = memory_provider.discover_partitions()
        outputs = []
        for _ in range(2):
            clock = FixedClock(datetime(2025, 1, 15, 9, 30, 0))
            orchestrator = ExtractionOrchestrator(memory_provider, partitions, settings, clock)
            output, _ = run_to_string(orchestrator, set(Category))
            outputs.append(output)
        assert outputs[0] == outputs[1]

    def test_elapsed_from_clock(self, memory_provider, settings):
        """Elapsed time comes from the injected clock."""
        clock = FixedClock(datetime(2025, 1, 15, 9, 30, 0), step=timedelta(seconds=90))
        orchestrator = ExtractionOrchestrator(memory_provider, ["ApplicationSuite"], settings, clock)
        _, report = run_to_string(orchestrator, {Category.FORMS})
        assert report.elapsed_seconds == 90.0
        assert report.started_at == datetime(2025, 1, 15, 9, 30, 0)
        assert report.to_dict()["categories"] == ["forms"]
        assert report.to_dict()["blocks_written"] == report.blocks_written


class TestReportFile:
    """Writing to settings.output_path."""

    def test_writes_report_file(self, memory_provider, settings, fixed_clock):
        """Without a stream the report goes to the output path."""
        orchestrator = ExtractionOrchestrator(memory_provider, ["ApplicationSuite", "Foundation"], settings, fixed_clock)
        report = orchestrator.run({Category.ENUMS, Category.CLASSES})

        assert report.output_path == settings.output_path
        content = settings.output_path.read_text(encoding="utf-8")
        assert content.startswith("# D365FO Metadata Extraction\n")
        assert "### NumberSeqFormHandler" in content
        assert report.to_dict()["output_path"] == str(settings.output_path)

    def test_custom_title(self, memory_provider, settings, fixed_clock):
        """report_title replaces the default heading."""
        settings.report_title = "Contoso AOT"
        orchestrator = ExtractionOrchestrator(memory_provider, [], settings, fixed_clock)
        output, _ = run_to_string(orchestrator, set())
        assert output.startswith("# Contoso AOT\n\n**Extracted:** 2025-01-15 09:30:00\n**Models:** 0\n")

    def test_unwritable_output_raises(self, memory_provider, settings, fixed_clock, tmp_path):
        """An unwritable output directory raises OutputError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        settings.output_dir = blocker / "out"
        orchestrator = ExtractionOrchestrator(memory_provider, ["ApplicationSuite"], settings, fixed_clock)
        with pytest.raises(OutputError):
            orchestrator.run({Category.ENUMS})
