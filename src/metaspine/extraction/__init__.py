"""Extraction pipeline: sink, category extractors, orchestrator."""

from metaspine.extraction.base import CategoryExtractor, ExtractionContext, PassOutcome
from metaspine.extraction.extractors import EXTRACTION_PLAN
from metaspine.extraction.orchestrator import ExtractionOrchestrator, ExtractionReport
from metaspine.extraction.sink import MarkdownSink, clean

__all__ = [
    "CategoryExtractor",
    "ExtractionContext",
    "PassOutcome",
    "EXTRACTION_PLAN",
    "ExtractionOrchestrator",
    "ExtractionReport",
    "MarkdownSink",
    "clean",
]
