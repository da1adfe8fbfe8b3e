"""
CLI layer for metaspine.

A Typer application that handles only terminal transport: argument
parsing, the interactive category prompt, and rich output. Extraction
itself lives in ``metaspine.extraction``.

Entry point::

    metaspine --help
"""

from metaspine.cli.app import app

__all__ = ["app"]
