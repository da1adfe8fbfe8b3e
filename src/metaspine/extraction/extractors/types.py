"""Enums and extended data types."""

from __future__ import annotations

from typing import Any

from metaspine.catalog.access import is_blank, iter_nested, read_field
from metaspine.catalog.categories import Category
from metaspine.catalog.shapes import classify_edt
from metaspine.extraction.base import CategoryExtractor, label_line, table_row
from metaspine.providers.protocol import ObjectKind


class EnumExtractor(CategoryExtractor):
    """One block per enum: label and the (value, name) table."""

    categories = (Category.ENUMS,)
    kind = ObjectKind.ENUMS
    title = "Base Enums"
    intro = "Each enum lists its symbolic values. Use these exact names in X++ code."
    label = "Base Enums"

    def render(self, name: str, record: Any) -> list[str]:
        lines = [f"## {read_field(record, 'Name', default=name)}"]
        lines += label_line(record)

        values = iter_nested(record, "EnumValues")
        if values:
            lines += ["| Value | Name |", "|-------|------|"]
            for value in values:
                lines.append(table_row(read_field(value, "Value"), read_field(value, "Name")))
        lines.append("")
        return lines


class EdtExtractor(CategoryExtractor):
    """All EDTs in a single table, one row per EDT."""

    categories = (Category.EDTS,)
    kind = ObjectKind.EDTS
    title = "Extended Data Types (EDTs)"
    label = "Extended Data Types"
    pad_footer = True

    def header_lines(self) -> list[str]:
        return super().header_lines() + [
            "| EDT Name | Extends | Base Type | String Length | Label |",
            "|----------|---------|-----------|--------------|-------|",
        ]

    def render(self, name: str, record: Any) -> list[str]:
        base_type = classify_edt(record)
        string_length = ""
        if base_type == "String":
            size = read_field(record, "StringSize")
            if not is_blank(size) and size.strip() != "0":
                string_length = size.strip()

        return [
            table_row(
                read_field(record, "Name", default=name),
                read_field(record, "Extends"),
                base_type,
                string_length,
                read_field(record, "Label"),
            )
        ]
