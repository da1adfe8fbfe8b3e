"""Classes, queries and services."""

from __future__ import annotations

from typing import Any

from metaspine.catalog.access import is_blank, iter_nested, matches_literal, read_field
from metaspine.catalog.categories import Category
from metaspine.extraction.base import CategoryExtractor, isolated_lines, label_line, nested_list
from metaspine.providers.protocol import ObjectKind


class ClassExtractor(CategoryExtractor):
    """Key framework classes in detail, then every class name.

    Only classes whose name starts with one of ``key_class_prefixes``
    (case-insensitive) are read; the flat listing comes straight from the
    aggregate and needs no reads.
    """

    categories = (Category.CLASSES,)
    kind = ObjectKind.CLASSES
    title = "Classes"

    def is_key_class(self, name: str) -> bool:
        lowered = name.lower()
        return any(lowered.startswith(prefix.lower()) for prefix in self.settings.key_class_prefixes)

    def run(self) -> None:
        names = self.list_names(ObjectKind.CLASSES)
        self.sink.write_lines(self.header_lines() + ["## Key Framework Classes (with methods)", ""])

        key_names = [name for name in names if self.is_key_class(name)]
        detailed = self.extract_each(ObjectKind.CLASSES, key_names, self.render)

        self.sink.write_block(["## All Class Names", "", "```", *names, "```", ""])
        self.write_footer()

        self.context.tally.record("Classes (total)", len(names))
        self.context.tally.record("Classes (detailed)", detailed.succeeded, detailed.failed)

    def render(self, name: str, record: Any) -> list[str]:
        lines = [f"### {read_field(record, 'Name', default=name)}"]

        extends = read_field(record, "Extends")
        if not is_blank(extends):
            lines.append(f"Extends: {extends}")

        methods = nested_list(record, "Methods", "SourceCode.Methods")
        if methods:
            lines.append("Methods:")
            ordered = sorted(methods, key=lambda method: read_field(method, "Name"))
            lines += isolated_lines(ordered, self._method_line, "method")

        lines.append("")
        return lines

    def _method_line(self, method: Any) -> list[str]:
        static = matches_literal(read_field(method, "IsStatic"), self.settings.truthy_literals)
        return [f"- {'static ' if static else ''}{read_field(method, 'Name')}"]


class QueryExtractor(CategoryExtractor):
    categories = (Category.QUERIES,)
    kind = ObjectKind.QUERIES
    title = "Queries"
    label = "Queries"

    def render(self, name: str, record: Any) -> list[str]:
        lines = [f"## {read_field(record, 'Name', default=name)}"]
        lines += label_line(record)

        # Not every platform release exposes data sources on a query
        data_sources = iter_nested(record, "DataSources")
        if data_sources is not None:
            lines.append("Data Sources:")
            lines += isolated_lines(
                data_sources,
                lambda ds: [f"- {read_field(ds, 'Name')} (Table: {read_field(ds, 'Table')})"],
                "data_source",
            )

        lines.append("")
        return lines


class ServiceExtractor(CategoryExtractor):
    categories = (Category.SERVICES,)
    kind = ObjectKind.SERVICES
    title = "Services"
    label = "Services"

    def render(self, name: str, record: Any) -> list[str]:
        lines = [f"## {read_field(record, 'Name', default=name)}"]

        external_name = read_field(record, "ExternalName")
        if not is_blank(external_name):
            lines.append(f"External Name: {external_name}")
        service_class = read_field(record, "Class")
        if not is_blank(service_class):
            lines.append(f"Class: {service_class}")

        operations = iter_nested(record, "ServiceOperations")
        if operations is not None:
            lines.append("Operations:")
            lines += isolated_lines(operations, lambda op: [f"- {read_field(op, 'Name')}"], "operation")

        lines.append("")
        return lines
