"""
Tables, views, data entities and maps.

Tables are the densest section of the report and the one with the most
version drift, so each field group, index and relation renders on its own:
a sub-record that faults is dropped and the rest of the table is kept.
"""

from __future__ import annotations

from typing import Any

from metaspine.catalog.access import is_blank, iter_nested, matches_literal, read_field
from metaspine.catalog.categories import Category
from metaspine.catalog.shapes import (
    classify_data_entity_field,
    classify_map_field,
    classify_table_field,
    classify_view_field,
    field_edt_or_enum,
)
from metaspine.extraction.base import CategoryExtractor, isolated_lines, label_line, nested_list, table_row
from metaspine.providers.protocol import ObjectKind


def _data_fields(record: Any) -> list[str]:
    """``DataField`` of each member of a field group or index."""
    members = iter_nested(record, "Fields") or []
    names = [read_field(member, "DataField") for member in members]
    return [name for name in names if not is_blank(name)]


class TableExtractor(CategoryExtractor):
    categories = (Category.TABLES,)
    kind = ObjectKind.TABLES
    title = "Tables"
    intro = "Each table lists fields with EDT/Enum type, indexes, and relations."
    label = "Tables"

    def render(self, name: str, record: Any) -> list[str]:
        lines = [f"## {read_field(record, 'Name', default=name)}"]
        lines += label_line(record)

        props = self._properties(record)
        if props:
            lines.append(" | ".join(props))

        fields = iter_nested(record, "Fields")
        if fields:
            lines += ["| Field | Type | EDT/Enum | Mandatory |", "|-------|------|----------|-----------|"]
            lines += isolated_lines(fields, self._field_row, "field")

        field_groups = iter_nested(record, "FieldGroups")
        if field_groups:
            lines += ["", "Field Groups:"]
            lines += isolated_lines(field_groups, self._field_group_line, "field_group")

        indexes = iter_nested(record, "Indexes")
        if indexes:
            lines += ["", "Indexes:"]
            lines += isolated_lines(indexes, self._index_line, "index")

        relations = iter_nested(record, "Relations")
        if relations:
            lines += ["", "Relations:"]
            lines += isolated_lines(relations, self._relation_line, "relation")

        lines.append("")
        return lines

    def _properties(self, record: Any) -> list[str]:
        props = []
        group = read_field(record, "TableGroup")
        if not is_blank(group) and group not in self.settings.hidden_table_groups:
            props.append(f"Group: {group}")
        for attribute in ("PrimaryIndex", "ClusterIndex", "Extends"):
            value = read_field(record, attribute)
            if not is_blank(value):
                props.append(f"{attribute}: {value}")
        return props

    def _field_row(self, field: Any) -> list[str]:
        mandatory = read_field(field, "Mandatory")
        return [
            table_row(
                read_field(field, "Name"),
                classify_table_field(field),
                field_edt_or_enum(field),
                "Yes" if matches_literal(mandatory, self.settings.truthy_literals) else "",
            )
        ]

    def _field_group_line(self, group: Any) -> list[str]:
        members = _data_fields(group)
        if not members:
            return []
        return [f"- {read_field(group, 'Name')}: {', '.join(members)}"]

    def _index_line(self, index: Any) -> list[str]:
        allow_duplicates = read_field(index, "AllowDuplicates")
        unique = matches_literal(allow_duplicates, self.settings.allow_duplicates_false_literals)
        marker = " (Unique)" if unique else ""
        return [f"- {read_field(index, 'Name')}{marker}: {', '.join(_data_fields(index))}"]

    def _relation_line(self, relation: Any) -> list[str]:
        return [f"- {read_field(relation, 'Name')} -> {read_field(relation, 'RelatedTable')}"]


class ViewExtractor(CategoryExtractor):
    categories = (Category.VIEWS,)
    kind = ObjectKind.VIEWS
    title = "Views"
    label = "Views"

    classify_field = staticmethod(classify_view_field)

    def details(self, record: Any) -> list[str]:
        return label_line(record)

    def render(self, name: str, record: Any) -> list[str]:
        lines = [f"## {read_field(record, 'Name', default=name)}"]
        lines += self.details(record)

        fields = nested_list(record, "ViewMetadata.Fields", "Fields")
        if fields:
            lines += ["| Field | Type |", "|-------|------|"]
            lines += isolated_lines(
                fields,
                lambda field: [table_row(read_field(field, "Name"), self.classify_field(field))],
                "field",
            )
        lines.append("")
        return lines


class DataEntityExtractor(ViewExtractor):
    categories = (Category.DATA_ENTITIES,)
    kind = ObjectKind.DATA_ENTITY_VIEWS
    title = "Data Entities"
    label = "Data Entities"

    classify_field = staticmethod(classify_data_entity_field)

    def details(self, record: Any) -> list[str]:
        lines = label_line(record)
        for attribute, caption in (
            ("PublicEntityName", "Public Name"),
            ("PublicCollectionName", "Public Collection"),
            ("IsPublic", "Public"),
        ):
            value = read_field(record, attribute)
            if not is_blank(value):
                lines.append(f"{caption}: {value}")
        return lines


class MapExtractor(CategoryExtractor):
    categories = (Category.MAPS,)
    kind = ObjectKind.MAPS
    title = "Maps"
    label = "Maps"

    def render(self, name: str, record: Any) -> list[str]:
        lines = [f"## {read_field(record, 'Name', default=name)}"]

        fields = iter_nested(record, "Fields")
        if fields is not None:
            lines += ["| Field | Type |", "|-------|------|"]
            lines += isolated_lines(
                fields,
                lambda field: [table_row(read_field(field, "Name"), classify_map_field(field))],
                "field",
            )

        mappings = iter_nested(record, "Mappings")
        if mappings is not None:
            lines.append("Mappings:")
            lines += isolated_lines(mappings, lambda m: [f"- {read_field(m, 'MappingTable')}"], "mapping")

        lines.append("")
        return lines
