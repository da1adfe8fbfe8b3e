"""
Name-only listings: security objects and composite/aggregate entities.

These sections show ``- Name - Label`` per object. The two groups run once
each and decide per sub-category whether to emit a section.
"""

from __future__ import annotations

from typing import Any

from metaspine.catalog.access import read_field
from metaspine.catalog.categories import Category
from metaspine.core.logging import LogContext
from metaspine.extraction.base import CategoryExtractor, ExtractionContext, label_suffix
from metaspine.providers.protocol import ObjectKind


class NameOnlyExtractor(CategoryExtractor):
    """``- Name - Label`` list for one object kind."""

    pad_footer = True

    def __init__(
        self,
        context: ExtractionContext,
        category: Category | None = None,
        kind: ObjectKind | None = None,
    ):
        super().__init__(context)
        if category is not None:
            self.categories = (category,)
            self.title = self.label = category.display_name
        if kind is not None:
            self.kind = kind

    def render(self, name: str, record: Any) -> list[str]:
        return [f"- {read_field(record, 'Name', default=name)}{label_suffix(record)}"]


class NameOnlyGroup(CategoryExtractor):
    """Runs one :class:`NameOnlyExtractor` per enabled sub-category."""

    members: tuple[tuple[Category, ObjectKind], ...] = ()

    def run(self) -> None:
        for category, kind in self.members:
            if not self.is_enabled(category):
                continue
            with LogContext(category=category.value):
                NameOnlyExtractor(self.context, category, kind).run()

    def render(self, name: str, record: Any) -> list[str]:
        raise NotImplementedError("groups render through their members")


class SecurityObjectsExtractor(NameOnlyGroup):
    members = (
        (Category.SECURITY_ROLES, ObjectKind.SECURITY_ROLES),
        (Category.SECURITY_DUTIES, ObjectKind.SECURITY_DUTIES),
        (Category.SECURITY_PRIVILEGES, ObjectKind.SECURITY_PRIVILEGES),
    )
    categories = tuple(category for category, _ in members)


class CompositeAggregateExtractor(NameOnlyGroup):
    members = (
        (Category.COMPOSITE_DATA_ENTITIES, ObjectKind.COMPOSITE_DATA_ENTITY_VIEWS),
        (Category.AGGREGATE_DATA_ENTITIES, ObjectKind.AGGREGATE_DATA_ENTITIES),
    )
    categories = tuple(category for category, _ in members)
