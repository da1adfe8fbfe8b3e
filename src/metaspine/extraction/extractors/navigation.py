"""Forms and menu items."""

from __future__ import annotations

from typing import Any

from metaspine.catalog.access import is_blank, read_field
from metaspine.catalog.categories import Category
from metaspine.extraction.base import CategoryExtractor
from metaspine.extraction.extractors.listing import NameOnlyExtractor
from metaspine.providers.protocol import ObjectKind

MENU_ITEM_SECTIONS = (
    (ObjectKind.MENU_ITEM_DISPLAYS, "Display"),
    (ObjectKind.MENU_ITEM_ACTIONS, "Action"),
    (ObjectKind.MENU_ITEM_OUTPUTS, "Output"),
)


class FormExtractor(NameOnlyExtractor):
    """Form names with an optional label (richer form metadata varies by release)."""

    categories = (Category.FORMS,)
    kind = ObjectKind.FORMS
    title = "Forms"
    intro = "Use these exact names with `new Args()` name or `MenuFunction`."
    label = "Forms"


class MenuItemExtractor(CategoryExtractor):
    """Display, action and output menu items, each with its target object."""

    categories = (Category.MENU_ITEMS,)
    title = "Menu Items"

    def run(self) -> None:
        self.write_header()
        for position, (kind, caption) in enumerate(MENU_ITEM_SECTIONS):
            names = self.list_names(kind)
            heading = [f"## {caption} Menu Items"]
            self.sink.write_lines(heading if position == 0 else ["", *heading])
            outcome = self.extract_each(kind, names, self.render)
            self.context.tally.record(f"Menu Items ({caption})", outcome.succeeded, outcome.failed)
        self.write_footer()

    def render(self, name: str, record: Any) -> list[str]:
        target = read_field(record, "Object")
        suffix = "" if is_blank(target) else f" -> {target}"
        return [f"- {read_field(record, 'Name', default=name)}{suffix}"]
