"""
Extraction categories and selection parsing.

Declaration order of :class:`Category` is the extraction order: the report
always lists enums before EDTs before tables, however the user picked them.
``number`` is the 1-based position used by the interactive menu.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class Category(str, Enum):
    """The sixteen object categories metaspine can extract."""

    ENUMS = "enums"
    EDTS = "edts"
    TABLES = "tables"
    VIEWS = "views"
    DATA_ENTITIES = "data-entities"
    CLASSES = "classes"
    FORMS = "forms"
    MENU_ITEMS = "menu-items"
    QUERIES = "queries"
    SERVICES = "services"
    MAPS = "maps"
    SECURITY_ROLES = "security-roles"
    SECURITY_DUTIES = "security-duties"
    SECURITY_PRIVILEGES = "security-privileges"
    COMPOSITE_DATA_ENTITIES = "composite-data-entities"
    AGGREGATE_DATA_ENTITIES = "aggregate-data-entities"

    @property
    def number(self) -> int:
        return list(Category).index(self) + 1

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_number(cls, number: int) -> Category:
        members = list(cls)
        if not 1 <= number <= len(members):
            raise ValueError(f"No category numbered {number}")
        return members[number - 1]


_DISPLAY_NAMES = {
    Category.ENUMS: "Enums",
    Category.EDTS: "Extended Data Types (EDTs)",
    Category.TABLES: "Tables",
    Category.VIEWS: "Views",
    Category.DATA_ENTITIES: "Data Entities",
    Category.CLASSES: "Classes",
    Category.FORMS: "Forms",
    Category.MENU_ITEMS: "Menu Items",
    Category.QUERIES: "Queries",
    Category.SERVICES: "Services",
    Category.MAPS: "Maps",
    Category.SECURITY_ROLES: "Security Roles",
    Category.SECURITY_DUTIES: "Security Duties",
    Category.SECURITY_PRIVILEGES: "Security Privileges",
    Category.COMPOSITE_DATA_ENTITIES: "Composite Data Entities",
    Category.AGGREGATE_DATA_ENTITIES: "Aggregate Data Entities",
}

ALL_CATEGORIES: frozenset[Category] = frozenset(Category)

_ALL_TOKENS = {"0", "all", "*"}


@dataclass
class Selection:
    """Outcome of parsing a category selection string."""

    categories: set[Category] = field(default_factory=set)
    invalid: list[str] = field(default_factory=list)

    def ordered(self) -> list[Category]:
        return [c for c in Category if c in self.categories]


def _resolve_token(token: str) -> Category | None:
    if token.isdigit():
        try:
            return Category.from_number(int(token))
        except ValueError:
            return None
    normalized = token.lower().replace("_", "-")
    for category in Category:
        if normalized == category.value:
            return category
    return None


def parse_selection(text: str | None) -> Selection:
    """Parse a selection such as ``"1,3,5"``, ``"tables views"`` or ``"0"``.

    ``0`` (or ``all``) selects every category. Unknown tokens are collected in
    ``Selection.invalid`` and otherwise ignored. Blank input selects nothing.
    """
    selection = Selection()
    if not text or not text.strip():
        return selection

    for token in re.split(r"[,\s]+", text.strip()):
        if not token:
            continue
        if token.lower() in _ALL_TOKENS:
            selection.categories = set(Category)
            break
        category = _resolve_token(token)
        if category is None:
            selection.invalid.append(token)
        else:
            selection.categories.add(category)
    return selection


__all__ = ["Category", "ALL_CATEGORIES", "Selection", "parse_selection"]
