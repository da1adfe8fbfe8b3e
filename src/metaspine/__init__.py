"""
metaspine - D365FO AOT metadata extraction.

Walks every model of a Finance & Operations metadata catalog, collects the
selected object categories (tables, enums, classes, forms, ...), and writes
one Markdown reference document.
"""

__version__ = "0.1.0"
