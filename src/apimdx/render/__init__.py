"""MDX rendering — DocNode trees to Markdown plus JSX components."""

from apimdx.render.context import ComponentFamily, RenderContext
from apimdx.render.escaping import (
    escape_attribute,
    escape_link_destination,
    escape_markdown,
    json_for_jsx,
)
from apimdx.render.renderer import DocumentRenderer
from apimdx.render.tables import TableKind, classify_table
from apimdx.render.text import extract_text
from apimdx.render.writer import IndentedWriter

__all__ = [
    "ComponentFamily",
    "DocumentRenderer",
    "IndentedWriter",
    "RenderContext",
    "TableKind",
    "classify_table",
    "escape_attribute",
    "escape_link_destination",
    "escape_markdown",
    "extract_text",
    "json_for_jsx",
]
