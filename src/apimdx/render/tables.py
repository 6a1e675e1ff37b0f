"""Table classification and row extraction.

Classification is a keyword heuristic over the header row. The precedence
is fixed: property-like keywords win over method-like ones, and anything
else is a generic table. A header cell is searched through its own
PlainText children and through at most one level of Paragraph wrapping.
"""

from __future__ import annotations

import logging
import re
from enum import StrEnum

from pydantic import BaseModel, Field

from apimdx.nodes import NodeKind, Table, TableCell, TableRow
from apimdx.render.escaping import collapse_whitespace
from apimdx.render.text import ResolveFn, extract_text

logger = logging.getLogger(__name__)

PROPERTY_KEYWORDS: tuple[str, ...] = ("property", "parameter")
METHOD_KEYWORDS: tuple[str, ...] = ("constructor", "method")

OPTIONAL_MARKER = "(Optional)"

_DEPRECATION_RE = re.compile(r"^\s*@?deprecated\b\s*[:.\-]?\s*", re.IGNORECASE)
_MODIFIER_SPLIT_RE = re.compile(r"[\s,]+")


class TableKind(StrEnum):
    PROPERTY = "property"
    METHOD = "method"
    GENERIC = "generic"


class PropertyRow(BaseModel):
    name: str
    type: str
    description: str = ""
    required: bool = True
    deprecated: bool = False


class MethodRow(BaseModel):
    signature: str
    modifiers: list[str] = Field(default_factory=list)
    description: str = ""
    deprecated: bool = False


def classify_table(table: Table) -> TableKind:
    header = table.header
    if header is None or not header.cells:
        return TableKind.GENERIC

    texts = [text for cell in header.cells for text in header_cell_texts(cell)]
    if _matches(texts, PROPERTY_KEYWORDS):
        return TableKind.PROPERTY
    if _matches(texts, METHOD_KEYWORDS):
        return TableKind.METHOD
    return TableKind.GENERIC


def header_cell_texts(cell: TableCell | None) -> list[str]:
    """Normalized PlainText of a header cell, unwrapping one Paragraph level."""
    if cell is None:
        return []
    texts: list[str] = []
    for node in cell.nodes or ():
        if node.kind == NodeKind.PLAIN_TEXT:
            texts.append(node.text)
        elif node.kind == NodeKind.PARAGRAPH:
            texts.extend(child.text for child in node.nodes if child.kind == NodeKind.PLAIN_TEXT)
    return [collapse_whitespace(text).strip().lower() for text in texts]


def _matches(texts: list[str], keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for text in texts for keyword in keywords)


def column_count(table: Table) -> int:
    """Widest of the header and every body row."""
    widths = [len(row.cells) for row in table.rows]
    if table.header is not None:
        widths.append(len(table.header.cells))
    return max(widths, default=0)


def strip_deprecation(description: str) -> tuple[str, bool]:
    """Remove a leading ``Deprecated:`` / ``@deprecated`` marker.

    Returns the remaining description and whether a marker was found.
    """
    match = _DEPRECATION_RE.match(description)
    if match is None:
        return description, False
    return description[match.end():].strip(), True


def extract_property_row(
    row: TableRow,
    placeholder_type: str,
    resolve: ResolveFn | None = None,
) -> PropertyRow | None:
    """Read ``name | [modifiers] | type | description`` from a body row.

    The type is the cell just before the description. Rows whose name is
    blank yield None.
    """
    cells = row.cells
    if not cells:
        return None

    name = extract_text(cells[0], resolve).strip()
    required = True
    if name.endswith("?"):
        name = name[:-1].rstrip()
        required = False
    if not name:
        logger.debug("Skipping property row with a blank name")
        return None

    if len(cells) >= 4 and "optional" in extract_text(cells[1]).lower():
        required = False

    type_text = extract_text(cells[-2], resolve).strip() if len(cells) >= 3 else ""
    if not type_text:
        logger.debug("Property '%s' has no type, using '%s'", name, placeholder_type)
        type_text = placeholder_type

    description = extract_text(cells[-1]).strip() if len(cells) >= 2 else ""
    if OPTIONAL_MARKER in description:
        required = False
        description = description.replace(OPTIONAL_MARKER, "").strip()
    description, deprecated = strip_deprecation(description)

    return PropertyRow(
        name=name,
        type=type_text,
        description=description,
        required=required,
        deprecated=deprecated,
    )


def extract_method_row(row: TableRow) -> MethodRow | None:
    """Read ``signature | [modifiers] | description`` from a body row."""
    cells = row.cells
    if not cells:
        return None

    signature = collapse_whitespace(extract_text(cells[0])).strip()
    if not signature:
        logger.debug("Skipping method row with a blank signature")
        return None

    modifiers: list[str] = []
    if len(cells) >= 3:
        modifiers = [m for m in _MODIFIER_SPLIT_RE.split(extract_text(cells[1]).strip()) if m]

    description = extract_text(cells[-1]).strip() if len(cells) >= 2 else ""
    description, deprecated = strip_deprecation(description)

    return MethodRow(
        signature=signature,
        modifiers=modifiers,
        description=description,
        deprecated=deprecated,
    )
