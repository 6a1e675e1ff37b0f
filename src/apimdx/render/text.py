"""Flatten DocNode subtrees to plain text."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from apimdx.nodes import CodeReference, LinkReference, NodeKind
from apimdx.types import ResolutionResult

ResolveFn = Callable[[CodeReference], ResolutionResult]

_CONTAINER_KINDS = frozenset(
    {
        NodeKind.SECTION,
        NodeKind.PARAGRAPH,
        NodeKind.TABLE_CELL,
        NodeKind.EMPHASIS_SPAN,
        NodeKind.NOTE_BOX,
        NodeKind.EXPANDABLE,
    }
)


def extract_text(node: Any, resolve: ResolveFn | None = None) -> str:
    """Concatenate the text of ``node`` in document order.

    Only SoftBreak nodes introduce separation, one space each, never
    doubled. With ``resolve``, code links without display text take the
    resolved item's scoped name.
    """
    parts: list[str] = []
    _collect(node, parts, resolve)
    return "".join(parts)


def link_display_text(link: LinkReference, resolve: ResolveFn | None = None) -> str:
    """Display text for a link: inline code, explicit text, then the target itself."""
    if link.code:
        return link.code
    if link.link_text:
        return link.link_text
    if link.code_destination is not None:
        if resolve is not None:
            result = resolve(link.code_destination)
            if result.resolved_item is not None:
                return result.resolved_item.scoped_name()
        return link.code_destination.emit()
    return link.url_destination or ""


def _collect(node: Any, parts: list[str], resolve: ResolveFn | None) -> None:
    kind = getattr(node, "kind", None)
    if kind == NodeKind.PLAIN_TEXT:
        if node.text:
            parts.append(node.text)
    elif kind in _CONTAINER_KINDS:
        for child in node.nodes or ():
            _collect(child, parts, resolve)
    elif kind == NodeKind.SOFT_BREAK:
        if parts and not parts[-1][-1:].isspace():
            parts.append(" ")
    elif kind == NodeKind.LINK_REFERENCE:
        text = link_display_text(node, resolve)
        if text:
            parts.append(text)
    elif kind in (NodeKind.CODE_SPAN, NodeKind.FENCED_CODE):
        if node.code:
            parts.append(node.code)
    elif kind == NodeKind.HEADING:
        parts.append(node.title)
