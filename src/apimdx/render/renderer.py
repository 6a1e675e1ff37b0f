"""DocNode → MDX renderer.

Walks a DocNode tree depth-first, dispatching on each node's ``kind``
through a handler table. Tables are classified (see ``tables``) and
emitted as ``TypeTree`` blocks, ``ResponseField`` blocks, or an HTML
table. Cross-references resolve through the reference-resolution cache;
property types are analysed through the type-analysis cache.

Thread Safety:
    All per-document state lives in a RenderContext created by render(),
    so one renderer may serve several threads. The caches it shares are
    internally locked.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from typing import Any

from apimdx.analysis.properties import analyze_type_properties
from apimdx.analysis.type_analyzer import TypeAnalyzer
from apimdx.cache.manager import CacheManager
from apimdx.config.schema import RendererOptions
from apimdx.errors.exceptions import UnsupportedNodeError
from apimdx.nodes import (
    CodeReference,
    CodeSpan,
    EmphasisSpan,
    Expandable,
    FencedCode,
    Heading,
    LinkReference,
    NodeKind,
    NoteBox,
    Paragraph,
    PlainText,
    Section,
    Table,
    TableCell,
    TableRow,
)
from apimdx.render.context import ComponentFamily, RenderContext
from apimdx.render.escaping import (
    collapse_whitespace,
    escape_attribute,
    escape_link_destination,
    escape_markdown,
    json_for_jsx,
)
from apimdx.render.tables import (
    MethodRow,
    PropertyRow,
    TableKind,
    classify_table,
    column_count,
    extract_method_row,
    extract_property_row,
)
from apimdx.render.text import link_display_text
from apimdx.types import ApiItem, FilenameLookup, PropertyInfo, ReferenceResolver, ResolutionResult

logger = logging.getLogger(__name__)

# Characters after which an emphasis marker can open without ambiguity
_SAFE_PRECEDING_CHARACTERS = ("", "\n", " ", "[", ">")

# Zero-width MDX separator: "**one***two*" → "**one**{/* */}*two*"
_MARKDOWN_SEPARATOR = "{/* */}"

_SURROUNDING_WHITESPACE_RE = re.compile(r"^(\s*)(.*?)(\s*)$", re.DOTALL)

NodeHandler = Callable[[Any, RenderContext], None]


class DocumentRenderer:
    """Render DocNode trees to MDX text.

    Args:
        resolve_reference: Real resolution of a code reference against the
            API model; the reference-resolution cache sits in front of it.
        get_filename: Output filename for an API item, or None if unmapped.
        cache_manager: Shared caches. A private default manager is created
            when omitted.
        options: Import path, section titles, and placeholder type.
    """

    def __init__(
        self,
        resolve_reference: ReferenceResolver,
        get_filename: FilenameLookup,
        cache_manager: CacheManager | None = None,
        options: RendererOptions | None = None,
    ) -> None:
        self._cache_manager = cache_manager if cache_manager is not None else CacheManager()
        self._options = options if options is not None else RendererOptions()
        self._get_filename = get_filename
        self._resolve = self._cache_manager.reference_resolution.cached_resolver(resolve_reference)
        self._type_analyzer = TypeAnalyzer(self._cache_manager.type_analysis)

        self._handlers: dict[NodeKind, NodeHandler] = {
            NodeKind.PLAIN_TEXT: self._write_plain_text,
            NodeKind.SOFT_BREAK: self._write_soft_break,
            NodeKind.SECTION: self._write_section,
            NodeKind.PARAGRAPH: self._write_paragraph,
            NodeKind.TABLE: self._write_table,
            NodeKind.TABLE_ROW: self._write_table_row,
            NodeKind.TABLE_CELL: self._write_table_cell,
            NodeKind.EMPHASIS_SPAN: self._write_emphasis_span,
            NodeKind.LINK_REFERENCE: self._write_link_reference,
            NodeKind.HEADING: self._write_heading,
            NodeKind.NOTE_BOX: self._write_note_box,
            NodeKind.EXPANDABLE: self._write_expandable,
            NodeKind.CODE_SPAN: self._write_code_span,
            NodeKind.FENCED_CODE: self._write_fenced_code,
        }

    @property
    def cache_manager(self) -> CacheManager:
        return self._cache_manager

    @property
    def options(self) -> RendererOptions:
        return self._options

    @property
    def supported_kinds(self) -> frozenset[NodeKind]:
        return frozenset(self._handlers)

    def render(self, node: Any, context_item: ApiItem | None = None) -> str:
        """Render one document.

        Import lines collected during the walk lead the output, separated
        from the body by a blank line.
        """
        context = RenderContext(context_item=context_item)
        self.write_node(node, context)
        return self.finish(context)

    def finish(self, context: RenderContext) -> str:
        body = context.writer.get_text().rstrip("\n")
        if body:
            body += "\n"
        if context.imports:
            return "\n".join(context.imports) + "\n\n" + body
        return body

    def write_node(self, node: Any, context: RenderContext) -> None:
        kind = getattr(node, "kind", None)
        try:
            node_kind = NodeKind(kind)
        except ValueError:
            raise UnsupportedNodeError(str(kind) if kind is not None else type(node).__name__) from None

        handler = self._handlers.get(node_kind)
        if handler is None:
            raise UnsupportedNodeError(node_kind.value)
        handler(node, context)

    def write_nodes(self, nodes: Iterable[Any] | None, context: RenderContext) -> None:
        for node in nodes or ():
            self.write_node(node, context)

    # ── Inline content ──

    def _write_plain_text(self, node: PlainText, context: RenderContext) -> None:
        self._write_text(node.text, context)

    def _write_text(self, text: str, context: RenderContext) -> None:
        """Write text, wrapped in the active emphasis markers.

        Surrounding whitespace is written outside the markers so that
        ``**`` never sits next to a space.
        """
        writer = context.writer
        match = _SURROUNDING_WHITESPACE_RE.match(text)
        leading, middle, trailing = match.groups() if match else ("", text, "")

        writer.write(leading)
        if middle:
            bold = context.bold_requested
            italic = context.italic_requested
            if (bold or italic) and writer.peek_last_character() not in _SAFE_PRECEDING_CHARACTERS:
                writer.write(_MARKDOWN_SEPARATOR)
            if bold:
                writer.write("**")
            if italic:
                writer.write("_")
            writer.write(escape_markdown(middle))
            if italic:
                writer.write("_")
            if bold:
                writer.write("**")
        writer.write(trailing)

    def _write_soft_break(self, node: Any, context: RenderContext) -> None:
        last = context.writer.peek_last_character()
        if last and not last.isspace():
            context.writer.write(" ")

    def _write_emphasis_span(self, node: EmphasisSpan, context: RenderContext) -> None:
        with context.emphasis(node.bold, node.italic):
            self.write_nodes(node.nodes, context)

    def _write_code_span(self, node: CodeSpan, context: RenderContext) -> None:
        fence = "``" if "`" in node.code else "`"
        padding = " " if fence == "``" else ""
        context.writer.write(f"{fence}{padding}{node.code}{padding}{fence}")

    def _write_link_reference(self, node: LinkReference, context: RenderContext) -> None:
        if node.code_destination is not None:
            self._write_code_link(node, context)
        elif node.url_destination:
            text = node.link_text if node.link_text is not None else node.url_destination
            context.writer.write(
                f"[{escape_markdown(collapse_whitespace(text))}]"
                f"({escape_link_destination(node.url_destination)})"
            )
        elif node.link_text:
            self._write_text(node.link_text, context)

    def _write_code_link(self, node: LinkReference, context: RenderContext) -> None:
        destination = node.code_destination
        result = self._resolve(destination, context.context_item)
        item = result.resolved_item

        filename = self._get_filename(item) if item is not None else None
        if item is not None and filename:
            text = node.code or node.link_text or item.scoped_name()
            context.writer.write(
                f"[{escape_markdown(collapse_whitespace(text))}]({escape_link_destination(filename)})"
            )
            return

        if item is None:
            logger.debug(
                "Unable to resolve reference '%s': %s", destination.emit(), result.error_message
            )
        else:
            logger.debug("No output file for '%s'", item.scoped_name())
        self._write_text(link_display_text(node), context)

    # ── Blocks ──

    def _write_section(self, node: Section, context: RenderContext) -> None:
        self.write_nodes(node.nodes, context)

    def _write_paragraph(self, node: Paragraph, context: RenderContext) -> None:
        self.write_nodes(node.nodes, context)
        context.writer.ensure_new_line()
        context.writer.write_line()

    def _write_heading(self, node: Heading, context: RenderContext) -> None:
        writer = context.writer
        writer.ensure_skipped_line()
        writer.write_line(f"{'#' * node.level} {escape_markdown(node.title)}")
        writer.write_line()

    def _write_note_box(self, node: NoteBox, context: RenderContext) -> None:
        writer = context.writer
        writer.ensure_new_line()
        with context.indented("> "):
            self.write_nodes(node.nodes, context)
            writer.ensure_new_line()
        writer.write_line()

    def _write_expandable(self, node: Expandable, context: RenderContext) -> None:
        writer = context.writer
        writer.ensure_new_line()
        writer.write_line(f'<Expandable title="{escape_attribute(node.title)}" defaultOpen={{true}}>')
        with context.indented("  "):
            self.write_nodes(node.nodes, context)
            writer.ensure_new_line()
        writer.write_line("</Expandable>")

    def _write_fenced_code(self, node: FencedCode, context: RenderContext) -> None:
        writer = context.writer
        writer.ensure_new_line()
        writer.write_line(f"```{node.language}")
        writer.write(node.code)
        writer.ensure_new_line()
        writer.write_line("```")

    # ── Tables ──

    def _write_table_cell(self, node: TableCell, context: RenderContext) -> None:
        self.write_nodes(node.nodes, context)

    def _write_table_row(self, node: TableRow, context: RenderContext) -> None:
        self._write_generic_table(Table(rows=[node]), context)

    def _write_table(self, node: Table, context: RenderContext) -> None:
        kind = classify_table(node)
        logger.debug("Table with %d rows classified as %s", len(node.rows), kind.value)

        if kind == TableKind.PROPERTY:
            self._write_property_table(node, context)
        elif kind == TableKind.METHOD:
            self._write_method_table(node, context)
        else:
            self._write_generic_table(node, context)

    def _write_property_table(self, table: Table, context: RenderContext) -> None:
        def resolve(reference: CodeReference) -> ResolutionResult:
            return self._resolve(reference, context.context_item)

        rows = [
            row
            for row in (
                extract_property_row(r, self._options.placeholder_type, resolve) for r in table.rows
            )
            if row is not None
        ]
        if rows:
            context.use_family(ComponentFamily.TYPE_TREE, self._options.type_tree_import)

        self._write_section_heading(self._options.property_section_title, context)
        for row in rows:
            self._write_type_tree(row, context)

    def _write_type_tree(self, row: PropertyRow, context: RenderContext) -> None:
        writer = context.writer
        info = analyze_type_properties(row.type, self._type_analyzer, row.description)

        writer.write_line("<TypeTree")
        with context.indented("  "):
            writer.write_line(f'name="{escape_attribute(row.name)}"')
            writer.write_line(f'type="{escape_attribute(info.type)}"')
            if row.description:
                writer.write_line(f'description="{escape_attribute(row.description)}"')
            if row.required:
                writer.write_line("required={true}")
            if row.deprecated:
                writer.write_line("deprecated={true}")
            if info.nested_properties:
                nested = [_type_tree_property(p) for p in info.nested_properties]
                writer.write_line(f"properties={{{json_for_jsx(nested)}}}")
        writer.write_line("/>")

    def _write_method_table(self, table: Table, context: RenderContext) -> None:
        rows = [row for row in (extract_method_row(r) for r in table.rows) if row is not None]
        if rows:
            context.use_family(ComponentFamily.RESPONSE_FIELD)

        self._write_section_heading(self._options.method_section_title, context)
        for row in rows:
            self._write_response_field(row, context)

    def _write_response_field(self, row: MethodRow, context: RenderContext) -> None:
        writer = context.writer
        attributes = [f'name="{escape_attribute(row.signature)}"']
        if row.modifiers:
            attributes.append(f"pre={{{json_for_jsx(row.modifiers)}}}")
        if row.deprecated:
            attributes.append("deprecated={true}")

        writer.write_line(f"<ResponseField {' '.join(attributes)}>")
        if row.description:
            with context.indented("  "):
                writer.write_line(escape_markdown(row.description))
        writer.write_line("</ResponseField>")

    def _write_section_heading(self, title: str, context: RenderContext) -> None:
        writer = context.writer
        writer.ensure_skipped_line()
        writer.write_line(f"## {escape_markdown(title)}")
        writer.write_line()

    def _write_generic_table(self, table: Table, context: RenderContext) -> None:
        """HTML table sized to the widest row; short rows are padded."""
        writer = context.writer
        columns = column_count(table)
        writer.ensure_skipped_line()

        writer.write("<table>")
        if table.header is not None and columns > 0:
            writer.write("<thead><tr>")
            self._write_cells("th", table.header.cells, columns, context)
            writer.write("</tr></thead>")
        writer.write_line()
        writer.write("<tbody>")
        for row in table.rows:
            writer.write("<tr>")
            self._write_cells("td", row.cells, columns, context)
            writer.write("</tr>")
            writer.write_line()
        writer.write("</tbody></table>")
        writer.write_line()
        writer.write_line()

    def _write_cells(
        self, tag: str, cells: list[TableCell], columns: int, context: RenderContext
    ) -> None:
        writer = context.writer
        for index in range(columns):
            cell = cells[index] if index < len(cells) else None
            writer.write(f"<{tag}>")
            if cell is not None and cell.nodes:
                writer.ensure_skipped_line()
                self.write_nodes(cell.nodes, context)
                writer.ensure_skipped_line()
            writer.write(f"</{tag}>")


def _type_tree_property(info: PropertyInfo) -> dict[str, Any]:
    """JSON shape of a nested TypeTree property."""
    data: dict[str, Any] = {"name": info.name, "type": info.type, "required": info.required}
    if info.description:
        data["description"] = info.description
    if info.deprecated:
        data["deprecated"] = True
    if info.nested_properties:
        data["properties"] = [_type_tree_property(p) for p in info.nested_properties]
    return data
