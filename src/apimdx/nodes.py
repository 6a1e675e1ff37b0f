"""DocNode tree — a closed tagged union of immutable documentation nodes.

Every variant carries a literal ``kind`` tag; renderers dispatch on it. The
union is a pydantic discriminated union, so trees produced upstream as plain
dicts or JSON can be validated with :func:`parse_doc_node`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, field_validator


class NodeKind(StrEnum):
    PLAIN_TEXT = "PlainText"
    SOFT_BREAK = "SoftBreak"
    SECTION = "Section"
    PARAGRAPH = "Paragraph"
    TABLE = "Table"
    TABLE_ROW = "TableRow"
    TABLE_CELL = "TableCell"
    EMPHASIS_SPAN = "EmphasisSpan"
    LINK_REFERENCE = "LinkReference"
    HEADING = "Heading"
    NOTE_BOX = "NoteBox"
    EXPANDABLE = "Expandable"
    CODE_SPAN = "CodeSpan"
    FENCED_CODE = "FencedCode"


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


NodeList = Annotated[list["DocNode"], BeforeValidator(_none_to_list)]


class CodeReference(BaseModel):
    """Symbolic reference to an API item, e.g. ``my-package!Widget.render``."""

    model_config = ConfigDict(frozen=True)

    package_name: str | None = None
    members: Annotated[list[str], BeforeValidator(_none_to_list)] = Field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> CodeReference:
        package, sep, path = text.strip().partition("!")
        if not sep:
            package, path = "", package
        members = [part for part in path.split(".") if part]
        return cls(package_name=package or None, members=members)

    def emit(self) -> str:
        """Canonical textual form of the reference."""
        path = ".".join(self.members)
        if self.package_name:
            return f"{self.package_name}!{path}"
        return path


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class PlainText(_Node):
    kind: Literal["PlainText"] = "PlainText"
    text: str = ""


class SoftBreak(_Node):
    kind: Literal["SoftBreak"] = "SoftBreak"


class Section(_Node):
    kind: Literal["Section"] = "Section"
    nodes: NodeList = Field(default_factory=list)


class Paragraph(_Node):
    kind: Literal["Paragraph"] = "Paragraph"
    nodes: NodeList = Field(default_factory=list)


class TableCell(_Node):
    kind: Literal["TableCell"] = "TableCell"
    nodes: NodeList = Field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> TableCell:
        return cls(nodes=[Paragraph(nodes=[PlainText(text=text)])])


class TableRow(_Node):
    kind: Literal["TableRow"] = "TableRow"
    cells: Annotated[list[TableCell], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )

    @classmethod
    def from_texts(cls, *texts: str) -> TableRow:
        return cls(cells=[TableCell.from_text(text) for text in texts])


class Table(_Node):
    """A header row plus body rows; rows may be ragged."""

    kind: Literal["Table"] = "Table"
    header: TableRow | None = None
    rows: Annotated[list[TableRow], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )

    @classmethod
    def from_texts(cls, header: list[str] | None, *rows: list[str]) -> Table:
        return cls(
            header=TableRow.from_texts(*header) if header is not None else None,
            rows=[TableRow.from_texts(*row) for row in rows],
        )


class EmphasisSpan(_Node):
    kind: Literal["EmphasisSpan"] = "EmphasisSpan"
    bold: bool = False
    italic: bool = False
    nodes: NodeList = Field(default_factory=list)


class LinkReference(_Node):
    """A link to a URL or to a symbolic code destination.

    ``code`` is inline display text supplied by the parser; ``link_text`` is
    the author's explicit text.
    """

    kind: Literal["LinkReference"] = "LinkReference"
    link_text: str | None = None
    code: str | None = None
    url_destination: str | None = None
    code_destination: CodeReference | None = None


class Heading(_Node):
    kind: Literal["Heading"] = "Heading"
    title: str
    level: int = Field(default=1, ge=1, le=5)


class NoteBox(_Node):
    kind: Literal["NoteBox"] = "NoteBox"
    nodes: NodeList = Field(default_factory=list)


class Expandable(_Node):
    kind: Literal["Expandable"] = "Expandable"
    title: str = "Details"
    nodes: NodeList = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Expandable title cannot be empty")
        return value


class CodeSpan(_Node):
    kind: Literal["CodeSpan"] = "CodeSpan"
    code: str = ""


class FencedCode(_Node):
    kind: Literal["FencedCode"] = "FencedCode"
    code: str = ""
    language: str = ""


DocNode = Annotated[
    Union[
        PlainText,
        SoftBreak,
        Section,
        Paragraph,
        Table,
        TableRow,
        TableCell,
        EmphasisSpan,
        LinkReference,
        Heading,
        NoteBox,
        Expandable,
        CodeSpan,
        FencedCode,
    ],
    Field(discriminator="kind"),
]

for _model in (Section, Paragraph, TableCell, TableRow, Table, EmphasisSpan, NoteBox, Expandable):
    _model.model_rebuild()

_DOC_NODE_ADAPTER: TypeAdapter[Any] = TypeAdapter(DocNode)


def parse_doc_node(data: Any) -> DocNode:
    """Validate a dict (or JSON string) tree into DocNode models."""
    if isinstance(data, (str, bytes)):
        return _DOC_NODE_ADAPTER.validate_json(data)
    return _DOC_NODE_ADAPTER.validate_python(data)
