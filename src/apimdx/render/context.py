"""Per-render mutable state."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import StrEnum

from apimdx.render.writer import IndentedWriter
from apimdx.types import ApiItem


class ComponentFamily(StrEnum):
    """JSX components that share one setup import per document."""

    TYPE_TREE = "TypeTree"
    RESPONSE_FIELD = "ResponseField"


@dataclass(frozen=True, slots=True)
class Emphasis:
    bold: bool = False
    italic: bool = False


@dataclass(slots=True)
class RenderContext:
    """State threaded through one render() call.

    Created fresh per document; two documents never share a context.
    """

    context_item: ApiItem | None = None
    writer: IndentedWriter = field(default_factory=IndentedWriter)
    emphasis_stack: list[Emphasis] = field(default_factory=list)
    emitted_families: set[ComponentFamily] = field(default_factory=set)
    imports: list[str] = field(default_factory=list)

    @property
    def indent_depth(self) -> int:
        return self.writer.indent_depth

    @property
    def active_emphasis(self) -> Emphasis:
        return self.emphasis_stack[-1] if self.emphasis_stack else Emphasis()

    @property
    def bold_requested(self) -> bool:
        return self.active_emphasis.bold

    @property
    def italic_requested(self) -> bool:
        return self.active_emphasis.italic

    @contextmanager
    def emphasis(self, bold: bool, italic: bool) -> Iterator[None]:
        """Activate emphasis for a subtree; nested spans accumulate."""
        outer = self.active_emphasis
        self.emphasis_stack.append(Emphasis(bold=outer.bold or bold, italic=outer.italic or italic))
        try:
            yield
        finally:
            self.emphasis_stack.pop()

    @contextmanager
    def indented(self, prefix: str = "  ") -> Iterator[None]:
        self.writer.increase_indent(prefix)
        try:
            yield
        finally:
            self.writer.decrease_indent()

    def use_family(self, family: ComponentFamily, import_line: str | None = None) -> bool:
        """Record the first use of a component family.

        Returns True on first use; the import line, if any, is kept once.
        """
        if family in self.emitted_families:
            return False
        self.emitted_families.add(family)
        if import_line:
            self.imports.append(import_line)
        return True
