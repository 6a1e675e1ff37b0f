"""Line-oriented output buffer with a stack of indentation prefixes."""

from __future__ import annotations


class IndentedWriter:
    """Accumulates output, prefixing each non-empty line with the active indent.

    Blank lines get the indent with trailing whitespace removed, so a ``"> "``
    prefix keeps a blockquote open across paragraphs.
    """

    def __init__(self) -> None:
        self._chunks: list[str] = []
        self._indents: list[str] = []
        self._last_char = ""
        self._line_has_content = False
        self._previous_line_blank = True

    @property
    def indent_depth(self) -> int:
        return len(self._indents)

    def increase_indent(self, prefix: str = "  ") -> None:
        self._indents.append(prefix)

    def decrease_indent(self) -> None:
        if self._indents:
            self._indents.pop()

    def write(self, text: str) -> None:
        lines = text.split("\n")
        for index, line in enumerate(lines):
            if line:
                self._write_part(line)
            if index < len(lines) - 1:
                self._write_newline()

    def write_line(self, text: str = "") -> None:
        self.write(text)
        self._write_newline()

    def ensure_new_line(self) -> None:
        if self._last_char not in ("", "\n"):
            self._write_newline()

    def ensure_skipped_line(self) -> None:
        """Guarantee a blank line before whatever comes next (except at the top)."""
        if not self._chunks:
            return
        self.ensure_new_line()
        if not self._previous_line_blank:
            self._write_newline()

    def peek_last_character(self) -> str:
        return self._last_char

    def get_text(self) -> str:
        return "".join(self._chunks)

    def __str__(self) -> str:
        return self.get_text()

    def _write_part(self, part: str) -> None:
        if not self._line_has_content and self._indents:
            self._append("".join(self._indents))
        self._append(part)
        self._line_has_content = True

    def _write_newline(self) -> None:
        if not self._line_has_content and self._indents:
            prefix = "".join(self._indents).rstrip()
            if prefix:
                self._append(prefix)
        self._append("\n")
        self._previous_line_blank = not self._line_has_content
        self._line_has_content = False

    def _append(self, text: str) -> None:
        self._chunks.append(text)
        self._last_char = text[-1]
