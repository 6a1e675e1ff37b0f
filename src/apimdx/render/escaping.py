"""Escaping for MDX output — Markdown bodies, JSX attributes, and JSON props.

Every function here is total: any input string has a defined output.
"""

from __future__ import annotations

import json
import re
from typing import Any

_MARKDOWN_SPECIALS_RE = re.compile(r"[*#\[\]_|`~{}]")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_WHITESPACE_RE = re.compile(r"\s+")
_LINK_DESTINATION_UNSAFE_RE = re.compile(r"[\s()<>]")


def escape_markdown(text: str) -> str:
    """Escape text for a Markdown/MDX body.

    Order matters: backslashes first so later escapes are not doubled,
    then Markdown syntax and MDX expression braces, then ``---`` runs,
    then HTML entities.
    """
    escaped = text.replace("\\", "\\\\")
    escaped = _MARKDOWN_SPECIALS_RE.sub(lambda m: "\\" + m.group(0), escaped)
    escaped = escaped.replace("---", "\\-\\-\\-")
    return escaped.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attribute(text: str | None) -> str:
    """Escape text for a double-quoted JSX attribute value.

    Quotes and angle brackets become entities; line breaks collapse to a
    single space so the attribute stays on one line.
    """
    if not text:
        return ""
    escaped = (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )
    return _LINE_BREAK_RE.sub(" ", escaped)


def escape_link_destination(url: str) -> str:
    """Percent-encode characters that would end a Markdown link destination early.

    Whitespace, parentheses and angle brackets are encoded as UTF-8 bytes;
    everything else (including existing %XX escapes) is left alone.
    """
    return _LINK_DESTINATION_UNSAFE_RE.sub(
        lambda m: "".join(f"%{byte:02X}" for byte in m.group(0).encode("utf-8")), url
    )


def json_for_jsx(data: Any) -> str:
    """Serialize ``data`` to JSON that is safe inside a JSX ``{...}`` prop."""
    return (
        json.dumps(data, ensure_ascii=False)
        .replace("&", "\\u0026")
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text)
