"""Structural analysis of type expressions, backed by TypeAnalysisCache."""

from __future__ import annotations

import logging
import re

from apimdx.cache.type_analysis import TypeAnalysisCache
from apimdx.types import PropertyAnalysis, TypeAnalysis, TypeKind

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES = frozenset(
    {"string", "number", "boolean", "bigint", "symbol", "void", "any", "never", "unknown", "null", "undefined", "object"}
)

_GENERIC_RE = re.compile(r"^([\w.$]+)<(.+)>$", re.DOTALL)
_MEMBER_RE = re.compile(r"^(?:readonly\s+)?([\w$]+)(\?)?\s*:\s*(.+)$", re.DOTALL)

_OPENERS = {"{": "}", "<": ">", "(": ")", "[": "]"}
_CLOSERS = {"}", ">", ")", "]"}


def split_top_level(text: str, separators: str) -> list[str]:
    """Split on any of ``separators`` outside brackets, braces and generics.

    The ``>`` of an arrow (``=>``) is not treated as a closing bracket.
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    prev = ""
    for char in text:
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS and not (char == ">" and prev == "="):
            depth = max(depth - 1, 0)
        elif char in separators and depth == 0:
            parts.append("".join(current).strip())
            current = []
            prev = char
            continue
        current.append(char)
        prev = char
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return [part for part in parts if part]


class TypeAnalyzer:
    """Classifies type expressions; every sub-expression goes through the cache."""

    def __init__(self, cache: TypeAnalysisCache | None = None) -> None:
        self._cache = cache if cache is not None else TypeAnalysisCache(max_size=500)

    @property
    def cache(self) -> TypeAnalysisCache:
        return self._cache

    def analyze(self, type_text: str) -> TypeAnalysis:
        cached = self._cache.get(type_text)
        if cached is not None:
            return cached

        result = self._analyze_uncached(type_text)
        self._cache.set(type_text, result)
        return result

    def _analyze_uncached(self, type_text: str) -> TypeAnalysis:
        text = type_text.strip()
        if not text:
            return TypeAnalysis(kind=TypeKind.UNKNOWN)

        if text.startswith("{") and text.endswith("}") and _is_single_group(text):
            return self._parse_object_literal(text)

        if text.startswith("(") and text.endswith(")") and _is_single_group(text):
            return self.analyze(text[1:-1])

        union = split_top_level(text, "|")
        if len(union) > 1:
            return TypeAnalysis(
                kind=TypeKind.UNION, union_types=[self.analyze(part) for part in union]
            )

        intersection = split_top_level(text, "&")
        if len(intersection) > 1:
            return TypeAnalysis(
                kind=TypeKind.INTERSECTION,
                intersection_types=[self.analyze(part) for part in intersection],
            )

        if text.endswith("[]"):
            return TypeAnalysis(kind=TypeKind.ARRAY, element_type=self.analyze(text[:-2]))

        generic = _GENERIC_RE.match(text)
        if generic and _is_single_group(text[len(generic.group(1)):]):
            return TypeAnalysis(
                kind=TypeKind.GENERIC,
                base_type=generic.group(1),
                type_parameters=split_top_level(generic.group(2), ","),
            )

        if text in PRIMITIVE_TYPES:
            return TypeAnalysis(kind=TypeKind.PRIMITIVE, name=text)

        return TypeAnalysis(kind=TypeKind.UNKNOWN, name=text)

    def _parse_object_literal(self, text: str) -> TypeAnalysis:
        properties: list[PropertyAnalysis] = []
        for member in split_top_level(text[1:-1], ";,"):
            match = _MEMBER_RE.match(member.strip())
            if match is None:
                logger.debug("Skipping unparseable object member: %s", member)
                continue
            name, optional, member_type = match.groups()
            properties.append(
                PropertyAnalysis(
                    name=name,
                    type=self.analyze(member_type),
                    optional=optional is not None,
                )
            )
        return TypeAnalysis(kind=TypeKind.OBJECT_LITERAL, properties=properties)


def _is_single_group(text: str) -> bool:
    """True when the first opening bracket closes at the very end of ``text``."""
    depth = 0
    prev = ""
    for index, char in enumerate(text):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS and not (char == ">" and prev == "="):
            depth -= 1
            if depth == 0:
                return index == len(text) - 1
        prev = char
    return False
