"""LRU cache for type-expression analysis results."""

from __future__ import annotations

from collections.abc import Callable

from apimdx.cache.lru import LRUCache
from apimdx.cache.stats import CacheStats
from apimdx.config.defaults import DEFAULT_TYPE_ANALYSIS_MAX_SIZE
from apimdx.types import TypeAnalysis


def type_analysis_key(type_text: str) -> str:
    """Cache key for a type expression: the trimmed literal text."""
    return type_text.strip()


class TypeAnalysisCache:
    """Caches TypeAnalysis results keyed by the exact, trimmed type text."""

    def __init__(
        self,
        max_size: int = DEFAULT_TYPE_ANALYSIS_MAX_SIZE,
        enabled: bool = True,
    ) -> None:
        self._cache: LRUCache[TypeAnalysis] = LRUCache(max_size=max_size, enabled=enabled)

    @property
    def enabled(self) -> bool:
        return self._cache.enabled

    def get(self, type_text: str) -> TypeAnalysis | None:
        return self._cache.get(type_analysis_key(type_text))

    def set(self, type_text: str, analysis: TypeAnalysis) -> None:
        self._cache.set(type_analysis_key(type_text), analysis)

    def clear(self) -> None:
        self._cache.clear()

    def stats(self) -> CacheStats:
        return self._cache.stats()

    def __len__(self) -> int:
        return len(self._cache)

    @classmethod
    def cached(
        cls,
        fn: Callable[[str], TypeAnalysis],
        max_size: int = DEFAULT_TYPE_ANALYSIS_MAX_SIZE,
        enabled: bool = True,
    ) -> Callable[[str], TypeAnalysis]:
        """Wrap ``fn`` with a private cache of its own."""
        cache = cls(max_size=max_size, enabled=enabled)

        def wrapper(type_text: str) -> TypeAnalysis:
            cached = cache.get(type_text)
            if cached is not None:
                return cached
            result = fn(type_text)
            cache.set(type_text, result)
            return result

        wrapper.cache = cache  # type: ignore[attr-defined]
        return wrapper
