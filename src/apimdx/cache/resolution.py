"""LRU cache for symbolic cross-reference resolution."""

from __future__ import annotations

import logging

from apimdx.cache.lru import LRUCache
from apimdx.cache.stats import CacheStats
from apimdx.config.defaults import DEFAULT_REFERENCE_RESOLUTION_MAX_SIZE
from apimdx.nodes import CodeReference
from apimdx.types import ApiItem, ReferenceResolver, ResolutionResult

logger = logging.getLogger(__name__)


def reference_cache_key(reference: CodeReference | str, context_item: ApiItem | None) -> str:
    """Composite key of (raw reference text, context identity).

    Two references with the same text resolve identically from the same
    context, so the reference is not serialized structurally.
    """
    raw = reference if isinstance(reference, str) else reference.emit()
    context = context_item.canonical_reference if context_item is not None else ""
    return f"{raw}||ctx:{context}"


class ReferenceResolutionCache:
    """Caches ResolutionResults keyed by (reference, context item)."""

    def __init__(
        self,
        max_size: int = DEFAULT_REFERENCE_RESOLUTION_MAX_SIZE,
        enabled: bool = True,
    ) -> None:
        self._cache: LRUCache[ResolutionResult] = LRUCache(max_size=max_size, enabled=enabled)

    @property
    def enabled(self) -> bool:
        return self._cache.enabled

    def get(
        self, reference: CodeReference | str, context_item: ApiItem | None = None
    ) -> ResolutionResult | None:
        return self._cache.get(reference_cache_key(reference, context_item))

    def set(
        self,
        reference: CodeReference | str,
        context_item: ApiItem | None,
        result: ResolutionResult,
    ) -> None:
        self._cache.set(reference_cache_key(reference, context_item), result)

    def clear(self) -> None:
        self._cache.clear()

    def stats(self) -> CacheStats:
        return self._cache.stats()

    def __len__(self) -> int:
        return len(self._cache)

    def cached_resolver(self, resolve_fn: ReferenceResolver) -> ReferenceResolver:
        """Put this cache in front of ``resolve_fn``.

        Each call performs exactly one lookup; a miss runs the real
        resolution and stores its result, failed resolutions included.
        """

        def resolve(reference: CodeReference, context_item: ApiItem | None) -> ResolutionResult:
            cached = self.get(reference, context_item)
            if cached is not None:
                return cached
            result = resolve_fn(reference, context_item)
            if result.resolved_item is None:
                logger.debug(
                    "Reference '%s' did not resolve: %s", reference.emit(), result.error_message
                )
            self.set(reference, context_item, result)
            return result

        return resolve
