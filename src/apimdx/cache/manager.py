"""Cache manager — owns the type-analysis and reference-resolution caches."""

from __future__ import annotations

import logging
import threading
from typing import Any

from rich.console import Console
from rich.table import Table

from apimdx.cache.resolution import ReferenceResolutionCache
from apimdx.cache.stats import CacheManagerStats, CacheStats
from apimdx.cache.type_analysis import TypeAnalysisCache
from apimdx.config.defaults import CACHE_PRESETS
from apimdx.config.schema import (
    CacheManagerOptions,
    CachePreset,
    ReferenceResolutionCacheOptions,
    TypeAnalysisCacheOptions,
)
from apimdx.errors.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CacheManager:
    """Coordinates both caches for one generation run (or several)."""

    def __init__(self, options: CacheManagerOptions | None = None, **overrides: Any) -> None:
        if options is None:
            options = CacheManagerOptions(**overrides)
        elif overrides:
            options = CacheManagerOptions.model_validate(
                _merge_options(options.model_dump(), overrides)
            )
        self._options = options

        self._type_analysis = TypeAnalysisCache(
            max_size=options.type_analysis.max_size,
            enabled=options.enabled and options.type_analysis.enabled,
        )
        self._reference_resolution = ReferenceResolutionCache(
            max_size=options.reference_resolution.max_size,
            enabled=options.enabled and options.reference_resolution.enabled,
        )

    @property
    def options(self) -> CacheManagerOptions:
        return self._options

    @property
    def enabled(self) -> bool:
        return self._options.enabled

    @property
    def type_analysis(self) -> TypeAnalysisCache:
        return self._type_analysis

    @property
    def reference_resolution(self) -> ReferenceResolutionCache:
        return self._reference_resolution

    def clear_all(self) -> None:
        """Clear both caches and their counters."""
        self._type_analysis.clear()
        self._reference_resolution.clear()

    def get_stats(self) -> CacheManagerStats:
        return CacheManagerStats(
            enabled=self._options.enabled,
            type_analysis=self._type_analysis.stats(),
            reference_resolution=self._reference_resolution.stats(),
        )

    def print_stats(self, console: Console | None = None) -> None:
        """Print a statistics table; a no-op unless stats are enabled."""
        if not self._options.enable_stats:
            return

        stats = self.get_stats()
        logger.info("Cache hit rate: %.1f%%", stats.total_hit_rate * 100)

        table = Table(title="Cache Statistics", show_header=True)
        table.add_column("Cache", style="cyan")
        table.add_column("Entries")
        table.add_column("Hits")
        table.add_column("Misses")
        table.add_column("Hit rate")
        for name, cache_stats in (
            ("Type analysis", stats.type_analysis),
            ("Reference resolution", stats.reference_resolution),
        ):
            table.add_row(*_stats_row(name, cache_stats))
        table.add_row(
            "Overall",
            "",
            str(stats.total_hits),
            str(stats.total_requests - stats.total_hits),
            f"{stats.total_hit_rate:.1%}",
        )

        (console or Console(stderr=True)).print(table)

    # ── Presets ──

    @classmethod
    def from_preset(cls, preset: CachePreset | str, **overrides: Any) -> CacheManager:
        """Build a manager from a named preset.

        Presets only change capacities and whether stats are reported.
        """
        preset = CachePreset(preset)
        type_size, ref_size, enable_stats = CACHE_PRESETS[preset.value]
        options = CacheManagerOptions(
            enabled=True,
            enable_stats=enable_stats,
            type_analysis=TypeAnalysisCacheOptions(max_size=type_size),
            reference_resolution=ReferenceResolutionCacheOptions(max_size=ref_size),
        )
        return cls(options, **overrides)

    @classmethod
    def create_default(cls, **overrides: Any) -> CacheManager:
        return cls.from_preset(CachePreset.DEFAULT, **overrides)

    @classmethod
    def create_development(cls, **overrides: Any) -> CacheManager:
        return cls.from_preset(CachePreset.DEVELOPMENT, **overrides)

    @classmethod
    def create_production(cls, **overrides: Any) -> CacheManager:
        return cls.from_preset(CachePreset.PRODUCTION, **overrides)


def _merge_options(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Overlay ``overrides`` on dumped options; nested dicts merge key by key."""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def _stats_row(name: str, stats: CacheStats) -> list[str]:
    return [
        name,
        f"{stats.size}/{stats.capacity}",
        str(stats.hits),
        str(stats.misses),
        f"{stats.hit_rate:.1%}" if stats.enabled else "disabled",
    ]


# ── Process-wide instance ──
#
# Shared mutable state: every caller of get_global_cache_manager() sees the
# same caches. Prefer constructing a CacheManager and passing it explicitly;
# tests must not rely on this instance.

_global_manager: CacheManager | None = None
_global_lock = threading.Lock()


def get_global_cache_manager(
    options: CacheManagerOptions | dict[str, Any] | None = None,
) -> CacheManager:
    """Return the shared CacheManager, creating it on first call.

    Options are only honoured on the first call. Passing options that differ
    from the live instance's raises ConfigurationError; call
    reset_global_cache_manager() first to reconfigure.
    """
    global _global_manager

    if isinstance(options, dict):
        options = CacheManagerOptions(**options) if options else None

    with _global_lock:
        if _global_manager is None:
            _global_manager = CacheManager(options)
            logger.debug("Initialized global cache manager: %s", _global_manager.options)
        elif options is not None and options != _global_manager.options:
            conflicts = _conflicting_fields(_global_manager.options, options)
            raise ConfigurationError(
                "Global CacheManager already initialized with different options "
                f"({', '.join(conflicts)}). Call reset_global_cache_manager() first "
                "to reconfigure, or construct a separate CacheManager.",
                error_type="conflicting_options",
                option=conflicts[0] if conflicts else None,
            )
        return _global_manager


def reset_global_cache_manager() -> None:
    """Discard the shared CacheManager."""
    global _global_manager
    with _global_lock:
        _global_manager = None


def _conflicting_fields(current: CacheManagerOptions, requested: CacheManagerOptions) -> list[str]:
    """Dotted names of the options that differ, e.g. ``type_analysis.max_size``."""
    conflicts: list[str] = []
    current_dump = current.model_dump()
    requested_dump = requested.model_dump()
    for key, value in requested_dump.items():
        existing = current_dump.get(key)
        if isinstance(value, dict) and isinstance(existing, dict):
            conflicts.extend(
                f"{key}.{sub}" for sub, sub_value in value.items() if existing.get(sub) != sub_value
            )
        elif existing != value:
            conflicts.append(key)
    return conflicts
