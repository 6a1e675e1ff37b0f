"""YAML config loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from apimdx.config.defaults import CACHE_PRESETS, get_defaults
from apimdx.config.schema import (
    ApiMdxConfig,
    CacheManagerOptions,
    CachePreset,
    ReferenceResolutionCacheOptions,
    RendererOptions,
    TypeAnalysisCacheOptions,
)

if TYPE_CHECKING:
    from apimdx.cache.manager import CacheManager


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load any YAML file safely."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Expected YAML mapping, got {type(raw).__name__} in {path}")

    return raw


def load_config_yaml(path: str | Path) -> ApiMdxConfig:
    """Load an apimdx config file and return a validated ApiMdxConfig.

    The flat keys may sit at the top level or under an ``apimdx`` key.
    """
    raw = load_yaml(path)
    if "apimdx" in raw:
        section = raw["apimdx"]
        if not isinstance(section, dict):
            raise ValueError(f"Invalid config YAML: 'apimdx' must be a mapping in {path}")
        raw = section

    merged = get_defaults()
    merged.update(raw)
    return config_from_mapping(merged)


def config_from_mapping(flat: dict[str, Any]) -> ApiMdxConfig:
    """Build an ApiMdxConfig from the flat key space used by the hierarchy.

    A ``cache_preset`` takes the cache sizes and the stats flag from the
    preset table; ``cache_enabled`` still applies.
    """
    values = get_defaults()
    values.update({k: v for k, v in flat.items() if v is not None})

    preset = CachePreset(values["cache_preset"]) if values.get("cache_preset") else None
    if preset is not None:
        type_size, ref_size, stats = CACHE_PRESETS[preset.value]
    else:
        type_size = values["type_analysis_max_size"]
        ref_size = values["reference_resolution_max_size"]
        stats = values["enable_stats"]

    cache = CacheManagerOptions(
        enabled=values["cache_enabled"],
        type_analysis=TypeAnalysisCacheOptions(max_size=type_size),
        reference_resolution=ReferenceResolutionCacheOptions(max_size=ref_size),
        enable_stats=stats,
    )
    renderer = RendererOptions(
        type_tree_import=values["type_tree_import"],
        property_section_title=values["property_section_title"],
        method_section_title=values["method_section_title"],
        placeholder_type=values["placeholder_type"],
    )
    return ApiMdxConfig(
        cache=cache,
        cache_preset=preset,
        renderer=renderer,
        log_level=str(values["log_level"]).upper(),
    )


def build_cache_manager(config: ApiMdxConfig) -> CacheManager:
    """Construct a caller-owned CacheManager from a resolved config."""
    from apimdx.cache.manager import CacheManager

    return CacheManager(config.cache)
