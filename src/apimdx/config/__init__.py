"""Configuration — defaults, YAML/env hierarchy, and validated models."""

from apimdx.config.hierarchy import load_config_hierarchy
from apimdx.config.loader import (
    build_cache_manager,
    config_from_mapping,
    load_config_yaml,
    load_yaml,
)
from apimdx.config.schema import (
    ApiMdxConfig,
    CacheManagerOptions,
    CachePreset,
    ReferenceResolutionCacheOptions,
    RendererOptions,
    TypeAnalysisCacheOptions,
)

__all__ = [
    "ApiMdxConfig",
    "CacheManagerOptions",
    "CachePreset",
    "ReferenceResolutionCacheOptions",
    "RendererOptions",
    "TypeAnalysisCacheOptions",
    "build_cache_manager",
    "config_from_mapping",
    "load_config_hierarchy",
    "load_config_yaml",
    "load_yaml",
]
