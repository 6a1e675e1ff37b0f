"""Pydantic models for cache and renderer configuration."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from apimdx.config.defaults import (
    DEFAULT_CACHE_ENABLED,
    DEFAULT_ENABLE_STATS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_METHOD_SECTION_TITLE,
    DEFAULT_PLACEHOLDER_TYPE,
    DEFAULT_PROPERTY_SECTION_TITLE,
    DEFAULT_REFERENCE_RESOLUTION_MAX_SIZE,
    DEFAULT_TYPE_ANALYSIS_MAX_SIZE,
    DEFAULT_TYPE_TREE_IMPORT,
)


class CachePreset(StrEnum):
    DEFAULT = "default"
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class TypeAnalysisCacheOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_size: int = Field(default=DEFAULT_TYPE_ANALYSIS_MAX_SIZE, ge=1)
    enabled: bool = True


class ReferenceResolutionCacheOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_size: int = Field(default=DEFAULT_REFERENCE_RESOLUTION_MAX_SIZE, ge=1)
    enabled: bool = True


class CacheManagerOptions(BaseModel):
    """Options for a CacheManager.

    ``enabled=False`` switches both caches off regardless of their own flags.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = DEFAULT_CACHE_ENABLED
    type_analysis: TypeAnalysisCacheOptions = Field(default_factory=TypeAnalysisCacheOptions)
    reference_resolution: ReferenceResolutionCacheOptions = Field(
        default_factory=ReferenceResolutionCacheOptions
    )
    enable_stats: bool = DEFAULT_ENABLE_STATS


class RendererOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    type_tree_import: str = DEFAULT_TYPE_TREE_IMPORT
    property_section_title: str = DEFAULT_PROPERTY_SECTION_TITLE
    method_section_title: str = DEFAULT_METHOD_SECTION_TITLE
    placeholder_type: str = DEFAULT_PLACEHOLDER_TYPE


class ApiMdxConfig(BaseModel):
    cache: CacheManagerOptions = Field(default_factory=CacheManagerOptions)
    cache_preset: CachePreset | None = None
    renderer: RendererOptions = Field(default_factory=RendererOptions)
    log_level: str = DEFAULT_LOG_LEVEL
