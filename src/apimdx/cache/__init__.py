"""Cache subsystem — bounded LRU caches for type analysis and reference resolution."""

from apimdx.cache.lru import LRUCache
from apimdx.cache.manager import (
    CacheManager,
    get_global_cache_manager,
    reset_global_cache_manager,
)
from apimdx.cache.resolution import ReferenceResolutionCache, reference_cache_key
from apimdx.cache.stats import CacheManagerStats, CacheStats
from apimdx.cache.type_analysis import TypeAnalysisCache, type_analysis_key

__all__ = [
    "CacheManager",
    "CacheManagerStats",
    "CacheStats",
    "LRUCache",
    "ReferenceResolutionCache",
    "TypeAnalysisCache",
    "get_global_cache_manager",
    "reference_cache_key",
    "reset_global_cache_manager",
    "type_analysis_key",
]
