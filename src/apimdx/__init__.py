"""apimdx — render API documentation trees to MDX."""

from apimdx.cache.manager import (
    CacheManager,
    get_global_cache_manager,
    reset_global_cache_manager,
)
from apimdx.config.schema import ApiMdxConfig, CacheManagerOptions, RendererOptions
from apimdx.core import ApiMdx, render_mdx
from apimdx.errors.exceptions import ApiMdxError, ConfigurationError, UnsupportedNodeError
from apimdx.nodes import CodeReference, DocNode, NodeKind, parse_doc_node
from apimdx.render.renderer import DocumentRenderer
from apimdx.types import ApiItem, ApiItemKind, ResolutionResult

__version__ = "0.1.0"

__all__ = [
    "ApiItem",
    "ApiItemKind",
    "ApiMdx",
    "ApiMdxConfig",
    "ApiMdxError",
    "CacheManager",
    "CacheManagerOptions",
    "CodeReference",
    "ConfigurationError",
    "DocNode",
    "DocumentRenderer",
    "NodeKind",
    "RendererOptions",
    "ResolutionResult",
    "UnsupportedNodeError",
    "get_global_cache_manager",
    "parse_doc_node",
    "render_mdx",
    "reset_global_cache_manager",
]
