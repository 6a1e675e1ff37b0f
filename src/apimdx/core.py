"""Top-level entry points: render_mdx(), ApiMdx."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from apimdx.cache.manager import CacheManager, get_global_cache_manager
from apimdx.cache.stats import CacheManagerStats
from apimdx.config.hierarchy import load_config_hierarchy
from apimdx.config.loader import build_cache_manager, config_from_mapping
from apimdx.config.schema import ApiMdxConfig, RendererOptions
from apimdx.nodes import DocNode, parse_doc_node
from apimdx.render.renderer import DocumentRenderer
from apimdx.types import ApiItem, FilenameLookup, ReferenceResolver
from apimdx.utils.logging import level_from_name

logger = logging.getLogger(__name__)


class ApiMdx:
    """Renderer with its configuration and caches resolved up front.

    Configuration comes from ``config`` when given, otherwise from the
    config hierarchy (defaults, YAML files, APIMDX_* environment) with
    ``overrides`` applied last.
    """

    def __init__(
        self,
        resolve_reference: ReferenceResolver,
        get_filename: FilenameLookup,
        config: ApiMdxConfig | None = None,
        cache_manager: CacheManager | None = None,
        **overrides: Any,
    ) -> None:
        if config is None:
            config = config_from_mapping(load_config_hierarchy(**overrides))
        self._config = config
        logging.getLogger("apimdx").setLevel(level_from_name(config.log_level))

        self._cache_manager = cache_manager if cache_manager is not None else build_cache_manager(config)
        self._renderer = DocumentRenderer(
            resolve_reference,
            get_filename,
            cache_manager=self._cache_manager,
            options=config.renderer,
        )

    @property
    def config(self) -> ApiMdxConfig:
        return self._config

    @property
    def cache_manager(self) -> CacheManager:
        return self._cache_manager

    @property
    def renderer(self) -> DocumentRenderer:
        return self._renderer

    def render(self, node: DocNode | dict[str, Any], context_item: ApiItem | None = None) -> str:
        """Render one DocNode tree (or its dict form) to MDX."""
        return self._renderer.render(_as_node(node), context_item)

    def render_many(
        self, documents: Iterable[tuple[DocNode | dict[str, Any], ApiItem | None]]
    ) -> list[str]:
        """Render several documents sharing this instance's caches."""
        outputs = [self.render(node, item) for node, item in documents]
        logger.info("Rendered %d documents", len(outputs))
        return outputs

    def finish(self) -> CacheManagerStats:
        """Report cache statistics (printed when enabled) and return them."""
        self._cache_manager.print_stats()
        return self._cache_manager.get_stats()


def _as_node(node: DocNode | dict[str, Any]) -> DocNode:
    if isinstance(node, (dict, str, bytes)):
        return parse_doc_node(node)
    return node


# ── Module-level convenience functions ──


def render_mdx(
    node: DocNode | dict[str, Any],
    *,
    resolve_reference: ReferenceResolver,
    get_filename: FilenameLookup,
    context_item: ApiItem | None = None,
    cache_manager: CacheManager | None = None,
    options: RendererOptions | None = None,
) -> str:
    """Render one document.

    Without an explicit ``cache_manager`` the process-wide manager is used,
    so caches persist across calls.
    """
    manager = cache_manager if cache_manager is not None else get_global_cache_manager()
    renderer = DocumentRenderer(
        resolve_reference,
        get_filename,
        cache_manager=manager,
        options=options,
    )
    return renderer.render(_as_node(node), context_item)
