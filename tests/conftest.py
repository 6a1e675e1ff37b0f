import logging

import pytest

from apimdx.cache.manager import reset_global_cache_manager
from apimdx.nodes import CodeReference
from apimdx.types import ApiItem, ApiItemKind, ResolutionResult


@pytest.fixture(autouse=True)
def _isolated_global_cache_manager():
    """Every test starts and ends without a process-wide CacheManager."""
    reset_global_cache_manager()
    yield
    reset_global_cache_manager()


@pytest.fixture(autouse=True)
def _restore_package_log_level():
    """ApiMdx applies ``log_level`` to the ``apimdx`` logger; undo it after each test."""
    package_logger = logging.getLogger("apimdx")
    level = package_logger.level
    yield
    package_logger.setLevel(level)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """No user, project, or environment config leaks into the hierarchy."""
    import apimdx.config.hierarchy as hierarchy

    monkeypatch.setattr(hierarchy, "_GLOBAL_CONFIG_PATH", tmp_path / "home" / "config.yaml")
    for env_key in hierarchy._ENV_MAP:
        monkeypatch.delenv(env_key, raising=False)
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def package_item():
    return ApiItem(kind=ApiItemKind.PACKAGE, display_name="my-lib", canonical_reference="my-lib!")


@pytest.fixture
def widget_item(package_item):
    return ApiItem(
        kind=ApiItemKind.CLASS,
        display_name="Widget",
        canonical_reference="my-lib!Widget:class",
        parent=package_item,
    )


@pytest.fixture
def render_method_item(widget_item):
    return ApiItem(
        kind=ApiItemKind.METHOD,
        display_name="render",
        canonical_reference="my-lib!Widget#render:member(1)",
        parent=widget_item,
    )


@pytest.fixture
def api_items(widget_item, render_method_item):
    """Items reachable by emitted reference text."""
    return {
        "my-lib!Widget": widget_item,
        "my-lib!Widget.render": render_method_item,
    }


@pytest.fixture
def resolver(api_items):
    """Resolver over ``api_items`` that records every call it receives."""
    calls: list[tuple[str, ApiItem | None]] = []

    def resolve(reference: CodeReference, context_item: ApiItem | None) -> ResolutionResult:
        calls.append((reference.emit(), context_item))
        item = api_items.get(reference.emit())
        if item is None:
            return ResolutionResult(error_message=f"Cannot find {reference.emit()}")
        return ResolutionResult(resolved_item=item)

    resolve.calls = calls
    return resolve


@pytest.fixture
def filenames():
    """Filename lookup keyed by scoped name; unknown items have no page."""
    pages = {"Widget": "./widget", "Widget.render": "./widget.render"}

    def get_filename(item: ApiItem) -> str | None:
        return pages.get(item.scoped_name())

    return get_filename
