"""Custom exception hierarchy for apimdx."""

from __future__ import annotations

from typing import Any


class ApiMdxError(Exception):
    """Base exception for all apimdx errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(ApiMdxError):
    """Unrecoverable setup error — aborts the current render or cache access.

    Examples: unknown node kind, global cache manager re-initialized with
    different options, invalid cache capacity.
    """

    def __init__(
        self,
        message: str = "",
        error_type: str = "invalid_option",
        option: str | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.option = option


class UnsupportedNodeError(ConfigurationError):
    """A DocNode whose kind has no renderer."""

    def __init__(self, node_kind: str, message: str = "") -> None:
        super().__init__(
            message or f"Unsupported DocNode kind: {node_kind}",
            error_type="unsupported_node",
        )
        self.node_kind = node_kind
