"""Error handling — configuration and rendering exceptions."""

from apimdx.errors.exceptions import (
    ApiMdxError,
    ConfigurationError,
    UnsupportedNodeError,
)

__all__ = [
    "ApiMdxError",
    "ConfigurationError",
    "UnsupportedNodeError",
]
