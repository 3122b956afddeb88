"""Utility functions and helpers for the Devspace MCP server."""

from devspace_mcp.utils.errors import (
    ApplicationDescriptionError,
    CacheUnavailableError,
    ConfigurationError,
    DevspaceError,
    ProfileLoadError,
    ProfileNotFoundError,
    ResourceQueryError,
    UnknownResourceKindError,
)

__all__ = [
    "DevspaceError",
    "CacheUnavailableError",
    "ResourceQueryError",
    "UnknownResourceKindError",
    "ProfileNotFoundError",
    "ProfileLoadError",
    "ApplicationDescriptionError",
    "ConfigurationError",
]
