"""Plugin interface for Devspace MCP components.

This module defines the plugin base class and metadata that all plugins
use to integrate with the server via pluggy hooks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from devspace_mcp.hooks import hookimpl

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from devspace_mcp.server import DevspaceServer


@dataclass
class PluginMetadata:
    """Metadata describing a Devspace MCP plugin."""

    name: str
    """Unique plugin name, e.g., 'resources'."""

    version: str
    """Plugin version following semver, e.g., '1.0.0'."""

    description: str
    """Human-readable description of what this plugin provides."""

    maintainer: str
    """Maintainer email or team."""


class BasePlugin:
    """Base implementation of a Devspace MCP plugin with common functionality.

    Plugins extend this class to get default implementations of the hook
    methods. External plugins are registered through an entry point:

        [project.entry-points."devspace_mcp.plugins"]
        my_plugin = "my_package.plugin:MyPlugin"
    """

    def __init__(self, metadata: PluginMetadata) -> None:
        self._metadata = metadata

    @property
    def metadata(self) -> PluginMetadata:
        """Plugin metadata."""
        return self._metadata

    @hookimpl
    def devspace_get_plugin_metadata(self) -> PluginMetadata:
        """Return plugin metadata."""
        return self._metadata

    @hookimpl
    def devspace_register_tools(self, mcp: FastMCP, server: DevspaceServer) -> None:
        """Register MCP tools. Override in subclass."""
        pass

    @hookimpl
    def devspace_register_resources(self, mcp: FastMCP, server: DevspaceServer) -> None:
        """Register MCP resources. Override in subclass."""
        pass

    @hookimpl
    def devspace_health_check(self, server: DevspaceServer) -> tuple[bool, str]:  # noqa: ARG002
        """Plugins without external requirements are always healthy."""
        return True, "No requirements"
