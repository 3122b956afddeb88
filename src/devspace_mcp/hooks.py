"""Hook specifications for Devspace MCP plugins.

Plugins implement these hooks with the ``hookimpl`` marker to contribute
tools and resources to the server and to report their health.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from devspace_mcp.plugin import PluginMetadata
    from devspace_mcp.server import DevspaceServer

PROJECT_NAME = "devspace_mcp"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class DevspaceHookSpec:
    """Hooks a Devspace MCP plugin may implement."""

    @hookspec
    def devspace_get_plugin_metadata(self) -> PluginMetadata:  # type: ignore[empty-body]
        """Return metadata describing the plugin."""

    @hookspec
    def devspace_register_tools(self, mcp: FastMCP, server: DevspaceServer) -> None:
        """Register MCP tools with the server."""

    @hookspec
    def devspace_register_resources(self, mcp: FastMCP, server: DevspaceServer) -> None:
        """Register MCP resources with the server."""

    @hookspec
    def devspace_health_check(self, server: DevspaceServer) -> tuple[bool, str]:  # type: ignore[empty-body]
        """Report whether the plugin can serve requests, with a reason."""
