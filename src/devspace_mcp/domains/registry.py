"""Registry of the plugins shipped with the server."""

from __future__ import annotations

from typing import TYPE_CHECKING

from devspace_mcp.hooks import hookimpl
from devspace_mcp.plugin import BasePlugin, PluginMetadata

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from devspace_mcp.server import DevspaceServer


class ResourcesPlugin(BasePlugin):
    """Resource info tools over live objects, applications and profiles."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="resources",
                version="1.0.0",
                description="Grouped and flat views of cluster resources",
                maintainer="devspace-mcp maintainers",
            )
        )

    @hookimpl
    def devspace_register_tools(self, mcp: FastMCP, server: DevspaceServer) -> None:
        from devspace_mcp.domains.resources.tools import register_tools

        register_tools(mcp, server)

    @hookimpl
    def devspace_health_check(self, server: DevspaceServer) -> tuple[bool, str]:
        home = server.config.profile_home
        if not home.exists():
            return True, f"Profile home {home} not found, responses carry no profiles"
        return True, "Profile store available"


def get_core_plugins() -> list[BasePlugin]:
    """Return all core plugin instances."""
    return [ResourcesPlugin()]
