"""FastMCP server definition for Devspace MCP with plugin discovery."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from devspace_mcp.clients.cache import ResourceCache
from devspace_mcp.config import DevspaceConfig, get_config
from devspace_mcp.domains.applications.registry import ApplicationRegistry
from devspace_mcp.domains.profiles.resolver import ProfileResolver
from devspace_mcp.domains.profiles.store import ProfileStore
from devspace_mcp.domains.resources.aggregator import ResourceAggregator
from devspace_mcp.plugin_manager import PluginManager

logger = logging.getLogger(__name__)


class DevspaceServer:
    """Devspace MCP server wiring the aggregator to MCP tools."""

    def __init__(self, config: DevspaceConfig | None = None) -> None:
        self._config = config or get_config()
        self._mcp: FastMCP | None = None
        self._plugin_manager: PluginManager | None = None
        self._cache = ResourceCache(
            ttl_seconds=self._config.search_cache_ttl_seconds,
            maxsize=self._config.search_cache_size,
        )
        self._registry = ApplicationRegistry()
        self._profiles = ProfileResolver(
            ProfileStore(self._config.profile_home),
            self._registry,
            default_kubeconfig=self._config.load_default_kubeconfig,
        )
        self._aggregator = ResourceAggregator(
            self._cache,
            self._registry,
            self._profiles,
            kind_query_workers=self._config.kind_query_workers,
        )

    @property
    def config(self) -> DevspaceConfig:
        """Get server configuration."""
        return self._config

    @property
    def mcp(self) -> FastMCP:
        """Get the MCP server instance.

        Raises:
            RuntimeError: If server is not initialized.
        """
        if self._mcp is None:
            raise RuntimeError("Server not initialized.")
        return self._mcp

    @property
    def plugin_manager(self) -> PluginManager | None:
        """Get the plugin manager, once plugins are loaded."""
        return self._plugin_manager

    @property
    def cache(self) -> ResourceCache:
        """Search handle cache shared by all requests."""
        return self._cache

    @property
    def aggregator(self) -> ResourceAggregator:
        """Aggregator answering resource info requests."""
        return self._aggregator

    def startup(self) -> None:
        """Run plugin health checks."""
        if self._plugin_manager is None:
            return

        self._plugin_manager.run_health_checks(self)
        logger.info(
            f"Devspace MCP server started with {len(self._plugin_manager.healthy_plugins)}/"
            f"{len(self._plugin_manager.registered_plugins)} plugins active"
        )

    def shutdown(self) -> None:
        """Release per-cluster state."""
        self._cache.clear()

    def _create_lifespan(self) -> Callable[[Any], AbstractAsyncContextManager[None]]:
        """Create the lifespan context manager for the MCP server."""
        server_self = self

        @asynccontextmanager
        async def lifespan(_app: Any) -> AsyncIterator[None]:
            logger.info("Starting Devspace MCP server...")
            server_self.startup()
            try:
                yield
            finally:
                logger.info("Shutting down Devspace MCP server...")
                server_self.shutdown()
                logger.info("Devspace MCP server shut down")

        return lifespan

    def create_mcp(self) -> FastMCP:
        """Create and configure the FastMCP server."""
        self._plugin_manager = PluginManager()
        self._plugin_manager.load_core_plugins()
        self._plugin_manager.load_entrypoint_plugins()

        mcp = FastMCP(
            name="devspace-mcp",
            instructions="MCP server for inspecting developer workspaces in Kubernetes "
            "clusters - lists applications and their workloads, networks, "
            "configurations and storages together with local development profiles.",
            lifespan=self._create_lifespan(),
            host=self._config.host,
            port=self._config.port,
        )
        self._mcp = mcp

        self._plugin_manager.register_all_tools(mcp, self)
        self._plugin_manager.register_all_resources(mcp, self)
        self._register_core_resources(mcp)
        self._register_health_endpoint(mcp)

        return mcp

    def _register_core_resources(self, mcp: FastMCP) -> None:
        """Register core MCP resources describing the server."""

        @mcp.resource("devspace://server/plugins")
        def server_plugins() -> dict:
            """Get loaded plugins and their health."""
            pm = self._plugin_manager
            if pm is None:
                return {"total_plugins": 0, "active_plugins": 0, "plugins": {}}

            plugins = {}
            for meta in pm.get_all_metadata():
                plugins[meta.name] = {
                    "version": meta.version,
                    "description": meta.description,
                    "maintainer": meta.maintainer,
                    "healthy": meta.name in pm.healthy_plugins,
                }
            return {
                "total_plugins": len(pm.registered_plugins),
                "active_plugins": len(pm.healthy_plugins),
                "plugins": plugins,
            }

    def _register_health_endpoint(self, mcp: FastMCP) -> None:
        """Register ``/health`` for HTTP transports."""

        @mcp.custom_route("/health", methods=["GET"])
        async def health(_request: Request) -> JSONResponse:
            pm = self._plugin_manager
            total = len(pm.registered_plugins) if pm else 0
            healthy = len(pm.healthy_plugins) if pm else 0
            status = "healthy" if pm is not None and healthy == total else "degraded"
            return JSONResponse(
                {
                    "status": status,
                    "plugins": {"total": total, "healthy": healthy},
                },
                status_code=200 if status == "healthy" else 503,
            )


# Global server instance
_server: DevspaceServer | None = None


def get_server() -> DevspaceServer:
    """Get the global server instance."""
    global _server
    if _server is None:
        _server = DevspaceServer()
    return _server


def create_server(config: DevspaceConfig | None = None) -> FastMCP:
    """Create and return the MCP server instance."""
    global _server
    _server = DevspaceServer(config)
    return _server.create_mcp()
