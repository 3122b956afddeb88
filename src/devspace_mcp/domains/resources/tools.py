"""MCP Tools for resource info queries."""

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from devspace_mcp.domains.resources.groups import RESOURCE_GROUPS
from devspace_mcp.domains.resources.models import ResourceInfoRequest, to_wire
from devspace_mcp.utils.errors import ConfigurationError

if TYPE_CHECKING:
    from devspace_mcp.server import DevspaceServer


def register_tools(mcp: FastMCP, server: "DevspaceServer") -> None:
    """Register resource info tools with the MCP server."""

    @mcp.tool()
    def get_resource_info(
        resource: str,
        namespace: str = "",
        app_name: str = "",
        resource_name: str = "",
        kubeconfig: str | None = None,
    ) -> dict[str, Any]:
        """Inspect the resources of a cluster as developers see them.

        Args:
            resource: What to query. "all" returns every application of the
                namespace (or of every namespace) with its resources grouped
                into Workloads, Networks, Configurations and Storages.
                "app" or "application" lists applications, or returns one
                when resource_name is set. Any other value is a plural
                resource kind such as "deployments" or "pods".
            namespace: Namespace to query. Defaults to the namespace of the
                kubeconfig's current context.
            app_name: Only return resources belonging to this application.
            resource_name: Name of a single resource or application.
            kubeconfig: Kubeconfig content. Defaults to the server's kubeconfig.

        Returns:
            The kind of response and its result. The result is null when
            nothing matched or the cluster could not be queried.
        """
        if kubeconfig is None:
            try:
                kubeconfig = server.config.load_default_kubeconfig()
            except ConfigurationError as e:
                return {"error": e.message}

        request = ResourceInfoRequest(
            kubeconfig=kubeconfig,
            namespace=namespace,
            app_name=app_name,
            resource=resource,
            resource_name=resource_name,
        )
        response = server.aggregator.aggregate(request)

        return {
            "kind": response.kind if response is not None else None,
            "result": to_wire(response),
        }

    @mcp.tool()
    def list_resource_groups() -> dict[str, list[str]]:
        """List the groups resources are displayed under, with their resource kinds."""
        return {group: list(kinds) for group, kinds in RESOURCE_GROUPS.items()}
