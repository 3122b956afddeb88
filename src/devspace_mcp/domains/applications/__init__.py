"""Application metadata registry."""

from devspace_mcp.domains.applications.models import ApplicationMeta, ApplicationState
from devspace_mcp.domains.applications.registry import ApplicationRegistry

__all__ = ["ApplicationMeta", "ApplicationState", "ApplicationRegistry"]
