"""Resource info queries: grouped and flat views of cluster objects."""

from devspace_mcp.domains.resources.aggregator import ResourceAggregator
from devspace_mcp.domains.resources.groups import RESOURCE_GROUPS
from devspace_mcp.domains.resources.models import ResourceInfoRequest, to_wire

__all__ = ["ResourceAggregator", "RESOURCE_GROUPS", "ResourceInfoRequest", "to_wire"]
