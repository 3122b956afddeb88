"""Local developer profiles for applications and their services."""

from devspace_mcp.domains.profiles.models import (
    ApplicationDescription,
    ApplicationProfile,
    ServiceProfile,
)
from devspace_mcp.domains.profiles.resolver import ProfileResolver
from devspace_mcp.domains.profiles.store import ProfileStore

__all__ = [
    "ServiceProfile",
    "ApplicationProfile",
    "ApplicationDescription",
    "ProfileStore",
    "ProfileResolver",
]
