"""Pydantic models for local developer profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from devspace_mcp.utils.errors import ApplicationDescriptionError

if TYPE_CHECKING:
    from devspace_mcp.domains.applications.models import ApplicationMeta

PROFILE_VERSION = "v2"


class _ProfileModel(BaseModel):
    """Profiles are stored with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PortForward(_ProfileModel):
    """A local port forwarded to a service container."""

    local_port: int
    remote_port: int
    status: str = ""


class ServiceProfile(_ProfileModel):
    """Developer-only metadata about one service of an application."""

    name: str = Field(..., description="Service (workload) name")
    service_type: str = Field("deployment", description="Workload type of the service")
    developing: bool = Field(False, description="Whether the service is in development")
    possess: bool = Field(False, description="Whether this machine started the development")
    dev_image: str | None = Field(None, description="Image used while developing")
    local_absolute_sync_dir_from_dev_start_plugin: list[str] = Field(
        default_factory=list, description="Local directories synced into the container"
    )
    dev_port_forward_list: list[PortForward] = Field(
        default_factory=list, description="Active port forwards"
    )


class ApplicationProfile(_ProfileModel):
    """Versioned profile document of one application in one namespace."""

    version: str = Field(PROFILE_VERSION, description="Profile document version")
    namespace: str = Field("", description="Namespace of the application")
    application: str = Field("", description="Application name")
    kubeconfig: str = Field("", description="Kubeconfig path the application was installed with")
    svc_profile: list[ServiceProfile | None] = Field(
        default_factory=list, description="Per-service profiles"
    )


class ApplicationDescription(_ProfileModel):
    """Live description of an application: its profile overlaid with cluster dev state."""

    application: str
    namespace: str
    svc_profile: list[ServiceProfile | None] = Field(default_factory=list)

    @classmethod
    def build(cls, profile: ApplicationProfile, meta: ApplicationMeta | None) -> ApplicationDescription:
        """Combine a local profile with the application's registry entry.

        Raises:
            ApplicationDescriptionError: If the application is not installed.
        """
        if meta is None:
            raise ApplicationDescriptionError(profile.application, "application is not installed")

        services: list[ServiceProfile | None] = []
        for svc in profile.svc_profile:
            if svc is None:
                services.append(None)
                continue
            developing = svc.developing or meta.is_developing(svc.name)
            services.append(svc.model_copy(update={"developing": developing}))

        return cls(
            application=meta.application,
            namespace=meta.namespace or profile.namespace,
            svc_profile=services,
        )
