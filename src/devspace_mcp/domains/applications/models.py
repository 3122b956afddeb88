"""Pydantic models for application metadata."""

from __future__ import annotations

import base64
import binascii
import logging
from enum import Enum
from typing import Any

import yaml
from pydantic import BaseModel, Field

from devspace_mcp.utils.annotations import DevspaceAnnotations

logger = logging.getLogger(__name__)

APPLICATION_SECRET_PREFIX = "dev.nocalhost.application."
APPLICATION_SECRET_TYPE = "dev.nocalhost/application"


class ApplicationState(str, Enum):
    """Installation state of an application."""

    UNKNOWN = "Unknown"
    INSTALLING = "Installing"
    INSTALLED = "Installed"
    UNINSTALLED = "Uninstalled"


class ApplicationMeta(BaseModel):
    """Identity and state of an application deployed into a namespace."""

    application: str = Field(..., description="Application name")
    namespace: str = Field("", description="Namespace the application lives in")
    application_type: str = Field("", description="Install type, e.g. 'helmGit' or 'rawManifest'")
    application_state: ApplicationState = Field(
        ApplicationState.UNKNOWN, description="Installation state"
    )
    helm_release_name: str | None = Field(None, description="Helm release backing the application")
    config: dict[str, Any] = Field(default_factory=dict, description="Application config")
    dev_meta: dict[str, str] = Field(
        default_factory=dict,
        description="Services under development, keyed by service name, valued by developer identity",
    )

    def is_developing(self, service: str) -> bool:
        """Check whether a service of this application is in development."""
        return service in self.dev_meta

    @classmethod
    def default(cls, namespace: str) -> ApplicationMeta:
        """The virtual application holding objects no other application owns."""
        return cls(
            application=DevspaceAnnotations.DEFAULT_APPLICATION,
            namespace=namespace,
            application_type="manifest",
            application_state=ApplicationState.INSTALLED,
        )

    @classmethod
    def from_secret(cls, secret: Any) -> ApplicationMeta:
        """Create from the Secret that stores an application's metadata."""
        metadata = secret.metadata
        data = getattr(secret, "data", None) or {}

        name = _decode(data.get("application"))
        if not name:
            name = metadata.name.removeprefix(APPLICATION_SECRET_PREFIX)

        state = _decode(data.get("state"))
        try:
            app_state = ApplicationState(state) if state else ApplicationState.UNKNOWN
        except ValueError:
            logger.warning(f"Unknown state '{state}' for application {name}")
            app_state = ApplicationState.UNKNOWN

        return cls(
            application=name,
            namespace=getattr(metadata, "namespace", None) or "",
            application_type=_decode(data.get("type")),
            application_state=app_state,
            helm_release_name=_decode(data.get("release")) or None,
            config=_decode_yaml(data.get("config")),
            dev_meta={str(k): str(v) for k, v in _decode_yaml(data.get("dev")).items()},
        )


def _decode(value: str | None) -> str:
    """Decode a base64 Secret value."""
    if not value:
        return ""
    try:
        return base64.b64decode(value).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return ""


def _decode_yaml(value: str | None) -> dict[str, Any]:
    """Decode a base64 Secret value holding a YAML mapping."""
    text = _decode(value)
    if not text:
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError:
        return {}
    return loaded if isinstance(loaded, dict) else {}
