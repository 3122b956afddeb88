"""Resolve the service profiles of an application.

Profiles only enrich responses, so resolution never fails: anything that
goes wrong is logged and an empty mapping is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from devspace_mcp.domains.profiles.models import (
    ApplicationDescription,
    ApplicationProfile,
    ServiceProfile,
)
from devspace_mcp.utils.errors import (
    ApplicationDescriptionError,
    DevspaceError,
    ProfileNotFoundError,
)

if TYPE_CHECKING:
    from devspace_mcp.domains.applications.registry import ApplicationRegistry
    from devspace_mcp.domains.profiles.store import ProfileStore

logger = logging.getLogger(__name__)


class ProfileResolver:
    """Maps service names to profiles for a namespace and application.

    Args:
        store: Local profile store.
        registry: Registry used to overlay the cluster's dev state.
        default_kubeconfig: Returns the kubeconfig to use when a profile
            does not record one.
    """

    def __init__(
        self,
        store: ProfileStore,
        registry: ApplicationRegistry,
        default_kubeconfig: Callable[[], str] | None = None,
    ) -> None:
        self._store = store
        self._registry = registry
        self._default_kubeconfig = default_kubeconfig or (lambda: "")

    def resolve(self, namespace: str, application: str) -> dict[str, ServiceProfile]:
        """Return the service profiles of an application, keyed by service name."""
        try:
            profile = self._store.load(namespace, application)
        except ProfileNotFoundError as e:
            logger.debug(e.message)
            return {}
        except DevspaceError as e:
            logger.error(e.message)
            return {}

        try:
            description = self._describe(profile)
        except DevspaceError as e:
            logger.error(e.message)
            return {}
        except Exception:
            logger.exception(f"Failed to describe application {application} in '{namespace}'")
            return {}

        return {svc.name: svc for svc in description.svc_profile if svc is not None}

    def _describe(self, profile: ApplicationProfile) -> ApplicationDescription:
        kubeconfig = self._kubeconfig_for(profile)
        meta = self._registry.get_meta(profile.namespace, profile.application, kubeconfig)
        return ApplicationDescription.build(profile, meta)

    def _kubeconfig_for(self, profile: ApplicationProfile) -> str:
        if not profile.kubeconfig:
            return self._default_kubeconfig()
        try:
            return Path(profile.kubeconfig).expanduser().read_text(encoding="utf-8")
        except OSError as e:
            raise ApplicationDescriptionError(
                profile.application, f"cannot read kubeconfig {profile.kubeconfig}: {e}"
            ) from e
