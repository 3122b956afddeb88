"""Application metadata registry backed by cluster Secrets."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from kubernetes import client
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from devspace_mcp.clients.kubeconfig import new_api_client
from devspace_mcp.domains.applications.models import (
    APPLICATION_SECRET_PREFIX,
    APPLICATION_SECRET_TYPE,
    ApplicationMeta,
)
from devspace_mcp.utils.annotations import DevspaceAnnotations
from devspace_mcp.utils.errors import DevspaceError

logger = logging.getLogger(__name__)


def _core_v1_for(kubeconfig: str) -> client.CoreV1Api:
    return client.CoreV1Api(new_api_client(kubeconfig))


class ApplicationRegistry:
    """Looks up the applications installed into a namespace.

    Every application keeps its metadata in a Secret of type
    ``dev.nocalhost/application``. The virtual default application is
    always present, whether or not a Secret exists for it.
    """

    def __init__(self, api_factory: Callable[[str], Any] | None = None) -> None:
        self._api_factory = api_factory or _core_v1_for

    def list_metas(self, namespace: str, kubeconfig: str) -> list[ApplicationMeta] | None:
        """List all applications in a namespace.

        An empty namespace lists applications across all namespaces.

        Returns:
            Application metadata in the order the cluster returns it, or
            None if the registry cannot be read.
        """
        field_selector = f"type={APPLICATION_SECRET_TYPE}"
        try:
            core_v1 = self._api_factory(kubeconfig)
            if namespace:
                secrets = core_v1.list_namespaced_secret(namespace, field_selector=field_selector)
            else:
                secrets = core_v1.list_secret_for_all_namespaces(field_selector=field_selector)
        except (ApiException, DevspaceError, HTTPError, OSError) as e:
            logger.error(f"Failed to list applications in '{namespace}': {e}")
            return None

        metas: list[ApplicationMeta] = []
        for secret in secrets.items or []:
            try:
                metas.append(ApplicationMeta.from_secret(secret))
            except Exception as e:
                logger.warning(f"Skipping unreadable application secret {secret.metadata.name}: {e}")

        if namespace and not any(
            meta.application == DevspaceAnnotations.DEFAULT_APPLICATION for meta in metas
        ):
            metas.append(ApplicationMeta.default(namespace))
        return metas

    def get_meta(self, namespace: str, name: str, kubeconfig: str) -> ApplicationMeta | None:
        """Get metadata for one application, or None if it is not installed."""
        try:
            core_v1 = self._api_factory(kubeconfig)
            secret = core_v1.read_namespaced_secret(f"{APPLICATION_SECRET_PREFIX}{name}", namespace)
        except ApiException as e:
            if e.status == 404:
                if name == DevspaceAnnotations.DEFAULT_APPLICATION:
                    return ApplicationMeta.default(namespace)
                return None
            logger.error(f"Failed to read application {name} in '{namespace}': {e}")
            return None
        except (DevspaceError, HTTPError, OSError) as e:
            logger.error(f"Failed to read application {name} in '{namespace}': {e}")
            return None

        return ApplicationMeta.from_secret(secret)
