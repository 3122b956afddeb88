"""Search handles over the live objects of a cluster.

A ``ResourceSearch`` answers "objects of kind K (named M, belonging to
application A) in namespace N" for one kubeconfig. ``ResourceCache`` hands
out search handles and reuses them for repeated requests against the same
kubeconfig and namespace.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from datetime import datetime, timezone
from typing import Any

from cachetools import TTLCache
from kubernetes.client.exceptions import ApiException
from kubernetes.dynamic import DynamicClient
from kubernetes.dynamic.exceptions import ResourceNotFoundError, ResourceNotUniqueError
from urllib3.exceptions import HTTPError

from devspace_mcp.clients.kinds import lookup_kind
from devspace_mcp.clients.kubeconfig import new_api_client
from devspace_mcp.utils.annotations import DevspaceAnnotations
from devspace_mcp.utils.errors import (
    CacheUnavailableError,
    DevspaceError,
    ResourceQueryError,
    UnknownResourceKindError,
)

logger = logging.getLogger(__name__)

ClusterObject = dict[str, Any]

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def object_name(obj: ClusterObject) -> str:
    """Return ``metadata.name`` of a cluster object."""
    return (obj.get("metadata") or {}).get("name") or ""


def creation_timestamp(obj: ClusterObject) -> datetime:
    """Return ``metadata.creationTimestamp`` as an aware datetime.

    Objects without a parseable timestamp sort first.
    """
    value = (obj.get("metadata") or {}).get("creationTimestamp")
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return _EPOCH
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return _EPOCH


def sort_by_creation_timestamp_asc(objects: list[ClusterObject]) -> None:
    """Order objects oldest first, in place. Ties keep their order."""
    objects.sort(key=creation_timestamp)


class ResourceSearch:
    """Query live objects of one cluster through the dynamic client."""

    def __init__(self, dynamic: Any, namespace: str = "") -> None:
        self._dynamic = dynamic
        self._namespace = namespace

    def list_all(self, resource: str) -> list[ClusterObject]:
        """List every object of a kind, across all namespaces."""
        return self._list(resource, name="", namespace=None)

    def get_by_resource_and_namespace(
        self, resource: str, name: str, namespace: str
    ) -> list[ClusterObject]:
        """List objects of a kind in a namespace, optionally only those named ``name``."""
        return self._list(resource, name=name, namespace=namespace or self._namespace)

    def get_by_resource_name_app_namespace(
        self, resource: str, name: str, app: str, namespace: str
    ) -> list[ClusterObject]:
        """Like ``get_by_resource_and_namespace``, keeping only objects of application ``app``."""
        objects = self.get_by_resource_and_namespace(resource, name, namespace)
        return [
            obj
            for obj in objects
            if DevspaceAnnotations.application_of((obj.get("metadata") or {}).get("annotations"))
            == app
        ]

    def _resolve_api(self, resource: str) -> Any:
        known = lookup_kind(resource)
        try:
            if known is not None:
                return self._dynamic.resources.get(api_version=known.api_version, kind=known.kind)
            return self._dynamic.resources.get(name=resource)
        except ResourceNotUniqueError:
            # Same plural served by several groups; take the preferred version
            candidates = self._dynamic.resources.search(name=resource)
            preferred = [api for api in candidates if getattr(api, "preferred", False)]
            if preferred or candidates:
                return (preferred or candidates)[0]
            raise UnknownResourceKindError(resource) from None
        except ResourceNotFoundError:
            raise UnknownResourceKindError(resource) from None

    def _list(self, resource: str, name: str, namespace: str | None) -> list[ClusterObject]:
        try:
            api = self._resolve_api(resource)
        except (ApiException, HTTPError, OSError) as e:
            raise ResourceQueryError(resource, namespace or "", f"discovery failed: {e}") from e

        kwargs: dict[str, Any] = {}
        if name:
            kwargs["field_selector"] = f"metadata.name={name}"
        if getattr(api, "namespaced", True) and namespace:
            kwargs["namespace"] = namespace

        try:
            result = api.get(**kwargs)
        except ApiException as e:
            raise ResourceQueryError(resource, namespace or "", f"{e.status} {e.reason}") from e
        except (HTTPError, OSError) as e:
            raise ResourceQueryError(resource, namespace or "", str(e)) from e

        data = result.to_dict() if hasattr(result, "to_dict") else result
        items: list[ClusterObject] = list((data or {}).get("items") or [])
        for item in items:
            # List responses omit per-item type information
            item.setdefault("apiVersion", getattr(api, "api_version", None) or "")
            item.setdefault("kind", getattr(api, "kind", None) or "")
        logger.debug(f"Listed {len(items)} {resource} in '{namespace or '*'}'")
        return items


class ResourceCache:
    """Hands out ``ResourceSearch`` handles, reusing them for a while.

    Handles are keyed by a digest of the kubeconfig content and the
    namespace, so the credential itself is never kept as a key.
    """

    def __init__(self, ttl_seconds: int = 300, maxsize: int = 32) -> None:
        self._handles: TTLCache[tuple[str, str], ResourceSearch] | None = (
            TTLCache(maxsize=maxsize, ttl=ttl_seconds) if ttl_seconds > 0 else None
        )
        self._lock = threading.Lock()

    def resolve(self, kubeconfig: str, namespace: str) -> ResourceSearch:
        """Get a search handle for a kubeconfig, scoped to a namespace.

        Raises:
            CacheUnavailableError: If the cluster cannot be reached.
        """
        key = (hashlib.sha256(kubeconfig.encode("utf-8")).hexdigest(), namespace)
        if self._handles is not None:
            with self._lock:
                handle = self._handles.get(key)
            if handle is not None:
                return handle

        handle = ResourceSearch(self._connect(kubeconfig, namespace), namespace)

        if self._handles is not None:
            with self._lock:
                self._handles[key] = handle
        return handle

    def clear(self) -> None:
        """Drop all cached handles."""
        if self._handles is not None:
            with self._lock:
                self._handles.clear()

    def _connect(self, kubeconfig: str, namespace: str) -> DynamicClient:
        try:
            return DynamicClient(new_api_client(kubeconfig))
        except DevspaceError as e:
            raise CacheUnavailableError(namespace, e.message) from e
        except Exception as e:
            raise CacheUnavailableError(namespace, str(e)) from e
