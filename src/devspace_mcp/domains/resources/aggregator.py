"""Aggregate cluster objects, application metadata and local profiles.

``ResourceAggregator.aggregate`` answers a ``ResourceInfoRequest`` with one of
the response shapes in ``models``. Only failing to reach the cluster fails a
request outright. Profile lookups, single resource kinds and namespace
enumeration degrade to partial results and are logged.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from devspace_mcp.clients.cache import (
    ClusterObject,
    object_name,
    sort_by_creation_timestamp_asc,
)
from devspace_mcp.clients.kubeconfig import default_namespace
from devspace_mcp.domains.resources.groups import RESOURCE_GROUPS
from devspace_mcp.domains.resources.models import (
    ALL_RESOURCES,
    APPLICATION_RESOURCES,
    App,
    ApplicationDetail,
    ApplicationList,
    ClusterTree,
    Group,
    Item,
    ItemDetail,
    ItemList,
    NamespaceTree,
    Resource,
    ResourceInfoRequest,
    ResourceInfoResponse,
    Result,
)
from devspace_mcp.utils.errors import CacheUnavailableError, ConfigurationError, DevspaceError

if TYPE_CHECKING:
    from devspace_mcp.clients.cache import ResourceCache, ResourceSearch
    from devspace_mcp.domains.applications.models import ApplicationMeta
    from devspace_mcp.domains.applications.registry import ApplicationRegistry
    from devspace_mcp.domains.profiles.models import ServiceProfile
    from devspace_mcp.domains.profiles.resolver import ProfileResolver

logger = logging.getLogger(__name__)


def sort_applications(metas: list[ApplicationMeta | None]) -> list[ApplicationMeta | None]:
    """Sort applications by name. Missing entries sort as an empty name."""
    return sorted(metas, key=lambda meta: meta.application if meta is not None else "")


class ResourceAggregator:
    """Builds resource info responses for developer tooling.

    Args:
        cache: Source of search handles over live cluster objects.
        registry: Application metadata registry.
        profiles: Resolver for local service profiles.
        kind_query_workers: Threads used to query the kinds of one
            application concurrently. 0 or 1 queries sequentially.
    """

    def __init__(
        self,
        cache: ResourceCache,
        registry: ApplicationRegistry,
        profiles: ProfileResolver,
        kind_query_workers: int = 0,
    ) -> None:
        self._cache = cache
        self._registry = registry
        self._profiles = profiles
        self._kind_query_workers = kind_query_workers

    def aggregate(self, request: ResourceInfoRequest) -> ResourceInfoResponse | None:
        """Answer a resource info request.

        Returns:
            The response, or None when the cluster is unreachable or the
            query found nothing.
        """
        namespace = request.namespace or self._default_namespace(request.kubeconfig)

        try:
            search = self._cache.resolve(request.kubeconfig, namespace)
        except CacheUnavailableError as e:
            logger.error(e.message)
            return None

        try:
            if request.resource == ALL_RESOURCES:
                return self._cluster(request, namespace, search)
            if request.resource in APPLICATION_RESOURCES:
                return self._applications(request)
            return self._resources(request, search)
        except Exception:
            logger.exception(f"Failed to aggregate '{request.resource}' in '{namespace}'")
            return None

    def namespace_result(self, namespace: str, kubeconfig: str, search: ResourceSearch) -> Result:
        """Build the application tree of one namespace."""
        metas = self._registry.list_metas(namespace, kubeconfig) or []
        return Result(
            namespace=namespace,
            applications=[
                self.application_tree(namespace, meta.application, search)
                for meta in metas
                if meta is not None
            ],
        )

    def application_tree(self, namespace: str, application: str, search: ResourceSearch) -> App:
        """Build the grouped resources of one application.

        All groups are always present. A kind whose query fails is left
        out of its group.
        """
        profiles = self._profiles.resolve(namespace, application)
        objects_by_kind = self._query_kinds(namespace, search)

        groups = []
        for group_name, kinds in RESOURCE_GROUPS.items():
            resources = []
            for kind in kinds:
                objects = objects_by_kind.get(kind)
                if objects is None:
                    continue
                resources.append(
                    Resource(name=kind, items=[self._item(obj, profiles) for obj in objects])
                )
            groups.append(Group(group_name=group_name, resources=resources))
        return App(name=application, groups=groups)

    def _cluster(
        self, request: ResourceInfoRequest, namespace: str, search: ResourceSearch
    ) -> ClusterTree | NamespaceTree:
        if not request.namespace:
            # Cluster-wide kubeconfig: one result per namespace
            try:
                namespaces = search.list_all("namespaces")
            except Exception as e:
                logger.warning(f"Cannot enumerate namespaces, using '{namespace}': {e}")
                namespaces = []
            if namespaces:
                return ClusterTree(
                    results=[
                        self.namespace_result(object_name(ns), request.kubeconfig, search)
                        for ns in namespaces
                    ]
                )
        return NamespaceTree(result=self.namespace_result(namespace, request.kubeconfig, search))

    def _applications(self, request: ResourceInfoRequest) -> ApplicationList | ApplicationDetail | None:
        if not request.resource_name:
            metas = self._registry.list_metas(request.namespace, request.kubeconfig)
            if metas is None:
                return None
            return ApplicationList(applications=sort_applications(metas))

        meta = self._registry.get_meta(request.namespace, request.resource_name, request.kubeconfig)
        if meta is None:
            return None
        return ApplicationDetail(application=meta)

    def _resources(self, request: ResourceInfoRequest, search: ResourceSearch) -> ItemList | ItemDetail | None:
        # Profiles are keyed by service name, which matches the workload's object name
        profiles = self._profiles.resolve(request.namespace, request.resource_name)

        try:
            if request.app_name:
                objects = search.get_by_resource_name_app_namespace(
                    request.resource, request.resource_name, request.app_name, request.namespace
                )
            else:
                objects = search.get_by_resource_and_namespace(
                    request.resource, request.resource_name, request.namespace
                )
        except DevspaceError as e:
            logger.warning(e.message)
            return None

        if not objects:
            return None

        if request.resource_name:
            return ItemDetail(item=self._item(objects[0], profiles))

        objects = list(objects)
        sort_by_creation_timestamp_asc(objects)
        return ItemList(items=[self._item(obj, profiles) for obj in objects])

    def _query_kinds(
        self, namespace: str, search: ResourceSearch
    ) -> dict[str, list[ClusterObject] | None]:
        kinds = [kind for group in RESOURCE_GROUPS.values() for kind in group]

        def fetch(kind: str) -> list[ClusterObject] | None:
            try:
                return search.get_by_resource_and_namespace(kind, "", namespace)
            except Exception as e:
                logger.warning(f"Skipping {kind} in '{namespace}': {e}")
                return None

        if self._kind_query_workers > 1:
            with ThreadPoolExecutor(max_workers=self._kind_query_workers) as pool:
                return dict(zip(kinds, pool.map(fetch, kinds)))
        return {kind: fetch(kind) for kind in kinds}

    @staticmethod
    def _item(obj: ClusterObject, profiles: dict[str, ServiceProfile]) -> Item:
        return Item(metadata=obj, description=profiles.get(object_name(obj)))

    @staticmethod
    def _default_namespace(kubeconfig: str) -> str:
        try:
            return default_namespace(kubeconfig)
        except ConfigurationError as e:
            logger.debug(f"No default namespace: {e.message}")
            return ""
