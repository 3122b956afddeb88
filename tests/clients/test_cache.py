"""Tests for search handles and the handle cache."""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from kubernetes.client.exceptions import ApiException
from kubernetes.dynamic.exceptions import ResourceNotFoundError, ResourceNotUniqueError
from urllib3.exceptions import MaxRetryError

from devspace_mcp.clients.cache import (
    ResourceCache,
    ResourceSearch,
    creation_timestamp,
    object_name,
    sort_by_creation_timestamp_asc,
)
from devspace_mcp.utils.errors import (
    CacheUnavailableError,
    ConfigurationError,
    ResourceQueryError,
    UnknownResourceKindError,
)
from tests.conftest import make_object


def _api(items: list[dict], namespaced: bool = True, kind: str = "Pod") -> MagicMock:
    """Mock dynamic API resource returning ``items`` from get()."""
    api = MagicMock()
    api.namespaced = namespaced
    api.kind = kind
    api.api_version = "v1"
    api.get.return_value.to_dict.return_value = {"items": items}
    return api


class TestSortByCreationTimestamp:
    """Tests for creation time ordering."""

    def test_orders_oldest_first(self) -> None:
        """Test ordering objects regardless of input order."""
        objects = [
            make_object("b", created="2024-03-01T10:00:00Z"),
            make_object("a", created="2024-01-01T10:00:00Z"),
            make_object("c", created="2024-05-01T10:00:00Z"),
        ]

        sort_by_creation_timestamp_asc(objects)

        assert [object_name(o) for o in objects] == ["a", "b", "c"]

    def test_missing_timestamps_sort_first_and_keep_order(self) -> None:
        """Test that objects without a timestamp come first in input order."""
        objects = [
            make_object("dated", created="2024-01-01T00:00:00Z"),
            make_object("x", created=None),
            make_object("y", created="garbage"),
        ]

        sort_by_creation_timestamp_asc(objects)

        assert [object_name(o) for o in objects] == ["x", "y", "dated"]

    def test_accepts_datetimes(self) -> None:
        """Test that datetime values are compared like strings."""
        obj = make_object("a", created=None)
        obj["metadata"]["creationTimestamp"] = datetime(2024, 1, 1, 12, 0)

        assert creation_timestamp(obj) == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestResourceSearch:
    """Tests for ResourceSearch queries."""

    @pytest.fixture
    def dynamic(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture
    def search(self, dynamic: MagicMock) -> ResourceSearch:
        return ResourceSearch(dynamic, namespace="dev-space")

    def test_builtin_kind_resolved_by_api_version(
        self, search: ResourceSearch, dynamic: MagicMock
    ) -> None:
        """Test that known kinds skip discovery by name."""
        dynamic.resources.get.return_value = _api([], kind="Deployment")

        search.get_by_resource_and_namespace("deployments", "", "ns1")

        dynamic.resources.get.assert_called_once_with(api_version="apps/v1", kind="Deployment")

    def test_list_in_namespace(self, search: ResourceSearch, dynamic: MagicMock) -> None:
        """Test listing a namespaced kind."""
        api = _api([make_object("p1")])
        dynamic.resources.get.return_value = api

        objects = search.get_by_resource_and_namespace("pods", "", "ns1")

        api.get.assert_called_once_with(namespace="ns1")
        assert [object_name(o) for o in objects] == ["p1"]

    def test_name_becomes_field_selector(self, search: ResourceSearch, dynamic: MagicMock) -> None:
        """Test that a resource name filters on metadata.name."""
        api = _api([])
        dynamic.resources.get.return_value = api

        search.get_by_resource_and_namespace("pods", "web", "ns1")

        api.get.assert_called_once_with(field_selector="metadata.name=web", namespace="ns1")

    def test_empty_namespace_uses_handle_namespace(
        self, search: ResourceSearch, dynamic: MagicMock
    ) -> None:
        """Test that queries without a namespace use the handle's namespace."""
        api = _api([])
        dynamic.resources.get.return_value = api

        search.get_by_resource_and_namespace("pods", "", "")

        api.get.assert_called_once_with(namespace="dev-space")

    def test_cluster_scoped_kind_ignores_namespace(
        self, search: ResourceSearch, dynamic: MagicMock
    ) -> None:
        """Test that cluster-scoped kinds are listed without a namespace."""
        api = _api([], namespaced=False, kind="StorageClass")
        dynamic.resources.get.return_value = api

        search.get_by_resource_and_namespace("storageclasses", "", "ns1")

        api.get.assert_called_once_with()

    def test_list_all_spans_namespaces(self, search: ResourceSearch, dynamic: MagicMock) -> None:
        """Test that list_all does not restrict the namespace."""
        api = _api([make_object("ns1", kind="Namespace")], namespaced=False, kind="Namespace")
        dynamic.resources.get.return_value = api

        objects = search.list_all("namespaces")

        api.get.assert_called_once_with()
        assert [object_name(o) for o in objects] == ["ns1"]

    def test_items_get_type_information(self, search: ResourceSearch, dynamic: MagicMock) -> None:
        """Test that listed items carry apiVersion and kind."""
        dynamic.resources.get.return_value = _api([{"metadata": {"name": "p1"}}])

        objects = search.get_by_resource_and_namespace("pods", "", "ns1")

        assert objects[0]["kind"] == "Pod"
        assert objects[0]["apiVersion"] == "v1"

    def test_unknown_kind(self, search: ResourceSearch, dynamic: MagicMock) -> None:
        """Test that kinds the cluster does not serve raise UnknownResourceKindError."""
        dynamic.resources.get.side_effect = ResourceNotFoundError("No matches found")

        with pytest.raises(UnknownResourceKindError):
            search.get_by_resource_and_namespace("widgets", "", "ns1")

    def test_ambiguous_kind_prefers_preferred_version(
        self, search: ResourceSearch, dynamic: MagicMock
    ) -> None:
        """Test that a plural served by several groups resolves to the preferred one."""
        other = _api([])
        other.preferred = False
        preferred = _api([make_object("w1", kind="Widget")], kind="Widget")
        preferred.preferred = True
        dynamic.resources.get.side_effect = ResourceNotUniqueError("Multiple matches found")
        dynamic.resources.search.return_value = [other, preferred]

        objects = search.get_by_resource_and_namespace("widgets", "", "ns1")

        dynamic.resources.search.assert_called_once_with(name="widgets")
        assert [object_name(o) for o in objects] == ["w1"]
        other.get.assert_not_called()

    def test_api_error_raises_query_error(self, search: ResourceSearch, dynamic: MagicMock) -> None:
        """Test that API errors surface as ResourceQueryError."""
        api = _api([])
        api.get.side_effect = ApiException(status=403, reason="Forbidden")
        dynamic.resources.get.return_value = api

        with pytest.raises(ResourceQueryError) as exc_info:
            search.get_by_resource_and_namespace("secrets", "", "ns1")

        assert exc_info.value.resource == "secrets"
        assert "403" in exc_info.value.reason

    def test_connection_error_raises_query_error(
        self, search: ResourceSearch, dynamic: MagicMock
    ) -> None:
        """Test that transport failures surface as ResourceQueryError."""
        api = _api([])
        api.get.side_effect = MaxRetryError(None, "/api/v1/pods")
        dynamic.resources.get.return_value = api

        with pytest.raises(ResourceQueryError) as exc_info:
            search.get_by_resource_and_namespace("pods", "", "ns1")

        assert exc_info.value.namespace == "ns1"

    def test_discovery_connection_error_raises_query_error(
        self, search: ResourceSearch, dynamic: MagicMock
    ) -> None:
        """Test that transport failures during API discovery surface as ResourceQueryError."""
        dynamic.resources.get.side_effect = MaxRetryError(None, "/apis")

        with pytest.raises(ResourceQueryError, match="discovery failed"):
            search.list_all("namespaces")

    def test_application_filter(self, search: ResourceSearch, dynamic: MagicMock) -> None:
        """Test filtering objects by application annotations."""
        dynamic.resources.get.return_value = _api(
            [
                make_object("a", annotations={"dev.nocalhost/application-name": "shop"}),
                make_object("b", annotations={"meta.helm.sh/release-name": "shop"}),
                make_object("c", annotations={"dev.nocalhost/application-name": "blog"}),
                make_object("d"),
            ]
        )

        shop = search.get_by_resource_name_app_namespace("pods", "", "shop", "ns1")

        assert [object_name(o) for o in shop] == ["a", "b"]

    def test_unannotated_objects_belong_to_default_application(
        self, search: ResourceSearch, dynamic: MagicMock
    ) -> None:
        """Test that objects without application annotations belong to default.application."""
        dynamic.resources.get.return_value = _api(
            [make_object("a", annotations={"dev.nocalhost/application-name": "shop"}), make_object("d")]
        )

        default = search.get_by_resource_name_app_namespace("pods", "", "default.application", "ns1")

        assert [object_name(o) for o in default] == ["d"]


class TestResourceCache:
    """Tests for ResourceCache handle reuse."""

    def test_resolve_reuses_handles(self, kubeconfig: str) -> None:
        """Test that repeated requests share one handle."""
        cache = ResourceCache(ttl_seconds=60)

        with (
            patch("devspace_mcp.clients.cache.new_api_client") as new_client,
            patch("devspace_mcp.clients.cache.DynamicClient") as dynamic_cls,
        ):
            first = cache.resolve(kubeconfig, "ns1")
            second = cache.resolve(kubeconfig, "ns1")
            other = cache.resolve(kubeconfig, "ns2")

        assert first is second
        assert other is not first
        assert other._namespace == "ns2"
        assert dynamic_cls.call_count == 2
        new_client.assert_called_with(kubeconfig)

    def test_zero_ttl_disables_reuse(self, kubeconfig: str) -> None:
        """Test that a TTL of zero builds a handle per request."""
        cache = ResourceCache(ttl_seconds=0)

        with (
            patch("devspace_mcp.clients.cache.new_api_client"),
            patch("devspace_mcp.clients.cache.DynamicClient"),
        ):
            first = cache.resolve(kubeconfig, "ns1")
            second = cache.resolve(kubeconfig, "ns1")

        assert first is not second

    def test_clear_drops_handles(self, kubeconfig: str) -> None:
        """Test that clear() forces new handles."""
        cache = ResourceCache(ttl_seconds=60)

        with (
            patch("devspace_mcp.clients.cache.new_api_client"),
            patch("devspace_mcp.clients.cache.DynamicClient"),
        ):
            first = cache.resolve(kubeconfig, "ns1")
            cache.clear()
            second = cache.resolve(kubeconfig, "ns1")

        assert first is not second

    def test_invalid_kubeconfig(self) -> None:
        """Test that an unusable kubeconfig raises CacheUnavailableError."""
        cache = ResourceCache()

        with patch(
            "devspace_mcp.clients.cache.new_api_client",
            side_effect=ConfigurationError("Kubeconfig is empty"),
        ):
            with pytest.raises(CacheUnavailableError) as exc_info:
                cache.resolve("", "ns1")

        assert exc_info.value.reason == "Kubeconfig is empty"

    def test_discovery_failure(self, kubeconfig: str) -> None:
        """Test that failing API discovery raises CacheUnavailableError."""
        cache = ResourceCache()

        with (
            patch("devspace_mcp.clients.cache.new_api_client"),
            patch(
                "devspace_mcp.clients.cache.DynamicClient",
                side_effect=OSError("connection refused"),
            ),
        ):
            with pytest.raises(CacheUnavailableError):
                cache.resolve(kubeconfig, "ns1")
