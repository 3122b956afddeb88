"""Request and response models for resource info queries.

The response tree mirrors how resources are shown to developers:
namespace -> application -> group -> resource kind -> objects. ``to_wire()``
renders each model with the field names clients already consume.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from devspace_mcp.domains.applications.models import ApplicationMeta
from devspace_mcp.domains.profiles.models import ServiceProfile

ALL_RESOURCES = "all"
APPLICATION_RESOURCES = frozenset({"app", "application"})


class ResourceInfoRequest(BaseModel):
    """A query for resources of one cluster."""

    kubeconfig: str = Field("", description="Kubeconfig content identifying the cluster")
    namespace: str = Field("", description="Namespace to query; empty derives it from the kubeconfig")
    app_name: str = Field("", description="Restrict results to one application")
    resource: str = Field(..., description="'all', 'app'/'application', or a plural resource kind")
    resource_name: str = Field("", description="Name of a single resource or application")


class Item(BaseModel):
    """One cluster object with its developer profile, if any."""

    metadata: dict[str, Any] = Field(default_factory=dict, description="The cluster object")
    description: ServiceProfile | None = Field(None, description="Profile of the matching service")

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {}
        if self.metadata:
            wire["data"] = self.metadata
        if self.description is not None:
            wire["description"] = self.description.model_dump(mode="json", by_alias=True)
        return wire


class Resource(BaseModel):
    """All objects of one resource kind."""

    name: str
    items: list[Item] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {"name": self.name, "list": [item.to_wire() for item in self.items]}


class Group(BaseModel):
    """Resource kinds of one display group."""

    group_name: str
    resources: list[Resource] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {"type": self.group_name, "resource": [r.to_wire() for r in self.resources]}


class App(BaseModel):
    """Grouped resources of one application."""

    name: str
    groups: list[Group] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {"name": self.name, "group": [g.to_wire() for g in self.groups]}


class Result(BaseModel):
    """Applications of one namespace."""

    namespace: str
    applications: list[App] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {"namespace": self.namespace, "application": [a.to_wire() for a in self.applications]}


class ClusterTree(BaseModel):
    """One result per namespace of the cluster."""

    kind: Literal["cluster_tree"] = "cluster_tree"
    results: list[Result]

    def to_wire(self) -> list[dict[str, Any]]:
        return [r.to_wire() for r in self.results]


class NamespaceTree(BaseModel):
    """The result for a single namespace."""

    kind: Literal["namespace_tree"] = "namespace_tree"
    result: Result

    def to_wire(self) -> dict[str, Any]:
        return self.result.to_wire()


class ApplicationList(BaseModel):
    """Applications of a namespace, sorted by name."""

    kind: Literal["application_list"] = "application_list"
    applications: list[ApplicationMeta | None]

    def to_wire(self) -> list[dict[str, Any] | None]:
        return [meta.model_dump(mode="json") if meta else None for meta in self.applications]


class ApplicationDetail(BaseModel):
    """A single application."""

    kind: Literal["application"] = "application"
    application: ApplicationMeta

    def to_wire(self) -> dict[str, Any]:
        return self.application.model_dump(mode="json")


class ItemList(BaseModel):
    """Objects of one kind, oldest first."""

    kind: Literal["item_list"] = "item_list"
    items: list[Item]

    def to_wire(self) -> list[dict[str, Any]]:
        return [item.to_wire() for item in self.items]


class ItemDetail(BaseModel):
    """A single named object."""

    kind: Literal["item"] = "item"
    item: Item

    def to_wire(self) -> dict[str, Any]:
        return self.item.to_wire()


ResourceInfoResponse = Annotated[
    Union[ClusterTree, NamespaceTree, ApplicationList, ApplicationDetail, ItemList, ItemDetail],
    Field(discriminator="kind"),
]


def to_wire(response: ResourceInfoResponse | None) -> Any:
    """Render a response for transport; no data renders as None."""
    if response is None:
        return None
    return response.to_wire()
