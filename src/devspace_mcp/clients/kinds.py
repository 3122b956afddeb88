"""Built-in resource kinds known without API discovery."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class ResourceKind:
    """A Kubernetes resource type addressed by its plural name."""

    api_version: str
    kind: str
    plural: str
    namespaced: bool = True


_KINDS = (
    ResourceKind("apps/v1", "Deployment", "deployments"),
    ResourceKind("apps/v1", "StatefulSet", "statefulsets"),
    ResourceKind("apps/v1", "DaemonSet", "daemonsets"),
    ResourceKind("batch/v1", "Job", "jobs"),
    ResourceKind("batch/v1", "CronJob", "cronjobs"),
    ResourceKind("v1", "Pod", "pods"),
    ResourceKind("v1", "Service", "services"),
    ResourceKind("v1", "Endpoints", "endpoints"),
    ResourceKind("networking.k8s.io/v1", "Ingress", "ingresses"),
    ResourceKind("networking.k8s.io/v1", "NetworkPolicy", "networkpolicies"),
    ResourceKind("v1", "ConfigMap", "configmaps"),
    ResourceKind("v1", "Secret", "secrets"),
    ResourceKind("autoscaling/v2", "HorizontalPodAutoscaler", "horizontalpodautoscalers"),
    ResourceKind("v1", "ResourceQuota", "resourcequotas"),
    ResourceKind("policy/v1", "PodDisruptionBudget", "poddisruptionbudgets"),
    ResourceKind("v1", "PersistentVolume", "persistentvolumes", namespaced=False),
    ResourceKind("v1", "PersistentVolumeClaim", "persistentvolumeclaims"),
    ResourceKind("storage.k8s.io/v1", "StorageClass", "storageclasses", namespaced=False),
    ResourceKind("v1", "Namespace", "namespaces", namespaced=False),
)

BUILTIN_KINDS: MappingProxyType[str, ResourceKind] = MappingProxyType(
    {kind.plural: kind for kind in _KINDS}
)


def lookup_kind(plural: str) -> ResourceKind | None:
    """Return the built-in kind for a plural name, if any."""
    return BUILTIN_KINDS.get(plural.lower())
