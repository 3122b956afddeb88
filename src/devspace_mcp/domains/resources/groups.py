"""Fixed partition of resource kinds into display groups.

Every kind belongs to exactly one group, and groups are listed in display
order. Changing the partition is a data change only.
"""

from types import MappingProxyType

WORKLOADS = "Workloads"
NETWORKS = "Networks"
CONFIGURATIONS = "Configurations"
STORAGES = "Storages"

RESOURCE_GROUPS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        WORKLOADS: ("deployments", "statefulsets", "daemonsets", "jobs", "cronjobs", "pods"),
        NETWORKS: ("services", "endpoints", "ingresses", "networkpolicies"),
        CONFIGURATIONS: (
            "configmaps",
            "secrets",
            "horizontalpodautoscalers",
            "resourcequotas",
            "poddisruptionbudgets",
        ),
        STORAGES: ("persistentvolumes", "persistentvolumeclaims", "storageclasses"),
    }
)
