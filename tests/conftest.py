"""Shared pytest fixtures."""

import base64
from typing import Any
from unittest.mock import MagicMock

import pytest

KUBECONFIG = """\
apiVersion: v1
kind: Config
current-context: dev
clusters:
  - name: dev-cluster
    cluster:
      server: https://127.0.0.1:6443
contexts:
  - name: dev
    context:
      cluster: dev-cluster
      user: developer
      namespace: dev-space
users:
  - name: developer
    user:
      token: not-a-real-token
"""


def make_object(
    name: str,
    kind: str = "Pod",
    namespace: str = "ns1",
    created: str | None = "2024-01-01T00:00:00Z",
    annotations: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build a cluster object in the dict form search handles return."""
    metadata: dict[str, Any] = {
        "name": name,
        "namespace": namespace,
        "annotations": annotations or {},
    }
    if created is not None:
        metadata["creationTimestamp"] = created
    return {"apiVersion": "v1", "kind": kind, "metadata": metadata}


def make_secret(name: str, namespace: str = "ns1", **fields: str) -> MagicMock:
    """Build an application Secret with base64-encoded data fields."""
    secret = MagicMock()
    secret.metadata.name = f"dev.nocalhost.application.{name}"
    secret.metadata.namespace = namespace
    secret.data = {
        key: base64.b64encode(value.encode("utf-8")).decode("ascii") for key, value in fields.items()
    }
    return secret


@pytest.fixture
def kubeconfig() -> str:
    """Kubeconfig content whose current context pins the 'dev-space' namespace."""
    return KUBECONFIG
