"""Helpers for kubeconfig content passed with each request."""

from __future__ import annotations

import logging
from typing import Any

import yaml
from kubernetes import config as k8s_config
from kubernetes.client import ApiClient
from kubernetes.config.config_exception import ConfigException

from devspace_mcp.utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


def parse_kubeconfig(content: str) -> dict[str, Any]:
    """Parse kubeconfig content into a dict.

    Raises:
        ConfigurationError: If the content is empty or not a kubeconfig.
    """
    if not content or not content.strip():
        raise ConfigurationError("Kubeconfig is empty")
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Kubeconfig is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError("Kubeconfig must be a YAML mapping")
    return data


def current_context(data: dict[str, Any]) -> dict[str, Any]:
    """Return the ``context`` block of the kubeconfig's current context."""
    name = data.get("current-context")
    if not name:
        raise ConfigurationError("Kubeconfig has no current-context")
    for entry in data.get("contexts") or []:
        if entry and entry.get("name") == name:
            return entry.get("context") or {}
    raise ConfigurationError(f"Current context '{name}' not found in kubeconfig")


def default_namespace(content: str) -> str:
    """Namespace of the kubeconfig's current context.

    Returns an empty string when the context does not pin a namespace.

    Raises:
        ConfigurationError: If the kubeconfig cannot be parsed.
    """
    context = current_context(parse_kubeconfig(content))
    return context.get("namespace") or ""


def new_api_client(content: str) -> ApiClient:
    """Build an API client for the kubeconfig's current context.

    Raises:
        ConfigurationError: If the kubeconfig is unusable.
    """
    data = parse_kubeconfig(content)
    try:
        return k8s_config.new_client_from_config_dict(data, persist_config=False)
    except ConfigException as e:
        raise ConfigurationError(f"Invalid kubeconfig: {e}") from e
