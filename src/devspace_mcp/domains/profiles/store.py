"""File-backed store of application profiles.

Profiles live under ``<home>/ns/<namespace>/<application>/profile.yaml``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from devspace_mcp.domains.profiles.models import PROFILE_VERSION, ApplicationProfile
from devspace_mcp.utils.errors import ProfileLoadError, ProfileNotFoundError

logger = logging.getLogger(__name__)

PROFILE_FILE_NAME = "profile.yaml"


class ProfileStore:
    """Reads application profiles from the local profile home."""

    def __init__(self, home: Path) -> None:
        self._home = home

    def profile_path(self, namespace: str, application: str) -> Path:
        """Path of the profile document for an application."""
        return self._home / "ns" / namespace / application / PROFILE_FILE_NAME

    def load(self, namespace: str, application: str) -> ApplicationProfile:
        """Load the profile of an application.

        Raises:
            ProfileNotFoundError: If no profile exists.
            ProfileLoadError: If the profile cannot be read, parsed, or has
                an unsupported version.
        """
        if not namespace or not application:
            raise ProfileNotFoundError(namespace, application)

        path = self.profile_path(namespace, application)
        if not path.is_file():
            raise ProfileNotFoundError(namespace, application)

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ProfileLoadError(namespace, application, str(e)) from e
        if not isinstance(data, dict):
            raise ProfileLoadError(namespace, application, "profile is not a mapping")

        version = data.get("version", PROFILE_VERSION)
        if version != PROFILE_VERSION:
            raise ProfileLoadError(namespace, application, f"unsupported profile version '{version}'")

        try:
            profile = ApplicationProfile.model_validate(data)
        except ValidationError as e:
            raise ProfileLoadError(namespace, application, str(e)) from e

        logger.debug(f"Loaded profile for {application} in '{namespace}' from {path}")
        return profile.model_copy(
            update={
                "namespace": profile.namespace or namespace,
                "application": profile.application or application,
            }
        )
