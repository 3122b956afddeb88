"""Annotation keys that tie cluster objects to developer applications."""

from typing import Any


class DevspaceAnnotations:
    """Annotations used to resolve application membership."""

    APPLICATION_NAME = "dev.nocalhost/application-name"
    HELM_RELEASE_NAME = "meta.helm.sh/release-name"

    DEFAULT_APPLICATION = "default.application"

    @classmethod
    def application_of(cls, annotations: dict[str, Any] | None) -> str:
        """Return the application an object belongs to.

        Objects installed by the developer tooling carry the application
        annotation; Helm-managed objects fall back to their release name.
        Anything else belongs to the default application.
        """
        annotations = annotations or {}
        name = annotations.get(cls.APPLICATION_NAME) or annotations.get(cls.HELM_RELEASE_NAME)
        return name or cls.DEFAULT_APPLICATION
