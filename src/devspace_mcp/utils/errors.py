"""Exception types raised by Devspace MCP collaborators."""


class DevspaceError(Exception):
    """Base class for all Devspace MCP errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CacheUnavailableError(DevspaceError):
    """A search handle could not be built for a kubeconfig and namespace."""

    def __init__(self, namespace: str, reason: str) -> None:
        self.namespace = namespace
        self.reason = reason
        target = namespace or "<cluster>"
        super().__init__(f"Resource cache unavailable for {target}: {reason}")


class ResourceQueryError(DevspaceError):
    """Listing objects of one resource kind failed."""

    def __init__(self, resource: str, namespace: str, reason: str) -> None:
        self.resource = resource
        self.namespace = namespace
        self.reason = reason
        super().__init__(f"Failed to query {resource} in '{namespace}': {reason}")


class UnknownResourceKindError(ResourceQueryError):
    """The cluster does not serve the requested resource kind."""

    def __init__(self, resource: str, namespace: str = "") -> None:
        super().__init__(resource, namespace, "resource kind is not served by the cluster")


class ProfileNotFoundError(DevspaceError):
    """No local profile exists for a namespace and application."""

    def __init__(self, namespace: str, application: str) -> None:
        self.namespace = namespace
        self.application = application
        super().__init__(f"No profile for application '{application}' in '{namespace}'")


class ProfileLoadError(DevspaceError):
    """A local profile exists but could not be read or parsed."""

    def __init__(self, namespace: str, application: str, reason: str) -> None:
        self.namespace = namespace
        self.application = application
        self.reason = reason
        super().__init__(
            f"Failed to load profile for application '{application}' in '{namespace}': {reason}"
        )


class ApplicationDescriptionError(DevspaceError):
    """Building the live description of an application failed."""

    def __init__(self, application: str, reason: str) -> None:
        self.application = application
        self.reason = reason
        super().__init__(f"Cannot describe application '{application}': {reason}")


class ConfigurationError(DevspaceError):
    """Server configuration is invalid."""
