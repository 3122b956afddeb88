"""Configuration for the Devspace MCP server.

Settings are read from environment variables with the DEVSPACE_MCP_ prefix
or from a .env file, and may be overridden from the command line.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TransportMode(str, Enum):
    """MCP transport used to serve the tools."""

    STDIO = "stdio"
    SSE = "sse"
    STREAMABLE_HTTP = "streamable-http"


class LogLevel(str, Enum):
    """Logging levels accepted by the server."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class DevspaceConfig(BaseSettings):
    """Configuration for the Devspace MCP server."""

    model_config = SettingsConfigDict(
        env_prefix="DEVSPACE_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Transport
    transport: TransportMode = Field(
        default=TransportMode.STDIO,
        description="Transport mode for the MCP server",
    )
    host: str = Field(default="127.0.0.1", description="Host to bind HTTP transports to")
    port: int = Field(default=8000, description="Port to bind HTTP transports to")

    # Cluster access
    kubeconfig_path: Path | None = Field(
        default=None,
        description="Kubeconfig used when a request does not carry one",
    )

    # Local developer profiles
    profile_home: Path = Field(
        default_factory=lambda: Path.home() / ".nh" / "nhctl",
        description="Root directory of the local profile store",
    )

    # Resource search handles
    search_cache_ttl_seconds: int = Field(
        default=300,
        ge=0,
        description="Seconds a search handle is reused for the same kubeconfig and namespace",
    )
    search_cache_size: int = Field(
        default=32,
        ge=1,
        description="Maximum number of cached search handles",
    )
    kind_query_workers: int = Field(
        default=0,
        ge=0,
        description="Threads used to query resource kinds of one application (0 or 1 = sequential)",
    )

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    @field_validator("profile_home", "kubeconfig_path", mode="after")
    @classmethod
    def _expand_user(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None

    def load_default_kubeconfig(self) -> str:
        """Read the configured default kubeconfig.

        Returns:
            Kubeconfig content, or an empty string when none is configured.

        Raises:
            ConfigurationError: If the configured file cannot be read.
        """
        from devspace_mcp.utils.errors import ConfigurationError

        path = self.kubeconfig_path
        if path is None:
            default = Path.home() / ".kube" / "config"
            if not default.exists():
                return ""
            path = default
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read kubeconfig {path}: {e}") from e


_config: DevspaceConfig | None = None


def get_config() -> DevspaceConfig:
    """Get the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = DevspaceConfig()
    return _config
