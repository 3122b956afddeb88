"""Tests for configuration and command line handling."""

from pathlib import Path

import pytest

from devspace_mcp.__main__ import build_config, parse_args
from devspace_mcp.config import DevspaceConfig, LogLevel, TransportMode
from devspace_mcp.utils.errors import ConfigurationError


class TestDevspaceConfig:
    """Tests for DevspaceConfig."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default settings."""
        monkeypatch.delenv("DEVSPACE_MCP_TRANSPORT", raising=False)
        config = DevspaceConfig()

        assert config.transport == TransportMode.STDIO
        assert config.search_cache_ttl_seconds == 300
        assert config.kind_query_workers == 0
        assert config.profile_home == Path.home() / ".nh" / "nhctl"

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that settings are read from DEVSPACE_MCP_ variables."""
        monkeypatch.setenv("DEVSPACE_MCP_KIND_QUERY_WORKERS", "4")
        monkeypatch.setenv("DEVSPACE_MCP_LOG_LEVEL", "DEBUG")

        config = DevspaceConfig()

        assert config.kind_query_workers == 4
        assert config.log_level == LogLevel.DEBUG

    def test_expands_user(self) -> None:
        """Test that home-relative paths are expanded."""
        config = DevspaceConfig(profile_home="~/profiles")

        assert config.profile_home == Path.home() / "profiles"

    def test_load_default_kubeconfig(self, tmp_path: Path) -> None:
        """Test reading the configured kubeconfig."""
        path = tmp_path / "config"
        path.write_text("apiVersion: v1\n")
        config = DevspaceConfig(kubeconfig_path=path)

        assert config.load_default_kubeconfig() == "apiVersion: v1\n"

    def test_load_default_kubeconfig_missing_home_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that no kubeconfig is an empty string."""
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        config = DevspaceConfig(profile_home=tmp_path)

        assert config.load_default_kubeconfig() == ""

    def test_load_default_kubeconfig_unreadable(self, tmp_path: Path) -> None:
        """Test that an unreadable kubeconfig raises ConfigurationError."""
        config = DevspaceConfig(kubeconfig_path=tmp_path / "missing")

        with pytest.raises(ConfigurationError, match="Cannot read kubeconfig"):
            config.load_default_kubeconfig()


class TestCommandLine:
    """Tests for argument parsing."""

    def test_build_config_overrides(self, tmp_path: Path) -> None:
        """Test that command line options override settings."""
        args = parse_args(
            [
                "--transport",
                "sse",
                "--port",
                "9000",
                "--profile-home",
                str(tmp_path),
                "--log-level",
                "WARNING",
            ]
        )

        config = build_config(args)

        assert config.transport == TransportMode.SSE
        assert config.port == 9000
        assert config.profile_home == tmp_path
        assert config.log_level == LogLevel.WARNING

    def test_rejects_unknown_transport(self) -> None:
        """Test that an unknown transport is rejected."""
        with pytest.raises(SystemExit):
            parse_args(["--transport", "carrier-pigeon"])
