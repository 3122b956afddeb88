"""Entry point for the Devspace MCP server."""

import argparse
import logging
import sys
from typing import Any

from devspace_mcp import __version__
from devspace_mcp.config import DevspaceConfig, LogLevel, TransportMode


def setup_logging(level: LogLevel) -> None:
    """Configure logging for the server.

    Logs go to stderr; the stdio transport owns stdout.
    """
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="devspace-mcp",
        description="MCP server for inspecting developer workspaces in Kubernetes",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Transport options
    parser.add_argument(
        "--transport",
        choices=[mode.value for mode in TransportMode],
        default=None,
        help="Transport mode (default: from config or stdio)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind HTTP server to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind HTTP server to (default: 8000)",
    )

    # Cluster and profile options
    parser.add_argument(
        "--kubeconfig",
        default=None,
        help="Kubeconfig used when a request does not carry one",
    )
    parser.add_argument(
        "--profile-home",
        default=None,
        help="Root directory of local developer profiles (default: ~/.nh/nhctl)",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Logging level (default: INFO)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> DevspaceConfig:
    """Build config from args, falling back to environment/defaults."""
    config_kwargs: dict[str, Any] = {}

    if args.transport:
        config_kwargs["transport"] = TransportMode(args.transport)
    if args.host:
        config_kwargs["host"] = args.host
    if args.port:
        config_kwargs["port"] = args.port
    if args.kubeconfig:
        config_kwargs["kubeconfig_path"] = args.kubeconfig
    if args.profile_home:
        config_kwargs["profile_home"] = args.profile_home
    if args.log_level:
        config_kwargs["log_level"] = LogLevel(args.log_level)

    return DevspaceConfig(**config_kwargs)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    config = build_config(parse_args(argv))
    setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting Devspace MCP server v{__version__}")

    from devspace_mcp.server import create_server

    mcp = create_server(config)

    if config.transport == TransportMode.STDIO:
        logger.info("Running with stdio transport")
    else:
        logger.info(f"Running with {config.transport.value} transport on {config.host}:{config.port}")
    mcp.run(transport=config.transport.value)

    return 0


if __name__ == "__main__":
    sys.exit(main())
