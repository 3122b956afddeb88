"""Devspace MCP - cluster inspection server for developer workspaces."""

__version__ = "0.1.0"
