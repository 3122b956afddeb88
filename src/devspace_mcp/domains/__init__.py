"""Domain modules of the Devspace MCP server."""
