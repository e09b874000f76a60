"""MCP server integration."""
