"""MCP server exposing the migration assistant as tools.

Runs via STDIO transport. Entry point: `azmigrate-mcp` console script.

Usage:
    {"mcpServers": {"azmigrate": {"command": "azmigrate-mcp"}}}

The strategy registry is built once, on the first tool call, and reused for
the life of the process. Every tool returns plain text.
"""
from __future__ import annotations

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from azmigrate.core import MigrationService, create_service

logger = logging.getLogger("azmigrate.mcp")

mcp = FastMCP("azmigrate")

_service: Optional[MigrationService] = None


def get_service() -> MigrationService:
    """Get or create the process-wide MigrationService."""
    global _service
    if _service is None:
        _service = create_service()
    return _service


def reset_service() -> None:
    """Drop the cached service (useful for testing)."""
    global _service
    _service = None


@mcp.tool()
async def analyze_project(project_path: str) -> str:
    """Analyzes a C# project and suggests changes needed to migrate from
    Application Insights SDK to Azure Monitor OpenTelemetry Distro.

    Args:
        project_path: Absolute path to the project directory.
    """
    return get_service().analyze_project(project_path)


@mcp.tool()
async def generate_migration_code(app_type: str) -> str:
    """Generates sample migration code for replacing Application Insights SDK
    with Azure Monitor OpenTelemetry Distro.

    Args:
        app_type: App type name, e.g. "ASP.NET Core", "Console", "Worker Service".
    """
    return get_service().generate_migration_code(app_type)


@mcp.tool()
async def check_for_app_insights(file_path: str) -> str:
    """Checks if a project file or folder contains Application Insights SDK
    references that need migration.

    Args:
        file_path: A .csproj, .cs, .props, .targets or .properties file, or a directory.
    """
    return get_service().check_for_app_insights(file_path)


@mcp.tool()
async def list_supported_app_types() -> str:
    """Lists all supported application types for migration code generation."""
    return get_service().list_supported_app_types()


@mcp.tool()
async def create_migration_rule(app_type: str, rule_file_path: str = "") -> str:
    """Creates a new rule file for a custom migration scenario.

    Args:
        app_type: Name of the new app type.
        rule_file_path: Where to write the rule (.yaml, .yml or .json). Defaults to the rules directory.
    """
    return get_service().create_migration_rule(app_type, rule_file_path)


def main():
    """Run the azmigrate MCP server via STDIO transport."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
