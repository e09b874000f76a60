"""Service layer for azmigrate.

Services never import from azmigrate.ui, azmigrate.cli, or typer. Consumer
layers (CLI, MCP) handle presentation.
"""

from __future__ import annotations

from .migration_service import MigrationService, create_service

__all__ = ["MigrationService", "create_service"]
