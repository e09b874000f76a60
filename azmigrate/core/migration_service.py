"""Migration analysis service - the operations exposed to the CLI and MCP layers.

The operations named after the tool surface return a human-readable string for
both success and failure; callers are automated agents that expect text,
not exceptions.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from azmigrate.core.sweep import check_for_app_insights
from azmigrate.discovery import build_context
from azmigrate.errors import (
    DirectoryNotFoundError,
    MigratorError,
    NoMatchingStrategyError,
    StrategyNotFoundError,
)
from azmigrate.models import MigrationReport, ProjectAnalysisContext
from azmigrate.registry import StrategyRegistry, build_registry
from azmigrate.rules import RuleStore, is_rule_file_name, safe_rule_file_name, template_rule
from azmigrate.strategies import DEFAULT_APP_TYPE, MigrationStrategy

logger = logging.getLogger("azmigrate.core.migration")


class MigrationService:
    """Holds the strategy registry and rule store for the life of the process."""

    def __init__(
        self,
        registry: StrategyRegistry,
        store: RuleStore,
        default_app_type: str = DEFAULT_APP_TYPE,
    ):
        self.registry = registry
        self.store = store
        self.default_app_type = default_app_type

    # ── Analysis ──

    def select_strategy(self, project_path: Path) -> tuple[MigrationStrategy, ProjectAnalysisContext]:
        """Build the analysis context for a directory and pick its strategy.

        Falls back to the default app type when no strategy claims the project.

        Raises:
            DirectoryNotFoundError: If the directory does not exist.
        """
        if not Path(project_path).is_dir():
            raise DirectoryNotFoundError(str(project_path))

        context = build_context(Path(project_path))
        try:
            strategy = self.registry.resolve(context)
        except NoMatchingStrategyError:
            logger.info("No strategy matched %s, using '%s'", project_path, self.default_app_type)
            strategy = self.registry.by_name(self.default_app_type)
        return strategy, context

    def analyze(self, project_path: Path) -> tuple[str, MigrationReport]:
        """Analyze a project and return the chosen app type with its report.

        Raises:
            DirectoryNotFoundError: If the directory does not exist.
            StrategyNotFoundError: If the default app type is not registered.
        """
        strategy, context = self.select_strategy(project_path)
        return strategy.app_type_name, strategy.generate_migration(context)

    def analyze_project(self, project_path: str) -> str:
        """Rendered migration report for a project directory."""
        try:
            _, report = self.analyze(Path(project_path))
        except DirectoryNotFoundError:
            return f"Error: Directory {project_path} does not exist."
        except (MigratorError, OSError) as e:
            return f"Error: {e}"
        return report.render()

    # ── Lookup ──

    def generate_migration_code(self, app_type: str) -> str:
        """Sample replacement code for a named app type."""
        try:
            return self.registry.by_name(app_type).generate_sample_code()
        except StrategyNotFoundError:
            supported = ", ".join(self.registry.app_types())
            return f"Unsupported app type: '{app_type}'. Supported types are: {supported}"

    def list_supported_app_types(self) -> str:
        return f"Supported application types for migration: {', '.join(self.registry.app_types())}"

    def check_for_app_insights(self, path: str) -> str:
        try:
            return check_for_app_insights(path)
        except OSError as e:
            return f"Error: {e}"

    # ── Rules ──

    def create_migration_rule(self, app_type: str, rule_file_path: str = "") -> str:
        """Write a rule template for a custom app type.

        A path that is empty or lacks a rule file extension is replaced by a
        file named after the app type in the configured rules directory.
        """
        rule = template_rule(app_type)
        if rule_file_path and is_rule_file_name(rule_file_path):
            target = Path(rule_file_path)
            store = RuleStore(target.parent)
        else:
            target = self.store.rules_dir / safe_rule_file_name(app_type)
            store = self.store

        try:
            saved = store.save(rule, target.name)
        except MigratorError as e:
            logger.warning("Could not save rule for '%s': %s", app_type, e)
            return f"Error creating migration rule: {e}"

        return (
            f"Migration rule template created for '{app_type}' at {saved}. "
            "Customize it with your specific detection patterns and migration steps."
        )


def create_service(
    rules_dir: Optional[Path] = None,
    load_plugins: Optional[bool] = None,
) -> MigrationService:
    """Build the service once at startup: load rules, discover plugins, register strategies."""
    from azmigrate.core.config_service import get_config_service

    config = get_config_service()
    store = RuleStore(rules_dir or config.get_rules_dir())
    rules = store.load_all()

    if load_plugins is None:
        load_plugins = config.plugins_enabled()
    plugins = []
    if load_plugins:
        from azmigrate.plugins import discover_strategies
        plugins = discover_strategies()

    registry = build_registry(rules, plugins)
    logger.info(
        "Registered %d strategies (%d from rules in %s)",
        len(registry), len(rules), store.rules_dir,
    )
    return MigrationService(registry, store, default_app_type=config.get_default_app_type())
