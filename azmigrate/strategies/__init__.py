"""Migration strategies.

Rule-based strategies are built from rule files at startup. The compiled-in
strategies below are registered after them as fallbacks, in this order.
Order matters: markers of several archetypes can co-occur in one project
file and the first strategy that claims a project wins.
"""
from __future__ import annotations

from .aspnetcore import AspNetCoreMigrationStrategy
from .base import BaseMigrationStrategy, MigrationStrategy
from .console import ConsoleMigrationStrategy
from .rule_based import RuleBasedMigrationStrategy
from .worker import WorkerServiceMigrationStrategy

DEFAULT_APP_TYPE = AspNetCoreMigrationStrategy.app_type_name


def builtin_strategies() -> list[MigrationStrategy]:
    """Fresh instances of the compiled-in strategies in registration order."""
    return [
        AspNetCoreMigrationStrategy(),
        ConsoleMigrationStrategy(),
        WorkerServiceMigrationStrategy(),
    ]


__all__ = [
    "DEFAULT_APP_TYPE",
    "AspNetCoreMigrationStrategy",
    "BaseMigrationStrategy",
    "ConsoleMigrationStrategy",
    "MigrationStrategy",
    "RuleBasedMigrationStrategy",
    "WorkerServiceMigrationStrategy",
    "builtin_strategies",
]
