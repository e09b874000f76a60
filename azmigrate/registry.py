"""Strategy registry and resolution.

The registry is built once at startup by ``build_registry`` and is only
read afterwards. Registration order is precedence order: rule-file
strategies first, then plugin strategies, then the compiled-in fallbacks.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from azmigrate.errors import NoMatchingStrategyError, StrategyNotFoundError
from azmigrate.models import MigrationRule, ProjectAnalysisContext
from azmigrate.strategies import MigrationStrategy, RuleBasedMigrationStrategy, builtin_strategies

logger = logging.getLogger("azmigrate.registry")


class StrategyRegistry:
    """Ordered collection of migration strategies. First match wins."""

    def __init__(self, strategies: Iterable[MigrationStrategy] = ()):
        self._strategies: list[MigrationStrategy] = []
        for strategy in strategies:
            self.register(strategy)

    def register(self, strategy: MigrationStrategy) -> None:
        """Append a strategy. No deduplication; callers control precedence by order."""
        self._strategies.append(strategy)
        logger.debug("Registered strategy %r", strategy)

    @property
    def strategies(self) -> tuple[MigrationStrategy, ...]:
        return tuple(self._strategies)

    def resolve(self, context: ProjectAnalysisContext) -> MigrationStrategy:
        """Return the first strategy that can handle the project.

        Raises:
            NoMatchingStrategyError: If no strategy claims the project.
        """
        for strategy in self._strategies:
            if strategy.can_handle(context):
                logger.info("Resolved %s as '%s'", context.project_path, strategy.app_type_name)
                return strategy
        raise NoMatchingStrategyError(str(context.project_path))

    def by_name(self, app_type: str) -> MigrationStrategy:
        """Case-insensitive exact lookup by app type name.

        Raises:
            StrategyNotFoundError: If no strategy has that name.
        """
        wanted = app_type.casefold()
        for strategy in self._strategies:
            if strategy.app_type_name.casefold() == wanted:
                return strategy
        raise StrategyNotFoundError(app_type, available=self.app_types())

    def app_types(self) -> list[str]:
        """Distinct app type names in registration order."""
        return list(dict.fromkeys(s.app_type_name for s in self._strategies))

    def __len__(self) -> int:
        return len(self._strategies)


def build_registry(
    rules: Iterable[MigrationRule],
    plugins: Iterable[MigrationStrategy] = (),
) -> StrategyRegistry:
    """Register rule strategies, then plugins, then the compiled-in fallbacks."""
    registry = StrategyRegistry()
    for rule in rules:
        registry.register(RuleBasedMigrationStrategy(rule))
    for strategy in plugins:
        registry.register(strategy)
    for strategy in builtin_strategies():
        registry.register(strategy)
    return registry
