"""Strategy plugin discovery via setuptools entry points.

Third-party packages can contribute migration strategies by declaring
entry points in their ``pyproject.toml``::

    [project.entry-points."azmigrate.strategies"]
    functions = "azmigrate_functions:AzureFunctionsMigrationStrategy"

After ``pip install azmigrate-functions``, the strategy is registered after
rule-file strategies and before the compiled-in fallbacks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib.metadata import entry_points

from azmigrate.strategies import MigrationStrategy

logger = logging.getLogger("azmigrate.plugins")

STRATEGY_GROUP = "azmigrate.strategies"


@dataclass
class PluginInfo:
    """Metadata about a discovered plugin."""

    name: str
    module: str
    loaded: bool = False
    app_type: str = ""
    error: str = ""


def _instantiate(obj: object) -> MigrationStrategy:
    """Entry points may name a strategy class or a ready instance."""
    strategy = obj() if isinstance(obj, type) else obj
    if not isinstance(strategy, MigrationStrategy):
        raise TypeError(f"{obj!r} does not implement the migration strategy protocol")
    return strategy


def discover_strategies() -> list[MigrationStrategy]:
    """Load every strategy registered under the ``azmigrate.strategies`` group.

    Plugins that fail to import or instantiate are logged and skipped.
    """
    strategies: list[MigrationStrategy] = []
    for ep in sorted(entry_points(group=STRATEGY_GROUP), key=lambda ep: ep.name):
        try:
            strategies.append(_instantiate(ep.load()))
            logger.debug("Loaded strategy plugin %s from %s", ep.name, ep.value)
        except Exception as e:
            logger.warning("Failed to load strategy plugin %s: %s", ep.name, e)
    return strategies


def list_plugins() -> list[PluginInfo]:
    """List all strategy plugins with their load status."""
    results = []
    for ep in sorted(entry_points(group=STRATEGY_GROUP), key=lambda ep: ep.name):
        info = PluginInfo(name=ep.name, module=ep.value)
        try:
            info.app_type = _instantiate(ep.load()).app_type_name
            info.loaded = True
        except Exception as e:
            info.error = str(e)
        results.append(info)
    return results
