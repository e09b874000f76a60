"""Layered configuration for the rule store and strategy registry.

Each setting is taken from the first layer that defines it:

1. Command-line flags (``--rules-dir``, ``--no-plugins``), handed straight to create_service()
2. ``AZMIGRATE_*`` environment variables
3. ``.azmigrate.toml`` in the working directory
4. ``~/.config/azmigrate/config.toml``
5. DEFAULTS below

Files are TOML, grouped into ``[rules]`` and ``[ui]`` tables.
"""
from __future__ import annotations

import copy
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import tomli_w

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger("azmigrate.config")

PROJECT_CONFIG_NAME = ".azmigrate.toml"

DEFAULTS: dict[str, Any] = {
    "rules": {
        "dir": "",  # empty: <global config dir>/rules
        "default_app_type": "ASP.NET Core",
        "plugins": True,
    },
    "ui": {
        "plain_output": False,
    },
}

ENV_VAR_MAP = {
    "AZMIGRATE_RULES_DIR": "rules.dir",
    "AZMIGRATE_DEFAULT_APP_TYPE": "rules.default_app_type",
    "AZMIGRATE_PLUGINS": "rules.plugins",
    "AZMIGRATE_PLAIN": "ui.plain_output",
}

_TRUE = ("true", "1", "yes")
_FALSE = ("false", "0", "no")


def config_home() -> Path:
    """~/.config/azmigrate, home of the global config file and default rules directory."""
    return Path.home() / ".config" / "azmigrate"


def global_config_path() -> Path:
    return config_home() / "config.toml"


def project_config_path() -> Path:
    return Path.cwd() / PROJECT_CONFIG_NAME


def _read_toml(path: Path) -> dict:
    """Parse a TOML file. Missing or malformed files count as empty."""
    if not path.is_file():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return {}


def _write_toml(data: dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        tomli_w.dump(data, f)


def _deep_merge(base: dict, override: dict) -> dict:
    """Return base updated by override, recursing into nested tables."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _get_nested(data: dict, dotted_key: str, default: Any = None) -> Any:
    node: Any = data
    for part in dotted_key.split("."):
        if not isinstance(node, dict) or node.get(part) is None:
            return default
        node = node[part]
    return node


def _set_nested(data: dict, dotted_key: str, value: Any) -> None:
    *tables, leaf = dotted_key.split(".")
    node = data
    for part in tables:
        if not isinstance(node.get(part), dict):
            node[part] = {}
        node = node[part]
    node[leaf] = value


def _env_value(raw: str) -> Any:
    lowered = raw.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return raw


def _env_overrides() -> dict:
    overrides: dict = {}
    for var, dotted_key in ENV_VAR_MAP.items():
        raw = os.environ.get(var)
        if raw is not None:
            _set_nested(overrides, dotted_key, _env_value(raw))
    return overrides


@dataclass
class ResolvedConfig:
    """Merged settings plus the files that contributed to them."""
    data: dict = field(default_factory=dict)
    global_config_path: Optional[Path] = None
    project_config_path: Optional[Path] = None

    def get(self, dotted_key: str, default: Any = None) -> Any:
        return _get_nested(self.data, dotted_key, default)


class ConfigService:
    """Resolves settings once and caches them until a write or a forced refresh."""

    def __init__(self):
        self._resolved: Optional[ResolvedConfig] = None

    def resolve(self, force: bool = False) -> ResolvedConfig:
        if self._resolved is not None and not force:
            return self._resolved

        global_path = global_config_path()
        project_path = project_config_path()

        data = copy.deepcopy(DEFAULTS)
        for path in (global_path, project_path):
            layer = _read_toml(path)
            if layer:
                logger.debug("Merging config from %s", path)
                data = _deep_merge(data, layer)
        data = _deep_merge(data, _env_overrides())

        self._resolved = ResolvedConfig(
            data=data,
            global_config_path=global_path if global_path.is_file() else None,
            project_config_path=project_path if project_path.is_file() else None,
        )
        return self._resolved

    def get(self, dotted_key: str, default: Any = None) -> Any:
        return self.resolve().get(dotted_key, default)

    def get_rules_dir(self) -> Path:
        """Directory holding rule files."""
        configured = self.get("rules.dir", "")
        if isinstance(configured, str) and configured:
            return Path(configured).expanduser()
        return config_home() / "rules"

    def get_default_app_type(self) -> str:
        """Archetype used when no strategy claims a project."""
        return str(self.get("rules.default_app_type", DEFAULTS["rules"]["default_app_type"]))

    def plugins_enabled(self) -> bool:
        return bool(self.get("rules.plugins", True))

    def set_global(self, dotted_key: str, value: Any) -> None:
        """Persist one setting in the global config file."""
        path = global_config_path()
        data = _read_toml(path)
        _set_nested(data, dotted_key, value)
        _write_toml(data, path)
        self._resolved = None
        logger.info("Set %s = %r in %s", dotted_key, value, path)

    def init_project_config(self) -> Path:
        """Write a starter .azmigrate.toml that keeps rules next to the project.

        Raises:
            FileExistsError: If the file is already there.
        """
        path = project_config_path()
        if path.exists():
            raise FileExistsError(f"Project config already exists: {path}")
        _write_toml(
            {
                "rules": {
                    "dir": "./migration-rules",
                    "default_app_type": DEFAULTS["rules"]["default_app_type"],
                },
            },
            path,
        )
        self._resolved = None
        logger.info("Created project config: %s", path)
        return path

    def show(self) -> dict:
        resolved = self.resolve(force=True)
        return {
            "resolved": resolved.data,
            "rules_dir": str(self.get_rules_dir()),
            "sources": {
                "global_config": str(resolved.global_config_path) if resolved.global_config_path else None,
                "project_config": str(resolved.project_config_path) if resolved.project_config_path else None,
            },
        }


_config_service: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    global _config_service
    if _config_service is None:
        _config_service = ConfigService()
    return _config_service


def reset_config_service() -> None:
    """Forget the cached service so the next call re-reads every layer."""
    global _config_service
    _config_service = None
