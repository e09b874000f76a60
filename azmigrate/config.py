"""Environment bootstrap and configuration shortcuts for azmigrate.

Loads a ``.env`` file from the current directory (if present) so that
AZMIGRATE_* variables can be kept alongside a project, then delegates to
azmigrate.core.config_service for layered resolution.
"""
from pathlib import Path

from dotenv import load_dotenv

env_file = Path.cwd() / ".env"
if env_file.exists():
    load_dotenv(env_file)


def get_rules_dir() -> Path:
    """Directory holding migration rule files."""
    from azmigrate.core.config_service import get_config_service
    return get_config_service().get_rules_dir()


def get_default_app_type() -> str:
    """Archetype used when no strategy claims a project."""
    from azmigrate.core.config_service import get_config_service
    return get_config_service().get_default_app_type()
