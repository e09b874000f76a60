"""Custom exception hierarchy for azmigrate.

All azmigrate-specific exceptions derive from MigratorError. Each exception
carries an optional ``context`` dict with structured metadata (project
path, rule file, app type, etc.) that the CLI error handler can render.

Exception hierarchy::

    MigratorError
    ├── DirectoryNotFoundError
    ├── RuleFileNotFoundError
    ├── RuleParseError
    ├── RuleSaveError
    ├── NoMatchingStrategyError
    ├── StrategyNotFoundError
    └── ConfigError

CLI exit codes: 2 for a missing directory or rule file, 3 for a rule file
that cannot be read or written, 4 for strategy lookup failures, 1 otherwise.
"""
from __future__ import annotations

from typing import Optional


class MigratorError(Exception):
    """Base class for all azmigrate exceptions.

    Args:
        message: Human-readable error description.
        context: Optional dict of structured metadata.
    """

    exit_code: int = 1

    def __init__(self, message: str, context: Optional[dict] = None):
        self.context = context or {}
        super().__init__(message)


# ── Resource Not Found ─────────────────────────────────────────────

class DirectoryNotFoundError(MigratorError):
    """Raised when a project directory does not exist."""

    exit_code = 2

    def __init__(self, path: str):
        super().__init__(
            f"Directory {path} does not exist.",
            context={"path": path},
        )


class RuleFileNotFoundError(MigratorError):
    """Raised when a rule file cannot be found."""

    exit_code = 2

    def __init__(self, path: str):
        super().__init__(
            f"Rule file not found: {path}",
            context={"file": path},
        )


# ── Rule File Errors ───────────────────────────────────────────────

class RuleParseError(MigratorError):
    """Raised when a rule file cannot be decoded into a migration rule."""

    exit_code = 3

    def __init__(self, message: str, file_path: str = ""):
        super().__init__(message, context={"file": file_path})


class RuleSaveError(MigratorError):
    """Raised when a rule file cannot be written."""

    exit_code = 3

    def __init__(self, message: str, file_path: str = ""):
        super().__init__(message, context={"file": file_path})


# ── Strategy Resolution ────────────────────────────────────────────

class NoMatchingStrategyError(MigratorError):
    """Raised when no registered strategy can handle a project."""

    exit_code = 4

    def __init__(self, project_path: str = ""):
        super().__init__(
            "No suitable migration strategy found for the project",
            context={"project": project_path},
        )


class StrategyNotFoundError(MigratorError):
    """Raised when no strategy is registered under an app type name."""

    exit_code = 4

    def __init__(self, app_type: str, available: Optional[list[str]] = None):
        self.available = list(available or [])
        available_str = f". Available: {', '.join(self.available)}" if self.available else ""
        super().__init__(
            f"Migration strategy for app type '{app_type}' not found{available_str}",
            context={"app_type": app_type},
        )


class ConfigError(MigratorError):
    """Raised when configuration is invalid or missing."""
    pass
