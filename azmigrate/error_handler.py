"""Error rendering for azmigrate CLI commands.

Commands raise MigratorError subclasses and let ``handle_errors`` turn them
into one red line, an optional hint and the subclass's exit code.
"""

from __future__ import annotations

import functools
import logging
import os
import traceback
from typing import Callable

import typer
from rich.markup import escape

from azmigrate import ui
from azmigrate.errors import (
    ConfigError,
    DirectoryNotFoundError,
    MigratorError,
    NoMatchingStrategyError,
    RuleFileNotFoundError,
    RuleParseError,
    RuleSaveError,
    StrategyNotFoundError,
)

logger = logging.getLogger("azmigrate.error_handler")

RULE_FIELDS_HINT = (
    "Rule files need an appType plus optional detectionPatterns, "
    "appInsightsIndicators, migrationSuggestions, migrationSteps and sampleCode."
)


def _save_hint(e: RuleSaveError) -> str:
    target = e.context.get("file") or "the rules directory"
    return f"Check that {target} is writable, or pass --path to write the rule elsewhere."


# Most specific class first; the first isinstance match supplies the hint
HINTS: list[tuple[type[MigratorError], Callable[[MigratorError], str]]] = [
    (StrategyNotFoundError, lambda e: "Run 'azmigrate types' to see supported app types."),
    (NoMatchingStrategyError, lambda e: (
        "Add a rule file for this kind of project with 'azmigrate rule create', "
        "or set rules.default_app_type."
    )),
    (DirectoryNotFoundError, lambda e: "Pass the directory that contains your .csproj files."),
    (RuleFileNotFoundError, lambda e: "Run 'azmigrate rule list' to see loaded rule files."),
    (RuleParseError, lambda e: RULE_FIELDS_HINT),
    (RuleSaveError, _save_hint),
    (ConfigError, lambda e: "Run 'azmigrate config show' to see the resolved settings."),
]


def _debug_mode() -> bool:
    return os.environ.get("AZMIGRATE_DEBUG", "").lower() in ("1", "true", "yes")


def hint_for(e: MigratorError) -> str:
    for error_type, hint in HINTS:
        if isinstance(e, error_type):
            return hint(e)
    return ""


def _render_error(e: MigratorError) -> None:
    console = ui.console
    console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}")

    if _debug_mode():
        for key, value in e.context.items():
            if value:
                console.print(f"  [dim]{key}:[/dim] {escape(str(value))}")

    hint = hint_for(e)
    if hint:
        console.print(f"[dim]{escape(hint)}[/dim]")


def handle_errors(func):
    """Wrap a Typer command so azmigrate errors exit cleanly.

    MigratorError exits with its own ``exit_code``, Ctrl-C with 130 and
    anything unexpected with 1. AZMIGRATE_DEBUG=1 adds the traceback.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (typer.Exit, typer.Abort, SystemExit):
            raise
        except MigratorError as e:
            logger.debug("%s failed: %s", func.__name__, e)
            _render_error(e)
            if _debug_mode():
                ui.console.print(f"\n[dim]{escape(traceback.format_exc())}[/dim]")
            raise typer.Exit(e.exit_code)
        except KeyboardInterrupt:
            ui.console.print("\n[dim]Interrupted.[/dim]")
            raise typer.Exit(130)
        except Exception as e:
            logger.debug("Unexpected error in %s", func.__name__, exc_info=True)
            ui.console.print(f"\n[bold red]Unexpected error:[/bold red] {escape(str(e))}")
            if _debug_mode():
                ui.console.print(f"\n[dim]{escape(traceback.format_exc())}[/dim]")
            else:
                ui.console.print("[dim]Set AZMIGRATE_DEBUG=1 for full traceback.[/dim]")
            raise typer.Exit(1)

    return wrapper
