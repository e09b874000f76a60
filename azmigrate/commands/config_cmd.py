"""CLI commands for configuration management."""
from __future__ import annotations

import typer
from rich.markup import escape

from azmigrate import ui
from azmigrate.error_handler import handle_errors

app = typer.Typer(
    name="config",
    help="Manage azmigrate configuration.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command()
@handle_errors
def show():
    """Display the resolved configuration (all layers merged)."""
    from rich.panel import Panel
    from rich.table import Table

    from azmigrate.core.config_service import get_config_service

    info = get_config_service().show()

    sources = info["sources"]
    ui.console.print(Panel(
        f"Global:  {escape(sources['global_config']) if sources['global_config'] else '[dim]not found[/dim]'}\n"
        f"Project: {escape(sources['project_config']) if sources['project_config'] else '[dim]not found[/dim]'}",
        title="Config Sources",
        border_style="cyan",
    ))

    table = Table(title="Rules", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("dir", escape(info["rules_dir"]))
    for key, val in info["resolved"].get("rules", {}).items():
        if key != "dir":
            table.add_row(key, escape(str(val)))
    ui.console.print(table)


@app.command()
@handle_errors
def init():
    """Create a .azmigrate.toml in the current directory."""
    from azmigrate.core.config_service import get_config_service
    from azmigrate.errors import ConfigError

    try:
        path = get_config_service().init_project_config()
    except FileExistsError as e:
        raise ConfigError(str(e)) from e
    ui.console.print(f"[green]Created[/green] {escape(str(path))}")


@app.command("set")
@handle_errors
def set_value(
    key: str = typer.Argument(..., help="Dotted key, e.g. rules.dir"),
    value: str = typer.Argument(..., help="Value to store"),
):
    """Set a value in the global config file."""
    from azmigrate.core.config_service import DEFAULTS, get_config_service
    from azmigrate.errors import ConfigError

    section, _, name = key.partition(".")
    if name not in DEFAULTS.get(section, {}):
        raise ConfigError(f"Unknown config key '{key}'")

    parsed: object = value
    if isinstance(DEFAULTS[section][name], bool):
        parsed = value.lower() in ("true", "1", "yes")
    get_config_service().set_global(key, parsed)
    ui.console.print(f"[green]Set[/green] {escape(key)} = {escape(str(parsed))}")
