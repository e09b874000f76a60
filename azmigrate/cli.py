#!/usr/bin/env python3
"""
azmigrate: find Application Insights SDK usage in .NET projects and get
guidance for moving to the Azure Monitor OpenTelemetry Distro.
"""
import logging
from pathlib import Path

import typer
from rich.logging import RichHandler
from rich.markup import escape

import azmigrate.config  # noqa: F401  (loads .env before config resolution)
from azmigrate import ui
from azmigrate.error_handler import handle_errors

app = typer.Typer(
    name="azmigrate",
    help="Application Insights to Azure Monitor OpenTelemetry migration assistant.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

from azmigrate.commands import config_cmd, rule_cmd  # noqa: E402

app.add_typer(rule_cmd.app, name="rule", help="Manage migration rule files", rich_help_panel="Rules")
app.add_typer(config_cmd.app, name="config", help="Manage configuration", rich_help_panel="Info")


def get_service(ctx: typer.Context):
    """The MigrationService for this invocation, built on first use."""
    from azmigrate.core import create_service

    state = ctx.ensure_object(dict)
    if "service" not in state:
        state["service"] = create_service(
            rules_dir=state.get("rules_dir"),
            load_plugins=state.get("plugins"),
        )
    return state["service"]


@app.callback()
def main_callback(
    ctx: typer.Context,
    rules_dir: Path = typer.Option(
        None, "--rules-dir", "-r",
        help="Directory of rule files. Overrides AZMIGRATE_RULES_DIR and config files.",
    ),
    no_plugins: bool = typer.Option(False, "--no-plugins", help="Skip strategy plugins."),
    plain: bool = typer.Option(False, "--plain", help="Plain text output (no colors or panels)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log rule loading and strategy selection."),
):
    """Application Insights to Azure Monitor OpenTelemetry migration assistant."""
    from azmigrate.core.config_service import get_config_service

    if plain or get_config_service().get("ui.plain_output", False):
        ui.set_plain_mode(True)
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=ui.console, show_path=False)],
        )
    state = ctx.ensure_object(dict)
    state["rules_dir"] = rules_dir
    if no_plugins:
        state["plugins"] = False


@app.command(rich_help_panel="Analysis")
@handle_errors
def analyze(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="Path to the project directory"),
):
    """[bold cyan]Analyze[/bold cyan] a project and print migration guidance."""
    svc = get_service(ctx)

    with ui.console.status("[bold cyan]Scanning project...[/bold cyan]"):
        app_type, report = svc.analyze(path.resolve())

    if not report.has_app_insights_references:
        ui.status_line("clean", report.render().strip())
        return

    ui.console.print(f"Detected app type: [bold magenta]{escape(app_type)}[/bold magenta]")
    ui.show_text(report.render(), title="Migration Report", markdown=True)


@app.command(rich_help_panel="Analysis")
@handle_errors
def check(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="File or directory to check"),
):
    """[bold cyan]Check[/bold cyan] a file or directory for SDK references."""
    result = get_service(ctx).check_for_app_insights(str(path))
    if result.startswith("Error:"):
        ui.status_line("error", result, style="red")
        raise typer.Exit(1)
    ui.show_text(result, title="Application Insights Check")


@app.command(rich_help_panel="Migration")
@handle_errors
def code(
    ctx: typer.Context,
    app_type: str = typer.Argument(..., help="App type, e.g. 'ASP.NET Core'"),
):
    """Print [bold]sample code[/bold] for an app type."""
    svc = get_service(ctx)
    strategy = svc.registry.by_name(app_type)
    ui.show_text(strategy.generate_sample_code(), title=strategy.app_type_name, markdown=True)


@app.command(rich_help_panel="Migration")
@handle_errors
def types(ctx: typer.Context):
    """[bold]List[/bold] supported app types in precedence order."""
    from rich.table import Table

    from azmigrate.strategies import RuleBasedMigrationStrategy

    svc = get_service(ctx)
    if ui.is_plain():
        print(svc.list_supported_app_types())
        return

    seen: set[str] = set()
    table = Table(title="Supported App Types", show_header=True, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("App type", style="cyan")
    table.add_column("Source")
    for strategy in svc.registry.strategies:
        name = strategy.app_type_name
        if name in seen:
            continue
        seen.add(name)
        if isinstance(strategy, RuleBasedMigrationStrategy):
            source = "rule file"
        elif type(strategy).__module__.startswith("azmigrate."):
            source = "built-in"
        else:
            source = f"plugin ({type(strategy).__module__})"
        table.add_row(str(len(seen)), escape(name), escape(source))
    ui.console.print(table)


@app.command(rich_help_panel="Info")
def plugins():
    """List installed strategy plugins."""
    from rich.table import Table

    from azmigrate.plugins import STRATEGY_GROUP, list_plugins

    infos = list_plugins()
    if not infos:
        ui.console.print(f"[dim]No plugins registered under '{STRATEGY_GROUP}'.[/dim]")
        return

    table = Table(title="Strategy Plugins", show_header=True, expand=False)
    table.add_column("Name", style="cyan")
    table.add_column("App type")
    table.add_column("Module")
    table.add_column("Status")
    for info in infos:
        status = "[green]loaded[/green]" if info.loaded else f"[red]{escape(info.error)}[/red]"
        table.add_row(info.name, escape(info.app_type), info.module, status)
    ui.console.print(table)


def main():
    app()


if __name__ == "__main__":
    main()
