"""CLI commands for migration rule files."""
from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from azmigrate import ui
from azmigrate.error_handler import handle_errors

app = typer.Typer(
    name="rule",
    help="Manage migration rule files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command()
@handle_errors
def create(
    ctx: typer.Context,
    app_type: str = typer.Argument(..., help="Name of the new app type"),
    path: str = typer.Option("", "--path", "-p", help="Rule file to write (.yaml, .yml or .json)"),
):
    """[bold cyan]Create[/bold cyan] a rule template for a custom app type."""
    from azmigrate.cli import get_service

    result = get_service(ctx).create_migration_rule(app_type, path)
    if result.startswith("Error"):
        ui.status_line("error", result, style="red")
        raise typer.Exit(1)
    ui.status_line("clean", result)


@app.command("list")
@handle_errors
def list_rules(ctx: typer.Context):
    """[bold]List[/bold] rule files in the rules directory."""
    from rich.table import Table

    from azmigrate.cli import get_service
    from azmigrate.errors import MigratorError

    store = get_service(ctx).store
    files = store.rule_files()
    if not files:
        ui.console.print(f"[dim]No rule files in {escape(str(store.rules_dir))}[/dim]")
        return

    table = Table(title=f"Rules in {escape(str(store.rules_dir))}", show_header=True, expand=False)
    table.add_column("File", style="cyan")
    table.add_column("App type")
    table.add_column("Patterns", justify="right")
    table.add_column("Indicators", justify="right")
    for path in files:
        try:
            rule = store.load_one(path)
        except MigratorError as e:
            table.add_row(escape(path.name), f"[red]{escape(str(e))}[/red]", "-", "-")
            continue
        table.add_row(
            escape(path.name),
            escape(rule.app_type),
            str(len(rule.detection_patterns)),
            str(len(rule.app_insights_indicators)),
        )
    ui.console.print(table)


@app.command()
@handle_errors
def show(
    path: Path = typer.Argument(..., help="Rule file to validate and display"),
):
    """Validate a rule file and show what it contains."""
    import yaml

    from azmigrate.rules import RuleStore

    rule = RuleStore(path.parent).load_one(path)
    ui.show_text(
        yaml.safe_dump(rule.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True),
        title=rule.app_type,
    )
