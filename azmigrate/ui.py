"""Shared UI theme, console, and display helpers for azmigrate."""

from rich.console import Console
from rich.markup import escape
from rich.markdown import Markdown
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

# ── Output Mode State ──
_plain_mode: bool = False


def set_plain_mode(enabled: bool = True) -> None:
    """Enable or disable plain text output (no colors, no panels)."""
    global _plain_mode, console
    _plain_mode = enabled
    if enabled:
        console = Console(no_color=True, highlight=False)
    else:
        console = Console(theme=AZMIGRATE_THEME)


def is_plain() -> bool:
    """Check if plain output mode is active."""
    return _plain_mode


# ── Theme ──
AZMIGRATE_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "yellow",
    "error": "bold red",
    "muted": "dim",
})

console = Console(theme=AZMIGRATE_THEME)

ICONS = {
    "clean": "[green]✔[/green]",         # checkmark
    "error": "[red]✘[/red]",             # cross
}

PLAIN_ICONS = {
    "clean": "[OK]",
    "error": "[!!]",
}


def show_text(text: str, title: str = "", markdown: bool = False) -> None:
    """Print a block of tool output, in a panel unless plain mode is active."""
    if _plain_mode:
        print(text)
        return
    body = Markdown(text) if markdown else Text(text)
    console.print(Panel(body, title=escape(title) if title else None, border_style="cyan", expand=False))


def status_line(status: str, message: str, style: str = "") -> None:
    """Print one message prefixed with a status icon."""
    if _plain_mode:
        print(f"{PLAIN_ICONS.get(status, '')} {message}")
        return
    body = f"[{style}]{escape(message)}[/{style}]" if style else escape(message)
    console.print(f"{ICONS.get(status, '')} {body}")
