"""Shared rich console for dsi commands.

Command modules print through ``console`` so the theme below applies
everywhere; JSON output goes through ``click.echo`` instead.
"""

import sys

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

DSI_THEME = Theme({
    "error": "bold red",
    "warning": "bold yellow",
    "success": "bold green",
    "category": "bold magenta",
    "path": "bold cyan",
    "token": "green",
    "dim": "dim white",
})

console = Console(theme=DSI_THEME, force_terminal=sys.stdout.isatty())


def print_header(title: str) -> None:
    console.rule(f"[bold]{title}[/bold]")


def _tagged(style: str, label: str, msg: str) -> None:
    console.print(f"[{style}]{label}:[/{style}] {msg}")


def print_error(msg: str) -> None:
    _tagged("error", "ERROR", msg)


def print_warning(msg: str) -> None:
    _tagged("warning", "WARNING", msg)


def print_success(msg: str) -> None:
    _tagged("success", "OK", msg)


def print_status_panel(status: str, message: str, detail: str, ok: bool) -> None:
    """Bordered verdict box for ``dsi check``: green when ``ok``, red otherwise."""
    color = "green" if ok else "red"
    body = Text.assemble(
        (f"STATUS: [{status}]\n", f"bold {color}"),
        (f"{message}\n", color),
        (detail, color),
    )
    console.print(Panel(body, border_style=color, expand=False))
