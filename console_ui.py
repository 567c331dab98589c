#!/usr/bin/env python3
"""
Console UI Module using Rich

Status messages, headers and summary tables for the kosmos command-line
tools. Everything goes to stderr by default so that a tool's own data on
stdout (such as a list of paths) stays pipeable. Messages are printed
without markup parsing, so paths containing brackets come out verbatim.
"""

from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

STYLES = {
    "success": "green",
    "error": "red bold",
    "warning": "yellow",
    "info": "cyan",
    "plain": "white",
}


class ConsoleUI:
    """Rich console wrapper shared by the kosmos tools"""

    def __init__(self, force_terminal: Optional[bool] = None, stderr: bool = True):
        self.console = Console(force_terminal=force_terminal, highlight=False, stderr=stderr)

    def _print(self, kind: str, message: str):
        self.console.print(message, style=STYLES[kind], markup=False)

    def print_success(self, message: str):
        self._print("success", message)

    def print_error(self, message: str):
        self._print("error", message)

    def print_warning(self, message: str):
        self._print("warning", message)

    def print_info(self, message: str):
        self._print("info", message)

    def print_header(self, title: str, subtitle: Optional[str] = None):
        """Print a boxed title with an optional dimmed subtitle"""
        text = f"[bold]{escape(title)}[/bold]"
        if subtitle:
            text += f"\n[dim]{escape(subtitle)}[/dim]"
        self.console.print(Panel(text, box=box.ROUNDED, padding=(0, 1)))

    def show_key_values(self, rows: dict[str, Any], title: Optional[str] = None):
        """Display settings or counters as a two-column table"""
        table = Table(title=title, show_header=False, box=box.SIMPLE)
        table.add_column("Key", style="cyan dim", min_width=20, justify="right")
        table.add_column("Value", style="cyan", min_width=20)

        for key, value in rows.items():
            if isinstance(value, (list, tuple)):
                value = ", ".join(str(v) for v in value)
            table.add_row(escape(key), escape(str(value)))

        self.console.print(table)
