"""
Output formatting for the cheats developer console.
"""

from typing import Any, Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class ConsoleFormatter:
    """Formatter for console output."""

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize formatter.

        Args:
            console: Rich console to print to, a terminal console if omitted
        """
        self.console = console or Console()

    def print_output(self, text: str):
        """Print what a code wrote to stdout."""
        if text:
            self.console.print(Text(text))

    def print_error_output(self, text: str):
        """Print what a code wrote to stderr."""
        if text:
            self.console.print(Text(text, style="red"))

    def print_error(self, message: str):
        self.console.print(f"❌ {message}", style="red bold")

    def print_warning(self, message: str):
        self.console.print(f"⚠️  {message}", style="yellow")

    def print_info(self, message: str):
        self.console.print(f"💡 {message}", style="blue")

    def print_table(self, title: str, headers: List[str], rows: Iterable[List[Any]]):
        """
        Print a formatted table.

        Args:
            title: Table title
            headers: Column headers
            rows: Table rows
        """
        table = Table(
            title=title,
            show_header=True,
            header_style="bold cyan",
            border_style="blue",
            box=box.ROUNDED,
        )
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*[str(cell) for cell in row])
        self.console.print(table)

    def print_panel(self, content: str, title: Optional[str] = None, style: str = "blue"):
        self.console.print(Panel(content, title=title, border_style=style))
