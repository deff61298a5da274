"""Rich-based console adapter used for all TTY output."""

from __future__ import annotations

import shutil
import sys
from contextlib import contextmanager
from typing import IO, Iterator, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from xa_app.ui_interfaces import UIAdapter

THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "red",
        "success": "green",
        "accent": "#3ea6ff",
    }
)


class ConsoleUIAdapter(UIAdapter):
    """ANSI-friendly output with Rich tables, panels and spinners."""

    def __init__(self, stream: IO[str] | None = None):
        self.console = Console(
            theme=THEME,
            file=stream or sys.stdout,
            highlight=False,
            soft_wrap=True,
        )

    def show_info(self, message: str) -> None:
        self.console.print(escape(message), style="info")

    def show_warning(self, message: str) -> None:
        self.console.print(escape(message), style="warning")

    def show_error(self, message: str) -> None:
        self.console.print(escape(message), style="error")

    def show_success(self, message: str) -> None:
        self.console.print(escape(message), style="success")

    def show_panel(self, message: str, title: str | None = None, border_style: str | None = None) -> None:
        panel = Panel(escape(message), title=title, border_style=border_style or "accent", expand=True)
        self.console.print(panel)

    def show_table(self, title: str, columns: Sequence[str], rows: list[Sequence[str]]) -> None:
        # Keep tables within the visible console width and fold long cells.
        term_width = self.console.size.width or shutil.get_terminal_size(fallback=(100, 24)).columns
        table_width = max(60, term_width - 2) if term_width > 0 else None

        table = Table(
            title=f"[b]{escape(title)}[/b]",
            border_style="accent",
            header_style="bold white",
            row_styles=("", "dim"),
            expand=table_width is None,
            width=table_width,
        )
        for column in columns:
            table.add_column(column, overflow="fold")
        for row in rows:
            table.add_row(*[escape(str(cell)) for cell in row])
        self.console.print(table)

    @contextmanager
    def status(self, message: str) -> Iterator[None]:
        if not self.console.is_terminal:
            yield
            return
        with self.console.status(f"[accent]{escape(message)}...[/accent]", spinner="dots") as status:
            try:
                yield
                status.update("[success]Done.[/success]")
            except Exception:
                status.update("[error]Failed.[/error]")
                raise
