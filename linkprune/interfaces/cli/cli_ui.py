#!/usr/bin/env python3
"""
Rich UI components for CLI - consistent output across all commands.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from linkprune.helpers.dto.graph_dto import PruneResult
from linkprune.helpers.dto.route_dto import HydratedRouteEntry

console = Console()

# Color scheme constants
COLOR_SUCCESS = "green"
COLOR_ERROR = "red"
COLOR_WARNING = "yellow"
COLOR_INFO = "cyan"


class InfoPanel:
    """
    Simple panel for displaying status/info.
    """

    @staticmethod
    def show(title: str, content: str, border_style: str = COLOR_INFO):
        """Show a single info panel."""
        panel = Panel(content, title=f"[bold]{title}[/bold]", border_style=border_style, box=box.ROUNDED)
        console.print(panel)

    @staticmethod
    def show_code(title: str, code: str, border_style: str = COLOR_INFO):
        """Show TypeScript source in a panel (no markup interpretation)."""
        syntax = Syntax(code, "typescript", word_wrap=True)
        console.print(Panel(syntax, title=f"[bold]{title}[/bold]", border_style=border_style, box=box.ROUNDED))


class TableDisplay:
    """
    Formatted tables for routes and prune results.
    """

    @staticmethod
    def show_routes(entries: Sequence[HydratedRouteEntry], title: str = "Deep Links"):
        """Display discovered routes in discovery order."""
        table = Table(title=title, box=box.ROUNDED, show_header=True, header_style="bold")
        table.add_column("Name", style=COLOR_INFO)
        table.add_column("Segment")
        table.add_column("Priority", width=8)
        table.add_column("Default History")
        table.add_column("Load Children", overflow="fold")

        for entry in entries:
            priority_color = COLOR_WARNING if entry.priority == "high" else "white"
            table.add_row(
                escape(entry.name),
                escape(entry.segment) if entry.segment is not None else "[dim]null[/dim]",
                f"[{priority_color}]{entry.priority}[/{priority_color}]",
                escape(", ".join(entry.default_history)),
                escape(entry.load_children),
            )

        console.print(table)

    @staticmethod
    def show_prune_result(result: PruneResult, limit: int = 50):
        """Display retained/purged counts and the purged modules."""
        InfoPanel.show(
            "Tree Shaking",
            f"[bold]Retained:[/bold] {len(result.retained_graph)}\n[bold]Purged:[/bold] {len(result.purged_modules)}",
            COLOR_SUCCESS if result.purged_modules else COLOR_INFO,
        )
        if not result.purged_modules:
            return

        table = Table(title="Purged Modules", box=box.ROUNDED, show_header=True, header_style="bold")
        table.add_column("Module", overflow="fold")
        for module in result.purged_paths()[:limit]:
            table.add_row(escape(module))
        if len(result.purged_modules) > limit:
            table.add_row(f"[dim]... {len(result.purged_modules) - limit} more[/dim]")
        console.print(table)


def print_success(message: str):
    """Print a success message."""
    console.print(f"[bold {COLOR_SUCCESS}]✓[/bold {COLOR_SUCCESS}] {escape(message)}")


def print_error(message: str):
    """Print an error message."""
    console.print(f"[bold {COLOR_ERROR}]✗[/bold {COLOR_ERROR}] {escape(message)}")


def print_warning(message: str):
    """Print a warning message."""
    console.print(f"[bold {COLOR_WARNING}]⚠[/bold {COLOR_WARNING}] {escape(message)}")
