"""Utility functions for terminal output."""

from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..client.models import Problem, VirtualProblemEntry
from .files import html_to_text

console = Console()

ICON_YES = "✔"
ICON_NO = "✘"
ICON_LIKE = "★"
ICON_LOCK = "🔒"


def create_table(title: str, headers: list) -> Table:
    """Create a formatted table for display."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for header in headers:
        table.add_column(header)
    return table


def pretty_state(state: str) -> str:
    """Format a local problem state with an icon."""
    if state == "ac":
        return f"[green]{ICON_YES}[/green]"
    elif state == "notac":
        return f"[red]{ICON_NO}[/red]"
    return " "


def pretty_level(level: str) -> str:
    """Format a problem difficulty with appropriate color."""
    level_lower = (level or "").lower()

    if level_lower == "easy":
        return f"[green]{level}[/green]"
    elif level_lower == "medium":
        return f"[yellow]{level}[/yellow]"
    elif level_lower == "hard":
        return f"[red]{level}[/red]"
    else:
        return escape(level or "")


def pretty_text(text: str, ok: bool) -> str:
    """Prefix a result line with a pass/fail icon and color it."""
    if ok:
        return f"[green]{ICON_YES} {escape(text)}[/green]"
    return f"[red]{ICON_NO} {escape(text)}[/red]"


def problems_table(entries: List[VirtualProblemEntry]) -> Table:
    """Summary table of a resolved contest, in contest order."""
    table = create_table(
        "", ["", "", "", "ID", "Name", "Credit", "Level", "AC Rate"]
    )
    table.show_edge = False
    for entry in entries:
        problem = entry.problem
        table.add_row(
            f"[yellow]{ICON_LIKE}[/yellow]" if problem.starred else " ",
            f"[red]{ICON_LOCK}[/red]" if problem.locked else " ",
            pretty_state(problem.state),
            escape(problem.fid),
            escape(problem.name),
            str(entry.credit),
            pretty_level(problem.level),
            f"{problem.percent or 0:.2f} %",
        )
    return table


def print_problem(problem: Problem, url: str, out: Console = console) -> None:
    """Display the details of a single problem."""
    out.print(f"[bold]{escape(f'[{problem.fid}] {problem.name}')}[/bold]")
    out.print()
    out.print(f"[underline]{escape(url)}[/underline]")
    out.print()
    out.print(
        f"* {pretty_level(problem.level)} ({problem.percent or 0:.2f}%)"
    )
    out.print(f"* Likes:    {problem.likes}")
    out.print(f"* Dislikes: {problem.dislikes}")
    if problem.testcase:
        out.print(f"* Testcase Example:  {escape(repr(problem.testcase))}")
    out.print()
    out.print(escape(html_to_text(problem.desc)))
