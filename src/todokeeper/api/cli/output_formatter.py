"""Rich rendering of the todo view for the terminal."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from todokeeper.core.domain.enums import FilterMode
from todokeeper.core.domain.models import TodoView

SHORT_ID_LENGTH = 8

FILTER_TITLES = {
    FilterMode.ALL: "All",
    FilterMode.ACTIVE: "Active",
    FilterMode.COMPLETED: "Completed",
}


def short_id(task_id: str) -> str:
    return task_id[:SHORT_ID_LENGTH]


def remaining_label(count: int) -> str:
    """Footer text, e.g. ``1 item left`` / ``3 items left``."""
    return f"{count} item{'' if count == 1 else 's'} left"


def build_table(view: TodoView) -> Table:
    tabs = "  ".join(
        f"[bold reverse] {title} [/bold reverse]" if mode is view.filter else f" {title} "
        for mode, title in FILTER_TITLES.items()
    )
    table = Table(title=tabs, caption=remaining_label(view.remaining_count))
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Done", justify="center")
    table.add_column("Task", style="white")

    for task in view.visible:
        text = Text(task.text, style="dim strike" if task.completed else "")
        table.add_row(short_id(task.id), "[green]✓[/green]" if task.completed else "", text)

    return table


def print_view(console: Console, view: TodoView) -> None:
    if not view.total_count:
        console.print("[dim]Nothing to do yet. Add a task with [bold]todokeeper add[/bold].[/dim]")
        return
    if not view.visible:
        console.print(f"[dim]No {view.filter.value} tasks.[/dim]")
        console.print(remaining_label(view.remaining_count))
        return
    console.print(build_table(view))
