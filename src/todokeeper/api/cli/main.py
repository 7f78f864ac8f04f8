"""todokeeper CLI entry point.

Each command maps onto one event of the todo application; state is loaded
from and written through to the configured store on every invocation.
"""

import logging
from pathlib import Path

import structlog
import typer
from rich.console import Console

from todokeeper.api.cli.output_formatter import print_view, short_id
from todokeeper.application.factory import build_application
from todokeeper.application.settings import Settings, load_settings
from todokeeper.application.todo_app import TodoApplication
from todokeeper.core.domain.enums import FilterMode
from todokeeper.core.domain.errors import ConfigError
from todokeeper.core.domain.results import OperationResult

app = typer.Typer(
    name="todokeeper",
    help="todokeeper - a small persistent todo list",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.WARNING)
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Settings YAML file (default: ./todokeeper.yaml)"
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """todokeeper todo list."""
    try:
        settings = load_settings(config)
    except ConfigError as exc:
        console.print(f"[red]{exc.message}[/red]")
        for error in exc.details.get("errors", []):
            console.print(f"[red]  {error['loc']}: {error['msg']}[/red]")
        raise typer.Exit(1) from exc

    configure_logging("DEBUG" if debug else settings.logging.level)
    ctx.obj = {"settings": settings}


def _get_app(ctx: typer.Context) -> TodoApplication:
    settings: Settings = (ctx.obj or {}).get("settings") or Settings()
    return build_application(settings)


def _resolve(todo_app: TodoApplication, task_ref: str) -> str:
    task_id = todo_app.resolve_task_id(task_ref)
    if task_id is None:
        console.print(f"[yellow]No single task matches '{task_ref}'[/yellow]")
        raise typer.Exit(1)
    return task_id


def _report(result: OperationResult, success_message: str) -> None:
    if result.success:
        console.print(success_message)
        return
    if result.rejected:
        console.print("[red]Task text cannot be empty[/red]")
    elif result.not_found:
        console.print("[yellow]Task no longer exists[/yellow]")
    else:
        console.print(f"[red]Operation refused: {result.error.value}[/red]")
    raise typer.Exit(1)


@app.command("add")
def add_task(
    ctx: typer.Context,
    text: list[str] = typer.Argument(..., help="Task text"),
):
    """Add a task to the top of the list."""
    todo_app = _get_app(ctx)
    result = todo_app.create(" ".join(text))
    _report(result, f"Added [cyan]{short_id(result.task_id or '')}[/cyan]")


@app.command("list")
def list_tasks(
    ctx: typer.Context,
    filter_mode: FilterMode | None = typer.Option(
        None, "--filter", "-f", help="Switch the active filter before listing"
    ),
):
    """Show tasks through the active filter."""
    todo_app = _get_app(ctx)
    if filter_mode is not None:
        todo_app.set_filter(filter_mode)
    print_view(console, todo_app.view())


@app.command("toggle")
def toggle_task(
    ctx: typer.Context,
    task_ref: str = typer.Argument(..., help="Task id or unique id prefix"),
):
    """Mark a task done, or not done."""
    todo_app = _get_app(ctx)
    task_id = _resolve(todo_app, task_ref)
    result = todo_app.toggle(task_id)
    task = todo_app.store.get(task_id)
    state = "done" if task and task.completed else "not done"
    _report(result, f"[cyan]{short_id(task_id)}[/cyan] marked {state}")


@app.command("edit")
def edit_task(
    ctx: typer.Context,
    task_ref: str = typer.Argument(..., help="Task id or unique id prefix"),
    text: list[str] = typer.Argument(..., help="New text; blank text deletes the task"),
):
    """Replace a task's text. Blank text deletes the task."""
    todo_app = _get_app(ctx)
    task_id = _resolve(todo_app, task_ref)
    todo_app.begin_edit(task_id)
    todo_app.update_draft(" ".join(text))
    result = todo_app.commit_edit()
    if todo_app.store.contains(task_id):
        _report(result, f"Updated [cyan]{short_id(task_id)}[/cyan]")
    else:
        _report(result, f"Deleted [cyan]{short_id(task_id)}[/cyan]")


@app.command("delete")
def delete_task(
    ctx: typer.Context,
    task_ref: str = typer.Argument(..., help="Task id or unique id prefix"),
):
    """Delete a task."""
    todo_app = _get_app(ctx)
    task_id = _resolve(todo_app, task_ref)
    _report(todo_app.delete(task_id), f"Deleted [cyan]{short_id(task_id)}[/cyan]")


@app.command("clear-completed")
def clear_completed(ctx: typer.Context):
    """Remove every completed task."""
    todo_app = _get_app(ctx)
    cleared = todo_app.view().completed_count
    todo_app.clear_completed()
    console.print(f"Cleared {cleared} completed task{'' if cleared == 1 else 's'}")


@app.command("toggle-all")
def toggle_all(ctx: typer.Context):
    """Mark every task done, or every task not done if all already are."""
    todo_app = _get_app(ctx)
    if not todo_app.view().total_count:
        console.print("[dim]Nothing to toggle[/dim]")
        return
    todo_app.toggle_all()
    state = "done" if todo_app.view().all_completed else "not done"
    console.print(f"All tasks marked {state}")


@app.command("filter")
def set_filter(
    ctx: typer.Context,
    mode: FilterMode = typer.Argument(..., help="all, active or completed"),
):
    """Change the active filter."""
    todo_app = _get_app(ctx)
    todo_app.set_filter(mode)
    console.print(f"Filter set to [bold]{mode.value}[/bold]")


@app.command()
def version():
    """Show todokeeper version."""
    from todokeeper import __version__

    console.print(f"[bold blue]Version:[/bold blue] [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
