"""Output formatters for the command-line shell."""

import json
from collections.abc import Sequence
from typing import Any

from rich.table import Table

from todofocus.models import Tag, Task
from todofocus.ui.console import get_console

console = get_console()


def short_id(value: str, length: int = 8) -> str:
    """Last ``length`` characters of an id, enough to tell UUIDs apart."""
    return value[-length:]


def format_output(data: Any, output_format: str = "table") -> None:
    """Print raw data as JSON, or with rich's pretty printer."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    else:
        console.print(data)


def format_tasks(
    tasks: Sequence[Task],
    tags: Sequence[Tag],
    *,
    title: str = "Tasks",
    output_format: str = "table",
) -> None:
    """Render tasks with their tag names."""
    tag_names = {tag.id: tag.name for tag in tags}

    if output_format == "json":
        format_output(
            [
                {
                    **task.model_dump(mode="json", exclude={"tag_ids"}),
                    "tags": sorted(tag_names.get(t, t) for t in task.tag_ids),
                }
                for task in tasks
            ],
            "json",
        )
        return

    if not tasks:
        console.print("[muted]No tasks found.[/muted]")
        return

    table = Table(title=title)
    table.add_column("ID", style="task.id", no_wrap=True)
    table.add_column("Done", justify="center")
    table.add_column("Title")
    table.add_column("Tags", style="tag")

    for task in tasks:
        names = sorted(tag_names.get(tag_id, tag_id) for tag_id in task.tag_ids)
        table.add_row(
            short_id(task.id),
            "[green]✓[/green]" if task.completed else "",
            f"[strike dim]{task.title}[/strike dim]" if task.completed else task.title,
            ", ".join(names),
        )
    console.print(table)


def format_tags(tags: Sequence[Tag], *, output_format: str = "table") -> None:
    """Render the tag list."""
    if output_format == "json":
        format_output([tag.model_dump() for tag in tags], "json")
        return

    if not tags:
        console.print(
            "[muted]No tags yet. Create some tags to organize your tasks.[/muted]"
        )
        return

    table = Table(title="Tags")
    table.add_column("ID", style="task.id", no_wrap=True)
    table.add_column("Name", style="tag")
    for tag in tags:
        table.add_row(short_id(tag.id), tag.name)
    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[error]Error:[/error] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[success]Success:[/success] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[warning]Warning:[/warning] {message}")
