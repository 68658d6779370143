"""Task management commands."""

import typer

from todofocus.models import ValidationError
from todofocus.services.filter_service import COMPLETION_FILTERS, NO_TAGS
from todofocus.ui.formatters import format_success, format_tasks, format_warning
from todofocus.ui.menu import COMPLETION_OPTIONS, MenuState, tag_filter_options

from .decorators import command_wrapper
from .utils import open_workspace, resolve_tag, resolve_task

app = typer.Typer(help="Task management commands", no_args_is_help=True)


@app.command("list")
@command_wrapper
async def list_tasks(
    status: str = typer.Option(
        "active", "--status", "-s", help="all, active or completed"
    ),
    tag: str | None = typer.Option(
        None, "--tag", "-t", help="Tag name or id, or 'no-tags'"
    ),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List tasks, newest first."""
    if status not in COMPLETION_FILTERS:
        raise ValidationError(
            f"Unknown status {status!r}; use one of: {', '.join(COMPLETION_FILTERS)}"
        )

    async with open_workspace() as workspace:
        tag_filter = None
        if tag == NO_TAGS:
            tag_filter = NO_TAGS
        elif tag:
            tag_filter = resolve_tag(workspace, tag).id

        workspace.filters.completion = status
        workspace.filters.tag = tag_filter

        completion_menu = MenuState(COMPLETION_OPTIONS, workspace.filters.completion)
        tag_menu = MenuState(tag_filter_options(workspace.tags.tags), workspace.filters.tag)

        format_tasks(
            workspace.visible_tasks(),
            workspace.tags.tags,
            title=f"{completion_menu.label} / {tag_menu.label}",
            output_format=output,
        )


@app.command("add")
@command_wrapper
async def add_task(
    title: str = typer.Argument(..., help="Task title"),
    tags: list[str] = typer.Option([], "--tag", "-t", help="Tag name or id (repeatable)"),
) -> None:
    """Add a new task."""
    async with open_workspace() as workspace:
        tag_ids = [resolve_tag(workspace, ref).id for ref in tags]
        task = await workspace.tasks.create_task(workspace.owner_id, title, tag_ids)
        format_success(f"Task added: {task.id}")


@app.command("done")
@command_wrapper
async def complete_task(
    task_id: str = typer.Argument(..., help="Task ID or suffix"),
) -> None:
    """Mark a task as completed."""
    async with open_workspace() as workspace:
        task = resolve_task(workspace, task_id)
        if task.completed:
            format_warning(f"Task already completed: {task.title}")
            return
        await workspace.tasks.toggle_completed(task.id)
        format_success(f"Completed: {task.title}")


@app.command("undo")
@command_wrapper
async def reopen_task(
    task_id: str = typer.Argument(..., help="Task ID or suffix"),
) -> None:
    """Mark a completed task as active again."""
    async with open_workspace() as workspace:
        task = resolve_task(workspace, task_id)
        if not task.completed:
            format_warning(f"Task is not completed: {task.title}")
            return
        await workspace.tasks.toggle_completed(task.id)
        format_success(f"Reopened: {task.title}")


@app.command("edit")
@command_wrapper
async def edit_task(
    task_id: str = typer.Argument(..., help="Task ID or suffix"),
    title: str = typer.Argument(..., help="New title"),
) -> None:
    """Change the title of a task."""
    async with open_workspace() as workspace:
        task = resolve_task(workspace, task_id)
        renamed = await workspace.tasks.rename_task(task.id, title)
        format_success(f"Task renamed: {renamed.title}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID or suffix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    async with open_workspace() as workspace:
        task = resolve_task(workspace, task_id)
        if not yes and not typer.confirm(f"Delete task '{task.title}'?"):
            raise typer.Exit(0)
        await workspace.tasks.delete_task(task.id)
        format_success(f"Task deleted: {task.id}")


@app.command("tag")
@command_wrapper
async def tag_task(
    task_id: str = typer.Argument(..., help="Task ID or suffix"),
    tag: str = typer.Argument(..., help="Tag name or id"),
) -> None:
    """Attach a tag to a task."""
    async with open_workspace() as workspace:
        task = resolve_task(workspace, task_id)
        resolved = resolve_tag(workspace, tag)
        await workspace.tags.add_tag_to_task(task.id, resolved.id)
        format_success(f"Tagged '{task.title}' with {resolved.name}")


@app.command("untag")
@command_wrapper
async def untag_task(
    task_id: str = typer.Argument(..., help="Task ID or suffix"),
    tag: str = typer.Argument(..., help="Tag name or id"),
) -> None:
    """Detach a tag from a task."""
    async with open_workspace() as workspace:
        task = resolve_task(workspace, task_id)
        resolved = resolve_tag(workspace, tag)
        await workspace.tags.remove_tag_from_task(task.id, resolved.id)
        format_success(f"Removed {resolved.name} from '{task.title}'")
