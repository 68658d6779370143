"""Tag management commands."""

import typer

from todofocus.ui.formatters import format_success, format_tags

from .decorators import command_wrapper
from .utils import open_workspace, resolve_tag

app = typer.Typer(help="Tag management commands", no_args_is_help=True)


@app.command("list")
@command_wrapper
async def list_tags(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List all tags."""
    async with open_workspace() as workspace:
        format_tags(workspace.tags.tags, output_format=output)


@app.command("create")
@command_wrapper
async def create_tag(
    name: str = typer.Argument(..., help="Tag name"),
) -> None:
    """Create a new tag."""
    async with open_workspace() as workspace:
        tag = await workspace.tags.create_tag(workspace.owner_id, name)
        format_success(f"Tag created: {tag.name} ({tag.id})")


@app.command("delete")
@command_wrapper
async def delete_tag(
    tag: str = typer.Argument(..., help="Tag name or id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a tag and detach it from every task."""
    async with open_workspace() as workspace:
        resolved = resolve_tag(workspace, tag)
        if not yes and not typer.confirm(f"Delete tag '{resolved.name}'?"):
            raise typer.Exit(0)
        await workspace.tags.delete_tag(resolved.id)
        format_success(f"Tag deleted: {resolved.name}")
