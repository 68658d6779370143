"""Helpers shared by the command groups."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from todofocus.config import get_config_manager
from todofocus.core.factory import Workspace, build_workspace
from todofocus.models import Tag, Task, ValidationError


@asynccontextmanager
async def open_workspace(load: bool = True) -> AsyncIterator[Workspace]:
    """Build the configured workspace, load it and close it afterwards."""
    workspace = build_workspace(get_config_manager().config)
    try:
        if load:
            await workspace.load()
        yield workspace
    finally:
        await workspace.close()


def resolve_task(workspace: Workspace, ref: str) -> Task:
    """Find a cached task by full id or unique id suffix.

    Raises:
        ValidationError: If nothing or more than one task matches
    """
    task = workspace.tasks.get(ref)
    if task is not None:
        return task

    matches = [task for task in workspace.tasks.tasks if task.id.endswith(ref)]
    if not matches:
        raise ValidationError(f"Task not found: {ref}")
    if len(matches) > 1:
        raise ValidationError(f"Ambiguous task id: {ref}")
    return matches[0]


def resolve_tag(workspace: Workspace, ref: str) -> Tag:
    """Find a cached tag by id, name or unique id suffix.

    Raises:
        ValidationError: If nothing or more than one tag matches
    """
    tag = workspace.tags.resolve(ref)
    if tag is not None:
        return tag

    matches = [tag for tag in workspace.tags.tags if tag.id.endswith(ref)]
    if not matches:
        raise ValidationError(f"Tag not found: {ref}")
    if len(matches) > 1:
        raise ValidationError(f"Ambiguous tag id: {ref}")
    return matches[0]
