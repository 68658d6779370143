"""Task repository - in-memory task collection backed by a persistence gateway.

Mutations are optimistic: the local cache changes first and is immediately
visible to readers, storage catches up afterwards, and a full re-fetch is the
reconciliation mechanism. Failed writes are logged and not rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from todofocus.models import StorageError, Task, TaskCreate, TaskUpdate, ValidationError
from todofocus.repositories import PersistenceGateway

logger = logging.getLogger(__name__)


def clean_title(title: str) -> str:
    """Return the trimmed title or raise ValidationError if it is empty."""
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("Task title must not be empty")
    return cleaned


def sort_newest_first(tasks: Iterable[Task]) -> list[Task]:
    return sorted(tasks, key=lambda task: task.created_at, reverse=True)


class TaskRepository:
    """Owns the task collection of one owner.

    The cache (``tasks``) is ordered by ``created_at`` descending. Tag
    changes are made through ``TagAssociationManager``, which patches the
    cache through ``patch_cached`` and then calls ``refresh``.
    """

    def __init__(self, gateway: PersistenceGateway, owner_id: str | None = None):
        """Initialize the task repository.

        Args:
            gateway: PersistenceGateway implementation for data access
            owner_id: Owner used by ``refresh`` until another one is passed
        """
        self.gateway = gateway
        self.owner_id = owner_id
        self.tasks: list[Task] = []

    def _resolve_owner(self, owner_id: str | None) -> str:
        if owner_id:
            self.owner_id = owner_id
        if not self.owner_id:
            raise ValidationError("An owner id is required")
        return self.owner_id

    def get(self, task_id: str) -> Task | None:
        """Return the cached task with this id, if any."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def patch_cached(self, task_id: str, **changes: Any) -> Task | None:
        """Replace a cached task with a copy carrying ``changes``.

        Args:
            task_id: Task to patch
            **changes: Field values to set (e.g. ``tag_ids``)

        Returns:
            The patched task, or None if it is not cached
        """
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                patched = task.model_copy(update=changes)
                self.tasks[index] = patched
                return patched
        return None

    async def list_tasks(self, owner_id: str | None = None) -> list[Task]:
        """Fetch all tasks of an owner and replace the cache.

        Args:
            owner_id: Owner whose tasks are listed (defaults to the last one)

        Returns:
            Tasks with their tag ids, newest first

        Raises:
            StorageError: If the gateway call fails; the cache is left as it was
        """
        owner_id = self._resolve_owner(owner_id)
        try:
            tasks = await self.gateway.list_tasks(owner_id)
        except StorageError as e:
            logger.error("Error fetching tasks for %s: %s", owner_id, e)
            raise

        self.tasks = sort_newest_first(tasks)
        return list(self.tasks)

    async def refresh(self) -> list[Task]:
        """Re-fetch the task list, keeping the current cache on failure.

        Returns:
            The cached tasks after the refresh attempt
        """
        if not self.owner_id:
            return list(self.tasks)
        try:
            return await self.list_tasks(self.owner_id)
        except StorageError:
            # Already logged; readers keep the (possibly stale) cache
            return list(self.tasks)

    async def create_task(
        self,
        owner_id: str | None,
        title: str,
        initial_tag_ids: Iterable[str] = (),
    ) -> Task:
        """Create a task and attach its initial tags.

        Args:
            owner_id: Owner of the new task
            title: Task title; surrounding whitespace is trimmed
            initial_tag_ids: Tags to attach after the task row is written

        Returns:
            The new task, carrying every requested tag even if some
            association writes failed

        Raises:
            ValidationError: If the title is empty (nothing is written)
            StorageError: If the task row cannot be written
        """
        title = clean_title(title)
        owner_id = self._resolve_owner(owner_id)
        tag_ids = list(dict.fromkeys(initial_tag_ids))

        try:
            created = await self.gateway.insert_task(
                TaskCreate(owner_id=owner_id, title=title, completed=False)
            )
        except StorageError as e:
            logger.error("Error adding task %r: %s", title, e)
            raise

        for tag_id in tag_ids:
            try:
                await self.gateway.insert_association(created.id, tag_id)
            except StorageError as e:
                logger.error(
                    "Error tagging new task %s with %s: %s", created.id, tag_id, e
                )

        task = created.model_copy(update={"tag_ids": set(tag_ids)})
        self.tasks.insert(0, task)
        return task

    async def update_task(self, task: Task) -> None:
        """Persist a task's title and completion status.

        The cache is updated first; on a successful write the whole list is
        re-fetched so tag state is reconciled with storage.

        Raises:
            ValidationError: If the title is empty (nothing is changed)
        """
        title = clean_title(task.title)
        completed = task.completed

        if self.patch_cached(task.id, title=title, completed=completed) is None:
            logger.debug("Updating task %s that is not cached", task.id)

        try:
            await self.gateway.update_task(
                task.id, TaskUpdate(title=title, completed=completed)
            )
        except StorageError as e:
            logger.error("Error updating task %s: %s", task.id, e)
            return

        await self.refresh()

    async def toggle_completed(self, task_id: str) -> Task:
        """Flip the completion status of a cached task.

        Raises:
            ValidationError: If the task is not cached
        """
        task = self._require(task_id)
        await self.update_task(task.model_copy(update={"completed": not task.completed}))
        return self.get(task_id) or task

    async def rename_task(self, task_id: str, title: str) -> Task:
        """Change the title of a cached task.

        Raises:
            ValidationError: If the task is not cached or the title is empty
        """
        task = self._require(task_id)
        await self.update_task(task.model_copy(update={"title": clean_title(title)}))
        return self.get(task_id) or task

    async def delete_task(self, task_id: str) -> None:
        """Remove a task from the cache and from storage.

        Association rows are left to the store; they no longer match a task.
        """
        self.tasks = [task for task in self.tasks if task.id != task_id]

        try:
            await self.gateway.delete_task(task_id)
        except StorageError as e:
            logger.error("Error deleting task %s: %s", task_id, e)

    def _require(self, task_id: str) -> Task:
        task = self.get(task_id)
        if task is None:
            raise ValidationError(f"Task not found: {task_id}")
        return task
