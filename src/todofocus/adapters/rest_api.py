"""REST API adapter - PersistenceGateway over a PostgREST-compatible store.

The remote schema has ``tasks``, ``tags``, ``task_tags`` and
``timer_sessions`` tables keyed by ``user_id``; this adapter maps them onto
the todofocus models.
"""

from __future__ import annotations

from typing import Any

from todofocus.models import (
    StorageError,
    Tag,
    TagCreate,
    Task,
    TaskCreate,
    TaskUpdate,
    TimerSession,
)
from todofocus.repositories import PersistenceGateway
from todofocus.services.api.client import APIClient

RETURN_REPRESENTATION = {"Prefer": "return=representation"}
IGNORE_DUPLICATES = {"Prefer": "resolution=ignore-duplicates,return=minimal"}


def _eq(value: str) -> str:
    return f"eq.{value}"


def _first_row(data: Any, table: str) -> dict[str, Any]:
    """Return the single row of an insert response."""
    if isinstance(data, list):
        if not data:
            raise StorageError(f"Insert into {table} returned no rows")
        return data[0]
    return data


class RestApiGateway(PersistenceGateway):
    """Persistence gateway backed by a PostgREST endpoint."""

    def __init__(self, client: APIClient):
        """Initialize REST API gateway.

        Args:
            client: APIClient configured with endpoint and API key
        """
        self.client = client

    @staticmethod
    def _task_from_row(row: dict[str, Any]) -> Task:
        """Build a Task from a row with an embedded ``task_tags`` list."""
        task_tags = row.get("task_tags") or []
        return Task(
            id=str(row["id"]),
            title=row["title"],
            completed=bool(row.get("completed", False)),
            tag_ids={str(tt["tag_id"]) for tt in task_tags},
            created_at=row["created_at"],
        )

    async def list_tasks(self, owner_id: str) -> list[Task]:
        """List all tasks of an owner with their tag ids."""
        response = await self.client.get(
            "/tasks",
            params={
                "select": "*,task_tags(tag_id)",
                "user_id": _eq(owner_id),
                "order": "created_at.desc",
            },
        )
        return [self._task_from_row(row) for row in response.json()]

    async def insert_task(self, task_data: TaskCreate) -> Task:
        """Insert a task row."""
        response = await self.client.post(
            "/tasks",
            json={
                "title": task_data.title,
                "user_id": task_data.owner_id,
                "completed": task_data.completed,
            },
            headers=RETURN_REPRESENTATION,
        )
        return self._task_from_row(_first_row(response.json(), "tasks"))

    async def update_task(self, task_id: str, updates: TaskUpdate) -> None:
        """Persist title and completion of a task."""
        await self.client.patch(
            "/tasks",
            json=updates.model_dump(),
            params={"id": _eq(task_id)},
        )

    async def delete_task(self, task_id: str) -> None:
        """Delete a task row."""
        await self.client.delete("/tasks", params={"id": _eq(task_id)})

    async def list_tags(self, owner_id: str) -> list[Tag]:
        """List all tags of an owner ordered by name."""
        response = await self.client.get(
            "/tags",
            params={"select": "id,name", "user_id": _eq(owner_id), "order": "name"},
        )
        return [Tag(id=str(row["id"]), name=row["name"]) for row in response.json()]

    async def insert_tag(self, tag_data: TagCreate) -> Tag:
        """Insert a tag row."""
        response = await self.client.post(
            "/tags",
            json={"name": tag_data.name, "user_id": tag_data.owner_id},
            headers=RETURN_REPRESENTATION,
        )
        row = _first_row(response.json(), "tags")
        return Tag(id=str(row["id"]), name=row["name"])

    async def delete_tag(self, tag_id: str) -> None:
        """Delete a tag row; the store cascades to ``task_tags``."""
        await self.client.delete("/tags", params={"id": _eq(tag_id)})

    async def insert_association(self, task_id: str, tag_id: str) -> None:
        """Attach a tag to a task, ignoring an existing pair."""
        await self.client.post(
            "/task_tags",
            json={"task_id": task_id, "tag_id": tag_id},
            headers=IGNORE_DUPLICATES,
        )

    async def delete_association(self, task_id: str, tag_id: str) -> None:
        """Detach a tag from a task."""
        await self.client.delete(
            "/task_tags",
            params={"task_id": _eq(task_id), "tag_id": _eq(tag_id)},
        )

    async def insert_session(self, session: TimerSession) -> None:
        """Persist a completed timer session."""
        await self.client.post(
            "/timer_sessions",
            json={
                "task_id": session.task_id,
                "start_time": session.start_time.isoformat(),
                "end_time": session.end_time.isoformat(),
                "duration_seconds": session.duration_seconds,
            },
        )

    async def close(self) -> None:
        await self.client.close()
