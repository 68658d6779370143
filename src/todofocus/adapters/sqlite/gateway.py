"""SQLite implementation of PersistenceGateway."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from todofocus.adapters.sqlite.connection import get_connection
from todofocus.adapters.sqlite.utils import (
    generate_uuid,
    now_iso,
    parse_datetime,
    row_to_dict,
    split_ids,
)
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

_LIST_TASKS_QUERY = """
    SELECT t.id, t.title, t.completed, t.created_at,
           GROUP_CONCAT(tt.tag_id) AS tag_ids
    FROM tasks t
    LEFT JOIN task_tags tt ON tt.task_id = t.id
    WHERE t.owner_id = ?
    GROUP BY t.id
    ORDER BY t.created_at DESC
"""


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    """Translate sqlite3 errors into StorageError."""
    try:
        yield
    except sqlite3.Error as e:
        raise StorageError(f"SQLite {action} failed: {e}") from e


class SqliteGateway(PersistenceGateway):
    """SQLite implementation of the persistence gateway."""

    def __init__(self, db_path: str | Path | None = None):
        """Initialize SQLite gateway.

        Args:
            db_path: Optional database file path. If None, uses default location.
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            with _storage_errors("connect"):
                self._connection = get_connection(self.db_path)
        return self._connection

    async def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        data = row_to_dict(row)
        return Task(
            id=data["id"],
            title=data["title"],
            completed=bool(data["completed"]),
            tag_ids=split_ids(data.get("tag_ids")),
            created_at=parse_datetime(data["created_at"]),
        )

    async def list_tasks(self, owner_id: str) -> list[Task]:
        """List all tasks of an owner with their tag ids."""
        with _storage_errors("list_tasks"):
            rows = self.connection.execute(_LIST_TASKS_QUERY, (owner_id,)).fetchall()
        return [self._row_to_task(row) for row in rows]

    async def insert_task(self, task_data: TaskCreate) -> Task:
        """Insert a task row."""
        task_id = generate_uuid()
        created_at = now_iso()

        with _storage_errors("insert_task"):
            self.connection.execute(
                "INSERT INTO tasks (id, owner_id, title, completed, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    task_id,
                    task_data.owner_id,
                    task_data.title,
                    int(task_data.completed),
                    created_at,
                ),
            )
            self.connection.commit()

        return Task(
            id=task_id,
            title=task_data.title,
            completed=task_data.completed,
            created_at=parse_datetime(created_at),
        )

    async def update_task(self, task_id: str, updates: TaskUpdate) -> None:
        """Persist title and completion of a task."""
        with _storage_errors("update_task"):
            cursor = self.connection.execute(
                "UPDATE tasks SET title = ?, completed = ? WHERE id = ?",
                (updates.title, int(updates.completed), task_id),
            )
            self.connection.commit()

        if cursor.rowcount == 0:
            raise StorageError(f"Task not found: {task_id}")

    async def delete_task(self, task_id: str) -> None:
        """Delete a task row."""
        with _storage_errors("delete_task"):
            self.connection.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            self.connection.commit()

    async def list_tags(self, owner_id: str) -> list[Tag]:
        """List all tags of an owner ordered by name."""
        with _storage_errors("list_tags"):
            rows = self.connection.execute(
                "SELECT id, name FROM tags WHERE owner_id = ? ORDER BY name",
                (owner_id,),
            ).fetchall()
        return [Tag(**row_to_dict(row)) for row in rows]

    async def insert_tag(self, tag_data: TagCreate) -> Tag:
        """Insert a tag row."""
        tag_id = generate_uuid()

        with _storage_errors("insert_tag"):
            self.connection.execute(
                "INSERT INTO tags (id, owner_id, name, created_at) VALUES (?, ?, ?, ?)",
                (tag_id, tag_data.owner_id, tag_data.name, now_iso()),
            )
            self.connection.commit()

        return Tag(id=tag_id, name=tag_data.name)

    async def delete_tag(self, tag_id: str) -> None:
        """Delete a tag row; associations go with it through the cascade."""
        with _storage_errors("delete_tag"):
            self.connection.execute("DELETE FROM tags WHERE id = ?", (tag_id,))
            self.connection.commit()

    async def insert_association(self, task_id: str, tag_id: str) -> None:
        """Attach a tag to a task, ignoring an existing pair."""
        with _storage_errors("insert_association"):
            self.connection.execute(
                "INSERT OR IGNORE INTO task_tags (task_id, tag_id) VALUES (?, ?)",
                (task_id, tag_id),
            )
            self.connection.commit()

    async def delete_association(self, task_id: str, tag_id: str) -> None:
        """Detach a tag from a task."""
        with _storage_errors("delete_association"):
            self.connection.execute(
                "DELETE FROM task_tags WHERE task_id = ? AND tag_id = ?",
                (task_id, tag_id),
            )
            self.connection.commit()

    async def insert_session(self, session: TimerSession) -> None:
        """Persist a completed timer session."""
        with _storage_errors("insert_session"):
            self.connection.execute(
                "INSERT INTO timer_sessions "
                "(id, task_id, start_time, end_time, duration_seconds) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    generate_uuid(),
                    session.task_id,
                    session.start_time.isoformat(),
                    session.end_time.isoformat(),
                    session.duration_seconds,
                ),
            )
            self.connection.commit()
