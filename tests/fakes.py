"""In-memory test doubles for the persistence gateway and the timer seams."""

from __future__ import annotations

import asyncio
import uuid
from datetime import UTC, datetime, timedelta

from todofocus.focus.notifications import NotificationChannel
from todofocus.focus.ticker import TickCallback, Ticker
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


class FakeClock:
    """Clock advancing one second on every call."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class TickClock:
    """Clock that only moves when the test advances it."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1) -> None:
        self.now += timedelta(seconds=seconds)


class FakeGateway(PersistenceGateway):
    """Dict-backed gateway; names in ``fail`` raise StorageError."""

    def __init__(self, clock: FakeClock | None = None):
        self.clock = clock or FakeClock()
        self.tasks: dict[str, dict] = {}
        self.tags: dict[str, dict] = {}
        self.associations: set[tuple[str, str]] = set()
        self.sessions: list[TimerSession] = []
        self.fail: set[str] = set()
        self.calls: list[str] = []
        self.closed = False

    def _enter(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail:
            raise StorageError(f"{name} failed")

    def _task(self, task_id: str) -> Task:
        row = self.tasks[task_id]
        return Task(
            id=task_id,
            title=row["title"],
            completed=row["completed"],
            tag_ids={tag for task, tag in self.associations if task == task_id},
            created_at=row["created_at"],
        )

    def seed_task(self, owner_id: str, title: str) -> str:
        """Store a task row directly, bypassing call tracking."""
        task_id = str(uuid.uuid4())
        self.tasks[task_id] = {
            "owner_id": owner_id,
            "title": title,
            "completed": False,
            "created_at": self.clock(),
        }
        return task_id

    async def list_tasks(self, owner_id: str) -> list[Task]:
        self._enter("list_tasks")
        tasks = [
            self._task(task_id)
            for task_id, row in self.tasks.items()
            if row["owner_id"] == owner_id
        ]
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)

    async def insert_task(self, task_data: TaskCreate) -> Task:
        self._enter("insert_task")
        task_id = str(uuid.uuid4())
        self.tasks[task_id] = {
            "owner_id": task_data.owner_id,
            "title": task_data.title,
            "completed": task_data.completed,
            "created_at": self.clock(),
        }
        return self._task(task_id)

    async def update_task(self, task_id: str, updates: TaskUpdate) -> None:
        self._enter("update_task")
        if task_id not in self.tasks:
            raise StorageError(f"Task not found: {task_id}")
        self.tasks[task_id].update(title=updates.title, completed=updates.completed)

    async def delete_task(self, task_id: str) -> None:
        self._enter("delete_task")
        self.tasks.pop(task_id, None)
        self.associations = {a for a in self.associations if a[0] != task_id}

    async def list_tags(self, owner_id: str) -> list[Tag]:
        self._enter("list_tags")
        tags = [
            Tag(id=tag_id, name=row["name"])
            for tag_id, row in self.tags.items()
            if row["owner_id"] == owner_id
        ]
        return sorted(tags, key=lambda t: t.name)

    async def insert_tag(self, tag_data: TagCreate) -> Tag:
        self._enter("insert_tag")
        tag_id = str(uuid.uuid4())
        self.tags[tag_id] = {"owner_id": tag_data.owner_id, "name": tag_data.name}
        return Tag(id=tag_id, name=tag_data.name)

    async def delete_tag(self, tag_id: str) -> None:
        self._enter("delete_tag")
        self.tags.pop(tag_id, None)
        self.associations = {a for a in self.associations if a[1] != tag_id}

    async def insert_association(self, task_id: str, tag_id: str) -> None:
        self._enter("insert_association")
        self.associations.add((task_id, tag_id))

    async def delete_association(self, task_id: str, tag_id: str) -> None:
        self._enter("delete_association")
        self.associations.discard((task_id, tag_id))

    async def insert_session(self, session: TimerSession) -> None:
        self._enter("insert_session")
        self.sessions.append(session)

    async def close(self) -> None:
        self.closed = True


class SlowSessionGateway(FakeGateway):
    """FakeGateway whose session writes suspend like a network call."""

    def __init__(self, delay: float = 0.05, **kwargs):
        super().__init__(**kwargs)
        self.delay = delay

    async def insert_session(self, session: TimerSession) -> None:
        await asyncio.sleep(self.delay)
        await super().insert_session(session)


class ManualTicker(Ticker):
    """Ticker driven by the test through ``fire``."""

    def __init__(self, callback: TickCallback):
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def running(self) -> bool:
        return self.started and not self.cancelled

    async def fire(self, times: int = 1) -> None:
        for _ in range(times):
            if not self.running:
                return
            await self.callback()


class ManualTickerFactory:
    """Ticker factory remembering every ticker it built."""

    def __init__(self):
        self.tickers: list[ManualTicker] = []

    def __call__(self, callback: TickCallback) -> ManualTicker:
        ticker = ManualTicker(callback)
        self.tickers.append(ticker)
        return ticker

    @property
    def current(self) -> ManualTicker:
        return self.tickers[-1]


class FakeChannel(NotificationChannel):
    """Notification channel collecting shown notifications."""

    def __init__(self, granted: bool = True, error: Exception | None = None):
        self.granted = granted
        self.error = error
        self.permission_requests = 0
        self.shown: list[tuple[str, str]] = []

    async def request_permission(self) -> bool:
        self.permission_requests += 1
        return self.granted

    async def show(self, title: str, body: str) -> None:
        if self.error is not None:
            raise self.error
        self.shown.append((title, body))


def make_task(
    task_id: str = "task-1",
    title: str = "Write report",
    completed: bool = False,
    tag_ids: set[str] | None = None,
    created_at: datetime | None = None,
) -> Task:
    return Task(
        id=task_id,
        title=title,
        completed=completed,
        tag_ids=tag_ids or set(),
        created_at=created_at or datetime(2024, 1, 1, tzinfo=UTC),
    )
