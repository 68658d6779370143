"""Wiring of gateways, services and the focus timer from configuration.

The storage backend is decided once, when the workspace is built; services
only ever see the ``PersistenceGateway`` port.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from todofocus.adapters.rest_api import RestApiGateway
from todofocus.adapters.sqlite import SqliteGateway
from todofocus.config import Config
from todofocus.focus.notifications import NotificationChannel, Notifier
from todofocus.focus.recorder import SessionRecorder
from todofocus.focus.ticker import TickerFactory
from todofocus.focus.timer import TimerStateMachine
from todofocus.models import Task
from todofocus.repositories import PersistenceGateway
from todofocus.services.api.client import APIClient
from todofocus.services.filter_service import FilterState
from todofocus.services.tag_service import TagAssociationManager
from todofocus.services.task_service import TaskRepository


def create_gateway(
    config: Config,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PersistenceGateway:
    """Instantiate the storage adapter selected in the configuration.

    Args:
        config: Application configuration
        transport: Optional httpx transport for the REST backend

    Returns:
        SqliteGateway for "sqlite", RestApiGateway for "rest"
    """
    if config.storage.backend == "rest":
        return RestApiGateway(APIClient(config.api, transport=transport))
    return SqliteGateway(config.storage.db_path)


@dataclass
class Workspace:
    """Task and tag state of one owner, sharing one gateway and filter."""

    gateway: PersistenceGateway
    owner_id: str
    filters: FilterState = field(default_factory=FilterState)
    tasks: TaskRepository = field(init=False)
    tags: TagAssociationManager = field(init=False)

    def __post_init__(self) -> None:
        self.tasks = TaskRepository(self.gateway, self.owner_id)
        self.tags = TagAssociationManager(self.gateway, self.tasks, self.filters)

    async def load(self) -> None:
        """Fetch tags and tasks into the caches.

        Raises:
            StorageError: If either list call fails
        """
        await self.tags.list_tags(self.owner_id)
        await self.tasks.list_tasks(self.owner_id)

    def visible_tasks(self) -> list[Task]:
        return self.filters.apply(self.tasks.tasks)

    async def close(self) -> None:
        await self.gateway.close()


def build_workspace(
    config: Config,
    *,
    gateway: PersistenceGateway | None = None,
) -> Workspace:
    """Build a workspace for the configured owner."""
    return Workspace(gateway=gateway or create_gateway(config), owner_id=config.owner_id)


def build_timer(
    config: Config,
    gateway: PersistenceGateway,
    *,
    channel: NotificationChannel | None = None,
    ticker_factory: TickerFactory | None = None,
    task_repository: TaskRepository | None = None,
) -> TimerStateMachine:
    """Build the focus timer with session recording and notifications.

    When a session has been recorded the timer is unbound from its task.
    Renaming a bound countdown goes through ``task_repository``.
    """
    recorder = SessionRecorder(gateway)
    timer = TimerStateMachine(
        initial_time=config.timer.default_minutes * 60,
        recorder=recorder,
        notifier=Notifier(channel, enabled=config.notifications.enabled),
        ticker_factory=ticker_factory,
        presets=tuple(minutes * 60 for minutes in config.timer.presets),
        task_repository=task_repository,
    )

    def release_task(task_id: str, duration_seconds: int) -> None:
        if timer.task is not None and timer.task.id == task_id:
            timer.bind_task(None)

    recorder.on_recorded = release_task
    return timer
