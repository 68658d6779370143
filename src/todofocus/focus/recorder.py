"""Session recorder - persists finished countdown runs."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from todofocus.models import StorageError, TimerSession
from todofocus.repositories import PersistenceGateway

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
RecordedCallback = Callable[[str, int], Awaitable[None] | None]


def utc_now() -> datetime:
    return datetime.now(UTC)


class SessionRecorder:
    """Writes a TimerSession when a bound countdown reaches zero.

    Recording is best-effort: a storage failure is logged, the callback is
    skipped and nothing is retried.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        on_recorded: RecordedCallback | None = None,
        clock: Clock = utc_now,
    ):
        """Initialize the session recorder.

        Args:
            gateway: PersistenceGateway used for ``insert_session``
            on_recorded: Called with ``(task_id, duration_seconds)`` after a
                successful write; may be a coroutine function
            clock: Source of the session end time
        """
        self.gateway = gateway
        self.on_recorded = on_recorded
        self.clock = clock

    async def record(
        self,
        task_id: str,
        start_time: datetime,
        duration_seconds: int,
    ) -> TimerSession | None:
        """Persist one completed run.

        Args:
            task_id: Task the countdown was bound to
            start_time: Time captured when the countdown was started
            duration_seconds: Configured duration of the run

        Returns:
            The persisted session, or None if the write failed
        """
        session = TimerSession(
            task_id=task_id,
            start_time=start_time,
            end_time=self.clock(),
            duration_seconds=duration_seconds,
        )

        try:
            await self.gateway.insert_session(session)
        except StorageError as e:
            logger.error("Error saving timer session for task %s: %s", task_id, e)
            return None

        logger.info(
            "Timer completed for task %s with duration %s seconds",
            task_id,
            duration_seconds,
        )
        if self.on_recorded is not None:
            result = self.on_recorded(task_id, duration_seconds)
            if inspect.isawaitable(result):
                await result
        return session
