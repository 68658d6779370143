"""Countdown timer state machine.

A single countdown, optionally bound to a task::

    IDLE/PAUSED --start()--> RUNNING --tick() x N--> ALERTED --dismiss()--> IDLE
    RUNNING --pause()--> PAUSED
    any --reset()--> IDLE

The duration can only be changed while the countdown is not running. When a
bound countdown reaches zero the run is handed to the SessionRecorder with
the configured duration, whatever the pause history was. ``settle()`` waits
for that hand-off to finish.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from enum import Enum

from todofocus.focus.notifications import Notifier
from todofocus.focus.recorder import Clock, SessionRecorder, utc_now
from todofocus.focus.ticker import Ticker, TickerFactory, asyncio_ticker_factory
from todofocus.models import Task, TimerStateError, ValidationError
from todofocus.services.task_service import TaskRepository

logger = logging.getLogger(__name__)

PRESET_DURATIONS: tuple[int, ...] = (5 * 60, 15 * 60, 30 * 60, 60 * 60)
DEFAULT_INITIAL_TIME = 25 * 60
MIN_CUSTOM_MINUTES = 1
MAX_CUSTOM_MINUTES = 999
DEFAULT_TITLE = "Countdown Timer"


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    ALERTED = "alerted"


def clamp_minutes(minutes: int) -> int:
    """Clamp a custom duration to the allowed [1, 999] minute range."""
    return max(MIN_CUSTOM_MINUTES, min(MAX_CUSTOM_MINUTES, int(minutes)))


def format_time(total_seconds: int) -> str:
    """Format seconds as ``MM:SS`` (minutes are not wrapped into hours)."""
    minutes, seconds = divmod(max(0, int(total_seconds)), 60)
    return f"{minutes:02d}:{seconds:02d}"


class TimerStateMachine:
    """Drives one countdown.

    Attributes:
        state: Current TimerState
        initial_time: Configured duration in seconds
        time_left: Seconds remaining in the current run
        start_time: When the countdown was last started, None when reset
        task: Task the countdown is bound to, None for an untargeted timer
        alert_visible: Whether the "time's up" alert is still shown
        task_repository: Repository used to persist a renamed bound task
    """

    def __init__(
        self,
        *,
        initial_time: int = DEFAULT_INITIAL_TIME,
        recorder: SessionRecorder | None = None,
        notifier: Notifier | None = None,
        ticker_factory: TickerFactory | None = None,
        clock: Clock = utc_now,
        presets: tuple[int, ...] = PRESET_DURATIONS,
        task: Task | None = None,
        task_repository: TaskRepository | None = None,
    ):
        if initial_time <= 0:
            raise ValidationError("Timer duration must be positive")

        self.recorder = recorder
        self.notifier = notifier
        self.ticker_factory = ticker_factory or asyncio_ticker_factory()
        self.clock = clock
        self.presets = tuple(presets)

        self.state = TimerState.IDLE
        self.initial_time = initial_time
        self.time_left = initial_time
        self.start_time: datetime | None = None
        self.task = task
        self.alert_visible = False
        self.task_repository = task_repository
        self._custom_title: str | None = None
        self._ticker: Ticker | None = None
        self._settled = asyncio.Event()
        self._settled.set()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self.state is TimerState.RUNNING

    @property
    def can_start(self) -> bool:
        return not self.is_running and self.time_left > 0

    @property
    def can_reset(self) -> bool:
        return self.is_running or self.time_left != self.initial_time

    @property
    def display(self) -> str:
        return format_time(self.time_left)

    @property
    def title(self) -> str:
        if self.task is not None:
            return self.task.title
        return self._custom_title or DEFAULT_TITLE

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_preset(self, seconds: int) -> None:
        """Select one of the preset durations.

        Raises:
            ValidationError: If ``seconds`` is not a preset
            TimerStateError: If the countdown is running
        """
        if seconds not in self.presets:
            raise ValidationError(f"Not a preset duration: {seconds} seconds")
        self._set_duration(seconds)

    def set_custom_minutes(self, minutes: int) -> int:
        """Set a custom duration, clamped to [1, 999] minutes.

        Returns:
            The configured duration in seconds

        Raises:
            TimerStateError: If the countdown is running
        """
        seconds = clamp_minutes(minutes) * 60
        self._set_duration(seconds)
        return seconds

    def _set_duration(self, seconds: int) -> None:
        if self.is_running:
            raise TimerStateError("Cannot change the duration while the timer is running")
        self.initial_time = seconds
        self.time_left = seconds
        self.start_time = None
        self.alert_visible = False
        self.state = TimerState.IDLE
        logger.debug("Timer duration set to %s seconds", seconds)

    def bind_task(self, task: Task | None) -> None:
        """Bind the countdown to a task, or unbind it with None.

        Raises:
            TimerStateError: If the countdown is running for a different task
        """
        current_id = self.task.id if self.task is not None else None
        new_id = task.id if task is not None else None
        if self.is_running and new_id != current_id:
            raise TimerStateError(
                "A focus session is already running; pause or reset it first"
            )
        if new_id != current_id:
            self._custom_title = None
        self.task = task

    async def rename(self, title: str) -> str:
        """Change the title shown for the countdown.

        A bound countdown renames its task through the task repository, so
        the new title is persisted. An untargeted countdown keeps the title
        locally; a blank title restores the default.

        Returns:
            The title now shown

        Raises:
            TimerStateError: If a task is bound but no task repository is set
            ValidationError: If the bound task is not in the repository
        """
        cleaned = (title or "").strip()
        task = self.task
        if task is None:
            self._custom_title = cleaned or None
            return self.title

        if not cleaned or cleaned == task.title:
            return self.title
        if self.task_repository is None:
            raise TimerStateError("Cannot rename the bound task without a task repository")
        self.task = await self.task_repository.rename_task(task.id, cleaned)
        return self.title

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Start or resume the countdown.

        Returns:
            True if the countdown is now running because of this call
        """
        if not self.can_start:
            return False

        self.start_time = self.clock()
        self.state = TimerState.RUNNING
        self.alert_visible = False
        self._ticker = self.ticker_factory(self.tick)
        self._ticker.start()
        logger.debug("Timer started with %s seconds left", self.time_left)
        return True

    async def tick(self) -> None:
        """Advance the countdown by one second."""
        if not self.is_running:
            return

        self.time_left -= 1
        if self.time_left <= 0:
            self.time_left = 0
            await self._complete()

    def pause(self) -> None:
        """Pause a running countdown, keeping the time left."""
        if not self.is_running:
            return
        self._cancel_ticker()
        self.state = TimerState.PAUSED
        logger.debug("Timer paused with %s seconds left", self.time_left)

    def reset(self) -> None:
        """Stop the countdown and restore the configured duration."""
        self._cancel_ticker()
        self.time_left = self.initial_time
        self.start_time = None
        self.alert_visible = False
        self.state = TimerState.IDLE

    def dismiss(self) -> None:
        """Acknowledge the alert; the time left stays at zero."""
        if self.state is not TimerState.ALERTED:
            return
        self.alert_visible = False
        self.state = TimerState.IDLE

    def close(self) -> None:
        """Cancel any pending tick when the timer goes away."""
        self._cancel_ticker()
        if self.is_running:
            self.state = TimerState.PAUSED

    def _cancel_ticker(self) -> None:
        ticker, self._ticker = self._ticker, None
        if ticker is not None:
            ticker.cancel()

    async def settle(self) -> None:
        """Wait until a countdown that reached zero has been recorded and notified."""
        await self._settled.wait()

    async def _complete(self) -> None:
        self._settled.clear()
        self._cancel_ticker()
        self.state = TimerState.ALERTED
        self.alert_visible = True

        task = self.task
        logger.debug("Timer finished for %s", task.id if task else "no task")

        try:
            if task is not None and self.recorder is not None and self.start_time is not None:
                await self.recorder.record(task.id, self.start_time, self.initial_time)

            if self.notifier is not None:
                body = (
                    f'Task "{task.title}" is complete.'
                    if task is not None
                    else "Your timer has finished."
                )
                await self.notifier.notify("Time's up!", body)
        finally:
            self._settled.set()
