"""Focus timer: countdown state machine, tick sources, session recording."""

from .notifications import ConsoleNotifier, NotificationChannel, Notifier
from .recorder import SessionRecorder
from .ticker import AsyncioTicker, Ticker, asyncio_ticker_factory
from .timer import (
    PRESET_DURATIONS,
    TimerState,
    TimerStateMachine,
    clamp_minutes,
    format_time,
)

__all__ = [
    "TimerStateMachine",
    "TimerState",
    "PRESET_DURATIONS",
    "clamp_minutes",
    "format_time",
    "SessionRecorder",
    "Ticker",
    "AsyncioTicker",
    "asyncio_ticker_factory",
    "NotificationChannel",
    "Notifier",
    "ConsoleNotifier",
]
