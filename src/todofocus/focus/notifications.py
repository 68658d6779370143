"""Best-effort notifications for finished countdowns."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from rich.console import Console

from todofocus.models import NotificationError
from todofocus.ui.console import get_console

logger = logging.getLogger(__name__)


class NotificationChannel(ABC):
    """Side channel able to show a system/visual notification."""

    @abstractmethod
    async def request_permission(self) -> bool:
        """Ask for permission to notify.

        Returns:
            True if notifications may be shown

        Raises:
            NotificationError: If the permission request itself fails
        """

    @abstractmethod
    async def show(self, title: str, body: str) -> None:
        """Show a notification.

        Raises:
            NotificationError: If delivery fails
        """


class ConsoleNotifier(NotificationChannel):
    """Notification channel printing to the terminal with a bell."""

    def __init__(self, console: Console | None = None, bell: bool = True):
        self.console = console or get_console()
        self.bell = bell

    async def request_permission(self) -> bool:
        return True

    async def show(self, title: str, body: str) -> None:
        try:
            if self.bell:
                self.console.bell()
            self.console.print(f"[warning]{title}[/warning] {body}")
        except OSError as e:
            raise NotificationError(f"Could not write notification: {e}") from e


class Notifier:
    """Fire-and-forget wrapper around a NotificationChannel.

    Permission is requested once and remembered. Nothing raised by the
    channel ever reaches the caller.
    """

    def __init__(self, channel: NotificationChannel | None, enabled: bool = True):
        self.channel = channel
        self.enabled = enabled and channel is not None
        self._permission: bool | None = None

    @property
    def permission_granted(self) -> bool:
        return bool(self._permission)

    async def ensure_permission(self) -> bool:
        """Request permission if it has not been decided yet."""
        if not self.enabled:
            return False
        if self._permission is None:
            try:
                self._permission = await self.channel.request_permission()
            except Exception as e:
                logger.warning("Notification permission request failed: %s", e)
                self._permission = False
        return self._permission

    async def notify(self, title: str, body: str) -> bool:
        """Show a notification if allowed.

        Returns:
            True if the channel accepted the notification
        """
        if not await self.ensure_permission():
            return False
        try:
            await self.channel.show(title, body)
        except Exception as e:
            logger.warning("Notification failed: %s", e)
            return False
        return True
