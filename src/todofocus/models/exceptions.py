"""Custom exceptions for todofocus."""


class TodoFocusError(Exception):
    """Base exception for all todofocus errors."""


class ValidationError(TodoFocusError, ValueError):
    """Raised when user input is rejected before any mutation or I/O."""


class StorageError(TodoFocusError):
    """Raised when a persistence gateway call fails."""


class NotificationError(TodoFocusError):
    """Raised when notification permission is denied or delivery fails."""


class TimerStateError(TodoFocusError):
    """Raised when a timer operation is not allowed in the current state."""
