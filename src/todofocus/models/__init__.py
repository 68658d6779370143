"""todofocus domain models.

This package contains the Pydantic models that represent the core domain
entities (tasks, tags, timer sessions) and the exception hierarchy shared by
every layer.
"""

from .core import Tag, TagCreate, Task, TaskCreate, TaskUpdate, TimerSession
from .exceptions import (
    NotificationError,
    StorageError,
    TimerStateError,
    TodoFocusError,
    ValidationError,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    # Tag models
    "Tag",
    "TagCreate",
    # Timer models
    "TimerSession",
    # Errors
    "TodoFocusError",
    "ValidationError",
    "StorageError",
    "NotificationError",
    "TimerStateError",
]
