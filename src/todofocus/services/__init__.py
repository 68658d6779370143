"""Services module for todofocus - Business logic layer."""

from .filter_service import NO_TAGS, FilterState, visible_tasks
from .tag_service import TagAssociationManager
from .task_service import TaskRepository

__all__ = [
    "TaskRepository",
    "TagAssociationManager",
    "FilterState",
    "visible_tasks",
    "NO_TAGS",
]
