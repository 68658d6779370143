"""Filter engine - derives the visible task subset from the view filters."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, field_validator

from todofocus.models import Task, ValidationError

CompletionFilter = Literal["all", "active", "completed"]
COMPLETION_FILTERS: tuple[str, ...] = get_args(CompletionFilter)

# Tag filter value selecting tasks without any tag
NO_TAGS = "no-tags"


def matches_completion(task: Task, completion_filter: str) -> bool:
    """Check a task against the completion filter.

    Raises:
        ValidationError: If the filter is not one of all/active/completed
    """
    if completion_filter == "all":
        return True
    if completion_filter == "active":
        return not task.completed
    if completion_filter == "completed":
        return task.completed
    raise ValidationError(f"Unknown completion filter: {completion_filter!r}")


def matches_tag(task: Task, tag_filter: str | None) -> bool:
    """Check a task against the tag filter (None, ``NO_TAGS`` or a tag id)."""
    if tag_filter is None:
        return True
    if tag_filter == NO_TAGS:
        return not task.has_tags
    return tag_filter in task.tag_ids


def visible_tasks(
    tasks: Iterable[Task],
    completion_filter: str = "all",
    tag_filter: str | None = None,
) -> list[Task]:
    """Return the tasks matching both filters, in input order.

    Args:
        tasks: Tasks to filter (normally newest first)
        completion_filter: "all", "active" or "completed"
        tag_filter: None for no tag filtering, ``NO_TAGS`` or a tag id

    Returns:
        New list with the matching tasks
    """
    if completion_filter not in COMPLETION_FILTERS:
        raise ValidationError(f"Unknown completion filter: {completion_filter!r}")
    return [
        task
        for task in tasks
        if matches_completion(task, completion_filter) and matches_tag(task, tag_filter)
    ]


class FilterState(BaseModel):
    """Current filter selection of the task view.

    Attributes:
        completion: Completion filter, "active" by default
        tag: Tag filter, None (no filtering) by default
    """

    model_config = ConfigDict(validate_assignment=True)

    completion: CompletionFilter = "active"
    tag: str | None = None

    @field_validator("tag")
    @classmethod
    def _blank_tag_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    def apply(self, tasks: Iterable[Task]) -> list[Task]:
        """Filter tasks with the current selection."""
        return visible_tasks(tasks, self.completion, self.tag)

    def clear_tag(self, tag_id: str) -> bool:
        """Drop the tag filter if it selects ``tag_id``.

        Returns:
            True if the filter was reset
        """
        if self.tag == tag_id:
            self.tag = None
            return True
        return False
