"""Task, tag and timer session data models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Tag(BaseModel):
    """Tag model representing a user-owned label.

    Attributes:
        id: Unique identifier for the tag
        name: Tag name, unique per owner
    """

    id: str
    name: str = Field(min_length=1)


class TagCreate(BaseModel):
    """Model for creating a new tag.

    Attributes:
        owner_id: Owner of the tag
        name: Tag name (required)
    """

    owner_id: str
    name: str = Field(min_length=1)


class Task(BaseModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier for the task
        title: Task title, never empty
        completed: Completion status
        tag_ids: IDs of the tags attached to the task (order irrelevant)
        created_at: Creation timestamp
    """

    id: str
    title: str = Field(min_length=1)
    completed: bool = False
    tag_ids: set[str] = Field(default_factory=set)
    created_at: datetime

    @property
    def has_tags(self) -> bool:
        return bool(self.tag_ids)


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        owner_id: Owner of the task
        title: Task title (required)
        completed: Initial completion status
    """

    owner_id: str
    title: str = Field(min_length=1)
    completed: bool = False


class TaskUpdate(BaseModel):
    """Fields of a task that are persisted by an update.

    Tag changes go through the association endpoints instead.
    """

    title: str = Field(min_length=1)
    completed: bool


class TimerSession(BaseModel):
    """Record of one completed countdown run.

    Attributes:
        task_id: Task the countdown was bound to, None for an untargeted timer
        start_time: When the run was started
        end_time: When the countdown reached zero
        duration_seconds: Planned duration of the run, not elapsed wall-clock
    """

    model_config = ConfigDict(frozen=True)

    task_id: str | None = None
    start_time: datetime
    end_time: datetime
    duration_seconds: int = Field(ge=1)

    @property
    def elapsed_seconds(self) -> float:
        """Wall-clock seconds between start and end (includes pauses)."""
        return (self.end_time - self.start_time).total_seconds()
