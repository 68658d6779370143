"""Persistence port for todofocus.

This module defines the abstract base class (interface) every storage backend
implements, following the hexagonal architecture (Ports & Adapters) pattern.

The gateway is durable storage for tasks, tags, task/tag associations and
timer sessions. The services layer keeps its own in-memory caches and only
talks to storage through this contract, so local SQLite and a remote REST
store are interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from todofocus.models import Tag, TagCreate, Task, TaskCreate, TaskUpdate, TimerSession


class PersistenceGateway(ABC):
    """Abstract base class for all persistence operations.

    Every method raises ``StorageError`` when the underlying backend fails.
    """

    @abstractmethod
    async def list_tasks(self, owner_id: str) -> list[Task]:
        """List all tasks of an owner.

        Args:
            owner_id: Owner whose tasks are listed

        Returns:
            Task objects with ``tag_ids`` populated from the association rows

        Raises:
            StorageError: If the backend call fails
        """
        raise NotImplementedError(
            "PersistenceGateway.list_tasks() must be implemented by adapter"
        )

    @abstractmethod
    async def insert_task(self, task_data: TaskCreate) -> Task:
        """Create a new task row.

        Args:
            task_data: TaskCreate object with owner, title and completion

        Returns:
            Created Task object with generated ID and timestamp, without tags

        Raises:
            StorageError: If the backend call fails
        """
        raise NotImplementedError(
            "PersistenceGateway.insert_task() must be implemented by adapter"
        )

    @abstractmethod
    async def update_task(self, task_id: str, updates: TaskUpdate) -> None:
        """Persist the title and completion status of a task.

        Args:
            task_id: Unique identifier for the task
            updates: New title and completion status

        Raises:
            StorageError: If the backend call fails
        """
        raise NotImplementedError(
            "PersistenceGateway.update_task() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_task(self, task_id: str) -> None:
        """Delete a task row.

        Raises:
            StorageError: If the backend call fails
        """
        raise NotImplementedError(
            "PersistenceGateway.delete_task() must be implemented by adapter"
        )

    @abstractmethod
    async def list_tags(self, owner_id: str) -> list[Tag]:
        """List all tags of an owner, ordered by name.

        Raises:
            StorageError: If the backend call fails
        """
        raise NotImplementedError(
            "PersistenceGateway.list_tags() must be implemented by adapter"
        )

    @abstractmethod
    async def insert_tag(self, tag_data: TagCreate) -> Tag:
        """Create a new tag row.

        Args:
            tag_data: TagCreate object with owner and name

        Returns:
            Created Tag object with generated ID

        Raises:
            StorageError: If the backend call fails (including a duplicate name)
        """
        raise NotImplementedError(
            "PersistenceGateway.insert_tag() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_tag(self, tag_id: str) -> None:
        """Delete a tag row together with every association referencing it.

        Raises:
            StorageError: If the backend call fails
        """
        raise NotImplementedError(
            "PersistenceGateway.delete_tag() must be implemented by adapter"
        )

    @abstractmethod
    async def insert_association(self, task_id: str, tag_id: str) -> None:
        """Attach a tag to a task.

        Inserting a pair that already exists is not an error.

        Raises:
            StorageError: If the backend call fails
        """
        raise NotImplementedError(
            "PersistenceGateway.insert_association() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_association(self, task_id: str, tag_id: str) -> None:
        """Detach a tag from a task.

        Deleting a pair that does not exist is not an error.

        Raises:
            StorageError: If the backend call fails
        """
        raise NotImplementedError(
            "PersistenceGateway.delete_association() must be implemented by adapter"
        )

    @abstractmethod
    async def insert_session(self, session: TimerSession) -> None:
        """Persist a completed timer session.

        Raises:
            StorageError: If the backend call fails
        """
        raise NotImplementedError(
            "PersistenceGateway.insert_session() must be implemented by adapter"
        )

    async def close(self) -> None:
        """Release connections held by the adapter."""
