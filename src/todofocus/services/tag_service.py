"""Tag association manager - tags and the many-to-many task/tag relation."""

from __future__ import annotations

import logging

from todofocus.models import StorageError, Tag, TagCreate, Task, ValidationError
from todofocus.repositories import PersistenceGateway
from todofocus.services.filter_service import FilterState
from todofocus.services.task_service import TaskRepository

logger = logging.getLogger(__name__)


def clean_tag_name(name: str) -> str:
    """Return the trimmed tag name or raise ValidationError if it is empty."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Tag name must not be empty")
    return cleaned


class TagAssociationManager:
    """Maintains the tag cache and the task/tag associations.

    Association writes never fail on "already tagged" or "not tagged":
    the manager patches the task cache optimistically, writes the single row,
    and refreshes the task repository when the write succeeds.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        task_repository: TaskRepository,
        filter_state: FilterState | None = None,
    ):
        """Initialize the tag association manager.

        Args:
            gateway: PersistenceGateway implementation for data access
            task_repository: Repository whose cached tasks carry the tag ids
            filter_state: Active view filter, cleared when its tag is deleted
        """
        self.gateway = gateway
        self.task_repository = task_repository
        self.filter_state = filter_state if filter_state is not None else FilterState()
        self.tags: list[Tag] = []

    @property
    def tag_ids(self) -> set[str]:
        return {tag.id for tag in self.tags}

    def get(self, tag_id: str) -> Tag | None:
        """Return the cached tag with this id, if any."""
        for tag in self.tags:
            if tag.id == tag_id:
                return tag
        return None

    def resolve(self, name_or_id: str) -> Tag | None:
        """Find a cached tag by id, then by case-insensitive name."""
        tag = self.get(name_or_id)
        if tag is not None:
            return tag
        return self._find_by_name(name_or_id)

    def _find_by_name(self, name: str) -> Tag | None:
        wanted = name.strip().casefold()
        for tag in self.tags:
            if tag.name.casefold() == wanted:
                return tag
        return None

    def tags_for_task(self, task: Task) -> list[Tag]:
        """Tags attached to a task, in tag-list order."""
        return [tag for tag in self.tags if tag.id in task.tag_ids]

    def available_tags_for(self, task: Task) -> list[Tag]:
        """Tags that can still be attached to a task."""
        return [tag for tag in self.tags if tag.id not in task.tag_ids]

    async def list_tags(self, owner_id: str | None = None) -> list[Tag]:
        """Fetch all tags of an owner and replace the cache.

        Args:
            owner_id: Owner whose tags are listed (defaults to the task
                repository's owner)

        Returns:
            Tags ordered by name

        Raises:
            StorageError: If the gateway call fails
        """
        owner_id = owner_id or self.task_repository.owner_id
        if not owner_id:
            raise ValidationError("An owner id is required")
        try:
            tags = await self.gateway.list_tags(owner_id)
        except StorageError as e:
            logger.error("Error fetching tags for %s: %s", owner_id, e)
            raise

        self.tags = list(tags)
        return list(self.tags)

    async def create_tag(self, owner_id: str | None, name: str) -> Tag:
        """Create a tag.

        Args:
            owner_id: Owner of the new tag
            name: Tag name; surrounding whitespace is trimmed

        Returns:
            The created Tag, appended to the cache

        Raises:
            ValidationError: If the name is empty or already used by the owner
                (names are compared case-insensitively)
            StorageError: If the tag row cannot be written
        """
        name = clean_tag_name(name)
        owner_id = owner_id or self.task_repository.owner_id
        if not owner_id:
            raise ValidationError("An owner id is required")
        if self._find_by_name(name) is not None:
            raise ValidationError(f"Tag already exists: {name}")

        try:
            tag = await self.gateway.insert_tag(TagCreate(owner_id=owner_id, name=name))
        except StorageError as e:
            logger.error("Error adding tag %r: %s", name, e)
            raise

        self.tags.append(tag)
        return tag

    async def delete_tag(self, tag_id: str) -> None:
        """Delete a tag and everything that refers to it.

        The tag leaves the cache, the active tag filter and every cached
        task's tag set right away; storage follows, then the task list is
        re-fetched.
        """
        self.tags = [tag for tag in self.tags if tag.id != tag_id]
        self.filter_state.clear_tag(tag_id)
        for task in list(self.task_repository.tasks):
            if tag_id in task.tag_ids:
                self.task_repository.patch_cached(
                    task.id, tag_ids=task.tag_ids - {tag_id}
                )

        try:
            await self.gateway.delete_tag(tag_id)
        except StorageError as e:
            logger.error("Error deleting tag %s: %s", tag_id, e)

        await self.task_repository.refresh()

    async def add_tag_to_task(self, task_id: str, tag_id: str) -> None:
        """Attach a tag to a task; attaching it twice is harmless.

        Raises:
            ValidationError: If the task or the tag is unknown
        """
        task = self._require_endpoints(task_id, tag_id)
        self.task_repository.patch_cached(task_id, tag_ids=task.tag_ids | {tag_id})

        try:
            await self.gateway.insert_association(task_id, tag_id)
        except StorageError as e:
            logger.error("Error adding tag %s to task %s: %s", tag_id, task_id, e)
            return

        await self.task_repository.refresh()

    async def remove_tag_from_task(self, task_id: str, tag_id: str) -> None:
        """Detach a tag from a task; detaching a missing tag is harmless.

        Raises:
            ValidationError: If the task or the tag is unknown
        """
        task = self._require_endpoints(task_id, tag_id)
        self.task_repository.patch_cached(task_id, tag_ids=task.tag_ids - {tag_id})

        try:
            await self.gateway.delete_association(task_id, tag_id)
        except StorageError as e:
            logger.error("Error removing tag %s from task %s: %s", tag_id, task_id, e)
            return

        await self.task_repository.refresh()

    def _require_endpoints(self, task_id: str, tag_id: str) -> Task:
        task = self.task_repository.get(task_id)
        if task is None:
            raise ValidationError(f"Task not found: {task_id}")
        if self.get(tag_id) is None:
            raise ValidationError(f"Tag not found: {tag_id}")
        return task
