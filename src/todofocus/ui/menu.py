"""Dropdown menu state for the filter selectors.

A presentation layer that can observe pointer/keyboard interactions outside
an open menu wires an ``OutsideInteractionObserver`` to it, and the menu
closes itself. Filter state never depends on the observer.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from todofocus.models import Tag
from todofocus.services.filter_service import NO_TAGS

Unsubscribe = Callable[[], None]


class OutsideInteractionObserver(Protocol):
    """Reports interactions that happen outside a given menu."""

    def subscribe(self, callback: Callable[[], None]) -> Unsubscribe:
        """Register ``callback``; returns a function removing it again."""
        ...


@dataclass(frozen=True)
class MenuOption:
    value: str | None
    label: str


COMPLETION_OPTIONS: tuple[MenuOption, ...] = (
    MenuOption("all", "All Tasks"),
    MenuOption("active", "Active"),
    MenuOption("completed", "Completed"),
)


def tag_filter_options(tags: Sequence[Tag]) -> list[MenuOption]:
    """Options of the tag filter menu: all, untagged, then every tag."""
    return [
        MenuOption(None, "All Tags"),
        MenuOption(NO_TAGS, "No Tags"),
        *(MenuOption(tag.id, tag.name) for tag in tags),
    ]


class MenuState:
    """Open/closed state and selection of one dropdown menu."""

    def __init__(
        self,
        options: Sequence[MenuOption],
        value: str | None = None,
        on_change: Callable[[str | None], None] | None = None,
    ):
        self.options = list(options)
        self.value = value
        self.on_change = on_change
        self.is_open = False
        self._unsubscribe: Unsubscribe | None = None

    @property
    def label(self) -> str:
        """Label of the selected option, falling back to the first one."""
        for option in self.options:
            if option.value == self.value:
                return option.label
        return self.options[0].label if self.options else ""

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def toggle(self) -> None:
        self.is_open = not self.is_open

    def select(self, value: str | None) -> None:
        """Select an option value, notify ``on_change`` and close the menu."""
        if value not in {option.value for option in self.options}:
            raise KeyError(value)
        self.value = value
        if self.on_change is not None:
            self.on_change(value)
        self.close()

    def bind(self, observer: OutsideInteractionObserver) -> None:
        """Close the menu whenever the observer reports an outside interaction."""
        self.unbind()
        self._unsubscribe = observer.subscribe(self.close)

    def unbind(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
