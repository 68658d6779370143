"""Tests for the shared console and its theme."""

from __future__ import annotations

from todofocus.ui.console import THEME, get_console


def test_console_is_shared():
    assert get_console() is get_console()


def test_theme_styles_are_registered():
    console = get_console()
    for name in ("success", "warning", "error", "muted", "task.id", "tag", "timer"):
        assert name in THEME.styles
        assert console.get_style(name) == THEME.styles[name]
