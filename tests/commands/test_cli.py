"""End-to-end tests of the command line against a temporary SQLite store."""

from __future__ import annotations

import json
import sqlite3
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from tests.fakes import SlowSessionGateway
from todofocus import __version__
from todofocus.core.factory import Workspace, build_timer
from todofocus.focus.ticker import asyncio_ticker_factory
from todofocus.main import app

runner = CliRunner()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _invoke(*args, input: str | None = None):
    return runner.invoke(app, list(args), input=input)


def _tasks(*extra) -> list[dict]:
    result = _invoke("tasks", "list", "--status", "all", "--output", "json", *extra)
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def _fast_timer(config, gateway, **kwargs):
    return build_timer(
        config, gateway, ticker_factory=asyncio_ticker_factory(0.001), **kwargs
    )


# ---------------------------------------------------------------------------
# Help and version
# ---------------------------------------------------------------------------


class TestTopLevel:
    def test_help_lists_groups(self):
        result = _invoke("--help")
        assert result.exit_code == 0
        for group in ("tasks", "tags", "timer", "config", "version"):
            assert group in result.output

    def test_version(self):
        result = _invoke("version")
        assert result.exit_code == 0
        assert __version__ in result.output
        assert "sqlite" in result.output


# ---------------------------------------------------------------------------
# Tasks and tags
# ---------------------------------------------------------------------------


class TestTaskFlow:
    def test_add_and_list(self):
        assert _invoke("tags", "create", "work").exit_code == 0

        result = _invoke("tasks", "add", "Write report", "--tag", "work")
        assert result.exit_code == 0, result.output
        assert "Task added" in result.output

        (task,) = _tasks()
        assert task["title"] == "Write report"
        assert task["tags"] == ["work"]
        assert task["completed"] is False

    def test_add_empty_title_fails(self):
        result = _invoke("tasks", "add", "   ")
        assert result.exit_code == 1
        assert "must not be empty" in result.output
        assert _tasks() == []

    def test_done_and_undo_by_suffix(self):
        _invoke("tasks", "add", "Finish me")
        (task,) = _tasks()
        suffix = task["id"][-8:]

        assert _invoke("tasks", "done", suffix).exit_code == 0
        assert _tasks()[0]["completed"] is True
        assert _tasks("--tag", "no-tags")[0]["id"] == task["id"]

        result = _invoke("tasks", "list", "--output", "json")
        assert json.loads(result.output) == []

        assert _invoke("tasks", "undo", suffix).exit_code == 0
        assert _tasks()[0]["completed"] is False

    def test_edit(self):
        _invoke("tasks", "add", "Old title")
        (task,) = _tasks()

        result = _invoke("tasks", "edit", task["id"], "New title")

        assert result.exit_code == 0
        assert _tasks()[0]["title"] == "New title"

    def test_tag_and_untag(self):
        _invoke("tags", "create", "home")
        _invoke("tasks", "add", "Laundry")
        (task,) = _tasks()

        assert _invoke("tasks", "tag", task["id"], "home").exit_code == 0
        assert _tasks("--tag", "home")[0]["tags"] == ["home"]

        assert _invoke("tasks", "untag", task["id"], "home").exit_code == 0
        assert _tasks("--tag", "home") == []

    def test_delete_asks_for_confirmation(self):
        _invoke("tasks", "add", "Keep me")
        (task,) = _tasks()

        result = _invoke("tasks", "delete", task["id"], input="n\n")
        assert result.exit_code == 0
        assert len(_tasks()) == 1

        result = _invoke("tasks", "delete", task["id"], "--yes")
        assert result.exit_code == 0
        assert _tasks() == []

    def test_unknown_task(self):
        result = _invoke("tasks", "done", "nope")
        assert result.exit_code == 1
        assert "Task not found" in result.output

    def test_unknown_status(self):
        result = _invoke("tasks", "list", "--status", "someday")
        assert result.exit_code == 1
        assert "Unknown status" in result.output

    def test_empty_list_message(self):
        result = _invoke("tasks", "list")
        assert result.exit_code == 0
        assert "No tasks found." in result.output


class TestTags:
    def test_list_empty(self):
        result = _invoke("tags", "list")
        assert result.exit_code == 0
        assert "No tags yet" in result.output

    def test_duplicate_tag(self):
        _invoke("tags", "create", "work")
        result = _invoke("tags", "create", "work")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_delete_detaches_from_tasks(self):
        _invoke("tags", "create", "work")
        _invoke("tasks", "add", "Report", "--tag", "work")

        result = _invoke("tags", "delete", "work", "--yes")

        assert result.exit_code == 0
        assert _tasks()[0]["tags"] == []
        listed = _invoke("tags", "list", "--output", "json")
        assert json.loads(listed.output) == []


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfigCommands:
    def test_set_and_get(self):
        assert _invoke("config", "set", "timer.default_minutes", "50").exit_code == 0

        result = _invoke("config", "get", "timer.default_minutes")

        assert result.exit_code == 0
        assert json.loads(result.output) == 50

    def test_get_section(self):
        result = _invoke("config", "get", "storage")
        assert json.loads(result.output) == {"backend": "sqlite", "db_path": None}

    def test_invalid_value(self):
        result = _invoke("config", "set", "timer.default_minutes", "0")
        assert result.exit_code == 1
        assert "Invalid value" in result.output

    def test_reset(self):
        _invoke("config", "set", "owner_id", "someone")
        _invoke("config", "reset", "owner_id")
        result = _invoke("config", "get", "owner_id")
        assert json.loads(result.output) == "local"


# ---------------------------------------------------------------------------
# Timer
# ---------------------------------------------------------------------------


class TestTimer:
    @pytest.fixture(autouse=True)
    def fast_timer(self):
        with patch("todofocus.commands.timer.build_timer", side_effect=_fast_timer):
            with patch("todofocus.commands.timer.REFRESH_SECONDS", 0.001):
                yield

    def test_bound_run_records_session(self, tmp_path):
        _invoke("tasks", "add", "Deep work")
        (task,) = _tasks()

        result = _invoke("timer", "start", "--minutes", "1", "--task", task["id"])

        assert result.exit_code == 0, result.output
        assert "Deep work" in result.output
        assert "Focus session complete" in result.output
        with sqlite3.connect(tmp_path / "todofocus.db") as conn:
            rows = conn.execute(
                "SELECT task_id, duration_seconds FROM timer_sessions"
            ).fetchall()
        assert rows == [(task["id"], 60)]

    def test_waits_for_session_write_before_exiting(self):
        gateway = SlowSessionGateway(delay=0.05)
        task_id = gateway.seed_task("local", "Deep work")
        workspace = Workspace(gateway=gateway, owner_id="local")

        with patch("todofocus.commands.utils.build_workspace", return_value=workspace):
            result = _invoke("timer", "start", "--minutes", "1", "--task", task_id)

        assert result.exit_code == 0, result.output
        assert "Focus session complete" in result.output
        assert [(s.task_id, s.duration_seconds) for s in gateway.sessions] == [
            (task_id, 60)
        ]
        assert gateway.closed is True

    def test_title_renames_bound_task(self):
        _invoke("tasks", "add", "Draft")
        (task,) = _tasks()

        result = _invoke(
            "timer", "start", "--minutes", "1", "--task", task["id"], "--title", "Final draft"
        )

        assert result.exit_code == 0, result.output
        assert "Final draft" in result.output
        assert _tasks()[0]["title"] == "Final draft"

    def test_title_of_untargeted_timer(self):
        result = _invoke("timer", "start", "--minutes", "1", "--title", "Sprint")

        assert result.exit_code == 0, result.output
        assert "Sprint" in result.output
        assert "Your timer has finished." in result.output

    def test_unknown_preset(self):
        result = _invoke("timer", "start", "--preset", "7")
        assert result.exit_code == 1
        assert "Not a preset duration" in result.output
