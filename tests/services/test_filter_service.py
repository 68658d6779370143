"""Unit tests for the filter engine."""

from __future__ import annotations

import pydantic
import pytest

from tests.fakes import make_task
from todofocus.models import ValidationError
from todofocus.services.filter_service import NO_TAGS, FilterState, visible_tasks


@pytest.fixture()
def sample():
    return [
        make_task("t1", "active tagged", tag_ids={"work"}),
        make_task("t2", "done tagged", completed=True, tag_ids={"work", "home"}),
        make_task("t3", "active untagged"),
        make_task("t4", "done untagged", completed=True),
    ]


def _ids(tasks):
    return [t.id for t in tasks]


class TestVisibleTasks:
    def test_all_without_tag_filter_is_identity(self, sample):
        assert _ids(visible_tasks(sample, "all", None)) == ["t1", "t2", "t3", "t4"]

    def test_active(self, sample):
        assert _ids(visible_tasks(sample, "active")) == ["t1", "t3"]

    def test_completed(self, sample):
        assert _ids(visible_tasks(sample, "completed")) == ["t2", "t4"]

    def test_no_tags(self, sample):
        assert _ids(visible_tasks(sample, "all", NO_TAGS)) == ["t3", "t4"]

    def test_tag_id(self, sample):
        assert _ids(visible_tasks(sample, "all", "home")) == ["t2"]

    def test_filters_are_combined(self, sample):
        assert _ids(visible_tasks(sample, "active", "work")) == ["t1"]
        assert _ids(visible_tasks(sample, "completed", NO_TAGS)) == ["t4"]

    def test_unknown_tag_matches_nothing(self, sample):
        assert visible_tasks(sample, "all", "gone") == []

    def test_unknown_completion_filter(self, sample):
        with pytest.raises(ValidationError):
            visible_tasks(sample, "later")

    def test_order_is_preserved(self, sample):
        reversed_sample = list(reversed(sample))
        assert _ids(visible_tasks(reversed_sample, "active")) == ["t3", "t1"]


class TestFilterState:
    def test_defaults(self):
        state = FilterState()
        assert state.completion == "active"
        assert state.tag is None

    def test_apply(self, sample):
        state = FilterState(completion="all", tag="work")
        assert _ids(state.apply(sample)) == ["t1", "t2"]

    def test_blank_tag_becomes_none(self):
        state = FilterState()
        state.tag = "  "
        assert state.tag is None

    def test_invalid_completion_is_rejected(self):
        state = FilterState()
        with pytest.raises(pydantic.ValidationError):
            state.completion = "someday"

    def test_clear_tag(self):
        state = FilterState(tag="work")
        assert state.clear_tag("home") is False
        assert state.clear_tag("work") is True
        assert state.tag is None
