"""Tests for Navigator."""

import pytest

from kotlincourse.classroom import Navigator, ProgressTracker
from kotlincourse.schemas import Catalog, LessonStatus

from .conftest import ORDERED_IDS


@pytest.fixture
def navigator(tracker):
    return Navigator(tracker)


@pytest.fixture
def record(tracker):
    return tracker.new_record("alice")


class TestNavigation:

    def test_total_and_first(self, navigator):
        assert navigator.total_lessons == len(ORDERED_IDS)
        assert navigator.first_lesson_id() == "1.1-expanded"

    def test_next_crosses_parts(self, navigator):
        assert navigator.next_lesson_id("1.1-expanded") == "1.1"
        assert navigator.next_lesson_id("1.10") == "2.1-expanded"
        assert navigator.next_lesson_id("2.1-expanded") is None

    def test_previous(self, navigator):
        assert navigator.previous_lesson_id("2.1-expanded") == "1.10"
        assert navigator.previous_lesson_id("1.1-expanded") is None

    def test_unknown_ids(self, navigator):
        assert navigator.next_lesson_id("7.7") is None
        assert navigator.previous_lesson_id("7.7") is None

    def test_position(self, navigator):
        assert navigator.lesson_position("1.2") == (3, 5)
        assert navigator.lesson_position("7.7") == (0, 5)

    def test_empty_catalog(self):
        navigator = Navigator(ProgressTracker(Catalog()))
        assert navigator.first_lesson_id() is None
        assert navigator.navigation_tree(navigator.tracker.new_record("alice")) == []


class TestRecommendation:

    def test_fresh_learner(self, navigator, record):
        assert navigator.recommended_lesson(record).id == "1.1-expanded"

    def test_current_lesson_first(self, navigator, tracker, record):
        record = tracker.start_lesson(record, "1.10")
        assert navigator.recommended_lesson(record).id == "1.10"

    def test_completed_current_lesson_falls_through(self, navigator, tracker, record):
        record = tracker.start_lesson(record, "1.1-expanded")
        record = tracker.mark_complete(record, "1.1-expanded")
        assert navigator.recommended_lesson(record).id == "1.1"

    def test_all_done(self, navigator, tracker, record):
        for lesson_id in ORDERED_IDS:
            record = tracker.mark_complete(record, lesson_id)
        assert navigator.recommended_lesson(record) is None


class TestCourseTree:

    def test_tree(self, navigator, tracker, record):
        record = tracker.mark_complete(record, "1.1-expanded")
        record = tracker.start_lesson(record, "1.2")
        tree = navigator.navigation_tree(record)

        assert [part.part_number for part in tree] == [1, 2]
        part1 = tree[0]
        assert part1.total_count == 4
        assert part1.completed_count == 1
        statuses = {item.lesson.id: item.status for item in part1.lessons}
        assert statuses["1.1-expanded"] == LessonStatus.COMPLETED
        assert statuses["1.2"] == LessonStatus.IN_PROGRESS
        assert statuses["1.10"] == LessonStatus.NOT_STARTED
        assert [item.lesson.id for item in part1.lessons if item.is_current] == ["1.2"]

    def test_status_indicator(self, navigator, tracker, record):
        record = tracker.mark_complete(record, "1.1")
        record = tracker.start_lesson(record, "1.2")
        assert navigator.status_indicator(record, "1.1") == "✓"
        assert navigator.status_indicator(record, "1.2") == "→"
        assert navigator.status_indicator(record, "1.10") == "○"

    def test_progress_summary(self, navigator, tracker, record):
        record = record.model_copy(update={"completed_lesson_ids": frozenset({"2.1-expanded", "retired"})})
        summary = navigator.progress_summary(record)
        assert summary["completed"] == 1
        assert summary["parts"] == [
            {"part_number": 1, "completed": 0, "total": 4},
            {"part_number": 2, "completed": 1, "total": 1},
        ]
        assert summary["recommended_lesson_id"] == "1.1-expanded"
        assert summary["current_lesson_id"] is None
        assert summary["stale_lesson_ids"] == ["retired"]
