"""Tests for SQLite progress persistence."""

from datetime import datetime

import pytest

from kotlincourse.classroom import ProgressStore
from kotlincourse.schemas import ProgressRecord


@pytest.fixture
def store(tmp_path):
    return ProgressStore(tmp_path / "state" / "progress.db")


class TestProgressStore:

    def test_creates_database(self, tmp_path):
        db_path = tmp_path / "nested" / "progress.db"
        ProgressStore(db_path)
        assert db_path.exists()

    def test_load_unknown_learner(self, store):
        assert store.load("nobody") is None

    def test_round_trip(self, store):
        record = ProgressRecord(
            learner_id="alice",
            completed_lesson_ids=frozenset({"1.1-expanded", "1.2"}),
            current_lesson_id="1.10",
            total_time_minutes=75,
            last_activity_at=datetime(2026, 10, 18, 9, 30),
        )
        store.save(record)
        assert store.load("alice") == record

    def test_save_replaces_completions(self, store):
        store.save(ProgressRecord(learner_id="alice", completed_lesson_ids=frozenset({"1.1", "1.2"})))
        store.save(ProgressRecord(learner_id="alice", completed_lesson_ids=frozenset({"1.2"})))
        assert store.load("alice").completed_lesson_ids == frozenset({"1.2"})

    def test_stale_ids_persisted(self, store):
        store.save(ProgressRecord(learner_id="alice", completed_lesson_ids=frozenset({"0.retired"})))
        assert store.load("alice").completed_lesson_ids == frozenset({"0.retired"})

    def test_learners_independent(self, store):
        store.save(ProgressRecord(learner_id="alice", completed_lesson_ids=frozenset({"1.1"})))
        store.save(ProgressRecord(learner_id="bob", completed_lesson_ids=frozenset({"1.2"})))
        assert store.load("alice").completed_lesson_ids == frozenset({"1.1"})
        assert store.load("bob").completed_lesson_ids == frozenset({"1.2"})
        assert store.list_learners() == ["alice", "bob"]

    def test_empty_record_round_trip(self, store):
        store.save(ProgressRecord(learner_id="carol"))
        assert store.load("carol") == ProgressRecord(learner_id="carol")

    def test_delete(self, store):
        store.save(ProgressRecord(learner_id="alice", completed_lesson_ids=frozenset({"1.1"})))
        assert store.delete("alice") is True
        assert store.load("alice") is None
        assert store.delete("alice") is False

    def test_persists_across_instances(self, tmp_path):
        db_path = tmp_path / "progress.db"
        ProgressStore(db_path).save(ProgressRecord(learner_id="alice", total_time_minutes=10))
        assert ProgressStore(db_path).load("alice").total_time_minutes == 10
