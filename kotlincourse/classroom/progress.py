"""
ProgressTracker - Track learner completion against a lesson catalog.

Records are immutable: every operation returns an updated ProgressRecord
and leaves its input untouched. Persistence lives in ProgressStore.

Tracks:
- Lesson completion (completed / incomplete, both transitions idempotent)
- Current lesson
- Total study time
"""

import logging
from datetime import datetime
from typing import Iterator, Optional

from kotlincourse.schemas import Catalog, Lesson, LessonStatus, ProgressRecord

logger = logging.getLogger(__name__)


class UnknownLessonError(KeyError):
    """Raised when a lesson id is not part of the tracker's catalog."""

    def __init__(self, lesson_id: str):
        self.lesson_id = lesson_id
        super().__init__(lesson_id)

    def __str__(self) -> str:
        return f"Unknown lesson: {self.lesson_id}"


class ProgressTracker:
    """
    Compute and update learner progress for one catalog.

    The tracker holds a read-only reference to the catalog it was built
    with; after a catalog reload, build a new tracker.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def _require_lesson(self, lesson_id: str) -> Lesson:
        lesson = self.catalog.get(lesson_id)
        if lesson is None:
            raise UnknownLessonError(lesson_id)
        return lesson

    @staticmethod
    def _now(now: Optional[datetime]) -> datetime:
        return now or datetime.now()

    def new_record(self, learner_id: str) -> ProgressRecord:
        """Empty record for a learner with no completions yet."""
        return ProgressRecord(learner_id=learner_id)

    # -------------------------------------------------------------------------
    # Completion
    # -------------------------------------------------------------------------

    def mark_complete(
        self, record: ProgressRecord, lesson_id: str, now: Optional[datetime] = None
    ) -> ProgressRecord:
        """
        Mark a lesson completed.

        Raises:
            UnknownLessonError: lesson_id is not in the catalog
        """
        self._require_lesson(lesson_id)
        if lesson_id in record.completed_lesson_ids:
            return record

        logger.debug(f"{record.learner_id}: completed {lesson_id}")
        return record.model_copy(update={
            "completed_lesson_ids": record.completed_lesson_ids | {lesson_id},
            "last_activity_at": self._now(now),
        })

    def mark_incomplete(
        self, record: ProgressRecord, lesson_id: str, now: Optional[datetime] = None
    ) -> ProgressRecord:
        """Mark a lesson incomplete. Unknown or already incomplete ids are a no-op."""
        if lesson_id not in record.completed_lesson_ids:
            return record

        logger.debug(f"{record.learner_id}: reopened {lesson_id}")
        return record.model_copy(update={
            "completed_lesson_ids": record.completed_lesson_ids - {lesson_id},
            "last_activity_at": self._now(now),
        })

    def is_completed(self, record: ProgressRecord, lesson_id: str) -> bool:
        return lesson_id in record.completed_lesson_ids

    def reset(self, record: ProgressRecord) -> ProgressRecord:
        """Start over: an empty record for the same learner."""
        return self.new_record(record.learner_id)

    # -------------------------------------------------------------------------
    # Current lesson and study time
    # -------------------------------------------------------------------------

    def start_lesson(
        self, record: ProgressRecord, lesson_id: str, now: Optional[datetime] = None
    ) -> ProgressRecord:
        """
        Make lesson_id the learner's current lesson.

        Raises:
            UnknownLessonError: lesson_id is not in the catalog
        """
        self._require_lesson(lesson_id)
        return record.model_copy(update={
            "current_lesson_id": lesson_id,
            "last_activity_at": self._now(now),
        })

    def add_study_time(
        self, record: ProgressRecord, minutes: int, now: Optional[datetime] = None
    ) -> ProgressRecord:
        """Add study time to the running total."""
        if minutes < 0:
            raise ValueError(f"Study time must not be negative: {minutes}")
        return record.model_copy(update={
            "total_time_minutes": record.total_time_minutes + minutes,
            "last_activity_at": self._now(now),
        })

    def lesson_status(self, record: ProgressRecord, lesson_id: str) -> LessonStatus:
        if lesson_id in record.completed_lesson_ids:
            return LessonStatus.COMPLETED
        if lesson_id == record.current_lesson_id:
            return LessonStatus.IN_PROGRESS
        return LessonStatus.NOT_STARTED

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------

    def completed_in_catalog(self, record: ProgressRecord) -> frozenset[str]:
        return record.completed_lesson_ids & self.catalog.ids

    def stale_lesson_ids(self, record: ProgressRecord) -> frozenset[str]:
        """Completed ids that no longer exist in the catalog."""
        return record.completed_lesson_ids - self.catalog.ids

    def completion_percentage(self, record: ProgressRecord) -> float:
        """Fraction of catalog lessons completed, in [0, 1]. 0 for an empty catalog."""
        total = len(self.catalog)
        if total == 0:
            return 0.0
        return len(self.completed_in_catalog(record)) / total

    def remaining_lessons(self, record: ProgressRecord) -> Iterator[Lesson]:
        for lesson in self.catalog.lessons:
            if lesson.id not in record.completed_lesson_ids:
                yield lesson

    def next_lesson(self, record: ProgressRecord) -> Optional[Lesson]:
        """First incomplete lesson in catalog order, or None when all are done."""
        return next(self.remaining_lessons(record), None)

    def completion_stats(self, record: ProgressRecord) -> dict:
        """
        Get completion statistics.

        Returns:
            Dictionary with lesson counts, percent complete (0-100) and
            minute totals
        """
        total = len(self.catalog)
        completed = len(self.completed_in_catalog(record))
        return {
            "total_lessons": total,
            "completed": completed,
            "remaining": total - completed,
            "completion_percent": round(self.completion_percentage(record) * 100, 1),
            "estimated_minutes_remaining": sum(
                lesson.estimated_minutes or 0 for lesson in self.remaining_lessons(record)
            ),
            "total_study_minutes": record.total_time_minutes,
        }
