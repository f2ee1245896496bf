"""
Navigator - Lesson sequencing and course overview.

Provides:
- Next/previous lesson navigation in catalog order
- Per-part course tree with status indicators
- Recommended lesson and progress summary
"""

from dataclasses import dataclass
from typing import Optional

from kotlincourse.schemas import Lesson, LessonStatus, ProgressRecord

from .progress import ProgressTracker


STATUS_INDICATORS = {
    LessonStatus.COMPLETED: "✓",
    LessonStatus.IN_PROGRESS: "→",
    LessonStatus.NOT_STARTED: "○",
}


@dataclass
class NavigationLesson:
    """Lesson with navigation metadata."""
    lesson: Lesson
    status: LessonStatus
    is_current: bool


@dataclass
class NavigationPart:
    """Course part with lessons and completion counts."""
    part_number: int
    lessons: list[NavigationLesson]
    completed_count: int
    total_count: int


class Navigator:
    """
    Navigate through the course catalog.

    Combines the catalog held by a ProgressTracker with a learner's
    ProgressRecord to annotate lessons with their status.
    """

    def __init__(self, tracker: ProgressTracker):
        self.tracker = tracker
        self._lesson_order = [lesson.id for lesson in tracker.catalog.lessons]
        self._lesson_index = {lid: idx for idx, lid in enumerate(self._lesson_order)}

    @property
    def catalog(self):
        return self.tracker.catalog

    @property
    def total_lessons(self) -> int:
        return len(self._lesson_order)

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def first_lesson_id(self) -> Optional[str]:
        return self._lesson_order[0] if self._lesson_order else None

    def next_lesson_id(self, current_id: str) -> Optional[str]:
        """ID of the lesson after current_id, crossing part boundaries."""
        if current_id not in self._lesson_index:
            return None
        idx = self._lesson_index[current_id] + 1
        if idx >= len(self._lesson_order):
            return None
        return self._lesson_order[idx]

    def previous_lesson_id(self, current_id: str) -> Optional[str]:
        if current_id not in self._lesson_index:
            return None
        idx = self._lesson_index[current_id]
        if idx <= 0:
            return None
        return self._lesson_order[idx - 1]

    def lesson_position(self, lesson_id: str) -> tuple[int, int]:
        """
        Get lesson position as (current, total).

        Returns (0, total) if lesson not found.
        """
        if lesson_id not in self._lesson_index:
            return (0, len(self._lesson_order))
        return (self._lesson_index[lesson_id] + 1, len(self._lesson_order))

    def recommended_lesson(self, record: ProgressRecord) -> Optional[Lesson]:
        """
        Get the lesson the learner should open next.

        Priority:
        1. Current lesson if not yet completed
        2. First incomplete lesson in catalog order
        """
        current_id = record.current_lesson_id
        if current_id and current_id in self.catalog and current_id not in record.completed_lesson_ids:
            return self.catalog.get(current_id)
        return self.tracker.next_lesson(record)

    # -------------------------------------------------------------------------
    # Course tree
    # -------------------------------------------------------------------------

    def navigation_tree(self, record: ProgressRecord) -> list[NavigationPart]:
        tree = []
        for part_number in self.catalog.part_numbers:
            nav_lessons = []
            completed_count = 0
            for lesson in self.catalog.lessons_in_part(part_number):
                status = self.tracker.lesson_status(record, lesson.id)
                if status == LessonStatus.COMPLETED:
                    completed_count += 1
                nav_lessons.append(NavigationLesson(
                    lesson=lesson,
                    status=status,
                    is_current=lesson.id == record.current_lesson_id,
                ))
            tree.append(NavigationPart(
                part_number=part_number,
                lessons=nav_lessons,
                completed_count=completed_count,
                total_count=len(nav_lessons),
            ))
        return tree

    def status_indicator(self, record: ProgressRecord, lesson_id: str) -> str:
        """
        Get status indicator for sidebar display.

        Returns:
            ✓ for completed
            → for current
            ○ for everything else
        """
        return STATUS_INDICATORS[self.tracker.lesson_status(record, lesson_id)]

    def progress_summary(self, record: ProgressRecord) -> dict:
        """Get progress summary for display."""
        stats = self.tracker.completion_stats(record)
        recommended = self.recommended_lesson(record)
        parts = [
            {
                "part_number": nav_part.part_number,
                "completed": nav_part.completed_count,
                "total": nav_part.total_count,
            }
            for nav_part in self.navigation_tree(record)
        ]
        return {
            **stats,
            "parts": parts,
            "current_lesson_id": record.current_lesson_id,
            "recommended_lesson_id": recommended.id if recommended else None,
            "stale_lesson_ids": sorted(self.tracker.stale_lesson_ids(record)),
        }
