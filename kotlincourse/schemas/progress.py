"""
Progress tracking schemas for the Kotlin course.

Defines Pydantic models for learner progress including:
- Lesson status (derived view for navigation)
- Per-learner progress record
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class LessonStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class ProgressRecord(BaseModel):
    """
    Completion state for one learner.

    Records are immutable; ProgressTracker returns updated copies. Ids of
    lessons that have since left the catalog are kept for history.
    """
    model_config = ConfigDict(frozen=True)

    learner_id: str = Field(..., min_length=1)
    completed_lesson_ids: frozenset[str] = frozenset()
    current_lesson_id: Optional[str] = None
    total_time_minutes: int = Field(default=0, ge=0)
    last_activity_at: Optional[datetime] = None
