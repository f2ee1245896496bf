"""
Kotlin course classroom - Runtime components for loading and tracking lessons.

This module provides:
- LessonRepository: Build the lesson catalog from Markdown documents
- ProgressTracker: Learner completion against a catalog
- Navigator: Lesson sequencing and course overview
- ProgressStore: SQLite persistence for progress records
"""

from .loader import (
    LessonRepository,
    LessonSource,
    MalformedCatalogError,
    read_lesson_sources,
)

from .progress import (
    ProgressTracker,
    UnknownLessonError,
)

from .navigator import (
    Navigator,
    NavigationLesson,
    NavigationPart,
    STATUS_INDICATORS,
)

from .store import (
    ProgressStore,
    DEFAULT_PROGRESS_DIR,
    DEFAULT_PROGRESS_DB,
)

__all__ = [
    # Loader
    "LessonRepository",
    "LessonSource",
    "MalformedCatalogError",
    "read_lesson_sources",
    # Progress
    "ProgressTracker",
    "UnknownLessonError",
    # Navigator
    "Navigator",
    "NavigationLesson",
    "NavigationPart",
    "STATUS_INDICATORS",
    # Store
    "ProgressStore",
    "DEFAULT_PROGRESS_DIR",
    "DEFAULT_PROGRESS_DB",
]
