"""
Kotlin course schemas - Pydantic models for lessons and learner progress.

This module exports all schema classes for:
- Lesson: lesson metadata, variants, the ordered catalog
- Progress: learner progress records
"""

# Lesson schemas
from .lesson import (
    EXPANDED_SUFFIX,
    LessonVariant,
    Lesson,
    Catalog,
    make_lesson_id,
    parse_lesson_number,
)

# Progress schemas
from .progress import (
    LessonStatus,
    ProgressRecord,
)

__all__ = [
    # Lesson
    'EXPANDED_SUFFIX',
    'LessonVariant',
    'Lesson',
    'Catalog',
    'make_lesson_id',
    'parse_lesson_number',
    # Progress
    'LessonStatus',
    'ProgressRecord',
]
