"""Kotlin course utilities."""

from .lesson_parser import (
    LessonLabel,
    parse_path_label,
    extract_title,
    extract_estimated_minutes,
    parse_duration_minutes,
)

__all__ = [
    "LessonLabel",
    "parse_path_label",
    "extract_title",
    "extract_estimated_minutes",
    "parse_duration_minutes",
]
