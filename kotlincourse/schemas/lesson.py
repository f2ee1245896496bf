"""
Lesson catalog schemas for the Kotlin course.

Defines Pydantic models for course content metadata:
- Lesson variants (standard lesson vs. expanded rewrite)
- Lessons with identity derived from part and lesson number
- Catalog: the immutable, ordered collection of lessons
"""

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, computed_field, field_validator, model_validator
from typing import Optional
from enum import Enum
import re


EXPANDED_SUFFIX = "-expanded"


class LessonVariant(str, Enum):
    STANDARD = "standard"
    EXPANDED = "expanded"


def parse_lesson_number(lesson_number: str) -> tuple[int, int]:
    """
    Parse a dotted lesson number into a (major, minor) integer pair.

    "1.4" -> (1, 4), "4.10" -> (4, 10). Raises ValueError otherwise.
    """
    parts = lesson_number.split(".")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid lesson number: {lesson_number!r}")
    return int(parts[0]), int(parts[1])


def make_lesson_id(lesson_number: str, variant: LessonVariant) -> str:
    """Stable lesson id: "1.4" for standard, "1.4-expanded" for expanded."""
    if variant == LessonVariant.EXPANDED:
        return f"{lesson_number}{EXPANDED_SUFFIX}"
    return lesson_number


# -----------------------------------------------------------------------------
# Lesson
# -----------------------------------------------------------------------------

class Lesson(BaseModel):
    """
    One instructional unit, built once at catalog load and never mutated.

    The id is derived (see make_lesson_id) so that a standard lesson and
    its expanded rewrite share a lesson number but stay addressable.
    """
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    part_number: int = Field(..., ge=1)
    lesson_number: str = Field(..., pattern=r'^[0-9]+\.[0-9]+$')
    variant: LessonVariant = LessonVariant.STANDARD
    estimated_minutes: Optional[int] = Field(default=None, ge=0)
    source_label: Optional[str] = None  # path label the lesson was loaded from

    @model_validator(mode="after")
    def number_matches_part(self):
        major, minor = parse_lesson_number(self.lesson_number)
        if major != self.part_number:
            raise ValueError(
                f"Lesson number {self.lesson_number} does not belong to part {self.part_number}"
            )
        if minor < 1:
            raise ValueError(f"Lesson number {self.lesson_number} must have a positive minor part")
        return self

    @computed_field
    @property
    def id(self) -> str:
        return make_lesson_id(self.lesson_number, self.variant)

    @property
    def number_pair(self) -> tuple[int, int]:
        return parse_lesson_number(self.lesson_number)

    @property
    def sort_key(self) -> tuple[int, int, int, int]:
        """Catalog order: part, numeric lesson number, expanded before standard."""
        major, minor = self.number_pair
        variant_rank = 0 if self.variant == LessonVariant.EXPANDED else 1
        return (self.part_number, major, minor, variant_rank)

    @property
    def display_name(self) -> str:
        prefix = f"Lesson {self.lesson_number}"
        if re.match(rf"{re.escape(prefix)}(?![0-9])", self.title):
            return self.title
        return f"{prefix}: {self.title}"


# -----------------------------------------------------------------------------
# Catalog
# -----------------------------------------------------------------------------

class Catalog(BaseModel):
    """
    Ordered, immutable collection of lessons.

    Lessons are always kept sorted by Lesson.sort_key, whatever order they
    were supplied in. Labels that did not follow the naming convention are
    kept in skipped_sources for reporting.
    """
    model_config = ConfigDict(frozen=True)

    lessons: tuple[Lesson, ...] = ()
    skipped_sources: tuple[str, ...] = ()

    _by_id: dict[str, Lesson] = PrivateAttr(default_factory=dict)

    @field_validator('lessons')
    @classmethod
    def sorted_and_unique(cls, v):
        seen = set()
        for lesson in v:
            if lesson.id in seen:
                raise ValueError(f"Duplicate lesson id in catalog: {lesson.id}")
            seen.add(lesson.id)
        return tuple(sorted(v, key=lambda lesson: lesson.sort_key))

    def model_post_init(self, __context):
        self._by_id = {lesson.id: lesson for lesson in self.lessons}

    def __len__(self) -> int:
        return len(self.lessons)

    def __contains__(self, lesson_id: object) -> bool:
        return lesson_id in self._by_id

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._by_id)

    def get(self, lesson_id: str) -> Optional[Lesson]:
        return self._by_id.get(lesson_id)

    @property
    def part_numbers(self) -> list[int]:
        return sorted({lesson.part_number for lesson in self.lessons})

    def lessons_in_part(self, part_number: int) -> list[Lesson]:
        return [lesson for lesson in self.lessons if lesson.part_number == part_number]

    @property
    def total_estimated_minutes(self) -> int:
        return sum(lesson.estimated_minutes or 0 for lesson in self.lessons)
