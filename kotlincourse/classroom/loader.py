"""
LessonRepository - Build the lesson catalog from Markdown documents.

Provides:
- Loading (path label, text) pairs into an immutable Catalog
- Lookup by part, lesson number and variant
- Ordered and display-preferred iteration over the catalog
- A file-system reader that produces the (path label, text) pairs
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, NamedTuple, Optional

from kotlincourse.schemas import Catalog, Lesson, LessonVariant
from kotlincourse.utils import extract_estimated_minutes, extract_title, parse_path_label

logger = logging.getLogger(__name__)


class MalformedCatalogError(ValueError):
    """Raised when two documents claim the same lesson with different titles."""

    def __init__(self, key: tuple[int, str, LessonVariant], first_title: str, second_title: str):
        self.key = key
        self.first_title = first_title
        self.second_title = second_title
        part_number, lesson_number, variant = key
        super().__init__(
            f"Conflicting titles for part {part_number} lesson {lesson_number} ({variant.value}): "
            f"{first_title!r} vs {second_title!r}"
        )


class LessonSource(NamedTuple):
    """One raw lesson document tagged with its path label."""
    label: str
    text: str


def read_lesson_sources(root: Path) -> Iterator[LessonSource]:
    """
    Yield lesson documents found under root, ordered by label.

    Labels are relative to root and always use "/" separators, so
    lessons/part1/lesson-1.1.md read with root=lessons has the label
    "part1/lesson-1.1.md". Files are read lazily; a file that is not valid
    UTF-8 is skipped with a warning.
    """
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Lessons directory not found: {root}")

    for path in sorted(root.glob("part*/lesson-*.md")):
        label = path.relative_to(root).as_posix()
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning(f"Skipping {label}: not valid UTF-8 ({e})")
            continue
        yield LessonSource(label=label, text=text)


class LessonRepository:
    """
    Load lesson metadata into a Catalog and answer queries against it.

    The repository keeps no catalog state of its own: every query takes the
    Catalog explicitly, and reloading means calling load() again.
    """

    def __init__(self, lessons_dir: Optional[str | Path] = None):
        """
        Initialize repository.

        Args:
            lessons_dir: Default directory for load_directory()
        """
        self.lessons_dir = Path(lessons_dir) if lessons_dir else None

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self, sources: Iterable[LessonSource | tuple[str, str]]) -> Catalog:
        """
        Build a catalog from (path label, text) pairs.

        Documents whose label does not follow part<P>/lesson-<P>.<L>[-expanded].md
        are skipped and listed in Catalog.skipped_sources. A repeated
        (part, lesson number, variant) with the same title is merged, keeping
        the later document.

        Raises:
            MalformedCatalogError: same identity with conflicting titles
        """
        lessons: dict[tuple[int, str, LessonVariant], Lesson] = {}
        skipped: list[str] = []

        for label, text in sources:
            parsed = parse_path_label(label)
            if parsed is None:
                logger.warning(f"Skipping document with unrecognized path label: {label}")
                skipped.append(label)
                continue

            lesson = Lesson(
                title=extract_title(text) or f"Lesson {parsed.lesson_number}",
                part_number=parsed.part_number,
                lesson_number=parsed.lesson_number,
                variant=parsed.variant,
                estimated_minutes=extract_estimated_minutes(text),
                source_label=label,
            )

            key = (parsed.part_number, parsed.lesson_number, parsed.variant)
            previous = lessons.get(key)
            if previous is not None:
                if previous.title != lesson.title:
                    raise MalformedCatalogError(key, previous.title, lesson.title)
                logger.info(f"Duplicate document for lesson {lesson.id}: {previous.source_label} replaced by {label}")
            lessons[key] = lesson

        catalog = Catalog(lessons=tuple(lessons.values()), skipped_sources=tuple(skipped))
        logger.info(f"Loaded catalog: {len(catalog)} lessons in {len(catalog.part_numbers)} parts, {len(skipped)} skipped")
        return catalog

    def load_directory(self, root: Optional[str | Path] = None) -> Catalog:
        """Load every lesson document below root (default: lessons_dir)."""
        directory = Path(root) if root else self.lessons_dir
        if directory is None:
            raise ValueError("No lessons directory configured")
        return self.load(read_lesson_sources(directory))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def find(
        self,
        catalog: Catalog,
        part_number: int,
        lesson_number: str,
        variant: Optional[LessonVariant] = None,
    ) -> Optional[Lesson]:
        """
        Look up one lesson.

        Without a variant the expanded rewrite is preferred, falling back to
        the standard lesson.
        """
        variants = [variant] if variant else [LessonVariant.EXPANDED, LessonVariant.STANDARD]
        for candidate in variants:
            for lesson in catalog.lessons:
                if (
                    lesson.part_number == part_number
                    and lesson.lesson_number == lesson_number
                    and lesson.variant == candidate
                ):
                    return lesson
        return None

    def ordered(self, catalog: Catalog) -> Iterator[Lesson]:
        """Iterate lessons in catalog order. Each call starts from the beginning."""
        yield from catalog.lessons

    def preferred(self, catalog: Catalog) -> Iterator[Lesson]:
        """Iterate one lesson per lesson number, the expanded variant when present."""
        seen: set[tuple[int, str]] = set()
        for lesson in catalog.lessons:
            key = (lesson.part_number, lesson.lesson_number)
            if key in seen:
                continue
            # Expanded sorts first, so the first hit per number is the preferred one.
            seen.add(key)
            yield lesson

    def lessons_in_part(self, catalog: Catalog, part_number: int) -> list[Lesson]:
        return catalog.lessons_in_part(part_number)

    def part_numbers(self, catalog: Catalog) -> list[int]:
        return catalog.part_numbers
