"""
Best-effort metadata extraction for lesson Markdown documents.

Every helper returns None instead of raising when the input does not carry
the expected marker; callers decide whether a missing value matters.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional

from kotlincourse.schemas import LessonVariant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LessonLabel:
    """Identity fields recovered from a lesson path label."""
    part_number: int
    lesson_number: str
    variant: LessonVariant


# part<P>/lesson-<P>.<L>[-expanded].md, optionally below further directories
LABEL_PATTERN = re.compile(r'(?:^|/)part(\d+)/lesson-(\d+)\.(\d+)(-expanded)?\.md$')

HEADING_PATTERN = re.compile(r'^ {0,3}#[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$')
FENCE_PATTERN = re.compile(r'^ {0,3}(```|~~~)')

ESTIMATED_TIME_PATTERN = re.compile(r'estimated[\s*_]+time\W*(.*)', re.IGNORECASE)
DURATION_PATTERN = re.compile(
    r'(\d+(?:\.\d+)?)'                      # first (or only) value
    r'(?:\s*(?:-|–|to)\s*\d+(?:\.\d+)?)?'   # optional upper bound of a range
    r'\s*(hours?|hrs?|h|minutes?|mins?|m)?\b',
    re.IGNORECASE,
)
# "2 hours 30 minutes", "1h 15m", "1 hour and 20 min"
COMPOUND_DURATION_PATTERN = re.compile(
    r'(?<![\d.])(\d+)\s*(?:hours?|hrs?|h)(?![a-z])[\s,]*(?:and\s+)?(\d+)\s*(?:minutes?|mins?|m)\b',
    re.IGNORECASE,
)


def parse_path_label(label: str) -> Optional[LessonLabel]:
    """
    Parse a lesson path label into part number, lesson number and variant.

    Examples:
        part1/lesson-1.4.md          -> (1, "1.4", STANDARD)
        part1/lesson-1.4-expanded.md -> (1, "1.4", EXPANDED)
        part2/lesson-1.4.md          -> None (file belongs to another part)
        notes/readme.md              -> None
    """
    normalized = label.replace("\\", "/")
    match = LABEL_PATTERN.search(normalized)
    if not match:
        return None

    part_dir, part_file, minor = (int(g) for g in match.group(1, 2, 3))
    if part_dir < 1 or minor < 1 or part_dir != part_file:
        return None

    variant = LessonVariant.EXPANDED if match.group(4) else LessonVariant.STANDARD
    return LessonLabel(
        part_number=part_dir,
        lesson_number=f"{part_file}.{minor}",
        variant=variant,
    )


def _prose_lines(text: str) -> Iterator[str]:
    """Yield lines that are not inside fenced code blocks."""
    fence = None
    for line in text.splitlines():
        match = FENCE_PATTERN.match(line)
        if match:
            marker = match.group(1)
            if fence is None:
                fence = marker
            elif fence == marker:
                fence = None
            continue
        if fence is None:
            yield line


def extract_title(text: str) -> Optional[str]:
    """
    Return the text of the first level-1 ATX heading.

    Headings inside fenced code blocks (e.g. shell comments) are ignored.
    """
    for line in _prose_lines(text):
        match = HEADING_PATTERN.match(line)
        if match:
            title = match.group(1).strip()
            if title:
                return title
    return None


def parse_duration_minutes(value: str) -> Optional[int]:
    """
    Parse a free-form duration into whole minutes.

    Examples:
        "60 minutes"     -> 60
        "1.5 hours"      -> 90
        "45-60 minutes"  -> 45 (lower bound of a range)
        "2 hours 30 min" -> 150
        "about an hour"  -> None
    """
    compound = COMPOUND_DURATION_PATTERN.search(value)
    if compound:
        return int(compound.group(1)) * 60 + int(compound.group(2))

    match = DURATION_PATTERN.search(value)
    if not match:
        return None
    amount = float(match.group(1))
    unit = (match.group(2) or "").lower()
    if unit.startswith("h"):
        return int(round(amount * 60))
    if not amount.is_integer():
        return None
    return int(amount)


def extract_estimated_minutes(text: str) -> Optional[int]:
    """
    Return the estimated time in minutes from the first "Estimated Time" line.

    Accepts the usual Markdown decorations, e.g. "**Estimated Time**: 60 minutes".
    """
    for line in _prose_lines(text):
        match = ESTIMATED_TIME_PATTERN.search(line)
        if not match:
            continue
        minutes = parse_duration_minutes(match.group(1))
        if minutes is None:
            logger.debug(f"Ignoring unparseable estimated time: {line.strip()!r}")
        return minutes
    return None
