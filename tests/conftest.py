"""Shared fixtures: a small course laid out the way the lessons repository is."""

import pytest

from kotlincourse.classroom import LessonRepository, LessonSource, ProgressTracker


COURSE_DOCUMENTS = {
    "part1/lesson-1.1-expanded.md": (
        "# Lesson 1.1: Introduction to Kotlin\n"
        "\n"
        "**Estimated Time**: 60 minutes\n"
        "\n"
        "```bash\n"
        "# install the SDK first\n"
        "```\n"
    ),
    "part1/lesson-1.1.md": (
        "# Lesson 1.1: Introduction\n"
        "\n"
        "Short version of the first lesson.\n"
    ),
    "part1/lesson-1.2.md": (
        "# Lesson 1.2: Your First Playground\n"
        "\n"
        "Estimated Time: 45 minutes\n"
    ),
    "part1/lesson-1.10.md": (
        "# Lesson 1.10: Part 1 Capstone\n"
        "\n"
        "**Estimated Time:** 1.5 hours\n"
    ),
    "part2/lesson-2.1-expanded.md": (
        "# Lesson 2.1: Making Decisions\n"
        "\n"
        "**Estimated Time**: about an hour\n"
    ),
}

ORDERED_IDS = ["1.1-expanded", "1.1", "1.2", "1.10", "2.1-expanded"]


@pytest.fixture
def sources():
    return [LessonSource(label, text) for label, text in COURSE_DOCUMENTS.items()]


@pytest.fixture
def repository():
    return LessonRepository()


@pytest.fixture
def catalog(repository, sources):
    return repository.load(sources)


@pytest.fixture
def tracker(catalog):
    return ProgressTracker(catalog)


@pytest.fixture
def lessons_dir(tmp_path):
    """Write COURSE_DOCUMENTS to disk below tmp_path/lessons."""
    root = tmp_path / "lessons"
    for label, text in COURSE_DOCUMENTS.items():
        path = root / label
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root
