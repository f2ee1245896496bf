#!/usr/bin/env python3
"""
kotlincourse - Browse the lesson catalog and record learner progress.

Usage:
  kotlincourse catalog
  kotlincourse catalog --preferred
  kotlincourse --learner alice complete 1.1-expanded
  kotlincourse --lessons-dir course/lessons progress
  kotlincourse next
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import yaml

from kotlincourse.classroom import (
    LessonRepository,
    MalformedCatalogError,
    Navigator,
    ProgressStore,
    ProgressTracker,
    UnknownLessonError,
)
from kotlincourse.config import Settings, load_settings
from kotlincourse.schemas import ProgressRecord

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kotlincourse",
        description="Browse the Kotlin course catalog and track learner progress",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument("--lessons-dir", type=Path, help="Directory containing part*/lesson-*.md")
    parser.add_argument("--db", type=Path, help="Progress database path")
    parser.add_argument("--learner", help="Learner id")

    commands = parser.add_subparsers(dest="command", required=True)

    catalog = commands.add_parser("catalog", help="List lessons in course order")
    catalog.add_argument(
        "--preferred",
        action="store_true",
        help="Show one variant per lesson number (expanded when available)",
    )

    commands.add_parser("progress", help="Show completion summary")
    commands.add_parser("next", help="Show the next lesson to take")

    for name, help_text in (
        ("complete", "Mark a lesson completed"),
        ("incomplete", "Mark a lesson not completed"),
        ("start", "Make a lesson the current lesson"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("lesson_id", help="Lesson id, e.g. 1.4 or 1.4-expanded")

    study = commands.add_parser("study", help="Add study time")
    study.add_argument("minutes", type=int, help="Minutes studied")

    return parser


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

def show_catalog(repository: LessonRepository, navigator: Navigator, record: ProgressRecord, preferred: bool):
    catalog = navigator.catalog
    lessons = repository.preferred(catalog) if preferred else repository.ordered(catalog)
    current_part = None
    for lesson in lessons:
        if lesson.part_number != current_part:
            current_part = lesson.part_number
            print(f"Part {current_part}")
        minutes = f"{lesson.estimated_minutes} min" if lesson.estimated_minutes is not None else "-"
        indicator = navigator.status_indicator(record, lesson.id)
        print(f"  {indicator} {lesson.id:<16} {lesson.display_name} ({minutes})")
    if not catalog.lessons:
        print("No lessons found.")


def show_progress(navigator: Navigator, record: ProgressRecord):
    summary = navigator.progress_summary(record)
    print(f"Learner: {record.learner_id}")
    print(f"Completed: {summary['completed']}/{summary['total_lessons']} ({summary['completion_percent']}%)")
    for part in summary["parts"]:
        print(f"  Part {part['part_number']}: {part['completed']}/{part['total']}")
    print(f"Estimated minutes remaining: {summary['estimated_minutes_remaining']}")
    print(f"Total study minutes: {summary['total_study_minutes']}")
    if summary["recommended_lesson_id"]:
        print(f"Recommended: {summary['recommended_lesson_id']}")
    if summary["stale_lesson_ids"]:
        print(f"No longer in catalog: {', '.join(summary['stale_lesson_ids'])}")


def show_next(tracker: ProgressTracker, record: ProgressRecord):
    lesson = tracker.next_lesson(record)
    if lesson is None:
        print("All lessons completed.")
    else:
        print(f"{lesson.id}: {lesson.display_name}")


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {
        "lessons_dir": args.lessons_dir,
        "progress_db": args.db,
        "learner_id": args.learner,
    }
    try:
        settings = load_settings(args.config)
        settings = Settings(**{
            **settings.model_dump(),
            **{k: v for k, v in overrides.items() if v is not None},
        })
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT)
        logger.error(f"Invalid configuration: {e}")
        return 1

    logging.basicConfig(level=getattr(logging, settings.log_level), format=LOG_FORMAT)

    repository = LessonRepository(settings.lessons_dir)
    try:
        catalog = repository.load_directory()
    except (FileNotFoundError, MalformedCatalogError) as e:
        logger.error(f"Failed to load lessons: {e}")
        return 1

    tracker = ProgressTracker(catalog)
    navigator = Navigator(tracker)
    store = ProgressStore(settings.progress_db)
    record = store.load(settings.learner_id) or tracker.new_record(settings.learner_id)

    if args.command == "catalog":
        show_catalog(repository, navigator, record, args.preferred)
        return 0
    if args.command == "progress":
        show_progress(navigator, record)
        return 0
    if args.command == "next":
        show_next(tracker, record)
        return 0

    try:
        if args.command == "complete":
            updated = tracker.mark_complete(record, args.lesson_id)
            message = f"Completed {args.lesson_id}"
        elif args.command == "incomplete":
            updated = tracker.mark_incomplete(record, args.lesson_id)
            message = f"Marked {args.lesson_id} incomplete"
        elif args.command == "start":
            updated = tracker.start_lesson(record, args.lesson_id)
            message = f"Started {args.lesson_id}"
        else:
            updated = tracker.add_study_time(record, args.minutes)
            message = f"Added {args.minutes} study minutes"
    except (UnknownLessonError, ValueError) as e:
        logger.error(str(e))
        return 1

    if updated is not record:
        store.save(updated)
    print(message)
    print(f"Progress: {round(tracker.completion_percentage(updated) * 100, 1)}%")
    return 0


if __name__ == "__main__":
    sys.exit(main())
