"""
ProgressStore - Persist learner progress in ~/.kotlin-course/progress.db.

Stores progress records separately from lesson content so that:
- Lessons can be rewritten or reordered without losing progress
- Progress is learner-specific, content is shared
"""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from kotlincourse.schemas import ProgressRecord

logger = logging.getLogger(__name__)


DEFAULT_PROGRESS_DIR = Path.home() / ".kotlin-course"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"


class ProgressStore:
    """
    Save and load ProgressRecords in SQLite.

    Each method opens its own connection. A save replaces the learner's
    stored record in a single transaction.
    """

    def __init__(self, db_path: Optional[str | Path] = None):
        """
        Initialize progress store.

        Args:
            db_path: Path to progress.db (default: ~/.kotlin-course/progress.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS completed_lessons (
                    learner_id TEXT NOT NULL,
                    lesson_id TEXT NOT NULL,
                    PRIMARY KEY (learner_id, lesson_id)
                );

                CREATE TABLE IF NOT EXISTS learner_state (
                    learner_id TEXT PRIMARY KEY,
                    current_lesson_id TEXT,
                    total_time_minutes INTEGER NOT NULL DEFAULT 0,
                    last_activity_at TEXT
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def save(self, record: ProgressRecord):
        """Replace the stored record for record.learner_id."""
        conn = self._get_connection()
        try:
            conn.execute(
                """INSERT INTO learner_state
                     (learner_id, current_lesson_id, total_time_minutes, last_activity_at)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(learner_id) DO UPDATE SET
                     current_lesson_id = excluded.current_lesson_id,
                     total_time_minutes = excluded.total_time_minutes,
                     last_activity_at = excluded.last_activity_at""",
                (
                    record.learner_id,
                    record.current_lesson_id,
                    record.total_time_minutes,
                    record.last_activity_at.isoformat() if record.last_activity_at else None,
                )
            )
            conn.execute(
                "DELETE FROM completed_lessons WHERE learner_id = ?",
                (record.learner_id,)
            )
            conn.executemany(
                "INSERT INTO completed_lessons (learner_id, lesson_id) VALUES (?, ?)",
                [(record.learner_id, lesson_id) for lesson_id in sorted(record.completed_lesson_ids)]
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug(f"Saved progress for {record.learner_id} to {self.db_path}")

    def load(self, learner_id: str) -> Optional[ProgressRecord]:
        """Load a learner's record, or None if nothing was ever saved."""
        conn = self._get_connection()
        try:
            state = conn.execute(
                """SELECT current_lesson_id, total_time_minutes, last_activity_at
                   FROM learner_state WHERE learner_id = ?""",
                (learner_id,)
            ).fetchone()
            completed = {
                row["lesson_id"]
                for row in conn.execute(
                    "SELECT lesson_id FROM completed_lessons WHERE learner_id = ?",
                    (learner_id,)
                ).fetchall()
            }
        finally:
            conn.close()

        if state is None and not completed:
            return None

        return ProgressRecord(
            learner_id=learner_id,
            completed_lesson_ids=frozenset(completed),
            current_lesson_id=state["current_lesson_id"] if state else None,
            total_time_minutes=state["total_time_minutes"] if state else 0,
            last_activity_at=(
                datetime.fromisoformat(state["last_activity_at"])
                if state and state["last_activity_at"] else None
            ),
        )

    def list_learners(self) -> list[str]:
        """All learner ids with stored progress, sorted."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT learner_id FROM learner_state
                   UNION
                   SELECT learner_id FROM completed_lessons
                   ORDER BY learner_id"""
            )
            return [row["learner_id"] for row in cursor.fetchall()]
        finally:
            conn.close()

    def delete(self, learner_id: str) -> bool:
        """Delete a learner's stored progress. Returns False if there was none."""
        conn = self._get_connection()
        try:
            removed = conn.execute(
                "DELETE FROM completed_lessons WHERE learner_id = ?", (learner_id,)
            ).rowcount
            removed += conn.execute(
                "DELETE FROM learner_state WHERE learner_id = ?", (learner_id,)
            ).rowcount
            conn.commit()
            return removed > 0
        finally:
            conn.close()
