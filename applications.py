import logging
import sqlite3
from datetime import datetime, timezone
from typing import Optional

import config as config
from errors import CreateError
from models import ApplicationPayload
from sources.base import BulkCreateSink

logger = logging.getLogger(__name__)

_COLUMNS = ("title", "company", "salary", "link", "location", "snippet", "type", "updated")


def init_db(db_path: str) -> None:
    """Initialize the SQLite database with schema."""
    conn = sqlite3.connect(db_path)
    conn.execute("""
        CREATE TABLE IF NOT EXISTS job_applications (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT,
            company TEXT,
            salary TEXT,
            link TEXT,
            location TEXT,
            snippet TEXT,
            type TEXT,
            updated TEXT,
            status TEXT DEFAULT 'new',
            created_at TEXT
        )
    """)
    conn.commit()
    conn.close()


def _text(value) -> Optional[str]:
    return None if value is None else str(value)


class ApplicationStore(BulkCreateSink):
    """Creates job application records from selected search results."""

    name = "applications"

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or config.DB_PATH
        init_db(self.db_path)

    def insert(self, payloads: list[ApplicationPayload]) -> list[int]:
        if not payloads:
            return []
        created_at = datetime.now(timezone.utc).isoformat()
        conn = sqlite3.connect(self.db_path)
        try:
            ids = []
            with conn:
                for payload in payloads:
                    values = payload.to_dict()
                    cursor = conn.execute(
                        "INSERT INTO job_applications "
                        "(title, company, salary, link, location, snippet, type, updated, created_at) "
                        "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                        tuple(_text(values[c]) for c in _COLUMNS) + (created_at,),
                    )
                    ids.append(cursor.lastrowid)
            return ids
        except sqlite3.Error as e:
            raise CreateError(f"Could not save job applications: {e}") from e
        finally:
            conn.close()

    def list_applications(self) -> list[dict]:
        """Return all stored applications, oldest first."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            rows = conn.execute("SELECT * FROM job_applications ORDER BY id").fetchall()
            return [dict(row) for row in rows]
        finally:
            conn.close()
