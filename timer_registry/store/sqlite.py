"""SQLite-backed document store for timers.

Each timer is one JSON document keyed by its timerid. The primary key is the
store-level uniqueness guard, so two racing inserts of the same id cannot both
succeed.

Thread-safety: the connection is shared by the executor threads that run
gateway calls, so every statement runs under one lock.
"""
import json
import sqlite3
import threading
from pathlib import Path
from typing import Any, Generator, Mapping

from loguru import logger

from ..errors import DuplicateKeyViolation
from .base import Document, Filter, apply_set, matches

logger = logger.bind(module="store.sqlite")

_INIT_SQL = """
CREATE TABLE IF NOT EXISTS timers (
    timerid   TEXT PRIMARY KEY,
    document  TEXT NOT NULL
);
"""


class SqliteGateway:
    """Storage gateway over a single SQLite file."""

    def __init__(self, db_path: str | Path):
        """Open the database and create the schema.

        Args:
            db_path: SQLite file path, or ":memory:"
        """
        if str(db_path) == ":memory:":
            self.db_path = ":memory:"
        else:
            path = Path(db_path).expanduser()
            path.parent.mkdir(parents=True, exist_ok=True)
            self.db_path = str(path)

        self._lock = threading.Lock()
        self._db: sqlite3.Connection | None = sqlite3.connect(
            self.db_path, check_same_thread=False
        )
        self._db.row_factory = sqlite3.Row
        self._db.execute("PRAGMA journal_mode=WAL")
        self._db.execute("PRAGMA synchronous=NORMAL")
        self._db.executescript(_INIT_SQL)
        logger.info(f"SQLite store opened at {self.db_path}")

    def close(self) -> None:
        with self._lock:
            if self._db:
                self._db.close()
                self._db = None

    # ============== Queries ==============

    def _rows(self, filter: Filter) -> list[Document]:
        assert self._db is not None, "store is closed"
        if "timerid" in filter:
            cursor = self._db.execute(
                "SELECT document FROM timers WHERE timerid = ?", (filter["timerid"],)
            )
        else:
            cursor = self._db.execute("SELECT document FROM timers ORDER BY rowid")
        documents = [json.loads(row["document"]) for row in cursor.fetchall()]
        return [d for d in documents if matches(d, filter)]

    def find_one(self, filter: Filter) -> Document | None:
        with self._lock:
            rows = self._rows(filter)
        return rows[0] if rows else None

    def find(self, filter: Filter) -> Generator[Document, None, None]:
        with self._lock:
            rows = self._rows(filter)
        yield from rows

    def count_documents(self, filter: Filter) -> int:
        with self._lock:
            return len(self._rows(filter))

    # ============== Writes ==============

    def insert_one(self, document: Document) -> None:
        with self._lock:
            assert self._db is not None, "store is closed"
            try:
                self._db.execute(
                    "INSERT INTO timers (timerid, document) VALUES (?, ?)",
                    (document["timerid"], json.dumps(document)),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateKeyViolation(document["timerid"]) from e
            self._db.commit()

    def find_one_and_update(
        self, filter: Filter, update: Mapping[str, Any]
    ) -> Document | None:
        with self._lock:
            assert self._db is not None, "store is closed"
            rows = self._rows(filter)
            if not rows:
                return None
            current = rows[0]
            updated = apply_set(current, update)
            try:
                self._db.execute(
                    "UPDATE timers SET timerid = ?, document = ? WHERE timerid = ?",
                    (updated["timerid"], json.dumps(updated), current["timerid"]),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateKeyViolation(updated["timerid"]) from e
            self._db.commit()
            return updated
