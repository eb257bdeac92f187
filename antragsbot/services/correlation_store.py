"""
Correlation Store

Local SQLite tables correlating Discord identities with Record Service
identities:
- persons:        Discord user id -> person (id, display name)
- motion_threads: thread id -> canonical record id (exactly one per thread)

sqlite3 is blocking; calls run in a worker thread and share one connection
guarded by a lock.
"""

from datetime import datetime, timezone
from typing import Optional
import asyncio
import logging
import sqlite3
import threading

from antragsbot.errors import CorrelationStoreError
from antragsbot.models.motion import Person

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS persons (
    user_id   TEXT PRIMARY KEY,
    person_id TEXT NOT NULL,
    name      TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_persons_name ON persons (name);
CREATE TABLE IF NOT EXISTS motion_threads (
    thread_id  TEXT PRIMARY KEY,
    record_id  TEXT NOT NULL,
    created_at TEXT NOT NULL
);
"""


class CorrelationStore:
    """Thread and user correlation backed by SQLite."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.executescript(SCHEMA)
        self._conn.commit()
        logger.info(f"Correlation store opened at {db_path}")

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    # Persons

    def _get_person_by_user_id_sync(self, user_id: str) -> Optional[Person]:
        with self._lock:
            row = self._conn.execute(
                "SELECT person_id, name FROM persons WHERE user_id = ?", (user_id,)
            ).fetchone()
        return Person(id=row[0], name=row[1]) if row else None

    def _get_person_by_name_sync(self, name: str) -> Optional[Person]:
        with self._lock:
            row = self._conn.execute(
                "SELECT person_id, name FROM persons WHERE name = ? LIMIT 1", (name,)
            ).fetchone()
        return Person(id=row[0], name=row[1]) if row else None

    def _link_person_sync(self, user_id: str, person: Person) -> None:
        with self._lock:
            self._conn.execute(
                "INSERT INTO persons (user_id, person_id, name) VALUES (?, ?, ?) "
                "ON CONFLICT(user_id) DO UPDATE SET person_id = excluded.person_id, name = excluded.name",
                (user_id, person.id, person.name),
            )
            self._conn.commit()

    async def get_person_by_user_id(self, user_id: str) -> Optional[Person]:
        return await asyncio.to_thread(self._get_person_by_user_id_sync, user_id)

    async def get_person_by_name(self, name: str) -> Optional[Person]:
        return await asyncio.to_thread(self._get_person_by_name_sync, name)

    async def link_person(self, user_id: str, person: Person) -> None:
        """Register a Discord user as the given person, replacing any earlier link."""
        await asyncio.to_thread(self._link_person_sync, user_id, person)
        logger.info(f"Linked user {user_id} to person {person.id} ({person.name})")

    # Motion threads

    def _map_thread_to_record_sync(self, thread_id: str, record_id: str) -> None:
        try:
            with self._lock:
                self._conn.execute(
                    "INSERT INTO motion_threads (thread_id, record_id, created_at) VALUES (?, ?, ?)",
                    (thread_id, record_id, datetime.now(timezone.utc).isoformat()),
                )
                self._conn.commit()
        except sqlite3.IntegrityError as e:
            raise CorrelationStoreError(
                f"Thread {thread_id} ist bereits einem Antrag zugeordnet."
            ) from e

    def _get_record_for_thread_sync(self, thread_id: str) -> Optional[str]:
        with self._lock:
            row = self._conn.execute(
                "SELECT record_id FROM motion_threads WHERE thread_id = ?", (thread_id,)
            ).fetchone()
        return row[0] if row else None

    async def map_thread_to_record(self, thread_id: str, record_id: str) -> None:
        """
        Persist the mapping of a motion thread to its canonical record.

        Raises:
            CorrelationStoreError: If the thread is already mapped
        """
        await asyncio.to_thread(self._map_thread_to_record_sync, thread_id, record_id)
        logger.info(f"Mapped thread {thread_id} to record {record_id}")

    async def get_record_for_thread(self, thread_id: str) -> Optional[str]:
        return await asyncio.to_thread(self._get_record_for_thread_sync, thread_id)
