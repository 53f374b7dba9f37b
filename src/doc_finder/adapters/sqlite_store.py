"""SQLite-backed record store.

Records are kept as JSON bodies in a single ``records`` table keyed by
collection and record name. Blocking sqlite3 calls run in a worker thread
through anyio so the event loop is never blocked.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import json
import logging
from pathlib import Path
import sqlite3
import threading
from typing import Any, TypeVar

from anyio import to_thread

from doc_finder.adapters.record_store import AbstractRecordStore, Record, record_matches
from doc_finder.exceptions import StoreFailureError


logger = logging.getLogger(__name__)

T = TypeVar("T")

SQLITE_URL_PREFIX = "sqlite://"
MEMORY_DATABASE = ":memory:"

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS records (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        collection TEXT NOT NULL,
        name TEXT,
        body TEXT NOT NULL
    )
    """,
    "CREATE UNIQUE INDEX IF NOT EXISTS records_collection_name ON records (collection, name)",
)


def database_path_from_url(url: str) -> str:
    """Translate ``sqlite:///path`` into a path sqlite3 accepts.

    ``sqlite://`` and ``sqlite:///:memory:`` both select an in-memory database.
    """
    if not url.startswith(SQLITE_URL_PREFIX):
        raise ValueError(f"Not a sqlite URL: {url}")
    remainder = url[len(SQLITE_URL_PREFIX) :]
    if remainder in ("", "/", MEMORY_DATABASE, "/" + MEMORY_DATABASE):
        return MEMORY_DATABASE
    return remainder.removeprefix("/")


def apply_pragmas(conn: sqlite3.Connection, *, busy_timeout_ms: int = 30000) -> None:
    """Apply the PRAGMAs used for every store connection."""
    conn.execute(f"PRAGMA busy_timeout = {busy_timeout_ms}")
    conn.execute("PRAGMA journal_mode = WAL")
    conn.execute("PRAGMA synchronous = NORMAL")


class SqliteRecordStore(AbstractRecordStore):
    """Record store persisted in a SQLite database file."""

    def __init__(self) -> None:
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()
        self.db_path: str | None = None

    async def connect(self, url: str) -> None:
        db_path = database_path_from_url(url)
        if db_path != MEMORY_DATABASE:
            try:
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise StoreFailureError(f"cannot create directory for sqlite store {db_path}: {exc}") from exc

        def _open() -> sqlite3.Connection:
            conn = sqlite3.connect(db_path, check_same_thread=False)
            try:
                apply_pragmas(conn)
                for statement in _SCHEMA:
                    conn.execute(statement)
                conn.commit()
            except sqlite3.Error:
                conn.close()
                raise
            return conn

        try:
            self._conn = await to_thread.run_sync(_open)
        except sqlite3.Error as exc:
            logger.error("Failed to open SQLite record store at %s: %s", db_path, exc)
            raise StoreFailureError(f"cannot open sqlite store {db_path}: {exc}") from exc
        self.db_path = db_path
        logger.info("Connected to SQLite record store at %s", db_path)

    async def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            await to_thread.run_sync(conn.close)
        except sqlite3.Error as exc:
            logger.warning("Error closing SQLite record store %s: %s", self.db_path, exc)

    async def _run(self, operation: str, func: Callable[[sqlite3.Connection], T]) -> T:
        conn = self._conn
        if conn is None:
            raise StoreFailureError("record store is not connected")

        def _locked() -> T:
            with self._lock:
                try:
                    result = func(conn)
                    conn.commit()
                except sqlite3.Error:
                    conn.rollback()
                    raise
                return result

        try:
            return await to_thread.run_sync(_locked)
        except sqlite3.Error as exc:
            logger.error("SQLite %s failed: %s", operation, exc)
            raise StoreFailureError(f"sqlite {operation} failed: {exc}") from exc

    @staticmethod
    def _select(
        conn: sqlite3.Connection, collection: str, query_filter: Mapping[str, Any]
    ) -> list[tuple[int, Record]]:
        if isinstance(query_filter.get("name"), str):
            rows = conn.execute(
                "SELECT id, body FROM records WHERE collection = ? AND name = ? ORDER BY id",
                (collection, query_filter["name"]),
            ).fetchall()
        else:
            rows = conn.execute(
                "SELECT id, body FROM records WHERE collection = ? ORDER BY id",
                (collection,),
            ).fetchall()
        matches = []
        for row_id, body in rows:
            record = json.loads(body)
            if record_matches(record, query_filter):
                matches.append((row_id, record))
        return matches

    async def find_records(self, collection: str, query_filter: Mapping[str, Any]) -> list[Record]:
        def _find(conn: sqlite3.Connection) -> list[Record]:
            return [record for _, record in self._select(conn, collection, query_filter)]

        return await self._run("find", _find)

    async def insert_record(self, collection: str, record: Mapping[str, Any]) -> None:
        payload = dict(record)

        def _insert(conn: sqlite3.Connection) -> None:
            conn.execute(
                "INSERT INTO records (collection, name, body) VALUES (?, ?, ?)",
                (collection, payload.get("name"), json.dumps(payload)),
            )

        await self._run("insert", _insert)

    async def update_record(
        self,
        collection: str,
        query_filter: Mapping[str, Any],
        fields: Mapping[str, Any],
    ) -> None:
        def _update(conn: sqlite3.Connection) -> None:
            matches = self._select(conn, collection, query_filter)
            if not matches:
                return
            row_id, record = matches[0]
            record.update(fields)
            conn.execute(
                "UPDATE records SET name = ?, body = ? WHERE id = ?",
                (record.get("name"), json.dumps(record), row_id),
            )

        await self._run("update", _update)

    async def upsert_record(
        self,
        collection: str,
        query_filter: Mapping[str, Any],
        record: Mapping[str, Any],
    ) -> None:
        payload = dict(record)
        keyed_by_name = set(query_filter) == {"name"} and payload.get("name") == query_filter["name"]
        if not keyed_by_name:
            await super().upsert_record(collection, query_filter, payload)
            return

        def _upsert(conn: sqlite3.Connection) -> None:
            conn.execute(
                "INSERT INTO records (collection, name, body) VALUES (?, ?, ?) "
                "ON CONFLICT (collection, name) DO UPDATE SET body = excluded.body",
                (collection, payload["name"], json.dumps(payload)),
            )

        await self._run("upsert", _upsert)

    async def drop_all(self) -> None:
        def _drop(conn: sqlite3.Connection) -> None:
            conn.execute("DELETE FROM records")

        await self._run("drop", _drop)
        logger.info("Dropped all records from %s", self.db_path)
