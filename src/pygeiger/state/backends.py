"""Ordered key-value backends.

A backend only knows bytes. Ordering is plain byte order of the keys, which
is what gives the leaderboard its deterministic tie order.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, Protocol

from pygeiger.exceptions import StoreError

_logger = logging.getLogger(__name__)


class Storage(Protocol):
    """Minimal ordered key-value contract used by :class:`StateStore`."""

    def get(self, key: bytes) -> bytes | None: ...

    def set(self, key: bytes, value: bytes) -> None: ...

    def range(self, prefix: bytes) -> list[tuple[bytes, bytes]]:
        """All entries whose key starts with *prefix*, ascending by key."""
        ...

    def close(self) -> None: ...


class MemoryStorage:
    """Dict-backed storage. Used by tests and ephemeral hosts."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}

    def get(self, key: bytes) -> bytes | None:
        return self._data.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        self._data[bytes(key)] = bytes(value)

    def range(self, prefix: bytes) -> list[tuple[bytes, bytes]]:
        return [(key, self._data[key]) for key in sorted(self._data) if key.startswith(prefix)]

    def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._data)


_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv (
    key BLOB PRIMARY KEY,
    value BLOB NOT NULL
)
"""


class SqliteStorage:
    """SQLite-backed storage, one ``kv`` table.

    Every :meth:`set` commits on its own, so a write is durable as soon as
    it returns.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._conn: sqlite3.Connection | None = None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(self.path)
                conn.execute(_SCHEMA_SQL)
                conn.commit()
            except (OSError, sqlite3.Error) as exc:
                raise StoreError(f"cannot open storage at {self.path}: {exc}") from exc
            _logger.debug("Opened SQLite storage at %s", self.path)
            self._conn = conn
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> SqliteStorage:
        self._connection()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def get(self, key: bytes) -> bytes | None:
        try:
            row = self._connection().execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"read failed: {exc}", key=key.decode("utf-8", "replace")) from exc
        if row is None:
            return None
        return bytes(row[0])

    def set(self, key: bytes, value: bytes) -> None:
        conn = self._connection()
        try:
            conn.execute(
                """
                INSERT INTO kv (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                (key, value),
            )
            conn.commit()
        except sqlite3.Error as exc:
            raise StoreError(f"write failed: {exc}", key=key.decode("utf-8", "replace")) from exc

    def range(self, prefix: bytes) -> list[tuple[bytes, bytes]]:
        try:
            rows = (
                self._connection()
                .execute(
                    "SELECT key, value FROM kv WHERE substr(key, 1, ?) = ? ORDER BY key",
                    (len(prefix), prefix),
                )
                .fetchall()
            )
        except sqlite3.Error as exc:
            raise StoreError(f"range scan failed: {exc}", key=prefix.decode("utf-8", "replace")) from exc
        return [(bytes(key), bytes(value)) for key, value in rows]
