"""Key-value text stores backing the SWR cache.

The cache only needs four operations (get / set / remove / keys), captured by
the `KeyValueStore` protocol. `SqliteKeyValueStore` is the durable store used
by the application so entries survive process restarts; `InMemoryKeyValueStore`
is a drop-in replacement for tests.
"""

from __future__ import annotations

import os
import sqlite3
from threading import RLock
from typing import Dict, List, Optional, Protocol

__all__ = ["KeyValueStore", "InMemoryKeyValueStore", "SqliteKeyValueStore"]


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...

    def keys(self) -> List[str]: ...


class InMemoryKeyValueStore:
    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data.keys())


class SqliteKeyValueStore:
    """Single-table SQLite store: cache_entry(key TEXT PRIMARY KEY, value TEXT)."""

    DDL = """
    CREATE TABLE IF NOT EXISTS cache_entry (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    );
    """.strip()

    def __init__(self, path: str) -> None:
        self.path = path
        if path != ":memory:":
            dir_part = os.path.dirname(path)
            if dir_part:
                os.makedirs(dir_part, exist_ok=True)
        self._lock = RLock()
        self._conn = sqlite3.connect(path, check_same_thread=False)
        with self._conn:
            self._conn.execute(self.DDL)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            row = self._conn.execute(
                "SELECT value FROM cache_entry WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT INTO cache_entry(key, value) VALUES(?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def remove(self, key: str) -> None:
        with self._lock, self._conn:
            self._conn.execute("DELETE FROM cache_entry WHERE key = ?", (key,))

    def keys(self) -> List[str]:
        with self._lock:
            rows = self._conn.execute("SELECT key FROM cache_entry ORDER BY key").fetchall()
        return [r[0] for r in rows]

    def close(self) -> None:
        with self._lock:
            self._conn.close()
