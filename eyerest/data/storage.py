from __future__ import annotations

"""SQLite key-value store for reminder settings and session state."""

import json
import logging
import math
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping


SCHEMA_VERSION = 1

logger = logging.getLogger(__name__)

_MISSING = object()


class Storage:
    """Wraps the SQLite connection and the transactional settings operations."""
    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA journal_mode = WAL;")
        except sqlite3.DatabaseError:
            pass
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        """Creates the settings tables on first launch."""
        with self._transaction() as conn:
            conn.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER NOT NULL)")
            row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
            if not row:
                conn.execute("INSERT INTO schema_version(version) VALUES (?)", (SCHEMA_VERSION,))
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS settings(
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
                """
            )

    def _read(self, key: str) -> Any:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        if not row:
            return _MISSING
        raw = row["value"]
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            return raw

    def has_setting(self, key: str) -> bool:
        return self._read(key) is not _MISSING

    def get_setting(self, key: str, default: Any = None) -> Any:
        value = self._read(key)
        return default if value is _MISSING else value

    def set_setting(self, key: str, value: Any) -> None:
        self.set_settings({key: value})

    def set_settings(self, values: Mapping[str, Any], remove: Iterable[str] = ()) -> None:
        """Writes several keys and deletes the keys in ``remove`` in one transaction."""
        payload = [(key, json.dumps(value)) for key, value in values.items()]
        removed = [(key,) for key in remove]
        with self._transaction() as conn:
            conn.executemany(
                "INSERT INTO settings(key, value) VALUES(?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                payload,
            )
            if removed:
                conn.executemany("DELETE FROM settings WHERE key = ?", removed)

    def remove_setting(self, key: str) -> None:
        with self._transaction() as conn:
            conn.execute("DELETE FROM settings WHERE key = ?", (key,))

    # Typed accessors. A stored value of the wrong type reads as the default.

    def get_float(self, key: str, default: float | None = None) -> float | None:
        value = self.get_setting(key)
        if value is None or isinstance(value, bool):
            return default
        try:
            number = float(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric value for %s: %r", key, value)
            return default
        if not math.isfinite(number):
            logger.warning("Ignoring non-finite value for %s: %r", key, value)
            return default
        return number

    def get_int(self, key: str, default: int | None = None) -> int | None:
        number = self.get_float(key)
        if number is None:
            return default
        return int(number)

    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        value = self.get_setting(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return bool(value)
        if value is not None:
            logger.warning("Ignoring non-boolean value for %s: %r", key, value)
        return default

    def get_str(self, key: str, default: str | None = None) -> str | None:
        value = self.get_setting(key)
        return value if isinstance(value, str) else default

    def get_datetime(self, key: str) -> datetime | None:
        """Reads an ISO-8601 timestamp; naive values are taken as local time."""
        raw = self.get_str(key)
        if raw is None:
            return None
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            logger.warning("Ignoring malformed timestamp for %s: %r", key, raw)
            return None
        if parsed.tzinfo is None:
            parsed = parsed.astimezone()
        return parsed
