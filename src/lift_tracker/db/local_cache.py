"""SQLite-backed key-value cache for the document and the storage config.

This is the always-available tier: reads and writes are synchronous and
every value is overwritten wholesale.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Optional, Union

from ..exceptions import DecodeError


logger = logging.getLogger(__name__)

DOCUMENT_KEY = "ae_tracker_data"
CONFIG_KEY = "ae_tracker_config"


class LocalCache:
    """
    Durable key-value store backed by a single SQLite table.

    Values are JSON text. A missing key reads as None; a value that is not
    valid JSON raises DecodeError so callers can fall back.
    """

    def __init__(self, db_path: Union[str, Path]):
        """
        Initialize the cache.

        Args:
            db_path: Path to the SQLite database file. Parent directories
                     are created if needed.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_table_exists()

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager."""
        conn = sqlite3.connect(str(self.db_path))
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_table_exists(self):
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
            """)

    def get_item(self, key: str) -> Optional[str]:
        """Return the raw stored text for a key, or None."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        """Overwrite the value stored under a key."""
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, value),
            )

    def remove_item(self, key: str) -> bool:
        """Delete a key. Returns True if something was removed."""
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            return cursor.rowcount > 0

    def read_json(self, key: str) -> Optional[Any]:
        """
        Read and parse the JSON stored under a key.

        Returns:
            The parsed value, or None if the key is absent.

        Raises:
            DecodeError: If the stored text is not valid JSON.
        """
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as e:
            raise DecodeError(f"Stored value for {key!r} is not valid JSON: {e}", source="local") from e

    def write_json(self, key: str, value: Any) -> None:
        """Serialize value as compact JSON and store it under a key."""
        self.set_item(key, json.dumps(value, ensure_ascii=False))
        logger.debug("Wrote %s to local cache", key)
