"""
SQLite-based record storage.

Persists ledger records in a local SQLite database, one row per key.
No external database setup required.
"""
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

from claimledger.core.errors import RecordNotFound, StoreUnavailable
from claimledger.store.adapter import RecordStore

logger = logging.getLogger(__name__)

# Database file location
DEFAULT_DB_PATH = Path("data") / "ledger.db"


class SQLiteRecordStore(RecordStore):
    """
    Durable key-value store backed by SQLite.

    Usage:
        store = SQLiteRecordStore(Path("ledger.db"))
        store.put("claim", b"{...}")
        data = store.get("claim")
    """

    def __init__(self, db_path: Optional[Path] = None):
        """Initialize the record store."""
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        """Create the records table if it doesn't exist."""
        with self._get_connection("*") as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS records (
                    key TEXT PRIMARY KEY,
                    value BLOB NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()

    @contextmanager
    def _get_connection(self, key: str):
        """Get a database connection, mapping driver failures to StoreUnavailable."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StoreUnavailable(key, str(e)) from e
        try:
            yield conn
        except sqlite3.Error as e:
            logger.error(f"SQLite failure on '{key}': {e}")
            raise StoreUnavailable(key, str(e)) from e
        finally:
            conn.close()

    def get(self, key: str) -> bytes:
        with self._get_connection(key) as conn:
            row = conn.execute(
                "SELECT value FROM records WHERE key = ?", (key,)
            ).fetchone()
        if row is None:
            raise RecordNotFound(key)
        return bytes(row[0])

    def put(self, key: str, value: bytes) -> None:
        now = datetime.now().isoformat()
        with self._get_connection(key) as conn:
            conn.execute("""
                INSERT INTO records (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
            """, (key, sqlite3.Binary(value), now))
            conn.commit()
        logger.debug(f"Persisted {len(value)} bytes under '{key}'")
