"""
Database module.

Owns the singleton SQLite connection and the schema. Reads and writes of
tenant records go through `twoam.repositories.TenantRepository`.
"""

import logging
import sqlite3
import time
from typing import Optional

from twoam import config
from twoam.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class Database:
    _instance = None

    def __new__(cls, *args, **kwargs):
        if not cls._instance:
            cls._instance = super(Database, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, db_path: Optional[str] = None):
        if self._initialized:
            return
        self._initialized = True
        self.db_path = str(db_path or config.DATABASE_PATH)
        # Tasks and command handlers share this connection
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False, timeout=5.0)

        # Retry enabling WAL mode
        for attempt in range(3):
            try:
                self.conn.execute("PRAGMA journal_mode=WAL;")
                break
            except sqlite3.OperationalError as e:
                if attempt < 2:
                    logger.warning(f"[Database] Could not set journal_mode=WAL (attempt {attempt+1}): {e}. Retrying...")
                    time.sleep(1)
                else:
                    logger.warning(f"[Database] Could not set journal_mode=WAL after 3 attempts: {e}")

        # Set row_factory so repositories can use dict-style access
        self.conn.row_factory = sqlite3.Row

        self.create_schema()

        # Share connection with repositories for consistency
        BaseRepository.set_shared_connection(self.conn)

    def _table_exists(self, table_name: str) -> bool:
        """Return True if a SQLite table exists."""
        row = self.conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?",
            (table_name,),
        ).fetchone()
        return row is not None

    def _column_exists(self, table_name: str, column_name: str) -> bool:
        """Return True if a column exists on a table."""
        try:
            rows = self.conn.execute(f"PRAGMA table_info({table_name})").fetchall()
        except sqlite3.Error:
            return False
        for row in rows:
            # Row format: cid, name, type, notnull, dflt_value, pk
            if str(row[1]) == column_name:
                return True
        return False

    def _ensure_column(self, table_name: str, column_def: str, column_name: str):
        """Add a column if it does not already exist."""
        if not self._table_exists(table_name):
            return
        if self._column_exists(table_name, column_name):
            return
        self.conn.execute(f"ALTER TABLE {table_name} ADD COLUMN {column_def}")
        self.conn.commit()
        logger.info(f"[Database] Added column {table_name}.{column_name}")

    def create_schema(self):
        """Create the servers table and bring older databases up to date."""
        self.conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS servers (
                server_id TEXT PRIMARY KEY,
                channel_id TEXT,
                frequency INTEGER NOT NULL DEFAULT {config.DEFAULT_FREQUENCY_HOURS},
                mute_until TEXT,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        self.conn.commit()

        # Databases created before mute/frequency support
        self._ensure_column(
            "servers",
            f"frequency INTEGER NOT NULL DEFAULT {config.DEFAULT_FREQUENCY_HOURS}",
            "frequency",
        )
        self._ensure_column("servers", "mute_until TEXT", "mute_until")
        self._ensure_column("servers", "created_at DATETIME", "created_at")
        self._ensure_column("servers", "updated_at DATETIME", "updated_at")

    def close(self):
        """Close the connection and drop the singleton."""
        BaseRepository.clear_shared_connection()
        self.conn.close()
        Database._instance = None
