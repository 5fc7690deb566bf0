"""
Base repository class providing common database operations.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Optional, List
import sqlite3

from twoam.errors import RepositoryError

T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base class for all repositories.

    Repositories run on the connection opened by the Database singleton
    unless one is passed in. Every `sqlite3.Error` leaves the repository
    as a `RepositoryError`.
    """

    _shared_connection: Optional[sqlite3.Connection] = None

    @classmethod
    def set_shared_connection(cls, conn: sqlite3.Connection):
        cls._shared_connection = conn

    @classmethod
    def clear_shared_connection(cls):
        cls._shared_connection = None

    def __init__(self, conn: Optional[sqlite3.Connection] = None):
        self._conn = conn

    def _get_connection(self) -> sqlite3.Connection:
        conn = self._conn or BaseRepository._shared_connection
        if conn is None:
            raise RepositoryError("No database connection; open the Database first")
        return conn

    def _execute(self, query: str, params: tuple = ()) -> List[sqlite3.Row]:
        """
        Execute a query and return all results.

        Raises:
            RepositoryError: No connection, or the query failed.
        """
        conn = self._get_connection()
        try:
            return conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise RepositoryError(f"Read failed: {e}") from e

    def _execute_one(self, query: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        results = self._execute(query, params)
        return results[0] if results else None

    def _execute_write(self, query: str, params: tuple = ()) -> int:
        """
        Execute an INSERT, UPDATE or DELETE in its own transaction.

        Returns:
            Number of rows affected

        Raises:
            RepositoryError: The write failed and was rolled back.
        """
        conn = self._get_connection()
        try:
            cursor = conn.execute(query, params)
            conn.commit()
            return cursor.rowcount
        except sqlite3.Error as e:
            conn.rollback()
            raise RepositoryError(f"Write failed: {e}") from e

    @abstractmethod
    def get_all(self) -> List[T]:
        pass

    @abstractmethod
    def _row_to_entity(self, row: sqlite3.Row) -> T:
        pass
