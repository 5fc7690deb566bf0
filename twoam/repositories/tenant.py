"""
Tenant repository for per-server chime configuration persistence.
"""

from datetime import datetime
from typing import List, Optional
import logging
import sqlite3

from twoam.config import DEFAULT_FREQUENCY_HOURS
from twoam.models.tenant import TenantRecord
from twoam.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class TenantRepository(BaseRepository[TenantRecord]):
    """
    Repository for the `servers` table.

    One row per guild. Every write is a single statement, so updates to
    one tenant are atomic and never touch another tenant.
    """

    @staticmethod
    def _parse_frequency(row: sqlite3.Row) -> int:
        value = row["frequency"]
        if value is None:
            return DEFAULT_FREQUENCY_HOURS
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning(
                f"[TenantRepository] Ignoring invalid frequency {value!r} for server {row['server_id']}"
            )
            return DEFAULT_FREQUENCY_HOURS

    def _row_to_entity(self, row: sqlite3.Row) -> TenantRecord:
        """Convert a database row to a TenantRecord entity."""
        created_at = None
        updated_at = None
        try:
            if "created_at" in row.keys() and row["created_at"]:
                created_at = datetime.fromisoformat(str(row["created_at"]).replace(" ", "T"))
            if "updated_at" in row.keys() and row["updated_at"]:
                updated_at = datetime.fromisoformat(str(row["updated_at"]).replace(" ", "T"))
        except ValueError:
            created_at = None
            updated_at = None

        return TenantRecord(
            tenant_id=str(row["server_id"]),
            destination_id=str(row["channel_id"]) if row["channel_id"] else None,
            frequency=self._parse_frequency(row),
            mute_until=str(row["mute_until"]) if row["mute_until"] else None,
            created_at=created_at,
            updated_at=updated_at,
        )

    def get_all(self) -> List[TenantRecord]:
        """Get every tenant record."""
        rows = self._execute("SELECT * FROM servers ORDER BY server_id")
        return [self._row_to_entity(row) for row in rows]

    def get_by_tenant(self, tenant_id: str) -> Optional[TenantRecord]:
        """Get the record for a specific guild."""
        row = self._execute_one(
            "SELECT * FROM servers WHERE server_id = ?",
            (str(tenant_id),),
        )
        return self._row_to_entity(row) if row else None

    def upsert(self, record: TenantRecord) -> int:
        """
        Create the tenant's row or overwrite every field of the existing one.

        Returns:
            Rows affected (1).
        """
        now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        return self._execute_write(
            """
            INSERT INTO servers (
                server_id, channel_id, frequency, mute_until, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(server_id) DO UPDATE SET
                channel_id = excluded.channel_id,
                frequency = excluded.frequency,
                mute_until = excluded.mute_until,
                updated_at = excluded.updated_at
            """,
            (
                str(record.tenant_id),
                str(record.destination_id) if record.destination_id else None,
                int(record.frequency),
                record.mute_until,
                now,
                now,
            ),
        )

    def replace(self, tenant_id: str, destination_id: str) -> TenantRecord:
        """
        Point a tenant at a new destination, discarding its previous state.

        Any mute window and frequency on the old record are reset.
        """
        record = TenantRecord(tenant_id=str(tenant_id), destination_id=str(destination_id))
        self.upsert(record)
        return record

    def update_mute_until(self, tenant_id: str, mute_until: Optional[str]) -> int:
        """Set or clear the mute window. Returns rows affected."""
        now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        return self._execute_write(
            "UPDATE servers SET mute_until = ?, updated_at = ? WHERE server_id = ?",
            (mute_until, now, str(tenant_id)),
        )

    def delete_by_tenant(self, tenant_id: str) -> int:
        """Delete a tenant's record. Returns rows affected."""
        return self._execute_write(
            "DELETE FROM servers WHERE server_id = ?",
            (str(tenant_id),),
        )
