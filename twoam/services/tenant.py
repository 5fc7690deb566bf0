"""
Service for per-server chime configuration: destination and mute window.
"""

import logging
from datetime import datetime
from typing import Optional

from twoam.errors import ConfigurationError
from twoam.models.tenant import TenantRecord
from twoam.repositories.tenant import TenantRepository
from twoam.services.mute import format_mute_until, resolve_mute_until

logger = logging.getLogger(__name__)


class TenantService:
    """Business logic wrapper for tenant record operations."""

    def __init__(self, repo: Optional[TenantRepository] = None):
        self.repo = repo or TenantRepository()

    def get(self, tenant_id: int | str) -> Optional[TenantRecord]:
        """Get a tenant's record, or None if it was never configured."""
        return self.repo.get_by_tenant(str(tenant_id))

    def require_configured(self, tenant_id: int | str) -> TenantRecord:
        """
        Get a tenant's record, insisting a destination is set.

        Raises:
            ConfigurationError: No record or no destination.
        """
        record = self.get(tenant_id)
        if record is None or not record.is_configured:
            raise ConfigurationError(f"Server {tenant_id} has no voice channel set")
        return record

    def set_destination(self, tenant_id: int | str, destination_id: int | str) -> TenantRecord:
        """
        Point the tenant at a voice channel.

        This replaces the whole record: an existing mute window and
        frequency are discarded.
        """
        record = self.repo.replace(str(tenant_id), str(destination_id))
        logger.info(f"[TenantService] Server {tenant_id} now chimes in channel {destination_id}")
        return record

    def set_mute(self, tenant_id: int | str, spec: Optional[str], now: datetime) -> datetime:
        """
        Mute the tenant until the time described by `spec`.

        Returns:
            The end of the mute window.

        Raises:
            ConfigurationError: The tenant has no destination.
            InvalidMuteSpecError: `spec` is not a usable mute argument.
            RepositoryError: The write failed.
        """
        self.require_configured(tenant_id)
        until = resolve_mute_until(spec, now)
        self.repo.update_mute_until(str(tenant_id), format_mute_until(until))
        logger.info(f"[TenantService] Server {tenant_id} muted until {format_mute_until(until)}")
        return until

    def clear_mute(self, tenant_id: int | str) -> None:
        """
        Remove any mute window.

        Raises:
            ConfigurationError: The tenant has no destination.
            RepositoryError: The write failed.
        """
        self.require_configured(tenant_id)
        self.repo.update_mute_until(str(tenant_id), None)
        logger.info(f"[TenantService] Server {tenant_id} unmuted")
