"""
Tenant model for per-server chime configuration.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from twoam.config import DEFAULT_FREQUENCY_HOURS


@dataclass
class TenantRecord:
    """Chime configuration for one Discord guild."""

    tenant_id: str
    destination_id: Optional[str] = None
    frequency: int = DEFAULT_FREQUENCY_HOURS
    # Raw persisted timestamp; parsed lazily by the mute check.
    mute_until: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_configured(self) -> bool:
        """Whether a destination voice channel has been set."""
        return bool(self.destination_id)
