"""
Eligibility rules deciding whether a tenant gets its chime this tick.
"""

from datetime import datetime
from typing import Protocol

from twoam.models.decision import Decision, DestinationStatus
from twoam.models.tenant import TenantRecord
from twoam.services.mute import is_muted, parse_mute_until

REASON_NOT_CONFIGURED = "not configured"
REASON_DESTINATION_MISSING = "destination missing"
REASON_SERVER_MISSING = "server missing"
REASON_DESTINATION_EMPTY = "destination empty"


class OccupancyProbe(Protocol):
    """Looks up a destination channel and how many people are in it."""

    async def resolve_destination(self, tenant_id: str, destination_id: str) -> DestinationStatus:
        ...


async def evaluate(record: TenantRecord, now: datetime, probe: OccupancyProbe) -> Decision:
    """
    Decide FIRE, DEFER or SKIP for one tenant.

    The checks run cheapest first and stop at the first match: missing
    configuration, then the mute window, then a live lookup of the
    destination. The probe is only called when the first two pass.

    Args:
        record: Snapshot of the tenant's stored configuration.
        now: Reference time of the tick.
        probe: Occupancy lookup for the destination channel.

    Returns:
        A Decision. Destinations that no longer exist are flagged as
        deletion candidates.
    """
    if not record.is_configured:
        return Decision.skip(REASON_NOT_CONFIGURED)

    if is_muted(record, now):
        until = parse_mute_until(record.mute_until)
        return Decision.defer(f"muted until {until.isoformat()}")

    status = await probe.resolve_destination(record.tenant_id, record.destination_id)
    if not status.tenant_found:
        return Decision.skip(REASON_SERVER_MISSING, deletion_candidate=True)
    if not status.exists:
        return Decision.skip(REASON_DESTINATION_MISSING, deletion_candidate=True)

    if status.present_member_count <= 0:
        return Decision.defer(REASON_DESTINATION_EMPTY)

    return Decision.fire()
