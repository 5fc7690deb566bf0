"""
Data models (DTOs) for the 2amInDiscord bot.

These dataclasses provide type-safe representations of stored tenants and
of the decisions the scheduler makes about them.
"""

from twoam.models.tenant import TenantRecord
from twoam.models.decision import (
    Decision,
    DestinationStatus,
    Outcome,
    SingleResult,
    TenantOutcome,
    TickReport,
    TickStatus,
)

__all__ = [
    "TenantRecord",
    "Decision",
    "DestinationStatus",
    "Outcome",
    "SingleResult",
    "TenantOutcome",
    "TickReport",
    "TickStatus",
]
