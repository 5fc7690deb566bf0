"""
Decision and report models produced by the eligibility evaluator and the
notification dispatcher.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Outcome(Enum):
    """What the evaluator decided for one tenant."""

    FIRE = "fire"
    DEFER = "defer"
    SKIP = "skip"


@dataclass(frozen=True)
class Decision:
    """
    Result of evaluating one tenant.

    Attributes:
        outcome: FIRE, DEFER or SKIP.
        reason: Human readable explanation, None for FIRE.
        deletion_candidate: The tenant's server or channel no longer exists.
    """

    outcome: Outcome
    reason: Optional[str] = None
    deletion_candidate: bool = False

    @classmethod
    def fire(cls) -> "Decision":
        return cls(Outcome.FIRE)

    @classmethod
    def defer(cls, reason: str) -> "Decision":
        return cls(Outcome.DEFER, reason)

    @classmethod
    def skip(cls, reason: str, deletion_candidate: bool = False) -> "Decision":
        return cls(Outcome.SKIP, reason, deletion_candidate)


@dataclass(frozen=True)
class DestinationStatus:
    """What the occupancy probe knows about a destination channel."""

    exists: bool
    present_member_count: int = 0
    tenant_found: bool = True


class TickStatus(Enum):
    """Final per-tenant status after a dispatch attempt."""

    FIRED = "fired"
    DEFERRED = "deferred"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class TenantOutcome:
    """One tenant's line in a tick report."""

    tenant_id: str
    status: TickStatus
    reason: Optional[str] = None


@dataclass
class TickReport:
    """
    Summary of one scheduler tick.

    Attributes:
        started_at: The "now" the tick evaluated against.
        outcomes: Per-tenant results in processing order.
        aborted: The tenant list could not be loaded.
        error: Why the tick aborted.
        deletion_candidates: Tenants whose server or channel vanished.
        pruned: Candidates actually deleted during this tick.
    """

    started_at: datetime
    outcomes: List[TenantOutcome] = field(default_factory=list)
    aborted: bool = False
    error: Optional[str] = None
    deletion_candidates: List[str] = field(default_factory=list)
    pruned: List[str] = field(default_factory=list)

    def _count(self, status: TickStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    @property
    def fired(self) -> int:
        return self._count(TickStatus.FIRED)

    @property
    def deferred(self) -> int:
        return self._count(TickStatus.DEFERRED)

    @property
    def skipped(self) -> int:
        return self._count(TickStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(TickStatus.FAILED)

    def get(self, tenant_id: str) -> Optional[TenantOutcome]:
        """Return the outcome recorded for a tenant, if any."""
        for outcome in self.outcomes:
            if outcome.tenant_id == tenant_id:
                return outcome
        return None

    def summary(self) -> str:
        """One-line summary used for logging."""
        if self.aborted:
            return f"Tick at {self.started_at:%Y-%m-%d %H:%M:%S} aborted: {self.error}"
        return (
            f"Tick at {self.started_at:%Y-%m-%d %H:%M:%S}: "
            f"{self.fired} fired, {self.deferred} deferred, "
            f"{self.skipped} skipped, {self.failed} failed"
        )


@dataclass
class SingleResult:
    """Result of an on-demand test fire for one tenant."""

    tenant_id: str
    status: TickStatus
    reason: Optional[str] = None
    destination_id: Optional[str] = None
    mute_until: Optional[datetime] = None

    @property
    def fired(self) -> bool:
        return self.status == TickStatus.FIRED
