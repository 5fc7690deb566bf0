"""
Notification dispatcher.

Runs one tick over every stored tenant, or a single on-demand test fire,
and turns each eligible decision into a chime delivery.
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Protocol, Tuple, Union

from twoam import config
from twoam.errors import ChimeError, DeliveryError, NotFoundError, RepositoryError
from twoam.models.decision import (
    Decision,
    Outcome,
    SingleResult,
    TenantOutcome,
    TickReport,
    TickStatus,
)
from twoam.models.tenant import TenantRecord
from twoam.repositories.tenant import TenantRepository
from twoam.services.eligibility import REASON_NOT_CONFIGURED, OccupancyProbe, evaluate
from twoam.services.mute import parse_mute_until

logger = logging.getLogger(__name__)

_STATUS_BY_OUTCOME = {
    Outcome.DEFER: TickStatus.DEFERRED,
    Outcome.SKIP: TickStatus.SKIPPED,
}


class DeliveryCollaborator(Protocol):
    """Joins a destination, plays the media to completion and leaves."""

    async def deliver(self, tenant_id: str, destination_id: str, media_ref: Union[str, Path]) -> None:
        ...


class NotificationDispatcher:
    """
    Evaluates tenants and delivers chimes to the eligible ones.

    Tenants are handled one after another. A failure for one tenant is
    recorded in the report and never stops the others; only a failure to
    load the tenant list aborts a tick.

    Attributes:
        repo: Tenant storage.
        probe: Occupancy lookup used by the evaluator.
        delivery: Plays the chime in a destination.
        media_ref: Audio file to play.
        delivery_timeout: Seconds allowed per delivery.
        prune_stale: Delete tenants whose server or channel vanished.
    """

    def __init__(
        self,
        repo: TenantRepository,
        probe: OccupancyProbe,
        delivery: DeliveryCollaborator,
        media_ref: Union[str, Path] = config.CHIME_MEDIA,
        delivery_timeout: float = config.DELIVERY_TIMEOUT_SECONDS,
        prune_stale: bool = False,
    ):
        self.repo = repo
        self.probe = probe
        self.delivery = delivery
        self.media_ref = media_ref
        self.delivery_timeout = delivery_timeout
        self.prune_stale = prune_stale

    async def run_tick(self, now: datetime) -> TickReport:
        """
        Evaluate every tenant once and deliver where eligible.

        Args:
            now: Reference time for mute checks.

        Returns:
            TickReport with one outcome per tenant, or `aborted` set when
            the tenant list could not be read.
        """
        report = TickReport(started_at=now)
        logger.info(f"[Dispatcher] Running schedule at {now:%Y-%m-%d %H:%M:%S}")

        try:
            # Snapshot; writes during the tick do not affect it
            tenants = self.repo.get_all()
        except RepositoryError as e:
            report.aborted = True
            report.error = str(e)
            logger.error(f"[Dispatcher] {report.summary()}", exc_info=True)
            return report

        for record in tenants:
            outcome, decision = await self._process(record, now)
            report.outcomes.append(outcome)
            if decision is not None and decision.deletion_candidate:
                report.deletion_candidates.append(record.tenant_id)

        if self.prune_stale and report.deletion_candidates:
            report.pruned = self._prune(report.deletion_candidates)

        logger.info(f"[Dispatcher] {report.summary()}")
        return report

    async def run_single(self, tenant_id: str, now: datetime) -> SingleResult:
        """
        Test fire for one tenant, reporting why nothing played when it didn't.

        Args:
            tenant_id: Guild to test.
            now: Reference time for the mute check.
        """
        try:
            record = self.repo.get_by_tenant(tenant_id)
        except RepositoryError as e:
            logger.warning(f"[Dispatcher] Could not load tenant {tenant_id}: {e}")
            return SingleResult(tenant_id=str(tenant_id), status=TickStatus.FAILED, reason=str(e))

        if record is None:
            return SingleResult(
                tenant_id=str(tenant_id),
                status=TickStatus.SKIPPED,
                reason=REASON_NOT_CONFIGURED,
            )

        outcome, _ = await self._process(record, now)
        return SingleResult(
            tenant_id=record.tenant_id,
            status=outcome.status,
            reason=outcome.reason,
            destination_id=record.destination_id,
            mute_until=parse_mute_until(record.mute_until),
        )

    async def _process(
        self, record: TenantRecord, now: datetime
    ) -> Tuple[TenantOutcome, Optional[Decision]]:
        """Evaluate and, when eligible, deliver for one tenant."""
        tenant_id = record.tenant_id
        try:
            decision = await evaluate(record, now, self.probe)
        except Exception as e:
            logger.warning(f"[Dispatcher] Evaluation failed for server {tenant_id}: {e}")
            return TenantOutcome(tenant_id, TickStatus.FAILED, f"evaluation failed: {e}"), None

        if decision.outcome != Outcome.FIRE:
            logger.info(f"[Dispatcher] {decision.outcome.name} server {tenant_id}: {decision.reason}")
            return TenantOutcome(tenant_id, _STATUS_BY_OUTCOME[decision.outcome], decision.reason), decision

        try:
            await self._deliver(record)
        except NotFoundError as e:
            # Vanished between the occupancy check and the join
            logger.warning(f"[Dispatcher] Delivery target gone for server {tenant_id}: {e}")
            return (
                TenantOutcome(tenant_id, TickStatus.FAILED, str(e)),
                Decision.skip(str(e), deletion_candidate=True),
            )
        except ChimeError as e:
            logger.warning(f"[Dispatcher] Delivery failed for server {tenant_id}: {e}")
            return TenantOutcome(tenant_id, TickStatus.FAILED, str(e)), decision
        except Exception as e:
            logger.exception(f"[Dispatcher] Unexpected delivery error for server {tenant_id}")
            return TenantOutcome(tenant_id, TickStatus.FAILED, f"delivery failed: {e}"), decision

        logger.info(f"[Dispatcher] Played chime in channel {record.destination_id} on server {tenant_id}")
        return TenantOutcome(tenant_id, TickStatus.FIRED), decision

    async def _deliver(self, record: TenantRecord):
        try:
            await asyncio.wait_for(
                self.delivery.deliver(record.tenant_id, record.destination_id, self.media_ref),
                timeout=self.delivery_timeout,
            )
        except asyncio.TimeoutError:
            raise DeliveryError(
                f"delivery timed out after {self.delivery_timeout:g}s"
            ) from None

    def _prune(self, tenant_ids: List[str]) -> List[str]:
        """Delete stale tenants, returning the ones actually removed."""
        pruned = []
        for tenant_id in tenant_ids:
            try:
                if self.repo.delete_by_tenant(tenant_id):
                    pruned.append(tenant_id)
                    logger.info(f"[Dispatcher] Pruned stale server {tenant_id}")
            except RepositoryError as e:
                logger.warning(f"[Dispatcher] Could not prune server {tenant_id}: {e}")
        return pruned
