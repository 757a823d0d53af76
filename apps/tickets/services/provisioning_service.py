import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import as_completed
from dataclasses import dataclass
from dataclasses import field
from typing import Any

from django.conf import settings
from django.db import connections

from apps.shared.exceptions import ConflictError
from apps.shared.exceptions import ValidationError
from apps.shared.storage.base import AbstractStorageService
from apps.shared.storage.factory import get_storage_service
from apps.tickets.dal import TicketDAL
from apps.tickets.exceptions import TicketGenerationFailure
from apps.tickets.exceptions import TokenMintingExhausted
from apps.tickets.utils.artifacts import artifact_filename
from apps.tickets.utils.artifacts import build_registration_url
from apps.tickets.utils.artifacts import default_registration_base_url
from apps.tickets.utils.qr_utils import QRCodeGenerator
from apps.tickets.utils.tokens import mint_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TicketOutcome:
    """Result of one iteration of the provisioning batch"""

    index: int
    token: str | None = None
    ticket_id: int | None = None
    artifact_path: str | None = None
    failure: TicketGenerationFailure | None = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class ProvisioningReport:
    """Aggregate of a provisioning batch; ``succeeded`` may be lower than ``requested``."""

    event_id: int
    requested: int
    succeeded: int
    outcomes: tuple[TicketOutcome, ...] = field(default_factory=tuple)

    @property
    def failed(self) -> int:
        return self.requested - self.succeeded

    @property
    def tokens(self) -> list[str]:
        return [outcome.token for outcome in self.outcomes if outcome.succeeded]

    @property
    def failures(self) -> list[TicketOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    @classmethod
    def from_outcomes(cls, event_id: int, requested: int, outcomes) -> 'ProvisioningReport':
        ordered = tuple(sorted(outcomes, key=lambda outcome: outcome.index))
        return cls(
            event_id=event_id,
            requested=requested,
            succeeded=sum(1 for outcome in ordered if outcome.succeeded),
            outcomes=ordered,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'eventId': self.event_id,
            'requested': self.requested,
            'succeeded': self.succeeded,
            'failed': self.failed,
            'failures': [
                {'index': outcome.index, 'stage': outcome.failure.stage, 'reason': outcome.failure.reason}
                for outcome in self.failures
            ],
        }


class TicketProvisioningService:
    """
    Mints the ticket quota of an event.

    Each index of ``0..quota-1`` is processed independently (mint a token,
    render its QR code, store the artifact, insert the row) and mapped to a
    ``TicketOutcome``; a failing index is recorded and never stops its
    siblings. The outcomes are then reduced to a ``ProvisioningReport``.

    Artifacts are created exclusively: an existing ``qr_<TOKEN>.png`` means the
    token is taken and a fresh one is drawn. An artifact whose row cannot be
    inserted is removed again.

    Not idempotent: every call appends ``quota`` new tickets to the event.
    """

    def __init__(
        self,
        dal: TicketDAL = None,
        storage: AbstractStorageService = None,
        encoder: QRCodeGenerator = None,
        token_factory=None,
        workers: int = None,
        timeout: float = None,
        max_token_attempts: int = None,
    ):
        options = getattr(settings, 'TICKET_PROVISIONING', {})

        self.dal = dal or TicketDAL()
        self.storage = storage or get_storage_service()
        self.encoder = encoder or QRCodeGenerator()
        self.token_factory = token_factory or mint_token
        self.workers = max(1, workers if workers is not None else options.get('WORKERS', 1))
        self.timeout = timeout if timeout is not None else options.get('TIMEOUT', 0)
        self.max_token_attempts = max(
            1, max_token_attempts if max_token_attempts is not None else options.get('TOKEN_MAX_ATTEMPTS', 5)
        )
        self.tickets_dir = settings.TICKETS_DIR

    def prepare_artifact_directory(self) -> None:
        """Create the artifact directory; raises AssetPersistenceError if impossible"""
        self.storage.ensure_directory(self.tickets_dir)

    def provision_tickets(
        self, event_id: int, quota: int, base_registration_url: str = None
    ) -> ProvisioningReport:
        """
        Generate ``quota`` tickets for the event.

        Raises:
            ValidationError: If quota is negative
            AssetPersistenceError: If the artifact directory cannot be created;
                no ticket can be produced in that case
        """
        if quota < 0:
            raise ValidationError('Quota must not be negative', error_code='invalid_quota')

        base_url = base_registration_url or default_registration_base_url()
        self.prepare_artifact_directory()

        deadline = time.monotonic() + self.timeout if self.timeout else None
        started = time.monotonic()

        if self.workers > 1 and quota > 1:
            outcomes = self._provision_concurrently(event_id, quota, base_url, deadline)
        else:
            outcomes = [self._provision_one(event_id, index, base_url, deadline) for index in range(quota)]

        report = ProvisioningReport.from_outcomes(event_id, quota, outcomes)

        log_extra = {
            'event_id': event_id,
            'requested': report.requested,
            'succeeded': report.succeeded,
            'duration_ms': int((time.monotonic() - started) * 1000),
        }
        if report.failed:
            logger.warning(
                f'Generated {report.succeeded}/{report.requested} tickets for event {event_id}',
                extra=log_extra,
            )
        else:
            logger.info(f'Generated {report.succeeded} tickets for event {event_id}', extra=log_extra)

        return report

    def _provision_concurrently(self, event_id: int, quota: int, base_url: str, deadline) -> list[TicketOutcome]:
        workers = min(self.workers, quota)
        index_slices = [range(worker, quota, workers) for worker in range(workers)]
        outcomes = []

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='ticket-provisioner') as executor:
            futures = [
                executor.submit(self._provision_slice, event_id, indices, base_url, deadline)
                for indices in index_slices
            ]
            for future in as_completed(futures):
                outcomes.extend(future.result())

        return outcomes

    def _provision_slice(self, event_id: int, indices: range, base_url: str, deadline) -> list[TicketOutcome]:
        try:
            return [self._provision_one(event_id, index, base_url, deadline) for index in indices]
        finally:
            # worker threads own their connections
            connections.close_all()

    def _provision_one(self, event_id: int, index: int, base_url: str, deadline) -> TicketOutcome:
        if deadline is not None and time.monotonic() >= deadline:
            logger.warning(
                f'Provisioning deadline exceeded before ticket {index} of event {event_id}',
                extra={'event_id': event_id, 'ticket_index': index, 'stage': 'timeout'},
            )
            return TicketOutcome(
                index=index,
                failure=TicketGenerationFailure(stage='timeout', reason='Provisioning deadline exceeded'),
            )

        stage = 'mint'
        token = None
        try:
            for _attempt in range(self.max_token_attempts):
                stage = 'mint'
                token = self._mint_unused_token()

                stage = 'encode'
                image = self.encoder.encode(build_registration_url(base_url, token))

                stage = 'store'
                try:
                    artifact_path = self.storage.store_as(self.tickets_dir, artifact_filename(token), image)
                except ConflictError:
                    logger.info(
                        f'Artifact for token {token} already exists, drawing a new one',
                        extra={'event_id': event_id, 'ticket_index': index},
                    )
                    continue

                stage = 'persist'
                try:
                    ticket = self.dal.create_ticket(event_id, token, artifact_path)
                except ConflictError:
                    self.storage.delete(artifact_path)
                    logger.info(
                        f'Token {token} taken concurrently, drawing a new one',
                        extra={'event_id': event_id, 'ticket_index': index},
                    )
                    continue
                except Exception:
                    self.storage.delete(artifact_path)
                    raise

                return TicketOutcome(index=index, token=token, ticket_id=ticket.id, artifact_path=artifact_path)

            stage = 'mint'
            raise TokenMintingExhausted(self.max_token_attempts)

        except Exception as e:
            logger.warning(
                f'Failed to generate ticket {index} for event {event_id} at {stage}: {e}',
                extra={'event_id': event_id, 'ticket_index': index, 'stage': stage, 'token': token},
                exc_info=True,
            )
            return TicketOutcome(
                index=index,
                token=token,
                failure=TicketGenerationFailure.from_exception(stage, e),
            )

    def _mint_unused_token(self) -> str:
        for _attempt in range(self.max_token_attempts):
            token = self.token_factory()
            if not self.dal.token_exists(token):
                return token
        raise TokenMintingExhausted(self.max_token_attempts)
