import time
from unittest.mock import Mock

from django.test import SimpleTestCase
from django.test import TestCase

from apps.events.tests.factories import EventFactory
from apps.shared.exceptions import AssetPersistenceError
from apps.shared.exceptions import ConflictError
from apps.shared.storage.local_storage import LocalAssetStorage
from apps.shared.tests.mixins import TempPublicRootMixin
from apps.tickets.dal import TicketDAL
from apps.tickets.exceptions import QRCodeEncodingError
from apps.tickets.models import Ticket
from apps.tickets.services.provisioning_service import ProvisioningReport
from apps.tickets.services.provisioning_service import TicketOutcome
from apps.tickets.services.provisioning_service import TicketProvisioningService
from apps.tickets.tests.factories import TicketFactory
from apps.tickets.tests.utils import decodes_to
from apps.tickets.utils.qr_utils import QRCodeGenerator

BASE_URL = 'http://localhost:3000/register'


class RecordingEncoder:
    """QR encoder that records payloads and fails on the requested call numbers"""

    def __init__(self, fail_on_calls=()):
        self.payloads = []
        self.fail_on_calls = set(fail_on_calls)
        self.real = QRCodeGenerator()

    def encode(self, payload):
        self.payloads.append(payload)
        if len(self.payloads) in self.fail_on_calls:
            raise QRCodeEncodingError('encoder glitch')
        return self.real.encode(payload)


class TicketProvisioningServiceTest(TempPublicRootMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.event = EventFactory(quota=5)
        self.storage = LocalAssetStorage()

    def make_service(self, **kwargs):
        kwargs.setdefault('storage', self.storage)
        kwargs.setdefault('workers', 1)
        kwargs.setdefault('timeout', 0)
        return TicketProvisioningService(**kwargs)

    def test_full_quota_generated(self):
        report = self.make_service().provision_tickets(self.event.pk, 5, BASE_URL)

        self.assertEqual(report.requested, 5)
        self.assertEqual(report.succeeded, 5)
        self.assertEqual(report.failed, 0)

        tickets = Ticket.objects.filter(event=self.event)
        self.assertEqual(tickets.count(), 5)
        self.assertEqual(len({ticket.token for ticket in tickets}), 5)

        for ticket in tickets:
            self.assertFalse(ticket.is_verified)
            self.assertEqual(ticket.artifact_path, f'/tickets/qr_{ticket.token}.png')
            self.assertTrue(self.public_file(ticket.artifact_path).is_file())

    def test_payload_is_registration_url_with_token(self):
        encoder = RecordingEncoder()

        report = self.make_service(encoder=encoder).provision_tickets(self.event.pk, 3, BASE_URL)

        self.assertEqual(encoder.payloads, [f'{BASE_URL}?token={token}' for token in report.tokens])

    def test_stored_artifact_reads_back_as_registration_url(self):
        report = self.make_service().provision_tickets(self.event.pk, 3, BASE_URL)

        for outcome in report.outcomes:
            data = self.public_file(outcome.artifact_path).read_bytes()
            self.assertTrue(decodes_to(data, f'{BASE_URL}?token={outcome.token}'))

    def test_existing_artifact_is_never_overwritten(self):
        other_event = EventFactory()
        owner = self.make_service().provision_tickets(other_event.pk, 1, 'https://a.example/register')
        owner_token = owner.tokens[0]
        owner_file = self.public_file(owner.outcomes[0].artifact_path)
        owner_bytes = owner_file.read_bytes()

        dal = Mock(wraps=TicketDAL())
        dal.token_exists.side_effect = lambda token: False
        tokens = iter([owner_token, 'PQRSTUVWXYZ2'])

        report = self.make_service(dal=dal, token_factory=lambda: next(tokens)).provision_tickets(
            self.event.pk, 1, 'https://b.example/register'
        )

        self.assertEqual(report.tokens, ['PQRSTUVWXYZ2'])
        self.assertEqual(owner_file.read_bytes(), owner_bytes)
        self.assertTrue(decodes_to(owner_bytes, f'https://a.example/register?token={owner_token}'))
        self.assertEqual(Ticket.objects.get(token=owner_token).event_id, other_event.pk)

    def test_artifact_removed_when_row_insert_conflicts(self):
        TicketFactory(token='ABCDEFGHJKMN')
        dal = Mock(wraps=TicketDAL())
        dal.token_exists.side_effect = lambda token: False
        tokens = iter(['ABCDEFGHJKMN', 'PQRSTUVWXYZ2'])

        report = self.make_service(dal=dal, token_factory=lambda: next(tokens)).provision_tickets(
            self.event.pk, 1, BASE_URL
        )

        self.assertEqual(report.tokens, ['PQRSTUVWXYZ2'])
        self.assertFalse(self.public_file('/tickets/qr_ABCDEFGHJKMN.png').exists())
        self.assertTrue(self.public_file('/tickets/qr_PQRSTUVWXYZ2.png').is_file())

    def test_zero_quota(self):
        report = self.make_service().provision_tickets(self.event.pk, 0, BASE_URL)

        self.assertEqual(report.succeeded, 0)
        self.assertEqual(report.outcomes, ())
        self.assertFalse(Ticket.objects.filter(event=self.event).exists())

    def test_failed_encode_does_not_stop_the_batch(self):
        encoder = RecordingEncoder(fail_on_calls={2})

        report = self.make_service(encoder=encoder).provision_tickets(self.event.pk, 3, BASE_URL)

        self.assertEqual(report.succeeded, 2)
        self.assertEqual(report.failed, 1)
        self.assertTrue(report.outcomes[0].succeeded)
        self.assertFalse(report.outcomes[1].succeeded)
        self.assertTrue(report.outcomes[2].succeeded)
        self.assertEqual(report.outcomes[1].failure.stage, 'encode')
        self.assertEqual(report.outcomes[1].failure.error_type, 'QRCodeEncodingError')

        stored_tokens = set(Ticket.objects.filter(event=self.event).values_list('token', flat=True))
        self.assertEqual(stored_tokens, {report.outcomes[0].token, report.outcomes[2].token})

    def test_failed_artifact_write_is_recorded(self):
        storage = Mock(wraps=self.storage)
        storage.store_as.side_effect = [AssetPersistenceError('disk full'), '/tickets/qr_X.png']

        report = self.make_service(storage=storage).provision_tickets(self.event.pk, 2, BASE_URL)

        self.assertEqual(report.succeeded, 1)
        self.assertEqual(report.outcomes[0].failure.stage, 'store')
        self.assertEqual(Ticket.objects.filter(event=self.event).count(), 1)

    def test_ticket_rows_match_succeeded_count(self):
        encoder = RecordingEncoder(fail_on_calls={1, 4})

        report = self.make_service(encoder=encoder).provision_tickets(self.event.pk, 5, BASE_URL)

        self.assertEqual(report.succeeded, 3)
        self.assertEqual(Ticket.objects.filter(event=self.event).count(), report.succeeded)

    def test_existing_token_is_redrawn(self):
        existing = TicketFactory(token='ABCDEFGHJKMN')
        tokens = iter(['ABCDEFGHJKMN', 'PQRSTUVWXYZ2'])

        report = self.make_service(token_factory=lambda: next(tokens)).provision_tickets(self.event.pk, 1, BASE_URL)

        self.assertEqual(report.succeeded, 1)
        self.assertEqual(report.tokens, ['PQRSTUVWXYZ2'])
        self.assertNotEqual(existing.event_id, self.event.pk)

    def test_minting_gives_up_after_max_attempts(self):
        TicketFactory(token='ABCDEFGHJKMN')

        service = self.make_service(token_factory=lambda: 'ABCDEFGHJKMN', max_token_attempts=3)
        report = service.provision_tickets(self.event.pk, 1, BASE_URL)

        self.assertEqual(report.succeeded, 0)
        self.assertEqual(report.outcomes[0].failure.stage, 'mint')
        self.assertEqual(report.outcomes[0].failure.error_type, 'TokenMintingExhausted')

    def test_tokens_unique_across_events_and_repeated_calls(self):
        other_event = EventFactory()
        service = self.make_service()

        service.provision_tickets(self.event.pk, 4, BASE_URL)
        service.provision_tickets(self.event.pk, 4, BASE_URL)
        service.provision_tickets(other_event.pk, 4, BASE_URL)

        tokens = list(Ticket.objects.values_list('token', flat=True))
        self.assertEqual(len(tokens), 12)
        self.assertEqual(len(set(tokens)), 12)
        self.assertEqual(Ticket.objects.filter(event=self.event).count(), 8)

    def test_missing_artifact_directory_is_fatal(self):
        storage = Mock(wraps=self.storage)
        storage.ensure_directory.side_effect = AssetPersistenceError('read-only filesystem')

        with self.assertRaises(AssetPersistenceError):
            self.make_service(storage=storage).provision_tickets(self.event.pk, 3, BASE_URL)

        self.assertFalse(Ticket.objects.filter(event=self.event).exists())


class TicketProvisioningWithoutDatabaseTest(SimpleTestCase):
    """Scheduling behaviour exercised against in-memory collaborators"""

    def make_service(self, **kwargs):
        dal = Mock()
        dal.token_exists.return_value = False
        dal.create_ticket.side_effect = lambda event_id, token, path: Mock(id=hash(token) & 0xFFFF)

        storage = Mock()
        storage.store_as.side_effect = lambda directory, filename, data: f'/{directory}/{filename}'

        encoder = Mock()
        encoder.encode.return_value = b'png'

        kwargs.setdefault('dal', dal)
        kwargs.setdefault('storage', storage)
        kwargs.setdefault('encoder', encoder)
        kwargs.setdefault('timeout', 0)
        return TicketProvisioningService(**kwargs)

    def test_worker_pool_processes_every_index(self):
        service = self.make_service(workers=4)

        report = service.provision_tickets(1, 10, BASE_URL)

        self.assertEqual(report.succeeded, 10)
        self.assertEqual([outcome.index for outcome in report.outcomes], list(range(10)))
        self.assertEqual(len(set(report.tokens)), 10)

    def test_worker_pool_isolates_failures(self):
        encoder = Mock()
        encoder.encode.side_effect = QRCodeEncodingError('bad')

        report = self.make_service(workers=3, encoder=encoder).provision_tickets(1, 6, BASE_URL)

        self.assertEqual(report.succeeded, 0)
        self.assertEqual(report.failed, 6)
        self.assertTrue(all(outcome.failure.stage == 'encode' for outcome in report.outcomes))

    def test_insert_conflict_retries_with_fresh_token(self):
        dal = Mock()
        dal.token_exists.return_value = False
        dal.create_ticket.side_effect = [ConflictError('taken', error_code='token_conflict'), Mock(id=7)]

        report = self.make_service(dal=dal, workers=1).provision_tickets(1, 1, BASE_URL)

        self.assertEqual(report.succeeded, 1)
        self.assertEqual(report.outcomes[0].ticket_id, 7)
        self.assertEqual(dal.create_ticket.call_count, 2)

    def test_artifact_name_taken_redraws_before_insert(self):
        storage = Mock()
        storage.store_as.side_effect = [
            ConflictError('exists', error_code='file_exists'),
            '/tickets/qr_SECOND.png',
        ]
        dal = Mock()
        dal.token_exists.return_value = False
        dal.create_ticket.return_value = Mock(id=5)

        report = self.make_service(dal=dal, storage=storage, workers=1).provision_tickets(1, 1, BASE_URL)

        self.assertEqual(report.succeeded, 1)
        self.assertEqual(dal.create_ticket.call_count, 1)
        storage.delete.assert_not_called()

    def test_failed_insert_removes_its_artifact(self):
        storage = Mock()
        storage.store_as.return_value = '/tickets/qr_ONLY.png'
        dal = Mock()
        dal.token_exists.return_value = False
        dal.create_ticket.side_effect = RuntimeError('connection reset')

        report = self.make_service(dal=dal, storage=storage, workers=1).provision_tickets(1, 1, BASE_URL)

        self.assertEqual(report.outcomes[0].failure.stage, 'persist')
        storage.delete.assert_called_once_with('/tickets/qr_ONLY.png')

    def test_database_failure_is_per_ticket(self):
        dal = Mock()
        dal.token_exists.return_value = False
        dal.create_ticket.side_effect = [Mock(id=1), RuntimeError('connection reset'), Mock(id=3)]

        report = self.make_service(dal=dal, workers=1).provision_tickets(1, 3, BASE_URL)

        self.assertEqual(report.succeeded, 2)
        self.assertEqual(report.outcomes[1].failure.stage, 'persist')

    def test_deadline_marks_remaining_tickets(self):
        encoder = Mock()

        def slow_encode(payload):
            time.sleep(0.1)
            return b'png'

        encoder.encode.side_effect = slow_encode

        report = self.make_service(encoder=encoder, workers=1, timeout=0.05).provision_tickets(1, 3, BASE_URL)

        self.assertEqual(report.succeeded, 1)
        self.assertEqual([outcome.failure.stage for outcome in report.failures], ['timeout', 'timeout'])

    def test_negative_quota_rejected(self):
        from apps.shared.exceptions import ValidationError

        with self.assertRaises(ValidationError):
            self.make_service(workers=1).provision_tickets(1, -1, BASE_URL)


class ProvisioningReportTest(SimpleTestCase):
    def test_reduce_outcomes(self):
        from apps.tickets.exceptions import TicketGenerationFailure

        outcomes = [
            TicketOutcome(index=2, token='C', ticket_id=3),
            TicketOutcome(index=0, token='A', ticket_id=1),
            TicketOutcome(index=1, token='B', failure=TicketGenerationFailure('encode', 'glitch')),
        ]

        report = ProvisioningReport.from_outcomes(event_id=9, requested=3, outcomes=outcomes)

        self.assertEqual(report.succeeded, 2)
        self.assertEqual(report.failed, 1)
        self.assertEqual(report.tokens, ['A', 'C'])
        self.assertEqual(
            report.to_dict()['failures'],
            [{'index': 1, 'stage': 'encode', 'reason': 'glitch'}],
        )
