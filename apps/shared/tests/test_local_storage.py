import re
from unittest.mock import patch

from django.core.files.storage import FileSystemStorage
from django.test import SimpleTestCase

from apps.shared.exceptions import AssetPersistenceError
from apps.shared.exceptions import ConfigurationError
from apps.shared.exceptions import ConflictError
from apps.shared.exceptions import ValidationError
from apps.shared.storage.factory import StorageFactory
from apps.shared.storage.factory import get_storage_service
from apps.shared.storage.local_storage import LocalAssetStorage
from apps.shared.storage.local_storage import file_generate_name
from apps.shared.storage.local_storage import sanitize_filename
from apps.shared.tests.mixins import TempPublicRootMixin


class FilenameSanitizingTest(SimpleTestCase):
    def test_unsafe_characters_replaced(self):
        self.assertEqual(sanitize_filename('My Design (final).PNG'), ('my-design-final', '.png'))

    def test_directory_components_dropped(self):
        stem, extension = sanitize_filename('../../etc/passwd')
        self.assertEqual(stem, 'passwd')
        self.assertEqual(extension, '')

    def test_windows_path_dropped(self):
        self.assertEqual(sanitize_filename('C:\\Users\\me\\banner.jpg'), ('banner', '.jpg'))

    def test_empty_stem_falls_back(self):
        self.assertEqual(sanitize_filename('???.png'), ('file', '.png'))

    def test_generated_name_format(self):
        name = file_generate_name('Banner.png')
        self.assertRegex(name, r'^ticket-\d+-[0-9a-f]{6}-banner\.png$')

    def test_same_original_name_never_collides(self):
        names = {file_generate_name('banner.png') for _ in range(50)}
        self.assertEqual(len(names), 50)


class LocalAssetStorageTest(TempPublicRootMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.storage = LocalAssetStorage()

    def test_backed_by_file_system_storage(self):
        self.assertIsInstance(self.storage.file_storage, FileSystemStorage)
        self.assertEqual(self.storage.file_storage.base_url, '/')

    def test_ensure_directory_is_idempotent(self):
        self.storage.ensure_directory('uploads')
        self.storage.ensure_directory('uploads')
        self.assertTrue((self.public_root / 'uploads').is_dir())

    def test_ensure_directory_failure_propagates(self):
        with patch('pathlib.Path.mkdir', side_effect=PermissionError('denied')):
            with self.assertRaises(AssetPersistenceError):
                self.storage.ensure_directory('uploads')

    def test_ensure_directory_outside_root_refused(self):
        with self.assertRaises(ValidationError):
            self.storage.ensure_directory('../outside')

    def test_store_returns_public_path(self):
        self.storage.ensure_directory('uploads')
        stored_path = self.storage.store('uploads', 'Design.png', b'png-bytes')

        self.assertTrue(re.match(r'^/uploads/ticket-\d+-[0-9a-f]{6}-design\.png$', stored_path))
        self.assertEqual(self.public_file(stored_path).read_bytes(), b'png-bytes')

    def test_store_twice_with_same_name_keeps_both(self):
        self.storage.ensure_directory('uploads')
        first = self.storage.store('uploads', 'design.png', b'one')
        second = self.storage.store('uploads', 'design.png', b'two')

        self.assertNotEqual(first, second)
        self.assertEqual(self.public_file(first).read_bytes(), b'one')
        self.assertEqual(self.public_file(second).read_bytes(), b'two')

    def test_store_as_uses_exact_name(self):
        self.storage.ensure_directory('tickets')
        stored_path = self.storage.store_as('tickets', 'qr_ABCDEFGHJKMN.png', b'qr')
        self.assertEqual(stored_path, '/tickets/qr_ABCDEFGHJKMN.png')

    def test_store_as_never_overwrites(self):
        self.storage.ensure_directory('tickets')
        self.storage.store_as('tickets', 'qr_ABCDEFGHJKMN.png', b'first')

        with self.assertRaises(ConflictError) as ctx:
            self.storage.store_as('tickets', 'qr_ABCDEFGHJKMN.png', b'second')

        self.assertEqual(ctx.exception.error_code, 'file_exists')
        self.assertEqual(self.public_file('/tickets/qr_ABCDEFGHJKMN.png').read_bytes(), b'first')
        self.assertEqual(len(list((self.public_root / 'tickets').iterdir())), 1)

    def test_store_as_rejects_unsafe_name(self):
        self.storage.ensure_directory('tickets')
        with self.assertRaises(ValidationError):
            self.storage.store_as('tickets', '../escape.png', b'qr')

    def test_write_failure_raises_asset_persistence_error(self):
        self.storage.ensure_directory('uploads')
        with patch.object(FileSystemStorage, '_save', side_effect=OSError('disk full')):
            with self.assertRaises(AssetPersistenceError):
                self.storage.store('uploads', 'design.png', b'data')

    def test_delete_existing_file(self):
        self.storage.ensure_directory('uploads')
        stored_path = self.storage.store('uploads', 'design.png', b'data')

        self.assertTrue(self.storage.delete(stored_path))
        self.assertFalse(self.storage.file_exists(stored_path))

    def test_delete_missing_file_is_not_an_error(self):
        self.assertFalse(self.storage.delete('/uploads/never-existed.png'))

    def test_delete_swallows_io_errors(self):
        self.storage.ensure_directory('uploads')
        stored_path = self.storage.store('uploads', 'design.png', b'data')

        with patch.object(FileSystemStorage, 'delete', side_effect=PermissionError('busy')):
            with self.assertLogs('apps.shared.storage.local_storage', level='WARNING'):
                self.assertFalse(self.storage.delete(stored_path))

    def test_delete_outside_root_refused(self):
        self.assertFalse(self.storage.delete('/../../etc/passwd'))


class StorageFactoryTest(TempPublicRootMixin, SimpleTestCase):
    def test_local_provider_by_default(self):
        storage = get_storage_service()
        self.assertIsInstance(storage, LocalAssetStorage)
        self.assertEqual(storage.provider_name, 'local')

    def test_unknown_provider_rejected(self):
        with self.assertRaises(ConfigurationError):
            StorageFactory.create_storage_service('s3')
