import logging
import secrets
import time
from pathlib import Path
from pathlib import PurePosixPath

from django.conf import settings
from django.core.exceptions import SuspiciousFileOperation
from django.core.files.base import ContentFile
from django.core.files.storage import FileSystemStorage
from django.utils.text import slugify

from apps.shared.exceptions import AssetPersistenceError
from apps.shared.exceptions import ConflictError
from apps.shared.exceptions import ValidationError
from apps.shared.storage.base import AbstractStorageService

logger = logging.getLogger(__name__)

FILE_MODE = 0o644
DIRECTORY_MODE = 0o755


def sanitize_filename(original_file_name: str) -> tuple[str, str]:
    """Split a client filename into a slugified stem and a lowercase extension."""
    path = PurePosixPath(original_file_name.replace('\\', '/'))
    stem = slugify(path.stem) or 'file'
    extension = slugify(path.suffix.lstrip('.'))
    return stem, f'.{extension}' if extension else ''


def file_generate_name(original_file_name: str, prefix: str = 'ticket') -> str:
    """``<prefix>-<millis>-<random>-<stem><ext>``"""
    stem, extension = sanitize_filename(original_file_name)
    return f'{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(3)}-{stem}{extension}'


class LocalAssetStorage(AbstractStorageService):
    """
    File store rooted at the public directory served to clients.

    Backed by Django's ``FileSystemStorage`` with ``base_url='/'``, so the
    public path of a stored file is its storage name with a leading slash
    (``/uploads/<name>``, ``/tickets/qr_<TOKEN>.png``).
    """

    def __init__(self, root: str | Path | None = None):
        self.root = Path(root or settings.PUBLIC_ROOT)
        self.file_storage = FileSystemStorage(
            location=self.root,
            base_url='/',
            file_permissions_mode=FILE_MODE,
            directory_permissions_mode=DIRECTORY_MODE,
        )

    @property
    def provider_name(self) -> str:
        return 'local'

    def ensure_directory(self, directory: str) -> None:
        target = Path(self._path(directory))
        try:
            target.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f'Failed to create directory {target}: {e}')
            raise AssetPersistenceError(
                f'Cannot create directory {directory}', context={'directory': str(target)}
            ) from e
        logger.debug(f'Directory ready: {target}')

    def store(self, directory: str, suggested_name: str, data: bytes) -> str:
        name = self._name(directory, file_generate_name(suggested_name))
        return self._save(name, data)

    def store_as(self, directory: str, filename: str, data: bytes) -> str:
        """
        Create ``filename`` exclusively; an existing file is never overwritten.

        Raises:
            ValidationError: If ``filename`` is not a plain safe name
            ConflictError: If a file with that name already exists
        """
        try:
            valid = self.file_storage.get_valid_name(filename)
        except SuspiciousFileOperation:
            valid = None
        if valid != filename:
            raise ValidationError(f'Unsafe filename: {filename}', error_code='unsafe_filename')

        name = self._name(directory, filename)
        if self.file_storage.get_available_name(name) != name:
            raise self._name_taken(name)

        saved_name = self._save_name(name, data)
        if saved_name != name:
            # lost a race for the name; drop our renamed copy
            self.file_storage.delete(saved_name)
            raise self._name_taken(name)

        return self.file_storage.url(saved_name)

    def delete(self, stored_path: str) -> bool:
        name = stored_path.lstrip('/')
        try:
            if not self.file_storage.exists(name):
                logger.debug(f'File already absent: {stored_path}')
                return False
            self.file_storage.delete(name)
        except SuspiciousFileOperation:
            logger.warning(f'Refusing to delete path outside store root: {stored_path}')
            return False
        except OSError as e:
            logger.warning(
                f'Failed to delete file {stored_path}: {e}',
                extra={'stored_path': stored_path},
            )
            return False

        logger.info(f'Deleted file: {stored_path}')
        return True

    def file_exists(self, stored_path: str) -> bool:
        try:
            return self.file_storage.exists(stored_path.lstrip('/'))
        except SuspiciousFileOperation:
            return False

    def _save(self, name: str, data: bytes) -> str:
        return self.file_storage.url(self._save_name(name, data))

    def _save_name(self, name: str, data: bytes) -> str:
        try:
            saved_name = self.file_storage.save(name, ContentFile(data))
        except SuspiciousFileOperation as e:
            raise ValidationError(f'Path outside store root: {name}', error_code='unsafe_path') from e
        except OSError as e:
            logger.error(f'Failed to write file {name}: {e}')
            raise AssetPersistenceError(f'Failed to save file {name}', context={'name': name}) from e

        logger.debug(f'File saved to {saved_name} ({len(data)} bytes)')
        return saved_name

    def _path(self, directory: str) -> str:
        try:
            return self.file_storage.path(directory.strip('/'))
        except SuspiciousFileOperation as e:
            raise ValidationError(f'Directory outside store root: {directory}', error_code='unsafe_path') from e

    @staticmethod
    def _name(directory: str, filename: str) -> str:
        return str(PurePosixPath(directory.strip('/'), filename))

    @staticmethod
    def _name_taken(name: str) -> ConflictError:
        return ConflictError(f'File {name} already exists', error_code='file_exists', context={'name': name})
