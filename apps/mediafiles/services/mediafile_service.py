import logging
import mimetypes
from dataclasses import dataclass
from pathlib import PurePosixPath

from django.conf import settings
from django.db import DatabaseError
from django.db import transaction

from apps.mediafiles.dal import FileAssetRecordDAL
from apps.mediafiles.models import FileAssetRecord
from apps.shared.exceptions import AppError
from apps.shared.exceptions import ValidationError
from apps.shared.storage.base import AbstractStorageService
from apps.shared.storage.factory import get_storage_service

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = 'application/octet-stream'


@dataclass(frozen=True)
class StoredAsset:
    """Reference to an uploaded file after it has been written to the store"""

    stored_name: str
    original_name: str
    stored_path: str
    size: int
    media_type: str


class MediafileService:
    """
    Storage of uploaded binary assets and their provenance records.
    """

    def __init__(self, storage: AbstractStorageService = None, dal: FileAssetRecordDAL = None):
        self.storage = storage or get_storage_service()
        self.dal = dal or FileAssetRecordDAL()

    def store_design_asset(self, uploaded_file) -> StoredAsset:
        """
        Validate and write an uploaded ticket design.

        Args:
            uploaded_file: Django ``UploadedFile``

        Raises:
            ValidationError: If the file is empty or exceeds MAX_DESIGN_UPLOAD_SIZE
            AssetPersistenceError: If the file cannot be written
        """
        self.validate_upload(uploaded_file)

        original_name = uploaded_file.name or 'design'
        data = b''.join(uploaded_file.chunks())

        self.storage.ensure_directory(settings.UPLOADS_DIR)
        stored_path = self.storage.store(settings.UPLOADS_DIR, original_name, data)

        asset = StoredAsset(
            stored_name=PurePosixPath(stored_path).name,
            original_name=original_name,
            stored_path=stored_path,
            size=len(data),
            media_type=self._get_media_type(uploaded_file),
        )
        logger.info(f'Design asset stored at {asset.stored_path} ({asset.size} bytes)')
        return asset

    def validate_upload(self, uploaded_file) -> None:
        max_size = settings.MAX_DESIGN_UPLOAD_SIZE
        size = uploaded_file.size or 0

        if size == 0:
            raise ValidationError(
                'Uploaded file is empty',
                field_errors={'ticket_design': ['The submitted file is empty.']},
                error_code='empty_upload',
            )
        if size > max_size:
            raise ValidationError(
                f'File too large. Maximum size is {max_size} bytes',
                field_errors={'ticket_design': [f'File exceeds {max_size} bytes.']},
                error_code='upload_too_large',
                context={'size': size, 'max_size': max_size},
            )

    def record_upload(
        self,
        asset: StoredAsset,
        related_id: int,
        purpose: str = FileAssetRecord.Purpose.TICKET_DESIGN,
    ) -> FileAssetRecord | None:
        """
        Best-effort provenance record for a stored asset.

        A failure is logged and reported as None; it never affects the caller's
        transaction, since the insert runs in its own savepoint.
        """
        try:
            with transaction.atomic():
                record = self.dal.create_record(
                    {
                        'stored_name': asset.stored_name,
                        'original_name': asset.original_name,
                        'stored_path': asset.stored_path,
                        'size': asset.size,
                        'media_type': asset.media_type,
                        'purpose': purpose,
                        'related_id': related_id,
                    }
                )
        except (AppError, DatabaseError) as e:
            logger.warning(
                f'Failed to record upload of {asset.stored_path}: {e}',
                extra={'stored_path': asset.stored_path, 'related_id': related_id},
            )
            return None

        logger.debug(f'Recorded upload {record.pk} for {asset.stored_path}')
        return record

    def delete_asset(self, stored_path: str) -> bool:
        if not stored_path:
            return False
        return self.storage.delete(stored_path)

    def _get_media_type(self, uploaded_file) -> str:
        content_type = getattr(uploaded_file, 'content_type', None)
        if content_type:
            return content_type
        guessed, _ = mimetypes.guess_type(uploaded_file.name or '')
        return guessed or DEFAULT_MEDIA_TYPE
