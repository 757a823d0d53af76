from typing import Any

from apps.mediafiles.models import FileAssetRecord
from apps.shared.decorators.database import handle_db_errors


class FileAssetRecordDAL:
    """Data Access Layer for FileAssetRecord model operations"""

    @handle_db_errors(operation_type='create', model_name='FileAssetRecord')
    def create_record(self, record_data: dict[str, Any]) -> FileAssetRecord:
        return FileAssetRecord.objects.create(**record_data)
