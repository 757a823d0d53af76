"""
MediaFiles Services Package

- MediafileService: storage of uploaded assets and their provenance records
"""

from apps.mediafiles.services.mediafile_service import MediafileService
from apps.mediafiles.services.mediafile_service import StoredAsset

__all__ = [
    'MediafileService',
    'StoredAsset',
]
