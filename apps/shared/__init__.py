"""
Shared utilities and base classes

- Base classes (BaseModel, BaseAPIView)
- Storage (AssetStore and the storage factory)
- Exceptions (business exceptions and the DRF handler)
- Dependency container

Import specific classes directly from their modules:
- from apps.shared.base.base_api_view import BaseAPIView
- from apps.shared.storage.local_storage import LocalAssetStorage
"""

# Empty init to avoid circular imports
