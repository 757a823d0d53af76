"""
Storage backends and utilities

Import directly from submodules:
- from .base import AbstractStorageService
- from .local_storage import LocalAssetStorage
- from .factory import StorageFactory
"""
