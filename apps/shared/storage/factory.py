# apps/shared/storage/factory.py
from django.conf import settings

from apps.shared.exceptions import ConfigurationError

from .base import AbstractStorageService
from .local_storage import LocalAssetStorage


class StorageFactory:
    """
    Factory for storage services.
    Strategy pattern over the supported storage providers.
    """

    _providers = {
        'local': LocalAssetStorage,
    }

    @classmethod
    def create_storage_service(cls, provider: str, **kwargs) -> AbstractStorageService:
        """
        Create the storage service for ``provider``.

        Args:
            provider: Storage provider name ('local')
            **kwargs: Provider-specific constructor arguments

        Raises:
            ConfigurationError: If the provider is not supported
        """
        if provider not in cls._providers:
            supported = ', '.join(cls._providers.keys())
            raise ConfigurationError(
                f'Unsupported storage provider: {provider}. Supported providers: {supported}'
            )

        service_class = cls._providers[provider]
        return service_class(**kwargs)


def get_storage_service(provider: str | None = None, **kwargs) -> AbstractStorageService:
    """Storage service for ``provider``, defaulting to the ASSET_STORAGE_PROVIDER setting."""
    return StorageFactory.create_storage_service(
        provider or getattr(settings, 'ASSET_STORAGE_PROVIDER', 'local'), **kwargs
    )
