# apps/shared/storage/base.py
from abc import ABC
from abc import abstractmethod


class AbstractStorageService(ABC):
    """
    Abstract file store.

    Paths handed out by ``store``/``store_as`` are public paths relative to the
    store root (``/uploads/<name>``), suitable for direct external reference.
    """

    @abstractmethod
    def ensure_directory(self, directory: str) -> None:
        """
        Create ``directory`` (and parents) below the store root if absent.

        Idempotent. Raises AssetPersistenceError when the directory cannot be
        created; nothing can be written below it afterwards.
        """

    @abstractmethod
    def store(self, directory: str, suggested_name: str, data: bytes) -> str:
        """
        Write ``data`` under a collision-free name derived from ``suggested_name``.

        Args:
            directory: Directory relative to the store root
            suggested_name: Client-provided filename; sanitized before use
            data: File content

        Returns:
            str: Public path of the stored file
        """

    @abstractmethod
    def store_as(self, directory: str, filename: str, data: bytes) -> str:
        """
        Create ``filename`` exclusively and return its public path.

        Raises ConflictError when the name is already taken; an existing file
        is never overwritten.
        """

    @abstractmethod
    def delete(self, stored_path: str) -> bool:
        """
        Best-effort removal of a stored file.

        Returns:
            bool: True if a file was removed. A missing file is not an error;
            other failures are logged and reported as False, never raised.
        """

    @abstractmethod
    def file_exists(self, stored_path: str) -> bool:
        """Check whether a stored file is present."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Storage provider name."""
