"""
base.py

Defines the BlobStore abstract class: an opaque durable slot the registry is
saved to and loaded from.
"""

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """
    Abstract base class for registry backing stores.

    Implementations store a single opaque blob and know nothing about its
    format.
    """

    @abstractmethod
    def read(self) -> bytes:
        """
        Return the stored blob.

        Raises:
            StoreNotFoundError: If nothing has been written yet.
            PersistenceUnavailableError: If the store cannot be read.
        """

    @abstractmethod
    def write(self, blob: bytes) -> None:
        """
        Replace the stored blob.

        Raises:
            PersistenceUnavailableError: If the store cannot be written.
        """
