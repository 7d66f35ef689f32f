from typing import Optional

from sensor_channels.exceptions import StoreNotFoundError
from sensor_channels.persistence.base import BlobStore


class MemoryBlobStore(BlobStore):
    """In-process blob store for simulation and tests."""

    def __init__(self, blob: Optional[bytes] = None) -> None:
        self.blob = blob

    def read(self) -> bytes:
        if self.blob is None:
            raise StoreNotFoundError("Nothing saved yet")
        return self.blob

    def write(self, blob: bytes) -> None:
        self.blob = bytes(blob)
