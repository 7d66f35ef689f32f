"""
file_store.py

Stores the registry blob in a single file, e.g. on a mounted SD card.
"""

import os
import tempfile
from pathlib import Path

from sensor_channels.exceptions import PersistenceUnavailableError, StoreNotFoundError
from sensor_channels.persistence.base import BlobStore


class FileBlobStore(BlobStore):
    """
    File-backed blob store. Writes go to a temporary file in the same
    directory which is then renamed over the target, so a crash mid-write
    leaves the previous blob intact.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def read(self) -> bytes:
        try:
            with open(self.path, "rb") as f:
                return f.read()
        except FileNotFoundError as e:
            raise StoreNotFoundError(f"No saved registry at {self.path}") from e
        except OSError as e:
            raise PersistenceUnavailableError(f"Failed reading {self.path}: {e}") from e

    def write(self, blob: bytes) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            with os.fdopen(fd, "wb") as f:
                f.write(blob)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceUnavailableError(f"Failed writing {self.path}: {e}") from e
