from .base import BlobStore
from .file_store import FileBlobStore
from .memory_store import MemoryBlobStore
from .codec import encode_registry, decode_registry, FORMAT_VERSION
from .manager import RegistryPersistence

__all__ = [
    "BlobStore",
    "FileBlobStore",
    "MemoryBlobStore",
    "encode_registry",
    "decode_registry",
    "FORMAT_VERSION",
    "RegistryPersistence",
]
