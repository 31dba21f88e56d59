"""
Storage backends for daybook.

Provides an async key -> bytes store with atomic replacement, optional gzip
compression, and a pluggable backend interface (local filesystem by default).
"""

from .base import (
    StorageBackend,
    StorageError,
    StorageKeyError,
    StorageMetadata,
    StoragePermissionError,
)
from .compression import CompressionType, compress_bytes, decompress_bytes
from .local import LocalStorage
from .memory import MemoryStorage

__all__ = [
    "CompressionType",
    "LocalStorage",
    "MemoryStorage",
    "StorageBackend",
    "StorageError",
    "StorageKeyError",
    "StorageMetadata",
    "StoragePermissionError",
    "compress_bytes",
    "decompress_bytes",
]
