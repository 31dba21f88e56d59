"""
Process-local storage backend.

Keeps values in a dict. Useful for tests and throwaway sessions; nothing
survives the process.
"""

from datetime import datetime

from .base import StorageBackend, StorageKeyError, StorageMetadata
from .compression import CompressionType, compress_bytes, decompress_bytes


class MemoryStorage(StorageBackend):
    """In-memory storage backend."""

    def __init__(self, **config):
        super().__init__(**config)
        self._data: dict[str, tuple[bytes, CompressionType]] = {}

    async def save(self, key: str, data: bytes, compress: bool = False) -> StorageMetadata:
        compression = CompressionType.GZIP if compress else CompressionType.NONE
        payload = compress_bytes(data, compression)
        # A single dict assignment is the atomic swap.
        self._data[key] = (payload, compression)
        return StorageMetadata(
            key=key,
            size=len(payload),
            modified_at=datetime.now(),
            compression=compression.value if compression != CompressionType.NONE else None,
        )

    async def load(self, key: str) -> bytes:
        try:
            payload, compression = self._data[key]
        except KeyError:
            raise StorageKeyError(f"Key not found: {key}") from None
        return decompress_bytes(payload, compression)

    async def exists(self, key: str) -> bool:
        return key in self._data

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None
