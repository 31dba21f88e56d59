"""
Local filesystem storage backend.

Values are written to a temporary sibling file, fsynced, then moved over the
target with ``os.replace`` so readers never observe a half-written document.
"""

import asyncio
import os
import uuid
from datetime import datetime
from pathlib import Path

import aiofiles
import aiofiles.os
from loguru import logger

from .base import StorageBackend, StorageError, StorageKeyError, StorageMetadata, StoragePermissionError
from .compression import CompressionType, compress_bytes, decompress_bytes


class LocalStorage(StorageBackend):
    """Local filesystem storage backend."""

    def __init__(self, base_path: str = "~/.daybook-data/storage", **config):
        super().__init__(**config)
        self.base_path = Path(base_path).expanduser().resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Resolve a storage key to an absolute path under ``base_path``.

        Rejects unsafe keys (absolute paths, traversal, empty keys, and
        backslash-delimited paths) to prevent writes outside ``base_path``.
        """
        raw_key = key.strip()
        if not raw_key:
            raise StoragePermissionError("Storage key cannot be empty.")
        if "\x00" in raw_key:
            raise StoragePermissionError("Storage key cannot contain null bytes.")
        if "\\" in raw_key:
            raise StoragePermissionError("Storage key cannot contain backslashes. Use '/' separators.")

        key_path = Path(raw_key)
        if key_path.is_absolute() or raw_key.startswith("~"):
            raise StoragePermissionError(f"Unsafe storage key '{key}': absolute paths are not allowed.")

        full_path = (self.base_path / key_path).resolve()
        try:
            full_path.relative_to(self.base_path)
        except ValueError as e:
            raise StoragePermissionError(f"Unsafe storage key '{key}': path traversal is not allowed.") from e
        return full_path

    @staticmethod
    def _gz_path(path: Path) -> Path:
        return path.with_name(path.name + ".gz")

    async def save(self, key: str, data: bytes, compress: bool = False) -> StorageMetadata:
        path = self._get_full_path(key)
        compression = CompressionType.GZIP if compress else CompressionType.NONE
        target = self._gz_path(path) if compress else path
        stale = path if compress else self._gz_path(path)
        payload = compress_bytes(data, compression)

        tmp_path = target.with_name(f".{target.name}.{uuid.uuid4().hex}.tmp")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(payload)
                await f.flush()
                await asyncio.to_thread(os.fsync, f.fileno())
            await aiofiles.os.replace(tmp_path, target)
        except PermissionError as e:
            await self._discard(tmp_path)
            raise StoragePermissionError(f"Cannot write to {target}: {e}") from e
        except OSError as e:
            await self._discard(tmp_path)
            raise StorageError(f"Cannot write to {target}: {e}") from e

        # The other encoding of this key is now out of date.
        await self._discard(stale)

        stat = await aiofiles.os.stat(target)
        logger.debug(f"Saved {stat.st_size} bytes to {target}")
        return StorageMetadata(
            key=key,
            size=stat.st_size,
            modified_at=datetime.fromtimestamp(stat.st_mtime),
            compression=compression.value if compression != CompressionType.NONE else None,
        )

    async def load(self, key: str) -> bytes:
        path = self._get_full_path(key)

        if not path.exists() and self._gz_path(path).exists():
            path = self._gz_path(path)
            compressed = True
        else:
            compressed = False

        if not path.exists():
            raise StorageKeyError(f"Key not found: {key}")

        try:
            async with aiofiles.open(path, "rb") as f:
                data = await f.read()
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot read {path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

        if compressed:
            try:
                data = decompress_bytes(data, CompressionType.GZIP)
            except (OSError, EOFError) as e:
                raise StorageError(f"Corrupt compressed data in {path}: {e}") from e

        return data

    async def exists(self, key: str) -> bool:
        path = self._get_full_path(key)
        return path.exists() or self._gz_path(path).exists()

    async def delete(self, key: str) -> bool:
        path = self._get_full_path(key)
        deleted = False
        for p in (path, self._gz_path(path)):
            if p.exists():
                await aiofiles.os.remove(p)
                deleted = True
        return deleted

    async def _discard(self, path: Path) -> None:
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove {path}: {e}")
