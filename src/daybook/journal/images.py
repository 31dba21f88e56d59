"""Image provider contract.

The journal only stores a reference (path or URI) to a photo. Choosing,
copying and deleting image files belongs to whoever implements
:class:`ImageProvider`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

_IMAGE_SUFFIXES = (".jpg", ".jpeg", ".png", ".gif", ".heic", ".webp")


@runtime_checkable
class ImageProvider(Protocol):
    """Anything that can let the user pick a photo."""

    async def pick_image(self) -> str | None:
        """Return a reference to the chosen image, or None if nothing was picked.

        May raise if the underlying picker fails or access is denied.
        """
        ...


class PathImageProvider:
    """Provides an image that already exists on the local filesystem.

    Used by the command line, where the "picker" is a path argument.
    """

    def __init__(self, path: str | Path | None):
        self.path = Path(path).expanduser() if path else None

    async def pick_image(self) -> str | None:
        if self.path is None:
            return None
        if not self.path.is_file():
            raise FileNotFoundError(f"Image not found: {self.path}")
        if self.path.suffix.lower() not in _IMAGE_SUFFIXES:
            raise ValueError(f"Not an image file: {self.path.name}")
        return self.path.resolve().as_uri()
