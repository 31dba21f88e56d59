"""Tests for daybook.journal.images."""

import pytest

from daybook.journal.images import ImageProvider, PathImageProvider


class TestPathImageProvider:
    def test_satisfies_protocol(self):
        assert isinstance(PathImageProvider(None), ImageProvider)

    @pytest.mark.asyncio
    async def test_no_path_means_no_image(self):
        assert await PathImageProvider(None).pick_image() is None

    @pytest.mark.asyncio
    async def test_existing_image_returns_file_uri(self, tmp_path):
        photo = tmp_path / "sunset.JPG"
        photo.write_bytes(b"\xff\xd8\xff")
        uri = await PathImageProvider(photo).pick_image()
        assert uri.startswith("file://")
        assert uri.endswith("sunset.JPG")

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await PathImageProvider(tmp_path / "gone.png").pick_image()

    @pytest.mark.asyncio
    async def test_non_image_raises(self, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_text("hi")
        with pytest.raises(ValueError, match="Not an image"):
            await PathImageProvider(notes).pick_image()
