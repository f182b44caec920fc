"""Tests for uploaded image storage."""

import io
from pathlib import Path

import pytest
from fastapi import UploadFile

from comfy.infrastructure import uploads
from comfy.infrastructure.uploads import UploadStorage


def make_upload(filename: str | None, content: bytes) -> UploadFile:
    """Create an in-memory upload."""
    return UploadFile(file=io.BytesIO(content), filename=filename)


class TestUploadStorage:
    """Tests for UploadStorage."""

    @pytest.mark.asyncio
    async def test_save_keeps_extension_and_content(self, tmp_path: Path) -> None:
        """Files get unique names with their original suffix."""
        storage = UploadStorage(tmp_path / "uploads")

        path = Path(await storage.save(make_upload("photo.webp", b"pixels")))

        assert path.parent == tmp_path / "uploads"
        assert path.suffix == ".webp"
        assert path.name != "photo.webp"
        assert path.read_bytes() == b"pixels"

    @pytest.mark.asyncio
    async def test_save_all_preserves_order(self, tmp_path: Path) -> None:
        """Stored paths follow upload order."""
        storage = UploadStorage(tmp_path)

        paths = await storage.save_all(
            [make_upload("a.png", b"a"), make_upload("b.png", b"b"), make_upload("c.png", b"c")]
        )

        assert [Path(p).read_bytes() for p in paths] == [b"a", b"b", b"c"]
        assert len(set(paths)) == 3

    @pytest.mark.asyncio
    async def test_missing_filename(self, tmp_path: Path) -> None:
        """Uploads without a filename are stored without a suffix."""
        storage = UploadStorage(tmp_path)

        path = Path(await storage.save(make_upload(None, b"x")))

        assert path.suffix == ""

    @pytest.mark.asyncio
    async def test_discard_removes_files(self, tmp_path: Path) -> None:
        """Discarded paths are deleted; missing ones are skipped."""
        storage = UploadStorage(tmp_path)
        paths = await storage.save_all([make_upload("a.png", b"a"), make_upload("b.png", b"b")])

        await storage.discard([*paths, str(tmp_path / "gone.png")])

        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_file_writes_run_in_threadpool(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Disk writes are handed to the worker threadpool."""
        calls = []

        async def recording_threadpool(func, *args, **kwargs):
            calls.append(func)
            return func(*args, **kwargs)

        monkeypatch.setattr(uploads, "run_in_threadpool", recording_threadpool)
        storage = UploadStorage(tmp_path)

        await storage.save(make_upload("a.png", b"a"))

        assert calls == [storage._write]
