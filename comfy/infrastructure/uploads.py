"""Storage for uploaded product images.

Writes uploaded files to the configured upload directory under a
generated unique name and reports the stored path.
"""

from pathlib import Path
from uuid import uuid4

import structlog
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from comfy.infrastructure.config import settings

logger = structlog.get_logger()


class UploadStorage:
    """Persists uploaded files on the local filesystem.

    Example usage:
        storage = UploadStorage("uploads")
        paths = await storage.save_all(files)
    """

    def __init__(self, base_dir: str | Path) -> None:
        """Initialize storage.

        Args:
            base_dir: Directory uploaded files are written to.
        """
        self.base_dir = Path(base_dir)

    def _target_path(self, filename: str | None) -> Path:
        """Build a unique target path keeping the original extension."""
        suffix = Path(filename).suffix if filename else ""
        return self.base_dir / f"{uuid4().hex}{suffix}"

    def _write(self, target: Path, content: bytes) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)

    async def save(self, file: UploadFile) -> str:
        """Save a single uploaded file.

        Args:
            file: Uploaded file.

        Returns:
            Stored path of the file.
        """
        target = self._target_path(file.filename)
        content = await file.read()
        await run_in_threadpool(self._write, target, content)

        logger.debug(
            "Upload stored",
            filename=file.filename,
            path=str(target),
            size=len(content),
        )
        return str(target)

    async def save_all(self, files: list[UploadFile]) -> list[str]:
        """Save uploaded files, preserving upload order.

        Args:
            files: Uploaded files.

        Returns:
            Stored paths in the same order as the files.
        """
        return [await self.save(file) for file in files]

    async def discard(self, paths: list[str]) -> None:
        """Delete stored files; paths already gone are skipped.

        Args:
            paths: Stored paths returned by ``save``/``save_all``.
        """
        for path in paths:
            await run_in_threadpool(Path(path).unlink, missing_ok=True)

        if paths:
            logger.debug("Uploads discarded", count=len(paths))


def get_upload_storage() -> UploadStorage:
    """Get upload storage for the configured directory."""
    return UploadStorage(settings.upload_dir)
