"""Local filesystem implementation of FileStoragePort."""

from __future__ import annotations

import asyncio
import logging
import os
import re
import shutil
from pathlib import Path
from typing import Iterable, Optional

from backend.src.core.exceptions import UploadValidationError
from backend.src.core.value_objects.stored_file import StoredFile

logger = logging.getLogger(__name__)

_OWNER_ID_RE = re.compile(r"^[A-Za-z0-9_\-]{1,64}$")


def sanitize_filename(filename: str) -> str:
    """Sanitize filename to prevent path traversal and invalid characters."""
    # Take only the basename (strip any directory components)
    filename = os.path.basename(filename.replace("\\", "/"))
    filename = filename.replace("\x00", "")
    filename = re.sub(r'[^\w\s\-.]', '_', filename)
    filename = re.sub(r'\.{2,}', '.', filename)
    filename = re.sub(r'_{2,}', '_', filename)
    filename = filename.strip()
    if not filename or filename.startswith('.'):
        filename = "upload" + filename
    return filename


class LocalFileStorage:
    """Implements :class:`FileStoragePort` using the local filesystem.

    Files land in ``{base_dir}/{owner_id}/{filename}`` and are served back
    under ``{url_prefix}/{owner_id}/{filename}``.
    """

    def __init__(
        self,
        base_dir: str | Path,
        url_prefix: str = "/uploads",
        allowed_extensions: Optional[Iterable[str]] = None,
        max_size_bytes: int = 0,
    ) -> None:
        self._base = Path(base_dir).resolve()
        self._base.mkdir(parents=True, exist_ok=True)
        self._url_prefix = url_prefix.rstrip("/")
        self._allowed = {e.lower() for e in allowed_extensions or ()}
        self._max_size = max_size_bytes
        logger.info("LocalFileStorage initialised at %s", self._base)

    @property
    def base_dir(self) -> Path:
        return self._base

    # -- helpers ---------------------------------------------------------------

    def _owner_dir(self, owner_id: str) -> Path:
        if not _OWNER_ID_RE.match(owner_id or ""):
            raise UploadValidationError(f"Invalid owner id: {owner_id!r}")
        return self._base / owner_id

    def _validate(self, filename: str, content: bytes) -> None:
        ext = Path(filename).suffix.lower()
        if self._allowed and ext not in self._allowed:
            raise UploadValidationError(
                f"Unsupported file type '{ext}'. Allowed: {', '.join(sorted(self._allowed))}"
            )
        if self._max_size and len(content) > self._max_size:
            raise UploadValidationError(
                f"File too large. Maximum size: {self._max_size // (1024 * 1024)}MB",
                too_large=True,
            )

    # -- FileStoragePort implementation ----------------------------------------

    async def save_upload(
        self, owner_id: str, filename: str, content: bytes, kind: str = ""
    ) -> StoredFile:
        """Write *content* under the owner's directory and return where it landed."""
        directory = self._owner_dir(owner_id)
        safe_name = sanitize_filename(filename)
        if kind:
            safe_name = f"{sanitize_filename(kind)}_{safe_name}"
        self._validate(safe_name, content)

        target = directory / safe_name
        target.parent.mkdir(parents=True, exist_ok=True)

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, target.write_bytes, content)
        logger.debug("Saved upload %s (%d bytes)", target, len(content))
        return StoredFile(
            path=str(target.relative_to(self._base)),
            url=f"{self._url_prefix}/{owner_id}/{safe_name}",
        )

    def resolve(self, owner_id: str, filename: str) -> Path:
        """Return the path of a stored file, refusing anything outside the owner's directory."""
        directory = self._owner_dir(owner_id)
        target = (directory / filename).resolve()
        if directory.resolve() not in target.parents:
            raise UploadValidationError(f"Invalid file name: {filename!r}")
        return target

    async def delete_owner_files(self, owner_id: str) -> int:
        """Delete every file stored for *owner_id*; returns how many were removed."""
        directory = self._owner_dir(owner_id)
        if not directory.exists():
            logger.debug("No uploads to delete for %s", owner_id)
            return 0
        count = sum(1 for p in directory.rglob("*") if p.is_file())
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, shutil.rmtree, directory)
        logger.debug("Deleted %d uploads for %s", count, owner_id)
        return count
