"""Port for storing user-uploaded documents."""
from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.value_objects.stored_file import StoredFile


@runtime_checkable
class FileStoragePort(Protocol):
    async def save_upload(self, owner_id: str, filename: str, content: bytes, kind: str = "") -> StoredFile: ...
    def resolve(self, owner_id: str, filename: str) -> Path: ...
    async def delete_owner_files(self, owner_id: str) -> int: ...
