"""Port for project post persistence."""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.entities.project_post import ProjectPost


@runtime_checkable
class PostRepositoryPort(Protocol):
    async def save(self, post: ProjectPost) -> ProjectPost: ...
    async def get_by_id(self, post_id: str) -> Optional[ProjectPost]: ...
    async def list_all(self) -> list[ProjectPost]: ...
    async def delete(self, post_id: str) -> bool: ...
