"""Inbound port for the project board."""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.application.dto.lookup_result import LookupResult
    from backend.src.application.dto.post_draft import PostDraft
    from backend.src.core.entities.project_post import ProjectField, ProjectPost


@runtime_checkable
class ManagePostsUseCase(Protocol):
    async def create_post(self, draft: PostDraft) -> ProjectPost: ...
    async def list_posts(self, project_field: Optional[ProjectField] = None, query: Optional[str] = None, sort: str = "newest") -> list[ProjectPost]: ...
    async def get_post(self, post_id: str) -> ProjectPost: ...
    async def get_author_profile(self, post_id: str) -> LookupResult: ...
    async def enhance_description(self, text: str) -> str: ...
