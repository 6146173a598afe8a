"""
Project board use case: create, browse and enhance posts.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from backend.src.application.dto.lookup_result import LookupResult
from backend.src.application.dto.post_draft import PostDraft
from backend.src.core.entities.project_post import ProjectField, ProjectPost
from backend.src.core.entities.user import PublicProfileView
from backend.src.core.exceptions import InvalidPostError, PostNotFoundError

logger = logging.getLogger(__name__)

SORT_NEWEST = "newest"
SORT_TRENDING = "trending"


class PostService:
    """Manages posts and resolves their authors to public profiles."""

    def __init__(
        self,
        repository,
        store,
        enhancer,
        trending_window_days: int = 7,
        description_max_length: int = 2000,
    ):
        self._repository = repository
        self._store = store
        self._enhancer = enhancer
        self._trending_window = timedelta(days=trending_window_days)
        self._description_max_length = description_max_length

    def _check_length(self, text: str) -> None:
        if self._description_max_length and len(text) > self._description_max_length:
            raise InvalidPostError(
                f"Description is longer than {self._description_max_length} characters"
            )

    async def create_post(self, draft: PostDraft) -> ProjectPost:
        missing = [
            name for name in ("project_name", "description")
            if not (getattr(draft, name) or "").strip()
        ]
        if missing:
            raise InvalidPostError(f"Post is missing: {', '.join(missing)}")
        self._check_length(draft.description.strip())

        post = ProjectPost(
            founder_name=draft.founder_name.strip(),
            founder_id=draft.founder_id,
            project_name=draft.project_name.strip(),
            deadline=draft.deadline,
            description=draft.description.strip(),
            image_url=draft.image_url,
            project_field=draft.project_field,
            stage=draft.stage,
            compensation=draft.compensation,
            roles=[r.strip() for r in draft.roles if r and r.strip()],
        )
        await self._repository.save(post)
        logger.info("Post created: %s (%s)", post.id, post.project_name)
        return post

    async def list_posts(
        self,
        project_field: Optional[ProjectField] = None,
        query: Optional[str] = None,
        sort: str = SORT_NEWEST,
    ) -> list[ProjectPost]:
        posts = await self._repository.list_all()
        if project_field is not None:
            posts = [p for p in posts if p.project_field == project_field]
        if query:
            posts = [p for p in posts if p.matches_query(query)]

        if sort == SORT_TRENDING:
            cutoff = datetime.utcnow() - self._trending_window
            posts = [p for p in posts if p.posted_date >= cutoff]
            posts.sort(key=lambda p: (len(p.roles), p.posted_date), reverse=True)
        elif sort == SORT_NEWEST:
            posts.sort(key=lambda p: p.posted_date, reverse=True)
        else:
            raise ValueError(f"Unknown sort order: {sort}")
        return posts

    async def get_post(self, post_id: str) -> ProjectPost:
        post = await self._repository.get_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    async def get_author_profile(self, post_id: str) -> LookupResult:
        """Public profile of the post's founder.

        Keyed by ``founder_id`` when the post carries one; older posts only
        have a display name, which is matched exactly.
        """
        post = await self.get_post(post_id)
        record = None
        if post.founder_id:
            record = await self._store.find_by_id(post.founder_id)
        if record is None and post.founder_name:
            record = await self._store.find_by_name(post.founder_name)
        return LookupResult.of(PublicProfileView.from_record(record) if record else None)

    async def enhance_description(self, text: str) -> str:
        if not text or not text.strip():
            return text
        self._check_length(text)
        return await self._enhancer.enhance(text)
