"""In-memory implementation of PostRepositoryPort."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from backend.src.core.entities.project_post import ProjectPost

logger = logging.getLogger(__name__)


class InMemoryPostRepository:
    """Async-safe in-memory post store conforming to :class:`PostRepositoryPort`."""

    def __init__(self, seed: Optional[list[ProjectPost]] = None) -> None:
        self._store: dict[str, ProjectPost] = {p.id: p for p in seed or []}
        self._lock = asyncio.Lock()

    # -- PostRepositoryPort implementation -------------------------------------

    async def save(self, post: ProjectPost) -> ProjectPost:
        """Persist (or overwrite) a post."""
        async with self._lock:
            self._store[post.id] = post
            logger.debug("Saved post %s", post.id)
            return post

    async def get_by_id(self, post_id: str) -> Optional[ProjectPost]:
        async with self._lock:
            post = self._store.get(post_id)
            if post is None:
                logger.debug("Post %s not found", post_id)
            return post

    async def list_all(self) -> list[ProjectPost]:
        async with self._lock:
            return list(self._store.values())

    async def delete(self, post_id: str) -> bool:
        async with self._lock:
            removed = self._store.pop(post_id, None)
            if removed is None:
                logger.warning("Attempted to delete non-existent post %s", post_id)
                return False
            logger.debug("Deleted post %s", post_id)
            return True
