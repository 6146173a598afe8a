"""In-memory implementation of IdentityStorePort for tests and local runs."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from backend.src.core.entities.user import AuthProvider, UserRecord
from backend.src.core.exceptions import IdentityBlacklistedError

logger = logging.getLogger(__name__)


class InMemoryIdentityStore:
    """Dict-backed identity store keyed by ``(provider, provider_id)``.

    Records are copied on the way in and out so callers cannot mutate
    stored state.
    """

    def __init__(self) -> None:
        self._records: dict[tuple[str, str], UserRecord] = {}
        self._blacklist: list[str] = []
        self._lock = asyncio.Lock()

    @staticmethod
    def _key(provider: AuthProvider | str, provider_id: str) -> tuple[str, str]:
        parsed = AuthProvider.parse(provider)
        return (parsed.value if parsed else ""), (provider_id or "").strip()

    # -- IdentityStorePort implementation --------------------------------------

    async def find_by_identity(
        self, provider: AuthProvider, provider_id: str
    ) -> Optional[UserRecord]:
        async with self._lock:
            record = self._records.get(self._key(provider, provider_id))
            return replace(record) if record else None

    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        async with self._lock:
            for record in self._records.values():
                if user_id and record.id == user_id:
                    return replace(record)
            return None

    async def find_by_name(self, name: str) -> Optional[UserRecord]:
        name = (name or "").strip()
        async with self._lock:
            for record in self._records.values():
                if name and record.name == name:
                    return replace(record)
            return None

    async def upsert(self, record: UserRecord) -> UserRecord:
        record.validate()
        async with self._lock:
            if record.provider_id in self._blacklist:
                raise IdentityBlacklistedError(record.provider_id)

            key = record.identity_key
            now = datetime.utcnow()
            existing = self._records.get(key)
            if existing is not None:
                stored = record.merged_over(existing, now)
            else:
                stored = replace(record, created_at=now, updated_at=now)
            self._records[key] = stored
            logger.debug("Upserted user %s", stored.id)
            return replace(stored)

    async def delete(self, provider: AuthProvider, provider_id: str) -> bool:
        async with self._lock:
            removed = self._records.pop(self._key(provider, provider_id), None)
            if removed is None:
                return False
            if removed.provider_id not in self._blacklist:
                self._blacklist.append(removed.provider_id)
            logger.debug("Deleted user %s", removed.id)
            return True

    async def is_blacklisted(self, identifier: str) -> bool:
        async with self._lock:
            return (identifier or "").strip() in self._blacklist

    async def add_to_blacklist(self, identifier: str) -> None:
        identifier = (identifier or "").strip()
        async with self._lock:
            if identifier and identifier not in self._blacklist:
                self._blacklist.append(identifier)

    async def list_all(self) -> list[UserRecord]:
        async with self._lock:
            return [replace(r) for r in self._records.values()]
