"""
Profile management use case: lookup, upsert, account deletion.
"""
from __future__ import annotations

import logging

from backend.src.application.dto.lookup_result import LookupResult
from backend.src.core.entities.user import AuthProvider, PublicProfileView, UserRecord
from backend.src.core.exceptions import UploadValidationError

logger = logging.getLogger(__name__)


class ProfileService:
    """Thin orchestration over the identity store and blob storage."""

    def __init__(self, store, file_storage=None):
        self._store = store
        self._file_storage = file_storage

    async def find_user(self, provider: AuthProvider, identifier: str) -> LookupResult:
        record = await self._store.find_by_identity(provider, identifier.strip())
        return LookupResult.of(record)

    async def upsert_profile(self, record: UserRecord) -> UserRecord:
        stored = await self._store.upsert(record)
        logger.info("Profile upserted: %s (%s)", stored.id, stored.provider.value)
        return stored

    async def delete_account(self, provider: AuthProvider, identifier: str) -> bool:
        identifier = identifier.strip()
        record = await self._store.find_by_identity(provider, identifier)
        deleted = await self._store.delete(provider, identifier)
        if not deleted:
            logger.info("Delete requested for unknown %s identity", provider.value)
            return False

        if record is not None and self._file_storage is not None:
            await self._remove_uploads(record.id)
        logger.info("Account deleted and identifier blacklisted: %s", record.id if record else "?")
        return True

    async def _remove_uploads(self, user_id: str) -> None:
        """Best-effort cleanup; the account is already gone when this runs."""
        try:
            removed = await self._file_storage.delete_owner_files(user_id)
        except (UploadValidationError, OSError) as exc:
            logger.warning("Could not remove uploads for deleted user %s: %s", user_id, exc)
            return
        logger.debug("Removed %d uploaded files for user %s", removed, user_id)

    async def public_profile_by_name(self, name: str) -> LookupResult:
        record = await self._store.find_by_name(name.strip())
        return LookupResult.of(PublicProfileView.from_record(record) if record else None)

    async def public_profile_by_id(self, user_id: str) -> LookupResult:
        record = await self._store.find_by_id(user_id)
        return LookupResult.of(PublicProfileView.from_record(record) if record else None)
