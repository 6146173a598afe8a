"""Inbound port for profile lookup, upsert and account deletion."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.application.dto.lookup_result import LookupResult
    from backend.src.core.entities.user import AuthProvider, UserRecord


@runtime_checkable
class ManageProfileUseCase(Protocol):
    async def find_user(self, provider: AuthProvider, identifier: str) -> LookupResult: ...
    async def upsert_profile(self, record: UserRecord) -> UserRecord: ...
    async def delete_account(self, provider: AuthProvider, identifier: str) -> bool: ...
    async def public_profile_by_name(self, name: str) -> LookupResult: ...
    async def public_profile_by_id(self, user_id: str) -> LookupResult: ...
