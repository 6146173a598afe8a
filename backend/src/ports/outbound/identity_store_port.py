"""Port for the durable identity store."""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.entities.user import AuthProvider, UserRecord


@runtime_checkable
class IdentityStorePort(Protocol):
    """User records keyed by ``(provider, provider_id)`` plus the blacklist.

    Implementations serialize all mutating operations. ``upsert`` raises
    ``InvalidProfileError`` before consulting the blacklist and
    ``IdentityBlacklistedError`` before writing anything.
    """

    async def find_by_identity(self, provider: AuthProvider, provider_id: str) -> Optional[UserRecord]: ...
    async def find_by_id(self, user_id: str) -> Optional[UserRecord]: ...
    async def find_by_name(self, name: str) -> Optional[UserRecord]: ...
    async def upsert(self, record: UserRecord) -> UserRecord: ...
    async def delete(self, provider: AuthProvider, provider_id: str) -> bool: ...
    async def is_blacklisted(self, identifier: str) -> bool: ...
    async def add_to_blacklist(self, identifier: str) -> None: ...
    async def list_all(self) -> list[UserRecord]: ...
