"""Port for checking an asserted provider identity."""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.entities.user import AuthProvider
    from backend.src.core.entities.verified_identity import VerifiedIdentity


@runtime_checkable
class IdentityVerifierPort(Protocol):
    async def verify(
        self, provider: AuthProvider, identifier: str, token: Optional[str] = None
    ) -> VerifiedIdentity: ...
