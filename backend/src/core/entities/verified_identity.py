"""Identity asserted by a client and accepted by an identity verifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from backend.src.core.entities.user import AuthProvider


@dataclass(frozen=True)
class VerifiedIdentity:
    """``(provider, provider_id)`` plus whatever the provider told us.

    With the self-asserted verifier nothing beyond the identifier is known.
    """

    provider: AuthProvider
    provider_id: str
    name: str = ""
    email: str = ""
    avatar_url: str = ""
    verified: bool = False
    subject: Optional[str] = None
