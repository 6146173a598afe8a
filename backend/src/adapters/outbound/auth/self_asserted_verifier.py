"""Self-asserted identity verifier.

Trusts the identifier the client typed in. This is the default: there is
no real OAuth handshake, so anyone who knows an identifier can claim it.
"""
from __future__ import annotations

import logging
from typing import Optional

from backend.src.core.entities.user import AuthProvider
from backend.src.core.entities.verified_identity import VerifiedIdentity
from backend.src.core.exceptions import IdentityVerificationError

logger = logging.getLogger(__name__)


class SelfAssertedVerifier:
    """Accepts any non-blank identifier and ignores the credential."""

    async def verify(
        self, provider: AuthProvider, identifier: str, token: Optional[str] = None
    ) -> VerifiedIdentity:
        identifier = (identifier or "").strip()
        if not identifier:
            raise IdentityVerificationError("An identifier is required")
        logger.debug("SelfAssertedVerifier: accepting %s identifier", provider.value)
        return VerifiedIdentity(provider=provider, provider_id=identifier)
