"""OAuth token verifier.

Checks a Google ID token against the tokeninfo endpoint, or a Facebook
access token against the Graph API, before accepting the identifier.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from backend.src.core.entities.user import AuthProvider
from backend.src.core.entities.verified_identity import VerifiedIdentity
from backend.src.core.exceptions import IdentityVerificationError

logger = logging.getLogger(__name__)

GOOGLE_TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"
FACEBOOK_GRAPH_URL = "https://graph.facebook.com"


def _facebook_identifier_matches(identifier: str, user: dict[str, Any]) -> bool:
    """The identifier must be the token owner's Graph id or profile link."""
    owned = {str(user.get("id") or ""), str(user.get("link") or "")}
    normalized = {value.strip().rstrip("/").lower() for value in owned if value.strip()}
    return identifier.strip().rstrip("/").lower() in normalized


class OAuthTokenVerifier:
    """Implements IdentityVerifierPort with real provider token checks.

    Google: the token audience must equal ``google_client_id`` and the
    token email must equal the asserted identifier.
    Facebook: ``debug_token`` must report the token valid for
    ``facebook_app_id`` and the identifier must be the token owner's Graph
    id or profile link; the Graph user id is kept as ``subject``.
    """

    def __init__(
        self,
        google_client_id: str = "",
        facebook_app_id: str = "",
        facebook_app_secret: str = "",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ) -> None:
        self._google_client_id = google_client_id
        self._facebook_app_id = facebook_app_id
        self._facebook_app_secret = facebook_app_secret
        self._client = client or httpx.AsyncClient(timeout=timeout)
        logger.info(
            "OAuthTokenVerifier initialised (google=%s, facebook=%s)",
            bool(google_client_id), bool(facebook_app_id and facebook_app_secret),
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def verify(
        self, provider: AuthProvider, identifier: str, token: Optional[str] = None
    ) -> VerifiedIdentity:
        identifier = (identifier or "").strip()
        if not identifier:
            raise IdentityVerificationError("An identifier is required")
        if not token:
            raise IdentityVerificationError("missing_token")

        try:
            if provider == AuthProvider.GOOGLE:
                return await self._verify_google(identifier, token)
            return await self._verify_facebook(identifier, token)
        except httpx.HTTPError as exc:
            logger.warning("%s token verification request failed: %s", provider.value, exc)
            raise IdentityVerificationError("provider_unreachable") from exc

    # -- providers -------------------------------------------------------------

    async def _get_json(self, url: str, params: dict[str, str]) -> Optional[dict[str, Any]]:
        response = await self._client.get(url, params=params)
        if response.status_code != 200:
            return None
        data = response.json()
        return data if isinstance(data, dict) else None

    async def _verify_google(self, identifier: str, token: str) -> VerifiedIdentity:
        if not self._google_client_id:
            raise IdentityVerificationError("missing_google_client_id")

        info = await self._get_json(GOOGLE_TOKENINFO_URL, {"id_token": token})
        if info is None:
            raise IdentityVerificationError("invalid_token")
        if info.get("aud") != self._google_client_id:
            raise IdentityVerificationError("invalid_audience")
        email = str(info.get("email", ""))
        if email.lower() != identifier.lower():
            raise IdentityVerificationError("identifier_mismatch")

        return VerifiedIdentity(
            provider=AuthProvider.GOOGLE,
            provider_id=identifier,
            name=str(info.get("name", "")),
            email=email,
            avatar_url=str(info.get("picture", "")),
            verified=True,
            subject=info.get("sub"),
        )

    async def _verify_facebook(self, identifier: str, token: str) -> VerifiedIdentity:
        if not (self._facebook_app_id and self._facebook_app_secret):
            raise IdentityVerificationError("missing_facebook_app_config")

        app_token = f"{self._facebook_app_id}|{self._facebook_app_secret}"
        debug = await self._get_json(
            f"{FACEBOOK_GRAPH_URL}/debug_token",
            {"input_token": token, "access_token": app_token},
        )
        data = (debug or {}).get("data") or {}
        if not data.get("is_valid"):
            raise IdentityVerificationError("invalid_token")
        if str(data.get("app_id", self._facebook_app_id)) != self._facebook_app_id:
            raise IdentityVerificationError("invalid_audience")

        user = await self._get_json(
            f"{FACEBOOK_GRAPH_URL}/me",
            {"fields": "id,name,email,link,picture.type(large)", "access_token": token},
        )
        if user is None:
            raise IdentityVerificationError("user_info_error")
        if not _facebook_identifier_matches(identifier, user):
            raise IdentityVerificationError("identifier_mismatch")

        picture = ((user.get("picture") or {}).get("data") or {}).get("url", "")
        return VerifiedIdentity(
            provider=AuthProvider.FACEBOOK,
            provider_id=identifier,
            name=str(user.get("name", "")),
            email=str(user.get("email", "")),
            avatar_url=str(picture),
            verified=True,
            subject=user.get("id"),
        )
