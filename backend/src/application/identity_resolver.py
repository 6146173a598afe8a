"""
Identity resolution use case.

Drives a :class:`RegistrationFlow` from provider choice to a stored profile.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from backend.src.core.entities.registration_flow import FlowState, RegistrationFlow
from backend.src.core.entities.user import AuthProvider, UserRecord
from backend.src.core.exceptions import (
    FlowNotFoundError,
    IdentityBlacklistedError,
    InvalidProfileError,
)

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Decides between login and registration for a provider identity."""

    def __init__(self, store, verifier, sessions):
        self._store = store
        self._verifier = verifier
        self._sessions = sessions

    async def _load(self, flow_id: str) -> RegistrationFlow:
        flow = await self._sessions.get(flow_id)
        if flow is None:
            raise FlowNotFoundError(flow_id)
        return flow

    async def _resolve_into(
        self,
        flow: RegistrationFlow,
        provider: AuthProvider,
        identifier: str,
        credential: Optional[str],
    ) -> RegistrationFlow:
        identifier = (identifier or "").strip()
        if not identifier:
            raise InvalidProfileError(["provider_id"], "An identifier is required")

        verified = await self._verifier.verify(provider, identifier, credential)
        existing = await self._store.find_by_identity(verified.provider, verified.provider_id)

        if existing is None and await self._store.is_blacklisted(verified.provider_id):
            logger.warning("Refusing registration for blacklisted identifier (%s)", provider.value)
            raise IdentityBlacklistedError(verified.provider_id)

        flow.choose_provider(verified.provider, verified.provider_id, existing)
        if flow.state == FlowState.REGISTERING and verified.name and not flow.answers.get("name"):
            flow.answers["name"] = verified.name

        await self._sessions.save(flow)
        logger.info("Flow %s resolved %s identity -> %s", flow.id, provider.value, flow.state.value)
        return flow

    async def start(
        self,
        provider: AuthProvider,
        identifier: str,
        credential: Optional[str] = None,
    ) -> RegistrationFlow:
        return await self._resolve_into(RegistrationFlow(), provider, identifier, credential)

    async def choose_provider(
        self,
        flow_id: str,
        provider: AuthProvider,
        identifier: str,
        credential: Optional[str] = None,
    ) -> RegistrationFlow:
        flow = await self._load(flow_id)
        return await self._resolve_into(flow, provider, identifier, credential)

    async def get_flow(self, flow_id: str) -> RegistrationFlow:
        return await self._load(flow_id)

    async def confirm(self, flow_id: str) -> UserRecord:
        """Resume the existing account without writing to the store."""
        flow = await self._load(flow_id)
        current = None
        if flow.state == FlowState.LOGIN_CONFIRM:
            current = await self._store.find_by_identity(flow.provider, flow.identifier)
            if current is None and await self._store.is_blacklisted(flow.identifier):
                raise IdentityBlacklistedError(flow.identifier)
        record = flow.confirm_login(current)
        await self._sessions.save(flow)
        logger.info("Flow %s logged in as user %s", flow.id, record.id)
        return record

    async def cancel(self, flow_id: str) -> RegistrationFlow:
        flow = await self._load(flow_id)
        flow.cancel()
        return await self._sessions.save(flow)

    async def answer(
        self,
        flow_id: str,
        answers: dict[str, Any],
        attachments: Optional[dict[str, str]] = None,
    ) -> RegistrationFlow:
        flow = await self._load(flow_id)
        flow.answer(answers, attachments)
        return await self._sessions.save(flow)

    async def next(self, flow_id: str) -> RegistrationFlow:
        flow = await self._load(flow_id)
        flow.next()
        return await self._sessions.save(flow)

    async def back(self, flow_id: str) -> RegistrationFlow:
        flow = await self._load(flow_id)
        flow.back()
        return await self._sessions.save(flow)

    async def submit(self, flow_id: str) -> UserRecord:
        """Upsert the wizard's profile; the stored record becomes the session profile."""
        flow = await self._load(flow_id)
        candidate = flow.build_profile()
        stored = await self._store.upsert(candidate)
        flow.complete(stored)
        await self._sessions.save(flow)
        logger.info("Flow %s registered user %s", flow.id, stored.id)
        return stored
