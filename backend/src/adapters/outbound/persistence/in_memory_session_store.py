"""In-memory implementation of RegistrationSessionStorePort."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional

from backend.src.core.entities.registration_flow import RegistrationFlow

logger = logging.getLogger(__name__)


class InMemorySessionStore:
    """Holds registration flows between requests.

    Flows untouched for longer than *ttl_minutes* are dropped lazily on the
    next save.
    """

    def __init__(self, ttl_minutes: int = 60) -> None:
        self._flows: dict[str, RegistrationFlow] = {}
        self._ttl = timedelta(minutes=ttl_minutes)
        self._lock = asyncio.Lock()

    def _evict_expired(self) -> None:
        cutoff = datetime.utcnow() - self._ttl
        expired = [fid for fid, flow in self._flows.items() if flow.updated_at < cutoff]
        for flow_id in expired:
            del self._flows[flow_id]
        if expired:
            logger.debug("Evicted %d expired registration flows", len(expired))

    async def save(self, flow: RegistrationFlow) -> RegistrationFlow:
        async with self._lock:
            self._evict_expired()
            self._flows[flow.id] = flow
            return flow

    async def get(self, flow_id: str) -> Optional[RegistrationFlow]:
        async with self._lock:
            flow = self._flows.get(flow_id)
            if flow is not None and flow.updated_at < datetime.utcnow() - self._ttl:
                del self._flows[flow_id]
                return None
            return flow

    async def discard(self, flow_id: str) -> None:
        async with self._lock:
            self._flows.pop(flow_id, None)
