"""Port for keeping in-progress registration flows between requests."""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.entities.registration_flow import RegistrationFlow


@runtime_checkable
class RegistrationSessionStorePort(Protocol):
    async def save(self, flow: RegistrationFlow) -> RegistrationFlow: ...
    async def get(self, flow_id: str) -> Optional[RegistrationFlow]: ...
    async def discard(self, flow_id: str) -> None: ...
