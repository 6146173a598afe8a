"""Inbound port for the login-or-register flow."""
from __future__ import annotations
from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.entities.registration_flow import RegistrationFlow
    from backend.src.core.entities.user import AuthProvider, UserRecord


@runtime_checkable
class ResolveIdentityUseCase(Protocol):
    async def start(self, provider: AuthProvider, identifier: str, credential: Optional[str] = None) -> RegistrationFlow: ...
    async def choose_provider(self, flow_id: str, provider: AuthProvider, identifier: str, credential: Optional[str] = None) -> RegistrationFlow: ...
    async def get_flow(self, flow_id: str) -> RegistrationFlow: ...
    async def confirm(self, flow_id: str) -> UserRecord: ...
    async def cancel(self, flow_id: str) -> RegistrationFlow: ...
    async def answer(self, flow_id: str, answers: dict[str, Any], attachments: Optional[dict[str, str]] = None) -> RegistrationFlow: ...
    async def next(self, flow_id: str) -> RegistrationFlow: ...
    async def back(self, flow_id: str) -> RegistrationFlow: ...
    async def submit(self, flow_id: str) -> UserRecord: ...
