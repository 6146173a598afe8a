"""
Registration flow API routes.

Each flow is a server-side state machine; every route returns the flow's
current state so the client only renders what it is told.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from backend.src.adapters.inbound.api.dependencies import get_identity_resolver
from backend.src.core.entities.user import AuthProvider

router = APIRouter()


class ChooseProviderRequest(BaseModel):
    provider: AuthProvider
    identifier: str
    credential: Optional[str] = None


class AnswersRequest(BaseModel):
    answers: dict[str, Optional[str]] = Field(default_factory=dict)
    attachments: dict[str, str] = Field(default_factory=dict)


@router.post("/flows", status_code=201)
async def start_flow(body: ChooseProviderRequest, resolver=Depends(get_identity_resolver)):
    flow = await resolver.start(body.provider, body.identifier, body.credential)
    return flow.to_dict()


@router.get("/flows/{flow_id}")
async def get_flow(flow_id: str, resolver=Depends(get_identity_resolver)):
    flow = await resolver.get_flow(flow_id)
    return flow.to_dict()


@router.post("/flows/{flow_id}/provider")
async def choose_provider(
    flow_id: str,
    body: ChooseProviderRequest,
    resolver=Depends(get_identity_resolver),
):
    flow = await resolver.choose_provider(flow_id, body.provider, body.identifier, body.credential)
    return flow.to_dict()


@router.post("/flows/{flow_id}/confirm")
async def confirm_login(flow_id: str, resolver=Depends(get_identity_resolver)):
    record = await resolver.confirm(flow_id)
    return {"profile": record.to_dict()}


@router.post("/flows/{flow_id}/cancel")
async def cancel_login(flow_id: str, resolver=Depends(get_identity_resolver)):
    flow = await resolver.cancel(flow_id)
    return flow.to_dict()


@router.put("/flows/{flow_id}/answers")
async def save_answers(
    flow_id: str,
    body: AnswersRequest,
    resolver=Depends(get_identity_resolver),
):
    flow = await resolver.answer(flow_id, body.answers, body.attachments)
    return flow.to_dict()


@router.post("/flows/{flow_id}/next")
async def next_question(flow_id: str, resolver=Depends(get_identity_resolver)):
    flow = await resolver.next(flow_id)
    return flow.to_dict()


@router.post("/flows/{flow_id}/back")
async def previous_question(flow_id: str, resolver=Depends(get_identity_resolver)):
    flow = await resolver.back(flow_id)
    return flow.to_dict()


@router.post("/flows/{flow_id}/submit")
async def submit_registration(flow_id: str, resolver=Depends(get_identity_resolver)):
    record = await resolver.submit(flow_id)
    return {"profile": record.to_dict()}
