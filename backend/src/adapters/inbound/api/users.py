"""
User record API routes: lookup, upsert, deletion and public profiles.
"""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator

from backend.src.adapters.inbound.api.dependencies import get_profile_service
from backend.src.core.entities.user import AuthProvider, UserRecord

router = APIRouter()


class IdentityRequest(BaseModel):
    provider: AuthProvider
    identifier: str

    @field_validator("identifier")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("identifier must not be blank")
        return value


class UpsertRequest(BaseModel):
    profile: dict[str, Any]


class NameRequest(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class DeleteResponse(BaseModel):
    deleted: bool


@router.post("/find")
async def find_user(body: IdentityRequest, service=Depends(get_profile_service)):
    result = await service.find_user(body.provider, body.identifier)
    return result.to_dict()


@router.post("/upsert")
async def upsert_user(body: UpsertRequest, service=Depends(get_profile_service)):
    """Merge a complete profile into the store and return the stored record.

    The record is matched on ``(provider, providerId)``; a client-supplied
    ``id`` never selects which record is replaced.
    """
    record = UserRecord.from_dict(body.profile)
    stored = await service.upsert_profile(record)
    return stored.to_dict()


@router.post("/delete", response_model=DeleteResponse)
async def delete_user(body: IdentityRequest, service=Depends(get_profile_service)):
    deleted = await service.delete_account(body.provider, body.identifier)
    return DeleteResponse(deleted=deleted)


@router.post("/public-by-name")
async def public_profile_by_name(body: NameRequest, service=Depends(get_profile_service)):
    result = await service.public_profile_by_name(body.name)
    return result.to_dict()


@router.get("/{user_id}/public")
async def public_profile_by_id(user_id: str, service=Depends(get_profile_service)):
    result = await service.public_profile_by_id(user_id)
    return result.to_dict()
