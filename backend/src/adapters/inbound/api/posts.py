"""
Project board API routes.
"""
from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from backend.src.adapters.inbound.api.dependencies import get_post_service
from backend.src.application.dto.post_draft import PostDraft
from backend.src.core.entities.project_post import ProjectField, ProjectStage

router = APIRouter()


class CreatePostRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_name: str = Field(alias="projectName")
    description: str
    founder_name: str = Field(default="", alias="founderName")
    founder_id: Optional[str] = Field(default=None, alias="founderId")
    deadline: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    field: ProjectField = ProjectField.OTHER
    stage: ProjectStage = ProjectStage.IDEA
    compensation: str = ""
    roles: list[str] = Field(default_factory=list)

    def to_draft(self) -> PostDraft:
        return PostDraft(
            project_name=self.project_name,
            description=self.description,
            founder_name=self.founder_name,
            founder_id=self.founder_id,
            deadline=self.deadline,
            image_url=self.image_url,
            project_field=self.field,
            stage=self.stage,
            compensation=self.compensation,
            roles=list(self.roles),
        )


class EnhanceRequest(BaseModel):
    text: str


@router.post("", status_code=201)
async def create_post(body: CreatePostRequest, service=Depends(get_post_service)):
    post = await service.create_post(body.to_draft())
    return post.to_dict()


@router.get("")
async def list_posts(
    field: Optional[ProjectField] = None,
    q: Optional[str] = Query(default=None, max_length=200),
    sort: Literal["newest", "trending"] = "newest",
    service=Depends(get_post_service),
):
    posts = await service.list_posts(project_field=field, query=q, sort=sort)
    return {"posts": [p.to_dict() for p in posts], "count": len(posts)}


@router.post("/enhance")
async def enhance_description(body: EnhanceRequest, service=Depends(get_post_service)):
    return {"text": await service.enhance_description(body.text)}


@router.get("/{post_id}")
async def get_post(post_id: str, service=Depends(get_post_service)):
    post = await service.get_post(post_id)
    return post.to_dict()


@router.get("/{post_id}/author")
async def get_post_author(post_id: str, service=Depends(get_post_service)):
    result = await service.get_author_profile(post_id)
    return result.to_dict()
