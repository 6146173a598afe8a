"""DTO for creating a project post."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
from backend.src.core.entities.project_post import ProjectField, ProjectStage


@dataclass
class PostDraft:
    project_name: str
    description: str
    founder_name: str = ""
    founder_id: Optional[str] = None
    deadline: Optional[str] = None
    image_url: Optional[str] = None
    project_field: ProjectField = ProjectField.OTHER
    stage: ProjectStage = ProjectStage.IDEA
    compensation: str = ""
    roles: list[str] = field(default_factory=list)
