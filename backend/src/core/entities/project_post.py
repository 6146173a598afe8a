"""Project post: an opportunity published on the board."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class ProjectField(str, Enum):
    AI = "Artificial Intelligence"
    FINTECH = "Fintech"
    EDTECH = "EdTech"
    HEALTH = "HealthTech"
    SOCIAL = "Social"
    CRYPTO = "Web3 / Crypto"
    CONSUMER = "Consumer App"
    OTHER = "Other"


class ProjectStage(str, Enum):
    IDEA = "Idea Phase"
    MVP = "MVP Ready"
    EARLY_USERS = "Early Users"
    REVENUE = "Generating Revenue"
    SCALING = "Scaling"


@dataclass
class ProjectPost:
    """A founder looking for people to build with."""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    founder_name: str = ""
    founder_id: Optional[str] = None
    project_name: str = ""
    posted_date: datetime = field(default_factory=datetime.utcnow)
    deadline: Optional[str] = None
    description: str = ""
    image_url: Optional[str] = None
    project_field: ProjectField = ProjectField.OTHER
    stage: ProjectStage = ProjectStage.IDEA
    compensation: str = ""
    roles: list[str] = field(default_factory=list)

    def matches_query(self, query: str) -> bool:
        needle = query.strip().lower()
        if not needle:
            return True
        haystack = [self.project_name, self.description, self.founder_name, *self.roles]
        return any(needle in text.lower() for text in haystack if text)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "founderName": self.founder_name,
            "founderId": self.founder_id,
            "projectName": self.project_name,
            "postedDate": self.posted_date.isoformat(),
            "deadline": self.deadline,
            "description": self.description,
            "imageUrl": self.image_url,
            "field": self.project_field.value,
            "stage": self.stage.value,
            "compensation": self.compensation,
            "roles": list(self.roles),
        }
