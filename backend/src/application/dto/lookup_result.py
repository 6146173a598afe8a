"""DTO for profile lookups that may come back empty."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union
from backend.src.core.entities.user import PublicProfileView, UserRecord


@dataclass
class LookupResult:
    found: bool
    profile: Optional[Union[UserRecord, PublicProfileView]] = None

    @classmethod
    def of(cls, profile: Optional[Union[UserRecord, PublicProfileView]]) -> LookupResult:
        return cls(found=profile is not None, profile=profile)

    def to_dict(self) -> dict:
        result: dict = {"found": self.found}
        if self.profile is not None:
            result["profile"] = self.profile.to_dict()
        return result
