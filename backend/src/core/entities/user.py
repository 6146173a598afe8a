"""User record entity: the durable identity behind a Tryo account."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from backend.src.core.exceptions import InvalidProfileError
from backend.src.core.value_objects.profile_link import ProfileLink, normalize_links


class AuthProvider(str, Enum):
    GOOGLE = "google"
    FACEBOOK = "facebook"

    @classmethod
    def parse(cls, value: Any) -> Optional[AuthProvider]:
        """Return the matching provider, or None for blank/unknown values."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


REQUIRED_FIELDS = ("id", "name", "provider", "provider_id")

_OPTIONAL_TEXT_FIELDS = (
    "date_of_birth",
    "bio",
    "contact_email",
    "contact_facebook_url",
    "phone_number",
    "cv_file_path",
    "portfolio_file_path",
)

# snake_case attribute -> camelCase wire/file key
_WIRE_KEYS = {
    "id": "id",
    "name": "name",
    "provider": "provider",
    "provider_id": "providerId",
    "date_of_birth": "dateOfBirth",
    "bio": "bio",
    "links": "links",
    "contact_email": "contactEmail",
    "contact_facebook_url": "contactFacebookUrl",
    "phone_number": "phoneNumber",
    "cv_file_path": "cvFilePath",
    "portfolio_file_path": "portfolioFilePath",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _required_text(value: Any) -> str:
    """Scalars become trimmed text; anything else counts as missing."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return ""
    return str(value).strip()


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


@dataclass
class UserRecord:
    """A user account keyed by its natural key ``(provider, provider_id)``.

    ``id`` is opaque and generated once, at the first registration attempt.
    It is never used to match records; the natural key is.
    """

    id: str = ""
    name: str = ""
    provider: Optional[AuthProvider] = None
    provider_id: str = ""
    date_of_birth: Optional[str] = None
    bio: Optional[str] = None
    links: list[ProfileLink] = field(default_factory=list)
    contact_email: Optional[str] = None
    contact_facebook_url: Optional[str] = None
    phone_number: Optional[str] = None
    cv_file_path: Optional[str] = None
    portfolio_file_path: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.id = _required_text(self.id)
        self.name = _required_text(self.name)
        self.provider = AuthProvider.parse(self.provider)
        self.provider_id = _required_text(self.provider_id)
        for name in _OPTIONAL_TEXT_FIELDS:
            setattr(self, name, _clean(getattr(self, name)))
        self.links = normalize_links(self.links)

    @property
    def identity_key(self) -> tuple[str, str]:
        provider = self.provider.value if self.provider else ""
        return provider, self.provider_id

    def matches(self, provider: AuthProvider | str, provider_id: str) -> bool:
        return self.provider == AuthProvider.parse(provider) and self.provider_id == provider_id

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def validate(self) -> None:
        missing = self.missing_fields()
        if missing:
            raise InvalidProfileError(missing)

    def merged_over(self, existing: UserRecord, now: datetime) -> UserRecord:
        """Return this record replacing every field of *existing*.

        Optional fields left empty here clear the stored value. The stored
        ``id`` and ``created_at`` are kept.
        """
        return replace(
            self,
            id=existing.id or self.id,
            created_at=existing.created_at or now,
            updated_at=now,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "provider": self.provider.value if self.provider else None,
            "providerId": self.provider_id,
            "dateOfBirth": self.date_of_birth,
            "bio": self.bio,
            "links": [link.to_dict() for link in self.links],
            "contactEmail": self.contact_email,
            "contactFacebookUrl": self.contact_facebook_url,
            "phoneNumber": self.phone_number,
            "cvFilePath": self.cv_file_path,
            "portfolioFilePath": self.portfolio_file_path,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserRecord:
        """Build a record from camelCase (or snake_case) keys."""
        values: dict[str, Any] = {}
        for attr, wire_key in _WIRE_KEYS.items():
            if wire_key in data:
                values[attr] = data[wire_key]
            elif attr in data:
                values[attr] = data[attr]
        links = values.get("links")
        values["links"] = links if isinstance(links, list) else []
        values["created_at"] = _parse_datetime(values.get("created_at"))
        values["updated_at"] = _parse_datetime(values.get("updated_at"))
        return cls(**values)


@dataclass(frozen=True)
class PublicProfileView:
    """What a post card may show about its author.

    ``provider_id`` doubles as the login identifier and is never exposed.
    """

    id: str
    name: str
    provider: Optional[AuthProvider]
    bio: Optional[str] = None
    links: tuple[ProfileLink, ...] = ()
    contact_email: Optional[str] = None
    contact_facebook_url: Optional[str] = None
    phone_number: Optional[str] = None
    cv_file_path: Optional[str] = None
    portfolio_file_path: Optional[str] = None

    @classmethod
    def from_record(cls, record: UserRecord) -> PublicProfileView:
        return cls(
            id=record.id,
            name=record.name,
            provider=record.provider,
            bio=record.bio,
            links=tuple(record.links),
            contact_email=record.contact_email,
            contact_facebook_url=record.contact_facebook_url,
            phone_number=record.phone_number,
            cv_file_path=record.cv_file_path,
            portfolio_file_path=record.portfolio_file_path,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "provider": self.provider.value if self.provider else None,
            "bio": self.bio,
            "links": [link.to_dict() for link in self.links],
            "contactEmail": self.contact_email,
            "contactFacebookUrl": self.contact_facebook_url,
            "phoneNumber": self.phone_number,
            "cvFilePath": self.cv_file_path,
            "portfolioFilePath": self.portfolio_file_path,
        }
