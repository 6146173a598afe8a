"""ProfileLink value object: a URL with an optional title."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

RawLink = Union[str, dict, "ProfileLink", None]


@dataclass(frozen=True)
class ProfileLink:
    """Immutable link shown on a profile.

    Links arrive either as plain URL strings or as ``{"title", "url"}``
    objects; both are normalized into this single shape on ingestion.
    """

    url: str
    title: Optional[str] = None

    def __post_init__(self) -> None:
        url = (self.url or "").strip()
        if not url:
            raise ValueError("ProfileLink url must not be blank")
        object.__setattr__(self, "url", url)
        title = self.title.strip() if isinstance(self.title, str) else None
        object.__setattr__(self, "title", title or None)

    @classmethod
    def from_raw(cls, raw: RawLink) -> Optional[ProfileLink]:
        """Normalize a string or mapping; returns None for blank input."""
        if raw is None:
            return None
        if isinstance(raw, ProfileLink):
            return raw
        if isinstance(raw, str):
            return cls(url=raw) if raw.strip() else None
        if isinstance(raw, dict):
            url = raw.get("url")
            if not isinstance(url, str) or not url.strip():
                return None
            title = raw.get("title")
            return cls(url=url, title=title if isinstance(title, str) else None)
        raise ValueError(f"Unsupported link value: {raw!r}")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"url": self.url}
        if self.title:
            data["title"] = self.title
        return data


def normalize_links(raw_links: Optional[Iterable[RawLink]]) -> list[ProfileLink]:
    """Normalize a mixed list of links, dropping blanks."""
    links: list[ProfileLink] = []
    for raw in raw_links or []:
        link = ProfileLink.from_raw(raw)
        if link is not None:
            links.append(link)
    return links
