"""StoredFile value object returned by blob storage."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StoredFile:
    """Where an uploaded file landed.

    ``path`` is the storage-side location, ``url`` the public address the
    identity core stores verbatim without checking reachability.
    """

    path: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "url": self.url}
