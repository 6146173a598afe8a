"""JSON file implementation of IdentityStorePort."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from backend.src.core.entities.user import AuthProvider, UserRecord
from backend.src.core.exceptions import IdentityBlacklistedError, StoreFailureError

logger = logging.getLogger(__name__)

USERS_FILE = "users.json"
BLACKLIST_FILE = "blacklist.json"


class JsonIdentityStore:
    """Implements :class:`IdentityStorePort` with two JSON files.

    ``users.json`` holds a list of camelCase user objects and
    ``blacklist.json`` a list of revoked identifiers. Every operation reads
    the whole collection; mutations rewrite it atomically (temp file plus
    ``os.replace``) while holding a single per-instance lock.

    Reads fail soft: a missing, unreadable or malformed file is treated as
    an empty collection. Writes fail loudly with :class:`StoreFailureError`.
    Two processes sharing one data directory are not serialized.
    """

    def __init__(self, data_dir: str | Path) -> None:
        self._dir = Path(data_dir).resolve()
        self._users_path = self._dir / USERS_FILE
        self._blacklist_path = self._dir / BLACKLIST_FILE
        self._lock = asyncio.Lock()
        self._ensure_files()
        logger.info("JsonIdentityStore initialised at %s", self._dir)

    def _ensure_files(self) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        for path in (self._users_path, self._blacklist_path):
            if not path.exists():
                path.write_text("[]", encoding="utf-8")

    # -- raw file access -------------------------------------------------------

    @staticmethod
    def _read_list(path: Path) -> list[Any]:
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.warning("Could not read %s, treating as empty: %s", path, exc)
            return []
        try:
            data = json.loads(raw or "[]")
        except json.JSONDecodeError as exc:
            logger.warning("Corrupt JSON in %s, treating as empty: %s", path, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Expected a list in %s, got %s; treating as empty", path, type(data).__name__)
            return []
        return data

    @staticmethod
    def _write_list(path: Path, data: list[Any]) -> None:
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, indent=2, ensure_ascii=False)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise StoreFailureError(f"Failed to write {path.name}: {exc}") from exc

    async def _run(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def _load_users(self) -> list[UserRecord]:
        records = []
        for entry in await self._run(self._read_list, self._users_path):
            if not isinstance(entry, dict):
                logger.warning("Skipping malformed user entry in %s", self._users_path.name)
                continue
            records.append(UserRecord.from_dict(entry))
        return records

    async def _save_users(self, records: list[UserRecord]) -> None:
        await self._run(self._write_list, self._users_path, [r.to_dict() for r in records])

    async def _load_blacklist(self) -> list[str]:
        entries = await self._run(self._read_list, self._blacklist_path)
        return [str(e).strip() for e in entries if isinstance(e, str) and e.strip()]

    async def _save_blacklist(self, entries: list[str]) -> None:
        await self._run(self._write_list, self._blacklist_path, entries)

    # -- IdentityStorePort implementation --------------------------------------

    async def find_by_identity(
        self, provider: AuthProvider, provider_id: str
    ) -> Optional[UserRecord]:
        provider_id = (provider_id or "").strip()
        async with self._lock:
            for record in await self._load_users():
                if record.matches(provider, provider_id):
                    return record
        return None

    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        if not user_id:
            return None
        async with self._lock:
            for record in await self._load_users():
                if record.id == user_id:
                    return record
        return None

    async def find_by_name(self, name: str) -> Optional[UserRecord]:
        name = (name or "").strip()
        if not name:
            return None
        async with self._lock:
            for record in await self._load_users():
                if record.name == name:
                    return record
        return None

    async def upsert(self, record: UserRecord) -> UserRecord:
        record.validate()
        async with self._lock:
            if record.provider_id in await self._load_blacklist():
                raise IdentityBlacklistedError(record.provider_id)

            users = await self._load_users()
            now = datetime.utcnow()
            for index, existing in enumerate(users):
                if existing.matches(record.provider, record.provider_id):
                    stored = record.merged_over(existing, now)
                    users[index] = stored
                    break
            else:
                stored = replace(record, created_at=now, updated_at=now)
                users.append(stored)

            await self._save_users(users)
            logger.debug("Upserted user %s", stored.id)
            return stored

    async def delete(self, provider: AuthProvider, provider_id: str) -> bool:
        provider_id = (provider_id or "").strip()
        async with self._lock:
            users = await self._load_users()
            remaining = [u for u in users if not u.matches(provider, provider_id)]
            if len(remaining) == len(users):
                logger.debug("Nothing to delete for %s identity", AuthProvider.parse(provider))
                return False

            # The identifier is never both unrecorded and unblacklisted.
            blacklist = await self._load_blacklist()
            added = provider_id not in blacklist
            if added:
                await self._save_blacklist(blacklist + [provider_id])
            try:
                await self._save_users(remaining)
            except StoreFailureError:
                if added:
                    await self._save_blacklist(blacklist)
                raise
            logger.debug("Deleted user and blacklisted identifier")
            return True

    async def is_blacklisted(self, identifier: str) -> bool:
        identifier = (identifier or "").strip()
        async with self._lock:
            return identifier in await self._load_blacklist()

    async def add_to_blacklist(self, identifier: str) -> None:
        identifier = (identifier or "").strip()
        if not identifier:
            return
        async with self._lock:
            blacklist = await self._load_blacklist()
            if identifier not in blacklist:
                await self._save_blacklist(blacklist + [identifier])

    async def list_all(self) -> list[UserRecord]:
        async with self._lock:
            return await self._load_users()
