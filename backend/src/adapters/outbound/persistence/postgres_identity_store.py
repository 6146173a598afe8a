"""PostgreSQL implementation of IdentityStorePort using SQLAlchemy async."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.future import select

from backend.src.core.entities.user import AuthProvider, UserRecord
from backend.src.core.exceptions import IdentityBlacklistedError, StoreFailureError
from backend.src.infrastructure.database import Base

logger = logging.getLogger(__name__)

_UPSERT_ATTEMPTS = 2


class UserModel(Base):  # type: ignore[misc]
    """SQLAlchemy model for the ``users`` table."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("provider", "provider_id", name="uq_users_provider_identity"),
    )

    id = Column(String(36), primary_key=True)
    name = Column(String(256), nullable=False)
    provider = Column(String(16), nullable=False)
    provider_id = Column(String(512), nullable=False)
    date_of_birth = Column(String(32), nullable=True)
    bio = Column(Text, nullable=True)
    links = Column(JSON, nullable=False, default=list)
    contact_email = Column(String(320), nullable=True)
    contact_facebook_url = Column(Text, nullable=True)
    phone_number = Column(String(64), nullable=True)
    cv_file_path = Column(Text, nullable=True)
    portfolio_file_path = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # -- conversion helpers ----------------------------------------------------

    def to_entity(self) -> UserRecord:
        """Convert this ORM row to a domain :class:`UserRecord`."""
        return UserRecord(
            id=self.id,
            name=self.name,
            provider=self.provider,
            provider_id=self.provider_id,
            date_of_birth=self.date_of_birth,
            bio=self.bio,
            links=list(self.links or []),
            contact_email=self.contact_email,
            contact_facebook_url=self.contact_facebook_url,
            phone_number=self.phone_number,
            cv_file_path=self.cv_file_path,
            portfolio_file_path=self.portfolio_file_path,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def apply(self, record: UserRecord) -> None:
        """Copy every mutable field of *record* onto this row."""
        self.name = record.name
        self.date_of_birth = record.date_of_birth
        self.bio = record.bio
        self.links = [link.to_dict() for link in record.links]
        self.contact_email = record.contact_email
        self.contact_facebook_url = record.contact_facebook_url
        self.phone_number = record.phone_number
        self.cv_file_path = record.cv_file_path
        self.portfolio_file_path = record.portfolio_file_path
        self.updated_at = record.updated_at

    @classmethod
    def from_entity(cls, record: UserRecord) -> UserModel:
        """Create an ORM instance from a domain :class:`UserRecord`."""
        row = cls(
            id=record.id,
            provider=record.provider.value,
            provider_id=record.provider_id,
            created_at=record.created_at,
        )
        row.apply(record)
        return row


class BlacklistModel(Base):  # type: ignore[misc]
    """SQLAlchemy model for the ``identity_blacklist`` table."""

    __tablename__ = "identity_blacklist"

    identifier = Column(String(512), primary_key=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class PostgresIdentityStore:
    """Implements :class:`IdentityStorePort` backed by PostgreSQL.

    Each mutation runs in its own transaction. The natural key is guarded by
    a unique constraint; existing rows are locked with ``SELECT ... FOR
    UPDATE`` while they are merged.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @staticmethod
    def _identity_query(provider: AuthProvider | str, provider_id: str):
        parsed = AuthProvider.parse(provider)
        return select(UserModel).where(
            UserModel.provider == (parsed.value if parsed else ""),
            UserModel.provider_id == (provider_id or "").strip(),
        )

    # -- IdentityStorePort implementation --------------------------------------

    async def find_by_identity(
        self, provider: AuthProvider, provider_id: str
    ) -> Optional[UserRecord]:
        async with self._session_factory() as session:
            result = await session.execute(self._identity_query(provider, provider_id))
            row = result.scalars().first()
            return row.to_entity() if row else None

    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        async with self._session_factory() as session:
            row = await session.get(UserModel, user_id)
            return row.to_entity() if row else None

    async def find_by_name(self, name: str) -> Optional[UserRecord]:
        name = (name or "").strip()
        if not name:
            return None
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserModel)
                .where(UserModel.name == name)
                .order_by(UserModel.created_at.asc())
                .limit(1)
            )
            row = result.scalars().first()
            return row.to_entity() if row else None

    async def upsert(self, record: UserRecord) -> UserRecord:
        record.validate()
        for attempt in range(1, _UPSERT_ATTEMPTS + 1):
            try:
                return await self._upsert_once(record)
            except IntegrityError as exc:
                # A concurrent insert of the same pair won; merge over it.
                logger.info("Upsert conflict on attempt %d: %s", attempt, exc.orig)
                if attempt == _UPSERT_ATTEMPTS:
                    raise StoreFailureError("Concurrent upsert conflict") from exc
            except SQLAlchemyError as exc:
                raise StoreFailureError(f"Failed to upsert user: {exc}") from exc
        raise StoreFailureError("Upsert did not complete")

    async def _upsert_once(self, record: UserRecord) -> UserRecord:
        async with self._session_factory() as session:
            async with session.begin():
                if await session.get(BlacklistModel, record.provider_id) is not None:
                    raise IdentityBlacklistedError(record.provider_id)

                result = await session.execute(
                    self._identity_query(record.provider, record.provider_id).with_for_update()
                )
                row = result.scalars().first()
                now = datetime.utcnow()
                if row is not None:
                    stored = record.merged_over(row.to_entity(), now)
                    row.apply(stored)
                else:
                    stored = replace(record, created_at=now, updated_at=now)
                    session.add(UserModel.from_entity(stored))
            logger.debug("Upserted user %s in PostgreSQL", stored.id)
            return stored

    async def delete(self, provider: AuthProvider, provider_id: str) -> bool:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(
                        self._identity_query(provider, provider_id).with_for_update()
                    )
                    row = result.scalars().first()
                    if row is None:
                        return False
                    await session.delete(row)
                    if await session.get(BlacklistModel, row.provider_id) is None:
                        session.add(BlacklistModel(identifier=row.provider_id))
        except SQLAlchemyError as exc:
            raise StoreFailureError(f"Failed to delete user: {exc}") from exc
        logger.debug("Deleted user and blacklisted identifier in PostgreSQL")
        return True

    async def is_blacklisted(self, identifier: str) -> bool:
        async with self._session_factory() as session:
            row = await session.get(BlacklistModel, (identifier or "").strip())
            return row is not None

    async def add_to_blacklist(self, identifier: str) -> None:
        identifier = (identifier or "").strip()
        if not identifier:
            return
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    if await session.get(BlacklistModel, identifier) is None:
                        session.add(BlacklistModel(identifier=identifier))
        except IntegrityError:
            logger.debug("Identifier already blacklisted concurrently")
        except SQLAlchemyError as exc:
            raise StoreFailureError(f"Failed to blacklist identifier: {exc}") from exc

    async def list_all(self) -> list[UserRecord]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserModel).order_by(UserModel.created_at.asc())
            )
            return [row.to_entity() for row in result.scalars().all()]
