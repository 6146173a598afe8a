"""Behaviour every IdentityStorePort adapter must share.

Runs against the JSON file store and the in-memory store.
"""
from __future__ import annotations

import asyncio
from dataclasses import replace

import pytest

from backend.src.adapters.outbound.persistence.in_memory_identity_store import InMemoryIdentityStore
from backend.src.adapters.outbound.persistence.json_identity_store import JsonIdentityStore
from backend.src.core.entities.user import AuthProvider, UserRecord
from backend.src.core.exceptions import IdentityBlacklistedError, InvalidProfileError
from backend.src.ports.outbound.identity_store_port import IdentityStorePort


@pytest.fixture(params=["json", "memory"])
def store(request, tmp_path):
    if request.param == "json":
        return JsonIdentityStore(data_dir=tmp_path / "data")
    return InMemoryIdentityStore()


def _record(**overrides) -> UserRecord:
    values = dict(id="A1", name="Alice", provider=AuthProvider.GOOGLE, provider_id="alice@gmail.com")
    values.update(overrides)
    return UserRecord(**values)


class TestStoreContract:
    """Identity store invariants."""

    def test_satisfies_port(self, store):
        assert isinstance(store, IdentityStorePort)

    @pytest.mark.asyncio
    async def test_read_after_write(self, store):
        stored = await store.upsert(_record(bio="hi"))

        found = await store.find_by_identity(AuthProvider.GOOGLE, "alice@gmail.com")

        assert found is not None
        assert found.id == stored.id == "A1"
        assert found.bio == "hi"
        assert found.created_at is not None

    @pytest.mark.asyncio
    async def test_repeat_upsert_keeps_one_record(self, store):
        await store.upsert(_record())
        await store.upsert(_record(name="Alice B"))

        records = await store.list_all()

        assert len(records) == 1
        assert records[0].name == "Alice B"

    @pytest.mark.asyncio
    async def test_alice_keeps_her_stored_id(self, store):
        first = await store.upsert(_record(id="A1"))

        # A second device registers the same identity under a fresh id
        second = await store.upsert(_record(id="A2", name="Alice Again"))

        assert second.id == "A1"
        assert second.name == "Alice Again"
        assert second.created_at == first.created_at
        assert len(await store.list_all()) == 1

    @pytest.mark.asyncio
    async def test_upsert_clears_omitted_optional_fields(self, store):
        await store.upsert(_record(bio="old bio", phone_number="123"))

        stored = await store.upsert(_record())

        assert stored.bio is None
        assert stored.phone_number is None

    @pytest.mark.asyncio
    async def test_same_identifier_different_provider_is_separate(self, store):
        await store.upsert(_record())
        await store.upsert(_record(id="F1", provider=AuthProvider.FACEBOOK))

        assert len(await store.list_all()) == 2
        fb = await store.find_by_identity(AuthProvider.FACEBOOK, "alice@gmail.com")
        assert fb.id == "F1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("blank", ["id", "name", "provider_id"])
    async def test_blank_required_field_rejected_without_mutation(self, store, blank):
        await store.upsert(_record(bio="kept"))
        bad = replace(_record(name="Changed"), **{blank: "  "})

        with pytest.raises(InvalidProfileError):
            await store.upsert(bad)

        records = await store.list_all()
        assert len(records) == 1
        assert records[0].name == "Alice"
        assert records[0].bio == "kept"

    @pytest.mark.asyncio
    async def test_validation_precedes_blacklist_check(self, store):
        await store.add_to_blacklist("alice@gmail.com")
        with pytest.raises(InvalidProfileError):
            await store.upsert(_record(name=""))

    @pytest.mark.asyncio
    async def test_delete_removes_and_blacklists(self, store):
        await store.upsert(_record())

        assert await store.delete(AuthProvider.GOOGLE, "alice@gmail.com") is True

        assert await store.find_by_identity(AuthProvider.GOOGLE, "alice@gmail.com") is None
        assert await store.is_blacklisted("alice@gmail.com") is True

    @pytest.mark.asyncio
    async def test_identifier_whitespace_is_ignored(self, store):
        await store.upsert(_record())

        found = await store.find_by_identity(AuthProvider.GOOGLE, "  alice@gmail.com ")
        deleted = await store.delete(AuthProvider.GOOGLE, " alice@gmail.com\t")

        assert found is not None
        assert deleted is True
        assert await store.is_blacklisted("alice@gmail.com")
        assert await store.list_all() == []

    @pytest.mark.asyncio
    async def test_delete_unknown_identity(self, store):
        assert await store.delete(AuthProvider.GOOGLE, "ghost@gmail.com") is False
        assert await store.is_blacklisted("ghost@gmail.com") is False

    @pytest.mark.asyncio
    async def test_blacklisted_identifier_cannot_register_again(self, store):
        await store.upsert(_record())
        await store.delete(AuthProvider.GOOGLE, "alice@gmail.com")

        with pytest.raises(IdentityBlacklistedError):
            await store.upsert(_record(id="A3"))

        assert await store.list_all() == []

    @pytest.mark.asyncio
    async def test_blacklist_is_provider_agnostic(self, store):
        await store.upsert(_record())
        await store.delete(AuthProvider.GOOGLE, "alice@gmail.com")

        with pytest.raises(IdentityBlacklistedError):
            await store.upsert(_record(id="F1", provider=AuthProvider.FACEBOOK))

    @pytest.mark.asyncio
    async def test_add_to_blacklist_is_idempotent(self, store):
        await store.add_to_blacklist("spam@gmail.com")
        await store.add_to_blacklist("spam@gmail.com")
        assert await store.is_blacklisted("spam@gmail.com")
        assert not await store.is_blacklisted("other@gmail.com")

    @pytest.mark.asyncio
    async def test_find_by_name_exact_first_match(self, store):
        await store.upsert(_record())
        await store.upsert(_record(id="B1", name="Alice", provider_id="alice2@gmail.com"))

        found = await store.find_by_name("  Alice ")

        assert found.id == "A1"
        assert await store.find_by_name("alice") is None
        assert await store.find_by_name("") is None

    @pytest.mark.asyncio
    async def test_find_by_id(self, store):
        await store.upsert(_record())
        assert (await store.find_by_id("A1")).provider_id == "alice@gmail.com"
        assert await store.find_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_concurrent_upserts_do_not_lose_records(self, store):
        records = [
            _record(id=f"U{i}", name=f"User {i}", provider_id=f"user{i}@gmail.com")
            for i in range(20)
        ]

        await asyncio.gather(*(store.upsert(r) for r in records))

        assert len(await store.list_all()) == 20
