"""Unit tests for JsonIdentityStore file handling."""
from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from backend.src.adapters.outbound.persistence.json_identity_store import JsonIdentityStore
from backend.src.core.entities.user import AuthProvider, UserRecord
from backend.src.core.exceptions import StoreFailureError


def _alice() -> UserRecord:
    return UserRecord(id="A1", name="Alice", provider=AuthProvider.GOOGLE, provider_id="alice@gmail.com")


class TestJsonIdentityStoreFiles:
    """Tests for the on-disk format and failure behaviour."""

    def test_creates_data_files(self, tmp_path):
        JsonIdentityStore(data_dir=tmp_path / "data")
        assert json.loads((tmp_path / "data" / "users.json").read_text()) == []
        assert json.loads((tmp_path / "data" / "blacklist.json").read_text()) == []

    @pytest.mark.asyncio
    async def test_writes_camel_case_records(self, tmp_path):
        store = JsonIdentityStore(data_dir=tmp_path)
        await store.upsert(_alice())

        data = json.loads((tmp_path / "users.json").read_text())

        assert data[0]["providerId"] == "alice@gmail.com"
        assert data[0]["provider"] == "google"
        assert "createdAt" in data[0]

    @pytest.mark.asyncio
    async def test_reads_existing_file_with_legacy_links(self, tmp_path):
        (tmp_path / "users.json").write_text(json.dumps([{
            "id": "A1", "name": "Alice", "provider": "google", "providerId": "alice@gmail.com",
            "links": ["https://a.io", {"title": "CV", "url": "https://cv.io"}, ""],
        }]))
        store = JsonIdentityStore(data_dir=tmp_path)

        found = await store.find_by_identity(AuthProvider.GOOGLE, "alice@gmail.com")

        assert [link.url for link in found.links] == ["https://a.io", "https://cv.io"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["{not json", '{"id": "A1"}', "42"])
    async def test_corrupt_users_file_reads_as_empty(self, tmp_path, content):
        store = JsonIdentityStore(data_dir=tmp_path)
        (tmp_path / "users.json").write_text(content)

        assert await store.list_all() == []
        assert await store.find_by_identity(AuthProvider.GOOGLE, "alice@gmail.com") is None

    @pytest.mark.asyncio
    async def test_missing_blacklist_file_reads_as_empty(self, tmp_path):
        store = JsonIdentityStore(data_dir=tmp_path)
        (tmp_path / "blacklist.json").unlink()

        assert await store.is_blacklisted("alice@gmail.com") is False

    @pytest.mark.asyncio
    async def test_non_dict_entries_are_skipped(self, tmp_path):
        (tmp_path / "users.json").write_text(json.dumps([
            "garbage",
            {"id": "A1", "name": "Alice", "provider": "google", "providerId": "alice@gmail.com"},
        ]))
        store = JsonIdentityStore(data_dir=tmp_path)

        assert [r.id for r in await store.list_all()] == ["A1"]

    @pytest.mark.asyncio
    async def test_write_failure_raises_store_failure(self, tmp_path):
        store = JsonIdentityStore(data_dir=tmp_path)

        with patch(
            "backend.src.adapters.outbound.persistence.json_identity_store.os.replace",
            side_effect=OSError("disk full"),
        ):
            with pytest.raises(StoreFailureError):
                await store.upsert(_alice())

        assert json.loads((tmp_path / "users.json").read_text()) == []
        assert not [p for p in tmp_path.iterdir() if p.name.startswith(".users.json.")]

    @pytest.mark.asyncio
    async def test_failed_delete_rolls_back_blacklist(self, tmp_path):
        store = JsonIdentityStore(data_dir=tmp_path)
        await store.upsert(_alice())
        real_write = JsonIdentityStore._write_list

        def _fail_on_users(path, data):
            if path.name == "users.json":
                raise StoreFailureError("disk full")
            real_write(path, data)

        with patch.object(JsonIdentityStore, "_write_list", side_effect=_fail_on_users):
            with pytest.raises(StoreFailureError):
                await store.delete(AuthProvider.GOOGLE, "alice@gmail.com")

        assert await store.is_blacklisted("alice@gmail.com") is False
        assert await store.find_by_identity(AuthProvider.GOOGLE, "alice@gmail.com") is not None

    @pytest.mark.asyncio
    async def test_data_survives_new_instance(self, tmp_path):
        await JsonIdentityStore(data_dir=tmp_path).upsert(_alice())

        reopened = JsonIdentityStore(data_dir=tmp_path)

        assert (await reopened.find_by_id("A1")).name == "Alice"
