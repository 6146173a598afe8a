"""Integration tests for the registration flow API."""
from __future__ import annotations

import pytest


async def _start(client, identifier: str, provider: str = "google") -> dict:
    response = await client.post(
        "/api/auth/flows",
        json={"provider": provider, "identifier": identifier},
    )
    assert response.status_code == 201
    return response.json()


class TestRegistrationFlowAPI:
    """Tests for /api/auth/flows endpoints."""

    @pytest.mark.asyncio
    async def test_new_identity_registers(self, async_client):
        flow = await _start(async_client, "new@gmail.com")
        assert flow["state"] == "registering"
        assert flow["question"]["key"] == "name"
        assert flow["canContinue"] is False

        flow_id = flow["id"]
        answered = await async_client.put(
            f"/api/auth/flows/{flow_id}/answers",
            json={"answers": {"name": "Newt", "twitter": "https://x.com/newt"}},
        )
        assert answered.json()["canContinue"] is True

        for _ in range(flow["totalSteps"] - 1):
            step = await async_client.post(f"/api/auth/flows/{flow_id}/next")
            assert step.status_code == 200

        response = await async_client.post(f"/api/auth/flows/{flow_id}/submit")

        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["id"] == flow["pendingUserId"]
        assert profile["providerId"] == "new@gmail.com"
        assert profile["links"] == [{"url": "https://x.com/newt", "title": "Twitter/X"}]

        find = await async_client.post(
            "/api/users/find",
            json={"provider": "google", "identifier": "new@gmail.com"},
        )
        assert find.json()["found"] is True

    @pytest.mark.asyncio
    async def test_existing_identity_logs_in(self, async_client, alice_payload):
        await async_client.post("/api/users/upsert", json={"profile": alice_payload})

        flow = await _start(async_client, "alice@gmail.com")
        assert flow["state"] == "login_confirm"
        assert flow["existingName"] == "Alice"

        response = await async_client.post(f"/api/auth/flows/{flow['id']}/confirm")

        assert response.status_code == 200
        assert response.json()["profile"]["id"] == "A1"

    @pytest.mark.asyncio
    async def test_confirm_after_account_deleted(self, async_client, alice_payload):
        await async_client.post("/api/users/upsert", json={"profile": alice_payload})
        flow = await _start(async_client, "alice@gmail.com")
        await async_client.post(
            "/api/users/delete",
            json={"provider": "google", "identifier": "alice@gmail.com"},
        )

        response = await async_client.post(f"/api/auth/flows/{flow['id']}/confirm")

        assert response.status_code == 403
        assert response.json()["error"] == "identifier_blacklisted"

    @pytest.mark.asyncio
    async def test_cancel_and_choose_again(self, async_client, alice_payload):
        await async_client.post("/api/users/upsert", json={"profile": alice_payload})
        flow = await _start(async_client, "alice@gmail.com")

        cancelled = await async_client.post(f"/api/auth/flows/{flow['id']}/cancel")
        assert cancelled.json()["state"] == "choosing_provider"

        rechosen = await async_client.post(
            f"/api/auth/flows/{flow['id']}/provider",
            json={"provider": "facebook", "identifier": "https://facebook.com/alice"},
        )
        assert rechosen.status_code == 200
        assert rechosen.json()["state"] == "registering"

    @pytest.mark.asyncio
    async def test_required_question_blocks_next(self, async_client):
        flow = await _start(async_client, "new@gmail.com")

        response = await async_client.post(f"/api/auth/flows/{flow['id']}/next")

        assert response.status_code == 409
        assert response.json()["error"] == "invalid_transition"

    @pytest.mark.asyncio
    async def test_back_from_first_question(self, async_client):
        flow = await _start(async_client, "new@gmail.com")

        response = await async_client.post(f"/api/auth/flows/{flow['id']}/back")

        assert response.json()["state"] == "choosing_provider"
        assert response.json()["question"] is None

    @pytest.mark.asyncio
    async def test_blacklisted_identity_cannot_start(self, async_client, alice_payload):
        await async_client.post("/api/users/upsert", json={"profile": alice_payload})
        await async_client.post(
            "/api/users/delete",
            json={"provider": "google", "identifier": "alice@gmail.com"},
        )

        response = await async_client.post(
            "/api/auth/flows",
            json={"provider": "google", "identifier": "alice@gmail.com"},
        )

        assert response.status_code == 403
        assert response.json()["error"] == "identifier_blacklisted"

    @pytest.mark.asyncio
    async def test_unknown_answer_key(self, async_client):
        flow = await _start(async_client, "new@gmail.com")

        response = await async_client.put(
            f"/api/auth/flows/{flow['id']}/answers",
            json={"answers": {"shoe_size": "42"}},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_flow(self, async_client):
        response = await async_client.get("/api/auth/flows/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"
