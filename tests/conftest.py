"""Shared test fixtures for all tests."""
from __future__ import annotations

import pytest
from datetime import datetime
from unittest.mock import AsyncMock

from backend.src.core.entities.project_post import ProjectField, ProjectPost, ProjectStage
from backend.src.core.entities.user import AuthProvider, UserRecord
from backend.src.core.entities.verified_identity import VerifiedIdentity
from backend.src.core.value_objects.profile_link import ProfileLink
from backend.src.core.value_objects.stored_file import StoredFile


# ── User Record Fixtures ───────────────────────────────────────────────────

@pytest.fixture
def alice_record() -> UserRecord:
    return UserRecord(
        id="A1",
        name="Alice",
        provider=AuthProvider.GOOGLE,
        provider_id="alice@gmail.com",
        bio="Building things",
        links=[ProfileLink(url="https://linkedin.com/in/alice", title="LinkedIn")],
    )


@pytest.fixture
def bob_record() -> UserRecord:
    return UserRecord(
        id="B1",
        name="Bob",
        provider=AuthProvider.FACEBOOK,
        provider_id="https://facebook.com/bob",
        contact_facebook_url="https://facebook.com/bob",
    )


# ── Post Fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def sample_post() -> ProjectPost:
    return ProjectPost(
        id="post-1",
        founder_name="Alice",
        founder_id="A1",
        project_name="EcoTrack",
        posted_date=datetime(2026, 10, 1, 12, 0, 0),
        description="Carbon tracking for students",
        project_field=ProjectField.AI,
        stage=ProjectStage.MVP,
        compensation="Equity",
        roles=["Frontend Dev", "Designer"],
    )


# ── Mock Port Fixtures ─────────────────────────────────────────────────────

@pytest.fixture
def mock_identity_store():
    mock = AsyncMock()
    mock.find_by_identity.return_value = None
    mock.find_by_id.return_value = None
    mock.find_by_name.return_value = None
    mock.is_blacklisted.return_value = False
    mock.delete.return_value = False
    mock.list_all.return_value = []
    return mock


@pytest.fixture
def mock_verifier():
    mock = AsyncMock()

    async def _verify(provider, identifier, token=None):
        return VerifiedIdentity(provider=provider, provider_id=identifier.strip())

    mock.verify.side_effect = _verify
    return mock


@pytest.fixture
def mock_post_repository():
    mock = AsyncMock()
    mock.get_by_id.return_value = None
    mock.list_all.return_value = []
    return mock


@pytest.fixture
def mock_file_storage():
    mock = AsyncMock()
    mock.save_upload.return_value = StoredFile(path="A1/cv.pdf", url="/uploads/A1/cv.pdf")
    mock.delete_owner_files.return_value = 0
    return mock


@pytest.fixture
def mock_text_enhancer():
    mock = AsyncMock()
    mock.enhance.return_value = "Rewritten ✨"
    return mock
