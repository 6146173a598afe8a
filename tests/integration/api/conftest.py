"""Integration test fixtures for API testing."""
from __future__ import annotations

import pytest
from httpx import AsyncClient, ASGITransport

from backend.src.adapters.inbound.fastapi_app import app
from backend.src.infrastructure.config import (
    AuthSettings,
    GeminiSettings,
    Settings,
    StorageSettings,
)
from backend.src.infrastructure.container import ApplicationContainer


@pytest.fixture
def test_settings(tmp_path):
    """Create test settings with in-memory backends."""
    return Settings(
        app_env="test",
        persistence_backend="memory",
        auth=AuthSettings(verifier="self_asserted"),
        gemini=GeminiSettings(api_key=""),
        storage=StorageSettings(
            data_dir=str(tmp_path / "data"),
            upload_dir=str(tmp_path / "uploads"),
            max_upload_size_mb=1,
        ),
    )


@pytest.fixture
def test_container(test_settings):
    """Create a test container backed by in-memory adapters."""
    return ApplicationContainer(test_settings)


@pytest.fixture
async def async_client(test_container):
    """Create an async test client for the FastAPI app."""
    app.state.container = test_container

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def alice_payload() -> dict:
    return {
        "id": "A1",
        "name": "Alice",
        "provider": "google",
        "providerId": "alice@gmail.com",
        "bio": "Building things",
        "links": [{"url": "https://linkedin.com/in/alice", "title": "LinkedIn"}],
        "contactEmail": "alice@example.com",
    }
