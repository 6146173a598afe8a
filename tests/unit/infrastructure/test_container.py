"""Unit tests for ApplicationContainer wiring."""
from __future__ import annotations

import pytest

from backend.src.infrastructure.config import (
    AuthSettings,
    GeminiSettings,
    Settings,
    StorageSettings,
)
from backend.src.infrastructure.container import ApplicationContainer


class TestApplicationContainer:
    """Test that container accessors build the configured adapters."""

    @pytest.fixture
    def container(self, tmp_path) -> ApplicationContainer:
        settings = Settings(
            app_env="development",
            persistence_backend="memory",
            gemini=GeminiSettings(api_key=""),
            auth=AuthSettings(verifier="self_asserted"),
            storage=StorageSettings(
                data_dir=str(tmp_path / "data"),
                upload_dir=str(tmp_path / "uploads"),
            ),
        )
        return ApplicationContainer(settings)

    def test_identity_store_in_memory(self, container: ApplicationContainer):
        store = container.identity_store()
        assert "InMemory" in type(store).__name__

    def test_identity_store_json(self, tmp_path):
        settings = Settings(
            persistence_backend="json",
            storage=StorageSettings(data_dir=str(tmp_path / "data")),
        )
        store = ApplicationContainer(settings).identity_store()
        assert type(store).__name__ == "JsonIdentityStore"
        assert (tmp_path / "data" / "users.json").exists()

    def test_identity_store_postgres(self):
        store = ApplicationContainer(Settings(persistence_backend="postgres")).identity_store()
        assert type(store).__name__ == "PostgresIdentityStore"

    def test_unknown_backend(self):
        container = ApplicationContainer(Settings(persistence_backend="sqlite"))
        with pytest.raises(ValueError):
            container.identity_store()

    def test_self_asserted_verifier_by_default(self, container: ApplicationContainer):
        assert type(container.identity_verifier()).__name__ == "SelfAssertedVerifier"

    def test_oauth_verifier(self):
        settings = Settings(auth=AuthSettings(verifier="oauth", google_client_id="cid"))
        verifier = ApplicationContainer(settings).identity_verifier()
        assert type(verifier).__name__ == "OAuthTokenVerifier"

    def test_passthrough_enhancer_without_key(self, container: ApplicationContainer):
        assert type(container.text_enhancer()).__name__ == "PassthroughTextEnhancer"

    def test_file_storage(self, container: ApplicationContainer, tmp_path):
        storage = container.file_storage()
        assert storage.base_dir == (tmp_path / "uploads").resolve()

    def test_session_store(self, container: ApplicationContainer):
        assert container.session_store() is not None

    def test_post_repository_in_memory(self, container: ApplicationContainer):
        assert "InMemory" in type(container.post_repository()).__name__

    def test_identity_resolver(self, container: ApplicationContainer):
        assert container.identity_resolver() is not None

    def test_profile_service(self, container: ApplicationContainer):
        assert container.profile_service() is not None

    def test_post_service(self, container: ApplicationContainer):
        assert container.post_service() is not None

    def test_caching(self, container: ApplicationContainer):
        """Verify that the same instance is returned on repeated calls."""
        store1 = container.identity_store()
        store2 = container.identity_store()
        assert store1 is store2

    def test_services_share_store(self, container: ApplicationContainer):
        resolver = container.identity_resolver()
        profiles = container.profile_service()
        assert resolver._store is profiles._store

    @pytest.mark.asyncio
    async def test_shutdown_clears_cache(self, container: ApplicationContainer):
        await container.startup()
        first = container.identity_store()
        await container.shutdown()
        assert container.identity_store() is not first
