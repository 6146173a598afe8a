"""
Dependency injection container.
Wires together ports and adapters based on configuration.
"""
from __future__ import annotations

import logging
from typing import Optional

from backend.src.infrastructure.config import Settings

logger = logging.getLogger(__name__)


class ApplicationContainer:
    """Simplified container that builds concrete instances from settings.

    Usage::

        container = ApplicationContainer(settings)
        service = container.identity_resolver()
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._cache: dict[str, object] = {}

    def _get_or_create(self, key: str, factory):
        if key not in self._cache:
            self._cache[key] = factory(self.settings)
        return self._cache[key]

    # ── Lazy factory helpers ──────────────────────────────────────

    @staticmethod
    def _build_db_engine(settings: Settings):
        from backend.src.infrastructure.database import get_async_engine
        return get_async_engine(
            settings.database.url,
            echo=settings.database.echo,
            pool_size=settings.database.pool_size,
            max_overflow=settings.database.max_overflow,
        )

    def _build_identity_store(self, settings: Settings):
        backend = settings.persistence_backend
        if backend == "postgres":
            from backend.src.adapters.outbound.persistence.postgres_identity_store import PostgresIdentityStore
            from backend.src.infrastructure.database import get_async_session_factory
            return PostgresIdentityStore(get_async_session_factory(self.db_engine()))
        if backend == "memory":
            from backend.src.adapters.outbound.persistence.in_memory_identity_store import InMemoryIdentityStore
            return InMemoryIdentityStore()
        if backend != "json":
            raise ValueError(f"Unknown persistence backend: {backend}")
        from backend.src.adapters.outbound.persistence.json_identity_store import JsonIdentityStore
        return JsonIdentityStore(data_dir=settings.storage.data_dir)

    @staticmethod
    def _build_identity_verifier(settings: Settings):
        if settings.auth.verifier == "oauth":
            from backend.src.adapters.outbound.auth.oauth_token_verifier import OAuthTokenVerifier
            return OAuthTokenVerifier(
                google_client_id=settings.auth.google_client_id,
                facebook_app_id=settings.auth.facebook_app_id,
                facebook_app_secret=settings.auth.facebook_app_secret,
                timeout=settings.auth.request_timeout,
            )
        from backend.src.adapters.outbound.auth.self_asserted_verifier import SelfAssertedVerifier
        return SelfAssertedVerifier()

    @staticmethod
    def _build_session_store(settings: Settings):
        from backend.src.adapters.outbound.persistence.in_memory_session_store import InMemorySessionStore
        return InMemorySessionStore(ttl_minutes=settings.auth.flow_ttl_minutes)

    @staticmethod
    def _build_post_repository(settings: Settings):
        from backend.src.adapters.outbound.persistence.in_memory_post_repo import InMemoryPostRepository
        return InMemoryPostRepository()

    @staticmethod
    def _build_file_storage(settings: Settings):
        from backend.src.adapters.outbound.persistence.local_file_storage import LocalFileStorage
        return LocalFileStorage(
            base_dir=settings.storage.upload_dir,
            url_prefix=settings.storage.upload_url_prefix,
            allowed_extensions=settings.storage.allowed_extensions,
            max_size_bytes=settings.storage.max_upload_size_mb * 1024 * 1024,
        )

    @staticmethod
    def _build_text_enhancer(settings: Settings):
        if settings.gemini.api_key:
            from backend.src.adapters.outbound.ai.gemini_text_enhancer import GeminiTextEnhancer
            return GeminiTextEnhancer(
                api_key=settings.gemini.api_key,
                model=settings.gemini.text_model,
            )
        logger.info("GEMINI_API_KEY not set; description enhancement is a no-op")
        from backend.src.adapters.outbound.ai.passthrough_text_enhancer import PassthroughTextEnhancer
        return PassthroughTextEnhancer()

    # ── Port accessors ─────────────────────────────────────────────

    def db_engine(self):
        return self._get_or_create("db_engine", self._build_db_engine)

    def identity_store(self):
        return self._get_or_create("identity_store", self._build_identity_store)

    def identity_verifier(self):
        return self._get_or_create("identity_verifier", self._build_identity_verifier)

    def session_store(self):
        return self._get_or_create("session_store", self._build_session_store)

    def post_repository(self):
        return self._get_or_create("post_repository", self._build_post_repository)

    def file_storage(self):
        return self._get_or_create("file_storage", self._build_file_storage)

    def text_enhancer(self):
        return self._get_or_create("text_enhancer", self._build_text_enhancer)

    # ── Application services ───────────────────────────────────────

    def identity_resolver(self):
        from backend.src.application.identity_resolver import IdentityResolver
        return IdentityResolver(
            store=self.identity_store(),
            verifier=self.identity_verifier(),
            sessions=self.session_store(),
        )

    def profile_service(self):
        from backend.src.application.profile_service import ProfileService
        return ProfileService(
            store=self.identity_store(),
            file_storage=self.file_storage(),
        )

    def post_service(self):
        from backend.src.application.post_service import PostService
        return PostService(
            repository=self.post_repository(),
            store=self.identity_store(),
            enhancer=self.text_enhancer(),
            trending_window_days=self.settings.posts.trending_window_days,
            description_max_length=self.settings.posts.description_max_length,
        )

    # ── Lifecycle ──────────────────────────────────────────────────

    async def startup(self) -> None:
        """Eagerly build the identity store so data directories exist before serving."""
        self.identity_store()
        if self.settings.persistence_backend == "postgres" and self.settings.database.auto_create:
            from backend.src.infrastructure.database import create_tables
            await create_tables(self.db_engine())
            logger.info("Database tables ensured")

    async def shutdown(self) -> None:
        verifier = self._cache.get("identity_verifier")
        if verifier is not None and hasattr(verifier, "aclose"):
            await verifier.aclose()
        engine = self._cache.get("db_engine")
        if engine is not None:
            await engine.dispose()
        self._cache.clear()
