"""
FastAPI application - primary inbound adapter.
"""
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.src.core.exceptions import (
    FlowNotFoundError,
    IdentityBlacklistedError,
    IdentityVerificationError,
    InvalidPostError,
    InvalidProfileError,
    InvalidTransitionError,
    PostNotFoundError,
    StoreFailureError,
    TryoError,
    UploadValidationError,
)
from backend.src.infrastructure.config import Settings
from backend.src.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)

settings = Settings()

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    setup_logging(settings.logging.level, settings.logging.file)
    settings.validate_production()
    logger.info("Tryo backend starting up (persistence=%s)...", settings.persistence_backend)
    from backend.src.infrastructure.container import ApplicationContainer
    container = ApplicationContainer(settings)
    await container.startup()
    app.state.container = container
    yield
    logger.info("Tryo backend shutting down...")
    await container.shutdown()


app = FastAPI(
    title="Tryo API",
    description="Project and co-founder matching board",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.web.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log each request with method, path, status, and duration."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    if request.url.path.startswith("/api"):
        response.headers["cache-control"] = "no-store, no-cache, must-revalidate"
    logger.info(
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


# ── Error mapping ──────────────────────────────────────────────

def _error_response(status_code: int, exc: Exception, code: str, retryable: bool = False) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": code, "retryable": retryable},
    )


@app.exception_handler(IdentityBlacklistedError)
async def blacklisted_handler(request: Request, exc: IdentityBlacklistedError):
    return _error_response(403, exc, exc.code)


@app.exception_handler(InvalidProfileError)
async def invalid_profile_handler(request: Request, exc: InvalidProfileError):
    return _error_response(400, exc, exc.code)


@app.exception_handler(StoreFailureError)
async def store_failure_handler(request: Request, exc: StoreFailureError):
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(503, exc, exc.code, retryable=True)


@app.exception_handler(IdentityVerificationError)
async def verification_handler(request: Request, exc: IdentityVerificationError):
    return _error_response(401, exc, exc.code)


@app.exception_handler(InvalidTransitionError)
async def invalid_transition_handler(request: Request, exc: InvalidTransitionError):
    return _error_response(409, exc, exc.code)


@app.exception_handler(FlowNotFoundError)
async def flow_not_found_handler(request: Request, exc: FlowNotFoundError):
    return _error_response(404, exc, exc.code)


@app.exception_handler(PostNotFoundError)
async def post_not_found_handler(request: Request, exc: PostNotFoundError):
    return _error_response(404, exc, exc.code)


@app.exception_handler(UploadValidationError)
async def upload_validation_handler(request: Request, exc: UploadValidationError):
    return _error_response(413 if exc.too_large else 400, exc, exc.code)


@app.exception_handler(InvalidPostError)
async def invalid_post_handler(request: Request, exc: InvalidPostError):
    return _error_response(400, exc, exc.code)


@app.exception_handler(TryoError)
async def tryo_error_handler(request: Request, exc: TryoError):
    return _error_response(400, exc, exc.code, exc.retryable)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    messages = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={"detail": "; ".join(messages), "error": "invalid_request", "retryable": False},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return _error_response(400, exc, "invalid_request")


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error": "internal_error", "retryable": False},
    )


# ── API routes ─────────────────────────────────────────────────

from backend.src.adapters.inbound.api.users import router as users_router
from backend.src.adapters.inbound.api.auth import router as auth_router
from backend.src.adapters.inbound.api.posts import router as posts_router
from backend.src.adapters.inbound.api.uploads import router as uploads_router, files_router

app.include_router(users_router, prefix="/api/users", tags=["users"])
app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(posts_router, prefix="/api/posts", tags=["posts"])
app.include_router(uploads_router, prefix="/api/uploads", tags=["uploads"])
app.include_router(files_router, prefix=settings.storage.upload_url_prefix, tags=["uploads"])


@app.get("/api/health")
async def health(request: Request):
    container = request.app.state.container
    return {
        "status": "ok",
        "version": VERSION,
        "persistence_backend": container.settings.persistence_backend,
        "verifier": container.settings.auth.verifier,
    }
