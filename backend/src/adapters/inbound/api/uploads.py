"""
File upload routes.

Uploads are stored per owner id; the returned URL is what profiles keep in
``cvFilePath`` / ``portfolioFilePath``.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import FileResponse

from backend.src.adapters.inbound.api.dependencies import get_file_storage
from backend.src.core.exceptions import UploadValidationError

router = APIRouter()
files_router = APIRouter()

CHUNK_SIZE = 1024 * 1024  # 1MB


def _too_large(max_size_mb: int) -> UploadValidationError:
    return UploadValidationError(f"File too large. Maximum size: {max_size_mb}MB", too_large=True)


@router.post("")
async def upload_file(
    request: Request,
    owner_id: str = Form(...),
    kind: str = Form(""),
    file: UploadFile = File(...),
    storage=Depends(get_file_storage),
):
    """Store a document for *owner_id* and return ``{path, url}``."""
    max_size_mb = request.app.state.container.settings.storage.max_upload_size_mb
    max_size_bytes = max_size_mb * 1024 * 1024

    # Validate file size from Content-Length header (early rejection)
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > max_size_bytes + CHUNK_SIZE:
        raise _too_large(max_size_mb)

    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > max_size_bytes:
            raise _too_large(max_size_mb)
        chunks.append(chunk)

    stored = await storage.save_upload(
        owner_id=owner_id.strip(),
        filename=file.filename or "upload",
        content=b"".join(chunks),
        kind=kind.strip(),
    )
    return stored.to_dict()


@files_router.get("/{owner_id}/{filename}")
async def serve_upload(owner_id: str, filename: str, storage=Depends(get_file_storage)):
    try:
        path = storage.resolve(owner_id, filename)
    except UploadValidationError:
        raise HTTPException(status_code=404, detail="Not found")
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Not found")
    return FileResponse(
        path,
        headers={"Cache-Control": "public, max-age=31536000, immutable"},
    )
