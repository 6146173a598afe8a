"""FastAPI dependencies resolving application services from the container."""
from __future__ import annotations

from fastapi import Request


def get_profile_service(request: Request):
    return request.app.state.container.profile_service()


def get_identity_resolver(request: Request):
    return request.app.state.container.identity_resolver()


def get_post_service(request: Request):
    return request.app.state.container.post_service()


def get_file_storage(request: Request):
    return request.app.state.container.file_storage()
