from backend.src.application.identity_resolver import IdentityResolver
from backend.src.application.post_service import PostService
from backend.src.application.profile_service import ProfileService

__all__ = [
    "IdentityResolver",
    "ProfileService",
    "PostService",
]
