from backend.src.ports.inbound.manage_posts_use_case import ManagePostsUseCase
from backend.src.ports.inbound.manage_profile_use_case import ManageProfileUseCase
from backend.src.ports.inbound.resolve_identity_use_case import ResolveIdentityUseCase

__all__ = [
    "ResolveIdentityUseCase",
    "ManageProfileUseCase",
    "ManagePostsUseCase",
]
