from backend.src.ports.outbound.file_storage_port import FileStoragePort
from backend.src.ports.outbound.identity_store_port import IdentityStorePort
from backend.src.ports.outbound.identity_verifier_port import IdentityVerifierPort
from backend.src.ports.outbound.post_repository_port import PostRepositoryPort
from backend.src.ports.outbound.registration_session_store_port import RegistrationSessionStorePort
from backend.src.ports.outbound.text_enhancement_port import TextEnhancementPort

__all__ = [
    "IdentityStorePort",
    "IdentityVerifierPort",
    "FileStoragePort",
    "TextEnhancementPort",
    "PostRepositoryPort",
    "RegistrationSessionStorePort",
]
