from backend.src.core.value_objects.profile_link import ProfileLink, normalize_links
from backend.src.core.value_objects.stored_file import StoredFile

__all__ = ["ProfileLink", "normalize_links", "StoredFile"]
