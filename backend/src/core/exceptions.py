"""Custom exception hierarchy for Tryo."""
from __future__ import annotations


class TryoError(Exception):
    """Base exception for all Tryo errors."""

    code = "tryo_error"
    retryable = False


class IdentityBlacklistedError(TryoError):
    """Raised when a revoked identifier tries to (re)register.

    Permanent: the identifier can never be used again.
    """

    code = "identifier_blacklisted"

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Identifier is blacklisted: {identifier}")


class InvalidProfileError(TryoError):
    """Raised when a profile is missing a required field."""

    code = "invalid_profile"

    def __init__(self, missing: list[str] | None = None, message: str = "") -> None:
        self.missing = missing or []
        if not message:
            message = f"Profile is missing required fields: {', '.join(self.missing)}"
        super().__init__(message)


class StoreFailureError(TryoError):
    """Raised when the identity store cannot persist a write."""

    code = "store_failure"
    retryable = True


class IdentityVerificationError(TryoError):
    """Raised when an identity verifier rejects the asserted identifier."""

    code = "verification_failed"


class InvalidTransitionError(TryoError):
    """Raised when a registration flow is driven through an illegal edge."""

    code = "invalid_transition"


class FlowNotFoundError(TryoError):
    """Raised when a registration flow id is unknown."""

    code = "not_found"

    def __init__(self, flow_id: str) -> None:
        self.flow_id = flow_id
        super().__init__(f"Registration flow not found: {flow_id}")


class PostNotFoundError(TryoError):
    """Raised when a post cannot be found."""

    code = "not_found"

    def __init__(self, post_id: str) -> None:
        self.post_id = post_id
        super().__init__(f"Post not found: {post_id}")


class InvalidPostError(TryoError):
    """Raised when a post is missing its name or description."""

    code = "invalid_post"


class UploadValidationError(TryoError):
    """Raised when an uploaded file fails validation."""

    code = "invalid_upload"

    def __init__(self, message: str, too_large: bool = False) -> None:
        self.too_large = too_large
        super().__init__(message)
