"""Asset domain specific exceptions."""

from __future__ import annotations


class AssetError(Exception):
    """Base class for asset domain errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AssetError):
    """Raised when client input is missing, malformed or out of range."""

    status_code = 400
    default_message = "Invalid request"

    def __init__(self, message: str | None = None, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class AssetNotFoundError(AssetError):
    """Raised when the requested asset does not exist."""

    status_code = 404
    default_message = "Asset not found"


class AssetForbiddenError(AssetError):
    """Raised when the requesting principal does not own the asset."""

    status_code = 403
    default_message = "Forbidden"


class AssetConflictError(AssetError):
    """Raised when persisting an asset violates a uniqueness constraint."""

    status_code = 409
    default_message = "Asset already exists"


class AssetPersistenceError(AssetError):
    """Raised when the backing store fails. The message is safe to show to clients."""

    status_code = 500
    default_message = "Database error occurred"
