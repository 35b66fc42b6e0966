"""Blob storage errors."""


class BlobStorageError(Exception):
    """Raised when a blob cannot be written or removed."""


class EmptyUploadError(BlobStorageError):
    """Raised when the uploaded file has no content."""


class UploadTooLargeError(BlobStorageError):
    """Raised when the uploaded file exceeds the configured size limit."""
