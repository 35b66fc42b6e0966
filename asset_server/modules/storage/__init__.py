"""Principal-scoped blob storage for asset images."""

from .backends import BlobStorage, LocalBlobStorage, S3BlobStorage, StoredBlob, create_blob_storage
from .exceptions import BlobStorageError, EmptyUploadError, UploadTooLargeError
from .keys import asset_prefix, build_object_key, owns_object_key, sanitize_filename

__all__ = [
    "BlobStorage",
    "BlobStorageError",
    "EmptyUploadError",
    "LocalBlobStorage",
    "S3BlobStorage",
    "StoredBlob",
    "UploadTooLargeError",
    "asset_prefix",
    "build_object_key",
    "create_blob_storage",
    "owns_object_key",
    "sanitize_filename",
]
