"""Blob storage backends: local filesystem and S3."""

from __future__ import annotations

import asyncio
import hashlib
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from asset_server.core.config import Settings, StorageSettings

from .exceptions import BlobStorageError, EmptyUploadError, UploadTooLargeError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class UploadSource(Protocol):
    async def read(self, size: int = -1) -> bytes:
        ...


@dataclass(slots=True)
class StoredBlob:
    key: str
    size_bytes: int
    checksum_sha256: str
    content_type: Optional[str]


class BlobStorage(Protocol):
    async def save(self, key: str, upload: UploadSource, content_type: Optional[str] = None) -> StoredBlob:
        ...

    async def delete(self, key: str) -> None:
        ...


class LocalBlobStorage:
    """Stores blobs as files below ``root``, mirroring the object key as a relative path."""

    def __init__(self, root: Path, max_bytes: int) -> None:
        self.root = root.resolve()
        self.max_bytes = max_bytes

    def path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root not in path.parents:
            raise BlobStorageError(f"object key escapes storage root: {key}")
        return path

    async def save(self, key: str, upload: UploadSource, content_type: Optional[str] = None) -> StoredBlob:
        target_path = self.path_for(key)
        hasher = hashlib.sha256()
        total_size = 0

        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            with target_path.open("wb") as buffer:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    total_size += len(chunk)
                    if total_size > self.max_bytes:
                        raise UploadTooLargeError(f"file must not exceed {self.max_bytes} bytes")
                    buffer.write(chunk)
                    hasher.update(chunk)
        except UploadTooLargeError:
            target_path.unlink(missing_ok=True)
            raise
        except OSError as exc:
            target_path.unlink(missing_ok=True)
            raise BlobStorageError(f"failed to write {key}") from exc

        if total_size == 0:
            target_path.unlink(missing_ok=True)
            raise EmptyUploadError("file is empty")

        logger.info("Stored blob %s (%d bytes)", key, total_size)
        return StoredBlob(
            key=key,
            size_bytes=total_size,
            checksum_sha256=hasher.hexdigest(),
            content_type=content_type,
        )

    async def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise BlobStorageError(f"failed to delete {key}") from exc
        logger.info("Deleted blob %s", key)


class S3BlobStorage:
    """Stores blobs in a single bucket; the bucket policy enforces per-principal prefixes."""

    def __init__(self, client, bucket: str, max_bytes: int) -> None:
        self._client = client
        self.bucket = bucket
        self.max_bytes = max_bytes

    async def save(self, key: str, upload: UploadSource, content_type: Optional[str] = None) -> StoredBlob:
        hasher = hashlib.sha256()
        body = io.BytesIO()
        while True:
            chunk = await upload.read(CHUNK_SIZE)
            if not chunk:
                break
            if body.tell() + len(chunk) > self.max_bytes:
                raise UploadTooLargeError(f"file must not exceed {self.max_bytes} bytes")
            body.write(chunk)
            hasher.update(chunk)

        size = body.tell()
        if size == 0:
            raise EmptyUploadError("file is empty")

        body.seek(0)
        extra = {"ContentType": content_type} if content_type else {}
        try:
            await asyncio.to_thread(
                self._client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=body,
                **extra,
            )
        except (BotoCoreError, ClientError) as exc:
            raise BlobStorageError(f"failed to upload {key}") from exc

        logger.info("Uploaded blob s3://%s/%s (%d bytes)", self.bucket, key, size)
        return StoredBlob(key=key, size_bytes=size, checksum_sha256=hasher.hexdigest(), content_type=content_type)

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(self._client.delete_object, Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise BlobStorageError(f"failed to delete {key}") from exc


def get_s3_client(storage: StorageSettings):
    # For AWS S3, endpoint_url must be None.
    # For S3-compatible providers (MinIO/R2), endpoint_url is required.
    return boto3.client(
        "s3",
        endpoint_url=(storage.s3_endpoint_url or "").strip() or None,
        aws_access_key_id=storage.s3_access_key_id,
        aws_secret_access_key=storage.s3_secret_access_key,
        region_name=storage.s3_region_name,
        config=Config(signature_version="s3v4", retries={"max_attempts": 5, "mode": "standard"}),
    )


def create_blob_storage(settings: Settings) -> BlobStorage:
    storage = settings.storage
    if storage.backend == "s3":
        return S3BlobStorage(get_s3_client(storage), storage.s3_bucket, storage.max_upload_bytes)
    return LocalBlobStorage(Path(storage.local_dir), storage.max_upload_bytes)
