"""Asset service: the CRUD use cases and the ownership rule."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from asset_server.core.config import AssetSettings, Settings, StorageSettings
from asset_server.db.models import generate_uuid
from asset_server.modules.activity import ActivityRecorder, LoggingActivityRecorder
from asset_server.modules.storage import (
    BlobStorage,
    BlobStorageError,
    EmptyUploadError,
    UploadTooLargeError,
    asset_prefix,
    build_object_key,
    owns_object_key,
)
from asset_server.modules.storage.backends import UploadSource

from .exceptions import (
    AssetConflictError,
    AssetForbiddenError,
    AssetNotFoundError,
    AssetPersistenceError,
    ValidationError,
)
from .models import Asset, AssetCreateInput, AssetPage, AssetUpdateInput
from .pagination import build_pagination
from .repository import AssetRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class AssetService:
    repository: AssetRepository
    limits: AssetSettings = field(default_factory=AssetSettings)
    storage_settings: StorageSettings = field(default_factory=StorageSettings)
    storage: Optional[BlobStorage] = None
    activity: ActivityRecorder = field(default_factory=LoggingActivityRecorder)

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        settings: Settings,
        *,
        storage: Optional[BlobStorage] = None,
        activity: Optional[ActivityRecorder] = None,
    ) -> "AssetService":
        # Imported here to avoid a circular import with the repository module.
        from asset_server.infrastructure.database.repositories.asset_repository import SqlAssetRepository

        return cls(
            SqlAssetRepository(session),
            limits=settings.assets,
            storage_settings=settings.storage,
            storage=storage,
            activity=activity or LoggingActivityRecorder(),
        )

    async def create_asset(self, principal_id: str, payload: AssetCreateInput) -> Asset:
        if payload.owner_id != principal_id:
            raise AssetForbiddenError()
        self._check_image_key(principal_id, payload.image_key)

        async def _create() -> Asset:
            return await self.repository.create(
                asset_id=generate_uuid(),
                owner_id=payload.owner_id,
                name=payload.name,
                category=payload.category,
                description=payload.description,
                image_key=payload.image_key,
            )

        asset = await self._persist(_create, "Failed to create asset")
        logger.info("Asset created: %s", asset.id)
        await self.activity.record(asset_id=asset.id, principal_id=principal_id, action="created")
        return asset

    async def get_asset(self, principal_id: str, asset_id: str) -> Asset:
        asset = await self._load(asset_id, "Failed to retrieve asset")
        if self.limits.owner_only_reads:
            self.ensure_owner(asset, principal_id)
        return asset

    async def list_assets(
        self,
        principal_id: str,
        *,
        owner_id: Optional[str] = None,
        category: Optional[str] = None,
        limit: int,
        offset: int,
    ) -> AssetPage:
        # Listings are always scoped to the caller; another owner's id matches nothing.
        if owner_id and owner_id != principal_id:
            return AssetPage(assets=[], pagination=build_pagination(0, limit, offset))

        category_filter = category.strip().lower() if category and category.strip() else None

        async def _list():
            return await self.repository.list_assets(
                owner_id=principal_id,
                category=category_filter,
                limit=limit,
                offset=offset,
            )

        assets, total = await self._persist(_list, "Failed to list assets")
        logger.debug("Retrieved %d assets (total: %d)", len(assets), total)
        return AssetPage(assets=list(assets), pagination=build_pagination(total, limit, offset))

    async def update_asset(self, principal_id: str, asset_id: str, payload: AssetUpdateInput) -> Asset:
        asset = await self._load(asset_id, "Failed to update asset")
        self.ensure_owner(asset, principal_id)

        changes = payload.changes()
        if "image_key" in changes:
            self._check_image_key(principal_id, changes["image_key"])

        updated = await self._persist(lambda: self.repository.update(asset_id, changes), "Failed to update asset")
        logger.info("Asset updated: %s", asset_id)
        await self.activity.record(
            asset_id=asset_id,
            principal_id=principal_id,
            action="updated",
            details={"fields": sorted(changes)},
        )
        return updated

    async def delete_asset(self, principal_id: str, asset_id: str) -> None:
        asset = await self._load(asset_id, "Failed to delete asset")
        self.ensure_owner(asset, principal_id)

        await self._persist(lambda: self.repository.delete(asset_id), "Failed to delete asset")
        await self._persist(self.repository.commit, "Failed to delete asset")
        logger.info("Asset deleted: %s", asset_id)
        await self.activity.record(asset_id=asset_id, principal_id=principal_id, action="deleted")
        await self._discard_image(principal_id, asset)

    async def attach_image(
        self,
        principal_id: str,
        asset_id: str,
        upload: UploadSource,
        *,
        filename: Optional[str],
        content_type: Optional[str] = None,
    ) -> Asset:
        """Upload an image under the principal's folder and point the asset at it."""
        asset = await self._load(asset_id, "Failed to update asset")
        self.ensure_owner(asset, principal_id)
        if self.storage is None:
            raise AssetPersistenceError("Image storage is not configured")

        try:
            key = build_object_key(principal_id, asset.id, filename, self.storage_settings.key_prefix)
            blob = await self.storage.save(key, upload, content_type)
        except EmptyUploadError as exc:
            raise ValidationError("file is empty", "file") from exc
        except UploadTooLargeError as exc:
            raise ValidationError(str(exc), "file") from exc
        except (BlobStorageError, ValueError) as exc:
            raise AssetPersistenceError("Failed to upload image") from exc

        updated = await self._persist(
            lambda: self.repository.update(asset.id, {"image_key": blob.key}),
            "Failed to update asset",
        )
        await self.activity.record(
            asset_id=asset.id,
            principal_id=principal_id,
            action="image_attached",
            details={"image_key": blob.key, "size_bytes": blob.size_bytes, "checksum_sha256": blob.checksum_sha256},
        )
        return updated

    async def create_with_image(
        self,
        principal_id: str,
        payload: AssetCreateInput,
        upload: UploadSource,
        *,
        filename: Optional[str],
        content_type: Optional[str] = None,
    ) -> Asset:
        """Create an asset, then upload and attach its image.

        The two steps are not a transaction. The created asset is committed first and
        is returned without an image if the upload or the attach fails.
        """
        asset = await self.create_asset(principal_id, payload)
        await self._persist(self.repository.commit, "Failed to create asset")

        try:
            return await self.attach_image(
                principal_id,
                asset.id,
                upload,
                filename=filename,
                content_type=content_type,
            )
        except (ValidationError, AssetPersistenceError) as exc:
            logger.warning("Asset %s created without image: %s", asset.id, exc.message, exc_info=exc.__cause__)
            await self.repository.rollback()
            return asset

    @staticmethod
    def ensure_owner(asset: Asset, principal_id: str) -> None:
        if asset.owner_id != principal_id:
            logger.warning("Principal %s denied access to asset %s", principal_id, asset.id)
            raise AssetForbiddenError()

    async def _discard_image(self, principal_id: str, asset: Asset) -> None:
        """Best-effort removal of an uploaded image once its asset row is gone."""
        if self.storage is None or not asset.image_key:
            return
        # Only blobs this service wrote for the asset; a client-supplied key may be shared.
        folder = asset_prefix(principal_id, asset.id, self.storage_settings.key_prefix)
        if not asset.image_key.startswith(folder) or ".." in asset.image_key.split("/"):
            return
        try:
            await self.storage.delete(asset.image_key)
        except BlobStorageError as exc:
            logger.warning("Image %s of deleted asset %s was not removed: %s", asset.image_key, asset.id, exc)

    def _check_image_key(self, principal_id: str, image_key: Optional[str]) -> None:
        if image_key is None:
            return
        if not owns_object_key(principal_id, image_key, self.storage_settings.key_prefix):
            raise ValidationError("imageKey must reference a file in the owner's folder", "imageKey")

    async def _load(self, asset_id: str, failure_message: str) -> Asset:
        asset = await self._persist(lambda: self.repository.get_by_id(asset_id), failure_message)
        if asset is None:
            raise AssetNotFoundError()
        return asset

    @staticmethod
    async def _persist(operation: Callable[[], Awaitable[T]], failure_message: str) -> T:
        try:
            return await operation()
        except IntegrityError as exc:
            raise AssetConflictError() from exc
        except SQLAlchemyError as exc:
            raise AssetPersistenceError(failure_message) from exc
