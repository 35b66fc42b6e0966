"""Asset related dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from asset_server.core.container import ApplicationContainer
from asset_server.modules.assets import AssetService

from .database import get_container, get_db_session


def get_asset_service(
    container: ApplicationContainer = Depends(get_container),
    db: AsyncSession = Depends(get_db_session),
) -> AssetService:
    return AssetService.with_session(
        db,
        container.settings,
        storage=container.storage,
        activity=container.activity,
    )


__all__ = [
    "get_asset_service",
]
