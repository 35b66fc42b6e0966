"""SQLAlchemy implementation of the asset repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from asset_server.db.models import Asset as AssetModel, utcnow
from asset_server.modules.assets.exceptions import AssetNotFoundError
from asset_server.modules.assets.models import Asset
from asset_server.modules.assets.repository import AssetRepository


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on the way back.
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class SqlAssetRepository(AssetRepository):
    """Asset repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        asset_id: str,
        owner_id: str,
        name: str,
        category: str,
        description: Optional[str],
        image_key: Optional[str],
    ) -> Asset:
        model = AssetModel(
            id=asset_id,
            owner_id=owner_id,
            name=name,
            category=category,
            description=description,
            image_key=image_key,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def get_by_id(self, asset_id: str) -> Asset | None:
        model = await self._get_model(asset_id)
        return self._to_domain(model) if model else None

    async def list_assets(
        self,
        *,
        owner_id: str,
        category: Optional[str],
        limit: int,
        offset: int,
    ) -> tuple[Sequence[Asset], int]:
        predicates = [AssetModel.owner_id == owner_id]
        if category:
            predicates.append(AssetModel.category == category)

        query = (
            select(AssetModel)
            .where(*predicates)
            .order_by(AssetModel.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        count_query = select(func.count(AssetModel.id)).where(*predicates)

        result = await self._session.execute(query)
        assets = [self._to_domain(model) for model in result.scalars().all()]
        total = (await self._session.execute(count_query)).scalar() or 0
        return assets, int(total)

    async def update(self, asset_id: str, values: dict[str, Any]) -> Asset:
        model = await self._get_model(asset_id)
        if model is None:
            raise AssetNotFoundError()

        for key, value in values.items():
            setattr(model, key, value)
        # An update without changes still counts as a write.
        model.updated_at = utcnow()

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def delete(self, asset_id: str) -> None:
        stmt = delete(AssetModel).where(AssetModel.id == asset_id)
        await self._session.execute(stmt)
        await self._session.flush()

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def _get_model(self, asset_id: str) -> AssetModel | None:
        stmt = select(AssetModel).where(AssetModel.id == asset_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: AssetModel) -> Asset:
        return Asset(
            id=str(model.id),
            owner_id=model.owner_id,
            name=model.name,
            category=model.category,
            description=model.description,
            image_key=model.image_key,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )
