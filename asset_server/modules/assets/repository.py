"""Repository protocol for assets."""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .models import Asset


class AssetRepository(Protocol):
    """Abstract repository interface for asset persistence."""

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
        ...

    async def get_by_id(self, asset_id: str) -> Asset | None:
        ...

    async def list_assets(
        self,
        *,
        owner_id: str,
        category: Optional[str],
        limit: int,
        offset: int,
    ) -> tuple[Sequence[Asset], int]:
        ...

    async def update(self, asset_id: str, values: dict[str, Any]) -> Asset:
        ...

    async def delete(self, asset_id: str) -> None:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...
