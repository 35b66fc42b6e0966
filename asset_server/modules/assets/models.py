"""Domain models for assets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

ASSET_CATEGORIES: tuple[str, ...] = ("image", "document", "video", "other")

# Fields a client may never send in an update body, with the label used in errors.
IMMUTABLE_FIELDS: dict[str, str] = {
    "id": "ID",
    "ownerId": "Owner ID",
    "createdAt": "Created at",
    "updatedAt": "Updated at",
}


@dataclass(slots=True)
class Asset:
    id: str
    owner_id: str
    name: str
    category: str
    description: Optional[str]
    image_key: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True)
class AssetCreateInput:
    owner_id: str
    name: str
    category: str
    description: Optional[str] = None
    image_key: Optional[str] = None


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class AssetUpdateInput:
    name: str | object = UNSET
    category: str | object = UNSET
    description: Optional[str] | object = UNSET
    image_key: Optional[str] | object = UNSET

    def changes(self) -> dict[str, Optional[str]]:
        """Only the fields that were supplied, keyed by attribute name."""
        values = {
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "image_key": self.image_key,
        }
        return {key: value for key, value in values.items() if value is not UNSET}


@dataclass(slots=True)
class Pagination:
    total: int
    limit: int
    offset: int
    current_page: int
    total_pages: int
    has_more: bool


@dataclass(slots=True)
class AssetPage:
    """A page of assets together with its pagination metadata."""

    assets: list[Asset]
    pagination: Pagination
