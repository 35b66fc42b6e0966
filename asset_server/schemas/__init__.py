"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialises snake_case attributes with the camelCase keys clients expect."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TokenData(BaseModel):
    principal_id: str


class AssetResponse(CamelModel):
    id: str
    owner_id: str
    name: str
    description: Optional[str] = None
    category: str
    image_key: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PaginationResponse(CamelModel):
    total: int
    limit: int
    offset: int
    current_page: int
    total_pages: int
    has_more: bool


class AssetListResponse(CamelModel):
    assets: list[AssetResponse]
    pagination: PaginationResponse


class HealthResponse(BaseModel):
    status: str
    database: str
