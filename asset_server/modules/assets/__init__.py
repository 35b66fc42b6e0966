"""Asset domain exports."""

from .exceptions import (
    AssetConflictError,
    AssetError,
    AssetForbiddenError,
    AssetNotFoundError,
    AssetPersistenceError,
    ValidationError,
)
from .models import ASSET_CATEGORIES, UNSET, Asset, AssetCreateInput, AssetPage, AssetUpdateInput, Pagination
from .service import AssetService

__all__ = [
    "ASSET_CATEGORIES",
    "UNSET",
    "Asset",
    "AssetConflictError",
    "AssetCreateInput",
    "AssetError",
    "AssetForbiddenError",
    "AssetNotFoundError",
    "AssetPage",
    "AssetPersistenceError",
    "AssetService",
    "AssetUpdateInput",
    "Pagination",
    "ValidationError",
]
