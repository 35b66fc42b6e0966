"""Reusable FastAPI dependencies."""

from .assets import get_asset_service
from .database import get_container, get_db_session

__all__ = [
    "get_asset_service",
    "get_container",
    "get_db_session",
]
