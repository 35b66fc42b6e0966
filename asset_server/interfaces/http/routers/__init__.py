"""HTTP routers."""

from fastapi import APIRouter

from . import assets, health


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(health.router, tags=["health"])
    router.include_router(assets.router, prefix="/assets", tags=["assets"])
    return router


__all__ = [
    "create_api_router",
]
