"""Asset CRUD endpoints.

Each handler validates its input, lets the service apply the ownership rule and
perform the single store call, and returns the uniform envelope. Domain errors are
turned into envelopes by the exception handlers registered in ``asset_server.main``.
"""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, File, Form, Path, Query, UploadFile, status

from asset_server.core.security import get_current_principal
from asset_server.interfaces.http import responses
from asset_server.interfaces.http.deps import get_asset_service
from asset_server.modules.assets import Asset, AssetService
from asset_server.modules.assets.pagination import parse_limit, parse_offset
from asset_server.modules.assets.validation import parse_create_payload, parse_update_payload
from asset_server.schemas import AssetListResponse, AssetResponse

router = APIRouter()


def _to_payload(asset: Asset) -> dict[str, Any]:
    return AssetResponse.model_validate(asset).model_dump(mode="json", by_alias=True)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create an asset")
async def create_asset(
    body: Any = Body(default=None),
    principal_id: str = Depends(get_current_principal),
    service: AssetService = Depends(get_asset_service),
):
    payload = parse_create_payload(body, service.limits)
    asset = await service.create_asset(principal_id, payload)
    return responses.success(_to_payload(asset), status.HTTP_201_CREATED)


@router.post("/with-image", status_code=status.HTTP_201_CREATED, summary="Create an asset and upload its image")
async def create_asset_with_image(
    owner_id: Optional[str] = Form(default=None, alias="ownerId"),
    name: Optional[str] = Form(default=None),
    category: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    file: UploadFile = File(...),
    principal_id: str = Depends(get_current_principal),
    service: AssetService = Depends(get_asset_service),
):
    try:
        payload = parse_create_payload(
            {"ownerId": owner_id, "name": name, "category": category, "description": description},
            service.limits,
        )
        asset = await service.create_with_image(
            principal_id,
            payload,
            file,
            filename=file.filename,
            content_type=file.content_type,
        )
    finally:
        await file.close()
    return responses.success(_to_payload(asset), status.HTTP_201_CREATED)


@router.get("", summary="List the caller's assets")
async def list_assets(
    owner_id: Optional[str] = Query(default=None, alias="ownerId"),
    category: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    offset: Optional[str] = Query(default=None),
    principal_id: str = Depends(get_current_principal),
    service: AssetService = Depends(get_asset_service),
):
    page = await service.list_assets(
        principal_id,
        owner_id=owner_id,
        category=category,
        limit=parse_limit(limit, service.limits.default_page_size, service.limits.max_page_size),
        offset=parse_offset(offset),
    )
    result = AssetListResponse.model_validate(page)
    return responses.success(result.model_dump(mode="json", by_alias=True))


@router.get("/{asset_id}", summary="Get an asset")
async def get_asset(
    asset_id: str = Path(...),
    principal_id: str = Depends(get_current_principal),
    service: AssetService = Depends(get_asset_service),
):
    asset = await service.get_asset(principal_id, asset_id)
    return responses.success(_to_payload(asset))


@router.patch("/{asset_id}", summary="Update an asset")
async def update_asset(
    asset_id: str = Path(...),
    body: Any = Body(default=None),
    principal_id: str = Depends(get_current_principal),
    service: AssetService = Depends(get_asset_service),
):
    payload = parse_update_payload(body, service.limits)
    asset = await service.update_asset(principal_id, asset_id, payload)
    return responses.success(_to_payload(asset))


@router.delete("/{asset_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an asset")
async def delete_asset(
    asset_id: str = Path(...),
    principal_id: str = Depends(get_current_principal),
    service: AssetService = Depends(get_asset_service),
):
    await service.delete_asset(principal_id, asset_id)
    return responses.no_content()


@router.post("/{asset_id}/image", summary="Upload and attach an image")
async def attach_image(
    asset_id: str = Path(...),
    file: UploadFile = File(...),
    principal_id: str = Depends(get_current_principal),
    service: AssetService = Depends(get_asset_service),
):
    try:
        asset = await service.attach_image(
            principal_id,
            asset_id,
            file,
            filename=file.filename,
            content_type=file.content_type,
        )
    finally:
        await file.close()
    return responses.success(_to_payload(asset))
