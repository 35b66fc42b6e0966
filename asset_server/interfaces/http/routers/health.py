"""Health check endpoint."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError

from asset_server.core.container import ApplicationContainer
from asset_server.interfaces.http import responses
from asset_server.interfaces.http.deps import get_container
from asset_server.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", summary="Check database connectivity")
async def health(container: ApplicationContainer = Depends(get_container)):
    if container.database is None or not container.database.is_open:
        return responses.error("Database not ready", status.HTTP_503_SERVICE_UNAVAILABLE)
    try:
        await container.database.ping()
    except (SQLAlchemyError, OSError) as exc:
        return responses.error("Database not ready", status.HTTP_503_SERVICE_UNAVAILABLE, cause=exc)
    return responses.success(HealthResponse(status="ok", database="ok").model_dump())
