"""Uniform response envelope: ``{"success": bool, "data" | "error", "field"?}``."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Response, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Api-Key, X-Request-ID",
    "Access-Control-Allow-Credentials": "true",
}


def _headers(extra: Optional[dict[str, str]] = None) -> dict[str, str]:
    headers = dict(CORS_HEADERS)
    if extra:
        headers.update(extra)
    return headers


def success(payload: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "data": payload},
        headers=_headers(),
    )


def no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=_headers())


def error(
    message: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    cause: Optional[BaseException] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    if status_code >= 500:
        logger.error("Error response: %s (status=%s)", message, status_code, exc_info=cause)
    elif status_code == status.HTTP_404_NOT_FOUND:
        logger.debug("Error response: %s (status=%s)", message, status_code)
    else:
        logger.warning("Error response: %s (status=%s) cause=%r", message, status_code, cause)

    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=_headers(headers),
    )


def validation_error(message: str, field: Optional[str] = None) -> JSONResponse:
    logger.info("Validation error: %s (field=%s)", message, field)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": message, "field": field},
        headers=_headers(),
    )


__all__ = ["CORS_HEADERS", "error", "no_content", "success", "validation_error"]
