import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from asset_server import __version__
from asset_server.core.config import Settings, get_settings
from asset_server.core.container import ApplicationContainer
from asset_server.interfaces.http import responses
from asset_server.interfaces.http.routers import create_api_router
from asset_server.modules.assets import AssetError, ValidationError

logger = logging.getLogger("asset_server")


def _body_error_message(exc: RequestValidationError) -> tuple[str, Optional[str]]:
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if err.get("type") == "json_invalid":
            return "Invalid JSON in request body", None
        if loc and loc[0] in {"body", "query", "path"}:
            field = loc[-1] if len(loc) > 1 else None
            if loc[0] == "body" and field is None:
                return "Invalid request body", None
            return f"{field} is invalid" if field else "Invalid request", field
    return "Invalid request", None


def create_app(settings: Optional[Settings] = None, container: Optional[ApplicationContainer] = None) -> FastAPI:
    settings = settings or get_settings()
    container = container or ApplicationContainer(settings=settings)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await container.open()
        try:
            yield
        finally:
            await container.close()

    app = FastAPI(
        title=settings.project_name,
        description="Asset CRUD service with per-owner access control",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        t0 = time.perf_counter()
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = rid
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            logger.info(
                "%s %s -> %s (%d ms) rid=%s principal=%s",
                request.method,
                request.url.path,
                status_code,
                int((time.perf_counter() - t0) * 1000),
                rid,
                getattr(request.state, "principal_id", None),
            )
        response.headers["X-Request-ID"] = rid
        return response

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return responses.validation_error(exc.message, exc.field)

    @app.exception_handler(AssetError)
    async def asset_error_handler(request: Request, exc: AssetError):
        return responses.error(exc.message, exc.status_code, cause=exc.__cause__)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message, field = _body_error_message(exc)
        return responses.validation_error(message, field)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return responses.error(str(exc.detail or "Request failed"), exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        return responses.error("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR, cause=exc)

    app.include_router(create_api_router(settings.api_prefix))

    return app


app = create_app()
