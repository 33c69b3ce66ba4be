import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from appregistry.core.config import Settings, get_settings
from appregistry.domain.records import find_duplicate_names
from appregistry.repositories import DocumentStorage, StorageError, build_storage
from appregistry.repositories.record_store import RecordStore
from appregistry.routers import apps as apps_router
from appregistry.routers import health as health_router
from appregistry.services.app_service import AppService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; "
            "img-src 'self' data: https://fastapi.tiangolo.com; "
            "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
            "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


class RequestLogMiddleware(BaseHTTPMiddleware):
    """One log line per request: method, path, status and duration."""

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


def _check_records(store: RecordStore) -> None:
    try:
        records = store.load_all()
    except StorageError as exc:
        logger.error("Records storage is not readable at startup: %s", exc)
        return
    duplicates = find_duplicate_names(records)
    if duplicates:
        logger.warning("Duplicate appName values in storage: %s", ", ".join(map(str, duplicates)))
    logger.info("Serving %d application records", len(records))


@asynccontextmanager
async def lifespan(app: FastAPI):
    _check_records(app.state.record_store)
    yield


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    # unmatched path or unmatched method on a known path
    if exc.status_code in (404, 405):
        logger.warning("Route %s not found", request.url.path)
        return JSONResponse(
            {"error": "Not Found", "message": f"Route {request.url.path} not found"},
            status_code=404,
        )
    return JSONResponse(
        {"error": exc.detail, "message": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        {"error": "Internal Server Error", "message": str(exc)},
        status_code=500,
    )


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[DocumentStorage] = None,
) -> FastAPI:
    """Build the API with its record store wired to the configured storage."""
    settings = settings or get_settings()
    store = RecordStore(storage if storage is not None else build_storage(settings))

    app = FastAPI(
        title="App Registry Backend API",
        version=settings.service_version,
        description="API for managing applications data",
        docs_url="/api-docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.record_store = store
    app.state.app_service = AppService(store)

    allowed_cors = sorted(set(settings.cors_origins))
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_cors,
            allow_credentials="*" not in allowed_cors,
            allow_methods=["GET", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.add_middleware(RequestLogMiddleware)

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    app.include_router(health_router.router)
    app.include_router(apps_router.router)
    return app
