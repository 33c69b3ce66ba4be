from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from appregistry.repositories import StorageError
from appregistry.services.app_service import (
    AppService,
    InvalidUpdateFieldsError,
    InvalidUpdatePayloadError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/apps", tags=["Applications"])


def _get_app_service(request: Request) -> AppService:
    svc = getattr(getattr(request.app, "state", None), "app_service", None)
    if not svc:
        raise RuntimeError("AppService not configured")
    return svc


def _error(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse({"success": False, "error": error, **extra}, status_code=status_code)


def _not_found() -> JSONResponse:
    return _error(404, "Application not found")


@router.get("", summary="Get all applications")
def list_apps(request: Request):
    svc = _get_app_service(request)
    try:
        apps = svc.list_apps()
    except StorageError:
        logger.exception("Error getting all apps")
        return _error(500, "Failed to retrieve applications")
    return {"success": True, "data": apps, "count": len(apps)}


@router.get("/search", summary="Search applications")
def search_apps(
    request: Request,
    app_name: Optional[str] = Query(None, alias="appName"),
    app_owner: Optional[str] = Query(None, alias="appOwner"),
    is_valid: Optional[str] = Query(None, alias="isValid"),
):
    svc = _get_app_service(request)
    try:
        result = svc.search_apps(app_name=app_name, app_owner=app_owner, is_valid=is_valid)
    except StorageError:
        logger.exception("Error searching apps")
        return _error(500, "Failed to search applications")
    return {
        "success": True,
        "data": result.apps,
        "count": len(result.apps),
        "criteria": result.criteria,
    }


@router.get("/{app_name}", summary="Get application by name")
def get_app(app_name: str, request: Request):
    svc = _get_app_service(request)
    try:
        app = svc.get_app(app_name)
    except StorageError:
        logger.exception("Error getting app by name")
        return _error(500, "Failed to retrieve application")
    if app is None:
        return _not_found()
    return {"success": True, "data": app}


@router.put("/{app_name}", summary="Update application")
async def update_app(app_name: str, request: Request):
    svc = _get_app_service(request)
    try:
        patch = await request.json()
    except ValueError:
        return _error(400, "Invalid update data", message="Request body must be valid JSON")
    try:
        app = svc.update_app(app_name, patch)
    except InvalidUpdatePayloadError as exc:
        return _error(400, "Invalid update data", message=str(exc))
    except InvalidUpdateFieldsError as exc:
        return _error(400, "Invalid update fields", message=exc.message, invalidFields=exc.invalid_fields)
    except StorageError:
        logger.exception("Error updating app")
        return _error(500, "Failed to update application")
    if app is None:
        return _not_found()
    return {"success": True, "data": app, "message": "App updated successfully"}


@router.delete("/{app_name}", summary="Delete application")
def delete_app(app_name: str, request: Request):
    svc = _get_app_service(request)
    try:
        app = svc.delete_app(app_name)
    except StorageError:
        logger.exception("Error deleting app")
        return _error(500, "Failed to delete application")
    if app is None:
        return _not_found()
    return {"success": True, "data": app, "message": "App deleted successfully"}
