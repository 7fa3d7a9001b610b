"""Exception handlers: map permgraph and framework errors to JSON responses.

Every error body has the shape {"error": code, "message": str, "details": ...}.
Authorization failures (edge store down, cache store down, cache wait timed
out) surface as 503 so callers never mistake them for an allow or a deny.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from permgraph.core.config import get_settings
from permgraph.domain.exceptions import PermGraphException

logger = logging.getLogger(__name__)

STATUS_BY_ERROR_CODE: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "EDGE_STORE_UNAVAILABLE": 503,
    "CACHE_UNAVAILABLE": 503,
    "PERMISSION_CACHE_TIMEOUT": 503,
    "SERVICE_UNAVAILABLE": 503,
}


def _error_body(error: str, message: object, details: object = None) -> dict[str, object]:
    return {"error": error, "message": message, "details": details or {}}


async def handle_permgraph_exception(request: Request, exc: PermGraphException) -> JSONResponse:
    status_code = STATUS_BY_ERROR_CODE.get(exc.error_code, 400)
    if status_code >= 500:
        logger.warning(
            "%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.error_code
        )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=_error_body(
            "VALIDATION_ERROR", "Request validation failed", jsonable_encoder(exc.errors())
        ),
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body("HTTP_ERROR", exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    """500; the exception text is only exposed when settings.debug is on."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(status_code=500, content=_error_body("INTERNAL_ERROR", message))


def register_exception_handlers(app: FastAPI) -> None:
    """Install all handlers on app. Call once from create_app()."""
    app.add_exception_handler(PermGraphException, handle_permgraph_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
