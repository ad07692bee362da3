"""Translate exceptions into the JSON error bodies clients expect.

Every failure leaves the API as ``{"error": "..."}``; validation failures
also carry ``"errors": [{"field": ..., "msg": ...}]``. Unexpected exceptions
are logged here and reported with a generic message only.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from canhotos.core.exceptions import CanhotoError, InternalError, ValidationError

logger = logging.getLogger(__name__)


async def canhoto_error_handler(request: Request, exc: CanhotoError) -> JSONResponse:
    body: dict = {"error": exc.message}
    if isinstance(exc, ValidationError):
        body["errors"] = exc.errors
    if exc.status_code >= 500:
        logger.error("request_failed", extra={"path": request.url.path, "error_type": type(exc).__name__})
    return JSONResponse(status_code=exc.status_code, content=body)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for item in exc.errors():
        loc = [str(part) for part in item.get("loc", ()) if part not in ("body", "query", "path", "form")]
        errors.append({"field": ".".join(loc) or "request", "msg": item.get("msg", "Invalid value")})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": errors[0]["msg"] if len(errors) == 1 else "Validation failed", "errors": errors},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(status_code=exc.status_code, content={"error": detail}, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", extra={"path": request.url.path, "method": request.method})
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CanhotoError, canhoto_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
