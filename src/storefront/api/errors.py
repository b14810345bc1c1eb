"""Exception-to-response mapping shared by the application and its tests."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

logger = structlog.get_logger(__name__)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies and query strings are reported like domain validation failures
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path"))
        errors.setdefault(field or "request", []).append(error["msg"])
    return JSONResponse(status_code=400, content={"error": errors})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", method=request.method, path=request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    """Map domain, request and unexpected errors to 400/404/500 responses."""
    register_exception_handlers(app)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
