# concentribe/exception_handling.py
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logging_setup import get_logger

# Keep a separate logger namespace for exceptions
logger = get_logger("concentribe.exceptions")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # 4xx are expected outcomes (bad input, not found); only 5xx carry a traceback
    if exc.status_code >= 500:
        logger.exception(
            "HTTP_EXCEPTION",
            extra={"handled": True, "path": str(request.url.path), "status_code": exc.status_code},
        )
    else:
        logger.info(
            f"HTTP_EXCEPTION {exc.status_code}: {exc.detail}",
            extra={"handled": True, "path": str(request.url.path), "status_code": exc.status_code},
        )
    return JSONResponse({"message": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # loc looks like ("body", "grid") or ("query", "limit")
    field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
    return f"Invalid value for '{field}': {first.get('msg', 'invalid')}"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = _describe_validation_error(exc)
    logger.info(f"VALIDATION_ERROR: {message}", extra={"handled": True, "path": str(request.url.path)})
    return JSONResponse({"message": message}, status_code=400)


async def unhandled_exception_handler(request: Request, exc: Exception):
    # Full traceback goes to the log; the client only sees a generic message
    logger.exception(
        "UNHANDLED_EXCEPTION",
        extra={"handled": False, "path": str(request.url.path)},
    )
    return JSONResponse({"message": "Internal Server Error"}, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers in one place.
    Every error leaves the API as JSON {"message": ...}.
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
