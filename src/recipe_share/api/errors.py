"""Exception handlers producing a consistent error body."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_share.domain.errors import RecipeShareError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "access_denied": status.HTTP_403_FORBIDDEN,
    "validation_failed": status.HTTP_400_BAD_REQUEST,
    "already_liked": status.HTTP_400_BAD_REQUEST,
    "not_liked": status.HTTP_400_BAD_REQUEST,
    "already_favorited": status.HTTP_400_BAD_REQUEST,
    "not_favorited": status.HTTP_400_BAD_REQUEST,
    "server_error": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_KIND_BY_STATUS = {
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "access_denied",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}


def error_response(
    kind: str,
    message: str,
    status_code: int,
    details: dict[str, object] | None = None,
) -> JSONResponse:
    """Build the JSON error envelope."""
    error: dict[str, object] = {"kind": kind, "message": message}
    if details:
        error["details"] = details
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": error}
    )


async def domain_error_handler(request: Request, exc: RecipeShareError) -> JSONResponse:
    """Map domain errors to their HTTP status."""
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "Storage failure on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
        )
        return error_response(exc.kind, "Server error", status_code)
    logger.warning(
        "%s on %s %s: %s", exc.kind, request.method, request.url.path, exc.message
    )
    return error_response(exc.kind, exc.message, status_code, exc.details)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap framework HTTP errors in the same envelope."""
    kind = _KIND_BY_STATUS.get(exc.status_code, "http_error")
    return error_response(kind, str(exc.detail), exc.status_code)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request body and parameter validation errors."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    logger.warning(
        "Validation error on %s %s: %s", request.method, request.url.path, errors
    )
    return error_response(
        "validation_failed",
        "Validation failed",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        {"errors": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and hide their details from clients."""
    logger.exception(
        "Unhandled exception on %s %s", request.method, request.url.path
    )
    return error_response(
        "server_error", "Server error", status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the app."""
    app.add_exception_handler(RecipeShareError, domain_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
