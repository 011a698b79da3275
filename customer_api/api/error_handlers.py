"""Error Handlers — the single exit point mapping failures to HTTP responses.

Invariants:
    - Every failure yields {success: false, message, error?} and exactly one response
    - Every handler logs the original error (message, stack, method, url) before responding
    - Internal detail (`error`) is echoed only outside production

Precedence:
    1. Store errors (StoreError, any SQLAlchemyError) → 400
    2. Named validation failures (ValidationFailedError) → 400 with their message
    3. Malformed request body → 400; other request-shape failures → 400
    4. FileNotFoundError → 404
    5. PermissionError → 403
    6. Anything else → 500

Design Decisions:
    - Domain errors carry their own http_status (404, 409, 500) and render via to_response()
    - Unknown routes and unmatched methods → 404 "Not Found - <path>"
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from customer_api.config import get_settings
from customer_api.core.errors import CustomerApiError, StoreError

logger = logging.getLogger(__name__)

MALFORMED_BODY_MESSAGE = "Invalid JSON format in request body"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_store_error_handlers(app)
    _register_api_error_handler(app)
    _register_request_validation_handler(app)
    _register_http_error_handler(app)
    _register_os_error_handlers(app)
    _register_generic_error_handler(app)


def _show_detail() -> bool:
    return not get_settings().is_production


def _original_url(request: Request) -> str:
    url = request.url.path
    if request.url.query:
        url += f"?{request.url.query}"
    return url


def _log_error(
    request: Request,
    exc: Exception,
    level: int = logging.ERROR,
    error_code: str | None = None,
) -> None:
    logger.log(
        level,
        f"{type(exc).__name__}: {exc}",
        exc_info=exc,
        extra={
            "error_code": error_code,
            "method": request.method,
            "url": _original_url(request),
        },
    )


def _store_error_response(detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": "Database error occurred",
            "error": detail if _show_detail() else "Invalid data provided",
        },
    )


def _register_store_error_handlers(app: FastAPI) -> None:
    """Store failures not special-cased by a handler."""

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        _log_error(request, exc, error_code=exc.code)
        return _store_error_response(exc.detail or exc.message)

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
        _log_error(request, exc, error_code="DATABASE_ERROR")
        return _store_error_response(str(exc))


def _register_api_error_handler(app: FastAPI) -> None:
    """Validation, not-found, conflict and write errors raised by handlers."""

    @app.exception_handler(CustomerApiError)
    async def api_error_handler(request: Request, exc: CustomerApiError):
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        _log_error(request, exc, level=level, error_code=exc.code)
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(include_detail=_show_detail()),
        )


def _register_request_validation_handler(app: FastAPI) -> None:
    """Request bodies that fail to parse, and path/query values of the wrong type."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError,
    ):
        _log_error(request, exc, level=logging.WARNING, error_code="VALIDATION_ERROR")
        errors = exc.errors()
        if any(e.get("type") == "json_invalid" for e in errors):
            content = {"success": False, "message": MALFORMED_BODY_MESSAGE}
        else:
            content = {
                "success": False,
                "message": "Validation failed",
                "error": "; ".join(
                    f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
                    for e in errors
                ),
            }
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


def _register_http_error_handler(app: FastAPI) -> None:
    """Routing failures raised by the framework itself."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        _log_error(request, exc, level=logging.WARNING)
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={
                    "success": False,
                    "message": f"Not Found - {_original_url(request)}",
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_os_error_handlers(app: FastAPI) -> None:
    """Missing-file and permission failures."""

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(request: Request, exc: FileNotFoundError):
        _log_error(request, exc)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "message": "Requested resource not found"},
        )

    @app.exception_handler(PermissionError)
    async def permission_error_handler(request: Request, exc: PermissionError):
        _log_error(request, exc)
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"success": False, "message": "Access denied"},
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Catch-all — message elided in production."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        _log_error(request, exc, error_code="INTERNAL_ERROR")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Internal server error",
                "error": str(exc) if _show_detail() else "Something went wrong",
            },
        )
