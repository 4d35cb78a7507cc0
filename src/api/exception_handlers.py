"""Exception handlers for the FastAPI application."""

import traceback
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.v1.schemas.bookmark import BookmarkResponse
from api.v1.schemas.common import ErrorResponse
from core.config import settings
from core.exceptions import AppException, DuplicateUrlError, ErrorCode

logger = structlog.get_logger()


def _error_response(
    status_code: int,
    error_code: str,
    message: str,
    exc: Exception,
    details: Any | None = None,
    existing_bookmark: Any | None = None,
) -> JSONResponse:
    """Build the ``{success: false, ...}`` envelope.

    The traceback is attached only when stack traces are enabled (development).
    """
    body = ErrorResponse(
        message=message,
        error_code=error_code,
        details=details,
        existing_bookmark=existing_bookmark,
        stack="".join(traceback.format_exception(exc)) if settings.include_stack_traces else None,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        logger.warning(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
        )
        existing = None
        if isinstance(exc, DuplicateUrlError) and exc.existing is not None:
            existing = BookmarkResponse.model_validate(exc.existing).model_dump(
                mode="json", by_alias=True
            )
        return _error_response(
            exc.status_code,
            exc.error_code.value,
            exc.message,
            exc,
            details=exc.details,
            existing_bookmark=existing,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions from FastAPI/Starlette (unmatched routes included).

        A known path called with an unsupported method is an unmatched route too.
        """
        if exc.status_code in (404, 405):
            return _error_response(
                404,
                ErrorCode.ROUTE_NOT_FOUND.value,
                f"Route {request.url.path} not found",
                exc,
            )
        return _error_response(exc.status_code, "HTTP_ERROR", str(exc.detail), exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic request validation errors as 400s."""
        logger.info("validation_error", errors=exc.errors())
        details = [
            {
                "field": ".".join(str(x) for x in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        return _error_response(
            400,
            ErrorCode.VALIDATION_ERROR.value,
            ", ".join(f"{d['field']}: {d['message']}" for d in details)
            or "Request validation failed",
            exc,
            details=details,
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Handle store failures that no service classified."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "database_error",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )
        return _error_response(
            500,
            ErrorCode.DATABASE_ERROR.value,
            "Database operation failed",
            exc,
            details={"request_id": request_id},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )

        message = "An unexpected error occurred"
        if not settings.is_production:
            message = str(exc)

        return _error_response(
            500,
            ErrorCode.INTERNAL_ERROR.value,
            message,
            exc,
            details={"request_id": request_id},
        )
