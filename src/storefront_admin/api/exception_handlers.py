"""
Application exception handlers.

Every failure is rendered as ``{"error": {"code", "message", "details", "type"}}``
with the status code mapped from the exception class.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.exceptions import (
    AuthenticationError,
    FieldError,
    InternalError,
    StorefrontError,
    ValidationError,
    create_error_response,
    get_http_status_code,
)

logger = logging.getLogger(__name__)


def _field_name(location) -> str:
    # Drop the leading "body"/"query"/"path" segment
    parts = [str(part) for part in location[1:]] or [str(part) for part in location]
    return ".".join(parts)


class ExceptionHandlerRegistry:
    """Registry for the application's exception handlers."""

    def __init__(self, is_production: bool = True):
        self.is_production = is_production

    def register_handlers(self, app: FastAPI) -> None:
        @app.exception_handler(StorefrontError)
        async def storefront_exception_handler(request: Request, exc: StorefrontError):
            status_code = get_http_status_code(exc)
            if status_code >= 500:
                logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}")
                if self.is_production:
                    exc = InternalError("An unexpected error occurred", error_code=exc.error_code)
            response = JSONResponse(status_code=status_code, content=create_error_response(exc))
            if isinstance(exc, AuthenticationError) and exc.clear_session:
                services = getattr(request.app.state, "services", None)
                if services is not None:
                    services.session_cookie.clear(response)
            return response

        @app.exception_handler(RequestValidationError)
        async def request_validation_handler(request: Request, exc: RequestValidationError):
            errors = [
                FieldError(field=_field_name(error.get("loc", ())), message=error.get("msg", "Invalid value"))
                for error in exc.errors()
            ]
            error = ValidationError("Request validation failed", errors=errors)
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=create_error_response(error),
            )

        @app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle unexpected exceptions."""
            logger.error(f"Unhandled exception: {exc}", exc_info=True)

            message = "An unexpected error occurred" if self.is_production else str(exc)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=create_error_response(InternalError(message)),
            )


def register_exception_handlers(app: FastAPI, is_production: bool = True) -> None:
    """Create an ExceptionHandlerRegistry and register its handlers."""
    ExceptionHandlerRegistry(is_production).register_handlers(app)
