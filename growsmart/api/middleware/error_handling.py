# 📄 File: growsmart/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# Catches anything that goes wrong while answering a request and turns it into a clear,
# consistent error message instead of a crash.
# 🧪 Purpose (Technical Summary):
# Error handling for the API: a BaseHTTPMiddleware that assigns request IDs and renders
# unexpected exceptions, plus exception handlers for GrowSmartException and request
# validation errors, all producing {"error": {code, message, details, timestamp, request_id}}.
# 🔗 Dependencies:
# FastAPI, starlette, growsmart.shared.core.exceptions, traceback, uuid
# 🔄 Connected Modules / Calls From:
# growsmart.main (middleware and exception handler registration), all API endpoints

import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from fastapi import HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from growsmart.shared.config.settings import get_settings
from growsmart.shared.core.exceptions import ExternalAPIError, GrowSmartException
from growsmart.shared.utils.logging import get_logger, request_id_var

logger = get_logger(__name__)


def _request_id(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
    return request_id


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware for the Grow Smart API.

    Assigns every request an ID, adds X-Request-ID / X-Response-Time headers
    and converts exceptions that escape the endpoint handlers into JSON
    error responses.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.settings = get_settings()

        self.error_messages = {
            ValueError: "Invalid request data",
            KeyError: "Missing required field",
            ConnectionError: "Service connection failed",
            TimeoutError: "Request timeout",
        }
        self.error_status_map = {
            ValueError: 400,
            KeyError: 400,
            ConnectionError: 503,
            TimeoutError: 504,
        }

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = _request_id(request)
        start_time = datetime.now(timezone.utc)

        try:
            response = await call_next(request)
        except Exception as exc:
            return await self._handle_exception(request, exc, request_id, start_time)

        processing_time = (datetime.now(timezone.utc) - start_time).total_seconds()
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{processing_time:.3f}s"
        return response

    async def _handle_exception(
        self,
        request: Request,
        exc: Exception,
        request_id: str,
        start_time: datetime,
    ) -> JSONResponse:
        status_code = self._get_status_code(exc)
        error_code, error_message, error_details = self._get_error_info(exc)

        self._log_error(request, exc, request_id, status_code)

        if self.settings.DEBUG and not self.settings.is_production:
            error_details = {
                **error_details,
                "debug": {
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                    "traceback": traceback.format_exc().split("\n"),
                },
            }

        response = create_error_response(
            error_code=error_code,
            message=error_message,
            status_code=status_code,
            details=error_details,
            request_id=request_id,
        )
        processing_time = (datetime.now(timezone.utc) - start_time).total_seconds()
        response.headers["X-Response-Time"] = f"{processing_time:.3f}s"
        return response

    def _get_status_code(self, exc: Exception) -> int:
        if isinstance(exc, HTTPException):
            return exc.status_code
        if isinstance(exc, GrowSmartException):
            return exc.status_code
        for exc_type, status_code in self.error_status_map.items():
            if isinstance(exc, exc_type):
                return status_code
        return 500

    def _get_error_info(self, exc: Exception) -> Tuple[str, str, Dict[str, Any]]:
        if isinstance(exc, GrowSmartException):
            return exc.error_code, exc.message, exc.details or {}

        if isinstance(exc, HTTPException):
            return f"HTTP_{exc.status_code}", str(exc.detail), {}

        exc_type = type(exc)
        if exc_type in self.error_messages:
            return exc_type.__name__.upper(), self.error_messages[exc_type], {}

        return "INTERNAL_SERVER_ERROR", "An internal server error occurred", {}

    def _log_error(self, request: Request, exc: Exception, request_id: str, status_code: int) -> None:
        log_context = {
            "request_id": request_id,
            "method": request.method,
            "path": str(request.url.path),
            "client_ip": get_client_ip(request),
            "status_code": status_code,
            "exception_type": type(exc).__name__,
        }

        if status_code >= 500:
            logger.error(
                f"Server error in {request.method} {request.url.path}",
                extra=log_context,
                exc_info=True,
            )
        else:
            logger.info(f"Client error in {request.method} {request.url.path}", extra=log_context)

        if isinstance(exc, ExternalAPIError):
            logger.warning(
                f"External service error: {exc.api_name or 'unknown'}",
                extra={**log_context, "external_service_error": True},
            )


def get_client_ip(request: Request) -> str:
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"


def create_error_response(
    error_code: str,
    message: str,
    status_code: int = 500,
    details: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None,
) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        error_code: Error code identifier
        message: Human-readable error message
        status_code: HTTP status code
        details: Additional error details
        request_id: Request correlation ID

    Returns:
        JSON error response
    """
    response = JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": error_code,
                "message": message,
                "details": details or {},
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "request_id": request_id,
            }
        },
    )

    if request_id:
        response.headers["X-Request-ID"] = request_id
    response.headers["X-Error-Code"] = error_code

    return response


async def growsmart_exception_handler(request: Request, exc: GrowSmartException) -> JSONResponse:
    """Render application exceptions raised by endpoints and dependencies."""
    request_id = _request_id(request)
    log_extra = {"request_id": request_id, "error_code": exc.error_code, "path": request.url.path}

    if exc.status_code >= 500:
        logger.error(f"{exc.error_code}: {exc.message}", extra=log_extra)
    else:
        logger.info(f"{exc.error_code}: {exc.message}", extra=log_extra)

    return create_error_response(
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        request_id=request_id,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures with one entry per invalid field."""
    validation_errors = [
        {
            "field": ".".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Validation error"),
            "type": error.get("type", "validation_error"),
        }
        for error in exc.errors()
    ]

    return create_error_response(
        error_code="VALIDATION_ERROR",
        message="Request validation failed",
        status_code=422,
        details={"validation_errors": validation_errors},
        request_id=request_id_var.get() or _request_id(request),
    )
