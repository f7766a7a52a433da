# 📄 File: growsmart/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a diary of every request made to Grow Smart AI: what was asked for, how long it took
# and whether it worked.
# 🧪 Purpose (Technical Summary):
# Request logging middleware: binds the request ID into the logging context, logs request
# timing through the structured performance logger and echoes X-Request-ID.
# 🔗 Dependencies:
# FastAPI, starlette, growsmart.shared.utils.logging, time, uuid
# 🔄 Connected Modules / Calls From:
# growsmart.main (middleware registration)

import time
import uuid
from typing import Set

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from growsmart.shared.utils.logging import get_logger, log_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
EXCLUDED_PATHS: Set[str] = {"/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware for API monitoring.

    Health checks and documentation routes are not logged.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in EXCLUDED_PATHS:
            return await call_next(request)

        request_id = self._get_or_create_request_id(request)
        start_time = time.time()

        with log_context(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    f"Request failed: {request.method} {request.url.path}",
                    extra={
                        "request_id": request_id,
                        "error_type": type(e).__name__,
                        "duration_ms": (time.time() - start_time) * 1000,
                    },
                )
                raise

            logger.performance.log_request(
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=(time.time() - start_time) * 1000,
                extra={"request_id": request_id},
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @staticmethod
    def _get_or_create_request_id(request: Request) -> str:
        """Existing ID from state or headers, otherwise a new one."""
        request_id = getattr(request.state, "request_id", None)
        if request_id:
            return request_id

        request_id = request.headers.get(REQUEST_ID_HEADER.lower()) or str(uuid.uuid4())
        request.state.request_id = request_id
        return request_id
