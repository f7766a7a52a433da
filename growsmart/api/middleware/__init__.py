# 📄 File: growsmart/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Gathers the checkpoints every request passes through: error catching, request logging and
# browser access rules.
# 🧪 Purpose (Technical Summary):
# Middleware package exports used by the application factory.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware
# 🔄 Connected Modules / Calls From:
# growsmart.main

from .cors import get_standard_cors_config
from .error_handling import (
    ErrorHandlingMiddleware,
    create_error_response,
    growsmart_exception_handler,
    validation_exception_handler,
)
from .logging import RequestLoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "get_standard_cors_config",
    "create_error_response",
    "growsmart_exception_handler",
    "validation_exception_handler",
]
