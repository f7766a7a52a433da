# 📄 File: growsmart/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types the Grow Smart app uses to communicate
# what went wrong in a clear, organized way instead of generic error messages.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# error details, and proper serialization for API responses and error handling.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# All modules for error handling, middleware, API endpoints, provider clients, Python client

from typing import Any, Dict, Optional
from fastapi import status


class GrowSmartException(Exception):
    """
    Base exception class for the Grow Smart application.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)


# =============================================================================
# AUTHENTICATION & CONFIGURATION EXCEPTIONS
# =============================================================================

class AuthenticationError(GrowSmartException):
    """
    Exception raised for authentication failures.
    Used when the caller's bearer token is missing or invalid.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None
    ):
        if not details:
            details = {}
        if user_id:
            details["user_id"] = user_id

        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="AUTHENTICATION_ERROR"
        )


class ConfigurationError(GrowSmartException):
    """
    Exception raised when a required service is not configured.
    Used when provider keys or Supabase credentials are missing.
    """

    def __init__(
        self,
        message: str = "Service is not configured",
        setting: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if setting:
            details["setting"] = setting

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="CONFIGURATION_ERROR"
        )


# =============================================================================
# VALIDATION & DATA EXCEPTIONS
# =============================================================================

class ValidationError(GrowSmartException):
    """
    Exception raised for data validation failures.
    Used when input data doesn't meet validation requirements.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if constraint:
            details["constraint"] = constraint

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(GrowSmartException):
    """
    Exception raised when requested resource is not found.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class RepositoryError(GrowSmartException):
    """
    Exception raised for repository/database operation failures.
    Used when Supabase table operations fail at the repository layer.
    """

    def __init__(
        self,
        message: str = "Repository operation failed",
        operation: Optional[str] = None,
        entity: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if entity:
            details["entity"] = entity

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="REPOSITORY_ERROR"
        )


# =============================================================================
# FILE UPLOAD EXCEPTIONS
# =============================================================================

class FileTooLargeError(GrowSmartException):
    """
    Exception raised when uploaded file exceeds allowed size.
    """
    def __init__(
        self,
        message: str = "Uploaded file is too large",
        max_size_mb: Optional[float] = None,
        actual_size_mb: Optional[float] = None,
        filename: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if max_size_mb is not None:
            details["max_size_mb"] = max_size_mb
        if actual_size_mb is not None:
            details["actual_size_mb"] = actual_size_mb
        if filename:
            details["filename"] = filename

        super().__init__(
            message=message,
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            details=details,
            error_code="FILE_TOO_LARGE"
        )


class InvalidFileTypeError(GrowSmartException):
    """
    Exception raised when the uploaded file type is not supported.
    """
    def __init__(
        self,
        message: str = "Invalid or unsupported file type",
        filename: Optional[str] = None,
        expected_types: Optional[list] = None,
        actual_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if filename:
            details["filename"] = filename
        if expected_types:
            details["expected_types"] = expected_types
        if actual_type:
            details["actual_type"] = actual_type

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="INVALID_FILE_TYPE"
        )


# =============================================================================
# EXTERNAL API EXCEPTIONS
# =============================================================================

class ExternalAPIError(GrowSmartException):
    """
    Exception raised for external API failures.
    Used when third-party services (OpenRouter, Plant.id) fail.
    """

    def __init__(
        self,
        message: str = "External API error",
        api_name: Optional[str] = None,
        api_status_code: Optional[int] = None,
        api_response: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        error_code: str = "EXTERNAL_API_ERROR"
    ):
        if not details:
            details = {}

        if api_name:
            details["api_name"] = api_name
        if api_status_code:
            details["api_status_code"] = api_status_code
        if api_response:
            details["api_response"] = api_response

        self.api_name = api_name
        self.api_status_code = api_status_code
        super().__init__(
            message=message,
            status_code=status_code,
            details=details,
            error_code=error_code
        )


class APIAuthenticationError(ExternalAPIError):
    """Exception raised when a provider rejects our API key (401/403)."""

    def __init__(
        self,
        api_name: str,
        api_status_code: int = 401,
        message: Optional[str] = None,
        api_response: Optional[Any] = None
    ):
        super().__init__(
            message=message or f"Authentication failed for {api_name} API (401): invalid API key",
            api_name=api_name,
            api_status_code=api_status_code,
            api_response=api_response,
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_code="API_AUTHENTICATION_ERROR"
        )


class APIQuotaExceededError(ExternalAPIError):
    """Exception raised when a provider reports exhausted credits (402)."""

    def __init__(
        self,
        api_name: str,
        api_status_code: int = 402,
        message: Optional[str] = None,
        api_response: Optional[Any] = None
    ):
        super().__init__(
            message=message or f"{api_name} API credits exhausted (402): insufficient credits",
            api_name=api_name,
            api_status_code=api_status_code,
            api_response=api_response,
            details={"suggestion": "Add credits to your account or switch to a free model"},
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            error_code="API_QUOTA_EXCEEDED"
        )


class APIRateLimitError(ExternalAPIError):
    """Exception raised when a provider throttles us (429)."""

    def __init__(self, api_name: str, retry_after: Optional[str] = None, api_response: Optional[Any] = None):
        details = {}
        if retry_after:
            details["retry_after"] = retry_after
        super().__init__(
            message=f"Rate limit exceeded for {api_name} (429)",
            api_name=api_name,
            api_status_code=429,
            api_response=api_response,
            details=details,
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            error_code="API_RATE_LIMITED"
        )


class ModelNotFoundError(ExternalAPIError):
    """Exception raised when the requested chat model does not exist (404)."""

    def __init__(self, api_name: str, model: Optional[str] = None):
        super().__init__(
            message=f"Model not found on {api_name}" + (f": {model}" if model else ""),
            api_name=api_name,
            api_status_code=404,
            details={"model": model} if model else None,
            error_code="MODEL_NOT_FOUND"
        )


class APITimeoutError(ExternalAPIError):
    """Exception raised when an external call times out."""

    def __init__(
        self,
        api_name: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        message: str = "Request timeout - Please try again"
    ):
        details = {"suggestion": "Retry after some time or check network"}
        if timeout_seconds is not None:
            details["timeout_seconds"] = timeout_seconds
        super().__init__(
            message=message,
            api_name=api_name,
            details=details,
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            error_code="API_TIMEOUT"
        )


class PlantIdentificationError(ExternalAPIError):
    """
    Exception raised when plant identification fails.
    Used for provider failures and images nothing could be matched against.
    """

    def __init__(
        self,
        message: str = "Plant identification failed",
        provider: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            api_name=provider,
            details=details,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="PLANT_IDENTIFICATION_ERROR"
        )
