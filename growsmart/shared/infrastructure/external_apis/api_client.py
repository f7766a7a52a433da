# 📄 File: growsmart/shared/infrastructure/external_apis/api_client.py

# 🧭 Purpose (Layman Explanation):
# This file creates a smart HTTP client that knows how to talk to outside services reliably,
# turning their error codes (bad key, no credits, too many requests) into clear app errors.

# 🧪 Purpose (Technical Summary):
# Generic async HTTP client over aiohttp with status-code to exception mapping, timeout
# handling, request statistics, error history and a small registry of named clients that
# the application lifespan opens and closes.

# 🔗 Dependencies:
# - aiohttp: Async HTTP client
# - growsmart.shared.core.exceptions: provider error hierarchy
# - growsmart.shared.utils.logging: structured logging

# 🔄 Connected Modules / Calls From:
# Used by: OpenRouter client, Plant.id client, the Python API client (growsmart.client),
# growsmart.main (lifespan), health endpoints

import asyncio
import json
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

import aiohttp
from aiohttp import ClientSession, ClientTimeout

from growsmart.shared.core.exceptions import (
    APIAuthenticationError,
    APIQuotaExceededError,
    APIRateLimitError,
    APITimeoutError,
    ExternalAPIError,
)
from growsmart.shared.utils.logging import get_logger

logger = get_logger(__name__)


class APIClient:
    """
    Generic async HTTP client for external API integrations.

    Features:
    - Provider status codes mapped onto the exception hierarchy
    - Per-request header overrides (e.g. a caller-supplied API key)
    - Request/response logging
    - Performance statistics and recent error history
    """

    def __init__(
        self,
        base_url: str,
        api_name: str,
        api_key: Optional[str] = None,
        timeout: int = 30,
    ):
        """Initialize API client with configuration."""
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.api_name = api_name
        self.timeout = timeout

        self.session: Optional[ClientSession] = None

        # Performance tracking
        self.stats = {
            'total_requests': 0,
            'successful_requests': 0,
            'failed_requests': 0,
            'average_response_time': 0,
            'last_request_time': None,
        }

        # Error tracking
        self.error_history: List[Dict[str, Any]] = []
        self.max_error_history = 100

    async def initialize(self):
        """Initialize the client session."""
        try:
            connector = aiohttp.TCPConnector(
                limit=10,
                limit_per_host=5,
                ttl_dns_cache=300,
            )
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                connector=connector,
            )
            logger.info(f"API client initialized for {self.api_name}")

        except Exception as e:
            logger.error(f"Failed to initialize API client {self.api_name}: {e}")
            raise ExternalAPIError(f"Client initialization failed: {e}", api_name=self.api_name)

    def _get_default_headers(self) -> Dict[str, str]:
        """Get default headers for requests."""
        headers = {
            'User-Agent': f'GrowSmart-AI/1.0 ({self.api_name}-client)',
            'Accept': 'application/json',
            'Content-Type': 'application/json'
        }
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    def _build_url(self, endpoint: str) -> str:
        endpoint = endpoint.lstrip('/')
        return f"{self.base_url}/{endpoint}" if endpoint else self.base_url

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        data: Optional[Union[Dict, str, bytes, aiohttp.FormData]] = None,
        headers: Optional[Dict] = None,
        timeout: Optional[float] = None
    ) -> Any:
        """Make an HTTP request and return the decoded JSON body."""
        if not self.session:
            await self.initialize()

        url = self._build_url(endpoint)

        request_headers = self._get_default_headers()
        if headers:
            request_headers.update(headers)

        request_kwargs: Dict[str, Any] = {
            'method': method,
            'url': url,
            'headers': request_headers,
            'timeout': ClientTimeout(total=timeout or self.timeout),
        }

        if params:
            request_kwargs['params'] = params

        if data is not None:
            if isinstance(data, dict):
                request_kwargs['json'] = data
            else:
                if isinstance(data, aiohttp.FormData):
                    # aiohttp sets the multipart boundary itself
                    request_headers.pop('Content-Type', None)
                request_kwargs['data'] = data

        start_time = time.time()

        try:
            async with self.session.request(**request_kwargs) as response:
                response_time = time.time() - start_time
                self._record_timing(response_time)

                await self._handle_response_status(response)

                try:
                    response_data = await response.json(content_type=None)
                except ValueError:
                    response_text = await response.text()
                    response_data = {'raw_response': response_text}

                self.stats['successful_requests'] += 1
                logger.performance.log_external_api_call(
                    api_name=self.api_name,
                    endpoint=url,
                    method=method,
                    status_code=response.status,
                    duration_ms=response_time * 1000,
                    success=True,
                )

                return response_data

        except Exception as e:
            self.stats['failed_requests'] += 1
            self._record_error(e, method, url)
            raise self._transform_exception(e, timeout or self.timeout)

    def _record_timing(self, response_time: float):
        self.stats['total_requests'] += 1
        self.stats['last_request_time'] = datetime.now(timezone.utc).isoformat()

        if self.stats['average_response_time'] == 0:
            self.stats['average_response_time'] = response_time
        else:
            self.stats['average_response_time'] = (
                self.stats['average_response_time'] * 0.7 + response_time * 0.3
            )

    async def _handle_response_status(self, response: aiohttp.ClientResponse):
        """Handle HTTP response status codes."""
        if 200 <= response.status < 300:
            return
        elif response.status in (401, 403):
            raise APIAuthenticationError(
                self.api_name,
                api_status_code=response.status,
                api_response=self._decode_error_body(await response.text()),
            )
        elif response.status == 402:
            raise APIQuotaExceededError(
                self.api_name,
                api_response=self._decode_error_body(await response.text()),
            )
        elif response.status == 429:
            raise APIRateLimitError(
                self.api_name,
                retry_after=response.headers.get('Retry-After'),
                api_response=self._decode_error_body(await response.text()),
            )
        elif 400 <= response.status < 500:
            response_text = await response.text()
            raise ExternalAPIError(
                f"Client error for {self.api_name} ({response.status}): {response_text}",
                api_name=self.api_name,
                api_status_code=response.status,
                api_response=self._decode_error_body(response_text),
            )
        elif 500 <= response.status < 600:
            response_text = await response.text()
            raise ExternalAPIError(
                f"Server error for {self.api_name} ({response.status}): {response_text}",
                api_name=self.api_name,
                api_status_code=response.status,
                api_response=self._decode_error_body(response_text),
            )
        else:
            raise ExternalAPIError(
                f"Unexpected status code for {self.api_name}: {response.status}",
                api_name=self.api_name,
                api_status_code=response.status,
            )

    @staticmethod
    def _decode_error_body(response_text: str) -> Any:
        try:
            return json.loads(response_text)
        except ValueError:
            return response_text or None

    def _transform_exception(self, exception: Exception, timeout: float) -> Exception:
        """Transform exceptions to appropriate API exceptions."""
        if isinstance(exception, asyncio.TimeoutError):
            return APITimeoutError(self.api_name, timeout_seconds=timeout)
        elif isinstance(exception, aiohttp.ClientError):
            return ExternalAPIError(
                f"Failed to fetch from {self.api_name}: {exception}",
                api_name=self.api_name,
            )
        else:
            return exception

    def _record_error(self, error: Exception, method: str, url: str):
        """Record error for analysis and monitoring."""
        error_record = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'error_type': type(error).__name__,
            'error_message': str(error),
            'method': method,
            'url': url,
            'api_name': self.api_name
        }

        self.error_history.append(error_record)

        if len(self.error_history) > self.max_error_history:
            self.error_history = self.error_history[-self.max_error_history:]

        logger.warning(f"API error recorded for {self.api_name}", extra=error_record)

    async def post(
        self,
        endpoint: str,
        data: Optional[Union[Dict, str, bytes]] = None,
        params: Optional[Dict] = None,
        headers: Optional[Dict] = None,
        timeout: Optional[float] = None
    ) -> Any:
        """Make POST request."""
        return await self._make_request('POST', endpoint, params, data, headers, timeout)

    async def upload_file(
        self,
        endpoint: str,
        file_data: bytes,
        filename: str,
        field_name: str = 'file',
        content_type: Optional[str] = None,
        additional_fields: Optional[Dict] = None,
        headers: Optional[Dict] = None,
        timeout: Optional[float] = None
    ) -> Any:
        """Upload file using multipart/form-data."""
        form = aiohttp.FormData()
        form.add_field(field_name, file_data, filename=filename, content_type=content_type)

        if additional_fields:
            for key, value in additional_fields.items():
                form.add_field(key, str(value))

        return await self._make_request('POST', endpoint, None, form, headers, timeout)

    def get_stats(self) -> Dict[str, Any]:
        """Get client performance statistics."""
        return {
            **self.stats,
            'api_name': self.api_name,
            'error_rate': (
                self.stats['failed_requests'] / max(self.stats['total_requests'], 1)
            ) * 100,
        }

    def get_recent_errors(self, limit: int = 10) -> List[Dict]:
        """Get recent error history."""
        return self.error_history[-limit:]

    async def close(self):
        """Close the client session and cleanup resources."""
        if self.session:
            await self.session.close()
            self.session = None

        logger.info(f"API client closed for {self.api_name}")


# =============================================================================
# CLIENT REGISTRY
# =============================================================================

_registered_clients: Dict[str, APIClient] = {}


def register_api_client(client: APIClient) -> APIClient:
    """Register a client under its api_name so dependencies can share it."""
    _registered_clients[client.api_name] = client
    return client


def get_registered_client(api_name: str) -> Optional[APIClient]:
    return _registered_clients.get(api_name)


def get_all_client_stats() -> Dict[str, Dict[str, Any]]:
    """Stats for every registered client, keyed by api_name."""
    return {name: client.get_stats() for name, client in _registered_clients.items()}


async def cleanup_api_clients() -> None:
    """
    Close every registered client and clear the registry.
    """
    logger.info("Cleaning up external API clients...")

    for client in list(_registered_clients.values()):
        await client.close()
    _registered_clients.clear()

    logger.info("✅ External API clients cleanup completed")
