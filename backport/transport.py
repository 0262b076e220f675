"""
Async HTTP Transport for the GitHub REST API.

Handles async HTTP communication with automatic retry logic, token
authentication and error handling using httpx async client.
"""

import asyncio
import random
import time
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any

import httpx

from backport.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    HostApiError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    ValidationError,
)
from backport.logging import log_http_request, log_http_response

JSON_MEDIA_TYPE = "application/vnd.github+json"
PATCH_MEDIA_TYPE = "application/vnd.github.v3.patch"


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


class AsyncHTTPTransport:
    """
    Async HTTP transport layer with token authentication and retry logic.

    Handles:
    - Bearer token authentication
    - Exponential backoff with jitter for retries
    - Retry-After header respect for rate limiting
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: Access token sent as a bearer credential
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
            http_transport: Optional httpx transport (used to stub the network in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={
                "Accept": JSON_MEDIA_TYPE,
                "Authorization": f"Bearer {token}",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            transport=http_transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make a JSON request with automatic retry.

        Args:
            method: HTTP method
            path: API path (e.g., "/repos/octo/app/pulls") or absolute URL
            params: Query parameters
            body: JSON request body (for POST/PATCH)

        Returns:
            Parsed JSON response (object or array)

        Raises:
            HostApiError: On API errors
        """
        async def make_request() -> httpx.Response:
            log_http_request(method, path, body=body)
            return await self._client.request(method, path, params=params, json=body)

        response = await self._execute_with_retry(make_request)
        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    async def request_bytes(self, path: str, accept: str = PATCH_MEDIA_TYPE) -> bytes:
        """
        GET a non-JSON representation of a resource (e.g. a commit's patch).

        The body is returned undecoded; patches may carry file content in
        any encoding.

        Args:
            path: API path or absolute URL
            accept: Media type to request

        Returns:
            Raw response body
        """
        async def make_request() -> httpx.Response:
            log_http_request("GET", path)
            return await self._client.get(path, headers={"Accept": accept})

        response = await self._execute_with_retry(make_request)
        return response.content

    async def _execute_with_retry(
        self, request_fn: Callable[[], Coroutine[Any, Any, httpx.Response]]
    ) -> httpx.Response:
        """
        Execute a request with automatic retry on retryable errors.

        Args:
            request_fn: Async function that makes the HTTP request

        Returns:
            The successful response

        Raises:
            HostApiError: On non-retryable errors or after max retries
        """
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                started = time.monotonic()
                response = await request_fn()
                log_http_response(
                    response.status_code,
                    str(response.request.url),
                    elapsed_ms=(time.monotonic() - started) * 1000,
                )

                if response.status_code < 400:
                    return response

                # Parse error response
                error = self._parse_error_response(response)

                # Check if we should retry
                if not self._should_retry(response.status_code, attempt):
                    raise error

                last_error = error

                # Calculate backoff time
                retry_after = response.headers.get("Retry-After")
                wait_time = self._get_backoff_time(attempt, retry_after)
                await asyncio.sleep(wait_time)

            except httpx.RequestError as e:
                # Network errors are retryable
                if attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", str(e)) from e

                last_error = e
                wait_time = self._get_backoff_time(attempt, None)
                await asyncio.sleep(wait_time)

        if last_error:
            if isinstance(last_error, HostApiError):
                raise last_error
            raise ServerError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise ServerError("UNKNOWN_ERROR", "Request failed with no error details")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """
        Determine if a request should be retried.

        Args:
            status_code: HTTP status code
            attempt: Current attempt number (0-indexed)

        Returns:
            True if the request should be retried
        """
        if attempt >= self.retry_config.max_retries:
            return False

        return status_code in self.retry_config.retry_on

    def _get_backoff_time(
        self, attempt: int, retry_after: str | None
    ) -> float:
        """
        Calculate backoff time for retry.

        Uses exponential backoff with jitter, respecting Retry-After header
        if present.

        Args:
            attempt: Current attempt number (0-indexed)
            retry_after: Value of Retry-After header (if present)

        Returns:
            Time to wait in seconds
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass  # Fall through to exponential backoff

        # Exponential backoff: backoff_factor ^ attempt
        base_wait = self.retry_config.backoff_factor ** attempt

        # Apply jitter (±jitter%)
        jitter_range = base_wait * self.retry_config.jitter
        jitter = random.uniform(-jitter_range, jitter_range)
        wait_time = base_wait + jitter

        return min(wait_time, self.retry_config.max_backoff)

    def _parse_error_response(self, response: httpx.Response) -> HostApiError:
        """
        Parse an error response into a typed exception.

        GitHub reports errors as ``{"message": ..., "errors": [...]}``.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate HostApiError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        status_code = response.status_code
        message = data.get("message") or f"HTTP {status_code}"
        details = [
            error.get("message") or error.get("code")
            for error in data.get("errors", [])
            if isinstance(error, dict)
        ]
        if details:
            message = f"{message} ({'; '.join(str(d) for d in details if d)})"
        request_id = response.headers.get("X-GitHub-Request-Id")
        code = f"HTTP_{status_code}"

        if status_code == 401:
            return AuthenticationError(code, message, status_code, request_id)
        elif status_code == 403:
            if response.headers.get("X-RateLimit-Remaining") == "0":
                return RateLimitedError(
                    code, message, self._parse_retry_after(response), status_code, request_id
                )
            return AuthorizationError(code, message, status_code, request_id)
        elif status_code == 404:
            return NotFoundError(code, message, status_code, request_id)
        elif status_code == 409:
            return ConflictError(code, message, status_code, request_id)
        elif status_code == 429:
            return RateLimitedError(
                code, message, self._parse_retry_after(response), status_code, request_id
            )
        elif status_code >= 500:
            return ServerError(code, message, status_code, request_id)
        else:
            return ValidationError(code, message, status_code, request_id)

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> int:
        retry_after_str = response.headers.get("Retry-After", "60")
        try:
            return int(retry_after_str)
        except ValueError:
            return 60
