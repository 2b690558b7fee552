"""
HTTP Transport for the GitHub REST API.

Handles async HTTP communication with automatic retry logic, bearer
authentication and error handling.
"""

import asyncio
import random
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import httpx

from prsight.exceptions import (
    AuthenticationError,
    NotFoundError,
    PRSightError,
    RateLimitedError,
    UpstreamError,
    ValidationError,
)
from prsight.logging import get_logger, log_github_request, log_github_response

logger = get_logger("http")

GITHUB_JSON = "application/vnd.github+json"
GITHUB_DIFF = "application/vnd.github.v3.diff"
GITHUB_API_VERSION = "2022-11-28"


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503, 504])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


class HTTPTransport:
    """
    Async HTTP transport layer with bearer authentication and retry logic.

    Handles:
    - Bearer token and GitHub media-type headers on every request
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
        user_agent: str = "prsight",
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: GitHub token presented as a bearer credential
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
            user_agent: User-Agent header value (GitHub rejects requests without one)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": GITHUB_JSON,
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
                "User-Agent": user_agent,
            },
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "HTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def get_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        GET a JSON resource with automatic retry.

        Args:
            path: API path (e.g., "/repos/octocat/Hello-World")
            params: Query parameters; ``None`` values are dropped

        Returns:
            Parsed JSON response (object or array)

        Raises:
            PRSightError: On API errors
        """
        response = await self.request("GET", path, params=params)
        return response.json()

    async def get_text(
        self,
        path: str,
        accept: str,
        params: dict[str, Any] | None = None,
    ) -> str:
        """
        GET a resource in a non-JSON media type (e.g., a unified diff).

        Args:
            path: API path
            accept: Media type for the Accept header
            params: Query parameters

        Returns:
            Response body as text
        """
        response = await self.request("GET", path, params=params, accept=accept)
        return response.text

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        accept: str | None = None,
    ) -> httpx.Response:
        """
        Send a request, retrying transient failures, and return the response.

        Network errors and the status codes in ``retry_config.retry_on`` are
        retried with exponential backoff until ``max_retries`` is used up.

        Args:
            method: HTTP method
            path: API path
            params: Query parameters; ``None`` values are dropped
            accept: Optional Accept header override

        Returns:
            httpx.Response with a status code below 400

        Raises:
            PRSightError: On a non-retryable error or once retries run out
        """
        query = {k: v for k, v in params.items() if v is not None} if params else None
        headers = {"Accept": accept} if accept else None
        attempt = 0

        while True:
            try:
                response = await self._send(method, path, query, headers)
            except httpx.RequestError as e:
                if attempt >= self.retry_config.max_retries:
                    raise UpstreamError("CONNECTION_ERROR", str(e) or type(e).__name__) from e
                delay = self._get_backoff_time(attempt, None)
                logger.warning(
                    "%s %s failed (%s); retry %d/%d in %.1fs",
                    method,
                    path,
                    e,
                    attempt + 1,
                    self.retry_config.max_retries,
                    delay,
                )
            else:
                if response.status_code < 400:
                    return response
                error = self._parse_error_response(response)
                if not self._should_retry(response.status_code, attempt):
                    raise error
                delay = self._get_backoff_time(attempt, response.headers.get("Retry-After"))
                logger.warning(
                    "%s %s returned %d; retry %d/%d in %.1fs",
                    method,
                    path,
                    response.status_code,
                    attempt + 1,
                    self.retry_config.max_retries,
                    delay,
                )

            await asyncio.sleep(delay)
            attempt += 1

    async def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
    ) -> httpx.Response:
        log_github_request(method, path, params)
        started = time.perf_counter()
        response = await self._client.request(method, path, params=params, headers=headers)
        log_github_response(
            response.status_code,
            path,
            rate_limit_remaining=response.headers.get("x-ratelimit-remaining"),
            elapsed_ms=(time.perf_counter() - started) * 1000,
        )
        return response

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """True while retries remain and *status_code* is transient."""
        return (
            attempt < self.retry_config.max_retries
            and status_code in self.retry_config.retry_on
        )

    def _get_backoff_time(self, attempt: int, retry_after: str | None) -> float:
        """
        Seconds to wait before retry number ``attempt + 1``.

        A numeric Retry-After header wins when ``respect_retry_after`` is set;
        otherwise ``backoff_factor ** attempt`` with jitter, capped at
        ``max_backoff``.
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass

        delay = self.retry_config.backoff_factor ** attempt
        spread = delay * self.retry_config.jitter
        return min(delay + random.uniform(-spread, spread), self.retry_config.max_backoff)

    def _parse_error_response(self, response: httpx.Response) -> PRSightError:
        """
        Parse a GitHub error response into a typed exception.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate PRSightError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        status_code = response.status_code
        message = data.get("message") or f"HTTP {status_code}"
        request_id = response.headers.get("x-github-request-id")

        if status_code == 401:
            return AuthenticationError(
                "GitHub token is invalid or expired", request_id=request_id
            )
        elif status_code == 403 and response.headers.get("x-ratelimit-remaining") == "0":
            return RateLimitedError(
                "RATE_LIMITED",
                "GitHub API rate limit exceeded",
                self._seconds_until_reset(response),
                status_code=403,
                request_id=request_id,
            )
        elif status_code == 403:
            return UpstreamError(
                "FORBIDDEN",
                f"GitHub API rate limit exceeded or insufficient permissions: {message}",
                status_code=403,
                request_id=request_id,
            )
        elif status_code == 404:
            return NotFoundError(message, request_id=request_id)
        elif status_code == 429:
            retry_after_str = response.headers.get("Retry-After", "60")
            try:
                retry_after = int(retry_after_str)
            except ValueError:
                retry_after = 60
            return RateLimitedError(
                "RATE_LIMITED", message, retry_after, request_id=request_id
            )
        elif status_code >= 500:
            return UpstreamError(
                "SERVER_ERROR", message, status_code=status_code, request_id=request_id
            )
        else:
            return ValidationError(message, code="GITHUB_REJECTED", request_id=request_id)

    @staticmethod
    def _seconds_until_reset(response: httpx.Response) -> int:
        """Seconds until the rate-limit window resets (0 if unknown)."""
        try:
            reset = int(response.headers.get("x-ratelimit-reset", "0"))
        except ValueError:
            return 0
        now = int(datetime.now(timezone.utc).timestamp())
        return max(reset - now, 0)
