"""Base HTTP client for external API integrations."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for external API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(APIError):
    """Raised when API rate limit is exceeded."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: int | None = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class NotFoundError(APIError):
    """Raised when a resource is not found."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class BaseAPIClient(ABC):
    """Abstract base class for external API clients.

    Owns a lazily created ``httpx.AsyncClient`` and maps HTTP failures onto
    the exceptions above.
    """

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        """Initialize the base API client.

        Args:
            base_url: The base URL for the API.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def default_params(self) -> dict[str, Any]:
        """Return query parameters sent with every request (e.g. API key)."""
        ...

    @property
    def default_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.default_headers,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make an HTTP request to the API.

        Raises:
            NotFoundError: If the resource is not found (404).
            RateLimitError: If rate limit is exceeded (429).
            APIError: For other HTTP and transport errors.
        """
        client = await self._get_client()

        request_params = dict(self.default_params)
        if params:
            request_params.update(params)

        try:
            response = await client.request(
                method=method,
                url=endpoint.lstrip("/"),
                params=request_params,
            )
        except httpx.TimeoutException as e:
            logger.error("Request to %s timed out: %s", self.base_url, e)
            raise APIError(f"Request timed out: {e}", status_code=504) from e
        except httpx.RequestError as e:
            logger.error("Request to %s failed: %s", self.base_url, e)
            raise APIError(f"Request failed: {e}", status_code=502) from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> dict[str, Any]:
        """Handle the HTTP response.

        Upstream authentication failures and server errors become 502 so the
        caller never sees our own API key problems as its own 401.
        """
        if response.status_code == 404:
            raise NotFoundError()

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(retry_after=int(retry_after) if retry_after else None)

        if response.status_code >= 400:
            logger.error("Upstream API error %s: %s", response.status_code, response.text)
            raise APIError("External API error", status_code=502)

        try:
            data = response.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON response: {e}", status_code=502) from e

        if not isinstance(data, dict):
            raise APIError("Unexpected response payload", status_code=502)
        return data

    async def get(self, endpoint: str = "", params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Make a GET request to the API."""
        return await self._request("GET", endpoint, params=params)

    async def __aenter__(self) -> "BaseAPIClient":
        """Async context manager entry."""
        await self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
