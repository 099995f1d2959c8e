"""
Async HTTP client for the Delta Storage API.

Wraps httpx with bearer authentication and maps transport failures
onto the library's exception hierarchy. Requests are never retried.
"""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
import structlog

from delta_storage.config import DeltaStorageConfig
from delta_storage.exceptions import APIError, InvalidResponseError, NetworkError

logger = structlog.get_logger(__name__)

SENSITIVE_KEYS = frozenset(
    {
        "apiKey",
        "edgeToken",
        "token",
        "Authorization",
        "authorization",
    }
)

QueryParams = dict[str, Any] | list[tuple[str, str]]

T = TypeVar("T")


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive fields from a dict before logging.

    Recursively sanitizes nested dictionaries and lists.

    Args:
        data: Dictionary that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    result = {}
    for key, value in data.items():
        if key in SENSITIVE_KEYS:
            result[key] = "***"
        elif isinstance(value, dict):
            result[key] = sanitize_for_log(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_for_log(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


class AsyncHttpClient:
    """Async HTTP client authenticated with a composite API key."""

    def __init__(
        self,
        config: DeltaStorageConfig,
        api_key: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration.
            api_key: Raw composite key, sent verbatim as the bearer token.
            transport: Optional transport for testing (mock transport).
        """
        self._config = config
        self._api_key = api_key
        self._transport = transport

        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def __aenter__(self) -> "AsyncHttpClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._close()

    @property
    def is_open(self) -> bool:
        return self._client is not None

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self._config.base_url,
                    timeout=self._config.timeout,
                    transport=self._transport,
                    headers={
                        "Accept": "application/json",
                        "Authorization": f"Bearer {self._api_key}",
                        "User-Agent": self._config.user_agent,
                    },
                )
        return self._client

    async def _close(self) -> None:
        async with self._client_lock:
            if self._client is None:
                logger.debug("Client not open.")
                return
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: dict[str, Any] | None = None,
        params: QueryParams | None = None,
        data: dict[str, str] | None = None,
        files: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make an API request.

        Args:
            method: HTTP method (GET, POST, etc.).
            endpoint: API endpoint (e.g., "/files/abc").
            json: JSON body for POST/PUT requests.
            params: Query parameters; a list of pairs repeats a key.
            data: Multipart form fields, sent together with ``files``.
            files: Multipart file parts.

        Returns:
            Decoded JSON body, or None for an empty body.

        Raises:
            APIError: If the API answers with a non-2xx status.
            NetworkError: If the request fails due to network issues.
            InvalidResponseError: If the body is not valid JSON.
        """
        if self._client is None:
            msg = "HTTP client not initialized. Use 'async with' first."
            raise RuntimeError(msg)

        logger.debug(
            "Sending request",
            method=method,
            endpoint=endpoint,
            body=sanitize_for_log(json or data or {}),
        )
        try:
            response = await self._client.request(
                method=method,
                url=endpoint,
                json=json,
                params=params,
                data=data,
                files=files,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise APIError(
                _error_message(e.response),
                code=e.response.status_code,
                endpoint=endpoint,
            ) from e
        except httpx.TransportError as e:
            msg = f"Request failed: {e.__class__.__name__}"
            raise NetworkError(msg, endpoint=endpoint) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseError("Invalid JSON response from API", endpoint=endpoint) from e


def parse_payload(parser: Callable[[Any], T], data: Any, endpoint: str) -> T:
    """
    Build a model from a decoded body.

    Raises:
        InvalidResponseError: If the body lacks a field or holds an unexpected value.
    """
    try:
        return parser(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        msg = f"Malformed response payload: {e.__class__.__name__}: {e}"
        raise InvalidResponseError(msg, endpoint=endpoint) from e


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("message") or body.get("error")
        if isinstance(error, str) and error:
            return error
    return f"HTTP {response.status_code}"
