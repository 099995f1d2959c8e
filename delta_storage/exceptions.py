"""
Delta Storage exception hierarchy.

All exceptions inherit from DeltaStorageError for easy catching.
"""

from typing import Any


class DeltaStorageError(Exception):
    """Base exception for all delta_storage errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class MalformedCredentialError(DeltaStorageError):
    """API key does not decode into the expected fields."""


class AuthorizationDeniedError(DeltaStorageError):
    """Operation is not granted by the API key scope.

    Raised before any request is sent.
    """

    def __init__(self, message: str, *, required: int, granted: int) -> None:
        super().__init__(message, required=required, granted=granted)
        self.required = required
        self.granted = granted


class TransportError(DeltaStorageError):
    """Failure surfaced by the HTTP or event channel transport."""


class APIError(TransportError):
    """API request returned a non-2xx status."""

    def __init__(self, message: str, *, code: int, endpoint: str | None = None) -> None:
        super().__init__(message, code=code, endpoint=endpoint)
        self.code = code
        self.endpoint = endpoint


class NetworkError(TransportError):
    """Network-level error (connection failed, timeout)."""


class InvalidResponseError(TransportError):
    """Response body is not JSON or misses a required field."""

    def __init__(self, message: str, *, endpoint: str | None = None) -> None:
        super().__init__(message, endpoint=endpoint)
        self.endpoint = endpoint


class EventChannelError(TransportError):
    """Event channel could not connect or emit."""


class UnknownProviderError(DeltaStorageError):
    """Storage status payload names an unsupported storage network."""

    def __init__(self, message: str, *, provider: str | None) -> None:
        super().__init__(message, provider=provider)
        self.provider = provider
