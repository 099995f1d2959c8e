"""
Delta Storage client configuration.
"""

import os
from dataclasses import dataclass, field

PRODUCTION_HOST = "https://api.delta.storage"
DEVELOPMENT_HOST = "http://localhost:1337"

_ENVIRONMENTS = frozenset({"production", "development"})


def _default_environment() -> str:
    return os.getenv("DELTA_STORAGE_ENV", "production")


@dataclass(frozen=True, kw_only=True)
class DeltaStorageConfig:
    """
    Attributes:
        environment: Deployment mode, "production" or "development".
            Selects the default host when no explicit host is given.
        host: Explicit API host, overrides the environment default.
        timeout: Request timeout in seconds.
        user_agent: User-Agent header value.
        socketio_transports: Engine.IO transports tried by the event channel.
        socketio_wait_timeout: Seconds to wait for the event channel handshake.
    """

    environment: str = field(default_factory=_default_environment)
    host: str | None = None
    timeout: float = 30.0
    user_agent: str = "DeltaStorage-Python/0.1"
    socketio_transports: tuple[str, ...] = ("websocket", "polling")
    socketio_wait_timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.environment not in _ENVIRONMENTS:
            msg = f"environment must be one of {sorted(_ENVIRONMENTS)}"
            raise ValueError(msg)
        if self.host is not None and not self.host.strip("/"):
            msg = "host must not be empty"
            raise ValueError(msg)
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if not self.socketio_transports:
            msg = "socketio_transports must not be empty"
            raise ValueError(msg)
        if self.socketio_wait_timeout <= 0:
            msg = "socketio_wait_timeout must be positive"
            raise ValueError(msg)

    @property
    def base_url(self) -> str:
        """Resolved API host without a trailing slash."""
        if self.host is not None:
            host = self.host
        elif self.environment == "development":
            host = DEVELOPMENT_HOST
        else:
            host = PRODUCTION_HOST
        return host.rstrip("/")
