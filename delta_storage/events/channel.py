"""
Event channel protocol definition and socket.io implementation.

The bridge only needs connect, disconnect, emit and handler registration,
so any push transport offering those can be swapped in.
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

import socketio
import structlog
from socketio.exceptions import ConnectionError as SocketIOConnectionError
from socketio.exceptions import SocketIOError

from delta_storage.exceptions import EventChannelError

logger = structlog.get_logger(__name__)


@runtime_checkable
class EventChannel(Protocol):
    """Persistent bidirectional event connection."""

    @property
    def connected(self) -> bool:
        """Whether the connection is currently up."""
        ...

    async def connect(self) -> None:
        """
        Open the connection.

        Raises:
            EventChannelError: If the connection cannot be established.
        """
        ...

    async def disconnect(self) -> None:
        """Close the connection."""
        ...

    async def emit(self, event: str, data: Any = None) -> None:
        """Send an event to the server."""
        ...

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        """Register the handler invoked for an inbound event."""
        ...


class SocketIOChannel:
    """
    Event channel over a socket.io connection.

    Authenticates with ``{"token": <api key>}`` in the connect payload.
    Reconnection after a dropped connection is left to python-socketio.
    """

    def __init__(
        self,
        url: str,
        token: str,
        *,
        transports: tuple[str, ...] = ("websocket", "polling"),
        wait_timeout: float = 10.0,
        client: socketio.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            url: Server URL.
            token: Raw composite API key.
            transports: Engine.IO transports to try.
            wait_timeout: Seconds to wait for the connection handshake.
            client: Preconfigured socket.io client (testing).
        """
        self._url = url
        self._token = token
        self._transports = list(transports)
        self._wait_timeout = wait_timeout
        self._sio = client or socketio.AsyncClient(logger=False, engineio_logger=False)

    @property
    def connected(self) -> bool:
        return bool(self._sio.connected)

    async def connect(self) -> None:
        try:
            await self._sio.connect(
                self._url,
                auth={"token": self._token},
                transports=self._transports,
                wait_timeout=self._wait_timeout,
            )
        except SocketIOConnectionError as e:
            msg = f"Event channel connection failed: {e}"
            raise EventChannelError(msg, url=self._url) from e
        logger.debug("Event channel connected", url=self._url)

    async def disconnect(self) -> None:
        await self._sio.disconnect()
        logger.debug("Event channel disconnected", url=self._url)

    async def emit(self, event: str, data: Any = None) -> None:
        try:
            await self._sio.emit(event, data)
        except SocketIOError as e:
            msg = f"Failed to emit {event}"
            raise EventChannelError(msg, event=event) from e

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        self._sio.on(event, handler)
