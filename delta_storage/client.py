"""
Delta Storage client facade.

This is the main entry point for users of the library. It decodes the API
key once and exposes every file, directory and change-notification
operation behind a single object.
"""

import asyncio
from collections.abc import Callable
from typing import Any, BinaryIO, Self

import httpx
import structlog

from delta_storage.api.http_client import AsyncHttpClient
from delta_storage.auth.credential import Credential, parse_api_key
from delta_storage.auth.scope import CapabilitySet
from delta_storage.config import DeltaStorageConfig
from delta_storage.events.bridge import (
    ChangeNotificationBridge,
    ChannelState,
    ErrorHandler,
    Listener,
    Subscription,
)
from delta_storage.events.channel import EventChannel, SocketIOChannel
from delta_storage.models.storage import DirectoryListing, File, StorageClass
from delta_storage.services.directory_service import DirectoryService
from delta_storage.services.file_service import FileService

logger = structlog.get_logger(__name__)


class DeltaStorageClient:
    """
    Async client for Delta Storage.

    Every file and directory operation is checked against the scope of the
    API key before a request is sent, and fails with
    ``AuthorizationDeniedError`` when the key does not grant it.

    Example:
        ```python
        async with DeltaStorageClient(api_key) as client:
            listing = await client.read_directory()
            for directory in listing.directories:
                print(directory.name)

            await client.connect()
            await client.on_read_directory_event(directory_id, print)
        ```

    Args:
        api_key: Composite key ``keyId.scope.userId.hash.edgeToken``.
        config: Client configuration. Uses defaults if not provided.
        transport: Optional httpx transport for testing (mock transport).
        channel: Event channel to use instead of socket.io.
        on_error: Receives failures of change-notification refreshes.

    Raises:
        MalformedCredentialError: If the API key cannot be decoded.
    """

    def __init__(
        self,
        api_key: str,
        config: DeltaStorageConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        channel: EventChannel | None = None,
        on_error: ErrorHandler | None = None,
    ) -> None:
        self._config = config or DeltaStorageConfig()
        self._credential = parse_api_key(api_key)

        self._http = AsyncHttpClient(self._config, api_key, transport=transport)
        self._files = FileService(self._http, self._credential)
        self._directories = DirectoryService(self._http, self._credential)

        self._channel = channel or SocketIOChannel(
            self._config.base_url,
            api_key,
            transports=self._config.socketio_transports,
            wait_timeout=self._config.socketio_wait_timeout,
        )
        self._bridge = ChangeNotificationBridge(
            self._channel, self._directories, on_error=on_error
        )
        self._init_lock = asyncio.Lock()

    async def __aenter__(self) -> Self:
        """Enter async context."""
        await self._ensure_initialized()
        return self

    async def __aexit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        """Exit async context."""
        await self.close()

    async def _ensure_initialized(self) -> None:
        async with self._init_lock:
            if self._http.is_open:
                return
            await self._http.__aenter__()
            logger.debug("Client initialized", host=self._config.base_url)

    async def close(self) -> None:
        """
        Disconnect the event channel and release the HTTP client.

        Refreshes already started by change signals finish first, while
        the HTTP client is still open.
        """
        await self._bridge.disconnect()
        await self._bridge.wait_idle()
        async with self._init_lock:
            await self._http.__aexit__(None, None, None)
        logger.debug("Client closed")

    @property
    def api_key(self) -> str:
        return self._credential.raw

    @property
    def credential(self) -> Credential:
        return self._credential

    @property
    def scope(self) -> CapabilitySet:
        return self._credential.scope

    @property
    def edge_token(self) -> str:
        return self._credential.edge_token

    @property
    def host(self) -> str:
        return self._config.base_url

    @property
    def state(self) -> ChannelState:
        """Event channel state."""
        return self._bridge.state

    # Files

    async def read_file(self, file_id: str) -> File:
        """
        Get a file by id.

        Raises:
            AuthorizationDeniedError: If the key cannot read files.
            TransportError: If the request fails.
        """
        await self._ensure_initialized()
        return await self._files.read_file(file_id)

    async def list_files(self) -> list[File]:
        """
        List every file visible to the key.

        Raises:
            AuthorizationDeniedError: If the key cannot read files.
            TransportError: If the request fails.
        """
        await self._ensure_initialized()
        return await self._files.list_files()

    async def upload_file(
        self,
        name: str,
        content: bytes | BinaryIO,
        collection_name: str,
        directory_id: str,
        storage_classes: list[StorageClass] | None = None,
    ) -> Any:
        """
        Upload a file.

        Args:
            name: File name.
            content: File bytes or a binary file object.
            collection_name: Target collection.
            directory_id: Target directory.
            storage_classes: Requested storage tiers.

        Returns:
            Decoded response body.

        Raises:
            AuthorizationDeniedError: If the key cannot upload files.
            TransportError: If the request fails.
        """
        await self._ensure_initialized()
        return await self._files.upload_file(
            name, content, collection_name, directory_id, storage_classes
        )

    async def delete_file(self, file_id: str) -> Any:
        await self._ensure_initialized()
        return await self._files.delete_file(file_id)

    async def rename_file(self, file_id: str, name: str) -> Any:
        await self._ensure_initialized()
        return await self._files.rename_file(file_id, name)

    async def update_file(
        self,
        file_id: str,
        name: str | None = None,
        storage_classes: list[StorageClass] | None = None,
    ) -> Any:
        await self._ensure_initialized()
        return await self._files.update_file(file_id, name, storage_classes)

    # Directories

    async def read_directory(self, directory_id: str | None = None) -> DirectoryListing:
        """
        List a directory, or the root when no id is given.

        Raises:
            AuthorizationDeniedError: If the key cannot read directories.
            TransportError: If the request fails.
        """
        await self._ensure_initialized()
        return await self._directories.read_directory(directory_id)

    async def read_directory_by_segment(self, path: str) -> DirectoryListing:
        """
        List the directory at a slash-delimited path, e.g. ``"photos/2024"``.

        Raises:
            AuthorizationDeniedError: If the key cannot read directories.
            TransportError: If the request fails.
        """
        await self._ensure_initialized()
        return await self._directories.read_directory_by_segment(path)

    async def create_directory(self, name: str, parent_directory_id: str | None = None) -> Any:
        await self._ensure_initialized()
        return await self._directories.create_directory(name, parent_directory_id)

    async def rename_directory(self, directory_id: str, name: str) -> Any:
        await self._ensure_initialized()
        return await self._directories.rename_directory(directory_id, name)

    async def move(
        self,
        destination_id: str,
        directory_ids: list[str],
        file_ids: list[str] | None = None,
    ) -> Any:
        """
        Move directories and files into another directory in one request.

        Raises:
            AuthorizationDeniedError: If the key cannot both create and delete directories.
            TransportError: If the request fails.
        """
        await self._ensure_initialized()
        return await self._directories.move(destination_id, directory_ids, file_ids)

    async def delete_directory(self, directory_id: str) -> Any:
        await self._ensure_initialized()
        return await self._directories.delete_directory(directory_id)

    async def get_total_size(self) -> int:
        """Total stored bytes. Not scope-checked."""
        await self._ensure_initialized()
        return await self._directories.get_total_size()

    async def read_directory_size(self, directory_id: str) -> int:
        """Stored bytes under a directory. Not scope-checked."""
        await self._ensure_initialized()
        return await self._directories.read_directory_size(directory_id)

    # Change notifications

    async def connect(self) -> None:
        """
        Open the event channel.

        Raises:
            EventChannelError: If the channel cannot connect.
        """
        await self._ensure_initialized()
        await self._bridge.connect()

    async def disconnect(self) -> None:
        """Close the event channel."""
        await self._bridge.disconnect()

    def on_directory_change(self, callback: Listener) -> Subscription:
        return self._bridge.on_directory_change(callback)

    def on_total_size_change(self, callback: Callable[[int], Any]) -> Subscription:
        return self._bridge.on_total_size_change(callback)

    async def on_read_directory_event(
        self, directory_id: str, callback: Callable[[DirectoryListing], Any]
    ) -> Subscription:
        """
        Watch a directory; ``callback`` gets its fresh listing after every change.

        Raises:
            AuthorizationDeniedError: If the key cannot read directories.
        """
        await self._ensure_initialized()
        return await self._bridge.on_read_directory_event(directory_id, callback)

    def on_read_directory_segment_change(
        self, path: str, callback: Callable[[DirectoryListing], Any]
    ) -> Subscription:
        return self._bridge.on_read_directory_segment_change(path, callback)

    def disconnect_read_directory_event(self) -> None:
        """Remove every directory-change listener."""
        self._bridge.disconnect_read_directory_event()

    async def wait_idle(self) -> None:
        """Wait for in-flight change-notification refreshes."""
        await self._bridge.wait_idle()
