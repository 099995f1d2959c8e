"""
Directory service for Delta Storage.

Checks the key scope before each directory operation, then issues its
request. Size queries are not scoped.
"""

from typing import Any

from delta_storage.api.endpoints import directories
from delta_storage.api.http_client import AsyncHttpClient
from delta_storage.auth.credential import Credential
from delta_storage.auth.scope import Operation, verify_authorized
from delta_storage.models.storage import DirectoryListing


class DirectoryService:
    """Scope-checked directory operations."""

    def __init__(self, http: AsyncHttpClient, credential: Credential) -> None:
        """
        Args:
            http: Async HTTP client.
            credential: Decoded API key of the session.
        """
        self._http = http
        self._credential = credential

    def check_read(self) -> None:
        """Raise now if directory listings would be denied."""
        verify_authorized(self._credential.scope, Operation.READ_DIRECTORY)

    async def read_directory(self, directory_id: str | None = None) -> DirectoryListing:
        """
        List a directory, or the root when no id is given.

        Raises:
            AuthorizationDeniedError: If the key cannot read directories.
        """
        self.check_read()
        return await directories.read_directory(self._http, directory_id)

    async def read_directory_by_segment(self, path: str) -> DirectoryListing:
        """
        List the directory at a slash-delimited path.

        Args:
            path: Path such as "photos/2024"; each component becomes one
                ``segment`` query parameter, in order.

        Raises:
            AuthorizationDeniedError: If the key cannot read directories.
        """
        self.check_read()
        return await directories.read_directory_by_segment(self._http, path)

    async def create_directory(self, name: str, parent_directory_id: str | None = None) -> Any:
        verify_authorized(self._credential.scope, Operation.CREATE_DIRECTORY)
        return await directories.create_directory(self._http, name, parent_directory_id)

    async def rename_directory(self, directory_id: str, name: str) -> Any:
        verify_authorized(self._credential.scope, Operation.RENAME_DIRECTORY)
        return await directories.rename_directory(self._http, directory_id, name)

    async def move(
        self,
        destination_id: str,
        directory_ids: list[str],
        file_ids: list[str] | None = None,
    ) -> Any:
        """
        Move directories and files under ``destination_id``.

        Raises:
            AuthorizationDeniedError: If the key cannot both create and delete directories.
        """
        verify_authorized(self._credential.scope, Operation.MOVE)
        return await directories.move(self._http, destination_id, directory_ids, file_ids)

    async def delete_directory(self, directory_id: str) -> Any:
        verify_authorized(self._credential.scope, Operation.DELETE_DIRECTORY)
        return await directories.delete_directory(self._http, directory_id)

    async def get_total_size(self) -> int:
        """Total stored bytes for the key's owner."""
        return await directories.get_total_size(self._http)

    async def read_directory_size(self, directory_id: str) -> int:
        """Stored bytes under a directory."""
        return await directories.read_directory_size(self._http, directory_id)
