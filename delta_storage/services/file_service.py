"""
File service for Delta Storage.

Checks the key scope before each file operation, then issues its request.
"""

from typing import Any, BinaryIO

import structlog

from delta_storage.api.endpoints import files
from delta_storage.api.http_client import AsyncHttpClient
from delta_storage.auth.credential import Credential
from delta_storage.auth.scope import Operation, verify_authorized
from delta_storage.models.storage import File, StorageClass

logger = structlog.get_logger(__name__)


class FileService:
    """Scope-checked file operations."""

    def __init__(self, http: AsyncHttpClient, credential: Credential) -> None:
        """
        Args:
            http: Async HTTP client.
            credential: Decoded API key of the session.
        """
        self._http = http
        self._credential = credential

    async def read_file(self, file_id: str) -> File:
        """
        Get a file by id.

        Raises:
            AuthorizationDeniedError: If the key cannot read files.
        """
        verify_authorized(self._credential.scope, Operation.READ_FILE)
        return await files.read_file(self._http, file_id)

    async def list_files(self) -> list[File]:
        """
        List all files visible to the key.

        Raises:
            AuthorizationDeniedError: If the key cannot read files.
        """
        verify_authorized(self._credential.scope, Operation.READ_FILE)
        return await files.list_files(self._http)

    async def upload_file(
        self,
        name: str,
        content: bytes | BinaryIO,
        collection_name: str,
        directory_id: str,
        storage_classes: list[StorageClass] | None = None,
    ) -> Any:
        """
        Upload a file into a directory.

        The edge token of the API key is attached to the upload form.

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
        """
        verify_authorized(self._credential.scope, Operation.UPLOAD_FILE)
        logger.debug("Uploading file", name=name, directory_id=directory_id)
        return await files.upload_file(
            self._http,
            name=name,
            content=content,
            collection_name=collection_name,
            directory_id=directory_id,
            edge_token=self._credential.edge_token,
            storage_classes=storage_classes,
        )

    async def delete_file(self, file_id: str) -> Any:
        verify_authorized(self._credential.scope, Operation.DELETE_FILE)
        return await files.delete_file(self._http, file_id)

    async def rename_file(self, file_id: str, name: str) -> Any:
        verify_authorized(self._credential.scope, Operation.RENAME_FILE)
        return await files.rename_file(self._http, file_id, name)

    async def update_file(
        self,
        file_id: str,
        name: str | None = None,
        storage_classes: list[StorageClass] | None = None,
    ) -> Any:
        """
        Update a file's name and/or storage classes.

        Raises:
            AuthorizationDeniedError: If the key cannot both upload and delete files.
        """
        verify_authorized(self._credential.scope, Operation.UPDATE_FILE)
        return await files.update_file(
            self._http, file_id, name=name, storage_classes=storage_classes
        )
