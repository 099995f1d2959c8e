"""File endpoints (read, upload, rename, update, delete)."""

import json
from typing import Any, BinaryIO

import structlog

from delta_storage.api.http_client import AsyncHttpClient, parse_payload
from delta_storage.exceptions import UnknownProviderError
from delta_storage.models.providers import StorageStatus, parse_storage_status
from delta_storage.models.storage import File, StorageClass
from delta_storage.models.timestamps import parse_timestamp

logger = structlog.get_logger(__name__)


async def read_file(http: AsyncHttpClient, file_id: str) -> File:
    """Get a single file."""
    endpoint = f"/files/{file_id}"
    response = await http.request("GET", endpoint)
    return parse_payload(parse_file, response, endpoint)


async def list_files(http: AsyncHttpClient) -> list[File]:
    """Get all files visible to the key."""
    response = await http.request("GET", "/files/")
    return parse_payload(_parse_files, response, "/files/")


async def upload_file(
    http: AsyncHttpClient,
    *,
    name: str,
    content: bytes | BinaryIO,
    collection_name: str,
    directory_id: str,
    edge_token: str,
    storage_classes: list[StorageClass] | None = None,
) -> Any:
    """
    Upload a file as a multipart form.

    Args:
        http: Configured async HTTP client.
        name: File name.
        content: File bytes or a binary file object.
        collection_name: Target collection.
        directory_id: Target directory.
        edge_token: Edge token from the API key.
        storage_classes: Requested tiers; omitted from the form when empty.

    Returns:
        Decoded response body.
    """
    data = {
        "name": name,
        "collectionName": collection_name,
        "directoryId": directory_id,
        "edgeToken": edge_token,
    }
    if storage_classes:
        data["storageClasses"] = json.dumps([str(c) for c in storage_classes])

    return await http.request(
        "POST",
        "/files/upload",
        data=data,
        files={"file": (name, content)},
    )


async def delete_file(http: AsyncHttpClient, file_id: str) -> Any:
    """Delete a file."""
    return await http.request("DELETE", f"/files/{file_id}")


async def rename_file(http: AsyncHttpClient, file_id: str, name: str) -> Any:
    """Rename a file."""
    return await http.request("PUT", f"/files/{file_id}", json={"name": name})


async def update_file(
    http: AsyncHttpClient,
    file_id: str,
    *,
    name: str | None = None,
    storage_classes: list[StorageClass] | None = None,
) -> Any:
    """Update a file's name and/or storage classes; unset fields are left out."""
    body: dict[str, Any] = {}
    if name is not None:
        body["name"] = name
    if storage_classes is not None:
        body["storageClasses"] = [str(c) for c in storage_classes]

    return await http.request("PUT", f"/files/{file_id}", json=body)


def parse_file(data: dict[str, Any]) -> File:
    """
    Build a File from its API representation.

    A file stored on a network this client does not know gets ``storage=None``.
    """
    storage = _parse_storage(data) if "links" in data and "provider" in data else None

    return File(
        id=data["id"],
        name=data["name"],
        directory_id=data.get("directoryId"),
        owner_id=data.get("ownerId", ""),
        content_type=data.get("contentType", ""),
        size=int(data.get("size", 0)),
        cid=data.get("cid"),
        status=data.get("status"),
        soft_deleted=bool(data.get("softDeleted", False)),
        created_at=parse_timestamp(data.get("createdAt")),
        updated_at=parse_timestamp(data.get("updatedAt")),
        storage_classes=tuple(
            StorageClass(sc["storageClassName"]) for sc in data.get("storageClasses") or ()
        ),
        image_link=data.get("imageLink"),
        piece_id=data.get("pieceId"),
        on_chain_id=data.get("onChainId"),
        network=data.get("network"),
        edge_url=data.get("edgeURL"),
        data_uri=data.get("dataURI"),
        storage=storage,
    )


def _parse_storage(data: dict[str, Any]) -> StorageStatus | None:
    # A network unknown to this client leaves the rest of the file readable.
    try:
        return parse_storage_status(data)
    except UnknownProviderError as e:
        logger.debug("Skipping storage status", provider=e.provider, file_id=data.get("id"))
        return None


def _parse_files(data: list[dict[str, Any]] | None) -> list[File]:
    return [parse_file(f) for f in data or []]
