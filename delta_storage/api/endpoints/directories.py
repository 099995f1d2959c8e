"""Directory endpoints (listing, create, rename, move, delete) and size queries."""

from typing import Any

from delta_storage.api.endpoints.files import parse_file
from delta_storage.api.http_client import AsyncHttpClient, parse_payload
from delta_storage.exceptions import InvalidResponseError
from delta_storage.models.storage import Directory, DirectoryListing, StorageClass
from delta_storage.models.timestamps import parse_timestamp


def split_segments(path: str) -> list[str]:
    return [p for p in path.strip("/").split("/") if p]


async def read_directory(http: AsyncHttpClient, directory_id: str | None = None) -> DirectoryListing:
    """Get the contents of a directory, or of the root when no id is given."""
    endpoint = f"/directory/{directory_id or ''}"
    response = await http.request("GET", endpoint)
    return parse_payload(parse_listing, response, endpoint)


async def read_directory_by_segment(http: AsyncHttpClient, path: str) -> DirectoryListing:
    """
    Get the contents of a directory addressed by path.

    Args:
        http: Configured async HTTP client.
        path: Slash-delimited path (e.g., "photos/2024/june").

    Returns:
        Listing of the directory at ``path``.
    """
    params = [("segment", segment) for segment in split_segments(path)]
    response = await http.request("GET", "/directory", params=params)
    return parse_payload(parse_listing, response, "/directory")


async def create_directory(
    http: AsyncHttpClient, name: str, parent_directory_id: str | None = None
) -> Any:
    """Create a directory, at the root when no parent is given."""
    return await http.request(
        "POST",
        "/directory/create",
        json={"name": name, "parentDirectoryId": parent_directory_id},
    )


async def rename_directory(http: AsyncHttpClient, directory_id: str, name: str) -> Any:
    """Rename a directory."""
    return await http.request("PUT", f"/directory/{directory_id}", json={"name": name})


async def move(
    http: AsyncHttpClient,
    destination_id: str,
    directory_ids: list[str],
    file_ids: list[str] | None = None,
) -> Any:
    """Move directories and files into ``destination_id`` with one request."""
    return await http.request(
        "PUT",
        f"/directory/{destination_id}",
        json={"move": list(directory_ids), "moveFiles": list(file_ids or [])},
    )


async def delete_directory(http: AsyncHttpClient, directory_id: str) -> Any:
    """Delete a directory."""
    return await http.request("DELETE", f"/directory/{directory_id}")


async def get_total_size(http: AsyncHttpClient) -> int:
    """Get the total stored size in bytes."""
    response = await http.request("GET", "/total-size")
    return _unwrap_total_size(response, "/total-size")


async def read_directory_size(http: AsyncHttpClient, directory_id: str) -> int:
    """Get the stored size of a directory in bytes."""
    endpoint = f"/directory/{directory_id}/size"
    response = await http.request("GET", endpoint)
    return _unwrap_total_size(response, endpoint)


def parse_directory(data: dict[str, Any]) -> Directory:
    """Build a Directory from its API representation."""
    storage_class = data.get("storageClassName")

    return Directory(
        id=data["id"],
        name=data["name"],
        parent_directory_id=data.get("parentDirectoryId"),
        owner_id=data.get("ownerId", ""),
        soft_deleted=bool(data.get("softDeleted", False)),
        created_at=parse_timestamp(data.get("createdAt")),
        updated_at=parse_timestamp(data.get("updatedAt")),
        storage_class=StorageClass(storage_class) if storage_class else None,
        drive_id=data.get("driveId"),
        item_count=data.get("itemCount", 0),
        parent_directory=data.get("parentDirectory"),
    )


def parse_listing(data: dict[str, Any] | None) -> DirectoryListing:
    """Build a DirectoryListing from ``{directories: [...], files: [...]}``."""
    data = data or {}
    return DirectoryListing(
        directories=tuple(parse_directory(d) for d in data.get("directories") or ()),
        files=tuple(parse_file(f) for f in data.get("files") or ()),
    )


def _unwrap_total_size(response: Any, endpoint: str) -> int:
    # Sizes may exceed 2**53, so floats are rejected and numeric strings accepted.
    value = response.get("totalSize") if isinstance(response, dict) else None
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise InvalidResponseError("Response has no integral totalSize", endpoint=endpoint)
    try:
        return int(value)
    except ValueError as e:
        raise InvalidResponseError("Response has no integral totalSize", endpoint=endpoint) from e
