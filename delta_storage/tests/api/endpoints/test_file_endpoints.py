import io
import json
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from delta_storage.api.endpoints.files import (
    delete_file,
    list_files,
    parse_file,
    read_file,
    rename_file,
    update_file,
    upload_file,
)
from delta_storage.exceptions import InvalidResponseError
from delta_storage.models.providers import IPFSStorageStatus
from delta_storage.models.storage import StorageClass


@pytest.mark.asyncio
async def test_read_file_returns_file(
    mock_http: Mock, make_file_payload: Callable[..., dict[str, Any]]
) -> None:
    mock_http.request = AsyncMock(return_value=make_file_payload())

    file = await read_file(mock_http, "file_abc")

    mock_http.request.assert_awaited_once_with("GET", "/files/file_abc")
    assert file.id == "file_abc"
    assert file.name == "cat.png"
    assert file.content_type == "image/png"
    assert file.size == 2048
    assert file.cid == "bafybeigdyrzt"
    assert file.storage_classes == (StorageClass.HOT,)
    assert file.edge_url == "https://edge.test/bafybeigdyrzt"
    assert file.created_at == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    assert file.storage is None


@pytest.mark.asyncio
async def test_list_files_returns_files(
    mock_http: Mock, make_file_payload: Callable[..., dict[str, Any]]
) -> None:
    mock_http.request = AsyncMock(
        return_value=[make_file_payload("f1", "a.txt"), make_file_payload("f2", "b.txt")]
    )

    files = await list_files(mock_http)

    mock_http.request.assert_awaited_once_with("GET", "/files/")
    assert [f.id for f in files] == ["f1", "f2"]


@pytest.mark.asyncio
async def test_upload_file_sends_form_fields_and_edge_token(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value={"id": "file_new"})

    result = await upload_file(
        mock_http,
        name="cat.png",
        content=b"meow",
        collection_name="pets",
        directory_id="dir_abc",
        edge_token="edge_abc",
        storage_classes=[StorageClass.HOT, StorageClass.GLACIER],
    )

    assert result == {"id": "file_new"}
    args, kwargs = mock_http.request.call_args
    assert args == ("POST", "/files/upload")
    assert kwargs["data"] == {
        "name": "cat.png",
        "collectionName": "pets",
        "directoryId": "dir_abc",
        "edgeToken": "edge_abc",
        "storageClasses": '["hot", "glacier"]',
    }
    assert kwargs["files"] == {"file": ("cat.png", b"meow")}
    assert json.loads(kwargs["data"]["storageClasses"]) == ["hot", "glacier"]


@pytest.mark.asyncio
async def test_upload_file_omits_empty_storage_classes(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value={})
    content = io.BytesIO(b"meow")

    await upload_file(
        mock_http,
        name="cat.png",
        content=content,
        collection_name="pets",
        directory_id="dir_abc",
        edge_token="edge_abc",
        storage_classes=[],
    )

    kwargs = mock_http.request.call_args.kwargs
    assert "storageClasses" not in kwargs["data"]
    assert kwargs["files"]["file"][1] is content


@pytest.mark.asyncio
async def test_delete_file_sends_delete(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value={"deleted": True})

    result = await delete_file(mock_http, "file_abc")

    mock_http.request.assert_awaited_once_with("DELETE", "/files/file_abc")
    assert result == {"deleted": True}


@pytest.mark.asyncio
async def test_rename_file_sends_name(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value={})

    await rename_file(mock_http, "file_abc", "dog.png")

    mock_http.request.assert_awaited_once_with(
        "PUT", "/files/file_abc", json={"name": "dog.png"}
    )


@pytest.mark.asyncio
async def test_update_file_sends_only_provided_fields(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value={})

    await update_file(mock_http, "file_abc", storage_classes=[StorageClass.WARM])

    mock_http.request.assert_awaited_once_with(
        "PUT", "/files/file_abc", json={"storageClasses": ["warm"]}
    )


@pytest.mark.asyncio
async def test_update_file_sends_name_and_storage_classes(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value={})

    await update_file(mock_http, "file_abc", name="dog.png", storage_classes=[])

    mock_http.request.assert_awaited_once_with(
        "PUT", "/files/file_abc", json={"name": "dog.png", "storageClasses": []}
    )


def test_parse_file_attaches_provider_status(
    make_file_payload: Callable[..., dict[str, Any]],
) -> None:
    payload = make_file_payload(
        provider="ipfs",
        links=["https://gateway.test/ipfs/bafy"],
        status="pinned",
        metadata=None,
    )

    file = parse_file(payload)

    assert isinstance(file.storage, IPFSStorageStatus)
    assert file.storage.links == ("https://gateway.test/ipfs/bafy",)
    assert file.status == "pinned"


def test_parse_file_handles_provider_specific_fields(
    make_file_payload: Callable[..., dict[str, Any]],
) -> None:
    payload = make_file_payload(
        pieceId="baga6ea4", onChainId="42", network="calibration", storageClasses=None
    )

    file = parse_file(payload)

    assert file.piece_id == "baga6ea4"
    assert file.on_chain_id == "42"
    assert file.network == "calibration"
    assert file.storage_classes == ()


@pytest.mark.asyncio
async def test_read_file_with_bad_size_raises_invalid_response(
    mock_http: Mock, make_file_payload: Callable[..., dict[str, Any]]
) -> None:
    mock_http.request = AsyncMock(return_value=make_file_payload(size="large"))

    with pytest.raises(InvalidResponseError) as exc_info:
        await read_file(mock_http, "file_abc")

    assert exc_info.value.endpoint == "/files/file_abc"


@pytest.mark.asyncio
async def test_list_files_with_missing_name_raises_invalid_response(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value=[{"id": "f1"}])

    with pytest.raises(InvalidResponseError, match="KeyError"):
        await list_files(mock_http)


def test_parse_file_tolerates_unknown_provider(
    make_file_payload: Callable[..., dict[str, Any]],
) -> None:
    file = parse_file(make_file_payload(provider="arweave", links=["https://ar.test/x"]))

    assert file.storage is None
    assert file.id == "file_abc"
