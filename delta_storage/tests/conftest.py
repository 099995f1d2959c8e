from collections.abc import Callable
from typing import Any

import pytest

from delta_storage.config import DeltaStorageConfig
from delta_storage.tests.constants import DIRECTORY_ID, FILE_ID
from delta_storage.tests.utils.fake_channel import FakeEventChannel
from delta_storage.tests.utils.recording_transport import RecordingTransport


@pytest.fixture
def config() -> DeltaStorageConfig:
    return DeltaStorageConfig(environment="production", host="https://api.test")


@pytest.fixture
def recording_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def fake_channel() -> FakeEventChannel:
    return FakeEventChannel()


@pytest.fixture
def make_directory_payload() -> Callable[..., dict[str, Any]]:
    def _make(
        directory_id: str = DIRECTORY_ID,
        name: str = "photos",
        parent_directory_id: str | None = None,
        **extra: Any,
    ) -> dict[str, Any]:
        return {
            "id": directory_id,
            "name": name,
            "parentDirectoryId": parent_directory_id,
            "ownerId": "user_abc",
            "softDeleted": False,
            "createdAt": "2024-05-01T10:00:00.000Z",
            "updatedAt": "2024-05-02T10:00:00.000Z",
            "storageClassName": "hot",
            "driveId": None,
            "itemCount": 2,
            "parentDirectory": None,
            **extra,
        }

    return _make


@pytest.fixture
def make_file_payload() -> Callable[..., dict[str, Any]]:
    def _make(
        file_id: str = FILE_ID,
        name: str = "cat.png",
        directory_id: str = DIRECTORY_ID,
        **extra: Any,
    ) -> dict[str, Any]:
        return {
            "id": file_id,
            "name": name,
            "contentType": "image/png",
            "size": 2048,
            "ownerId": "user_abc",
            "softDeleted": False,
            "createdAt": "2024-05-01T10:00:00.000Z",
            "updatedAt": "2024-05-01T10:00:00.000Z",
            "directoryId": directory_id,
            "cid": "bafybeigdyrzt",
            "status": "stored",
            "imageLink": None,
            "storageClasses": [{"storageClassName": "hot"}],
            "edgeURL": "https://edge.test/bafybeigdyrzt",
            "dataURI": None,
            **extra,
        }

    return _make
