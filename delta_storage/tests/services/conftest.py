from collections.abc import AsyncIterator

import pytest_asyncio

from delta_storage.api.http_client import AsyncHttpClient
from delta_storage.config import DeltaStorageConfig
from delta_storage.tests.constants import UNRESTRICTED_KEY
from delta_storage.tests.utils.recording_transport import RecordingTransport


@pytest_asyncio.fixture
async def open_http(
    config: DeltaStorageConfig, recording_transport: RecordingTransport
) -> AsyncIterator[AsyncHttpClient]:
    async with AsyncHttpClient(config, UNRESTRICTED_KEY, transport=recording_transport) as http:
        yield http
