"""
Delta Storage Python Client.

An async client for Delta Storage with scope-checked file and directory
operations and live directory change notifications.

Example:
    ```python
    from delta_storage import DeltaStorageClient

    async with DeltaStorageClient("keyId.3.userId.hash.edgeToken") as client:
        listing = await client.read_directory_by_segment("photos/2024")
        print([f.name for f in listing.files])

        await client.connect()
        client.on_total_size_change(lambda size: print(f"{size} bytes stored"))
    ```
"""

from delta_storage.auth.credential import Credential, parse_api_key
from delta_storage.auth.scope import Capability, CapabilitySet, check_allowed
from delta_storage.client import DeltaStorageClient
from delta_storage.config import DeltaStorageConfig
from delta_storage.events.bridge import ChannelState, Subscription
from delta_storage.exceptions import (
    APIError,
    AuthorizationDeniedError,
    DeltaStorageError,
    EventChannelError,
    InvalidResponseError,
    MalformedCredentialError,
    NetworkError,
    TransportError,
    UnknownProviderError,
)
from delta_storage.models.providers import DSNProvider
from delta_storage.models.storage import Directory, DirectoryListing, File, StorageClass

__version__ = "0.1.0"

__all__ = [
    # Main client
    "DeltaStorageClient",
    "DeltaStorageConfig",
    # Authorization
    "Capability",
    "CapabilitySet",
    "Credential",
    "check_allowed",
    "parse_api_key",
    # Events
    "ChannelState",
    "Subscription",
    # Models
    "Directory",
    "DirectoryListing",
    "File",
    "StorageClass",
    "DSNProvider",
    # Exceptions
    "DeltaStorageError",
    "MalformedCredentialError",
    "AuthorizationDeniedError",
    "TransportError",
    "APIError",
    "NetworkError",
    "InvalidResponseError",
    "EventChannelError",
    "UnknownProviderError",
]
