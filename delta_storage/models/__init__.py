"""
Domain models for Delta Storage.

These are immutable (frozen) dataclasses built from API payloads.
"""

from delta_storage.models.providers import (
    DSNProvider,
    FilecoinStorageStatus,
    FileFileGoStorageStatus,
    IPFSMetadata,
    IPFSStorageStatus,
    SiaMetadata,
    SiaObject,
    SiaShard,
    SiaSlab,
    SiaStorageStatus,
    StorageStatus,
    parse_storage_status,
)
from delta_storage.models.storage import Directory, DirectoryListing, File, StorageClass

__all__ = [
    # Storage
    "StorageClass",
    "Directory",
    "File",
    "DirectoryListing",
    # Providers
    "DSNProvider",
    "StorageStatus",
    "IPFSStorageStatus",
    "IPFSMetadata",
    "SiaStorageStatus",
    "SiaMetadata",
    "SiaObject",
    "SiaSlab",
    "SiaShard",
    "FilecoinStorageStatus",
    "FileFileGoStorageStatus",
    "parse_storage_status",
]
