"""
File and directory domain models.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from delta_storage.models.providers import StorageStatus


class StorageClass(StrEnum):
    """Storage tier of a file or directory."""

    HOT = "hot"
    WARM = "warm"
    GLACIER = "glacier"


@dataclass(frozen=True, kw_only=True)
class Directory:
    """
    A node of the directory tree.

    Soft-deleted directories stay addressable by id; the flag is
    server metadata and the client does not act on it.
    """

    id: str
    name: str
    parent_directory_id: str | None
    owner_id: str
    soft_deleted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    storage_class: StorageClass | None = None
    drive_id: str | None = None
    item_count: int = 0
    parent_directory: str | None = None

    @property
    def is_root(self) -> bool:
        """Check if this directory has no parent."""
        return self.parent_directory_id is None


@dataclass(frozen=True, kw_only=True)
class File:
    """
    A stored object.

    The provider fields (piece id, on-chain id, network, edge URL, data URI)
    are only set when the backing storage network supplies them.
    """

    id: str
    name: str
    directory_id: str | None
    owner_id: str
    content_type: str = ""
    size: int = 0
    cid: str | None = None
    status: str | None = None
    soft_deleted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    storage_classes: tuple[StorageClass, ...] = ()
    image_link: str | None = None

    # Provider-specific
    piece_id: str | None = None
    on_chain_id: str | None = None
    network: str | None = None
    edge_url: str | None = None
    data_uri: str | None = None
    storage: StorageStatus | None = None


@dataclass(frozen=True, kw_only=True)
class DirectoryListing:
    """Contents of a directory: child directories and files."""

    directories: tuple[Directory, ...] = ()
    files: tuple[File, ...] = ()

    def __len__(self) -> int:
        return len(self.directories) + len(self.files)

    def get_directory(self, name: str) -> Directory | None:
        """Get a child directory by name."""
        for directory in self.directories:
            if directory.name == name:
                return directory
        return None

    def get_file(self, name: str) -> File | None:
        """Get a file by name."""
        for file in self.files:
            if file.name == name:
                return file
        return None
