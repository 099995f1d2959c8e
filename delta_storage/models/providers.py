"""
Storage network response shapes.

Each decentralized storage network reports where and how a file is stored
with its own metadata shape. The variants are kept apart, tagged by
provider, and never normalized into a common form.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any

from delta_storage.exceptions import UnknownProviderError
from delta_storage.models.timestamps import parse_timestamp


class DSNProvider(StrEnum):
    """Decentralized storage networks backing the service."""

    IPFS = "ipfs"
    SIA = "sia"
    FILECOIN = "filecoin"
    FILEFILEGO = "filefilego"


@dataclass(frozen=True, kw_only=True)
class IPFSMetadata:
    name: str
    cid: str
    owner_id: str
    size: int
    status: str
    edge_url: str | None = None
    content_type: str | None = None
    piece_id: str | None = None
    on_chain_id: str | None = None
    network: Any = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, kw_only=True)
class SiaShard:
    host: str
    root: str


@dataclass(frozen=True, kw_only=True)
class SiaSlab:
    health: float
    key: str
    min_shards: int
    shards: tuple[SiaShard, ...]
    offset: int
    length: int


@dataclass(frozen=True, kw_only=True)
class SiaObject:
    """Object entry as reported by a Sia renter node."""

    etag: str
    health: float
    mime_type: str
    mod_time: datetime | None
    name: str
    size: int
    key: str
    slabs: tuple[SiaSlab, ...] | None = None
    partial_slab: Any = None


@dataclass(frozen=True, kw_only=True)
class SiaMetadata:
    has_more: bool
    object: SiaObject


@dataclass(frozen=True, kw_only=True)
class IPFSStorageStatus:
    links: tuple[str, ...]
    status: str
    metadata: IPFSMetadata | None = None
    provider: DSNProvider = DSNProvider.IPFS


@dataclass(frozen=True, kw_only=True)
class SiaStorageStatus:
    links: tuple[str, ...]
    status: str
    metadata: SiaMetadata | None = None
    provider: DSNProvider = DSNProvider.SIA


@dataclass(frozen=True, kw_only=True)
class FilecoinStorageStatus:
    links: tuple[str, ...]
    status: str
    metadata: dict[str, Any] | None = None
    provider: DSNProvider = DSNProvider.FILECOIN


@dataclass(frozen=True, kw_only=True)
class FileFileGoStorageStatus:
    links: tuple[str, ...]
    status: str
    metadata: dict[str, Any] | None = None
    provider: DSNProvider = DSNProvider.FILEFILEGO


StorageStatus = (
    IPFSStorageStatus | SiaStorageStatus | FilecoinStorageStatus | FileFileGoStorageStatus
)


def parse_storage_status(data: dict[str, Any]) -> StorageStatus:
    """
    Build the provider variant of a storage status payload.

    Args:
        data: Payload with ``provider``, ``links``, ``status`` and ``metadata``.

    Returns:
        The variant matching the ``provider`` discriminant.

    Raises:
        UnknownProviderError: If the discriminant is missing or unsupported.
    """
    raw_provider = data.get("provider")
    try:
        provider = DSNProvider(str(raw_provider).lower())
    except ValueError as e:
        msg = "Unsupported storage provider"
        raise UnknownProviderError(msg, provider=raw_provider) from e

    links = tuple(data.get("links") or ())
    status = data.get("status", "")
    metadata = data.get("metadata")

    match provider:
        case DSNProvider.IPFS:
            return IPFSStorageStatus(
                links=links,
                status=status,
                metadata=_parse_ipfs_metadata(metadata) if metadata else None,
            )
        case DSNProvider.SIA:
            return SiaStorageStatus(
                links=links,
                status=status,
                metadata=_parse_sia_metadata(metadata) if metadata else None,
            )
        case DSNProvider.FILECOIN:
            return FilecoinStorageStatus(links=links, status=status, metadata=metadata)
        case DSNProvider.FILEFILEGO:
            return FileFileGoStorageStatus(links=links, status=status, metadata=metadata)


def _parse_ipfs_metadata(data: dict[str, Any]) -> IPFSMetadata:
    return IPFSMetadata(
        name=data["name"],
        cid=data["cid"],
        owner_id=data["ownerId"],
        size=int(data.get("size", 0)),
        status=data.get("status", ""),
        edge_url=data.get("edgeURL"),
        content_type=data.get("contentType"),
        piece_id=data.get("pieceId"),
        on_chain_id=data.get("onChainId"),
        network=data.get("network"),
        created_at=parse_timestamp(data.get("createdAt")),
        updated_at=parse_timestamp(data.get("updatedAt")),
    )


def _parse_sia_metadata(data: dict[str, Any]) -> SiaMetadata:
    obj = data["object"]
    slabs = obj.get("slabs")

    return SiaMetadata(
        has_more=bool(data.get("hasMore", False)),
        object=SiaObject(
            etag=obj.get("eTag", ""),
            health=obj.get("health", 0),
            mime_type=obj.get("mimeType", ""),
            mod_time=parse_timestamp(obj.get("modTime")),
            name=obj["name"],
            size=int(obj.get("size", 0)),
            key=obj.get("key", ""),
            slabs=None
            if slabs is None
            else tuple(
                SiaSlab(
                    health=s["slab"].get("health", 0),
                    key=s["slab"].get("key", ""),
                    min_shards=s["slab"].get("minShards", 0),
                    shards=tuple(
                        SiaShard(host=sh["host"], root=sh["root"])
                        for sh in s["slab"].get("shards") or ()
                    ),
                    offset=s.get("offset", 0),
                    length=s.get("length", 0),
                )
                for s in slabs
            ),
            partial_slab=obj.get("partialSlab"),
        ),
    )
