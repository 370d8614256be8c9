"""Wire messages exchanged with the metadata registry and block storage.

The messages are plain records; the functions here convert between them,
the stored entities and the transfer objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Protocol

from objectstore import dto
from objectstore.block import Block
from objectstore.block import BlockHeader as EntityBlockHeader
from objectstore.ids import BlockID, ObjectID
from objectstore.metadata import ObjectMetadata


@dataclass
class ObjectIDMessage:
    """An object identifier on the wire."""

    id: int = 0


@dataclass
class BlockIDMessage:
    """A block identifier on the wire."""

    id: int = 0


@dataclass
class BlockHeaderMessage:
    """A block header on the wire."""

    object_id: ObjectIDMessage | None = None
    block_id: BlockIDMessage | None = None
    index: int = 0
    size: int = 0
    checksum: int = 0
    timestamp: datetime | None = None


@dataclass
class BlockMessage:
    """A block of data and its header on the wire."""

    header: BlockHeaderMessage | None = None
    data: bytes = b""


@dataclass
class VersionMessage:
    """One version of an object on the wire."""

    number: int = 0
    size: int = 0
    block_headers: list[BlockHeaderMessage] = field(default_factory=list)
    created_at: datetime | None = None
    modified_at: datetime | None = None


@dataclass
class ObjectMetadataMessage:
    """Object metadata on the wire."""

    id: ObjectIDMessage | None = None
    group: str = ""
    partition: str = ""
    path: str = ""
    name: str = ""
    versions: list[VersionMessage] = field(default_factory=list)
    created_at: datetime | None = None
    modified_at: datetime | None = None


@dataclass
class ObjectMetadataListMessage:
    """A list of object metadata on the wire."""

    metadata: list[ObjectMetadataMessage] = field(default_factory=list)


@dataclass
class ObjectMessage:
    """An uploaded object on the wire."""

    id: ObjectIDMessage | None = None
    group: str = ""
    partition: str = ""
    name: str = ""
    path: str = ""
    size: int = 0
    version_num: int = 0
    block_headers: list[BlockHeaderMessage] = field(default_factory=list)


@dataclass
class ObjectMetadataRequest:
    """A lookup of object metadata by identifier, name or path."""

    object_id: int = 0
    group: str = ""
    partition: str = ""
    path: str = ""
    name: str = ""


@dataclass
class PutResponse:
    """Outcome of a storage request."""

    success: bool = False
    message: str = ""


class MetadataRegistryRequestor(Protocol):
    """Client of the metadata registry."""

    def put(self, message: ObjectMessage) -> ObjectMetadataMessage:
        """Store a new version of the object and return its metadata."""

    def delete(self, message: ObjectMetadataMessage) -> None:
        """Delete the object, or the versions listed in the message."""

    def get_by_object_id(self, request: ObjectMetadataRequest) -> ObjectMetadataMessage:
        """Metadata of the object with the requested identifier."""

    def get_by_object_name(self, request: ObjectMetadataRequest) -> ObjectMetadataMessage:
        """Metadata of the object with the requested name on the path."""

    def find_metadata_on_path(self, request: ObjectMetadataRequest) -> ObjectMetadataListMessage:
        """Metadata of every object on the requested path."""


class BlockStorageRequestor(Protocol):
    """Client of block storage."""

    def put(self, message: BlockMessage) -> PutResponse:
        """Store a block."""

    def get_block(self, header: BlockHeaderMessage) -> BlockMessage:
        """Fetch the block the header describes."""

    def delete(self, header: BlockHeaderMessage) -> PutResponse:
        """Delete the block the header describes."""


def from_object_id(object_id: ObjectID) -> ObjectIDMessage:
    return ObjectIDMessage(id=int(object_id))


def to_object_id(message: ObjectIDMessage | None) -> ObjectID:
    if message is None:
        return ObjectID(0)
    return ObjectID(message.id)


def from_block_id(block_id: BlockID) -> BlockIDMessage:
    return BlockIDMessage(id=int(block_id))


def to_block_id(message: BlockIDMessage | None) -> BlockID:
    if message is None:
        return BlockID(0)
    return BlockID(message.id)


def from_version_dto(version: dto.Version) -> VersionMessage:
    return VersionMessage(
        number=version.number,
        size=version.size,
        block_headers=[from_block_header_dto(header) for header in version.block_headers],
        created_at=version.created_at,
        modified_at=version.modified_at,
    )


def to_version_dto(message: VersionMessage | None) -> dto.Version | None:
    if message is None:
        return None
    return dto.Version(
        number=message.number,
        size=message.size,
        block_headers=[to_block_header_dto(header) for header in message.block_headers],
        created_at=message.created_at,
        modified_at=message.modified_at,
    )


def from_object_metadata(metadata: ObjectMetadata) -> ObjectMetadataMessage:
    """Message for stored metadata, without its versions."""
    return ObjectMetadataMessage(
        id=from_object_id(metadata.id),
        group=metadata.group,
        partition=metadata.partition,
        path=metadata.path,
        name=metadata.name,
        created_at=metadata.created_at,
        modified_at=metadata.modified_at,
    )


def from_object_metadata_dto(metadata: dto.Metadata) -> ObjectMetadataMessage:
    return ObjectMetadataMessage(
        id=from_object_id(metadata.id),
        group=metadata.group,
        partition=metadata.partition,
        path=metadata.path,
        name=metadata.name,
        versions=[from_version_dto(version) for version in metadata.versions],
        created_at=metadata.created_at,
        modified_at=metadata.modified_at,
    )


def _versions_to_dto(messages: Iterable[VersionMessage | None]) -> dto.Versions:
    versions = dto.Versions()
    for message in messages:
        version = to_version_dto(message)
        if version is None:
            raise ValueError("version message is missing")
        versions.append(version)
    return versions


def to_object_metadata_dto(message: ObjectMetadataMessage | None) -> dto.Metadata | None:
    if message is None:
        return None
    return dto.Metadata(
        id=to_object_id(message.id),
        group=message.group,
        partition=message.partition,
        name=message.name,
        versions=_versions_to_dto(message.versions),
        path=message.path,
        created_at=message.created_at,
        modified_at=message.modified_at,
    )


def to_object_metadata(message: ObjectMetadataMessage | None) -> ObjectMetadata:
    """Stored metadata for the message, without versions or timestamps."""
    if message is None:
        return ObjectMetadata()
    return ObjectMetadata(
        id=to_object_id(message.id),
        group=message.group,
        partition=message.partition,
        path=message.path,
        name=message.name,
    )


def from_object_metadata_list_dto(metadata_list: Iterable[dto.Metadata]) -> ObjectMetadataListMessage:
    return ObjectMetadataListMessage(
        metadata=[from_object_metadata_dto(metadata) for metadata in metadata_list]
    )


def _metadata_list(message: ObjectMetadataListMessage) -> list[dto.Metadata]:
    result = []
    for entry in message.metadata:
        metadata = to_object_metadata_dto(entry)
        if metadata is None:
            raise ValueError("metadata message is missing")
        result.append(metadata)
    return result


def to_object_metadata_list_dto(message: ObjectMetadataListMessage) -> list[dto.Metadata]:
    return _metadata_list(message)


def to_items_dto(message: ObjectMetadataListMessage) -> list[dto.Item]:
    return dto.items_from_metadata_list(_metadata_list(message))


def from_block_header(header: EntityBlockHeader) -> BlockHeaderMessage:
    return BlockHeaderMessage(
        object_id=from_object_id(header.object_id),
        block_id=from_block_id(header.block_id),
        index=header.index,
        size=header.size,
        checksum=header.checksum,
        timestamp=header.timestamp,
    )


def from_block_header_dto(header: dto.BlockHeader) -> BlockHeaderMessage:
    return BlockHeaderMessage(
        object_id=from_object_id(header.object_id),
        block_id=from_block_id(header.block_id),
        index=header.index,
        size=header.size,
        checksum=header.checksum,
        timestamp=header.timestamp,
    )


def to_block_header(message: BlockHeaderMessage | None) -> EntityBlockHeader:
    if message is None:
        return EntityBlockHeader()
    return EntityBlockHeader(
        object_id=to_object_id(message.object_id),
        block_id=to_block_id(message.block_id),
        index=message.index,
        size=message.size,
        checksum=message.checksum,
        timestamp=message.timestamp,
    )


def to_block_header_dto(message: BlockHeaderMessage | None) -> dto.BlockHeader:
    if message is None:
        return dto.BlockHeader()
    return dto.BlockHeader(
        object_id=to_object_id(message.object_id),
        block_id=to_block_id(message.block_id),
        index=message.index,
        size=message.size,
        checksum=message.checksum,
        timestamp=message.timestamp,
    )


def from_block(block: Block) -> BlockMessage:
    return BlockMessage(header=from_block_header(block.header), data=block.buffer)


def from_block_dto(block: dto.Block) -> BlockMessage:
    return BlockMessage(header=from_block_header_dto(block.header), data=block.data)


def to_block(message: BlockMessage | None) -> Block:
    if message is None:
        return Block()
    return Block(header=to_block_header(message.header), buffer=message.data)


def from_object_dto(obj: dto.Object) -> ObjectMessage:
    return ObjectMessage(
        id=from_object_id(obj.id),
        group=obj.group,
        partition=obj.partition,
        name=obj.name,
        path=obj.path,
        size=obj.size,
        version_num=obj.version_num,
        block_headers=[from_block_header_dto(header) for header in obj.block_headers],
    )


def to_object_dto(message: ObjectMessage | None) -> dto.Object | None:
    if message is None:
        return None
    return dto.Object(
        id=to_object_id(message.id),
        group=message.group,
        partition=message.partition,
        name=message.name,
        path=message.path,
        size=message.size,
        version_num=message.version_num,
        block_headers=[to_block_header_dto(header) for header in message.block_headers],
    )