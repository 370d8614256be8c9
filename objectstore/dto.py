"""Transfer objects exchanged between the services and their callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping

from objectstore.block import BlockHeader as EntityBlockHeader
from objectstore.ids import BlockID, ObjectID
from objectstore.metadata import ObjectMetadata
from objectstore.metadata import Version as EntityVersion


@dataclass(frozen=True)
class BlockHeader:
    """Public description of one block of an object."""

    block_id: BlockID = BlockID(0)
    object_id: ObjectID = ObjectID(0)
    index: int = 0
    size: int = 0
    timestamp: datetime | None = None
    checksum: int = 0

    @classmethod
    def from_entity(cls, header: EntityBlockHeader) -> "BlockHeader":
        return cls(
            block_id=BlockID(header.block_id),
            object_id=ObjectID(header.object_id),
            index=header.index,
            size=header.size,
            timestamp=header.timestamp,
            checksum=header.checksum,
        )

    def is_empty(self) -> bool:
        return self == BlockHeader()

    def to_entity(self) -> EntityBlockHeader:
        return EntityBlockHeader(
            block_id=BlockID(self.block_id),
            object_id=ObjectID(self.object_id),
            index=self.index,
            size=self.size,
            timestamp=self.timestamp,
            checksum=self.checksum,
        )


def block_headers_to_entity(headers: Iterable[BlockHeader]) -> list[EntityBlockHeader]:
    """Convert transfer block headers to stored block headers, in order."""
    return [header.to_entity() for header in headers]


@dataclass
class Block:
    """A block of object data as sent to block storage."""

    header: BlockHeader = field(default_factory=BlockHeader)
    data: bytes = b""


@dataclass
class File:
    """A named file and its size."""

    name: str = ""
    size: int = 0


@dataclass
class Version:
    """One version of an object with the headers of its blocks."""

    number: int = 0
    size: int = 0
    block_headers: list[BlockHeader] = field(default_factory=list)
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @classmethod
    def from_entity(cls, version: EntityVersion) -> "Version":
        return cls(
            number=version.number,
            size=version.size,
            block_headers=[BlockHeader.from_entity(h) for h in version.block_headers],
            created_at=version.created_at,
            modified_at=version.modified_at,
        )

    def to_entity(self) -> EntityVersion:
        return EntityVersion(
            number=self.number,
            size=self.size,
            block_headers=block_headers_to_entity(self.block_headers),
            created_at=self.created_at,
            modified_at=self.modified_at,
        )

    def is_valid(self) -> bool:
        return self.number > -1


class Versions(list):
    """Versions of an object, oldest first."""

    @classmethod
    def from_entity(cls, versions: Iterable[EntityVersion]) -> "Versions":
        return cls(Version.from_entity(version) for version in versions)

    def to_entity(self) -> list[EntityVersion]:
        return [version.to_entity() for version in self]

    def is_empty(self) -> bool:
        return not self

    def version(self, number: int) -> Version:
        """The version with the given number; LookupError if absent."""
        for version in self:
            if version.number == number:
                return version
        raise LookupError("version not exist")

    def last_version(self) -> Version:
        """The most recent version; LookupError if there is none."""
        if not self:
            raise LookupError("version not exist")
        return self[-1]

    def has_version(self, number: int) -> bool:
        return any(version.number == number for version in self)


@dataclass
class Metadata:
    """Metadata of an object as exchanged between services."""

    id: ObjectID = ObjectID(0)
    group: str = ""
    partition: str = ""
    name: str = ""
    path: str = ""
    versions: Versions = field(default_factory=Versions)
    created_at: datetime | None = None
    modified_at: datetime | None = None

    def __post_init__(self) -> None:
        self.id = ObjectID(self.id)
        if not isinstance(self.versions, Versions):
            self.versions = Versions(self.versions or ())

    @classmethod
    def from_entity(cls, metadata: ObjectMetadata) -> "Metadata":
        return cls(
            id=ObjectID(metadata.id),
            group=metadata.group,
            partition=metadata.partition,
            name=metadata.name,
            path=metadata.path,
            versions=Versions.from_entity(metadata.versions),
            created_at=metadata.created_at,
            modified_at=metadata.modified_at,
        )

    def is_empty(self) -> bool:
        return self.versions.is_empty() and self.id == 0

    def to_entity(self) -> ObjectMetadata:
        return ObjectMetadata(
            id=ObjectID(self.id),
            group=self.group,
            partition=self.partition,
            name=self.name,
            path=self.path,
            versions=self.versions.to_entity(),
            created_at=self.created_at,
            modified_at=self.modified_at,
        )


@dataclass
class Object:
    """An uploaded object: where it lives and the blocks just written."""

    id: ObjectID = ObjectID(0)
    group: str = ""
    partition: str = ""
    name: str = ""
    path: str = ""
    size: int = 0
    version_num: int = 0
    block_headers: list[BlockHeader] = field(default_factory=list)

    def to_entity(self) -> ObjectMetadata:
        """Metadata for the object without any versions."""
        return ObjectMetadata(
            id=ObjectID(self.id),
            group=self.group,
            partition=self.partition,
            name=self.name,
            path=self.path,
        )


@dataclass
class Request:
    """Parameters of a client request."""

    object_id: ObjectID = ObjectID(0)
    group: str = ""
    partition: str = ""
    path: str = ""
    name: str = ""
    size: int = 0
    version: int = 0
    limit: int = 0
    last_object_id: ObjectID = ObjectID(0)


def request_from_context(context: Mapping[Any, Any], key: Any) -> Request:
    """The request stored in the context under key, or an empty request."""
    value = context.get(key)
    if value is None:
        return Request()
    if not isinstance(value, Request):
        raise TypeError(f"context value for {key!r} is not a Request")
    return value


@dataclass
class Item:
    """An object as listed to a client."""

    id: ObjectID = ObjectID(0)
    group: str = ""
    partition: str = ""
    path: str = ""
    name: str = ""
    versions: Versions = field(default_factory=Versions)
    created_at: datetime | None = None
    modified_at: datetime | None = None

    def __post_init__(self) -> None:
        self.id = ObjectID(self.id)
        if not isinstance(self.versions, Versions):
            self.versions = Versions(self.versions or ())

    @classmethod
    def from_metadata(cls, metadata: Metadata) -> "Item":
        return cls(
            id=metadata.id,
            group=metadata.group,
            partition=metadata.partition,
            path=metadata.path,
            name=metadata.name,
            versions=metadata.versions,
            created_at=metadata.created_at,
            modified_at=metadata.modified_at,
        )

    def is_empty(self) -> bool:
        return self.id == 0


def items_from_metadata_list(metadata_list: Iterable[Metadata]) -> list[Item]:
    """Items for each metadata entry, in order."""
    return [Item.from_metadata(metadata) for metadata in metadata_list]