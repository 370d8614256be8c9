"""Blocks of object data and their headers."""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from objectstore.ids import BlockID, ObjectID

BLOCK_SIZE = 4 * 1024 * 1024

_INTS = struct.Struct(">qqqq")
_LENGTH = struct.Struct(">I")
_CHECKSUM = struct.Struct(">I")


def checksum(data: bytes) -> int:
    """CRC-32 of the data as an unsigned 32-bit value."""
    return zlib.crc32(data) & 0xFFFFFFFF


def verify(data: bytes, expected: int) -> bool:
    """Whether the data's checksum equals the expected value."""
    return checksum(data) == expected


@dataclass(frozen=True)
class Node:
    """A storage node, identified by its host."""

    host: str = ""


@dataclass(kw_only=True)
class ModifiedTime:
    """Creation and modification timestamps; None means unset."""

    created_at: datetime | None = None
    modified_at: datetime | None = None


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._view = memoryview(data)
        self._pos = 0

    def take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._view):
            raise ValueError("truncated data")
        chunk = bytes(self._view[self._pos:end])
        self._pos = end
        return chunk

    def unpack(self, fmt: struct.Struct) -> tuple:
        return fmt.unpack(self.take(fmt.size))

    def chunk(self) -> bytes:
        (length,) = self.unpack(_LENGTH)
        return self.take(length)

    def finish(self) -> None:
        if self._pos != len(self._view):
            raise ValueError("trailing data")


def _chunk(data: bytes) -> bytes:
    return _LENGTH.pack(len(data)) + data


@dataclass(frozen=True)
class BlockHeader:
    """Describes one block of an object."""

    block_id: BlockID = BlockID(0)
    object_id: ObjectID = ObjectID(0)
    index: int = 0
    size: int = 0
    node: Node = field(default_factory=Node)
    timestamp: datetime | None = None
    checksum: int = 0

    def validate(self) -> None:
        """Raise ValueError if the header cannot describe a stored block."""
        if not BlockID(self.block_id).is_valid():
            raise ValueError("invalid block id")
        if not ObjectID(self.object_id).is_valid():
            raise ValueError("invalid object id")
        if self.index < 0:
            raise ValueError("invalid block index")
        if self.size <= 0:
            raise ValueError("invalid block size")
        if self.timestamp is None:
            raise ValueError("invalid timestamp")

    def to_document(self) -> dict[str, Any]:
        return {
            "block_id": int(self.block_id),
            "object_id": int(self.object_id),
            "index": self.index,
            "size": self.size,
            "node": {"host": self.node.host},
            "timestamp": self.timestamp,
            "checksum": self.checksum,
        }

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "BlockHeader":
        node = document.get("node") or {}
        return cls(
            block_id=BlockID(document.get("block_id", 0)),
            object_id=ObjectID(document.get("object_id", 0)),
            index=document.get("index", 0),
            size=document.get("size", 0),
            node=Node(node.get("host", "")),
            timestamp=document.get("timestamp"),
            checksum=document.get("checksum", 0),
        )

    def to_bytes(self) -> bytes:
        stamp = self.timestamp.isoformat() if self.timestamp is not None else ""
        try:
            return b"".join(
                (
                    _INTS.pack(int(self.block_id), int(self.object_id), self.index, self.size),
                    _chunk(self.node.host.encode("utf-8")),
                    _chunk(stamp.encode("ascii")),
                    _CHECKSUM.pack(self.checksum),
                )
            )
        except struct.error as exc:
            raise ValueError(f"cannot encode block header: {exc}") from exc

    @classmethod
    def _read(cls, reader: _Reader) -> "BlockHeader":
        block_id, object_id, index, size = reader.unpack(_INTS)
        host = reader.chunk().decode("utf-8")
        stamp = reader.chunk().decode("ascii")
        (crc,) = reader.unpack(_CHECKSUM)
        return cls(
            block_id=BlockID(block_id),
            object_id=ObjectID(object_id),
            index=index,
            size=size,
            node=Node(host),
            timestamp=datetime.fromisoformat(stamp) if stamp else None,
            checksum=crc,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "BlockHeader":
        reader = _Reader(data)
        header = cls._read(reader)
        reader.finish()
        return header


@dataclass
class Block(ModifiedTime):
    """A block of object data together with its header."""

    header: BlockHeader = field(default_factory=BlockHeader)
    buffer: bytes = b""

    @property
    def object_id(self) -> ObjectID:
        return self.header.object_id

    @property
    def block_id(self) -> BlockID:
        return self.header.block_id

    @property
    def index(self) -> int:
        return self.header.index

    def validate(self) -> None:
        """Raise ValueError if the header is invalid or the data too large."""
        self.header.validate()
        if len(self.buffer) > BLOCK_SIZE:
            raise ValueError("block size is too large")

    def to_bytes(self) -> bytes:
        return _chunk(self.header.to_bytes()) + _chunk(bytes(self.buffer))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Block":
        reader = _Reader(data)
        header = BlockHeader.from_bytes(reader.chunk())
        buffer = reader.chunk()
        reader.finish()
        return cls(header=header, buffer=buffer)