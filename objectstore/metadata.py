"""Object metadata, its versions, and directories of objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from objectstore.block import BlockHeader, ModifiedTime, Node
from objectstore.ids import ObjectID


def _node_document(node: Node) -> dict[str, Any]:
    return {"host": node.host}


def _node_from_document(document: Mapping[str, Any] | None) -> Node:
    return Node((document or {}).get("host", ""))


@dataclass
class Version(ModifiedTime):
    """One stored version of an object: its size and the blocks holding it."""

    number: int = 0
    size: int = 0
    node: Node = field(default_factory=Node)
    block_headers: list[BlockHeader] = field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "size": self.size,
            "node": _node_document(self.node),
            "block_headers": [header.to_document() for header in self.block_headers],
            "created_at": self.created_at,
            "modified_at": self.modified_at,
        }

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Version":
        return cls(
            number=document.get("number", 0),
            size=document.get("size", 0),
            node=_node_from_document(document.get("node")),
            block_headers=[
                BlockHeader.from_document(header)
                for header in document.get("block_headers") or ()
            ],
            created_at=document.get("created_at"),
            modified_at=document.get("modified_at"),
        )


@dataclass
class ObjectMetadata(ModifiedTime):
    """Metadata of a stored object, with its versions in upload order."""

    id: ObjectID = ObjectID(0)
    group: str = ""
    partition: str = ""
    name: str = ""
    path: str = ""
    versions: list[Version] = field(default_factory=list)

    def is_valid(self) -> bool:
        return ObjectID(self.id).is_valid()

    def append_version(self, version: Version) -> None:
        self.versions.append(version)

    def delete_version(self, number: int) -> None:
        """Remove the version with the given number; LookupError if absent."""
        for position, version in enumerate(self.versions):
            if version.number == number:
                del self.versions[position]
                return
        raise LookupError("version not exist")

    def last_version(self) -> int:
        """Number of the most recent version, or -1 when there is none."""
        if not self.versions:
            return -1
        return self.versions[-1].number

    def to_document(self) -> dict[str, Any]:
        return {
            "object_id": int(self.id),
            "group": self.group,
            "partition": self.partition,
            "name": self.name,
            "path": self.path,
            "size": 0,
            "node": _node_document(Node()),
            "versions": [version.to_document() for version in self.versions],
            "created_at": self.created_at,
            "modified_at": self.modified_at,
        }

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "ObjectMetadata":
        return cls(
            id=ObjectID(document.get("object_id", 0)),
            group=document.get("group", ""),
            partition=document.get("partition", ""),
            name=document.get("name", ""),
            path=document.get("path", ""),
            versions=[
                Version.from_document(version)
                for version in document.get("versions") or ()
            ],
            created_at=document.get("created_at"),
            modified_at=document.get("modified_at"),
        )


@dataclass
class Directory(ModifiedTime):
    """A directory holding objects and sub-directories by identifier."""

    id: ObjectID = ObjectID(0)
    group: str = ""
    partition: str = ""
    name: str = ""
    objects: list[ObjectID] = field(default_factory=list)
    sub_directory: list[ObjectID] = field(default_factory=list)

    def add_object_id(self, object_id: ObjectID) -> None:
        self.objects.append(ObjectID(object_id))

    def add_child(self, object_id: ObjectID) -> None:
        self.sub_directory.append(ObjectID(object_id))