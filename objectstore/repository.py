"""Storage interfaces for directories, object metadata and blocks."""

from __future__ import annotations

from abc import ABC, abstractmethod

from objectstore.block import Block, BlockHeader
from objectstore.ids import BlockID, ObjectID
from objectstore.metadata import Directory, ObjectMetadata


class NotFoundError(LookupError):
    """The requested record does not exist."""


class ObjectDirectoryRepository(ABC):
    """Persistent store of directories."""

    @abstractmethod
    def create(self, directory: Directory) -> None:
        """Store a new directory."""

    @abstractmethod
    def delete(self, directory: Directory) -> None:
        """Remove a directory."""

    @abstractmethod
    def add_object(self, directory: Directory) -> None:
        """Record the directory's added objects."""

    @abstractmethod
    def delete_object(self, directory: Directory) -> None:
        """Record the directory's removed objects."""

    @abstractmethod
    def add_sub_directory(self, directory: Directory) -> None:
        """Record the directory's added sub-directories."""

    @abstractmethod
    def delete_sub_directory(self, directory: Directory) -> None:
        """Record the directory's removed sub-directories."""

    @abstractmethod
    def find_metadata(self, group: str, partition: str, path: str) -> Directory:
        """The directory at the path; NotFoundError if absent."""


class ObjectMetadataRepository(ABC):
    """Persistent store of object metadata."""

    @abstractmethod
    def create(self, metadata: ObjectMetadata) -> None:
        """Store metadata of a new object."""

    @abstractmethod
    def update(self, metadata: ObjectMetadata) -> None:
        """Replace the stored metadata of an object."""

    @abstractmethod
    def delete(self, metadata: ObjectMetadata) -> None:
        """Remove the metadata of an object."""

    @abstractmethod
    def metadata_by_object_name(
        self, group: str, partition: str, path: str, name: str
    ) -> ObjectMetadata | None:
        """Metadata of the named object on the path; NotFoundError if absent."""

    @abstractmethod
    def metadata_by_object_id(
        self, group: str, partition: str, path: str, object_id: int
    ) -> ObjectMetadata | None:
        """Metadata of the object with the identifier; NotFoundError if absent."""

    @abstractmethod
    def find_metadata(self, group: str, partition: str, path: str) -> list[ObjectMetadata]:
        """Metadata of every object on the path."""


class ObjectStorageRepository(ABC):
    """Persistent store of blocks."""

    @abstractmethod
    def put(self, block: Block) -> None:
        """Store a block."""

    @abstractmethod
    def get_block(self, object_id: ObjectID, block_id: BlockID, index: int) -> Block:
        """The stored block; NotFoundError if absent."""

    @abstractmethod
    def get_block_header(
        self, object_id: ObjectID, block_id: BlockID, index: int
    ) -> BlockHeader:
        """The header of the stored block; NotFoundError if absent."""

    @abstractmethod
    def delete(self, object_id: ObjectID, block_id: BlockID, index: int) -> None:
        """Remove a stored block."""