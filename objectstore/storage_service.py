"""Service storing verified blocks in a block repository."""

from __future__ import annotations

from objectstore.block import Block, BlockHeader, checksum, verify
from objectstore.downloader import ChecksumError
from objectstore.ids import BlockID, ObjectID
from objectstore.repository import ObjectStorageRepository


class ObjectStorageService:
    """Checks blocks before storing them and serves them back."""

    def __init__(self, storage_repository: ObjectStorageRepository) -> None:
        if storage_repository is None:
            raise ValueError("StorageRepository is nil")
        self._repository = storage_repository

    def put(self, block: Block) -> None:
        """Store the block after checking its header, size and checksum."""
        block.validate()
        expected = block.header.checksum
        if not verify(block.buffer, expected):
            raise ChecksumError(
                f"Block checksum is invalid({checksum(block.buffer)} / {expected})"
            )
        self._repository.put(block)

    def get_block(self, object_id: ObjectID, block_id: BlockID, index: int) -> Block:
        return self._repository.get_block(object_id, block_id, index)

    def get_block_header(
        self, object_id: ObjectID, block_id: BlockID, index: int
    ) -> BlockHeader:
        return self._repository.get_block_header(object_id, block_id, index)

    def delete(self, object_id: ObjectID, block_id: BlockID, index: int) -> None:
        self._repository.delete(object_id, block_id, index)