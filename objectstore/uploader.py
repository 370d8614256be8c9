"""Splitting an object's byte stream into blocks and sending them to storage."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import BinaryIO

from objectstore import dto, message
from objectstore.block import BLOCK_SIZE, checksum
from objectstore.ids import BlockID, ObjectID

logger = logging.getLogger(__name__)

KILOBYTE = 1024
DEFAULT_READ_SIZE = 4 * KILOBYTE


class UploadError(RuntimeError):
    """Block storage refused a block."""


class Uploader:
    """Reads a stream and stores it as a sequence of blocks."""

    block_size: int = BLOCK_SIZE
    read_size: int = DEFAULT_READ_SIZE

    def __init__(self, storage_requestor: message.BlockStorageRequestor) -> None:
        self._storage = storage_requestor

    def upload(self, object_id: ObjectID, body_stream: BinaryIO) -> list[dto.BlockHeader]:
        """Store the whole stream and return the headers of the stored blocks.

        A final block is always stored when the stream ends, even if it is empty.
        """
        object_id = ObjectID(object_id)
        headers: list[dto.BlockHeader] = []
        buffer = bytearray()
        index = 0
        while True:
            wanted = min(self.read_size, self.block_size - len(buffer))
            chunk = body_stream.read(wanted)
            if not chunk:
                headers.append(self._store(object_id, index, bytes(buffer)))
                break

            buffer.extend(chunk)
            if len(buffer) >= self.block_size:
                headers.append(self._store(object_id, index, bytes(buffer)))
                buffer.clear()
                index += 1
        return headers

    def _store(self, object_id: ObjectID, index: int, data: bytes) -> dto.BlockHeader:
        block = self._build_block(object_id, index, data)
        self._upload_block(block)
        return block.header

    @staticmethod
    def _build_block(object_id: ObjectID, index: int, data: bytes) -> dto.Block:
        header = dto.BlockHeader(
            object_id=object_id,
            block_id=BlockID.new(),
            index=index,
            size=len(data),
            timestamp=datetime.now(timezone.utc),
            checksum=checksum(data),
        )
        return dto.Block(header=header, data=data)

    def _upload_block(self, block: dto.Block) -> None:
        request = message.from_block_dto(block)
        try:
            response = self._storage.put(request)
        except Exception as exc:
            logger.error("Upload Error: %s", exc)
            raise
        if not response.success:
            logger.error("Upload fail. message : %s", response.message)
            raise UploadError(f"upload failed: {response.message}")