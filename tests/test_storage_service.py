from datetime import datetime, timezone

import pytest

from objectstore.block import BLOCK_SIZE, Block, BlockHeader, checksum
from objectstore.ids import BlockID, ObjectID
from objectstore.repository import NotFoundError, ObjectStorageRepository
from objectstore.storage_service import ObjectStorageService


class MemoryStorage(ObjectStorageRepository):
    def __init__(self):
        self.blocks = {}

    def put(self, block):
        self.blocks[(int(block.object_id), int(block.block_id), block.index)] = block

    def _get(self, object_id, block_id, index):
        try:
            return self.blocks[(int(object_id), int(block_id), index)]
        except KeyError:
            raise NotFoundError("block not found") from None

    def get_block(self, object_id, block_id, index):
        return self._get(object_id, block_id, index)

    def get_block_header(self, object_id, block_id, index):
        return self._get(object_id, block_id, index).header

    def delete(self, object_id, block_id, index):
        self._get(object_id, block_id, index)
        del self.blocks[(int(object_id), int(block_id), index)]


def make_block(data=b"hello block", crc=None, block_id=11, object_id=22, index=0, size=None):
    header = BlockHeader(
        block_id=BlockID(block_id),
        object_id=ObjectID(object_id),
        index=index,
        size=len(data) if size is None else size,
        timestamp=datetime.now(timezone.utc),
        checksum=checksum(data) if crc is None else crc,
    )
    return Block(header=header, buffer=data)


@pytest.fixture
def repository():
    return MemoryStorage()


@pytest.fixture
def service(repository):
    return ObjectStorageService(repository)


def test_requires_repository():
    with pytest.raises(ValueError, match="StorageRepository is nil"):
        ObjectStorageService(None)


def test_put_then_get_block(service):
    block = make_block()
    service.put(block)
    fetched = service.get_block(ObjectID(22), BlockID(11), 0)
    assert fetched.buffer == b"hello block"
    assert fetched.header == block.header


def test_get_block_header(service):
    block = make_block(index=3)
    service.put(block)
    assert service.get_block_header(ObjectID(22), BlockID(11), 3) == block.header


def test_put_rejects_bad_checksum(service, repository):
    data = b"payload"
    block = make_block(data, crc=checksum(data) ^ 1)
    with pytest.raises(ValueError, match="Block checksum is invalid"):
        service.put(block)
    assert repository.blocks == {}


def test_put_rejects_invalid_header(service, repository):
    with pytest.raises(ValueError, match="invalid block id"):
        service.put(make_block(block_id=0))
    with pytest.raises(ValueError, match="invalid object id"):
        service.put(make_block(object_id=0))
    assert repository.blocks == {}


def test_put_rejects_oversized_block(service):
    data = bytes(BLOCK_SIZE + 1)
    with pytest.raises(ValueError, match="block size is too large"):
        service.put(make_block(data, size=1))


def test_delete_removes_block(service):
    service.put(make_block())
    service.delete(ObjectID(22), BlockID(11), 0)
    with pytest.raises(NotFoundError):
        service.get_block(ObjectID(22), BlockID(11), 0)


def test_missing_block_raises_not_found(service):
    with pytest.raises(NotFoundError):
        service.get_block_header(ObjectID(1), BlockID(2), 0)