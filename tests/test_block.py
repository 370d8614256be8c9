from datetime import datetime, timezone

import pytest

from objectstore.block import (
    BLOCK_SIZE,
    Block,
    BlockHeader,
    ModifiedTime,
    Node,
    checksum,
    verify,
)
from objectstore.ids import BlockID, ObjectID

STAMP = datetime(2024, 5, 1, 12, 30, 15, 250000, tzinfo=timezone.utc)


def make_header(**overrides):
    values = dict(
        block_id=BlockID(11),
        object_id=ObjectID(22),
        index=0,
        size=5,
        node=Node("node-a"),
        timestamp=STAMP,
        checksum=checksum(b"hello"),
    )
    values.update(overrides)
    return BlockHeader(**values)


def test_checksum_standard_check_value():
    assert checksum(b"123456789") == 0xCBF43926


def test_checksum_of_empty_data():
    assert checksum(b"") == 0


def test_verify_matches_and_mismatches():
    value = checksum(b"payload")
    assert verify(b"payload", value) is True
    assert verify(b"payloae", value) is False


def test_valid_header_passes():
    header = make_header()
    header.validate()
    assert header.size == 5


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"block_id": BlockID(0)}, "invalid block id"),
        ({"object_id": ObjectID(-1)}, "invalid object id"),
        ({"index": -1}, "invalid block index"),
        ({"size": 0}, "invalid block size"),
        ({"timestamp": None}, "invalid timestamp"),
    ],
)
def test_header_validation_errors(overrides, message):
    with pytest.raises(ValueError, match=message):
        make_header(**overrides).validate()


def test_default_header_is_invalid():
    with pytest.raises(ValueError, match="invalid block id"):
        BlockHeader().validate()


def test_header_bytes_round_trip():
    header = make_header()
    restored = BlockHeader.from_bytes(header.to_bytes())
    assert restored == header
    assert isinstance(restored.block_id, BlockID)
    assert isinstance(restored.object_id, ObjectID)


def test_empty_header_bytes_round_trip():
    header = BlockHeader()
    assert BlockHeader.from_bytes(header.to_bytes()) == header


def test_header_from_truncated_bytes_fails():
    data = make_header().to_bytes()
    with pytest.raises(ValueError):
        BlockHeader.from_bytes(data[:-2])


def test_header_from_bytes_with_trailing_data_fails():
    with pytest.raises(ValueError):
        BlockHeader.from_bytes(make_header().to_bytes() + b"x")


def test_header_with_out_of_range_checksum_cannot_encode():
    with pytest.raises(ValueError):
        make_header(checksum=-1).to_bytes()


def test_header_document_keys_and_round_trip():
    header = make_header()
    document = header.to_document()
    assert set(document) == {
        "block_id", "object_id", "index", "size", "node", "timestamp", "checksum",
    }
    assert document["node"] == {"host": "node-a"}
    assert BlockHeader.from_document(document) == header


def test_header_from_sparse_document_uses_defaults():
    assert BlockHeader.from_document({}) == BlockHeader()


def test_block_exposes_header_fields():
    header = make_header()
    block = Block(header, b"hello")
    assert block.object_id == ObjectID(22)
    assert block.block_id == BlockID(11)
    assert block.index == 0
    assert block.created_at is None


def test_block_validate_passes_and_checks_header():
    Block(make_header(), b"hello").validate()
    with pytest.raises(ValueError, match="invalid block size"):
        Block(make_header(size=0), b"hello").validate()


def test_block_too_large():
    block = Block(make_header(), bytes(BLOCK_SIZE + 1))
    with pytest.raises(ValueError, match="block size is too large"):
        block.validate()


def test_block_at_size_limit_is_accepted():
    block = Block(make_header(), bytes(BLOCK_SIZE))
    block.validate()
    assert len(block.buffer) == BLOCK_SIZE


def test_block_bytes_round_trip():
    block = Block(make_header(), b"hello")
    restored = Block.from_bytes(block.to_bytes())
    assert restored.header == block.header
    assert restored.buffer == b"hello"
    assert verify(restored.buffer, restored.header.checksum)


def test_block_from_garbage_fails():
    with pytest.raises(ValueError):
        Block.from_bytes(b"\x00\x00\x00\x10abc")


def test_modified_time_keywords():
    times = ModifiedTime(created_at=STAMP, modified_at=STAMP)
    assert times.created_at == times.modified_at == STAMP
    block = Block(make_header(), b"hello", created_at=STAMP)
    assert block.created_at == STAMP and block.modified_at is None