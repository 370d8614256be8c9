from datetime import datetime, timezone

import pytest

from objectstore.block import BlockHeader, Node
from objectstore.ids import BlockID, ObjectID
from objectstore.metadata import Directory, ObjectMetadata, Version

NOW = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


def _header(index):
    return BlockHeader(
        block_id=BlockID(100 + index),
        object_id=ObjectID(7),
        index=index,
        size=10,
        node=Node("storage-a"),
        timestamp=NOW,
        checksum=1234,
    )


def _version(number, headers=2):
    return Version(
        number=number,
        size=20,
        node=Node("storage-a"),
        block_headers=[_header(i) for i in range(headers)],
        created_at=NOW,
        modified_at=NOW,
    )


def _metadata(*numbers):
    return ObjectMetadata(
        id=ObjectID(7),
        group="group",
        partition="partition",
        name="file.txt",
        path="/docs",
        versions=[_version(n) for n in numbers],
        created_at=NOW,
        modified_at=NOW,
    )


def test_version_document_round_trip():
    version = _version(3)
    restored = Version.from_document(version.to_document())
    assert restored == version


def test_version_document_keys():
    document = _version(0).to_document()
    assert set(document) == {
        "number", "size", "node", "block_headers", "created_at", "modified_at"
    }
    assert document["node"] == {"host": "storage-a"}
    assert len(document["block_headers"]) == 2


def test_version_from_empty_document_has_defaults():
    version = Version.from_document({})
    assert version.number == 0
    assert version.size == 0
    assert version.block_headers == []
    assert version.created_at is None


def test_metadata_document_round_trip():
    metadata = _metadata(0, 1, 2)
    restored = ObjectMetadata.from_document(metadata.to_document())
    assert restored == metadata
    assert isinstance(restored.id, ObjectID)


def test_metadata_document_has_object_id_key():
    document = _metadata(0).to_document()
    assert document["object_id"] == 7
    assert document["path"] == "/docs"
    assert document["size"] == 0


def test_is_valid_depends_on_id():
    assert _metadata().is_valid()
    assert not ObjectMetadata().is_valid()
    assert not ObjectMetadata(id=ObjectID(-5)).is_valid()


def test_last_version_of_empty_metadata():
    assert ObjectMetadata().last_version() == -1


def test_append_version_updates_last_version():
    metadata = _metadata(0)
    metadata.append_version(_version(5))
    assert metadata.last_version() == 5
    assert [v.number for v in metadata.versions] == [0, 5]


def test_delete_version_removes_only_that_version():
    metadata = _metadata(0, 1, 2)
    metadata.delete_version(1)
    assert [v.number for v in metadata.versions] == [0, 2]
    assert metadata.last_version() == 2


def test_delete_last_version_then_empty():
    metadata = _metadata(4)
    metadata.delete_version(4)
    assert metadata.versions == []
    assert metadata.last_version() == -1


def test_delete_missing_version_raises():
    metadata = _metadata(0, 1)
    with pytest.raises(LookupError, match="version not exist"):
        metadata.delete_version(9)
    assert [v.number for v in metadata.versions] == [0, 1]


def test_default_versions_are_independent():
    first = ObjectMetadata()
    second = ObjectMetadata()
    first.append_version(_version(0))
    assert second.versions == []


def test_directory_add_object_and_child():
    directory = Directory(id=ObjectID(1), group="group", partition="partition", name="docs")
    directory.add_object_id(ObjectID(10))
    directory.add_object_id(11)
    directory.add_child(ObjectID(20))
    assert directory.objects == [10, 11]
    assert all(isinstance(i, ObjectID) for i in directory.objects)
    assert directory.sub_directory == [20]


def test_directory_defaults_are_independent():
    first = Directory()
    second = Directory()
    first.add_child(ObjectID(3))
    assert second.sub_directory == []
    assert first.created_at is None