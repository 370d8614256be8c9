from concurrent.futures import ThreadPoolExecutor

import pytest

from objectstore.ids import (
    MAX_NODE,
    STEP_BITS,
    BlockID,
    IdGenerator,
    ObjectID,
    generate_id,
    init_identifier,
)


@pytest.mark.parametrize("value, expected", [(0, False), (-1, False), (1, True), (99, True)])
def test_object_id_validity(value, expected):
    assert ObjectID(value).is_valid() is expected


@pytest.mark.parametrize("value, expected", [(0, False), (-7, False), (3, True)])
def test_block_id_validity(value, expected):
    assert BlockID(value).is_valid() is expected


def test_identifier_string_is_decimal():
    assert str(ObjectID(42)) == "42"
    assert str(BlockID(-3)) == "-3"
    assert repr(BlockID(5)) == "BlockID(5)"


def test_identifiers_behave_as_ints():
    assert ObjectID(10) == 10
    assert int(BlockID(11)) + 1 == 12


def test_new_ids_are_valid_and_typed():
    oid = ObjectID.new()
    bid = BlockID.new()
    assert isinstance(oid, ObjectID) and oid.is_valid()
    assert isinstance(bid, BlockID) and bid.is_valid()


def test_generator_ids_strictly_increase():
    gen = IdGenerator(3)
    ids = [gen.generate() for _ in range(5000)]
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_generator_embeds_node_number():
    gen = IdGenerator(MAX_NODE)
    value = gen.generate()
    assert (value >> STEP_BITS) & MAX_NODE == MAX_NODE


@pytest.mark.parametrize("node", [-1, MAX_NODE + 1])
def test_generator_rejects_bad_node(node):
    with pytest.raises(ValueError):
        IdGenerator(node)


def test_init_identifier_sets_global_node():
    init_identifier(7)
    value = generate_id()
    assert (value >> STEP_BITS) & MAX_NODE == 7
    init_identifier(1)
    assert (generate_id() >> STEP_BITS) & MAX_NODE == 1


def test_generation_unique_across_threads():
    gen = IdGenerator(2)
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda _: gen.generate(), range(4000)))
    assert len(set(results)) == 4000
    last = gen.generate()
    assert last > max(results)