import pytest

from geosketch.errors import EntityInUseError, InvalidEntityError, SketchFrozenError
from geosketch.ids import CircleId, PointId, SegmentId
from geosketch.store import Arena, EntityStore


def test_identifiers_compare_by_index_generation_and_kind():
    assert PointId(0, 0) == PointId(0, 0)
    assert PointId(0, 0) != PointId(0, 1)
    assert PointId(0, 0) != SegmentId(0, 0)
    assert PointId(2, 1).raw_parts() == (2, 1)
    assert repr(CircleId(3, 2)) == "CircleId(3, gen=2)"


def test_create_issues_sequential_identifiers():
    store = EntityStore()
    a = store.create("point", "A")
    b = store.create("point", "B")
    seg = store.create("segment", "AB", start=a, end=b)
    circ = store.create("circle", "c", center=a)

    assert a == PointId(0, 0)
    assert b == PointId(1, 0)
    assert seg == SegmentId(0, 0)
    assert circ == CircleId(0, 0)
    assert len(store) == 4

    segment = store.segment(seg)
    assert segment.endpoints() == (a, b)
    assert segment.label == "AB"
    assert store.circle(circ).center_point() == a
    assert store.point(a).display_name() == "A"


def test_get_rejects_out_of_range_index():
    store = EntityStore()
    store.create("point")
    with pytest.raises(InvalidEntityError) as excinfo:
        store.get(PointId(5, 0))
    assert excinfo.value.reason == InvalidEntityError.OUT_OF_RANGE
    assert excinfo.value.entity_id == PointId(5, 0)


def test_get_detects_stale_identifier_after_slot_reuse():
    store = EntityStore()
    old = store.create("point", "old")
    store.remove(old)
    new = store.create("point", "new")

    assert new.index == old.index
    assert new.generation == old.generation + 1
    assert store.point(new).label == "new"
    with pytest.raises(InvalidEntityError) as excinfo:
        store.point(old)
    assert excinfo.value.reason == InvalidEntityError.GENERATION_MISMATCH


def test_removed_slot_is_stale_until_reused():
    arena = Arena(PointId)
    pid = arena.insert_with(lambda entity_id: f"value-{entity_id.index}")
    assert arena.remove(pid) == "value-0"
    assert not arena.contains(pid)
    assert len(arena) == 0
    with pytest.raises(InvalidEntityError) as excinfo:
        arena.get(pid)
    assert excinfo.value.reason == InvalidEntityError.GENERATION_MISMATCH


def test_wrong_kind_identifier_is_rejected():
    store = EntityStore()
    store.create("point")
    with pytest.raises(InvalidEntityError) as excinfo:
        store.segment(PointId(0, 0))
    assert excinfo.value.reason == InvalidEntityError.WRONG_KIND
    with pytest.raises(InvalidEntityError):
        store.get((0, 0))


def test_segment_requires_live_endpoints():
    store = EntityStore()
    a = store.create("point")
    with pytest.raises(InvalidEntityError):
        store.create("segment", start=a, end=PointId(9, 0))
    with pytest.raises(ValueError):
        store.create("segment", start=a)
    with pytest.raises(ValueError):
        store.create("circle")
    with pytest.raises(ValueError):
        store.create("polygon")


def test_items_iterate_live_entities_in_slot_order():
    store = EntityStore()
    ids = [store.create("point", name) for name in "ABC"]
    store.remove(ids[1])
    assert [pid for pid, _ in store.points.items()] == [ids[0], ids[2]]
    assert store.contains(ids[0])
    assert not store.contains(ids[1])


def test_frozen_store_rejects_creation_and_removal():
    store = EntityStore()
    a = store.create("point")
    store.freeze()
    assert store.frozen
    with pytest.raises(SketchFrozenError):
        store.create("point")
    with pytest.raises(SketchFrozenError):
        store.remove(a)
    assert store.point(a).id == a


def test_points_own_distinct_variables():
    store = EntityStore()
    a = store.point(store.create("point", "corner A"))
    b = store.point(store.create("point"))
    assert str(a.x) == "corner_A_0g0_x"
    assert str(b.y) == "p_1g0_y"
    assert b.display_name() == "Point1"


def test_referenced_point_cannot_be_removed():
    store = EntityStore()
    a = store.create("point", "A")
    b = store.create("point", "B")
    seg = store.create("segment", start=a, end=b)
    circ = store.create("circle", center=a)

    with pytest.raises(EntityInUseError) as excinfo:
        store.remove(a)
    assert excinfo.value.entity_id == a
    assert excinfo.value.users == (seg, circ)
    assert store.point(a).label == "A"

    store.remove(seg)
    store.remove(circ)
    store.remove(a)
    assert not store.contains(a)
    assert store.referrers(b) == ()
