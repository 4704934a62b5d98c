import copy
import random

from pytest import mark, raises

from vecmap import KeyRange, OrderedSet, float_order, float_total_order

NAN = float("nan")


def test_insert_enumerates_sorted_distinct():
    rng = random.Random(3)
    keys = [rng.randrange(50) for _ in range(300)]
    s = OrderedSet(keys)
    assert list(s) == sorted(set(keys))
    assert list(s.iter()) == sorted(set(keys))


def test_insert_returns_stored_key_when_present():
    s = OrderedSet()
    assert s.insert(1) is None
    assert s.insert(1) == 1
    assert len(s) == 1


def test_insert_keeps_the_first_equal_key():
    s = OrderedSet(cmp=float_order)
    s.insert(0.0)
    assert s.insert(-0.0) == 0.0
    assert str(s.get(-0.0)) == "0.0"


def test_contains_and_get():
    s = OrderedSet([1, 2, 4, 5])
    assert s.contains(4)
    assert 2 in s
    assert not s.contains(3)
    assert 3 not in s
    assert s.get(5) == 5
    assert s.get(6) is None
    assert not OrderedSet().contains(1)


def test_remove():
    s = OrderedSet([1, 2])
    assert s.remove(3) is None
    assert list(s) == [1, 2]
    assert s.remove(1) == 1
    assert list(s) == [2]
    s.discard(2)
    s.discard(2)
    assert s.is_empty()


def test_range_inclusive_end():
    s = OrderedSet([1, 2, 4, 5])
    assert list(s.range(KeyRange.closed(2, 4))) == [2, 4]


@mark.parametrize(
    "bounds, expected",
    [
        (slice(2, 4), [2]),
        (slice(None, None), [1, 2, 4, 5]),
        (KeyRange.greater_than(2), [4, 5]),
        (KeyRange.at_most(1), [1]),
        (KeyRange.less_than(1), []),
        (KeyRange.closed(3, 3), []),
    ],
)
def test_range(bounds, expected):
    s = OrderedSet([5, 4, 2, 1])
    assert list(s.range(bounds)) == expected


def test_range_on_empty_set():
    assert list(OrderedSet().range(KeyRange.closed(1, 2))) == []


def test_retain():
    s = OrderedSet(range(10))
    seen = []

    def even(k):
        seen.append(k)
        return k % 2 == 0

    s.retain(even)
    assert seen == list(range(10))
    assert list(s) == [0, 2, 4, 6, 8]


def test_retain_drop_all_and_keep_all():
    s = OrderedSet([3, 1, 2])
    s.retain(lambda k: True)
    assert list(s) == [1, 2, 3]
    s.retain(lambda k: False)
    assert list(s) == []


def test_retain_rejects_structural_change_from_predicate():
    s = OrderedSet([1, 2, 3])
    with raises(RuntimeError):
        s.retain(lambda k: s.remove(3) is None)


def test_retain_keeps_set_sorted_when_predicate_raises():
    s = OrderedSet([1, 2, 3, 4])

    def drop_one_keep_two_then_fail(k):
        if k == 3:
            raise ValueError("boom")
        return k != 1

    with raises(ValueError):
        s.retain(drop_one_keep_two_then_fail)
    keys = list(s)
    assert keys == [2, 3, 4]
    assert keys == sorted(set(keys))
    assert s.contains(3)
    assert not s.contains(1)


def test_set_protocol_keeps_comparator():
    s = OrderedSet([1.0, 2.0, 3.0], cmp=float_total_order)
    other = OrderedSet([2.0, 3.0, 4.0])
    both = s & other
    assert isinstance(both, OrderedSet)
    assert list(both) == [2.0, 3.0]
    assert both.comparator is float_total_order
    assert list(s | other) == [1.0, 2.0, 3.0, 4.0]
    assert list(s - other) == [1.0]
    assert s == OrderedSet([3.0, 2.0, 1.0])
    s.add(0.5)
    assert s.first() == 0.5
    assert s.last() == 3.0


def test_pop_takes_smallest():
    s = OrderedSet([3, 1, 2])
    assert s.pop() == 1
    assert list(s) == [2, 3]


def test_first_last_reversed_on_empty():
    s = OrderedSet()
    assert s.first() is None
    assert s.last() is None
    assert list(reversed(OrderedSet([1, 2]))) == [2, 1]


def test_nan_under_both_float_orders():
    loose = OrderedSet([1.0, NAN, NAN], cmp=float_order)
    assert len(loose) == 3
    assert not loose.contains(NAN)

    strict = OrderedSet([1.0, NAN, NAN], cmp=float_total_order)
    assert len(strict) == 2
    assert strict.contains(NAN)
    assert list(strict.range(KeyRange.at_least(1.0))) == [1.0]
    assert list(strict.range(slice(None, 5.0))) == [1.0]
    assert len(list(strict.range(KeyRange.full()))) == 2


def test_copy_and_clear():
    s = OrderedSet([2, 1])
    other = copy.copy(s)
    s.clear()
    assert list(other) == [1, 2]
    assert s.is_empty()


def test_repr():
    assert repr(OrderedSet()) == "{}"
    assert repr(OrderedSet(["b", "a"])) == "{'a', 'b'}"


def test_unchecked_storage_is_the_backing_list():
    s = OrderedSet([1, 3])
    with s.unchecked_storage() as raw:
        raw.insert(1, 2)
    assert list(s) == [1, 2, 3]
    assert s.contains(2)


def test_unchecked_storage_breaking_order_corrupts_lookups():
    s = OrderedSet([1, 2, 3, 4, 5])
    with s.unchecked_storage() as raw:
        raw.reverse()
    assert list(s) == [5, 4, 3, 2, 1]
    assert not s.contains(5)
