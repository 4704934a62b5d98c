from __future__ import annotations

import logging
from collections.abc import ItemsView, MutableMapping, ValuesView
from contextlib import contextmanager
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar, Union

from .bounds import KeyRange
from .handles import ValueRef
from .ordering import Comparator
from .search import SortKey, locate

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

_MISSING: Any = object()


class _Values(ValuesView):
    def __iter__(self):
        return iter(list(self._mapping._values))

    def __contains__(self, value):
        return any(v is value or v == value for v in self._mapping._values)


class _Items(ItemsView):
    def __iter__(self):
        return zip(list(self._mapping._keys), list(self._mapping._values))


class OrderedMap(MutableMapping, Generic[K, V]):
    """
    Key -> value map kept as one sorted list of unique keys.

    Keys are ordered by their own `<`, or by `cmp` when one is given (for
    example `float_order` for float keys that may be NaN). The comparator is
    fixed for the lifetime of the map and must be a strict total order:
    binary search trusts it, and an unlawful comparator silently corrupts
    every later lookup, insert, remove and range query.

    Lookups are O(log n); insert and remove shift the tail of the list and
    are O(n). Not thread-safe.
    """

    __slots__ = ("_keys", "_values", "_order", "_version")

    def __init__(
        self,
        items: Optional[Iterable[tuple[K, V]]] = None,
        *,
        cmp: Optional[Comparator] = None,
    ):
        self._keys: list[K] = []
        self._values: list[V] = []
        self._order: SortKey[K] = SortKey(cmp)
        self._version = 0
        if items is not None:
            if hasattr(items, "items"):
                items = items.items()  # type: ignore[union-attr]
            for key, value in items:
                self.insert(key, value)

    @property
    def comparator(self) -> Optional[Comparator]:
        return self._order.cmp

    # -- point operations ------------------------------------------------

    def insert(self, key: K, value: V) -> Optional[V]:
        """Store `value` under `key`; return the replaced value or None."""
        found, index = locate(self._keys, key, self._order)
        if found:
            previous = self._values[index]
            self._keys[index] = key
            self._values[index] = value
            return previous
        self._keys.insert(index, key)
        self._values.insert(index, value)
        self._version += 1
        return None

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        found, index = locate(self._keys, key, self._order)
        return self._values[index] if found else default

    def get_key_value(self, key: K) -> Optional[tuple[K, V]]:
        found, index = locate(self._keys, key, self._order)
        if not found:
            return None
        return self._keys[index], self._values[index]

    def get_mut(self, key: K) -> Optional[ValueRef[K, V]]:
        found, index = locate(self._keys, key, self._order)
        return ValueRef(self, index) if found else None

    def remove(self, key: K) -> Optional[tuple[K, V]]:
        """Delete `key`; return the removed (key, value) or None if absent."""
        found, index = locate(self._keys, key, self._order)
        if not found:
            return None
        self._version += 1
        return self._keys.pop(index), self._values.pop(index)

    # -- ordered queries -------------------------------------------------

    def range(self, bounds: Union[KeyRange[K], slice]) -> Iterator[tuple[K, V]]:
        """Ascending (key, value) pairs whose key lies within `bounds`."""
        lo, hi = KeyRange.coerce(bounds).span(self._keys, self._order)
        return zip(self._keys[lo:hi], self._values[lo:hi])

    def range_mut(self, bounds: Union[KeyRange[K], slice]) -> Iterator[ValueRef[K, V]]:
        lo, hi = KeyRange.coerce(bounds).span(self._keys, self._order)
        return iter([ValueRef(self, index) for index in range(lo, hi)])

    def first(self) -> Optional[tuple[K, V]]:
        if not self._keys:
            return None
        return self._keys[0], self._values[0]

    def last(self) -> Optional[tuple[K, V]]:
        if not self._keys:
            return None
        return self._keys[-1], self._values[-1]

    def retain(self, predicate: Callable[[K, ValueRef[K, V]], Any]) -> None:
        """
        Keep only the entries for which `predicate(key, ref)` is true.

        The predicate runs once per entry in ascending order and may replace
        the value through `ref.value`. Kept entries are compacted towards the
        front of the existing lists: `write` trails `read` by the number of
        entries dropped so far. If the predicate raises, the entries it has
        not yet judged are kept and the map stays sorted.
        """
        keys, values = self._keys, self._values
        version = self._version
        total = len(keys)
        read = write = 0
        try:
            while read < total:
                keep = predicate(keys[read], ValueRef(self, read))
                if self._version != version:
                    raise RuntimeError("map changed size during retain")
                if keep:
                    if write != read:
                        keys[write] = keys[read]
                        values[write] = values[read]
                    write += 1
                read += 1
        finally:
            # slots write..read hold dropped entries or stale copies
            del keys[write:read]
            del values[write:read]
            self._version += 1
        logger.debug("retain kept %d of %d entries", write, total)

    # -- iteration -------------------------------------------------------

    def iter(self) -> Iterator[tuple[K, V]]:
        return zip(self._keys, self._values)

    def iter_mut(self) -> Iterator[ValueRef[K, V]]:
        return iter([ValueRef(self, index) for index in range(len(self._keys))])

    def __iter__(self) -> Iterator[K]:
        return iter(self._keys)

    def values(self) -> ValuesView:
        return _Values(self)

    def items(self) -> ItemsView:
        return _Items(self)

    def __reversed__(self) -> Iterator[K]:
        return reversed(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def is_empty(self) -> bool:
        return not self._keys

    def clear(self) -> None:
        self._keys.clear()
        self._values.clear()
        self._version += 1

    # -- mapping protocol ------------------------------------------------

    def __contains__(self, key: object) -> bool:
        return locate(self._keys, key, self._order)[0]  # type: ignore[arg-type]

    def __getitem__(self, key: K) -> V:
        found, index = locate(self._keys, key, self._order)
        if not found:
            raise KeyError(key)
        return self._values[index]

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key, value)

    def __delitem__(self, key: K) -> None:
        if self.remove(key) is None:
            raise KeyError(key)

    def pop(self, key: K, default: Any = _MISSING) -> V:
        removed = self.remove(key)
        if removed is None:
            if default is _MISSING:
                raise KeyError(key)
            return default
        return removed[1]

    def copy(self) -> "OrderedMap[K, V]":
        other: OrderedMap[K, V] = OrderedMap(cmp=self._order.cmp)
        other._keys = list(self._keys)
        other._values = list(self._values)
        return other

    __copy__ = copy

    # -- unchecked access ------------------------------------------------

    @contextmanager
    def unchecked_storage(self) -> Iterator[list[list[Any]]]:
        """
        Hand out the entries as a list of [key, value] pairs for direct editing.

        Whatever the list holds when the block exits (also on error) becomes
        the map's content, without any check. Keeping it sorted under the
        map's comparator and free of duplicate keys is the caller's job;
        breaking that silently corrupts later lookups.
        """
        self._version += 1
        raw = [[key, value] for key, value in zip(self._keys, self._values)]
        try:
            yield raw
        finally:
            self._keys = [entry[0] for entry in raw]
            self._values = [entry[1] for entry in raw]
            self._version += 1
            logger.debug("unchecked storage released with %d entries, not validated", len(raw))

    def __repr__(self) -> str:
        body = ", ".join(f"{key!r}: {value!r}" for key, value in zip(self._keys, self._values))
        return "{" + body + "}"
