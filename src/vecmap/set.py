from __future__ import annotations

import logging
from collections.abc import MutableSet
from contextlib import contextmanager
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar, Union

from .bounds import KeyRange
from .ordering import Comparator
from .search import SortKey, locate

logger = logging.getLogger(__name__)

K = TypeVar("K")


class OrderedSet(MutableSet, Generic[K]):
    """
    Set of keys kept as one sorted, duplicate-free list.

    Same ordering contract as OrderedMap: natural `<` unless `cmp` is given,
    fixed for the lifetime of the set, and required to be a strict total
    order. `remove` returns the removed key, or None when it was absent,
    instead of raising KeyError as `MutableSet.remove` does; `discard` is the
    silent form.
    """

    __slots__ = ("_keys", "_order", "_version")

    def __init__(self, keys: Optional[Iterable[K]] = None, *, cmp: Optional[Comparator] = None):
        self._keys: list[K] = []
        self._order: SortKey[K] = SortKey(cmp)
        self._version = 0
        if keys is not None:
            for key in keys:
                self.insert(key)

    def _from_iterable(self, it: Iterable[K]) -> "OrderedSet[K]":
        # set algebra results keep this set's ordering
        return OrderedSet(it, cmp=self._order.cmp)

    @property
    def comparator(self) -> Optional[Comparator]:
        return self._order.cmp

    def insert(self, key: K) -> Optional[K]:
        """
        Add `key`. Returns None when it was added, or the already stored equal
        key, which is kept as is.
        """
        found, index = locate(self._keys, key, self._order)
        if found:
            return self._keys[index]
        self._keys.insert(index, key)
        self._version += 1
        return None

    def contains(self, key: K) -> bool:
        return locate(self._keys, key, self._order)[0]

    def get(self, key: K) -> Optional[K]:
        found, index = locate(self._keys, key, self._order)
        return self._keys[index] if found else None

    def remove(self, key: K) -> Optional[K]:  # type: ignore[override]
        """
        Remove `key` and return the stored equal key, or None if it was absent.

        Unlike `MutableSet.remove` this never raises KeyError; it behaves like
        `discard` but reports what was removed.
        """
        found, index = locate(self._keys, key, self._order)
        if not found:
            return None
        self._version += 1
        return self._keys.pop(index)

    def range(self, bounds: Union[KeyRange[K], slice]) -> Iterator[K]:
        """Ascending keys within `bounds`."""
        lo, hi = KeyRange.coerce(bounds).span(self._keys, self._order)
        return iter(self._keys[lo:hi])

    def first(self) -> Optional[K]:
        return self._keys[0] if self._keys else None

    def last(self) -> Optional[K]:
        return self._keys[-1] if self._keys else None

    def retain(self, predicate: Callable[[K], Any]) -> None:
        keys = self._keys
        version = self._version
        total = len(keys)
        read = write = 0
        try:
            while read < total:
                keep = predicate(keys[read])
                if self._version != version:
                    raise RuntimeError("set changed size during retain")
                if keep:
                    keys[write] = keys[read]
                    write += 1
                read += 1
        finally:
            del keys[write:read]
            self._version += 1
        logger.debug("retain kept %d of %d keys", write, total)

    def iter(self) -> Iterator[K]:
        return iter(self._keys)

    def __iter__(self) -> Iterator[K]:
        return iter(self._keys)

    def __reversed__(self) -> Iterator[K]:
        return reversed(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def is_empty(self) -> bool:
        return not self._keys

    def clear(self) -> None:
        self._keys.clear()
        self._version += 1

    def __contains__(self, key: object) -> bool:
        return self.contains(key)  # type: ignore[arg-type]

    def add(self, key: K) -> None:
        self.insert(key)

    def discard(self, key: K) -> None:
        self.remove(key)

    def copy(self) -> "OrderedSet[K]":
        other: OrderedSet[K] = OrderedSet(cmp=self._order.cmp)
        other._keys = list(self._keys)
        return other

    __copy__ = copy

    @contextmanager
    def unchecked_storage(self) -> Iterator[list[K]]:
        """
        Hand out the backing key list itself for direct editing.

        Nothing is checked when the block exits: the list must stay sorted
        under the set's comparator and free of duplicates, or later lookups
        go wrong without any error.
        """
        self._version += 1
        try:
            yield self._keys
        finally:
            self._version += 1
            logger.debug("unchecked storage released with %d keys, not validated", len(self._keys))

    def __repr__(self) -> str:
        return "{" + ", ".join(repr(key) for key in self._keys) + "}"
