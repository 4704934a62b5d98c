from __future__ import annotations

from bisect import bisect_left, bisect_right
from functools import cmp_to_key
from typing import Any, Callable, Generic, Optional, Sequence, TypeVar

from .ordering import Comparator

K = TypeVar("K")


class SortKey(Generic[K]):
    """
    The ordering strategy of one container.

    With no comparator the keys' own `<` is used and the bisect calls run on
    the raw key list. With a comparator every probe goes through
    `functools.cmp_to_key`, both for the target and for the probed element.
    """

    __slots__ = ("cmp", "_wrap")

    def __init__(self, cmp: Optional[Comparator] = None):
        self.cmp = cmp
        self._wrap: Optional[Callable[[K], Any]] = cmp_to_key(cmp) if cmp is not None else None

    def less(self, one: K, other: K) -> bool:
        if self._wrap is None:
            return bool(one < other)
        return self.cmp(one, other) < 0

    def bisect_left(self, keys: Sequence[K], key: K) -> int:
        if self._wrap is None:
            return bisect_left(keys, key)
        return bisect_left(keys, self._wrap(key), key=self._wrap)

    def bisect_right(self, keys: Sequence[K], key: K) -> int:
        if self._wrap is None:
            return bisect_right(keys, key)
        return bisect_right(keys, self._wrap(key), key=self._wrap)


def locate(keys: Sequence[K], key: K, order: SortKey[K]) -> tuple[bool, int]:
    """
    Binary search for `key` in the sorted, duplicate-free `keys`.

    Returns (True, index) of the equal element, or (False, index) where `key`
    would have to be inserted to keep `keys` sorted. The element at the
    bisect position is not less than `key`; it is equal when `key` is not
    less than it either.
    """
    index = order.bisect_left(keys, key)
    found = index < len(keys) and not order.less(key, keys[index])
    return found, index
