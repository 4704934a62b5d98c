from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, Optional, Sequence, TypeVar, Union

from .search import SortKey

K = TypeVar("K")

BoundKind = Literal["included", "excluded", "unbounded"]


def _unordered(key: Any) -> bool:
    return bool(key != key)


@dataclass(frozen=True, slots=True)
class Bound(Generic[K]):
    kind: BoundKind
    key: Optional[K] = None

    def __post_init__(self) -> None:
        if self.kind not in ("included", "excluded", "unbounded"):
            raise ValueError(f"Unknown bound kind: {self.kind!r}")

    @classmethod
    def included(cls, key: K) -> "Bound[K]":
        return cls("included", key)

    @classmethod
    def excluded(cls, key: K) -> "Bound[K]":
        return cls("excluded", key)

    @classmethod
    def unbounded(cls) -> "Bound[K]":
        return cls("unbounded")

    @property
    def is_unbounded(self) -> bool:
        return self.kind == "unbounded"


@dataclass(frozen=True, slots=True)
class KeyRange(Generic[K]):
    """
    An interval over keys, each end included, excluded or unbounded.

    The constructors follow the usual interval spellings:

        KeyRange.closed(2, 4)      2 <= k <= 4
        KeyRange.half_open(2, 4)   2 <= k < 4
        KeyRange.at_least(2)       2 <= k
        KeyRange.greater_than(2)   2 < k
        KeyRange.less_than(4)      k < 4
        KeyRange.at_most(4)        k <= 4
        KeyRange.full()            every key
    """

    start: Bound[K]
    end: Bound[K]

    @classmethod
    def closed(cls, start: K, end: K) -> "KeyRange[K]":
        return cls(Bound.included(start), Bound.included(end))

    @classmethod
    def half_open(cls, start: K, end: K) -> "KeyRange[K]":
        return cls(Bound.included(start), Bound.excluded(end))

    @classmethod
    def at_least(cls, start: K) -> "KeyRange[K]":
        return cls(Bound.included(start), Bound.unbounded())

    @classmethod
    def greater_than(cls, start: K) -> "KeyRange[K]":
        return cls(Bound.excluded(start), Bound.unbounded())

    @classmethod
    def less_than(cls, end: K) -> "KeyRange[K]":
        return cls(Bound.unbounded(), Bound.excluded(end))

    @classmethod
    def at_most(cls, end: K) -> "KeyRange[K]":
        return cls(Bound.unbounded(), Bound.included(end))

    @classmethod
    def full(cls) -> "KeyRange[K]":
        return cls(Bound.unbounded(), Bound.unbounded())

    @classmethod
    def coerce(cls, bounds: Union["KeyRange[K]", slice]) -> "KeyRange[K]":
        # a slice reads like a Python index range: start included, stop excluded
        if isinstance(bounds, KeyRange):
            return bounds
        if isinstance(bounds, slice):
            if bounds.step is not None:
                raise ValueError("key ranges do not support a step")
            start = Bound.unbounded() if bounds.start is None else Bound.included(bounds.start)
            end = Bound.unbounded() if bounds.stop is None else Bound.excluded(bounds.stop)
            return cls(start, end)
        raise TypeError(f"expected KeyRange or slice, got {type(bounds).__name__}")

    @property
    def is_full(self) -> bool:
        return self.start.is_unbounded and self.end.is_unbounded

    def contains(self, key: K, order: Optional[SortKey[K]] = None) -> bool:
        # keys without a natural order to themselves (NaN) only match the full range
        if not self.is_full and _unordered(key):
            return False
        order = order if order is not None else SortKey()
        start, end = self.start, self.end
        if start.kind == "included" and order.less(key, start.key):
            return False
        if start.kind == "excluded" and not order.less(start.key, key):
            return False
        if end.kind == "included" and order.less(end.key, key):
            return False
        if end.kind == "excluded" and not order.less(key, end.key):
            return False
        return True

    def span(self, keys: Sequence[K], order: SortKey[K]) -> tuple[int, int]:
        """
        Index pair [lo, hi) of the run of `keys` inside the range.

        `keys` must be sorted under `order`. Both ends are found by binary
        search; lo == hi when no key qualifies. Unordered keys (NaN), which an
        adapter sorts to an end of the list, are trimmed off unless the range
        is full.
        """
        start, end = self.start, self.end
        if start.kind == "included":
            lo = order.bisect_left(keys, start.key)
        elif start.kind == "excluded":
            lo = order.bisect_right(keys, start.key)
        else:
            lo = 0

        if end.kind == "included":
            hi = order.bisect_right(keys, end.key)
        elif end.kind == "excluded":
            hi = order.bisect_left(keys, end.key)
        else:
            hi = len(keys)

        if hi < lo:
            hi = lo

        if not self.is_full:
            while lo < hi and _unordered(keys[hi - 1]):
                hi -= 1
            while lo < hi and _unordered(keys[lo]):
                lo += 1
        return lo, hi

    def __repr__(self) -> str:
        left = {"included": "[", "excluded": "(", "unbounded": "("}[self.start.kind]
        right = {"included": "]", "excluded": ")", "unbounded": ")"}[self.end.kind]
        lo: Any = "-inf" if self.start.is_unbounded else repr(self.start.key)
        hi: Any = "+inf" if self.end.is_unbounded else repr(self.end.key)
        return f"KeyRange{left}{lo}, {hi}{right}"
