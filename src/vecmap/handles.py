from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from .map import OrderedMap

K = TypeVar("K")
V = TypeVar("V")


class ValueRef(Generic[K, V]):
    """
    Mutable access to one stored value of an OrderedMap.

    The key is read-only, so writing through the handle cannot break the
    map's ordering. A handle stays valid until the next insert, remove,
    retain or clear on its map; after that any access raises RuntimeError.
    """

    __slots__ = ("_owner", "_index", "_version")

    def __init__(self, owner: "OrderedMap[K, V]", index: int):
        self._owner = owner
        self._index = index
        self._version = owner._version

    def _check(self) -> None:
        if self._version != self._owner._version:
            raise RuntimeError("map was structurally modified after this handle was taken")

    @property
    def key(self) -> K:
        self._check()
        return self._owner._keys[self._index]

    @property
    def value(self) -> V:
        self._check()
        return self._owner._values[self._index]

    @value.setter
    def value(self, value: V) -> None:
        self._check()
        self._owner._values[self._index] = value

    def __repr__(self) -> str:
        if self._version != self._owner._version:
            return "<ValueRef (stale)>"
        return f"<ValueRef {self.key!r}: {self.value!r}>"
