from __future__ import annotations

import logging
import math
from enum import IntEnum
from itertools import product
from typing import Any, Callable, Iterable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Comparator = Callable[[T, T], int]


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def natural_order(one: Any, other: Any) -> Ordering:
    if one < other:
        return Ordering.LESS
    if other < one:
        return Ordering.GREATER
    return Ordering.EQUAL


def float_order(one: float, other: float) -> Ordering:
    """
    Total-order adapter for float keys, reference behaviour.

    Ordinary values compare naturally (so -0.0 == 0.0). When exactly one side
    is NaN, NaN is the greater one. When both sides are NaN the result is
    LESS, which is not reflexive: a container ordered by this adapter never
    finds a stored NaN, and each NaN insert appends another NaN entry at the
    tail. Use float_total_order for the reflexive variant.
    """
    if one < other:
        return Ordering.LESS
    if one > other:
        return Ordering.GREATER
    if one == other:
        return Ordering.EQUAL
    one_nan, other_nan = math.isnan(one), math.isnan(other)
    if one_nan and other_nan:
        return Ordering.LESS
    if one_nan:
        return Ordering.GREATER
    return Ordering.LESS


def float_total_order(one: float, other: float) -> Ordering:
    """Same as float_order, except that any two NaNs are EQUAL."""
    if math.isnan(one) and math.isnan(other):
        return Ordering.EQUAL
    return float_order(one, other)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def check_total_order(cmp: Comparator, samples: Iterable[T]) -> list[str]:
    """
    Check the total-order laws of `cmp` over every pair and triple of samples.

    Returns a description of each violation found, empty when the comparator
    behaved lawfully on the samples. Cubic in the number of samples.
    """
    values = list(samples)
    problems: list[str] = []

    for x in values:
        if _sign(cmp(x, x)) != 0:
            problems.append(f"reflexivity: cmp({x!r}, {x!r}) = {cmp(x, x)!r}")

    for x, y in product(values, repeat=2):
        if _sign(cmp(x, y)) != -_sign(cmp(y, x)):
            problems.append(f"antisymmetry: cmp({x!r}, {y!r}) = {cmp(x, y)!r}, cmp({y!r}, {x!r}) = {cmp(y, x)!r}")

    for x, y, z in product(values, repeat=3):
        xy, yz = _sign(cmp(x, y)), _sign(cmp(y, z))
        if xy == yz and _sign(cmp(x, z)) != xy:
            problems.append(f"transitivity: {x!r}, {y!r}, {z!r}")

    if problems:
        logger.warning(
            "comparator %s is not a total order on %d samples (%d violations)",
            getattr(cmp, "__name__", cmp),
            len(values),
            len(problems),
        )
    return problems
