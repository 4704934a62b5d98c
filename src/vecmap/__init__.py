from .bounds import Bound, KeyRange
from .handles import ValueRef
from .map import OrderedMap
from .ordering import Comparator, Ordering, check_total_order, float_order, float_total_order, natural_order
from .set import OrderedSet

__all__ = [
    "OrderedMap",
    "OrderedSet",
    "ValueRef",
    "Bound",
    "KeyRange",
    "Comparator",
    "Ordering",
    "natural_order",
    "float_order",
    "float_total_order",
    "check_total_order",
]
