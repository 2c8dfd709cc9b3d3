"""
Ordering
========
Comparison policy shared by every sorter in the package.

A comparator is any callable ``(a, b) -> int`` following the classic ``cmp``
convention: negative when *a* sorts before *b*, zero when they tie, positive
when *a* sorts after *b*.  Objects exposing a ``compare(a, b)`` method are
accepted as well.

Descending order is never a separate code path: it is the ascending
comparator with its arguments swapped (see `reversed_comparator`).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, TypeVar

T = TypeVar("T")

Comparator = Callable[[Any, Any], int]

LESS = -1
EQUAL = 0
GREATER = 1


class SortOrder(Enum):
    """The two built-in total orders."""
    ASCENDING = "ascending"
    DESCENDING = "descending"


def sign(result: int) -> int:
    """Collapse an arbitrary cmp-style result to LESS, EQUAL or GREATER."""
    if result < 0:
        return LESS
    if result > 0:
        return GREATER
    return EQUAL


def natural_order(a: Any, b: Any) -> int:
    """Three-way compare using the elements' own ``<`` and ``>``."""
    if a < b:
        return LESS
    if a > b:
        return GREATER
    return EQUAL


def reversed_comparator(comparator: Comparator) -> Comparator:
    """Return *comparator* with its argument order swapped."""
    def compare(a, b):
        return comparator(b, a)
    return compare


def reverse_order(a: Any, b: Any) -> int:
    return natural_order(b, a)


def by_key(key: Callable[[T], Any], comparator: Comparator = natural_order) -> Comparator:
    """Compare elements by ``key(element)``."""
    def compare(a, b):
        return comparator(key(a), key(b))
    return compare


def then_with(primary: Comparator, secondary: Comparator) -> Comparator:
    """
    Chain two comparators: use *secondary* only where *primary* ties.

    Example::

        by_name = then_with(by_key(lambda s: s.last_name),
                            by_key(lambda s: s.first_name))
    """
    def compare(a, b):
        result = primary(a, b)
        if result != EQUAL:
            return result
        return secondary(a, b)
    return compare


def as_comparator(obj: Any) -> Comparator:
    """
    Accept either a comparator callable or an object with a ``compare``
    method and return a plain callable.
    """
    compare = getattr(obj, "compare", None)
    if callable(compare):
        return compare
    if callable(obj):
        return obj
    raise TypeError(
        f"Expected a comparator callable or an object with compare(a, b), got {type(obj).__name__}"
    )


def comparator_for(order: SortOrder, key: Callable[[T], Any] | None = None) -> Comparator:
    """Build the comparator implementing *order*, optionally on ``key(element)``."""
    if not isinstance(order, SortOrder):
        raise TypeError(f"order must be a SortOrder, got {order!r}")

    comparator = natural_order if key is None else by_key(key)
    if order is SortOrder.DESCENDING:
        comparator = reversed_comparator(comparator)
    return comparator
