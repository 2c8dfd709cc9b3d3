"""
Generic Bitonic Sorter
======================
Comparator-driven bitonic sort for any element type.

This is the strict form.  The length is validated before anything is
touched: lengths 0 and 1 succeed trivially, any other length must be an
exact power of two or `InvalidLengthError` is raised and the input is left
as it was.

The comparison schedule depends only on ``len(x)``.  Recursion walks
``(lo, n)`` index ranges of the caller's sequence, so the only writes are
pairwise swaps.
"""

from __future__ import annotations

from typing import Any, Callable, MutableSequence, Optional, TypeVar

from bitonic_sorter.ordering import (
    GREATER,
    LESS,
    Comparator,
    SortOrder,
    as_comparator,
    comparator_for,
    sign,
)
from bitonic_sorter.sort_errors import check_length

T = TypeVar("T")


def sort(
    x: MutableSequence[T],
    order: SortOrder = SortOrder.ASCENDING,
    *,
    key: Optional[Callable[[T], Any]] = None,
) -> None:
    """
    Sort *x* in place in the requested *order*.

    Parameters
    ----------
    x : mutable sequence
        Elements supporting ``<`` and ``>`` (or ``key(element)`` results that do).
    order : SortOrder
        ASCENDING or DESCENDING.
    key : callable, optional
        One-argument function extracting the comparison key, same semantics
        as ``sorted(..., key=...)``.

    Raises
    ------
    InvalidLengthError
        ``len(x)`` is neither 0, 1 nor a power of two.
    """
    sort_by(x, comparator_for(order, key))


def sort_by(x: MutableSequence[T], comparator: Comparator) -> None:
    """
    Sort *x* in place using a three-way *comparator* ``(a, b) -> int``.

    Any object with a ``compare(a, b)`` method is accepted as well.  The
    comparator must be a total order; otherwise the output order is
    undefined.
    """
    compare = as_comparator(comparator)
    n = len(x)
    check_length(n, context="sort_by")
    _build(x, 0, n, True, compare)


def _build(x, lo: int, n: int, forward: bool, compare: Comparator) -> None:
    """Turn x[lo:lo+n] into a sorted run; halves go up then down."""
    if n > 1:
        mid = n // 2
        _build(x, lo, mid, True, compare)
        _build(x, lo + mid, n - mid, False, compare)
        _merge(x, lo, n, forward, compare)


def _merge(x, lo: int, n: int, forward: bool, compare: Comparator) -> None:
    """Sort a bitonic x[lo:lo+n].  The bitonic shape is not checked."""
    if n > 1:
        _compare_and_swap(x, lo, n, forward, compare)
        mid = n // 2
        _merge(x, lo, mid, forward, compare)
        _merge(x, lo + mid, n - mid, forward, compare)


def _compare_and_swap(x, lo: int, n: int, forward: bool, compare: Comparator) -> None:
    swap_condition = GREATER if forward else LESS

    mid = n // 2
    for i in range(lo, lo + mid):
        j = i + mid
        if sign(compare(x[i], x[j])) == swap_condition:
            x[i], x[j] = x[j], x[i]
