"""
Primitive Bitonic Sorter
========================
Direction-flag bitonic sort for numeric sequences.

This is the permissive form: the caller guarantees that ``len(x)`` is a
power of two.  Other lengths are not rejected; the recursion still
terminates but the result is unspecified.

Two entry points:

- `sort` works on any mutable sequence (list, array.array, ndarray, ...)
  using ``(lo, n)`` index ranges into the caller's buffer.
- `sort_array` sorts a 1-D numpy array, running each compare-and-swap pass
  as a single vectorized operation over all mirror pairs.
"""

from __future__ import annotations

from typing import MutableSequence

import numpy as np

from bitonic_sorter.sort_errors import check_length

ASCENDING = True
DESCENDING = False


def sort(x: MutableSequence, up: bool = ASCENDING) -> None:
    """Sort *x* in place, ascending when *up* is true."""
    _build(x, 0, len(x), up)


def _build(x, lo: int, n: int, up: bool) -> None:
    if n > 1:
        mid = n // 2
        _build(x, lo, mid, ASCENDING)
        _build(x, lo + mid, n - mid, DESCENDING)
        _merge(x, lo, n, up)


def _merge(x, lo: int, n: int, up: bool) -> None:
    if n > 1:
        _compare_and_swap(x, lo, n, up)
        mid = n // 2
        _merge(x, lo, mid, up)
        _merge(x, lo + mid, n - mid, up)


def _compare_and_swap(x, lo: int, n: int, up: bool) -> None:
    mid = n // 2
    for i in range(lo, lo + mid):
        j = i + mid
        if (x[i] > x[j]) == up:
            x[i], x[j] = x[j], x[i]


def sort_array(arr: np.ndarray, up: bool = ASCENDING) -> None:
    """
    Sort a 1-D numpy array in place with vectorized compare-and-swap passes.

    Build level ``k`` (block size) alternates ascending/descending blocks,
    except the last level which resolves the whole array in direction *up*.
    Within a level, merge step ``j`` pairs index ``i`` with ``i + j`` inside
    every ``2*j`` wide group; all of those pairs are swapped at once.

    Raises InvalidLengthError for lengths that are not a power of two, since
    the block reshaping needs exact halving at every level.
    """
    if arr.ndim != 1:
        raise ValueError(f"sort_array expects a 1-D array, got shape {arr.shape}")

    n = arr.shape[0]
    check_length(n, context="sort_array")
    if n < 2:
        return

    # reshape() only returns a view for contiguous data
    work = arr if arr.flags.c_contiguous else np.ascontiguousarray(arr)

    k = 2
    while k <= n:
        if k == n:
            block_up = np.array([up])
        else:
            block_up = np.arange(n // k) % 2 == 0

        j = k // 2
        while j >= 1:
            groups = work.reshape(n // k, k // (2 * j), 2, j)
            low = groups[:, :, 0, :]
            high = groups[:, :, 1, :]

            swap = (low > high) == block_up[:, None, None]
            if swap.any():
                held = low[swap]
                low[swap] = high[swap]
                high[swap] = held
            j //= 2
        k *= 2

    if work is not arr:
        arr[...] = work
