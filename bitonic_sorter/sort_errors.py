"""
Sorter errors and tunables.
"""

from __future__ import annotations

import os
from typing import Optional

DEFAULT_PARALLEL_MIN_LENGTH = 1024
INVALID_LENGTH_MESSAGE = "The length of x is not a power of two. (len(x): {length})"


class InvalidLengthError(ValueError):
    """
    Raised by the strict sorters when the input length is not a power of two.
    The input is left untouched.
    """

    def __init__(self, length: int, *, context: str | None = None) -> None:
        message = INVALID_LENGTH_MESSAGE.format(length=length)
        if context:
            message = f"{context}: {message}"
        super().__init__(message)
        self.length = length
        self.context = context


class SortWorkerError(RuntimeError):
    """
    Raised when a task of the parallel sorter fails.  The whole sort is
    reported as failed; the caller's sequence is not modified.
    """

    def __init__(
        self,
        message: str,
        *,
        stage: int | None = None,
        length: int | None = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.length = length


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def is_valid_length(n: int) -> bool:
    """Lengths 0 and 1 are trivially sorted; anything else must be 2**k."""
    return n <= 1 or is_power_of_two(n)


def check_length(n: int, context: str | None = None) -> None:
    if not is_valid_length(n):
        raise InvalidLengthError(n, context=context)


def _positive_int(raw) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def default_max_workers() -> int:
    # Same default as concurrent.futures.ThreadPoolExecutor
    return min(32, (os.cpu_count() or 1) + 4)


def resolve_max_workers(explicit=None) -> int:
    """
    Resolve the parallel sorter's worker count.

    Priority:
    1) explicit argument
    2) env BITONIC_MAX_WORKERS
    3) default_max_workers()
    """
    for raw in (explicit, os.getenv("BITONIC_MAX_WORKERS")):
        value = _positive_int(raw)
        if value is not None:
            return value
    return default_max_workers()


def resolve_parallel_min_length(explicit=None) -> int:
    """
    Resolve the length below which the parallel sorter runs sequentially.

    Priority:
    1) explicit argument
    2) env BITONIC_PARALLEL_MIN_LENGTH
    3) DEFAULT_PARALLEL_MIN_LENGTH
    """
    for raw in (explicit, os.getenv("BITONIC_PARALLEL_MIN_LENGTH")):
        value = _positive_int(raw)
        if value is not None:
            return value
    return DEFAULT_PARALLEL_MIN_LENGTH
