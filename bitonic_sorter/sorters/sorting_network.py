"""
Bitonic Sorting Network
=======================
The bitonic sort as an explicit, data-independent comparator schedule.

`bitonic_network` flattens the recursive build/merge into stages.  Every
stage is a tuple of ``(i, j)`` comparators with pairwise disjoint indices;
after a comparator runs, ``x[i]`` precedes ``x[j]`` in the requested order.
Stages must run in sequence, comparators inside a stage can run in any
order (or at the same time).

For ``n = 2**m`` the network has ``m * (m + 1) / 2`` stages of ``n / 2``
comparators each, and performs exactly the comparisons of the recursive
sorters in the same stage order.
"""

from __future__ import annotations

from functools import lru_cache
from typing import MutableSequence, Tuple

from bitonic_sorter.ordering import GREATER, Comparator, as_comparator, natural_order, sign
from bitonic_sorter.sort_errors import check_length

Pair = Tuple[int, int]
Stage = Tuple[Pair, ...]
Network = Tuple[Stage, ...]


@lru_cache(maxsize=64)
def bitonic_network(n: int, up: bool = True) -> Network:
    """
    Return the comparator stages sorting ``n`` elements.

    Build level ``k`` (block size 2, 4, ..., n) alternates ascending and
    descending blocks; the final level ``k == n`` resolves in direction *up*.
    Merge step ``j`` (k/2, k/4, ..., 1) pairs ``i`` with ``i ^ j``.
    """
    check_length(n, context="bitonic_network")

    stages = []
    k = 2
    while k <= n:
        j = k // 2
        while j >= 1:
            stage = []
            for i in range(n):
                partner = i ^ j
                if partner <= i:
                    continue
                ascending = up if k == n else (i & k) == 0
                stage.append((i, partner) if ascending else (partner, i))
            stages.append(tuple(stage))
            j //= 2
        k *= 2
    return tuple(stages)


def network_depth(n: int) -> int:
    """Number of stages for ``n`` elements."""
    check_length(n, context="network_depth")
    m = max(n.bit_length() - 1, 0)
    return m * (m + 1) // 2


def network_size(n: int) -> int:
    """Total number of comparators for ``n`` elements."""
    return network_depth(n) * (n // 2)


def apply_stage(x: MutableSequence, stage: Stage, compare: Comparator) -> None:
    for i, j in stage:
        if sign(compare(x[i], x[j])) == GREATER:
            x[i], x[j] = x[j], x[i]


def apply_network(
    x: MutableSequence,
    network: Network | None = None,
    comparator: Comparator = natural_order,
) -> None:
    """
    Run *network* over *x* in place, stage by stage, without recursion.

    When *network* is omitted the ascending network for ``len(x)`` is used;
    pass a reversed comparator for descending order.
    """
    compare = as_comparator(comparator)
    if network is None:
        network = bitonic_network(len(x))
    elif network:
        width = max(max(pair) for stage in network for pair in stage) + 1
        if width > len(x):
            raise ValueError(f"Network spans {width} elements but len(x) is {len(x)}")

    for stage in network:
        apply_stage(x, stage, compare)
