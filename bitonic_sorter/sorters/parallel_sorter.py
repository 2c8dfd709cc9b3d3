"""
Parallel Bitonic Sorter
=======================
Runs the bitonic network on a thread pool.

Provides:
- Stage-parallel compare-and-swap: each stage is cut into chunks of
  disjoint comparators that run as independent tasks
- A barrier between stages (stage L+1 starts after every task of stage L)
- All-or-nothing results: the sort runs on a working copy that is written
  back only when every stage succeeded
- Sequential fallback below a configurable length
"""

from __future__ import annotations

import time
from concurrent.futures import ALL_COMPLETED, Executor, ThreadPoolExecutor, wait
from typing import Any, Callable, List, MutableSequence, Optional

from bitonic_sorter.ordering import Comparator, SortOrder, as_comparator, comparator_for
from bitonic_sorter.sort_errors import (
    SortWorkerError,
    check_length,
    resolve_max_workers,
    resolve_parallel_min_length,
)
from bitonic_sorter.sorters import generic_sorter
from bitonic_sorter.sorters.sorting_network import Stage, apply_stage, bitonic_network

DEBUG_MODE = False


class ParallelBitonicSorter:
    """
    Stage-parallel bitonic sorter.

    Usage:
        sorter = ParallelBitonicSorter(max_workers=4)
        sorter.sort(values, SortOrder.DESCENDING)
        sorter.sort_by(records, then_with(by_last, by_first))

    Worker count and the sequential threshold fall back to the
    BITONIC_MAX_WORKERS / BITONIC_PARALLEL_MIN_LENGTH environment variables.
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        min_parallel_length: Optional[int] = None,
        executor: Optional[Executor] = None,
    ):
        self.max_workers = resolve_max_workers(max_workers)
        self.min_parallel_length = resolve_parallel_min_length(min_parallel_length)
        self._executor = executor

        # Stats from the most recent sort
        self.last_stats: dict = {}

    # ── Public API ─────────────────────────────────────────────

    def sort(
        self,
        x: MutableSequence,
        order: SortOrder = SortOrder.ASCENDING,
        *,
        key: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        self.sort_by(x, comparator_for(order, key))

    def sort_by(self, x: MutableSequence, comparator: Comparator) -> None:
        """
        Sort *x* in place.

        Raises InvalidLengthError before any work when ``len(x)`` is not a
        power of two, and SortWorkerError (chained to the task's exception)
        when any task fails; in both cases *x* is unchanged.
        """
        compare = as_comparator(comparator)
        n = len(x)
        check_length(n, context="ParallelBitonicSorter.sort_by")

        start = time.perf_counter()
        work = list(x)
        if n < self.min_parallel_length or self.max_workers == 1:
            generic_sorter.sort_by(work, compare)
            x[:] = work
            self._record(n, mode="sequential", stages=0, tasks=0, start=start)
            return

        network = bitonic_network(n)
        tasks = 0

        executor = self._executor or ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="bitonic"
        )
        try:
            for index, stage in enumerate(network):
                tasks += self._run_stage(executor, work, stage, compare, index, n)
        finally:
            if self._executor is None:
                executor.shutdown(wait=True)

        x[:] = work
        self._record(n, mode="parallel", stages=len(network), tasks=tasks, start=start)

    # ── Internal ───────────────────────────────────────────────

    def _chunks(self, stage: Stage) -> List[Stage]:
        size = max(1, -(-len(stage) // self.max_workers))
        return [stage[i:i + size] for i in range(0, len(stage), size)]

    def _run_stage(self, executor, work, stage, compare, index, n) -> int:
        chunks = self._chunks(stage)
        futures = [executor.submit(apply_stage, work, chunk, compare) for chunk in chunks]

        # Barrier: the next stage relies on this stage's output
        wait(futures, return_when=ALL_COMPLETED)
        for future in futures:
            error = future.exception()
            if error is not None:
                raise SortWorkerError(
                    f"Stage {index} of the bitonic network failed for len(x)={n}: {error}",
                    stage=index,
                    length=n,
                ) from error

        if DEBUG_MODE:
            print(f"[BITONIC DEBUG] stage {index}: {len(stage)} comparators in {len(chunks)} tasks")
        return len(futures)

    def _record(self, n, *, mode, stages, tasks, start):
        self.last_stats = {
            "length": n,
            "mode": mode,
            "stages": stages,
            "tasks": tasks,
            "max_workers": self.max_workers,
            "time_taken": time.perf_counter() - start,
        }
        if DEBUG_MODE:
            print(f"[BITONIC DEBUG] {self.last_stats}")
