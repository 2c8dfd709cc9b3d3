import sys
import os
import csv
import argparse
from typing import Dict, Any, List

import numpy as np

# Add project root to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from bitonic_sorter.ordering import SortOrder, natural_order, reverse_order
from bitonic_sorter.sort_worker import SortWorker
from bitonic_sorter.sorters import generic_sorter, primitive_sorter
from bitonic_sorter.sorters.parallel_sorter import ParallelBitonicSorter
from bitonic_sorter.sorters.sorting_network import apply_network, network_size

SORTERS = ["primitive", "generic", "network", "parallel", "numpy", "builtin"]


def _sorter_calls(values: List[int], descending: bool, workers: int):
    """Build (tag, input copy, callable) triples; each callable sorts its own copy."""
    order = SortOrder.DESCENDING if descending else SortOrder.ASCENDING
    parallel = ParallelBitonicSorter(max_workers=workers, min_parallel_length=2)

    copies = {tag: list(values) for tag in SORTERS}
    copies["numpy"] = np.array(values, dtype=np.int64)

    def run_network():
        data = copies["network"]
        comparator = reverse_order if descending else natural_order
        apply_network(data, comparator=comparator)

    def run_builtin():
        copies["builtin"].sort(reverse=descending)

    calls = {
        "primitive": lambda: primitive_sorter.sort(copies["primitive"], not descending),
        "generic": lambda: generic_sorter.sort(copies["generic"], order),
        "network": run_network,
        "parallel": lambda: parallel.sort(copies["parallel"], order),
        "numpy": lambda: primitive_sorter.sort_array(copies["numpy"], not descending),
        "builtin": run_builtin,
    }
    return [(tag, copies[tag], calls[tag]) for tag in SORTERS]


def run_single_trial(trial_id: int, exponent: int, descending: bool, workers: int,
                     timeout: float, seed: int) -> Dict[str, Any]:
    """
    Sorts one random input of length 2**exponent with every sorter.
    """
    n = 2 ** exponent
    rng = np.random.default_rng(seed + trial_id)
    values = rng.integers(0, 10 * n, size=n).tolist()
    expected = sorted(values, reverse=descending)

    result = {
        "trial_id": trial_id,
        "length": n,
        "order": "descending" if descending else "ascending",
        "comparators": network_size(n),
    }

    for tag, data, call in _sorter_calls(values, descending, workers):
        worker = SortWorker(call, label=tag)
        worker.start()
        finished = worker.wait(timeout)
        outcome = worker.get_result() if finished else None

        if outcome is None:
            result[f"{tag}_ok"] = False
            result[f"{tag}_time"] = timeout
            continue
        if not outcome["success"]:
            print(f"Error in trial {trial_id} with {tag}: {outcome['error']}")

        produced = data.tolist() if isinstance(data, np.ndarray) else data
        result[f"{tag}_ok"] = outcome["success"] and produced == expected
        result[f"{tag}_time"] = outcome["time_taken"]

    return result


def main(argv=None):
    parser = argparse.ArgumentParser(description="Benchmark Bitonic Sorters")
    parser.add_argument("--trials", type=int, default=3, help="Trials per length")
    parser.add_argument("--min-exp", type=int, default=4, help="Smallest length is 2**min_exp")
    parser.add_argument("--max-exp", type=int, default=12, help="Largest length is 2**max_exp")
    parser.add_argument("--descending", action="store_true", help="Sort descending")
    parser.add_argument("--workers", type=int, default=4, help="Parallel sorter threads")
    parser.add_argument("--timeout", type=float, default=60.0, help="Per-sorter timeout in seconds")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--output", type=str, default="benchmark_results.csv", help="Output CSV file")

    args = parser.parse_args(argv)
    if args.trials < 1:
        parser.error("--trials must be at least 1")
    if args.min_exp < 0 or args.max_exp < args.min_exp:
        parser.error("need 0 <= --min-exp <= --max-exp")
    if args.workers < 1:
        parser.error("--workers must be at least 1")

    exponents = list(range(args.min_exp, args.max_exp + 1))
    print(f"Starting Benchmark: {args.trials} trials, lengths 2^{args.min_exp}..2^{args.max_exp}")

    results = []
    total = len(exponents) * args.trials
    done = 0
    for exponent in exponents:
        for t in range(args.trials):
            done += 1
            print(f"Running Trial {done}/{total} (n={2 ** exponent})...", end="\r")
            results.append(run_single_trial(done, exponent, args.descending,
                                            args.workers, args.timeout, args.seed))

    print(f"\nBenchmark Complete!")
    wrong = [r["trial_id"] for r in results if not all(r[f"{s}_ok"] for s in SORTERS)]
    print(f"Trials with a wrong or failed sort: {len(wrong)}/{total}")

    # Save to CSV
    keys = results[0].keys()
    with open(args.output, "w", newline="") as f:
        dict_writer = csv.DictWriter(f, fieldnames=keys)
        dict_writer.writeheader()
        dict_writer.writerows(results)

    print(f"Results saved to {args.output}")

    # Print Summary Table
    print("\nSummary Statistics:")
    print(f"{'Sorter':<10} | {'Correct':<8} | {'Avg Time (s)':<12} | {'Max Time (s)':<12}")
    print("-" * 52)

    for sorter in SORTERS:
        correct = sum(1 for r in results if r[f"{sorter}_ok"]) / len(results) * 100
        times = np.array([r[f"{sorter}_time"] for r in results])
        print(f"{sorter.upper():<10} | {correct:>7.1f}% | {times.mean():>12.4f} | {times.max():>12.4f}")


if __name__ == "__main__":
    main()
