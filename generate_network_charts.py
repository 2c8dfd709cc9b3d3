"""
Network Chart Generator
=======================
Charts the shape and cost of the bitonic sorting network.
Run:  python generate_network_charts.py --max-exp 10
Output: network_charts/ folder with 3 PNG files.
"""

import sys
import os
import argparse
import numpy as np
from typing import Dict, Any, List
from collections import defaultdict

# Ensure project root is on the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for file output
import matplotlib.pyplot as plt

from benchmark_sorters import SORTERS, run_single_trial
from bitonic_sorter.sorters.sorting_network import network_depth, network_size

# ─────────────────────────────────────────────────────────────
# Styling
# ─────────────────────────────────────────────────────────────
# One colour per sorter tag in benchmark_sorters.SORTERS
COLORS = dict(zip(SORTERS, matplotlib.colormaps["tab10"].colors))
REFERENCE_COLOR = "#7F7F7F"   # n log n guide lines
TEXT_COLOR = "#222222"


def setup_style():
    """Light report style; log-scaled axes need visible minor grid lines."""
    plt.style.use("default")
    plt.rcParams.update({
        "axes.grid": True,
        "axes.grid.which": "both",
        "grid.alpha": 0.25,
        "lines.markersize": 6,
        "legend.frameon": True,
        "savefig.dpi": 150,
        "savefig.bbox": "tight",
    })


# ─────────────────────────────────────────────────────────────
# Benchmarking Engine
# ─────────────────────────────────────────────────────────────
def run_benchmark(exponents: List[int], trials: int, workers: int,
                  timeout: float) -> Dict[int, List[Dict[str, Any]]]:
    """
    Time every sorter on random inputs.
    Returns results grouped by input length.
    """
    results = defaultdict(list)
    total = len(exponents) * trials
    done = 0

    for exponent in exponents:
        for t in range(trials):
            done += 1
            print(f"  [{done}/{total}] n={2 ** exponent} trial {t + 1}/{trials} ...", end="\r")
            entry = run_single_trial(done, exponent, False, workers, timeout, seed=0)
            results[entry["length"]].append(entry)

    print()
    return results


# ─────────────────────────────────────────────────────────────
# Chart Generators
# ─────────────────────────────────────────────────────────────
def _finish(ax, fig, out_dir, filename, label):
    ax.legend(loc="upper left")
    ax.grid(zorder=0)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    fig.savefig(os.path.join(out_dir, filename))
    plt.close(fig)
    print(f"  + {label}")


def chart_1_network_size(exponents, out_dir):
    """Comparator count against n log2 n and n log2^2 n / 4."""
    fig, ax = plt.subplots(figsize=(10, 6))
    n = np.array([2 ** e for e in exponents], dtype=float)
    m = np.array(exponents, dtype=float)

    ax.plot(n, [network_size(int(v)) for v in n], "o-", label="Bitonic comparators",
            color=COLORS["network"], linewidth=2.5, zorder=3)
    ax.plot(n, n * m, "--", label="n log2 n", color=REFERENCE_COLOR, linewidth=2, zorder=3)
    ax.plot(n, n * m * (m + 1) / 4, ":", label="n log2 n (log2 n + 1) / 4",
            color=REFERENCE_COLOR, linewidth=1.5, zorder=3)

    ax.set_xscale("log", base=2)
    ax.set_yscale("log", base=2)
    ax.set_xlabel("Input length n")
    ax.set_ylabel("Comparators")
    ax.set_title("Network Size", fontsize=18, pad=15)
    _finish(ax, fig, out_dir, "1_network_size.png", "Chart 1: Network Size")


def chart_2_network_depth(exponents, out_dir):
    """Bar chart: number of barrier-separated stages per length."""
    fig, ax = plt.subplots(figsize=(10, 6))
    x = np.arange(len(exponents))
    depths = [network_depth(2 ** e) for e in exponents]

    bars = ax.bar(x, depths, 0.6, label="Stages", color=COLORS["network"],
                  edgecolor="none", alpha=0.9, zorder=3)
    for bar in bars:
        h = bar.get_height()
        ax.text(bar.get_x() + bar.get_width() / 2, h + 0.5, f"{h:.0f}",
                ha="center", va="bottom", fontsize=9, fontweight="bold", color=TEXT_COLOR)

    ax.set_xticks(x)
    ax.set_xticklabels([f"2^{e}" for e in exponents], fontsize=10)
    ax.set_ylabel("Stages")
    ax.set_title("Network Depth (parallel steps)", fontsize=18, pad=15)
    _finish(ax, fig, out_dir, "2_network_depth.png", "Chart 2: Network Depth")


def chart_3_timing(results, out_dir):
    """Line chart: average sort time per sorter against input length."""
    fig, ax = plt.subplots(figsize=(10, 6))
    lengths = sorted(results.keys())

    for tag in SORTERS:
        times = [np.mean([r[f"{tag}_time"] for r in results[n]]) for n in lengths]
        ax.plot(lengths, times, "o-", label=tag, color=COLORS[tag],
                linewidth=2.5, markersize=7, zorder=3)

    ax.set_xscale("log", base=2)
    ax.set_yscale("log")
    ax.set_xlabel("Input length n")
    ax.set_ylabel("Average Time (seconds)")
    ax.set_title("Sort Time by Sorter", fontsize=18, pad=15)
    _finish(ax, fig, out_dir, "3_timing.png", "Chart 3: Timing")


def print_summary(results):
    print("\n  Summary")
    for n in sorted(results.keys()):
        entries = results[n]
        print(f"  n={n}  comparators={entries[0]['comparators']}")
        for tag in SORTERS:
            correct = 100 * sum(1 for e in entries if e[f"{tag}_ok"]) / len(entries)
            avg_t = np.mean([e[f"{tag}_time"] for e in entries])
            print(f"     {tag:<9}  Correct: {correct:5.1f}%  Time: {avg_t:.4f}s")
    print()


# ─────────────────────────────────────────────────────────────
# Main
# ─────────────────────────────────────────────────────────────
def main():
    parser = argparse.ArgumentParser(description="Generate Bitonic Network Charts")
    parser.add_argument("--min-exp", type=int, default=2, help="Smallest length is 2**min_exp")
    parser.add_argument("--max-exp", type=int, default=10, help="Largest length is 2**max_exp")
    parser.add_argument("--trials", type=int, default=3, help="Timing trials per length")
    parser.add_argument("--workers", type=int, default=4, help="Parallel sorter threads")
    parser.add_argument("--timeout", type=float, default=60.0,
                        help="Per-sorter timeout in seconds (default: 60)")
    args = parser.parse_args()

    out_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "network_charts")
    os.makedirs(out_dir, exist_ok=True)

    setup_style()
    exponents = list(range(args.min_exp, args.max_exp + 1))

    print("Bitonic Network Charts")
    print(f"  Lengths       : 2^{args.min_exp} .. 2^{args.max_exp}")
    print(f"  Trials        : {args.trials}")
    print(f"  Output folder : {out_dir}")
    print()

    print("Phase 1/2: Timing sorters...")
    results = run_benchmark(exponents, args.trials, args.workers, args.timeout)

    print("\nPhase 2/2: Generating Charts...")
    chart_1_network_size(exponents, out_dir)
    chart_2_network_depth(exponents, out_dir)
    chart_3_timing(results, out_dir)

    print_summary(results)
    print(f"All 3 charts saved to: {out_dir}")


if __name__ == "__main__":
    main()
