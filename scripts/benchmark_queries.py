#!/usr/bin/env python3
"""
Performance benchmark for RangeCurve domain-interval queries.

This benchmark simulates a plot viewport scanning a long sampled signal:
- x = sample index, y = a periodic signal with every 17th sample missing
- Queries: windows of width 1, 2, 4, 8, ... up to the whole domain
- Compared against an O(n) linear scan over the same index range
"""

import math
import random
import time

from rangeCurve.curve import RangeCurve
from rangeCurve.interval_tree import linear_min_max


def make_curve(num_samples: int) -> RangeCurve:
    x_values = [float(i) for i in range(num_samples)]
    y_values = [None if i % 17 == 0 else math.sin(i / 50.0) * 100.0 for i in range(num_samples)]
    return RangeCurve(x_values, y_values)


def benchmark_build():
    """Tree construction should grow linearly with the sample count."""
    print(f"\n{'='*70}")
    print("Benchmark: Construction (O(n))")
    print(f"{'='*70}")

    print(f"\n{'Samples':<12} {'Build (ms)':<14} {'per sample (us)':<18}")
    print(f"{'-'*45}")
    for num_samples in [1_000, 10_000, 100_000, 1_000_000]:
        start = time.perf_counter()
        make_curve(num_samples)
        elapsed = time.perf_counter() - start
        print(f"{num_samples:<12,} {elapsed*1000:<14.2f} {elapsed/num_samples*1e6:<18.3f}")


def benchmark_query_vs_linear():
    """Show how query time scales with window width (should be O(log n))."""
    print(f"\n{'='*70}")
    print("Benchmark: Query vs linear scan")
    print(f"{'='*70}")

    num_samples = 200_000
    curve = make_curve(num_samples)
    rng = random.Random(7)

    widths = [2**p for p in range(0, 18)] + [num_samples - 1]
    print(f"\n{'Width':<10} {'Tree (us)':<12} {'Linear (us)':<14} {'Speedup':<10}")
    print(f"{'-'*48}")

    for width in widths:
        iterations = 200
        starts = [rng.uniform(0, num_samples - 1 - width) for _ in range(iterations)]

        start = time.perf_counter()
        for xmin in starts:
            curve.get_min_max_over_domain_interval(xmin, xmin + width)
        tree_time = (time.perf_counter() - start) / iterations * 1e6

        start = time.perf_counter()
        for xmin in starts:
            linear_min_max(curve.y_values, math.ceil(xmin), int(xmin + width))
        linear_time = (time.perf_counter() - start) / iterations * 1e6

        speedup = linear_time / tree_time if tree_time > 0 else float("inf")
        print(f"{width:<10,} {tree_time:<12.2f} {linear_time:<14.2f} {speedup:<10.1f}x")

    print(f"{'='*70}\n")


if __name__ == "__main__":
    benchmark_build()
    benchmark_query_vs_linear()
