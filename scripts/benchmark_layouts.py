#!/usr/bin/env python3
"""
Benchmark the layout modes on generated diagrams.

Usage:
    python scripts/benchmark_layouts.py [--sizes N,...] [--modes MODE,...]

Examples:
    python scripts/benchmark_layouts.py
    python scripts/benchmark_layouts.py --sizes 50,200,800 --modes organic
    python scripts/benchmark_layouts.py --iterations 30 --output results.json
"""

from __future__ import annotations

import argparse
import json
import random
import time
from typing import Any

from organic_layout import (
    LayoutMode,
    SpringConfig,
    auto_layout,
    edge_crossings,
    overlapping_nodes,
)


def generate_diagram(
    n: int,
    density: float = 1.2,
    isolated_share: float = 0.15,
    seed: int = 42,
) -> tuple[list[str], list[tuple[str, str]]]:
    """
    Generate a diagram shaped like an editor graph.

    A share of the nodes is left without links; the rest are joined by
    roughly ``density`` links per node, with a bias toward earlier nodes
    so a few hubs emerge.
    """
    rng = random.Random(seed)
    ids = [f"node_{i}" for i in range(n)]
    linked = ids[: max(2, int(n * (1 - isolated_share)))]
    links = []
    for _ in range(int(len(linked) * density)):
        src = linked[int(rng.random() ** 2 * len(linked))]
        tgt = rng.choice(linked)
        if src != tgt:
            links.append((src, tgt))
    return ids, links


def benchmark_mode(
    mode: LayoutMode,
    ids: list[str],
    links: list[tuple[str, str]],
    iterations: int,
) -> dict[str, Any]:
    """
    Time one layout mode.

    Returns:
        Dict with timing and quality info
    """
    start = time.perf_counter()
    placed = auto_layout(
        ids,
        links,
        mode=mode,
        spring=SpringConfig(iterations=iterations),
        random_seed=42,
    )
    elapsed = time.perf_counter() - start

    return {
        "time_seconds": elapsed,
        "num_nodes": len(ids),
        "num_edges": len(links),
        "overlaps": len(overlapping_nodes(placed)),
        "crossings": edge_crossings(placed, links) if len(links) <= 400 else None,
    }


def run_benchmarks(
    sizes: list[int],
    modes: list[LayoutMode],
    iterations: int = 100,
) -> list[dict]:
    """Run every mode on every diagram size."""
    results = []

    print(f"\nBenchmarking {len(modes)} modes on {len(sizes)} diagrams")
    print(f"Iterations: {iterations}")
    print("=" * 72)

    for n in sizes:
        ids, links = generate_diagram(n)
        print(f"\n{n} nodes, {len(links)} edges")
        print("-" * 60)

        for mode in modes:
            result = benchmark_mode(mode, ids, links, iterations)
            crossings = result["crossings"]
            print(
                f"  {mode.value:14s}: {result['time_seconds']:.4f}s"
                f"  overlaps={result['overlaps']}"
                f"  crossings={'--' if crossings is None else crossings}"
            )
            results.append({"size": n, "mode": mode.value, **result})

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark layout modes")
    parser.add_argument("--sizes", default="20,100,400", help="Comma-separated node counts")
    parser.add_argument(
        "--modes",
        default=",".join(m.value for m in LayoutMode),
        help="Comma-separated modes (organic, grid, hierarchical)",
    )
    parser.add_argument("--iterations", type=int, default=100, help="Simulation iterations")
    parser.add_argument("--output", help="Output JSON file for results")

    args = parser.parse_args()

    sizes = [int(s) for s in args.sizes.split(",")]
    modes = [LayoutMode(m) for m in args.modes.split(",")]

    results = run_benchmarks(sizes, modes, iterations=args.iterations)

    if args.output and results:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
