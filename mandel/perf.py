"""
Timing harness for Collection operations.

For each requested size: generate two collections, zip-multiply them and
reduce the product with sum. Each step is timed in nanoseconds; reports
and CSV output use milliseconds.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, List, Sequence

import numpy as np
import pandas as pd

from mandel.collection import Collection
from mandel.collection import sum as collection_sum

CSV_COLUMNS = ["size", "value", "gen_time_1", "gen_time_2", "zip_time", "reduce_time"]
NS_TO_MS = 1e-6


@dataclass
class PerfResult:
    size: int
    value: float
    gen_time_1: int  # ns
    gen_time_2: int
    zip_time: int
    reduce_time: int


def uniform_generator(seed: int | None = None) -> Callable[[int], float]:
    """Index -> uniform [0, 1) sample. The index is ignored."""
    rng = np.random.default_rng(seed)
    return lambda idx: float(rng.random())


def run_test(size: int, fn: Callable[[int], float]) -> PerfResult:
    start = time.time_ns()
    u = Collection(size, fn)
    gen_time_1 = time.time_ns() - start

    start = time.time_ns()
    v = Collection(size, fn)
    gen_time_2 = time.time_ns() - start

    start = time.time_ns()
    w = u * v
    zip_time = time.time_ns() - start

    start = time.time_ns()
    value = collection_sum(w)
    reduce_time = time.time_ns() - start

    return PerfResult(size, value, gen_time_1, gen_time_2, zip_time, reduce_time)


def report(res: PerfResult) -> None:
    print("******************")
    print(f"size: {res.size}")
    print(f"value: {res.value}")
    print(f"gen_time_1 (ns): {res.gen_time_1}")
    print(f"gen_time_2 (ns): {res.gen_time_2}")
    print(f"zip_time (ns): {res.zip_time}")
    print(f"reduce_time (ns): {res.reduce_time}")
    print("******************")


def results_frame(results: Sequence[PerfResult]) -> pd.DataFrame:
    """Results as a DataFrame with times converted to milliseconds."""
    df = pd.DataFrame([asdict(r) for r in results], columns=CSV_COLUMNS)
    for col in CSV_COLUMNS[2:]:
        df[col] = df[col].astype(float) * NS_TO_MS
    return df


def write_results(path: str | Path, results: Sequence[PerfResult]) -> Path:
    path = Path(path)
    results_frame(results).to_csv(path, index=False)
    return path


def run_all(sizes: Sequence[int], seed: int | None = None, verbose: bool = True) -> List[PerfResult]:
    fn = uniform_generator(seed)
    results = []
    for size in sizes:
        res = run_test(size, fn)
        if verbose:
            report(res)
        results.append(res)
    return results


def plot_results(results: Sequence[PerfResult], path: str | Path) -> Path:
    """Log-log plot of each timed step against collection size."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    df = results_frame(results)
    df = df[df["size"] > 0]

    fig, ax = plt.subplots(figsize=(7, 5))
    for col, label in [
        ("gen_time_1", "generate u"),
        ("gen_time_2", "generate v"),
        ("zip_time", "zip (u * v)"),
        ("reduce_time", "reduce (sum)"),
    ]:
        ax.plot(df["size"], df[col], marker="o", label=label)

    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel("Collection size")
    ax.set_ylabel("Time (ms)")
    ax.set_title("Collection operation timings")
    ax.grid(True, which="both", alpha=0.3)
    ax.legend()

    path = Path(path)
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return path
