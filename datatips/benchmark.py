# datatips/benchmark.py

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from tqdm import tqdm

from .settings import settings


def _p(x: Sequence[float], q: float) -> float:
    return float(np.quantile(np.asarray(x, dtype=float), q))


def time_once(expr: Callable[[], Any]) -> float:
    """
    The naive way: one wall-clock reading. Noisy, and says nothing
    about the spread between runs.
    """
    t0 = time.perf_counter()
    expr()
    return time.perf_counter() - t0


def measure(
    expr: Callable[[], Any],
    repetitions: Optional[int] = None,
    warmup: Optional[int] = None,
) -> np.ndarray:
    """
    Call `expr` (a zero-argument callable) `repetitions` times and return
    the per-call durations in seconds. `warmup` calls run first and are
    not recorded.
    """
    repetitions = settings.benchmark_repetitions if repetitions is None else int(repetitions)
    warmup = settings.benchmark_warmup if warmup is None else int(warmup)

    if repetitions < 1:
        raise ValueError(f"repetitions must be >= 1, got {repetitions}")
    if warmup < 0:
        raise ValueError(f"warmup must be >= 0, got {warmup}")

    for _ in range(warmup):
        expr()

    times = np.empty(repetitions, dtype=float)
    for i in range(repetitions):
        t0 = time.perf_counter()
        expr()
        t1 = time.perf_counter()
        times[i] = t1 - t0
    return times


def summarize(times: Sequence[float]) -> Dict[str, Any]:
    times = np.asarray(times, dtype=float)
    if times.size == 0:
        raise ValueError("Cannot summarize an empty set of timings")

    return {
        "runs": int(times.size),
        "min_ms": float(times.min()) * 1000.0,
        "p50_ms": _p(times, 0.50) * 1000.0,
        "p95_ms": _p(times, 0.95) * 1000.0,
        "avg_ms": float(times.mean()) * 1000.0,
        "max_ms": float(times.max()) * 1000.0,
    }


def compare(
    exprs: Mapping[str, Callable[[], Any]],
    repetitions: Optional[int] = None,
    warmup: Optional[int] = None,
    show_progress: bool = False,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Benchmark several alternatives for the same job.

    Returns:
      timings - long form, one row per (expr, run) with `seconds`
      summary - one row per expr, fastest first, with `relative`
                (p50 / fastest p50)
    """
    if not exprs:
        raise ValueError("compare() needs at least one expression")

    timing_rows: List[Dict[str, Any]] = []
    summary_rows: List[Dict[str, Any]] = []

    for name, expr in tqdm(exprs.items(), desc="benchmark", disable=not show_progress):
        times = measure(expr, repetitions=repetitions, warmup=warmup)
        timing_rows.extend(
            {"expr": name, "run": i, "seconds": float(t)} for i, t in enumerate(times)
        )
        summary_rows.append({"expr": name, **summarize(times)})

    timings = pd.DataFrame(timing_rows)
    summary = pd.DataFrame(summary_rows).sort_values("p50_ms").reset_index(drop=True)

    fastest = summary["p50_ms"].iloc[0]
    summary["relative"] = summary["p50_ms"] / fastest if fastest > 0 else 1.0
    return timings, summary


def plot_timings(timings: pd.DataFrame, out_path: Path, title: str = "Benchmark") -> Path:
    """Boxplot of per-run durations (ms), one box per expression."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    names = list(dict.fromkeys(timings["expr"]))
    data = [timings.loc[timings["expr"] == n, "seconds"].to_numpy() * 1000.0 for n in names]

    plt.figure(figsize=(7, 4))
    plt.boxplot(data, orientation="horizontal")
    plt.yticks(range(1, len(names) + 1), names)
    plt.xscale("log")
    plt.title(title)
    plt.xlabel("Time per call (ms, log scale)")
    plt.tight_layout()
    plt.savefig(out_path, dpi=140)
    plt.close()
    return out_path
