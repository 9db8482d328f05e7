# tests/test_benchmark.py

import warnings

import matplotlib
import numpy as np
import pytest

from datatips.benchmark import compare, measure, plot_timings, summarize, time_once


def test_measure_returns_one_duration_per_repetition():
    calls = []
    times = measure(lambda: calls.append(1), repetitions=7, warmup=3)

    assert isinstance(times, np.ndarray)
    assert times.shape == (7,)
    assert (times >= 0).all()
    # warmup calls run but are not recorded
    assert len(calls) == 10


@pytest.mark.parametrize("repetitions, warmup", [(0, 0), (-1, 0), (3, -1)])
def test_measure_rejects_bad_counts(repetitions, warmup):
    with pytest.raises(ValueError):
        measure(lambda: None, repetitions=repetitions, warmup=warmup)


def test_summarize_reports_ms_quantiles():
    stats = summarize([0.001, 0.002, 0.003, 0.004])
    assert stats["runs"] == 4
    assert stats["min_ms"] == pytest.approx(1.0)
    assert stats["max_ms"] == pytest.approx(4.0)
    assert stats["avg_ms"] == pytest.approx(2.5)
    assert stats["min_ms"] <= stats["p50_ms"] <= stats["p95_ms"] <= stats["max_ms"]

    with pytest.raises(ValueError):
        summarize([])


def test_time_once_is_non_negative():
    assert time_once(lambda: sum(range(100))) >= 0.0


def test_compare_orders_by_median(tmp_path):
    values = list(range(2000))

    def slow():
        total = 0
        for v in values:
            total += v
        return total

    timings, summary = compare({"loop": slow, "noop": lambda: None}, repetitions=5, warmup=1)

    assert set(timings.columns) == {"expr", "run", "seconds"}
    assert len(timings) == 10
    assert list(summary["expr"]) == ["noop", "loop"]
    assert summary["relative"].iloc[0] == pytest.approx(1.0)
    assert summary["relative"].iloc[1] >= 1.0

    out = plot_timings(timings, tmp_path / "plots" / "bench.png")
    assert out.exists()


def test_compare_needs_expressions():
    with pytest.raises(ValueError):
        compare({})


def test_plot_timings_uses_current_matplotlib_api(tmp_path):
    timings, _ = compare({"a": lambda: None, "b": lambda: sum(range(50))}, repetitions=3, warmup=0)

    with warnings.catch_warnings():
        warnings.simplefilter("error", matplotlib.MatplotlibDeprecationWarning)
        out = plot_timings(timings, tmp_path / "bench.png")

    assert out.exists()
