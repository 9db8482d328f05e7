# datatips/run_tips.py

"""
Walk through the seven tips, naive vs preferred, on synthetic data.

Writes to <output_dir>/tips/:
  - benchmarks.csv         one summary row per (tip, expression)
  - benchmarks.png         per-run timing distributions
  - tidy_coefficients.csv  tidy() of the demo regression
  - tokens.csv             sample texts with their tokens
  - tfidf_terms.csv        top terms by mean TF-IDF weight
"""

from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .benchmark import compare, plot_timings, time_once
from .caching import cached
from .chaining import compose, pipe
from .dataset import read_table, read_table_naive, tokenize_column, write_sample_table
from .features import top_terms, vectorize_texts
from .interpolation import interpolate, paste
from .model_summary import extract_significant_terms, fit_ols, glance, tidy
from .settings import settings
from .text_preprocessing import (
    CaseMode,
    CaseNormalizer,
    HashtagSplitter,
    MentionSplitter,
    NonAsciiStripper,
    PunctuationStripper,
    UrlSubstitutor,
    WhitespaceCollapser,
)
from .wrangling import group_mean_naive, query


SAMPLE_SCHEMA = {"user": "category", "group": "category", "score": "float32", "likes": "int32"}


def _slow_square(x: int, delay: float) -> int:
    time.sleep(delay)
    return x * x


# -----------------------------
# Tips
# -----------------------------

def tip_benchmark(repetitions: int) -> pd.DataFrame:
    values = list(range(10_000))
    arr = np.asarray(values)

    def loop_sum():
        total = 0
        for v in values:
            total += v
        return total

    print(f"[TIP1] Naive single timing of the loop: {time_once(loop_sum) * 1000:.3f} ms")
    _, summary = compare(
        {"python loop": loop_sum, "builtin sum": lambda: sum(values), "numpy sum": arr.sum},
        repetitions=repetitions,
    )
    print("[TIP1] Distribution-based comparison:")
    print(summary[["expr", "p50_ms", "p95_ms", "relative"]])
    return summary


def tip_read_table(csv_path: Path, repetitions: int) -> Tuple[pd.DataFrame, pd.DataFrame]:
    timings, summary = compare(
        {
            "csv.DictReader": lambda: read_table_naive(csv_path),
            "pandas (inferred)": lambda: read_table(csv_path),
            "pandas (schema)": lambda: read_table(csv_path, SAMPLE_SCHEMA),
        },
        repetitions=repetitions,
        warmup=1,
    )
    typed = read_table(csv_path, SAMPLE_SCHEMA)
    inferred = read_table(csv_path)
    print(
        "[TIP2] Memory: inferred="
        f"{inferred.memory_usage(deep=True).sum() / 1024:.1f} KiB, "
        f"schema={typed.memory_usage(deep=True).sum() / 1024:.1f} KiB"
    )
    print(summary[["expr", "p50_ms", "relative"]])
    return timings, summary


def tip_interpolation(df: pd.DataFrame) -> str:
    top = df.sort_values("likes", ascending=False).iloc[0]

    naive = paste("User", top["user"], "got", top["likes"], "likes in group", top["group"])
    preferred = interpolate(
        "User {user} got {likes:,} likes in group {group!r} (score {score:.2f})",
        top.to_dict(),
    )
    print(f"[TIP3] paste():       {naive}")
    print(f"[TIP3] interpolate(): {preferred}")
    return preferred


def tip_chaining(df: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
    text = df["text"].iloc[0]

    # inside-out, read from the innermost call
    nested = WhitespaceCollapser()(PunctuationStripper()(UrlSubstitutor()(
        HashtagSplitter()(MentionSplitter()(CaseNormalizer("lower")(NonAsciiStripper()(text))))
    )))

    chained = pipe(
        text,
        NonAsciiStripper(),
        CaseNormalizer("lower"),
        MentionSplitter(),
        HashtagSplitter(),
        UrlSubstitutor(),
        PunctuationStripper(),
        WhitespaceCollapser(),
    )
    shout = compose(CaseNormalizer("upper"), WhitespaceCollapser())

    print(f"[TIP4] nested : {nested}")
    print(f"[TIP4] chained: {chained}")
    print(f"[TIP4] compose: {shout(chained)}")

    sample = df[["post_id", "text"]].drop_duplicates("text").reset_index(drop=True)
    out = tokenize_column(sample, "text", case_mode=CaseMode.LOWER)
    out["tokens"] = out["tokens"].map(" | ".join)

    # the same tokens drive downstream features
    vectorizer, matrix = vectorize_texts(df["text"], case_mode=CaseMode.LOWER)
    terms = top_terms(vectorizer, matrix, n=15)
    print(f"[TIP4] TF-IDF vocabulary: {len(vectorizer.vocabulary_)} terms, top: {terms['term'].head(5).tolist()}")
    return out, terms


def tip_wrangling(df: pd.DataFrame, csv_path: Path, repetitions: int) -> Tuple[pd.DataFrame, pd.DataFrame]:
    rows = read_table_naive(csv_path)

    naive = group_mean_naive([r for r in rows if int(r["likes"]) > 10], "group", "score")
    preferred = query(
        df,
        predicate="likes > 10",
        grouping=["group"],
        aggregation={"mean_score": ("score", "mean"), "n": ("post_id", "count")},
    )
    print(f"[TIP5] naive loop : { {k: round(v, 4) for k, v in sorted(naive.items())} }")
    print("[TIP5] query():")
    print(preferred)

    return compare(
        {
            "dict loop": lambda: group_mean_naive(
                [r for r in rows if int(r["likes"]) > 10], "group", "score"
            ),
            "pandas query": lambda: query(
                df,
                predicate="likes > 10",
                grouping=["group"],
                aggregation={"mean_score": ("score", "mean")},
            ),
        },
        repetitions=repetitions,
    )


def tip_model_summary(df: pd.DataFrame, alpha: float) -> pd.DataFrame:
    rng = np.random.default_rng(0)
    data = df.copy()
    data["noise"] = rng.normal(size=len(data))
    data["engagement"] = 2.0 * data["score"] + 0.05 * data["likes"] + rng.normal(scale=0.5, size=len(data))

    fitted = fit_ols(data, "engagement ~ score + likes + noise + C(group)")

    print("[TIP6] The printed summary is for humans:")
    print(fitted.summary().tables[1])

    coefs = tidy(fitted)
    print("[TIP6] tidy() is a DataFrame you can filter, join and plot:")
    print(coefs)
    print(glance(fitted))
    print(f"[TIP6] Significant at alpha={alpha}: {sorted(extract_significant_terms(fitted, alpha))}")
    return coefs


def tip_caching(cache_dir: Path, delay: float) -> Dict[str, float]:
    slow = cached(_slow_square, location=cache_dir)
    slow.clear(warn=False)

    t_first = time_once(lambda: slow(12, delay))
    t_second = time_once(lambda: slow(12, delay))
    print(f"[TIP7] first call: {t_first * 1000:.1f} ms, cached call: {t_second * 1000:.1f} ms")
    return {"first_ms": t_first * 1000.0, "cached_ms": t_second * 1000.0}


# -----------------------------
# Runner
# -----------------------------

def run(
    out_dir: Optional[Path] = None,
    repetitions: Optional[int] = None,
    n_rows: int = 10_000,
    cache_delay: float = 0.5,
    cache_dir: Optional[Path] = None,
) -> Path:
    out_dir = Path(out_dir) if out_dir is not None else settings.output_dir / "tips"
    out_dir.mkdir(parents=True, exist_ok=True)
    cache_dir = Path(cache_dir) if cache_dir is not None else settings.cache_dir / "tips"
    if repetitions is None:
        repetitions = settings.benchmark_repetitions
    if repetitions < 1:
        raise ValueError(f"repetitions must be >= 1, got {repetitions}")

    csv_path = write_sample_table(out_dir / "sample_posts.csv", n_rows=n_rows)
    print(f"[DATA] Wrote {n_rows} synthetic rows to {csv_path}")
    df = read_table(csv_path)

    summaries: List[pd.DataFrame] = []
    timings_all: List[pd.DataFrame] = []

    summary = tip_benchmark(repetitions)
    summaries.append(summary.assign(tip="benchmark"))

    timings, summary = tip_read_table(csv_path, max(1, repetitions // 10))
    summaries.append(summary.assign(tip="read_table"))
    timings_all.append(timings)

    tip_interpolation(df)

    tokens, terms = tip_chaining(df)
    tokens_path = out_dir / "tokens.csv"
    tokens.to_csv(tokens_path, index=False)
    terms_path = out_dir / "tfidf_terms.csv"
    terms.to_csv(terms_path, index=False)

    timings, summary = tip_wrangling(df, csv_path, max(1, repetitions // 10))
    summaries.append(summary.assign(tip="wrangling"))
    timings_all.append(timings)

    coefs = tip_model_summary(df, settings.significance_alpha)
    coefs_path = out_dir / "tidy_coefficients.csv"
    coefs.to_csv(coefs_path, index=False)

    cache_stats: Dict[str, Any] = tip_caching(cache_dir, cache_delay)
    summaries.append(pd.DataFrame([{
        "tip": "caching",
        "expr": "cached second call",
        "runs": 1,
        "p50_ms": cache_stats["cached_ms"],
        "relative": cache_stats["cached_ms"] / cache_stats["first_ms"] if cache_stats["first_ms"] > 0 else 1.0,
    }]))

    bench_path = out_dir / "benchmarks.csv"
    pd.concat(summaries, ignore_index=True).to_csv(bench_path, index=False)
    plot_path = plot_timings(pd.concat(timings_all, ignore_index=True), out_dir / "benchmarks.png",
                             title="Naive vs preferred")

    print(f"[SAVE] Benchmarks: {bench_path}")
    print(f"[SAVE] Plot: {plot_path}")
    print(f"[SAVE] Coefficients: {coefs_path}")
    print(f"[SAVE] Tokens: {tokens_path}")
    print(f"[SAVE] TF-IDF terms: {terms_path}")
    return out_dir


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the seven efficiency tips on synthetic data.")
    parser.add_argument("--out-dir", default=str(settings.output_dir / "tips"))
    parser.add_argument("--repetitions", type=int, default=settings.benchmark_repetitions)
    parser.add_argument("--rows", type=int, default=10_000)
    args = parser.parse_args()

    out = run(out_dir=Path(args.out_dir), repetitions=args.repetitions, n_rows=args.rows)
    print(f"[TIPS] Done. Outputs in: {out}")


if __name__ == "__main__":
    main()
