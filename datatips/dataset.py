# datatips/dataset.py

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import numpy as np
import pandas as pd
from tqdm import tqdm

from .text_preprocessing import CaseMode, build_pipeline


def read_table_naive(csv_path: Path) -> List[Dict[str, str]]:
    """
    Row-by-row read with the csv module: every value stays a string and
    every column is loaded whether it is needed or not.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {csv_path}")

    with csv_path.open("r", encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))


def read_table(
    csv_path: Path,
    schema: Optional[Mapping[str, Any]] = None,
    **read_csv_kwargs: Any,
) -> pd.DataFrame:
    """
    Read a CSV with pandas.

    `schema` maps column name -> dtype (e.g. {"user": "category",
    "score": "float32"}). When given, only those columns are parsed and
    each one gets its dtype up front instead of being inferred.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {csv_path}")

    if not schema:
        return pd.read_csv(csv_path, **read_csv_kwargs)

    header = pd.read_csv(csv_path, nrows=0, **read_csv_kwargs).columns
    missing = [c for c in schema if c not in header]
    if missing:
        raise ValueError(
            f"Schema columns not found in {csv_path.name}: {missing}. "
            f"Columns found: {list(header)}"
        )

    return pd.read_csv(
        csv_path,
        usecols=list(schema),
        dtype=dict(schema),
        **read_csv_kwargs,
    )


def write_sample_table(csv_path: Path, n_rows: int = 10_000, seed: int = 42) -> Path:
    """
    Synthetic "posts" table used by the tips runner:
      post_id, user, group, score, likes, text
    """
    rng = np.random.default_rng(seed)
    users = np.array([f"user_{i:03d}" for i in range(50)])
    groups = np.array(["a", "b", "c", "d"])
    snippets = np.array([
        "@data_fan loving the new release #python",
        "Check THIS out!! https://example.com/post?id=1",
        "meeting moved to 3pm, see notes",
        "#rstats vs #python debate again...",
        "café open late tonight",
        "thanks @ops_team for the quick fix",
    ])

    df = pd.DataFrame({
        "post_id": np.arange(n_rows),
        "user": rng.choice(users, size=n_rows),
        "group": rng.choice(groups, size=n_rows),
        "score": rng.normal(loc=0.0, scale=1.0, size=n_rows).round(4),
        "likes": rng.poisson(lam=20, size=n_rows),
        "text": rng.choice(snippets, size=n_rows),
    })

    csv_path = Path(csv_path)
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(csv_path, index=False)
    return csv_path


def tokenize_column(
    df: pd.DataFrame,
    column: str = "text",
    case_mode: Union[CaseMode, str] = CaseMode.UNCHANGED,
    delimiter: str = " ",
    out_column: str = "tokens",
    show_progress: bool = False,
) -> pd.DataFrame:
    """Return a copy of `df` with a token list per row in `out_column`."""
    if column not in df.columns:
        raise KeyError(f"Column {column!r} not in DataFrame: {list(df.columns)}")

    pipeline = build_pipeline(case_mode, delimiter)
    texts = df[column].tolist()

    tokens = [
        pipeline.run(t)
        for t in tqdm(texts, total=len(texts), desc="tokenize", disable=not show_progress)
    ]

    out = df.copy()
    out[out_column] = tokens
    return out
