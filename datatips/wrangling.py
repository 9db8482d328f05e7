# datatips/wrangling.py

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

Predicate = Union[str, Callable[[pd.DataFrame], Any]]
Aggregation = Mapping[str, Tuple[str, Union[str, Callable]]]


def group_mean_naive(rows: Iterable[Mapping[str, Any]], key: str, value: str) -> Dict[Any, float]:
    """The naive way: loop over dict rows and keep running sums per key."""
    sums: Dict[Any, float] = defaultdict(float)
    counts: Dict[Any, int] = defaultdict(int)
    for row in rows:
        k = row[key]
        sums[k] += float(row[value])
        counts[k] += 1
    return {k: sums[k] / counts[k] for k in sums}


def query(
    dataset: pd.DataFrame,
    predicate: Optional[Predicate] = None,
    projection: Optional[Sequence[str]] = None,
    grouping: Optional[Sequence[str]] = None,
    aggregation: Optional[Aggregation] = None,
) -> pd.DataFrame:
    """
    filter -> group/aggregate -> select, in one call.

      predicate   - DataFrame.query string ("likes > 10") or a callable
                    returning a boolean mask
      grouping    - columns to group by (needs `aggregation`)
      aggregation - {out_name: (column, func)}, pandas named aggregation
      projection  - output columns to keep, applied last
    """
    df = dataset

    if predicate is not None:
        if isinstance(predicate, str):
            df = df.query(predicate)
        else:
            df = df.loc[predicate(df)]

    if grouping and not aggregation:
        raise ValueError("grouping requires an aggregation")

    if aggregation:
        if grouping:
            df = (
                df.groupby(list(grouping), observed=True)
                .agg(**{name: pd.NamedAgg(column=col, aggfunc=func) for name, (col, func) in aggregation.items()})
                .reset_index()
            )
        else:
            df = pd.DataFrame({name: [df[col].agg(func)] for name, (col, func) in aggregation.items()})

    if projection is not None:
        df = df[list(projection)]

    return df.reset_index(drop=True)
