# tests/test_wrangling.py

import pytest

from datatips.wrangling import group_mean_naive, query


def test_query_string_predicate_and_projection(small_frame):
    out = query(small_frame, predicate="likes > 10", projection=["post_id", "group"])
    assert list(out.columns) == ["post_id", "group"]
    assert out["post_id"].tolist() == [2, 3, 4, 6]
    assert list(out.index) == [0, 1, 2, 3]


def test_query_callable_predicate(small_frame):
    out = query(small_frame, predicate=lambda df: df["group"] == "b")
    assert out["post_id"].tolist() == [3, 4, 5]


def test_query_grouped_aggregation(small_frame):
    out = query(
        small_frame,
        predicate="likes > 10",
        grouping=["group"],
        aggregation={"mean_score": ("score", "mean"), "n": ("post_id", "count")},
    )
    assert out.to_dict("records") == [
        {"group": "a", "mean_score": 2.0, "n": 1},
        {"group": "b", "mean_score": 4.0, "n": 2},
        {"group": "c", "mean_score": -1.0, "n": 1},
    ]


def test_query_aggregation_without_grouping(small_frame):
    out = query(small_frame, aggregation={"total_likes": ("likes", "sum"), "max_score": ("score", "max")})
    assert len(out) == 1
    assert out["total_likes"].iloc[0] == 83
    assert out["max_score"].iloc[0] == 100.0


def test_query_grouping_requires_aggregation(small_frame):
    with pytest.raises(ValueError):
        query(small_frame, grouping=["group"])


def test_query_unknown_column(small_frame):
    with pytest.raises(KeyError):
        query(small_frame, projection=["nope"])


def test_naive_group_mean_matches_query(small_frame):
    rows = small_frame.to_dict("records")
    naive = group_mean_naive(rows, "group", "score")
    preferred = query(small_frame, grouping=["group"], aggregation={"m": ("score", "mean")})

    assert naive == pytest.approx(dict(zip(preferred["group"], preferred["m"])))
