# tests/conftest.py

from pathlib import Path

import pandas as pd
import pytest

from datatips.dataset import write_sample_table
from datatips.settings import settings


@pytest.fixture(scope="session")
def sample_csv(tmp_path_factory) -> Path:
    """
    Synthetic posts table written once per test session:
      post_id, user, group, score, likes, text
    """
    path = tmp_path_factory.mktemp("data") / "sample_posts.csv"
    write_sample_table(path, n_rows=300, seed=7)
    assert path.exists(), "sample CSV should exist after writing"
    return path


@pytest.fixture()
def small_frame() -> pd.DataFrame:
    return pd.DataFrame({
        "post_id": [1, 2, 3, 4, 5, 6],
        "group": ["a", "a", "b", "b", "b", "c"],
        "likes": [5, 20, 15, 30, 1, 12],
        "score": [1.0, 2.0, 3.0, 5.0, 100.0, -1.0],
    })


@pytest.fixture(autouse=True)
def isolated_cache_dir(tmp_path, monkeypatch):
    """Keep joblib caches out of the project tree."""
    monkeypatch.setattr(settings, "cache_dir", tmp_path / "cache")
    yield
