# tests/test_model_summary.py

import numpy as np
import pandas as pd
import pytest

from datatips.model_summary import extract_significant_terms, fit_ols, glance, tidy


@pytest.fixture(scope="module")
def fitted():
    rng = np.random.default_rng(123)
    n = 500
    data = pd.DataFrame({
        "x1": rng.normal(size=n),
        "x2": rng.normal(size=n),
    })
    data["y"] = 3.0 * data["x1"] + rng.normal(scale=1.0, size=n)
    return fit_ols(data, "y ~ x1 + x2")


def test_tidy_has_one_row_per_term(fitted):
    df = tidy(fitted)
    assert list(df.columns) == [
        "term", "estimate", "std_error", "statistic", "p_value", "conf_low", "conf_high",
    ]
    assert df["term"].tolist() == ["Intercept", "x1", "x2"]
    assert (df["conf_low"] <= df["estimate"]).all()
    assert (df["estimate"] <= df["conf_high"]).all()

    x1 = df.set_index("term").loc["x1"]
    assert x1["estimate"] == pytest.approx(3.0, abs=0.2)


def test_wider_confidence_level_widens_interval(fitted):
    narrow = tidy(fitted, conf_level=0.90).set_index("term")
    wide = tidy(fitted, conf_level=0.99).set_index("term")
    assert (wide["conf_high"] - wide["conf_low"] > narrow["conf_high"] - narrow["conf_low"]).all()

    with pytest.raises(ValueError):
        tidy(fitted, conf_level=1.5)


def test_glance_is_single_row(fitted):
    df = glance(fitted)
    assert len(df) == 1
    assert df["nobs"].iloc[0] == 500
    assert 0.0 <= df["r_squared"].iloc[0] <= 1.0


def test_extract_significant_terms(fitted):
    assert extract_significant_terms(fitted, alpha=0.001) == {"x1"}


def test_extract_significant_terms_alpha_bounds(fitted):
    for alpha in (0.0, 1.0, -0.1):
        with pytest.raises(ValueError):
            extract_significant_terms(fitted, alpha=alpha)
