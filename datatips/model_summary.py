# datatips/model_summary.py

from __future__ import annotations

from typing import Any, Set

import numpy as np
import pandas as pd
import statsmodels.formula.api as smf

INTERCEPT = "Intercept"


def fit_ols(data: pd.DataFrame, formula: str):
    """Fit an OLS model from an R-style formula, e.g. "likes ~ score + C(group)"."""
    return smf.ols(formula, data=data).fit()


def tidy(fitted: Any, conf_level: float = 0.95) -> pd.DataFrame:
    """
    One row per model term instead of the printed summary table:
      term, estimate, std_error, statistic, p_value, conf_low, conf_high
    """
    if not 0.0 < conf_level < 1.0:
        raise ValueError(f"conf_level must be in (0, 1), got {conf_level}")

    conf = fitted.conf_int(alpha=1.0 - conf_level)
    conf = np.asarray(conf, dtype=float)

    params = pd.Series(fitted.params)
    return pd.DataFrame({
        "term": [str(t) for t in params.index],
        "estimate": params.to_numpy(dtype=float),
        "std_error": np.asarray(fitted.bse, dtype=float),
        "statistic": np.asarray(fitted.tvalues, dtype=float),
        "p_value": np.asarray(fitted.pvalues, dtype=float),
        "conf_low": conf[:, 0],
        "conf_high": conf[:, 1],
    })


def glance(fitted: Any) -> pd.DataFrame:
    """Model-level statistics as a single row."""
    return pd.DataFrame([{
        "r_squared": float(fitted.rsquared),
        "adj_r_squared": float(fitted.rsquared_adj),
        "f_statistic": float(fitted.fvalue),
        "f_p_value": float(fitted.f_pvalue),
        "aic": float(fitted.aic),
        "bic": float(fitted.bic),
        "nobs": int(fitted.nobs),
    }])


def extract_significant_terms(
    fitted: Any,
    alpha: float = 0.05,
    include_intercept: bool = False,
) -> Set[str]:
    """Names of the terms whose p-value is below `alpha`."""
    if not 0.0 < alpha < 1.0:
        raise ValueError(f"alpha must be in (0, 1), got {alpha}")

    df = tidy(fitted)
    mask = df["p_value"] < alpha
    if not include_intercept:
        mask &= df["term"] != INTERCEPT
    return set(df.loc[mask, "term"])
