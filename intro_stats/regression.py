"""
Linear regression: ``lm(y ~ x)`` and ``lm(y ~ x1 + x2 + ...)``.

Simple regression uses scipy.stats.linregress; multiple regression fits an
ordinary least squares model with an intercept through statsmodels and
returns the coefficient table that ``summary(lm(...))`` prints in R.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd
import statsmodels.api as sm
from scipy import stats

from .config import OUTPUT_DIR, REGRESSION_PREDICTORS, REGRESSION_RESPONSE

logger = logging.getLogger(__name__)

INTERCEPT = "(Intercept)"


@dataclass
class RegressionResult:
    response: str
    predictors: list[str]
    coefficients: pd.DataFrame
    r_squared: float
    adj_r_squared: float
    f_statistic: float
    f_p_value: float
    n: int
    model: object = None

    def summary_row(self) -> dict:
        return {
            "Response": self.response,
            "Predictors": " + ".join(self.predictors),
            "n": self.n,
            "R2": round(self.r_squared, 4),
            "Adj_R2": round(self.adj_r_squared, 4),
            "F_statistic": round(self.f_statistic, 3),
            "F_p_value": self.f_p_value,
        }


def _check_columns(df: pd.DataFrame, cols: Sequence[str]):
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Unknown columns: {missing}")


def simple_regression(df: pd.DataFrame, x: str, y: str) -> dict:
    """Least-squares line ``y = intercept + slope * x`` (listwise complete)."""
    _check_columns(df, [x, y])
    valid = df[[x, y]].dropna()
    if len(valid) < 3:
        raise ValueError(f"Simple regression needs at least 3 complete rows, got {len(valid)}")
    res = stats.linregress(valid[x], valid[y])
    return {
        "x": x,
        "y": y,
        "n": len(valid),
        "slope": float(res.slope),
        "intercept": float(res.intercept),
        "r": float(res.rvalue),
        "r_squared": float(res.rvalue ** 2),
        "p_value": float(res.pvalue),
        "slope_stderr": float(res.stderr),
        "intercept_stderr": float(res.intercept_stderr),
    }


def multiple_regression(df: pd.DataFrame, y: str, predictors: Sequence[str]) -> RegressionResult:
    """OLS fit of ``y`` on ``predictors`` plus an intercept."""
    predictors = list(predictors)
    if not predictors:
        raise ValueError("At least one predictor is required")
    _check_columns(df, [y] + predictors)
    valid = df[[y] + predictors].dropna()
    n_params = len(predictors) + 1
    if len(valid) <= n_params:
        raise ValueError(
            f"{len(valid)} complete rows is not enough to fit {n_params} parameters"
        )

    X = sm.add_constant(valid[predictors].astype(float), has_constant="add")
    model = sm.OLS(valid[y].astype(float), X).fit()
    logger.debug("OLS %s ~ %s: R2=%.4f", y, " + ".join(predictors), model.rsquared)

    coefs = pd.DataFrame({
        "Term": [INTERCEPT if t == "const" else t for t in model.params.index],
        "Estimate": model.params.to_numpy(),
        "Std_Error": model.bse.to_numpy(),
        "t_value": model.tvalues.to_numpy(),
        "p_value": model.pvalues.to_numpy(),
    })
    return RegressionResult(
        response=y,
        predictors=predictors,
        coefficients=coefs,
        r_squared=float(model.rsquared),
        adj_r_squared=float(model.rsquared_adj),
        f_statistic=float(model.fvalue),
        f_p_value=float(model.f_pvalue),
        n=int(model.nobs),
        model=model,
    )


def predict(result: RegressionResult, new_df: pd.DataFrame) -> np.ndarray:
    """Predictions of a fitted ``multiple_regression`` for new rows."""
    _check_columns(new_df, result.predictors)
    est = result.coefficients.set_index("Term")["Estimate"]
    X = new_df[result.predictors].to_numpy(dtype=float)
    return est[INTERCEPT] + X @ est[result.predictors].to_numpy()


def run(df: pd.DataFrame, y: str = REGRESSION_RESPONSE,
        predictors: Sequence[str] = REGRESSION_PREDICTORS,
        output_dir: Path = OUTPUT_DIR) -> dict:
    """One simple regression per predictor plus the joint model."""
    predictors = list(predictors)
    simple = pd.DataFrame([simple_regression(df, x, y) for x in predictors])
    multi = multiple_regression(df, y, predictors)

    results = {
        "simple": simple,
        "multiple_coefficients": multi.coefficients,
        "multiple_summary": pd.DataFrame([multi.summary_row()]),
        "multiple_result": multi,
    }

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_dir / "regression.xlsx") as writer:
        simple.to_excel(writer, sheet_name="simple", index=False)
        multi.coefficients.to_excel(writer, sheet_name="multiple_coefficients", index=False)
        results["multiple_summary"].to_excel(writer, sheet_name="multiple_summary", index=False)

    return results
