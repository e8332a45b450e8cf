"""
Descriptive statistics & distribution tests.

Summarises every numeric column of a data frame:
- Summary statistics (n, mean, median, SD, CV, skewness, kurtosis)
- Per-group summary statistics (e.g. by Species)
- Shapiro-Wilk normality test for each column
"""

from pathlib import Path

import pandas as pd
import numpy as np
from scipy import stats

from .config import ALPHA, SEED, SHAPIRO_MAX_N, OUTPUT_DIR


def numeric_columns(df: pd.DataFrame, exclude=()) -> list[str]:
    """Numeric (non-bool) columns of ``df`` in their original order."""
    return [c for c in df.columns
            if c not in exclude
            and pd.api.types.is_numeric_dtype(df[c])
            and not pd.api.types.is_bool_dtype(df[c])]


def compute_descriptive_table(df: pd.DataFrame) -> pd.DataFrame:
    """Descriptive statistics for every numeric column."""
    rows = []
    for col in numeric_columns(df):
        s = df[col].dropna()
        mean = s.mean()
        rows.append({
            "Variable": col,
            "n": len(s),
            "Mean": round(mean, 3),
            "Median": round(s.median(), 3),
            "SD": round(s.std(), 3),
            "Min": round(s.min(), 3),
            "Max": round(s.max(), 3),
            "CV_%": round(s.std() / abs(mean) * 100, 1) if mean != 0 else np.nan,
            "Skewness": round(s.skew(), 3),
            "Kurtosis": round(s.kurtosis(), 3),
        })
    return pd.DataFrame(rows)


def descriptive_by_group(df: pd.DataFrame, group_col: str) -> pd.DataFrame:
    """Per-group descriptive statistics, one row per (group, variable)."""
    if group_col not in df.columns:
        raise ValueError(f"Unknown group column: {group_col}")
    rows = []
    for group, sub in df.groupby(group_col, sort=False):
        for col in numeric_columns(df, exclude={group_col}):
            s = sub[col].dropna()
            if len(s) == 0:
                continue
            rows.append({
                "Group": group,
                "Variable": col,
                "n": len(s),
                "Mean": round(s.mean(), 3),
                "Median": round(s.median(), 3),
                "SD": round(s.std(), 3),
            })
    return pd.DataFrame(rows)


def shapiro_wilk_tests(df: pd.DataFrame, alpha: float = ALPHA) -> pd.DataFrame:
    """Shapiro-Wilk normality test for each numeric column.

    Columns with more than SHAPIRO_MAX_N values are subsampled.
    Columns with fewer than 3 values are reported with NaN statistics.
    """
    rows = []
    for col in numeric_columns(df):
        s = df[col].dropna()
        n = len(s)
        if n < 3:
            rows.append({"Variable": col, "n": n, "W_statistic": np.nan,
                         "p_value": np.nan, "Normal_at_alpha": False})
            continue
        if n > SHAPIRO_MAX_N:
            s = s.sample(SHAPIRO_MAX_N, random_state=SEED)
        stat, p = stats.shapiro(s)
        rows.append({
            "Variable": col,
            "n": n,
            "W_statistic": round(float(stat), 4),
            "p_value": float(p),
            "Normal_at_alpha": bool(p >= alpha),
        })
    return pd.DataFrame(rows)


def run(df: pd.DataFrame, group_col: str | None = None,
        output_dir: Path = OUTPUT_DIR) -> dict[str, pd.DataFrame]:
    """Run all descriptive statistics analyses."""
    results = {
        "descriptive": compute_descriptive_table(df),
        "shapiro_wilk": shapiro_wilk_tests(df),
    }
    if group_col is not None:
        results["descriptive_by_group"] = descriptive_by_group(df, group_col)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_dir / "descriptive_stats.xlsx") as writer:
        for name, tbl in results.items():
            tbl.to_excel(writer, sheet_name=name, index=False)

    return results
