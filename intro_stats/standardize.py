"""
Column-wise standardization (z-scores).

Each numeric column is rescaled to (v - mean) / SD with the sample standard
deviation (N - 1 denominator, as R's ``sd()`` and ``scale()`` use). Text
columns are passed through unchanged. Missing values stay missing and are
ignored when computing the mean and SD.

Every numeric column is checked before any column is transformed, so a
degenerate column never leaves a half-standardized table behind.
"""
from __future__ import annotations

import logging
from typing import Iterable

import numpy as np
import pandas as pd

from .config import DDOF, TOLERANCE
from .errors import DegenerateColumnError, EmptyTableError, TypeMismatchError
from .table import NumericColumn, Table, classify_series, is_missing

logger = logging.getLogger(__name__)


def _as_float_array(values, name: str | None) -> np.ndarray:
    if isinstance(values, NumericColumn):
        return values.values
    if isinstance(values, np.ndarray) and values.dtype.kind in "fiu":
        return values.astype(float)
    if not isinstance(values, pd.Series):
        values = pd.Series(list(values), dtype=object)
    column = classify_series(name or "", values)
    if not column.is_numeric:
        # empty or all-missing: let the caller report it as empty / degenerate
        if all(is_missing(v) for v in column.values):
            return np.full(len(column), np.nan)
        raise TypeMismatchError(name, mixed=False)
    return column.values


def _column_moments(values: np.ndarray, ddof: int, name: str | None) -> tuple[float, float]:
    """Mean and SD of the non-missing values; raises if SD is unusable."""
    present = values[~np.isnan(values)]
    if present.size < 2:
        raise DegenerateColumnError(
            name, f"needs at least 2 non-missing values, got {present.size}"
        )
    # all-identical values can still give a tiny non-zero SD from rounding
    if present.max() == present.min():
        raise DegenerateColumnError(name)
    # scale to |v| <= 1 so squared deviations cannot overflow
    scale = float(np.abs(present).max())
    scaled = present / scale
    mu = float(scaled.mean()) * scale
    sigma = float(scaled.std(ddof=ddof)) * scale
    if sigma == 0.0:
        raise DegenerateColumnError(name)
    if not np.isfinite(sigma):
        raise DegenerateColumnError(name, "standard deviation is not finite")
    return mu, sigma


def standardize_column(values: Iterable, ddof: int = DDOF, name: str | None = None) -> np.ndarray:
    """Return ``(v - mean) / SD`` for a sequence of numbers.

    Args:
        values: numeric sequence (list, array, Series or ``NumericColumn``);
            ``None`` / NaN entries are kept as NaN.
        ddof: delta degrees of freedom for the SD (1 = sample, 0 = population).
        name: column name reported in errors.

    Raises:
        EmptyTableError: no values at all.
        DegenerateColumnError: fewer than 2 non-missing values or zero SD.
        TypeMismatchError: the sequence contains non-numeric entries.
    """
    if name is None and isinstance(values, (NumericColumn, pd.Series)):
        name = values.name
    arr = _as_float_array(values, name)
    if arr.size == 0:
        raise EmptyTableError(f"column {name!r} has no values; nothing to standardize")
    mu, sigma = _column_moments(arr, ddof, name)
    return (arr - mu) / sigma


def standardize_table(table: Table, ddof: int = DDOF) -> Table:
    """Standardize every numeric column of ``table``; return a new Table.

    Text columns are carried over as-is. The input table is not modified.
    """
    if table.n_rows == 0:
        raise EmptyTableError()

    moments = {}
    for col in table.columns:
        if col.is_numeric:
            moments[col.name] = _column_moments(col.values, ddof, col.name)

    columns = []
    for col in table.columns:
        if col.is_numeric:
            mu, sigma = moments[col.name]
            logger.debug("Standardizing %s: mean=%.6g, sd=%.6g", col.name, mu, sigma)
            columns.append(NumericColumn(col.name, (col.values - mu) / sigma))
        else:
            columns.append(col)

    logger.info(
        "Standardized %d numeric column(s) over %d rows; %d passed through",
        len(moments), table.n_rows, len(columns) - len(moments),
    )
    return Table(tuple(columns))


def standardize_frame(df: pd.DataFrame, ddof: int = DDOF) -> pd.DataFrame:
    """DataFrame front-end to ``standardize_table``.

    Index, column order and the dtypes of non-numeric columns are kept.
    """
    table = standardize_table(Table.from_frame(df), ddof=ddof)
    out = df.copy()
    for orig_name, col in zip(df.columns, table.columns):
        if col.is_numeric:
            out[orig_name] = np.array(col.values)
    return out


def standardization_summary(
    table: Table, ddof: int = DDOF, tolerance: float = TOLERANCE
) -> pd.DataFrame:
    """Mean and SD of each numeric column, flagged against 0 and 1."""
    rows = []
    for col in table.columns:
        if not col.is_numeric:
            continue
        present = col.values[~np.isnan(col.values)]
        mean = float(present.mean()) if present.size else np.nan
        sd = float(present.std(ddof=ddof)) if present.size > ddof else np.nan
        rows.append({
            "Column": col.name,
            "n": int(present.size),
            "Mean": mean,
            "SD": sd,
            "mean_is_zero": bool(abs(mean) < tolerance),
            "sd_is_one": bool(abs(sd - 1.0) < tolerance),
        })
    return pd.DataFrame(rows, columns=["Column", "n", "Mean", "SD", "mean_is_zero", "sd_is_one"])
