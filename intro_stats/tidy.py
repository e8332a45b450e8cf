"""
Tidy reshaping helpers (gather / spread / group_by + summarise).

Thin wrappers over ``DataFrame.melt`` / ``DataFrame.pivot`` /
``groupby().agg`` that keep row and column order predictable so a
long table can be turned back into the original wide one.
"""
from __future__ import annotations

from typing import Sequence

import pandas as pd

ROW_ID = "row_id"


def _check_columns(df: pd.DataFrame, cols: Sequence[str]):
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Unknown columns: {missing}")


def to_long(
    df: pd.DataFrame,
    id_cols: Sequence[str] = (),
    var_name: str = "variable",
    value_name: str = "value",
) -> pd.DataFrame:
    """Wide -> long: one (id, variable, value) row per cell.

    With no ``id_cols`` a ``row_id`` column is added so every cell keeps
    track of the row it came from.
    """
    id_cols = list(id_cols)
    _check_columns(df, id_cols)
    wide = df.reset_index(drop=True)
    if not id_cols:
        wide = wide.assign(**{ROW_ID: range(len(wide))})
        id_cols = [ROW_ID]
    value_cols = [c for c in wide.columns if c not in id_cols]
    long = wide.melt(id_vars=id_cols, value_vars=value_cols,
                     var_name=var_name, value_name=value_name)
    # melt stacks column by column; reorder to row-major like tidyr
    long["_order"] = long.groupby(var_name, sort=False).cumcount()
    long[var_name] = pd.Categorical(long[var_name], categories=value_cols, ordered=True)
    long = long.sort_values(["_order", var_name], kind="stable").drop(columns="_order")
    long[var_name] = long[var_name].astype(object)
    return long.reset_index(drop=True)


def to_wide(
    long_df: pd.DataFrame,
    id_cols: Sequence[str],
    var_name: str = "variable",
    value_name: str = "value",
) -> pd.DataFrame:
    """Long -> wide: one column per distinct value of ``var_name``.

    Variables keep their first-seen order. Duplicate (id, variable) pairs
    raise ``ValueError``.
    """
    id_cols = list(id_cols)
    _check_columns(long_df, id_cols + [var_name, value_name])
    dupes = long_df.duplicated(subset=id_cols + [var_name])
    if dupes.any():
        raise ValueError(
            f"{int(dupes.sum())} duplicate (id, {var_name}) pairs; cannot spread"
        )
    var_order = list(dict.fromkeys(long_df[var_name]))
    wide = long_df.pivot(index=id_cols, columns=var_name, values=value_name)
    wide = wide[var_order].reset_index()
    wide.columns.name = None
    if id_cols == [ROW_ID]:
        wide = wide.sort_values(ROW_ID).drop(columns=ROW_ID).reset_index(drop=True)
    return wide


def summarise_by_group(
    df: pd.DataFrame,
    group_col: str,
    funcs: Sequence[str] = ("mean", "std"),
) -> pd.DataFrame:
    """One row per group; columns ``<col>_<func>`` for each numeric column."""
    _check_columns(df, [group_col])
    numeric = [c for c in df.select_dtypes("number").columns if c != group_col]
    agg = df.groupby(group_col, sort=False)[numeric].agg(list(funcs))
    agg.columns = [f"{col}_{func}" for col, func in agg.columns]
    counts = df.groupby(group_col, sort=False).size().rename("n")
    return pd.concat([counts, agg], axis=1).reset_index()
