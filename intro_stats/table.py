"""
Table model: an ordered collection of named, equal-length columns.

Each column is tagged once, when the table is built, as either
``NumericColumn`` (float64 values, eligible for standardization) or
``TextColumn`` (any non-numeric values, passed through untouched).
Later operations branch on the tag instead of re-inferring types.
"""
from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass, field
from typing import ClassVar, Hashable, Iterable, Mapping, Union

import numpy as np
import pandas as pd

from .errors import TypeMismatchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class NumericColumn:
    name: Hashable
    values: np.ndarray
    is_numeric: ClassVar[bool] = True

    def __post_init__(self):
        arr = np.array(self.values, dtype=float)
        arr.setflags(write=False)
        object.__setattr__(self, "values", arr)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True, eq=False)
class TextColumn:
    name: Hashable
    values: tuple = field(default_factory=tuple)
    is_numeric: ClassVar[bool] = False

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))

    def __len__(self) -> int:
        return len(self.values)


Column = Union[NumericColumn, TextColumn]


def is_missing(value) -> bool:
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def _to_series(values: Iterable) -> pd.Series:
    values = list(values)
    # An empty list has no dtype to infer
    return pd.Series(values, dtype=object if not values else None)


def classify_series(name: Hashable, series: pd.Series) -> Column:
    """Tag a pandas column as numeric or text.

    bool, string, categorical and datetime dtypes are text. Numeric dtypes
    are numeric. Object columns are inspected value by value: missing
    entries are ignored, all-real-number columns become numeric, and a mix
    of numbers and non-numbers raises ``TypeMismatchError``.
    """
    if pd.api.types.is_bool_dtype(series):
        return TextColumn(name, series.tolist())
    if pd.api.types.is_numeric_dtype(series) and not pd.api.types.is_complex_dtype(series):
        return NumericColumn(name, series.to_numpy(dtype=float, na_value=np.nan))
    if series.dtype != object:
        return TextColumn(name, series.tolist())

    present = [v for v in series.tolist() if not is_missing(v)]
    n_real = sum(_is_real(v) for v in present)
    if present and n_real == len(present):
        values = [np.nan if is_missing(v) else float(v) for v in series.tolist()]
        return NumericColumn(name, values)
    if n_real:
        raise TypeMismatchError(
            name, f"{n_real} numeric and {len(present) - n_real} non-numeric entries"
        )
    return TextColumn(name, series.tolist())


@dataclass(frozen=True, eq=False)
class Table:
    columns: tuple = ()

    def __post_init__(self):
        cols = tuple(self.columns)
        names = [c.name for c in cols]
        dupes = sorted({str(n) for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"Duplicate column names: {dupes}")
        lengths = {len(c) for c in cols}
        if len(lengths) > 1:
            raise ValueError(f"Columns have unequal lengths: {sorted(lengths)}")
        object.__setattr__(self, "columns", cols)

    # ── Construction ────────────────────────────────────────────────
    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "Table":
        """Build a Table from a DataFrame, classifying every column once.

        Column labels are kept as they are, so ``1`` and ``"1"`` stay distinct.
        """
        if not df.columns.is_unique:
            dupes = sorted({str(c) for c in df.columns[df.columns.duplicated()]})
            raise ValueError(f"Duplicate column names: {dupes}")
        columns = [classify_series(name, df[name]) for name in df.columns]
        table = cls(tuple(columns))
        logger.debug(
            "Built table: %d rows, numeric=%s, text=%s",
            table.n_rows, table.numeric_names, table.text_names,
        )
        return table

    @classmethod
    def from_dict(cls, data: Mapping[str, Iterable]) -> "Table":
        """Build a Table from ``{name: values}`` (column order preserved)."""
        series = {name: _to_series(values) for name, values in data.items()}
        return cls.from_frame(pd.DataFrame(series))

    def to_frame(self) -> pd.DataFrame:
        """Rebuild a DataFrame with the same column names and order."""
        data = {}
        for col in self.columns:
            if col.is_numeric:
                data[col.name] = np.array(col.values, dtype=float)
            else:
                data[col.name] = _to_series(col.values)
        return pd.DataFrame(data, columns=self.names)

    # ── Accessors ───────────────────────────────────────────────────
    @property
    def names(self) -> list[str]:
        return [c.name for c in self.columns]

    @property
    def numeric_names(self) -> list[str]:
        return [c.name for c in self.columns if c.is_numeric]

    @property
    def text_names(self) -> list[str]:
        return [c.name for c in self.columns if not c.is_numeric]

    @property
    def n_rows(self) -> int:
        return len(self.columns[0]) if self.columns else 0

    @property
    def shape(self) -> tuple[int, int]:
        return self.n_rows, len(self.columns)

    def column(self, name: str) -> Column:
        for col in self.columns:
            if col.name == name:
                return col
        raise KeyError(name)

    def replace_column(self, column: Column) -> "Table":
        """Return a new Table with the same-named column swapped in."""
        if column.name not in self.names:
            raise KeyError(column.name)
        return Table(tuple(column if c.name == column.name else c for c in self.columns))

    def __len__(self) -> int:
        return self.n_rows

    def __repr__(self) -> str:
        return f"Table(n_rows={self.n_rows}, columns={self.names})"
