"""Errors raised by the standardization layer."""

from __future__ import annotations


class StandardizationError(ValueError):
    """Base class: the input cannot be standardized as given."""


class EmptyTableError(StandardizationError):
    """Raised when a table (or column) has zero rows."""

    def __init__(self, message: str = "table has no rows; nothing to standardize"):
        super().__init__(message)


class DegenerateColumnError(StandardizationError):
    """Raised when a numeric column has zero (or undefined) standard deviation."""

    def __init__(self, column: str | None, reason: str = "standard deviation is zero"):
        self.column = column
        self.reason = reason
        label = repr(column) if column is not None else "<unnamed>"
        super().__init__(f"cannot standardize column {label}: {reason}")


class TypeMismatchError(StandardizationError):
    """Raised when a column mixes numeric and non-numeric entries,
    or when a numeric operation is given a column with no numbers at all."""

    def __init__(self, column: str | None, detail: str = "", mixed: bool = True):
        self.column = column
        self.mixed = mixed
        label = repr(column) if column is not None else "<unnamed>"
        if mixed:
            msg = f"column {label} mixes numeric and non-numeric values"
        else:
            msg = f"column {label} is not numeric"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)
