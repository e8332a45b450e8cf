"""Dataset loading: the iris teaching data and arbitrary delimited files."""
from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from sklearn import datasets as sk_datasets

from .config import IRIS_CSV, IRIS_GROUP, IRIS_NUMERIC
from .table import Table

logger = logging.getLogger(__name__)

# scikit-learn feature names -> R's iris column names
_SKLEARN_IRIS_COLUMNS = {
    "sepal length (cm)": "Sepal.Length",
    "sepal width (cm)": "Sepal.Width",
    "petal length (cm)": "Petal.Length",
    "petal width (cm)": "Petal.Width",
}


def load_iris(csv_path: Path | None = None) -> pd.DataFrame:
    """Load iris with R column names (150 rows, 4 numeric + Species).

    Reads ``csv_path`` (default ``config.IRIS_CSV``) when it exists,
    otherwise falls back to the copy bundled with scikit-learn.
    """
    path = Path(csv_path) if csv_path is not None else IRIS_CSV
    if path.exists():
        logger.info("Loading iris from %s", path)
        df = pd.read_csv(path)
        missing = [c for c in IRIS_NUMERIC + [IRIS_GROUP] if c not in df.columns]
        if missing:
            raise ValueError(f"{path} is missing iris columns: {missing}")
        return df[IRIS_NUMERIC + [IRIS_GROUP]]

    logger.info("Loading iris bundled with scikit-learn")
    bunch = sk_datasets.load_iris(as_frame=True)
    df = bunch.frame.rename(columns=_SKLEARN_IRIS_COLUMNS)
    df[IRIS_GROUP] = [str(bunch.target_names[t]) for t in df["target"]]
    return df[IRIS_NUMERIC + [IRIS_GROUP]].reset_index(drop=True)


def read_delimited(path: Path | str, sep: str = ",") -> pd.DataFrame:
    """Read a delimited text file into a DataFrame."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    df = pd.read_csv(path, sep=sep)
    logger.info("Read %s: %d rows x %d columns", path.name, *df.shape)
    return df


def read_table(path: Path | str, sep: str = ",") -> Table:
    """Read a delimited text file straight into a ``Table``."""
    return Table.from_frame(read_delimited(path, sep=sep))
