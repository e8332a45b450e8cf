"""Shared configuration for the tutorial analysis modules."""

from pathlib import Path

# ── Paths ──────────────────────────────────────────────────────────
ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT / "data"
IRIS_CSV = DATA_DIR / "iris.csv"
OUTPUT_DIR = Path(__file__).resolve().parent / "output"

# ── Iris teaching dataset ──────────────────────────────────────────
# Column names follow R's built-in `iris` data frame
IRIS_NUMERIC = ["Sepal.Length", "Sepal.Width", "Petal.Length", "Petal.Width"]
IRIS_GROUP = "Species"
IRIS_SPECIES = ["setosa", "versicolor", "virginica"]

# Display names for plots / tables
IRIS_LABELS = {
    "Sepal.Length": "Sepal length, cm",
    "Sepal.Width": "Sepal width, cm",
    "Petal.Length": "Petal length, cm",
    "Petal.Width": "Petal width, cm",
}

# Response / predictors used by the regression walkthrough
REGRESSION_RESPONSE = "Petal.Length"
REGRESSION_PREDICTORS = ["Petal.Width", "Sepal.Length"]

# ── Statistical parameters ─────────────────────────────────────────
ALPHA = 0.05
SEED = 42
# Sample standard deviation (N - 1), as in R's sd() and scale()
DDOF = 1
TOLERANCE = 1e-9
N_CLUSTERS = 3
# scipy's Shapiro-Wilk p-value is only accurate up to 5000 samples
SHAPIRO_MAX_N = 5000
