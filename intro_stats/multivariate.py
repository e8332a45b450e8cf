"""
Multivariate analysis: PCA and k-means clustering.

Both work on the numeric columns after z-score standardization with
``standardize_frame``; without it PCA and k-means are dominated by the
columns with the largest spread. Non-numeric columns (e.g. Species) are
carried alongside the scores so they can be used to colour plots or to
cross-tabulate clusters.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd
from sklearn.cluster import KMeans
from sklearn.decomposition import PCA

from .config import N_CLUSTERS, OUTPUT_DIR, SEED
from .standardize import standardize_frame
from .table import Table

logger = logging.getLogger(__name__)


@dataclass
class PCAResult:
    scores: pd.DataFrame
    loadings: pd.DataFrame
    explained: pd.DataFrame


@dataclass
class KMeansResult:
    labels: pd.Series
    centers: pd.DataFrame
    inertia: float
    n_iter: int


def _standardized_numeric(df: pd.DataFrame) -> tuple[pd.DataFrame, list[str], list[str]]:
    """Complete rows of ``df`` with numeric columns standardized."""
    table = Table.from_frame(df)
    numeric = table.numeric_names
    passthrough = table.text_names
    if len(numeric) < 2:
        raise ValueError(f"Need at least 2 numeric columns, got {numeric}")
    complete = df.dropna(subset=numeric)
    dropped = len(df) - len(complete)
    if dropped:
        logger.warning("Dropping %d row(s) with missing numeric values", dropped)
    return standardize_frame(complete), numeric, passthrough


def run_pca(df: pd.DataFrame, n_components: int | None = None,
            random_state: int = SEED) -> PCAResult:
    """Principal components of the standardized numeric columns.

    Args:
        df: input frame; numeric columns are analysed, others carried over
        n_components: number of components (default: all)
        random_state: seed for the randomized solver

    Returns:
        PCAResult with scores (PC1..PCk + passthrough columns), loadings
        (variables x components) and explained variance per component.
    """
    z, numeric, passthrough = _standardized_numeric(df)
    k = min(n_components or len(numeric), len(numeric), len(z))
    pca = PCA(n_components=k, random_state=random_state)
    scores = pca.fit_transform(z[numeric].to_numpy())

    pcs = [f"PC{i + 1}" for i in range(k)]
    scores_df = pd.DataFrame(scores, columns=pcs, index=z.index)
    for col in passthrough:
        scores_df[col] = z[col]

    loadings = pd.DataFrame(pca.components_.T, index=numeric, columns=pcs)
    sd = np.sqrt(pca.explained_variance_)
    explained = pd.DataFrame({
        "Component": pcs,
        "Standard_deviation": sd,
        "Proportion_of_variance": pca.explained_variance_ratio_,
        "Cumulative_proportion": np.cumsum(pca.explained_variance_ratio_),
    })
    logger.info("PCA: %d components explain %.1f%% of variance",
                k, 100 * explained["Cumulative_proportion"].iloc[-1])
    return PCAResult(scores=scores_df, loadings=loadings, explained=explained)


def run_kmeans(df: pd.DataFrame, n_clusters: int = N_CLUSTERS,
               random_state: int = SEED) -> KMeansResult:
    """k-means on the standardized numeric columns (10 random restarts)."""
    z, numeric, _ = _standardized_numeric(df)
    if not 1 <= n_clusters <= len(z):
        raise ValueError(f"n_clusters must be between 1 and {len(z)}, got {n_clusters}")
    km = KMeans(n_clusters=n_clusters, n_init=10, random_state=random_state)
    labels = km.fit_predict(z[numeric].to_numpy())

    centers = pd.DataFrame(km.cluster_centers_, columns=numeric)
    centers.index.name = "Cluster"
    return KMeansResult(
        labels=pd.Series(labels, index=z.index, name="Cluster"),
        centers=centers,
        inertia=float(km.inertia_),
        n_iter=int(km.n_iter_),
    )


def cluster_crosstab(labels: pd.Series, groups: pd.Series) -> pd.DataFrame:
    """Contingency table: clusters (rows) x known groups (columns)."""
    groups = groups.loc[labels.index]
    return pd.crosstab(labels.rename("Cluster"), groups)


def run(df: pd.DataFrame, group_col: str | None = None,
        n_clusters: int = N_CLUSTERS, output_dir: Path = OUTPUT_DIR) -> dict:
    """PCA + k-means, cross-tabulated against ``group_col`` when given."""
    pca = run_pca(df)
    km = run_kmeans(df, n_clusters=n_clusters)

    results = {
        "pca": pca,
        "pca_scores": pca.scores,
        "pca_loadings": pca.loadings,
        "pca_explained": pca.explained,
        "kmeans": km,
        "kmeans_centers": km.centers,
    }
    if group_col is not None:
        results["cluster_crosstab"] = cluster_crosstab(km.labels, df[group_col])

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_dir / "multivariate.xlsx") as writer:
        pca.explained.to_excel(writer, sheet_name="pca_explained", index=False)
        pca.loadings.to_excel(writer, sheet_name="pca_loadings")
        km.centers.to_excel(writer, sheet_name="kmeans_centers")
        if "cluster_crosstab" in results:
            results["cluster_crosstab"].to_excel(writer, sheet_name="cluster_crosstab")

    return results
