"""
Visualization module: all plots for the tutorial walkthrough.

Generates:
1. Heatmap of standardized values (rows x variables)
2. Correlation heatmap between numeric variables
3. Scatter plot coloured by group
4. Boxplots of each numeric variable by group
5. PCA score plot (PC1 vs PC2) with explained variance on the axes
6. Regression fit (scatter + least-squares line)
"""

from pathlib import Path

import pandas as pd
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns

from .config import OUTPUT_DIR, IRIS_LABELS
from .descriptive_stats import numeric_columns

# Global plot style
plt.rcParams.update({
    "figure.dpi": 150,
    "savefig.dpi": 300,
    "savefig.bbox": "tight",
    "font.size": 10,
    "axes.titlesize": 12,
    "axes.labelsize": 11,
})


def _save(fig, name: str, output_dir: Path = OUTPUT_DIR) -> Path:
    """Save figure to the plots sub-directory and close it."""
    out = Path(output_dir) / "plots"
    out.mkdir(parents=True, exist_ok=True)
    path = out / f"{name}.png"
    fig.savefig(path)
    plt.close(fig)
    return path


def _label(col: str) -> str:
    return IRIS_LABELS.get(col, col)


# ──────────────────────────────────────────────────────────────────
# 1. Standardized-value heatmap
# ──────────────────────────────────────────────────────────────────
def plot_standardized_heatmap(z_df: pd.DataFrame, group_col: str | None = None,
                              output_dir: Path = OUTPUT_DIR) -> Path:
    """Heatmap of z-scores; rows sorted by group when one is given."""
    data = z_df.sort_values(group_col, kind="stable") if group_col else z_df
    cols = numeric_columns(data, exclude={group_col} if group_col else ())
    fig, ax = plt.subplots(figsize=(6, 10))
    sns.heatmap(
        data[cols].to_numpy(), cmap="RdBu_r", center=0,
        xticklabels=cols, yticklabels=False, ax=ax,
        cbar_kws={"label": "z-score"},
    )
    if group_col:
        # Mark group boundaries
        sizes = data.groupby(group_col, sort=False).size().to_numpy()
        bounds = np.cumsum(sizes)[:-1]
        for b in bounds:
            ax.axhline(b, color="black", lw=1)
    ax.set_title("Standardized values")
    fig.tight_layout()
    return _save(fig, "01_standardized_heatmap", output_dir)


# ──────────────────────────────────────────────────────────────────
# 2. Correlation heatmap
# ──────────────────────────────────────────────────────────────────
def plot_correlation_heatmap(df: pd.DataFrame, method: str = "pearson",
                             output_dir: Path = OUTPUT_DIR) -> Path:
    """Lower-triangle correlation heatmap for numeric variables."""
    corr = df[numeric_columns(df)].corr(method=method)
    mask = np.triu(np.ones_like(corr, dtype=bool), k=1)
    labels = [_label(c) for c in corr.index]

    fig, ax = plt.subplots(figsize=(7, 6))
    sns.heatmap(
        corr.values, mask=mask, annot=True, fmt=".2f",
        xticklabels=labels, yticklabels=labels,
        cmap="RdBu_r", center=0, vmin=-1, vmax=1,
        ax=ax, square=True, linewidths=0.5,
    )
    ax.set_title(f"{method.capitalize()} correlations")
    fig.tight_layout()
    return _save(fig, "02_correlation_heatmap", output_dir)


# ──────────────────────────────────────────────────────────────────
# 3. Grouped scatter plot
# ──────────────────────────────────────────────────────────────────
def plot_scatter(df: pd.DataFrame, x: str, y: str, group_col: str | None = None,
                 output_dir: Path = OUTPUT_DIR) -> Path:
    """Scatter plot of ``y`` vs ``x`` coloured by ``group_col``."""
    fig, ax = plt.subplots(figsize=(7, 5))
    sns.scatterplot(data=df, x=x, y=y, hue=group_col, ax=ax, s=30, alpha=0.8)
    ax.set_xlabel(_label(x))
    ax.set_ylabel(_label(y))
    ax.set_title(f"{_label(y)} vs {_label(x)}")
    fig.tight_layout()
    return _save(fig, f"03_scatter_{x}_{y}".replace(".", "_"), output_dir)


# ──────────────────────────────────────────────────────────────────
# 4. Boxplots by group
# ──────────────────────────────────────────────────────────────────
def plot_boxplots(df: pd.DataFrame, group_col: str,
                  output_dir: Path = OUTPUT_DIR) -> Path:
    """One boxplot panel per numeric variable, split by group."""
    cols = numeric_columns(df, exclude={group_col})
    ncols = min(len(cols), 2) or 1
    nrows = int(np.ceil(len(cols) / ncols)) or 1
    fig, axes = plt.subplots(nrows, ncols, figsize=(6 * ncols, 4 * nrows), squeeze=False)
    axes = axes.ravel()
    for ax, col in zip(axes, cols):
        sns.boxplot(data=df, x=group_col, y=col, ax=ax, color="lightsteelblue")
        ax.set_ylabel(_label(col))
        ax.set_xlabel("")
    for ax in axes[len(cols):]:
        ax.set_visible(False)
    fig.suptitle(f"Distribution by {group_col}", fontsize=14, y=1.02)
    fig.tight_layout()
    return _save(fig, "04_boxplots", output_dir)


# ──────────────────────────────────────────────────────────────────
# 5. PCA score plot
# ──────────────────────────────────────────────────────────────────
def plot_pca_scores(scores: pd.DataFrame, explained: pd.DataFrame,
                    group_col: str | None = None,
                    output_dir: Path = OUTPUT_DIR) -> Path:
    """PC1 vs PC2 with the proportion of variance on each axis."""
    pct = (explained["Proportion_of_variance"] * 100).round(1).tolist()
    fig, ax = plt.subplots(figsize=(7, 5))
    sns.scatterplot(data=scores, x="PC1", y="PC2", hue=group_col, ax=ax, s=30)
    ax.axhline(0, color="grey", lw=0.5)
    ax.axvline(0, color="grey", lw=0.5)
    ax.set_xlabel(f"PC1 ({pct[0]}%)")
    ax.set_ylabel(f"PC2 ({pct[1]}%)" if len(pct) > 1 else "PC2")
    ax.set_title("PCA of standardized variables")
    fig.tight_layout()
    return _save(fig, "05_pca_scores", output_dir)


# ──────────────────────────────────────────────────────────────────
# 6. Regression fit
# ──────────────────────────────────────────────────────────────────
def plot_regression(df: pd.DataFrame, fit: dict, output_dir: Path = OUTPUT_DIR) -> Path:
    """Scatter of a simple regression with its fitted line."""
    x, y = fit["x"], fit["y"]
    fig, ax = plt.subplots(figsize=(7, 5))
    ax.scatter(df[x], df[y], s=20, alpha=0.6, color="steelblue")
    xs = np.linspace(df[x].min(), df[x].max(), 100)
    ax.plot(xs, fit["intercept"] + fit["slope"] * xs, color="darkred", lw=2)
    ax.text(0.03, 0.95,
            f"y = {fit['intercept']:.3f} + {fit['slope']:.3f}x\n"
            f"R² = {fit['r_squared']:.3f}, n = {fit['n']}",
            transform=ax.transAxes, va="top", fontsize=9,
            bbox=dict(boxstyle="round", facecolor="wheat", alpha=0.5))
    ax.set_xlabel(_label(x))
    ax.set_ylabel(_label(y))
    ax.set_title("Linear regression")
    fig.tight_layout()
    return _save(fig, f"06_regression_{x}_{y}".replace(".", "_"), output_dir)


def run_all_plots(df: pd.DataFrame, group_col: str | None = None,
                  z_df: pd.DataFrame | None = None,
                  pca_scores: pd.DataFrame | None = None,
                  pca_explained: pd.DataFrame | None = None,
                  simple_fits: pd.DataFrame | None = None,
                  output_dir: Path = OUTPUT_DIR) -> list[Path]:
    """Render every plot whose inputs were provided."""
    paths = []
    cols = numeric_columns(df, exclude={group_col} if group_col else ())

    if z_df is not None:
        paths.append(plot_standardized_heatmap(z_df, group_col, output_dir))
    if len(cols) >= 2:
        paths.append(plot_correlation_heatmap(df, output_dir=output_dir))
        paths.append(plot_scatter(df, cols[-2], cols[-1], group_col, output_dir))
    if group_col is not None and cols:
        paths.append(plot_boxplots(df, group_col, output_dir))
    if pca_scores is not None and pca_explained is not None:
        paths.append(plot_pca_scores(pca_scores, pca_explained, group_col, output_dir))
    if simple_fits is not None:
        for _, fit in simple_fits.iterrows():
            paths.append(plot_regression(df, fit.to_dict(), output_dir))

    print(f"  Plots saved to {Path(output_dir) / 'plots'} ({len(paths)} files)")
    return paths
