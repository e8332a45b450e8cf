"""Tests for plots.py — every figure is written to the output directory."""
import pytest

from intro_stats import multivariate, plots, regression
from intro_stats.config import IRIS_GROUP
from intro_stats.standardize import standardize_frame


def test_standardized_heatmap(iris_df, tmp_path):
    path = plots.plot_standardized_heatmap(standardize_frame(iris_df), IRIS_GROUP, tmp_path)
    assert path.exists()
    assert path.parent == tmp_path / "plots"


def test_correlation_heatmap(iris_df, tmp_path):
    assert plots.plot_correlation_heatmap(iris_df, output_dir=tmp_path).exists()


def test_scatter(iris_df, tmp_path):
    path = plots.plot_scatter(iris_df, "Petal.Length", "Petal.Width", IRIS_GROUP, tmp_path)
    assert path.exists()
    assert "." not in path.stem


def test_boxplots(iris_df, tmp_path):
    assert plots.plot_boxplots(iris_df, IRIS_GROUP, tmp_path).exists()


def test_pca_scores(iris_df, tmp_path):
    pca = multivariate.run_pca(iris_df)
    assert plots.plot_pca_scores(pca.scores, pca.explained, IRIS_GROUP, tmp_path).exists()


def test_regression_plot(iris_df, tmp_path):
    fit = regression.simple_regression(iris_df, "Petal.Width", "Petal.Length")
    assert plots.plot_regression(iris_df, fit, tmp_path).exists()


def test_run_all_plots(iris_df, tmp_path):
    pca = multivariate.run_pca(iris_df)
    paths = plots.run_all_plots(
        iris_df, group_col=IRIS_GROUP, z_df=standardize_frame(iris_df),
        pca_scores=pca.scores, pca_explained=pca.explained, output_dir=tmp_path,
    )
    assert len(paths) == 5
    assert all(p.exists() for p in paths)
