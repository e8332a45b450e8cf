"""Tests for hypothesis_tests.py — t-tests, ANOVA, Tukey HSD."""
import numpy as np
import pandas as pd
import pytest
from scipy import stats

from intro_stats import hypothesis_tests
from intro_stats.config import IRIS_GROUP, IRIS_NUMERIC


# ─── t-tests ─────────────────────────────────────────────────────

def test_one_sample_t_test_matches_scipy():
    x = [5.1, 4.9, 5.6, 5.8, 6.0, 5.3]
    result = hypothesis_tests.one_sample_t_test(x, mu=5.0)
    t_stat, p = stats.ttest_1samp(x, 5.0)
    assert result["t_statistic"] == pytest.approx(t_stat)
    assert result["p_value"] == pytest.approx(p)
    assert result["df"] == 5
    assert result["ci_low"] < np.mean(x) < result["ci_high"]


def test_one_sample_ci_excludes_mu_when_significant():
    x = np.linspace(10, 12, 30)
    result = hypothesis_tests.one_sample_t_test(x, mu=0.0)
    assert result["significant"]
    assert result["ci_low"] > 0


def test_welch_iris_sepal_length(iris_df):
    """R: t.test(Sepal.Length ~ Species) for setosa vs versicolor."""
    result = hypothesis_tests.compare_groups_t_test(
        iris_df, "Sepal.Length", IRIS_GROUP, "setosa", "versicolor")
    assert result["test"] == "Welch two-sample t-test"
    assert result["t_statistic"] == pytest.approx(-10.521, abs=1e-3)
    assert result["df"] == pytest.approx(86.538, abs=1e-3)
    assert result["p_value"] < 1e-15
    assert result["mean_difference"] == pytest.approx(5.006 - 5.936)
    assert result["ci_low"] < result["mean_difference"] < result["ci_high"]


def test_pooled_t_test_df():
    a = [1.0, 2.0, 3.0, 4.0]
    b = [2.0, 3.0, 4.0, 5.0, 6.0]
    result = hypothesis_tests.two_sample_t_test(a, b, equal_var=True)
    assert result["df"] == 7
    assert result["p_value"] == pytest.approx(stats.ttest_ind(a, b).pvalue)


def test_t_test_needs_two_values():
    with pytest.raises(ValueError):
        hypothesis_tests.two_sample_t_test([1.0], [1.0, 2.0])


def test_unknown_column(iris_df):
    with pytest.raises(ValueError, match="Unknown"):
        hypothesis_tests.compare_groups_t_test(iris_df, "Height", IRIS_GROUP, "setosa", "virginica")


# ─── ANOVA ───────────────────────────────────────────────────────

class TestAnova:
    def test_iris_sepal_length(self, iris_df):
        """R: summary(aov(Sepal.Length ~ Species)) -> F = 119.3 on 2 and 147 df."""
        result = hypothesis_tests.one_way_anova(iris_df, "Sepal.Length", IRIS_GROUP)
        assert result["df_between"] == 2
        assert result["df_within"] == 147
        assert result["F_statistic"] == pytest.approx(119.26, abs=0.01)
        assert result["SS_between"] == pytest.approx(63.21, abs=0.01)
        assert result["SS_within"] == pytest.approx(38.96, abs=0.01)
        assert result["p_value"] < 1e-30

    def test_f_equals_ms_ratio(self, synthetic_df):
        result = hypothesis_tests.one_way_anova(synthetic_df, "height", "group")
        assert result["F_statistic"] == pytest.approx(result["MS_between"] / result["MS_within"])
        assert 0 <= result["eta_squared"] <= 1

    def test_anova_all(self, iris_df):
        result = hypothesis_tests.anova_all(iris_df, IRIS_GROUP)
        assert result["Variable"].tolist() == IRIS_NUMERIC
        assert (result["p_value"] < 0.001).all()

    def test_single_group_rejected(self, iris_df):
        setosa = iris_df[iris_df[IRIS_GROUP] == "setosa"]
        with pytest.raises(ValueError, match="at least 2 groups"):
            hypothesis_tests.one_way_anova(setosa, "Sepal.Length", IRIS_GROUP)

    def test_tiny_group_rejected(self):
        df = pd.DataFrame({"g": ["a", "a", "b"], "x": [1.0, 2.0, 3.0]})
        with pytest.raises(ValueError, match="fewer than 2"):
            hypothesis_tests.one_way_anova(df, "x", "g")


# ─── Tukey HSD ───────────────────────────────────────────────────

def test_tukey_iris_petal_length(iris_df):
    """R: TukeyHSD(aov(Petal.Length ~ Species))."""
    result = hypothesis_tests.tukey_hsd(iris_df, "Petal.Length", IRIS_GROUP).set_index("Comparison")
    assert list(result.index) == ["versicolor-setosa", "virginica-setosa", "virginica-versicolor"]
    assert result.loc["versicolor-setosa", "diff"] == pytest.approx(2.798, abs=1e-3)
    assert result.loc["virginica-setosa", "diff"] == pytest.approx(4.090, abs=1e-3)
    assert result.loc["virginica-versicolor", "diff"] == pytest.approx(1.292, abs=1e-3)
    assert result["significant"].all()
    assert (result["ci_low"] < result["diff"]).all()
    assert (result["diff"] < result["ci_high"]).all()


def test_run_writes_workbook(iris_df, tmp_path):
    results = hypothesis_tests.run(iris_df, IRIS_GROUP, output_dir=tmp_path)
    assert len(results["anova"]) == 4
    assert len(results["tukey_hsd"]) == 4 * 3
    assert len(results["t_tests"]) == 4
    assert (tmp_path / "hypothesis_tests.xlsx").exists()
