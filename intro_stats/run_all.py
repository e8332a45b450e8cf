"""
Orchestrator: run the whole tutorial walkthrough and write a report.

Usage:
    python -m intro_stats.run_all
    python -m intro_stats.run_all --csv data/my_table.csv --group-col Species
"""

import argparse
import logging
import sys
import time
from pathlib import Path

import pandas as pd

from intro_stats.config import (
    IRIS_GROUP, N_CLUSTERS, OUTPUT_DIR, REGRESSION_PREDICTORS, REGRESSION_RESPONSE,
)
from intro_stats.errors import StandardizationError
from intro_stats.standardize import standardize_frame, standardization_summary
from intro_stats.table import Table
from intro_stats import (
    datasets,
    descriptive_stats,
    hypothesis_tests,
    regression,
    multivariate,
    tidy,
    plots,
)

logger = logging.getLogger(__name__)


def load_data(csv_path: Path | None = None) -> pd.DataFrame:
    """Load the input table (iris unless a CSV is given) and report its shape."""
    if csv_path is None:
        df = datasets.load_iris()
        print("Loaded iris dataset")
    else:
        df = datasets.read_delimited(csv_path)
        print(f"Loaded {csv_path}")
    print(f"  Shape: {df.shape}")
    print("  Missing values:")
    for col in df.columns:
        n_miss = df[col].isna().sum()
        if n_miss:
            print(f"    {col}: {n_miss} / {len(df)} ({n_miss/len(df)*100:.1f}%)")
    return df


def _section(lines: list[str], title: str):
    lines.append(title)
    lines.append("-" * 60)


def generate_text_report(all_results: dict) -> str:
    """Generate a human-readable report of every analysis."""
    lines = [
        "=" * 80,
        "INTRODUCTORY STATISTICS REPORT",
        "=" * 80,
        "",
    ]

    # 1. Standardization
    _section(lines, "1. STANDARDIZATION (z-scores, sample SD)")
    std = all_results.get("standardization", {})
    if "summary" in std:
        summary = std["summary"]
        ok = summary["mean_is_zero"].all() and summary["sd_is_one"].all()
        lines.append(f"All numeric columns mean 0 / SD 1: {'YES' if ok else 'NO'}")
        lines.append(summary.to_string(index=False))
    if std.get("passthrough"):
        lines.append(f"Passed through unchanged: {', '.join(std['passthrough'])}")
    lines.append("")

    # 2. Descriptive stats
    _section(lines, "2. DESCRIPTIVE STATISTICS")
    desc = all_results.get("descriptive", {})
    if "descriptive" in desc:
        lines.append(desc["descriptive"].to_string(index=False))
    lines.append("")
    if "shapiro_wilk" in desc:
        lines.append("Shapiro-Wilk normality:")
        lines.append(desc["shapiro_wilk"].to_string(index=False))
    lines.append("")

    # 3. Group summary (tidy)
    if "group_summary" in all_results:
        _section(lines, "3. GROUP SUMMARY (group_by + summarise)")
        lines.append(all_results["group_summary"].to_string(index=False))
        lines.append("")

    # 4. Hypothesis tests
    _section(lines, "4. HYPOTHESIS TESTS")
    tests = all_results.get("hypothesis_tests", {})
    if "anova" in tests:
        lines.append("One-way ANOVA:")
        lines.append(tests["anova"][["Variable", "df_between", "df_within", "F_statistic",
                                     "p_value", "eta_squared"]].to_string(index=False))
    lines.append("")
    if "tukey_hsd" in tests and not tests["tukey_hsd"].empty:
        lines.append("Tukey HSD:")
        lines.append(tests["tukey_hsd"].to_string(index=False))
    lines.append("")
    if "t_tests" in tests and not tests["t_tests"].empty:
        lines.append("Welch t-tests (first two groups):")
        lines.append(tests["t_tests"][["variable", "group1", "group2", "mean_difference",
                                       "t_statistic", "df", "p_value"]].to_string(index=False))
    lines.append("")

    # 5. Regression
    _section(lines, "5. LINEAR REGRESSION")
    reg = all_results.get("regression", {})
    if "simple" in reg:
        lines.append(reg["simple"][["x", "y", "n", "slope", "intercept",
                                    "r_squared", "p_value"]].to_string(index=False))
    lines.append("")
    if "multiple_coefficients" in reg:
        lines.append(reg["multiple_summary"].to_string(index=False))
        lines.append(reg["multiple_coefficients"].to_string(index=False))
    lines.append("")

    # 6. PCA / k-means
    _section(lines, "6. PCA AND K-MEANS")
    mv = all_results.get("multivariate", {})
    if "pca_explained" in mv:
        lines.append(mv["pca_explained"].to_string(index=False))
        lines.append("")
        lines.append("Loadings:")
        lines.append(mv["pca_loadings"].round(4).to_string())
    lines.append("")
    if "cluster_crosstab" in mv:
        lines.append("k-means clusters vs groups:")
        lines.append(mv["cluster_crosstab"].to_string())
    lines.append("")

    return "\n".join(lines)


def _hypothesis_skip_reason(df: pd.DataFrame, group_col: str) -> str | None:
    """Why the group tests cannot run on ``df``, or None when they can."""
    value_cols = descriptive_stats.numeric_columns(df, exclude={group_col})
    if not value_cols:
        return f"no numeric columns besides {group_col}"
    for col in value_cols:
        sizes = df[[group_col, col]].dropna().groupby(group_col, sort=False).size()
        if len(sizes) < 2:
            return f"{col} has {len(sizes)} group(s) in {group_col}, need at least 2"
        small = sizes[sizes < 2].index.tolist()
        if small:
            return f"{col} has groups with fewer than 2 rows: {small}"
    return None


def run(df: pd.DataFrame, group_col: str | None = IRIS_GROUP,
        output_dir: Path = OUTPUT_DIR, make_plots: bool = True) -> dict:
    """Run every analysis on ``df``; returns the collected results."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    if group_col is not None and group_col not in df.columns:
        raise ValueError(f"Unknown group column: {group_col}")

    print("\n--- Standardizing numeric columns ---")
    table = Table.from_frame(df)
    z_df = standardize_frame(df)
    std_results = {
        "z_scores": z_df,
        "summary": standardization_summary(Table.from_frame(z_df)),
        "passthrough": table.text_names,
    }
    z_df.to_csv(output_dir / "standardized.csv", index=False)

    print("--- Running descriptive statistics ---")
    desc_results = descriptive_stats.run(df, group_col=group_col, output_dir=output_dir)

    all_results = {
        "standardization": std_results,
        "descriptive": desc_results,
    }

    if group_col is not None:
        all_results["group_summary"] = tidy.summarise_by_group(df, group_col)

        reason = _hypothesis_skip_reason(df, group_col)
        if reason is None:
            print("--- Running hypothesis tests ---")
            all_results["hypothesis_tests"] = hypothesis_tests.run(df, group_col, output_dir=output_dir)
        else:
            logger.info("Skipping hypothesis tests: %s", reason)

    response, predictors = REGRESSION_RESPONSE, REGRESSION_PREDICTORS
    if all(c in df.columns for c in [response] + predictors):
        print("--- Running linear regression ---")
        all_results["regression"] = regression.run(df, response, predictors, output_dir=output_dir)
    else:
        logger.info("Skipping regression: %s ~ %s not in data", response, predictors)

    numeric = table.numeric_names
    n_complete = len(df.dropna(subset=numeric))
    if len(numeric) < 2:
        logger.info("Skipping PCA and k-means: need at least 2 numeric columns, got %s", numeric)
    elif n_complete < N_CLUSTERS:
        logger.info("Skipping PCA and k-means: %d complete row(s) for %d clusters",
                    n_complete, N_CLUSTERS)
    else:
        print("--- Running PCA and k-means ---")
        all_results["multivariate"] = multivariate.run(df, group_col=group_col, output_dir=output_dir)

    if make_plots:
        print("--- Generating plots ---")
        mv = all_results.get("multivariate", {})
        plots.run_all_plots(
            df=df,
            group_col=group_col,
            z_df=z_df,
            pca_scores=mv.get("pca_scores"),
            pca_explained=mv.get("pca_explained"),
            simple_fits=all_results.get("regression", {}).get("simple"),
            output_dir=output_dir,
        )

    return all_results


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Run the introductory statistics walkthrough and write a report.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--csv", type=Path, default=None,
                        help="Input CSV (default: the iris dataset).")
    parser.add_argument("--group-col", default=IRIS_GROUP,
                        help="Grouping column for ANOVA / t-tests ('' to disable).")
    parser.add_argument("--output-dir", type=Path, default=OUTPUT_DIR,
                        help="Directory for workbooks, plots and the report.")
    parser.add_argument("--no-plots", action="store_true",
                        help="Skip figure generation.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    t0 = time.time()

    df = load_data(args.csv)
    try:
        all_results = run(df, group_col=args.group_col or None,
                          output_dir=args.output_dir, make_plots=not args.no_plots)
    except StandardizationError as exc:
        logger.error("Cannot standardize input: %s", exc)
        return 1

    print("--- Generating report ---")
    report = generate_text_report(all_results)
    report_path = Path(args.output_dir) / "verification_report.txt"
    report_path.write_text(report, encoding="utf-8")
    print(f"\nReport saved to: {report_path}")

    elapsed = time.time() - t0
    print(f"\nAll analyses completed in {elapsed:.1f}s")

    # Print report to console (handle Windows encoding)
    try:
        print("\n" + report)
    except UnicodeEncodeError:
        print("\n" + report.encode("ascii", errors="replace").decode("ascii"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
