"""
Introductory statistics companion package for the R tutorials.

Modules:
    config            – shared constants (dataset columns, paths, parameters)
    errors            – standardization error taxonomy
    table             – Table / Column model with tagged numeric & text columns
    standardize       – column-wise z-score standardization (mean 0, SD 1)
    datasets          – iris teaching dataset and delimited-file loading
    tidy              – wide <-> long reshaping, grouped summaries
    descriptive_stats – summary statistics, Shapiro-Wilk
    hypothesis_tests  – t-tests, one-way ANOVA, Tukey HSD
    regression        – simple and multiple linear regression
    multivariate      – PCA and k-means on standardized data
    plots             – all visualisation routines
    run_all           – orchestrator: run every analysis + save report
"""

__version__ = "0.1.0"
