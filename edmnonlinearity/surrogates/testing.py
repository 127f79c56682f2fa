"""
Statistical significance testing using surrogate time series.

This module provides functions for computing empirical p-values and
summary statistics from surrogate (null) distributions.
"""

import numpy as np
from typing import Literal


def empirical_p(observed: float,
                surrogates: np.ndarray,
                tail: Literal["greater", "less"] = "greater") -> float:
    """
    Calculate empirical p-value from surrogate distribution.

    Parameters
    ----------
    observed : float
        Observed test statistic
    surrogates : np.ndarray
        Array of surrogate test statistics
    tail : {'greater', 'less'}, default 'greater'
        Type of test:
        - 'greater': Test if observed exceeds the surrogates (nonlinear signal)
        - 'less': Test if observed falls below the surrogates

    Returns
    -------
    float
        Empirical p-value in [1 / (n + 1), 1], or NaN when ``observed``
        is NaN

    Notes
    -----
    Only surrogates strictly beyond the observed value are counted. The
    observed statistic is treated as one member of the reference
    distribution: p = (k + 1) / (n + 1). NaN surrogates never count as
    exceeding but still contribute to n.
    """
    surrogates = np.asarray(surrogates, dtype=float)
    n = len(surrogates)

    if tail not in ("greater", "less"):
        raise ValueError("tail must be 'greater' or 'less'")

    if np.isnan(observed):
        return np.nan

    if tail == "greater":
        k = np.sum(surrogates > observed)
    else:
        k = np.sum(surrogates < observed)

    return float((k + 1) / (n + 1))


def summarize_null_distribution(observed: float,
                                surrogates: np.ndarray,
                                alpha: float = 0.05,
                                tail: str = "greater") -> dict:
    """
    Summarize an observed statistic against its null distribution.

    Parameters
    ----------
    observed : float
        Observed test statistic
    surrogates : np.ndarray
        Surrogate distribution
    alpha : float, default 0.05
        Significance level
    tail : str, default 'greater'
        Type of test

    Returns
    -------
    dict
        Results with p-value, significance, and summary statistics
    """
    surrogates = np.asarray(surrogates, dtype=float)
    p_value = empirical_p(observed, surrogates, tail=tail)

    return {
        'observed': observed,
        'p_value': p_value,
        'significant': p_value < alpha,
        'alpha': alpha,
        'n_surrogates': len(surrogates),
        'surr_mean': np.nanmean(surrogates),
        'surr_std': np.nanstd(surrogates),
        'surr_median': np.nanmedian(surrogates),
        'surr_95p': np.nanpercentile(surrogates, 95),
        'surr_99p': np.nanpercentile(surrogates, 99),
    }
