"""
Randomization test for nonlinearity using S-maps and surrogate data.

The forecast-skill improvement of nonlinear over linear S-maps
(delta rho, delta mae) is computed on the real series and on every
surrogate series; the real value is ranked against the surrogate values
to give one-sided empirical p-values. Surrogates can be scored in
parallel worker processes.
"""

import numpy as np
import pandas as pd
import multiprocessing
from tqdm import tqdm
from typing import Iterable, NamedTuple, Optional

from .core import DEFAULT_THETA, Evaluator, compute_skill_statistics, evaluate_smap
from ..surrogates.generators import (
    SurrogateMethod,
    validate_series,
    get_surrogate_method,
    make_surrogate_data,
)
from ..surrogates.testing import empirical_p


class TestResult(NamedTuple):
    """Outcome of a nonlinearity test."""

    delta_rho: float
    delta_mae: float
    num_surr: int
    E: int
    delta_rho_p_value: float
    delta_mae_p_value: float

    def to_frame(self) -> pd.DataFrame:
        """Return the result as a one-row DataFrame."""
        return pd.DataFrame([self._asdict()])


def _process_surrogate_wrapper(args):
    """
    Wrapper function for parallel scoring of surrogate series.

    This function must be at module level (not nested) to be picklable
    for multiprocessing.

    Parameters
    ----------
    args : tuple
        (surrogate, evaluator, theta, E, smap_kwargs)

    Returns
    -------
    dict
        delta_rho and delta_mae of the surrogate
    """
    surrogate, evaluator, theta, E, smap_kwargs = args
    return compute_skill_statistics(surrogate, evaluator=evaluator,
                                    theta=theta, E=E, **smap_kwargs)


def test_nonlinearity(x: np.ndarray,
                      method: SurrogateMethod = 'ebisuzaki',
                      num_surr: int = 200,
                      period: int = 1,
                      E: int = 1,
                      evaluator: Optional[Evaluator] = None,
                      theta: Iterable[float] = DEFAULT_THETA,
                      n_jobs: int = 1,
                      seed: Optional[int] = None,
                      verbose: bool = False,
                      return_null: bool = False,
                      **smap_kwargs):
    """
    Test a time series for nonlinearity against surrogate data.

    Compares the improvement in S-map forecast skill between linear
    (theta = 0) and nonlinear models on the original series with a null
    distribution of the same statistics computed on surrogates.

    Parameters
    ----------
    x : array-like, shape (N,)
        Original time series
    method : {'random_shuffle', 'ebisuzaki', 'seasonal'}, default 'ebisuzaki'
        Algorithm used to generate surrogate data
    num_surr : int, default 200
        Number of null surrogates to generate
    period : int, default 1
        Seasonal period for 'seasonal' surrogates (ignored otherwise)
    E : int, default 1
        Embedding dimension passed to the evaluator
    evaluator : callable or None
        Forecast evaluator (see ``compute_skill_statistics``). Default:
        ``evaluate_smap``. Must be picklable when ``n_jobs > 1``
    theta : iterable of float, default DEFAULT_THETA
        Nonlinearity parameters; must include 0
    n_jobs : int, default 1
        Number of worker processes used to score the surrogates
    seed : int or None
        Random seed for surrogate generation
    verbose : bool, default False
        Show progress and print a summary
    return_null : bool, default False
        Also return the null distribution
    **smap_kwargs
        Additional arguments for the evaluator (e.g. tau, Tp, lib, pred)

    Returns
    -------
    TestResult
        delta_rho, delta_mae, num_surr, E, delta_rho_p_value,
        delta_mae_p_value
    null_stats : pd.DataFrame
        Only if ``return_null``: one row per surrogate with columns
        'delta_rho' and 'delta_mae'
    """
    # Reject bad arguments before any forecasting is done
    get_surrogate_method(method)
    if num_surr < 1:
        raise ValueError(f"num_surr must be at least 1, got {num_surr}")

    if method == 'random_shuffle':
        x = np.asarray(x, dtype=float)
    else:
        x = validate_series(x)
    theta = tuple(theta)

    if evaluator is None:
        evaluator = evaluate_smap

    actual_stats = compute_skill_statistics(x, evaluator=evaluator, theta=theta,
                                            E=E, **smap_kwargs)

    surrogate_data = make_surrogate_data(x, method=method, num_surr=num_surr,
                                         period=period, seed=seed, verbose=verbose)

    args_list = [
        (surrogate_data[:, k], evaluator, theta, E, smap_kwargs)
        for k in range(num_surr)
    ]

    if n_jobs == 1:
        null_stats = [
            _process_surrogate_wrapper(args)
            for args in tqdm(args_list, desc="Surrogate S-maps", disable=not verbose)
        ]
    else:
        with multiprocessing.Pool(processes=n_jobs) as pool:
            null_stats = list(tqdm(
                pool.imap(_process_surrogate_wrapper, args_list),
                total=num_surr,
                desc="Surrogate S-maps",
                disable=not verbose
            ))

    null_stats = pd.DataFrame(null_stats, columns=['delta_rho', 'delta_mae'])

    result = TestResult(
        delta_rho=actual_stats['delta_rho'],
        delta_mae=actual_stats['delta_mae'],
        num_surr=num_surr,
        E=E,
        delta_rho_p_value=empirical_p(actual_stats['delta_rho'],
                                      null_stats['delta_rho'].to_numpy(), tail='greater'),
        delta_mae_p_value=empirical_p(actual_stats['delta_mae'],
                                      null_stats['delta_mae'].to_numpy(), tail='greater'),
    )

    if verbose:
        print("="*70)
        print(f"NONLINEARITY TEST ({method}, {num_surr} surrogates, E = {E})")
        print("="*70)
        print(f"Δρ   = {result.delta_rho:.4f}   p = {result.delta_rho_p_value:.3f}")
        print(f"ΔMAE = {result.delta_mae:.4f}   p = {result.delta_mae_p_value:.3f}")
        print("="*70)

    if return_null:
        return result, null_stats
    return result
