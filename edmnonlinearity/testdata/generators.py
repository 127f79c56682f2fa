"""
Test data generators with known dynamics for nonlinearity testing.

Linear, chaotic and seasonal series used to validate the surrogate
test and to demonstrate it in the examples.
"""

import numpy as np
import pandas as pd
from typing import Optional, Tuple


def make_noisy_sine(n: int = 200,
                    period: float = 20.0,
                    noise: float = 0.1,
                    seed: Optional[int] = None) -> np.ndarray:
    """
    Sine wave plus independent Gaussian noise.

    Approximately linear dynamics: a linear autoregressive model forecasts
    it as well as any nonlinear one.

    Parameters
    ----------
    n : int, default 200
        Number of time points
    period : float, default 20.0
        Period of the sine wave in time steps
    noise : float, default 0.1
        Standard deviation of the additive noise
    seed : int or None
        Random seed for reproducibility

    Returns
    -------
    np.ndarray, shape (n,)
    """
    rng = np.random.default_rng(seed)
    t = np.arange(n)
    return np.sin(2 * np.pi * t / period) + noise * rng.standard_normal(n)


def make_logistic_map(n: int = 200,
                      r: float = 3.8,
                      x0: Optional[float] = None,
                      noise: float = 0.0,
                      burn_in: int = 100,
                      seed: Optional[int] = None) -> np.ndarray:
    """
    Logistic map x[t+1] = r * x[t] * (1 - x[t]).

    Chaotic for r around 3.6-4, a standard example of low-dimensional
    nonlinear dynamics.

    Parameters
    ----------
    n : int, default 200
        Number of time points returned
    r : float, default 3.8
        Growth parameter
    x0 : float or None
        Initial condition in (0, 1). Default: drawn uniformly
    noise : float, default 0.0
        Standard deviation of additive process noise
    burn_in : int, default 100
        Number of initial iterations discarded
    seed : int or None
        Random seed for reproducibility

    Returns
    -------
    np.ndarray, shape (n,)
    """
    rng = np.random.default_rng(seed)

    x = np.zeros(n + burn_in)
    x[0] = rng.uniform(0.1, 0.9) if x0 is None else x0

    for t in range(1, n + burn_in):
        x[t] = r * x[t-1] * (1 - x[t-1])
        if noise > 0:
            x[t] += noise * rng.standard_normal()
        x[t] = np.clip(x[t], 1e-12, 1 - 1e-12)

    return x[burn_in:]


def make_seasonal_series(n: int = 240,
                         period: int = 12,
                         amplitude: float = 1.0,
                         noise: float = 0.3,
                         seed: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sinusoidal seasonal cycle plus independent Gaussian noise.

    Parameters
    ----------
    n : int, default 240
        Number of time points (e.g. 20 years of monthly data)
    period : int, default 12
        Seasonal period
    amplitude : float, default 1.0
        Amplitude of the seasonal cycle
    noise : float, default 0.3
        Standard deviation of the additive noise
    seed : int or None
        Random seed for reproducibility

    Returns
    -------
    series : np.ndarray, shape (n,)
        Observed series
    seasonal : np.ndarray, shape (n,)
        The true seasonal cycle
    """
    rng = np.random.default_rng(seed)
    t = np.arange(n)
    seasonal = amplitude * np.sin(2 * np.pi * t / period)
    return seasonal + noise * rng.standard_normal(n), seasonal


def make_test_dataframe(n: int = 240,
                        seed: Optional[int] = None) -> pd.DataFrame:
    """
    Create a test dataframe with one series per kind of dynamics.

    Columns:
    - 'time': 1..n
    - 'noisy_sine': linear, period 20 (not nonlinear)
    - 'logistic': chaotic logistic map (nonlinear)
    - 'seasonal': period-12 seasonal cycle plus noise (not nonlinear)

    Parameters
    ----------
    n : int, default 240
        Number of time points
    seed : int or None
        Random seed for reproducibility

    Returns
    -------
    pd.DataFrame
    """
    seeds = np.random.SeedSequence(seed).generate_state(3)

    seasonal, _ = make_seasonal_series(n, seed=int(seeds[2]))

    return pd.DataFrame({
        'time': np.arange(1, n + 1),
        'noisy_sine': make_noisy_sine(n, seed=int(seeds[0])),
        'logistic': make_logistic_map(n, seed=int(seeds[1])),
        'seasonal': seasonal,
    })
