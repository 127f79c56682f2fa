"""
Surrogate time series generation for S-map nonlinearity testing.

This module provides three null models for a scalar time series. Each
preserves a different property of the original data while destroying
the structure that a nonlinear forecast could exploit:

- 'random_shuffle': amplitude distribution only
- 'ebisuzaki': power spectrum (linear autocorrelation) and variance
- 'seasonal': a smooth periodic seasonal cycle plus shuffled residuals

All generators return an array of shape (N, num_surr), one surrogate per
column. Every column draws from its own ``np.random.Generator`` spawned
from a single ``np.random.SeedSequence``, so columns are independent and
results are reproducible for a fixed seed.
"""

import numpy as np
from typing import Callable, List, Literal, Optional, Tuple
from scipy.interpolate import make_smoothing_spline
from tqdm import tqdm


SURROGATE_METHODS = ('random_shuffle', 'ebisuzaki', 'seasonal')

SurrogateMethod = Literal['random_shuffle', 'ebisuzaki', 'seasonal']


def _column_generators(seed: Optional[int], num_surr: int) -> List[np.random.Generator]:
    """
    Spawn one independent random generator per surrogate column.

    Parameters
    ----------
    seed : int or None
        Root seed. None draws fresh entropy from the OS.
    num_surr : int
        Number of generators to spawn

    Returns
    -------
    list of np.random.Generator
    """
    if num_surr < 1:
        raise ValueError(f"num_surr must be at least 1, got {num_surr}")

    children = np.random.SeedSequence(seed).spawn(num_surr)
    return [np.random.default_rng(child) for child in children]


def validate_series(x) -> np.ndarray:
    """
    Convert to a 1-D float array, rejecting NaN and infinite values.

    Parameters
    ----------
    x : array-like
        Input time series

    Returns
    -------
    np.ndarray
    """
    x = np.asarray(x, dtype=float)

    if x.ndim != 1:
        raise ValueError(f"Input time series must be 1-D, got shape {x.shape}")
    if not np.all(np.isfinite(x)):
        raise ValueError("Input time series contained invalid values (NaN or inf)")

    return x


def generate_random_surrogates(x: np.ndarray,
                               num_surr: int,
                               seed: Optional[int] = None,
                               verbose: bool = False) -> np.ndarray:
    """
    Generate random-shuffled surrogates.

    Destroys all temporal structure while preserving the amplitude
    distribution. Values are only permuted, so non-finite entries are
    carried through unchanged.

    Parameters
    ----------
    x : np.ndarray, shape (N,)
        Input time series
    num_surr : int
        Number of surrogates to generate
    seed : int or None
        Random seed for reproducibility
    verbose : bool, default False
        Show progress bar

    Returns
    -------
    np.ndarray, shape (N, num_surr)
        Surrogate time series, one per column
    """
    x = np.asarray(x, dtype=float)
    n = x.shape[0]

    if n < 1:
        raise ValueError("Input time series must contain at least one value")

    rngs = _column_generators(seed, num_surr)
    surrogates = np.zeros((n, num_surr), dtype=float)

    iterator = tqdm(range(num_surr), desc="Random shuffle", disable=not verbose)

    for k in iterator:
        surrogates[:, k] = rngs[k].permutation(x)

    return surrogates


def _ebisuzaki_column(amplitudes: np.ndarray,
                      sigma: float,
                      rng: np.random.Generator) -> np.ndarray:
    """
    Build one phase-randomized series from a fixed amplitude spectrum.

    Phases are mirrored with opposite sign around the centre of the
    spectrum so the inverse transform is real. For even lengths the
    Nyquist bin has no partner; it is replaced by a real value with the
    same expected power.
    """
    n = amplitudes.shape[0]
    n2 = n // 2

    if n % 2 == 0:
        thetas = 2 * np.pi * rng.random(n2 - 1)
        angles = np.concatenate(([0.0], thetas, [0.0], -thetas[::-1]))
        recf = amplitudes * np.exp(1j * angles)
        recf[n2] = np.sqrt(2) * amplitudes[n2] * np.cos(rng.random() * 2 * np.pi)
    else:
        thetas = 2 * np.pi * rng.random(n2)
        angles = np.concatenate(([0.0], thetas, -thetas[::-1]))
        recf = amplitudes * np.exp(1j * angles)

    # np.fft.ifft already divides by n
    temp = np.real(np.fft.ifft(recf))

    # Adjust variance of the surrogate to match the original
    return temp / np.std(temp, ddof=1) * sigma


def generate_ebisuzaki_surrogates(x: np.ndarray,
                                  num_surr: int,
                                  seed: Optional[int] = None,
                                  restore_mean: bool = False,
                                  verbose: bool = False) -> np.ndarray:
    """
    Generate phase-randomized Fourier surrogates (Ebisuzaki method).

    Keeps the amplitude of every Fourier component and draws new,
    uniformly distributed phases. The power spectrum, and therefore the
    linear autocorrelation structure, is preserved while any nonlinear
    phase coupling is destroyed.

    Parameters
    ----------
    x : np.ndarray, shape (N,)
        Input time series (must be finite, N >= 4)
    num_surr : int
        Number of surrogates to generate
    seed : int or None
        Random seed for reproducibility
    restore_mean : bool, default False
        Add the mean of ``x`` back to every surrogate. The zero-frequency
        component is dropped before reconstruction, so by default the
        surrogates have zero mean.
    verbose : bool, default False
        Show progress bar

    Returns
    -------
    np.ndarray, shape (N, num_surr)
        Surrogate time series with the sample standard deviation of ``x``

    References
    ----------
    Ebisuzaki, W. (1997). A method to estimate the statistical significance
    of a correlation when the data are serially correlated.
    Journal of Climate, 10(9), 2147-2153.
    """
    x = validate_series(x)
    n = x.shape[0]

    if n < 4:
        raise ValueError(f"Ebisuzaki surrogates need at least 4 values, got {n}")

    mu = np.mean(x)
    sigma = np.std(x, ddof=1)

    if sigma == 0:
        raise ValueError("Input time series is constant; its phases cannot be randomized")

    amplitudes = np.abs(np.fft.fft(x))
    amplitudes[0] = 0.0

    rngs = _column_generators(seed, num_surr)
    surrogates = np.zeros((n, num_surr), dtype=float)

    iterator = tqdm(range(num_surr), desc="Ebisuzaki surrogates", disable=not verbose)

    for k in iterator:
        surrogates[:, k] = _ebisuzaki_column(amplitudes, sigma, rngs[k])

    if restore_mean:
        surrogates += mu

    return surrogates


def seasonal_decomposition(x: np.ndarray,
                           period: int = 12) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split a series into a smooth periodic seasonal cycle and residuals.

    The seasonal cycle is a smoothing spline of the series against its
    position within the cycle. The phase axis is tripled (one copy shifted
    by -period, one by +period) so the spline has no edge effects at the
    cycle boundaries. Values sharing a phase are averaged and weighted by
    their count; the smoothing parameter is chosen by generalized
    cross-validation.

    Parameters
    ----------
    x : np.ndarray, shape (N,)
        Input time series (must be finite)
    period : int, default 12
        Seasonal period in time steps (e.g. 12 for monthly data)

    Returns
    -------
    seasonal_cycle : np.ndarray, shape (N,)
        Seasonal component evaluated at every time step
    residual : np.ndarray, shape (N,)
        ``x - seasonal_cycle``
    """
    x = validate_series(x)
    n = x.shape[0]
    period = int(period)

    if n < 1:
        raise ValueError("Input time series must contain at least one value")
    if period < 1:
        raise ValueError(f"period must be a positive integer, got {period}")

    season = (np.arange(n) % period + 1).astype(float)

    if period < 2:
        # A single phase: the cycle is flat at the series mean
        seasonal_cycle = np.full(n, np.mean(x))
        return seasonal_cycle, x - seasonal_cycle

    phase = np.concatenate((season - period, season, season + period))
    values = np.tile(x, 3)

    knots, inverse, counts = np.unique(phase, return_inverse=True, return_counts=True)
    phase_means = np.bincount(inverse.ravel(), weights=values) / counts

    spline = make_smoothing_spline(knots, phase_means, w=counts.astype(float))
    seasonal_cycle = spline(season)

    return seasonal_cycle, x - seasonal_cycle


def generate_seasonal_surrogates(x: np.ndarray,
                                 num_surr: int,
                                 period: int = 12,
                                 seed: Optional[int] = None,
                                 verbose: bool = False) -> np.ndarray:
    """
    Generate seasonal surrogates: seasonal cycle plus shuffled residuals.

    The deterministic seasonal cycle is kept exactly; residual variability
    is randomized by resampling the residuals without replacement.
    Residuals are shuffled individually, not in blocks, so autocorrelation
    in the residuals is not preserved.

    Parameters
    ----------
    x : np.ndarray, shape (N,)
        Input time series (must be finite)
    num_surr : int
        Number of surrogates to generate
    period : int, default 12
        Seasonal period (e.g. 12 for monthly)
    seed : int or None
        Random seed for reproducibility
    verbose : bool, default False
        Show progress bar

    Returns
    -------
    np.ndarray, shape (N, num_surr)
        Surrogate time series
    """
    seasonal_cycle, residual = seasonal_decomposition(x, period=period)
    n = seasonal_cycle.shape[0]

    rngs = _column_generators(seed, num_surr)
    surrogates = np.zeros((n, num_surr), dtype=float)

    iterator = tqdm(range(num_surr), desc=f"Seasonal (period={period})",
                    disable=not verbose)

    for k in iterator:
        surrogates[:, k] = seasonal_cycle + rngs[k].permutation(residual)

    return surrogates


def get_surrogate_method(method: str) -> Callable[..., np.ndarray]:
    """
    Get a surrogate generator by name.

    Parameters
    ----------
    method : str
        One of 'random_shuffle', 'ebisuzaki', 'seasonal'

    Returns
    -------
    callable
        Generator taking (x, num_surr, ...) and returning shape (N, num_surr)
    """
    methods = {
        'random_shuffle': generate_random_surrogates,
        'ebisuzaki': generate_ebisuzaki_surrogates,
        'seasonal': generate_seasonal_surrogates,
    }

    if method not in methods:
        raise ValueError(f"Unknown surrogate method: {method!r}. "
                         f"Available: {list(SURROGATE_METHODS)}")

    return methods[method]


def make_surrogate_data(x: np.ndarray,
                        method: SurrogateMethod = 'ebisuzaki',
                        num_surr: int = 100,
                        period: int = 1,
                        seed: Optional[int] = None,
                        verbose: bool = False) -> np.ndarray:
    """
    Generate surrogate data under one of several null models.

    Parameters
    ----------
    x : array-like, shape (N,)
        Original time series
    method : {'random_shuffle', 'ebisuzaki', 'seasonal'}, default 'ebisuzaki'
        - 'random_shuffle': random permutations of the values
        - 'ebisuzaki': randomized Fourier phases, preserving the power spectrum
        - 'seasonal': smooth seasonal cycle plus shuffled residuals
    num_surr : int, default 100
        Number of surrogates to generate
    period : int, default 1
        Seasonal period; only used by 'seasonal'
    seed : int or None
        Random seed for reproducibility
    verbose : bool, default False
        Show progress bar

    Returns
    -------
    np.ndarray, shape (N, num_surr)
        Each column is a separate surrogate with the same length as ``x``

    Examples
    --------
    >>> from edmnonlinearity.testdata import make_logistic_map
    >>> x = make_logistic_map(200, seed=1)
    >>> make_surrogate_data(x, method='ebisuzaki', num_surr=10).shape
    (200, 10)
    """
    generator = get_surrogate_method(method)

    if method == 'seasonal':
        return generator(x, num_surr, period=period, seed=seed, verbose=verbose)

    return generator(x, num_surr, seed=seed, verbose=verbose)
