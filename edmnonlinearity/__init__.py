"""
edmnonlinearity: Surrogate-based tests for nonlinearity in time series.

This package provides standardized tools for:
- Generating surrogate time series (random shuffle, Ebisuzaki, seasonal)
- S-map forecast skill over a grid of nonlinearity parameters
- Randomization tests of nonlinear vs. linear forecast improvement
"""

__version__ = "0.1.0"

# Import main modules for convenient access
from . import surrogates
from . import smap
from . import testdata

# Import key functions for direct access
from .surrogates import (
    SURROGATE_METHODS,
    make_surrogate_data,
    seasonal_decomposition,
    empirical_p,
)

from .smap import (
    DEFAULT_THETA,
    evaluate_smap,
    compute_skill_statistics,
    TestResult,
    test_nonlinearity,
)

__all__ = [
    'surrogates',
    'smap',
    'testdata',
    # Surrogates
    'SURROGATE_METHODS',
    'make_surrogate_data',
    'seasonal_decomposition',
    'empirical_p',
    # S-map
    'DEFAULT_THETA',
    'evaluate_smap',
    'compute_skill_statistics',
    'TestResult',
    'test_nonlinearity',
]
