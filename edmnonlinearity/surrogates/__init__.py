"""
Surrogate time series generation and significance testing for S-map analysis.

This module provides null models that preserve different statistical
properties of a series while destroying the structure a nonlinear
forecast could exploit.
"""

from .generators import (
    SURROGATE_METHODS,
    generate_random_surrogates,
    generate_ebisuzaki_surrogates,
    generate_seasonal_surrogates,
    seasonal_decomposition,
    validate_series,
    get_surrogate_method,
    make_surrogate_data,
)

from .testing import (
    empirical_p,
    summarize_null_distribution,
)

__all__ = [
    # Generators
    'SURROGATE_METHODS',
    'generate_random_surrogates',
    'generate_ebisuzaki_surrogates',
    'generate_seasonal_surrogates',
    'seasonal_decomposition',
    'validate_series',
    'get_surrogate_method',
    'make_surrogate_data',
    # Testing
    'empirical_p',
    'summarize_null_distribution',
]
