"""
Test data generation for nonlinearity test validation and demonstration.

This module provides synthetic time series with known dynamics
(linear, chaotic, seasonal) for validating the surrogate test.
"""

from .generators import (
    make_noisy_sine,
    make_logistic_map,
    make_seasonal_series,
    make_test_dataframe,
)

__all__ = [
    'make_noisy_sine',
    'make_logistic_map',
    'make_seasonal_series',
    'make_test_dataframe',
]
