"""
S-map forecast skill and the surrogate-based nonlinearity test.

This module provides:
- S-map evaluation over a theta grid (pyEDM)
- Delta rho / delta MAE forecast improvement statistics
- The randomization test for nonlinearity with parallel surrogate scoring
"""

from .core import (
    DEFAULT_THETA,
    forecast_skill,
    evaluate_smap,
    compute_skill_statistics,
)

from .workflow import (
    TestResult,
    test_nonlinearity,
)

__all__ = [
    # Core functions
    'DEFAULT_THETA',
    'forecast_skill',
    'evaluate_smap',
    'compute_skill_statistics',
    # Workflow
    'TestResult',
    'test_nonlinearity',
]
