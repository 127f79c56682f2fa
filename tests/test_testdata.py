"""
Tests for the synthetic series generators.
"""

import numpy as np

from edmnonlinearity.testdata import (
    make_noisy_sine,
    make_logistic_map,
    make_seasonal_series,
    make_test_dataframe,
)


class TestGenerators:

    def test_noisy_sine(self):
        x = make_noisy_sine(200, period=20, noise=0.0)
        assert x.shape == (200,)
        np.testing.assert_allclose(x[:20], x[20:40], atol=1e-12)

    def test_logistic_map_in_unit_interval(self):
        x = make_logistic_map(500, r=3.9, seed=0)
        assert x.shape == (500,)
        assert np.all((x > 0) & (x < 1))

    def test_logistic_map_follows_recurrence(self):
        x = make_logistic_map(50, r=3.8, seed=0)
        np.testing.assert_allclose(x[1:], 3.8 * x[:-1] * (1 - x[:-1]), rtol=1e-9)

    def test_seasonal_series(self):
        x, seasonal = make_seasonal_series(120, period=12, noise=0.0, seed=0)
        np.testing.assert_allclose(x, seasonal)
        np.testing.assert_allclose(seasonal[:12], seasonal[12:24], atol=1e-12)

    def test_seed_reproducible(self):
        np.testing.assert_array_equal(make_noisy_sine(seed=3), make_noisy_sine(seed=3))
        np.testing.assert_array_equal(make_logistic_map(seed=3), make_logistic_map(seed=3))

    def test_test_dataframe(self):
        df = make_test_dataframe(100, seed=0)
        assert list(df.columns) == ['time', 'noisy_sine', 'logistic', 'seasonal']
        assert len(df) == 100
        assert np.all(np.isfinite(df.to_numpy()))
