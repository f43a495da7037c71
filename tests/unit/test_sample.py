"""
Tests for the per-path Sample type.

Tests correctness of:
- Construction and immutability
- Elementwise arithmetic
- Population statistics
"""

import numpy as np
import pytest

from asian_pricing.options.simulation.sample import Sample


class TestSampleConstruction:
    """Tests for Sample construction."""

    def test_from_values(self):
        sample = Sample.from_values([1.0, 2.0, 3.0])
        assert sample.n_paths == 3
        assert len(sample) == 3

    def test_constant(self):
        sample = Sample.constant(2.5, 4)
        assert np.array_equal(sample.values, np.full(4, 2.5))
        assert sample.is_deterministic()

    def test_empty_rejected(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            Sample.from_values([])

    def test_two_dimensional_rejected(self):
        with pytest.raises(ValueError, match="must be 1-D"):
            Sample(np.ones((2, 2)))

    def test_values_read_only(self):
        sample = Sample.from_values([1.0, 2.0])
        with pytest.raises(ValueError):
            sample.values[0] = 5.0

    def test_source_array_not_aliased(self):
        """Mutating the input array must not change the Sample."""
        source = np.array([1.0, 2.0, 3.0])
        sample = Sample(source)
        source[0] = 100.0
        assert sample.values[0] == 1.0

    def test_invalid_constant_size(self):
        with pytest.raises(ValueError, match="n_paths must be > 0"):
            Sample.constant(1.0, 0)


class TestSampleArithmetic:
    """Tests for elementwise operations."""

    @pytest.fixture
    def x(self):
        return Sample.from_values([1.0, 2.0, 3.0])

    @pytest.fixture
    def y(self):
        return Sample.from_values([0.5, -1.0, 4.0])

    def test_add_sample(self, x, y):
        assert np.allclose((x + y).values, [1.5, 1.0, 7.0])

    def test_add_scalar_both_sides(self, x):
        assert np.allclose((x + 1.0).values, [2.0, 3.0, 4.0])
        assert np.allclose((1.0 + x).values, [2.0, 3.0, 4.0])

    def test_sub(self, x, y):
        assert np.allclose(x.sub(y).values, [0.5, 3.0, -1.0])
        assert np.allclose((10.0 - x).values, [9.0, 8.0, 7.0])

    def test_mult_and_div(self, x):
        assert np.allclose((x * 2.0).values, [2.0, 4.0, 6.0])
        assert np.allclose((2.0 * x).values, [2.0, 4.0, 6.0])
        assert np.allclose((x / 2.0).values, [0.5, 1.0, 1.5])

    def test_neg(self, x):
        assert np.allclose((-x).values, [-1.0, -2.0, -3.0])

    def test_floor_at_zero(self, y):
        assert np.allclose(y.floor(0.0).values, [0.5, 0.0, 4.0])

    def test_cap(self, y):
        assert np.allclose(y.cap(1.0).values, [0.5, -1.0, 1.0])

    def test_exp(self):
        sample = Sample.from_values([0.0, 1.0])
        assert np.allclose(sample.exp().values, [1.0, np.e])

    def test_operations_do_not_mutate(self, x, y):
        before = x.values.copy()
        _ = x.add(y).mult(3.0).floor(0.0)
        assert np.array_equal(x.values, before)

    def test_unequal_length_rejected(self, x):
        with pytest.raises(ValueError, match="different length"):
            x.add(Sample.from_values([1.0, 2.0]))


class TestSampleStatistics:
    """Tests for mean, variance, covariance."""

    def test_mean(self):
        assert Sample.from_values([1.0, 2.0, 3.0, 4.0]).mean() == pytest.approx(2.5)

    def test_population_variance(self):
        """[T1] Var = E[(X - E[X])^2], divided by N."""
        sample = Sample.from_values([1.0, 2.0, 3.0, 4.0])
        assert sample.variance() == pytest.approx(1.25)

    def test_std_ddof(self):
        sample = Sample.from_values([1.0, 2.0, 3.0, 4.0])
        assert sample.std() == pytest.approx(np.sqrt(1.25))
        assert sample.std(ddof=1) == pytest.approx(np.std([1, 2, 3, 4], ddof=1))

    def test_covariance_matches_numpy(self):
        rng = np.random.default_rng(7)
        a = rng.standard_normal(1000)
        b = 0.5 * a + rng.standard_normal(1000)
        expected = np.cov(a, b, ddof=0)[0, 1]
        assert Sample(a).covariance(Sample(b)) == pytest.approx(expected, rel=1e-12)

    def test_covariance_with_itself_is_variance(self):
        sample = Sample.from_values([3.0, 1.0, 4.0, 1.0, 5.0])
        assert sample.covariance(sample) == pytest.approx(sample.variance())

    def test_covariance_with_constant_is_zero(self):
        sample = Sample.from_values([3.0, 1.0, 4.0])
        assert sample.covariance(2.0) == 0.0

    def test_correlation(self):
        a = Sample.from_values([1.0, 2.0, 3.0])
        assert a.correlation(a * 2.0 + 1.0) == pytest.approx(1.0)
        assert a.correlation(-a) == pytest.approx(-1.0)

    def test_correlation_deterministic_is_zero(self):
        a = Sample.from_values([1.0, 2.0, 3.0])
        assert a.correlation(Sample.constant(1.0, 3)) == 0.0

    def test_standard_error(self):
        sample = Sample.from_values([1.0, 2.0, 3.0, 4.0])
        assert sample.standard_error() == pytest.approx(np.sqrt(1.25) / 2.0)

    def test_allclose(self):
        a = Sample.from_values([1.0, 2.0])
        assert a.allclose(Sample.from_values([1.0, 2.0 + 1e-15]))
        assert not a.allclose(Sample.from_values([1.0, 2.1]))
