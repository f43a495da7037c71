"""
Tests for GBM, Bachelier and Heston path generation.

Tests correctness of:
- Path generation mechanics
- Antithetic variates
- Theoretical moment matching
"""

import numpy as np
import pytest

from asian_pricing.models import BachelierModel, BlackScholesModel, HestonModel, HestonParams
from asian_pricing.options.simulation.bachelier import generate_bachelier_paths
from asian_pricing.options.simulation.gbm import generate_gbm_paths, make_time_grid
from asian_pricing.options.simulation.heston_paths import generate_heston_paths


class TestTimeGrid:
    def test_uniform_grid(self):
        grid = make_time_grid(2.0, 20)
        assert grid.shape == (21,)
        assert grid[0] == 0.0
        assert grid[-1] == 2.0

    def test_invalid(self):
        with pytest.raises(ValueError, match="time_horizon must be > 0"):
            make_time_grid(0.0, 10)
        with pytest.raises(ValueError, match="n_steps must be > 0"):
            make_time_grid(1.0, 0)


class TestGBMPaths:
    """Tests for generate_gbm_paths."""

    @pytest.fixture
    def model(self):
        return BlackScholesModel(spot=100.0, rate=0.05, volatility=0.20, dividend=0.02)

    def test_shape_and_start(self, model):
        result = generate_gbm_paths(model, n_paths=1000, time_horizon=1.0, n_steps=12, seed=42)
        assert result.paths.shape == (1000, 13)
        assert result.n_paths == 1000
        assert result.n_steps == 12
        assert np.all(result.paths[:, 0] == 100.0)

    def test_positive(self, model):
        result = generate_gbm_paths(model, n_paths=1000, time_horizon=1.0, n_steps=12, seed=42)
        assert np.all(result.paths > 0)

    def test_reproducible(self, model):
        a = generate_gbm_paths(model, 500, 1.0, 10, seed=7)
        b = generate_gbm_paths(model, 500, 1.0, 10, seed=7)
        assert np.array_equal(a.paths, b.paths)

    def test_forward_price(self, model):
        """[T1] E[S(T)] = S(0) exp((r - q) T)."""
        result = generate_gbm_paths(model, n_paths=100_000, time_horizon=1.0, n_steps=4, seed=42)
        terminal = result.terminal_values
        expected = 100.0 * np.exp(0.03)
        se = terminal.std() / np.sqrt(terminal.size)
        assert abs(terminal.mean() - expected) < 4 * se

    def test_log_variance(self, model):
        """[T1] Var[log(S(T)/S(0))] = σ²T."""
        result = generate_gbm_paths(model, n_paths=100_000, time_horizon=1.0, n_steps=4, seed=42)
        log_returns = np.log(result.terminal_values / 100.0)
        assert log_returns.var() == pytest.approx(0.04, rel=0.02)

    def test_antithetic_symmetry(self, model):
        """Antithetic halves mirror each other in log-return space."""
        result = generate_gbm_paths(model, 1000, 1.0, 5, seed=42, antithetic=True)
        log_paths = np.log(result.paths[:, 1:] / 100.0)
        drift = (0.05 - 0.02 - 0.5 * 0.04) * result.times[1:]
        first, second = log_paths[:500] - drift, log_paths[500:] - drift
        assert np.allclose(first, -second)

    def test_antithetic_odd_paths(self, model):
        with pytest.raises(ValueError, match="must be even"):
            generate_gbm_paths(model, 1001, 1.0, 5, antithetic=True)


class TestBachelierPaths:
    """Tests for generate_bachelier_paths."""

    def test_discounted_martingale(self):
        """[T1] E[S(t) e^{-rt}] = S(0)."""
        model = BachelierModel(spot=2.0, rate=0.03, volatility=0.2)
        result = generate_bachelier_paths(model, 100_000, 1.0, 10, seed=42)
        discounted = result.terminal_values * np.exp(-0.03)
        se = discounted.std() / np.sqrt(discounted.size)
        assert abs(discounted.mean() - 2.0) < 4 * se

    def test_normal_variance(self):
        """[T1] Var[S(T) e^{-rT}] = σ²T."""
        model = BachelierModel(spot=2.0, rate=0.0, volatility=0.2)
        result = generate_bachelier_paths(model, 100_000, 1.0, 10, seed=42)
        assert result.terminal_values.var() == pytest.approx(0.04, rel=0.02)

    def test_start_value(self):
        model = BachelierModel(spot=2.0, rate=0.05, volatility=0.2)
        result = generate_bachelier_paths(model, 10, 1.0, 10, seed=1)
        assert np.all(result.paths[:, 0] == 2.0)


class TestHestonPaths:
    """Tests for generate_heston_paths."""

    @pytest.fixture
    def model(self):
        params = HestonParams(v0=0.04, kappa=2.0, theta=0.04, sigma=0.3, rho=-0.7)
        return HestonModel(spot=100.0, rate=0.05, params=params, dividend=0.02)

    def test_shapes(self, model):
        result = generate_heston_paths(model, 1000, 1.0, 50, seed=42)
        assert result.paths.shape == (1000, 51)
        assert result.variance_paths.shape == (1000, 51)
        assert result.terminal_variances.shape == (1000,)

    def test_variance_non_negative(self, model):
        result = generate_heston_paths(model, 5000, 1.0, 50, seed=42)
        assert np.all(result.variance_paths >= 0)
        assert np.all(np.isfinite(result.paths))

    def test_forward_price(self, model):
        """[T1] E[S(T)] = S(0) exp((r - q) T) regardless of volatility dynamics."""
        result = generate_heston_paths(model, 100_000, 1.0, 50, seed=42)
        terminal = result.terminal_values
        se = terminal.std() / np.sqrt(terminal.size)
        assert abs(terminal.mean() - 100.0 * np.exp(0.03)) < 5 * se

    def test_invalid_paths(self, model):
        with pytest.raises(ValueError, match="n_paths must be > 0"):
            generate_heston_paths(model, 0, 1.0, 10)
