"""
Geometric Brownian Motion (GBM) path generation.

Implements path simulation for the Black-Scholes model:
- Exact log-normal stepping on a uniform time grid
- Antithetic variates
- NumPy vectorized operations for performance

[T1] GBM SDE: dS = (r - q)S dt + σS dW

See: Glasserman (2003) "Monte Carlo Methods in Financial Engineering"
"""

from dataclasses import dataclass

import numpy as np

from asian_pricing.models import BlackScholesModel


@dataclass(frozen=True)
class PathResult:
    """
    Result of path generation.

    Attributes
    ----------
    paths : np.ndarray
        Simulated paths, shape (n_paths, n_steps + 1)
    times : np.ndarray
        Time points, shape (n_steps + 1,)
    seed : int, optional
        Random seed used
    antithetic : bool
        Whether antithetic variates were used
    """

    paths: np.ndarray
    times: np.ndarray
    seed: int | None = None
    antithetic: bool = False

    @property
    def n_paths(self) -> int:
        """Number of paths."""
        return self.paths.shape[0]

    @property
    def n_steps(self) -> int:
        """Number of time steps."""
        return self.paths.shape[1] - 1

    @property
    def terminal_values(self) -> np.ndarray:
        """Terminal values of all paths."""
        return self.paths[:, -1]


def make_time_grid(time_horizon: float, n_steps: int) -> np.ndarray:
    """
    Uniform time grid 0 = t_0 < t_1 < ... < t_n = time_horizon.

    Raises
    ------
    ValueError
        If time_horizon <= 0 or n_steps <= 0
    """
    if time_horizon <= 0:
        raise ValueError(f"CRITICAL: time_horizon must be > 0, got {time_horizon}")
    if n_steps <= 0:
        raise ValueError(f"CRITICAL: n_steps must be > 0, got {n_steps}")
    return np.linspace(0.0, time_horizon, n_steps + 1)


def standard_normal_increments(
    rng: np.random.Generator,
    n_paths: int,
    n_steps: int,
    antithetic: bool = False,
) -> np.ndarray:
    """
    Draw standard normals of shape (n_paths, n_steps).

    With antithetic=True the second half of the rows is the negation
    of the first half.
    """
    if n_paths <= 0:
        raise ValueError(f"CRITICAL: n_paths must be > 0, got {n_paths}")
    if antithetic and n_paths % 2 != 0:
        raise ValueError(f"CRITICAL: n_paths must be even for antithetic, got {n_paths}")

    if antithetic:
        z = rng.standard_normal((n_paths // 2, n_steps))
        return np.vstack([z, -z])
    return rng.standard_normal((n_paths, n_steps))


def generate_gbm_paths(
    model: BlackScholesModel,
    n_paths: int,
    time_horizon: float,
    n_steps: int,
    seed: int | None = None,
    antithetic: bool = False,
) -> PathResult:
    """
    Generate GBM paths on a uniform grid.

    [T1] Uses exact log-normal simulation:
    S(t+dt) = S(t) * exp((r - q - σ²/2)dt + σ√dt * Z)

    Parameters
    ----------
    model : BlackScholesModel
        Spot, rate, dividend and volatility
    n_paths : int
        Number of paths to simulate
    time_horizon : float
        Last simulated time in years
    n_steps : int
        Number of time steps per path
    seed : int, optional
        Random seed for reproducibility
    antithetic : bool, default False
        Use antithetic variates

    Returns
    -------
    PathResult
        Simulated paths and metadata

    Examples
    --------
    >>> model = BlackScholesModel(spot=1.0, rate=0.05, volatility=0.30)
    >>> result = generate_gbm_paths(model, n_paths=10000, time_horizon=2.0, n_steps=20, seed=42)
    >>> result.paths.shape
    (10000, 21)
    """
    times = make_time_grid(time_horizon, n_steps)
    rng = np.random.default_rng(seed)
    z = standard_normal_increments(rng, n_paths, n_steps, antithetic)

    dt = time_horizon / n_steps
    drift_per_step = (model.rate - model.dividend - 0.5 * model.volatility**2) * dt
    vol_per_step = model.volatility * np.sqrt(dt)

    cum_log_returns = np.cumsum(drift_per_step + vol_per_step * z, axis=1)

    # Build paths: S(t) = S(0) * exp(cumulative log-returns)
    paths = np.empty((n_paths, n_steps + 1))
    paths[:, 0] = model.spot
    paths[:, 1:] = model.spot * np.exp(cum_log_returns)

    return PathResult(paths=paths, times=times, seed=seed, antithetic=antithetic)
