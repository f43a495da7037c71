"""
Bachelier (normal model) path generation.

[T1] Discounted asset is an arithmetic Brownian motion:
  S(t) e^{-rt} = S(0) + σ W(t)
so the simulation is exact on any grid:
  S(t) = e^{rt} (S(0) + σ W(t))

Paths may become negative; that is a property of the model.
"""

import numpy as np

from asian_pricing.models import BachelierModel
from asian_pricing.options.simulation.gbm import (
    PathResult,
    make_time_grid,
    standard_normal_increments,
)


def generate_bachelier_paths(
    model: BachelierModel,
    n_paths: int,
    time_horizon: float,
    n_steps: int,
    seed: int | None = None,
    antithetic: bool = False,
) -> PathResult:
    """
    Generate Bachelier paths on a uniform grid.

    Parameters
    ----------
    model : BachelierModel
        Spot, rate and normal volatility
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
    """
    times = make_time_grid(time_horizon, n_steps)
    rng = np.random.default_rng(seed)
    z = standard_normal_increments(rng, n_paths, n_steps, antithetic)

    dt = time_horizon / n_steps
    brownian = np.cumsum(np.sqrt(dt) * z, axis=1)

    discounted = np.empty((n_paths, n_steps + 1))
    discounted[:, 0] = model.spot
    discounted[:, 1:] = model.spot + model.volatility * brownian

    paths = discounted * np.exp(model.rate * times)

    return PathResult(paths=paths, times=times, seed=seed, antithetic=antithetic)
