"""
Asset simulation providers.

A provider is what products are valued against: it exposes the simulated
asset value at a time as a Sample, the numeraire, and a descriptor of the
model behind the simulation. Products never touch path matrices or model
classes directly.

MonteCarloAssetModel is the concrete provider: a single-asset model
(Black-Scholes, Bachelier or Heston) simulated on a uniform grid. Paths
are generated once, on first access, and cached read-only. Asset values
exist only at grid times: asking for any other time is a SimulationError,
never an interpolated or stale value.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

from asian_pricing.config.settings import SETTINGS
from asian_pricing.config.tolerances import TIME_MATCH_TOLERANCE
from asian_pricing.models import (
    AssetModel,
    BachelierModel,
    BlackScholesModel,
    HestonModel,
    ModelDescriptor,
)
from asian_pricing.options.simulation.bachelier import generate_bachelier_paths
from asian_pricing.options.simulation.gbm import (
    PathResult,
    generate_gbm_paths,
    make_time_grid,
)
from asian_pricing.options.simulation.heston_paths import generate_heston_paths
from asian_pricing.options.simulation.sample import Sample

logger = logging.getLogger(__name__)


class SimulationError(Exception):
    """Raised when the simulation cannot produce the requested values."""

    pass


class AssetSimulationProvider(ABC):
    """
    Interface consumed by Monte Carlo products.

    Subclasses must implement:
    - n_paths property
    - asset_value_at(time, asset_index)
    - numeraire(time)
    - underlying_model_descriptor()
    """

    @property
    @abstractmethod
    def n_paths(self) -> int:
        """Number of simulated paths."""

    @abstractmethod
    def asset_value_at(self, time: float, asset_index: int = 0) -> Sample:
        """
        Per-path asset value at the given time.

        Raises SimulationError if the simulation has no value at that time.
        """

    @abstractmethod
    def numeraire(self, time: float) -> Sample:
        """Per-path numeraire N(t) used for discounting."""

    @abstractmethod
    def underlying_model_descriptor(self) -> ModelDescriptor:
        """BlackScholesLike(parameters) or OtherModel(name)."""

    def constant_sample(self, value: float) -> Sample:
        """Deterministic Sample with this provider's path count."""
        return Sample.constant(value, self.n_paths)


class MonteCarloAssetModel(AssetSimulationProvider):
    """
    Monte Carlo simulation of a single-asset model.

    Parameters
    ----------
    model : BlackScholesModel | BachelierModel | HestonModel
        Model to simulate
    n_paths : int
        Number of paths
    time_horizon : float
        Last simulated time in years
    n_steps : int
        Number of uniform time steps
    seed : int, optional
        Random seed for reproducibility
    antithetic : bool, default False
        Antithetic variates (Black-Scholes and Bachelier only)

    Examples
    --------
    >>> model = BlackScholesModel(spot=1.0, rate=0.05, volatility=0.30)
    >>> simulation = MonteCarloAssetModel(model, n_paths=10000, time_horizon=2.0, n_steps=20, seed=1897)
    >>> simulation.asset_value_at(1.0).mean()  # ≈ exp(0.05)
    """

    def __init__(
        self,
        model: AssetModel,
        n_paths: int,
        time_horizon: float,
        n_steps: int,
        seed: int | None = None,
        antithetic: bool = False,
    ):
        if n_paths <= 0:
            raise ValueError(f"CRITICAL: n_paths must be > 0, got {n_paths}")
        if time_horizon <= 0:
            raise ValueError(f"CRITICAL: time_horizon must be > 0, got {time_horizon}")
        if n_steps <= 0:
            raise ValueError(f"CRITICAL: n_steps must be > 0, got {n_steps}")
        if antithetic and n_paths % 2 != 0:
            raise ValueError(f"CRITICAL: n_paths must be even for antithetic, got {n_paths}")
        if antithetic and isinstance(model, HestonModel):
            raise ValueError("CRITICAL: antithetic variates are not supported for Heston")

        self.model = model
        self._n_paths = n_paths
        self.time_horizon = time_horizon
        self.n_steps = n_steps
        self.seed = seed
        self.antithetic = antithetic
        self._paths: PathResult | None = None

    @classmethod
    def from_time_step(
        cls,
        model: AssetModel,
        time_horizon: float,
        n_paths: int | None = None,
        time_step: float | None = None,
        seed: int | None = None,
        antithetic: bool = False,
    ) -> "MonteCarloAssetModel":
        """
        Build a provider from a time step rather than a step count.

        Unset n_paths, time_step and seed come from SETTINGS.simulation.

        Raises
        ------
        ValueError
            If time_step <= 0 or time_horizon is not a whole number of steps
        """
        config = SETTINGS.simulation
        if n_paths is None:
            n_paths = config.mc_paths
        if time_step is None:
            time_step = config.time_step
        if seed is None:
            seed = config.mc_seed

        if time_step <= 0:
            raise ValueError(f"CRITICAL: time_step must be > 0, got {time_step}")
        n_steps = int(round(time_horizon / time_step))
        if n_steps < 1 or abs(n_steps * time_step - time_horizon) > TIME_MATCH_TOLERANCE:
            raise ValueError(
                f"CRITICAL: time_horizon {time_horizon} must be a whole number of "
                f"time steps {time_step}"
            )
        return cls(model, n_paths, time_horizon, n_steps, seed, antithetic)

    @property
    def n_paths(self) -> int:
        return self._n_paths

    @property
    def time_grid(self) -> np.ndarray:
        """Uniform simulation times 0, dt, ..., time_horizon."""
        return make_time_grid(self.time_horizon, self.n_steps)

    def _simulate(self) -> PathResult:
        if self._paths is not None:
            return self._paths

        logger.debug(
            "Simulating %d paths of %s over %d steps (seed=%s)",
            self._n_paths, self.model.name, self.n_steps, self.seed,
        )
        if isinstance(self.model, BlackScholesModel):
            result = generate_gbm_paths(
                self.model, self._n_paths, self.time_horizon, self.n_steps,
                self.seed, self.antithetic,
            )
        elif isinstance(self.model, BachelierModel):
            result = generate_bachelier_paths(
                self.model, self._n_paths, self.time_horizon, self.n_steps,
                self.seed, self.antithetic,
            )
        elif isinstance(self.model, HestonModel):
            result = generate_heston_paths(
                self.model, self._n_paths, self.time_horizon, self.n_steps, self.seed,
            )
        else:
            raise SimulationError(f"Unsupported model type: {type(self.model).__name__}")

        if not np.all(np.isfinite(result.paths)):
            raise SimulationError(
                f"Simulation of {self.model.name} produced non-finite asset values"
            )

        result.paths.flags.writeable = False
        self._paths = result
        return result

    def _time_index(self, time: float) -> int:
        """
        Index of the grid time within TIME_MATCH_TOLERANCE of time.

        Raises
        ------
        SimulationError
            If time is outside the horizon or between grid points
        """
        times = self.time_grid
        if time < -TIME_MATCH_TOLERANCE or time > times[-1] + TIME_MATCH_TOLERANCE:
            raise SimulationError(
                f"Time {time} outside simulated horizon [0, {times[-1]}]"
            )
        index = int(np.argmin(np.abs(times - time)))
        if abs(times[index] - time) > TIME_MATCH_TOLERANCE:
            raise SimulationError(
                f"Time {time} is not on the simulation grid "
                f"(step {times[1] - times[0]}); nearest grid time is {times[index]}"
            )
        return index

    def asset_value_at(self, time: float, asset_index: int = 0) -> Sample:
        if asset_index != 0:
            raise SimulationError(
                f"Single-asset simulation has no asset with index {asset_index}"
            )
        index = self._time_index(time)
        return Sample(self._simulate().paths[:, index])

    def numeraire(self, time: float) -> Sample:
        """[T1] Bank account N(t) = exp(r t), identical on every path."""
        return self.constant_sample(np.exp(self.model.rate * time))

    def underlying_model_descriptor(self) -> ModelDescriptor:
        return self.model.describe()
