"""
Centralized pytest fixtures for asian-pricing test suite.

Fixture Categories:
1. Scenario Parameters - The reference Asian option scenario
2. Models - Black-Scholes, Bachelier, Heston
3. Simulations - Cached MonteCarloAssetModel providers
4. Stub Provider - Deterministic provider for exact unit tests
"""

from dataclasses import dataclass

import numpy as np
import pytest

from asian_pricing.models import (
    BachelierModel,
    BlackScholesModel,
    HestonModel,
    HestonParams,
    ModelDescriptor,
)
from asian_pricing.options.simulation.provider import (
    AssetSimulationProvider,
    MonteCarloAssetModel,
    SimulationError,
)
from asian_pricing.options.simulation.sample import Sample
from asian_pricing.schedule import AveragingSchedule, OptionSpec


# =============================================================================
# SCENARIO PARAMETERS
# =============================================================================

@dataclass(frozen=True)
class AsianScenario:
    """Reference scenario: ATM Asian call, 10 averaging dates over 2 years."""

    initial_value: float = 1.0
    risk_free_rate: float = 0.05
    volatility: float = 0.30
    strike: float = 1.0
    maturity: float = 2.0
    time_step: float = 0.1
    n_paths: int = 200_000
    seed: int = 1897

    @property
    def n_steps(self) -> int:
        return int(round(self.maturity / self.time_step))


SCENARIO = AsianScenario()


@pytest.fixture(scope="session")
def scenario() -> AsianScenario:
    return SCENARIO


@pytest.fixture(scope="session")
def option_spec() -> OptionSpec:
    return OptionSpec(maturity=SCENARIO.maturity, strike=SCENARIO.strike)


@pytest.fixture(scope="session")
def averaging_schedule() -> AveragingSchedule:
    """Averaging dates 0.2, 0.4, ..., 2.0."""
    return AveragingSchedule((0.2, 0.4, 0.6, 0.8, 1.0, 1.2, 1.4, 1.6, 1.8, 2.0))


# =============================================================================
# MODELS
# =============================================================================

@pytest.fixture(scope="session")
def bs_model() -> BlackScholesModel:
    return BlackScholesModel(
        spot=SCENARIO.initial_value,
        rate=SCENARIO.risk_free_rate,
        volatility=SCENARIO.volatility,
    )


@pytest.fixture(scope="session")
def bachelier_model() -> BachelierModel:
    return BachelierModel(
        spot=SCENARIO.initial_value,
        rate=SCENARIO.risk_free_rate,
        volatility=SCENARIO.volatility,
    )


@pytest.fixture(scope="session")
def heston_model() -> HestonModel:
    params = HestonParams(v0=0.09, kappa=2.0, theta=0.09, sigma=0.3, rho=-0.7)
    return HestonModel(spot=SCENARIO.initial_value, rate=SCENARIO.risk_free_rate, params=params)


# =============================================================================
# SIMULATIONS
# =============================================================================

@pytest.fixture(scope="session")
def scenario_simulation(bs_model) -> MonteCarloAssetModel:
    """Full-size Black-Scholes simulation of the reference scenario."""
    return MonteCarloAssetModel(
        bs_model,
        n_paths=SCENARIO.n_paths,
        time_horizon=SCENARIO.maturity,
        n_steps=SCENARIO.n_steps,
        seed=SCENARIO.seed,
    )


def make_simulation(model, n_paths: int = 20_000, seed: int = 42) -> MonteCarloAssetModel:
    """Smaller simulation on the scenario grid."""
    return MonteCarloAssetModel(
        model,
        n_paths=n_paths,
        time_horizon=SCENARIO.maturity,
        n_steps=SCENARIO.n_steps,
        seed=seed,
    )


@pytest.fixture(scope="session")
def simulation_factory():
    """make_simulation(model, n_paths=20_000, seed=42)."""
    return make_simulation


@pytest.fixture
def small_bs_simulation(bs_model) -> MonteCarloAssetModel:
    return make_simulation(bs_model)


@pytest.fixture
def bachelier_simulation(bachelier_model) -> MonteCarloAssetModel:
    return make_simulation(bachelier_model)


@pytest.fixture
def heston_simulation(heston_model) -> MonteCarloAssetModel:
    return make_simulation(heston_model)


# =============================================================================
# STUB PROVIDER
# =============================================================================

class StubProvider(AssetSimulationProvider):
    """
    Provider with fixed per-time asset values.

    Parameters
    ----------
    values_by_time : dict[float, list[float]]
        Asset values per path at each time
    descriptor : ModelDescriptor
        Returned by underlying_model_descriptor()
    rate : float
        Rate for the bank-account numeraire
    """

    def __init__(self, values_by_time: dict, descriptor: ModelDescriptor, rate: float = 0.0):
        self.values_by_time = {t: np.asarray(v, dtype=float) for t, v in values_by_time.items()}
        self.descriptor = descriptor
        self.rate = rate
        self.calls: list[tuple[float, int]] = []
        self._n_paths = len(next(iter(self.values_by_time.values())))

    @property
    def n_paths(self) -> int:
        return self._n_paths

    def asset_value_at(self, time: float, asset_index: int = 0) -> Sample:
        self.calls.append((time, asset_index))
        for known_time, values in self.values_by_time.items():
            if abs(known_time - time) < 1e-12:
                return Sample(values)
        raise SimulationError(f"No stub values at time {time}")

    def numeraire(self, time: float) -> Sample:
        return self.constant_sample(np.exp(self.rate * time))

    def underlying_model_descriptor(self) -> ModelDescriptor:
        return self.descriptor


@pytest.fixture
def stub_provider_cls():
    return StubProvider
