"""
Single-asset model definitions and the model descriptor.

Each model is an immutable parameter set. The simulation provider turns a
model into paths; valuation code never inspects the model type directly,
it reads the descriptor the provider returns:

- BlackScholesLike(parameters): constant rate, constant volatility,
  log-normal dynamics. Closed-form vanilla prices exist.
- OtherModel(name): anything else. No closed form is assumed.

[T1] Black-Scholes:  dS = (r - q) S dt + σ S dW
[T1] Bachelier:      dS = r S dt + σ e^{rt} dW   (S e^{-rt} is a martingale)
[T1] Heston:         dS = (r - q) S dt + √v S dW1,
                     dv = κ(θ - v) dt + ξ √v dW2,  dW1 dW2 = ρ dt
"""

from dataclasses import dataclass
from typing import Union

import numpy as np


@dataclass(frozen=True)
class ModelParameters:
    """
    Read-only snapshot of Black-Scholes parameters.

    Attributes
    ----------
    initial_value : float
        S(0)
    risk_free_rate : float
        Constant risk-free rate (annualized, decimal)
    volatility : float
        Constant volatility (annualized, decimal)
    dividend_yield : float
        Continuous dividend yield (annualized, decimal)
    """

    initial_value: float
    risk_free_rate: float
    volatility: float
    dividend_yield: float = 0.0


@dataclass(frozen=True)
class BlackScholesLike:
    """Descriptor: the model has Black-Scholes parameters."""

    parameters: ModelParameters


@dataclass(frozen=True)
class OtherModel:
    """Descriptor: no closed-form Black-Scholes parameters."""

    name: str


ModelDescriptor = Union[BlackScholesLike, OtherModel]


def _validate_common(spot: float, rate: float) -> None:
    if spot <= 0:
        raise ValueError(f"CRITICAL: spot must be > 0, got {spot}")
    if not np.isfinite(rate):
        raise ValueError(f"CRITICAL: rate must be finite, got {rate}")


@dataclass(frozen=True)
class BlackScholesModel:
    """
    Black-Scholes (geometric Brownian motion) model.

    Attributes
    ----------
    spot : float
        Initial asset value
    rate : float
        Risk-free rate
    volatility : float
        Volatility
    dividend : float
        Dividend yield
    """

    spot: float
    rate: float
    volatility: float
    dividend: float = 0.0

    def __post_init__(self) -> None:
        """Validate parameters."""
        _validate_common(self.spot, self.rate)
        if self.volatility <= 0:
            raise ValueError(f"CRITICAL: volatility must be > 0, got {self.volatility}")

    @property
    def name(self) -> str:
        return "black_scholes"

    def describe(self) -> ModelDescriptor:
        return BlackScholesLike(
            ModelParameters(
                initial_value=self.spot,
                risk_free_rate=self.rate,
                volatility=self.volatility,
                dividend_yield=self.dividend,
            )
        )


@dataclass(frozen=True)
class BachelierModel:
    """
    Bachelier (normal) model in discounted-martingale form.

    Attributes
    ----------
    spot : float
        Initial asset value
    rate : float
        Risk-free rate
    volatility : float
        Absolute (normal) volatility of the discounted asset
    """

    spot: float
    rate: float
    volatility: float

    def __post_init__(self) -> None:
        """Validate parameters."""
        _validate_common(self.spot, self.rate)
        if self.volatility < 0:
            raise ValueError(f"CRITICAL: volatility must be >= 0, got {self.volatility}")

    @property
    def name(self) -> str:
        return "bachelier"

    def describe(self) -> ModelDescriptor:
        return OtherModel(self.name)


@dataclass(frozen=True)
class HestonParams:
    """
    Heston model parameters.

    Attributes
    ----------
    v0 : float
        Initial variance (v0 > 0)
    kappa : float
        Mean reversion speed (kappa > 0)
    theta : float
        Long-run variance (theta > 0)
    sigma : float
        Volatility of volatility (sigma > 0)
    rho : float
        Correlation between asset and variance (-1 <= rho <= 1)

    Notes
    -----
    [T1] Feller condition: 2*kappa*theta >= sigma^2
    If satisfied, variance process stays strictly positive.
    """

    v0: float
    kappa: float
    theta: float
    sigma: float
    rho: float

    def __post_init__(self) -> None:
        """Validate Heston parameters."""
        if self.v0 <= 0:
            raise ValueError(f"CRITICAL: v0 must be > 0. Got: v0={self.v0}.")
        if self.kappa <= 0:
            raise ValueError(f"CRITICAL: kappa must be > 0. Got: kappa={self.kappa}.")
        if self.theta <= 0:
            raise ValueError(f"CRITICAL: theta must be > 0. Got: theta={self.theta}.")
        if self.sigma <= 0:
            raise ValueError(f"CRITICAL: sigma must be > 0. Got: sigma={self.sigma}.")
        if not (-1 <= self.rho <= 1):
            raise ValueError(f"CRITICAL: rho must be in [-1, 1]. Got: rho={self.rho}.")

    def satisfies_feller(self) -> bool:
        """[T1] Feller condition: 2*kappa*theta >= sigma^2."""
        return 2 * self.kappa * self.theta >= self.sigma**2


@dataclass(frozen=True)
class HestonModel:
    """
    Heston stochastic volatility model.

    Volatility is stochastic, so there are no constant Black-Scholes
    parameters to snapshot: the descriptor is OtherModel.
    """

    spot: float
    rate: float
    params: HestonParams
    dividend: float = 0.0

    def __post_init__(self) -> None:
        """Validate parameters."""
        _validate_common(self.spot, self.rate)

    @property
    def name(self) -> str:
        return "heston"

    def describe(self) -> ModelDescriptor:
        return OtherModel(self.name)


AssetModel = Union[BlackScholesModel, BachelierModel, HestonModel]
