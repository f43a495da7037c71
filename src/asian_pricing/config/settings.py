"""
Frozen configuration settings for Monte Carlo pricing.

All configuration is immutable (frozen dataclasses) to ensure reproducibility.
See: config/tolerances.py for numeric thresholds.
"""

import os
from dataclasses import dataclass
from enum import Enum

from asian_pricing.config.tolerances import DEGENERATE_VARIANCE_TOLERANCE


class DegeneratePolicy(Enum):
    """What to do when the control sample has (near) zero variance."""

    RAISE = "raise"  # DegenerateControlVariateError
    ZERO_COEFFICIENT = "zero"  # beta = 0, plain estimator


def _resolve_degenerate_policy() -> DegeneratePolicy:
    """
    Resolve degenerate-control policy with environment variable override.

    Priority:
    1. ASIAN_PRICING_DEGENERATE_POLICY environment variable ("raise" or "zero")
    2. Default: DegeneratePolicy.RAISE
    """
    env_value = os.environ.get("ASIAN_PRICING_DEGENERATE_POLICY", "").strip().lower()
    if not env_value:
        return DegeneratePolicy.RAISE
    try:
        return DegeneratePolicy(env_value)
    except ValueError:
        valid = ", ".join(p.value for p in DegeneratePolicy)
        raise ValueError(
            f"CRITICAL: ASIAN_PRICING_DEGENERATE_POLICY must be one of {valid}, "
            f"got {env_value!r}"
        ) from None


# =============================================================================
# Simulation Configuration
# =============================================================================

@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable Monte Carlo simulation defaults. [T3: Assumptions]

    Attributes
    ----------
    mc_paths : int
        Number of Monte Carlo paths
    mc_seed : int
        Random seed for reproducibility
    time_step : float
        Default simulation time step in years
    """

    mc_paths: int = 200_000
    mc_seed: int = 1897
    time_step: float = 0.1


# =============================================================================
# Control Variate Configuration
# =============================================================================

@dataclass(frozen=True)
class ControlVariateConfig:
    """
    Immutable control variate configuration.

    Attributes
    ----------
    degenerate_policy : DegeneratePolicy
        Behavior when Var(Y) is numerically zero
    min_control_variance : float
        Relative variance floor below which the control is degenerate
    confidence_z : float
        z-score for reported confidence intervals
    """

    degenerate_policy: DegeneratePolicy = None  # type: ignore[assignment]  # Set in __post_init__
    min_control_variance: float = DEGENERATE_VARIANCE_TOLERANCE
    confidence_z: float = 1.96

    def __post_init__(self) -> None:
        """Resolve degenerate policy from the environment when not given."""
        # Frozen dataclass workaround: use object.__setattr__
        if self.degenerate_policy is None:
            object.__setattr__(self, "degenerate_policy", _resolve_degenerate_policy())
        if self.min_control_variance < 0:
            raise ValueError(
                f"CRITICAL: min_control_variance must be >= 0, got {self.min_control_variance}"
            )


# =============================================================================
# Master Configuration
# =============================================================================

@dataclass(frozen=True)
class Settings:
    """
    Master frozen configuration combining all sub-configs.

    Usage
    -----
    >>> from asian_pricing.config.settings import SETTINGS
    >>> SETTINGS.simulation.mc_paths
    200000
    """

    simulation: SimulationConfig = SimulationConfig()
    control_variate: ControlVariateConfig = ControlVariateConfig()


# Singleton instance - import this
SETTINGS = Settings()
