"""
asian-pricing: Monte Carlo pricing of Asian options with control variates.

Quick Start
-----------
>>> from asian_pricing import (
...     AsianOptionWithControlVariate, AveragingSchedule, BlackScholesModel,
...     MonteCarloAssetModel, OptionSpec,
... )
>>> model = BlackScholesModel(spot=1.0, rate=0.05, volatility=0.30)
>>> simulation = MonteCarloAssetModel(model, n_paths=200_000, time_horizon=2.0, n_steps=20, seed=1897)
>>> spec = OptionSpec(maturity=2.0, strike=1.0)
>>> schedule = AveragingSchedule.from_step(0.2, 0.2, 10)
>>> result = AsianOptionWithControlVariate(spec, schedule).value_with_diagnostics(0.0, simulation)

Version: 0.1.0
"""

__version__ = "0.1.0"

# =============================================================================
# Configuration
# =============================================================================
from asian_pricing.config.settings import SETTINGS, DegeneratePolicy

# =============================================================================
# Models
# =============================================================================
from asian_pricing.models import (
    BachelierModel,
    BlackScholesLike,
    BlackScholesModel,
    HestonModel,
    HestonParams,
    ModelParameters,
    OtherModel,
)

# =============================================================================
# Simulation
# =============================================================================
from asian_pricing.options.simulation import (
    AssetSimulationProvider,
    MCResult,
    MonteCarloAssetModel,
    Sample,
    SimulationError,
    summarize_sample,
    variance_reduction_ratio,
)

# =============================================================================
# Analytic Pricing
# =============================================================================
from asian_pricing.options.pricing import (
    bachelier_call,
    black_scholes_call,
)

# =============================================================================
# Products
# =============================================================================
from asian_pricing.products import (
    AsianOption,
    AsianOptionWithControlVariate,
    AveragingSchedule,
    EuropeanOption,
    OptionSpec,
    ScheduleValidationError,
    ValuationDiagnostic,
    ValuationResult,
    VarianceReductionStatus,
)

# =============================================================================
# Variance Reduction
# =============================================================================
from asian_pricing.variance_reduction import (
    BlackScholesCapable,
    ControlVariateResult,
    DegenerateControlVariateError,
    Incapable,
    analytic_average_of_calls,
    check_model_capability,
    combine,
    optimal_coefficient,
    sample_average_of_calls,
)

__all__ = [
    # Version
    "__version__",
    # Config
    "SETTINGS",
    "DegeneratePolicy",
    # Models
    "BachelierModel",
    "BlackScholesLike",
    "BlackScholesModel",
    "HestonModel",
    "HestonParams",
    "ModelParameters",
    "OtherModel",
    # Simulation
    "AssetSimulationProvider",
    "MCResult",
    "MonteCarloAssetModel",
    "Sample",
    "SimulationError",
    "summarize_sample",
    "variance_reduction_ratio",
    # Analytic
    "bachelier_call",
    "black_scholes_call",
    # Products
    "AsianOption",
    "AsianOptionWithControlVariate",
    "AveragingSchedule",
    "EuropeanOption",
    "OptionSpec",
    "ScheduleValidationError",
    "ValuationDiagnostic",
    "ValuationResult",
    "VarianceReductionStatus",
    # Variance reduction
    "BlackScholesCapable",
    "ControlVariateResult",
    "DegenerateControlVariateError",
    "Incapable",
    "analytic_average_of_calls",
    "check_model_capability",
    "combine",
    "optimal_coefficient",
    "sample_average_of_calls",
]
