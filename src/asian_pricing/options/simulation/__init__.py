"""
Monte Carlo simulation for option pricing.

Provides:
- Per-path Sample arithmetic and statistics
- GBM, Bachelier and Heston path generation
- Asset simulation providers
- Result summaries
"""

from asian_pricing.options.simulation.bachelier import generate_bachelier_paths
from asian_pricing.options.simulation.gbm import (
    PathResult,
    generate_gbm_paths,
    make_time_grid,
)
from asian_pricing.options.simulation.heston_paths import (
    HestonPathResult,
    generate_heston_paths,
)
from asian_pricing.options.simulation.monte_carlo import (
    MCResult,
    summarize_sample,
    variance_reduction_ratio,
)
from asian_pricing.options.simulation.provider import (
    AssetSimulationProvider,
    MonteCarloAssetModel,
    SimulationError,
)
from asian_pricing.options.simulation.sample import Sample

__all__ = [
    # Samples
    "Sample",
    # Paths
    "PathResult",
    "HestonPathResult",
    "generate_gbm_paths",
    "generate_bachelier_paths",
    "generate_heston_paths",
    "make_time_grid",
    # Providers
    "AssetSimulationProvider",
    "MonteCarloAssetModel",
    "SimulationError",
    # Results
    "MCResult",
    "summarize_sample",
    "variance_reduction_ratio",
]
