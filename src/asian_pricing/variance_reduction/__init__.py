"""
Variance reduction by control variates.

Provides:
- Model capability dispatch (is a closed-form control available?)
- Average-of-calls control: simulated sample and analytic expectation
- Optimal coefficient and combined estimator
"""

from asian_pricing.variance_reduction.capability import (
    BlackScholesCapable,
    Capability,
    Incapable,
    check_model_capability,
)
from asian_pricing.variance_reduction.control_variate import (
    ControlVariateResult,
    DegenerateControlVariateError,
    analytic_average_of_calls,
    build_control_variate,
    combine,
    optimal_coefficient,
    sample_average_of_calls,
)

__all__ = [
    # Dispatch
    "BlackScholesCapable",
    "Capability",
    "Incapable",
    "check_model_capability",
    # Control variate
    "ControlVariateResult",
    "DegenerateControlVariateError",
    "analytic_average_of_calls",
    "build_control_variate",
    "combine",
    "optimal_coefficient",
    "sample_average_of_calls",
]
