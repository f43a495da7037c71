"""
Monte Carlo products.

Provides:
- Option terms and averaging schedules
- Plain European and Asian calls
- Asian call with a Black-Scholes control variate
"""

from asian_pricing.products.asian import AsianOption, EuropeanOption
from asian_pricing.products.asian_control_variate import (
    AsianOptionWithControlVariate,
    ValuationDiagnostic,
    ValuationResult,
    VarianceReductionStatus,
)
from asian_pricing.products.base import MonteCarloProduct
from asian_pricing.schedule import (
    AveragingSchedule,
    OptionSpec,
    ScheduleValidationError,
    validate_schedule,
)

__all__ = [
    "AveragingSchedule",
    "OptionSpec",
    "ScheduleValidationError",
    "validate_schedule",
    "MonteCarloProduct",
    "AsianOption",
    "EuropeanOption",
    "AsianOptionWithControlVariate",
    "ValuationDiagnostic",
    "ValuationResult",
    "VarianceReductionStatus",
]
