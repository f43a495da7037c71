"""
Plain Monte Carlo products: European and arithmetic-average Asian calls.

[T1] European call payoff at T:  max(S(T) - K, 0)
[T1] Asian call payoff at T:     max(A(T) - K, 0),  A(T) = (1/n) Σ S(t_i)

These are the standard (uncontrolled) estimators. The Asian option's
Sample is the target Z of the control variate estimator.
"""

from functools import reduce

from asian_pricing.options.simulation.provider import AssetSimulationProvider
from asian_pricing.options.simulation.sample import Sample
from asian_pricing.products.base import MonteCarloProduct, discount_to
from asian_pricing.schedule import (
    AveragingSchedule,
    OptionSpec,
    validate_schedule,
)


class EuropeanOption(MonteCarloProduct):
    """
    European call with the OptionSpec strike and maturity.

    Parameters
    ----------
    spec : OptionSpec
        Maturity, strike and underlying index
    """

    def __init__(self, spec: OptionSpec):
        self.spec = spec

    def get_value(self, evaluation_time: float, provider: AssetSimulationProvider) -> Sample:
        underlying = provider.asset_value_at(self.spec.maturity, self.spec.underlying_index)
        payoff = underlying.sub(self.spec.strike).floor(0.0)
        return discount_to(payoff, self.spec.maturity, evaluation_time, provider)


class AsianOption(MonteCarloProduct):
    """
    Arithmetic-average Asian call.

    Parameters
    ----------
    spec : OptionSpec
        Maturity, strike and underlying index
    schedule : AveragingSchedule
        Averaging dates; the last one must be the maturity

    Raises
    ------
    ScheduleValidationError
        If the last averaging date differs from the maturity

    Examples
    --------
    >>> spec = OptionSpec(maturity=2.0, strike=1.0)
    >>> option = AsianOption(spec, AveragingSchedule.from_step(0.2, 0.2, 10))
    """

    def __init__(self, spec: OptionSpec, schedule: AveragingSchedule):
        validate_schedule(spec, schedule)
        self.spec = spec
        self.schedule = schedule

    def average_underlying(self, provider: AssetSimulationProvider) -> Sample:
        """Per-path arithmetic average A(T) over the schedule."""
        total = reduce(
            lambda running, time: running.add(
                provider.asset_value_at(time, self.spec.underlying_index)
            ),
            self.schedule,
            provider.constant_sample(0.0),
        )
        return total.div(self.schedule.n)

    def get_value(self, evaluation_time: float, provider: AssetSimulationProvider) -> Sample:
        payoff = self.average_underlying(provider).sub(self.spec.strike).floor(0.0)
        return discount_to(payoff, self.spec.maturity, evaluation_time, provider)
