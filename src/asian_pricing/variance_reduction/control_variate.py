"""
Control variate estimator for Asian options under Black-Scholes.

The control Y is the average of discounted vanilla call payoffs with the
Asian option's strike, one per averaging date:

    Y = (1/n) Σ_i max(S(t_i) - K, 0) e^{-r (t_i - t)}

It mirrors the structure of the Asian payoff, so it is strongly correlated
with the target Z, and its expectation is known in closed form:

    E[Y] = (1/n) Σ_i C_BS(S0, K, r, q, σ, t_i - t)

[T1] Combined estimator:  R = Z - β (Y - E[Y])
[T1] Optimal coefficient: β* = Cov(Z, Y) / Var(Y)
     minimizes Var(R); E[R] = E[Z] for any β.

References
----------
[T1] Glasserman (2003) "Monte Carlo Methods in Financial Engineering", Sec. 4.1
[T1] Kemna, A., & Vorst, A. (1990). A pricing method for options based on
     average asset values. Journal of Banking and Finance, 14(1), 113-129.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import reduce

import numpy as np

from asian_pricing.config.settings import SETTINGS, DegeneratePolicy
from asian_pricing.config.tolerances import TIME_MATCH_TOLERANCE
from asian_pricing.models import ModelParameters
from asian_pricing.options.pricing.black_scholes import black_scholes_call
from asian_pricing.options.simulation.sample import Sample
from asian_pricing.schedule import AveragingSchedule, OptionSpec

logger = logging.getLogger(__name__)

AssetValueAccessor = Callable[[float, int], Sample]


class DegenerateControlVariateError(ArithmeticError):
    """Raised when the control sample has (near) zero variance."""

    pass


@dataclass(frozen=True)
class ControlVariateResult:
    """
    Control variate built for one valuation.

    Attributes
    ----------
    simulated_sample : Sample
        Per-path control Y
    analytic_expectation : float
        Closed-form E[Y]
    optimal_coefficient : float
        β* = Cov(Z, Y) / Var(Y)
    correlation : float
        Sample correlation of Z and Y
    """

    simulated_sample: Sample
    analytic_expectation: float
    optimal_coefficient: float
    correlation: float = 0.0

    @property
    def simulation_error(self) -> float:
        """mean(Y) - E[Y]: the Monte Carlo error the control corrects for."""
        return self.simulated_sample.mean() - self.analytic_expectation


def _check_evaluation_time(schedule: AveragingSchedule, evaluation_time: float) -> None:
    if not np.isfinite(evaluation_time):
        raise ValueError(f"CRITICAL: evaluation_time must be finite, got {evaluation_time}")
    if evaluation_time > schedule.first + TIME_MATCH_TOLERANCE:
        raise ValueError(
            f"CRITICAL: evaluation_time {evaluation_time} is after the first "
            f"averaging date {schedule.first}"
        )


def sample_average_of_calls(
    schedule: AveragingSchedule,
    spec: OptionSpec,
    parameters: ModelParameters,
    asset_value_at: AssetValueAccessor,
    evaluation_time: float = 0.0,
) -> Sample:
    """
    Simulated control: per-path average of discounted call payoffs.

    Parameters
    ----------
    schedule : AveragingSchedule
        Averaging dates t_1, ..., t_n
    spec : OptionSpec
        Strike and underlying index
    parameters : ModelParameters
        Black-Scholes snapshot (rate used for discounting)
    asset_value_at : Callable[[float, int], Sample]
        Simulated asset value at (time, index)
    evaluation_time : float, default 0.0
        Time the payoffs are discounted to

    Returns
    -------
    Sample
        Y, one value per path
    """
    _check_evaluation_time(schedule, evaluation_time)
    rate = parameters.risk_free_rate

    def discounted_call(time: float) -> Sample:
        underlying = asset_value_at(time, spec.underlying_index)
        return underlying.sub(spec.strike).floor(0.0).mult(np.exp(-rate * (time - evaluation_time)))

    total = reduce(Sample.add, map(discounted_call, schedule))
    return total.div(schedule.n)


def analytic_average_of_calls(
    parameters: ModelParameters,
    schedule: AveragingSchedule,
    spec: OptionSpec,
    evaluation_time: float = 0.0,
) -> float:
    """
    Closed-form expectation of sample_average_of_calls().

    [T1] E[Y] = (1/n) Σ_i C_BS(S0, K, r, q, σ, t_i - t)

    With a single averaging date equal to maturity this is the vanilla
    Black-Scholes call price.
    """
    _check_evaluation_time(schedule, evaluation_time)

    call_sum = sum(
        black_scholes_call(
            spot=parameters.initial_value,
            strike=spec.strike,
            rate=parameters.risk_free_rate,
            dividend=parameters.dividend_yield,
            volatility=parameters.volatility,
            time_to_expiry=max(time - evaluation_time, 0.0),
        )
        for time in schedule
    )
    return call_sum / schedule.n


def optimal_coefficient(
    target: Sample,
    control: Sample,
    min_variance: float | None = None,
    on_degenerate: DegeneratePolicy | None = None,
) -> float:
    """
    Variance-minimizing coefficient β* = Cov(Z, Y) / Var(Y).

    Parameters
    ----------
    target : Sample
        Z, the payoff being priced
    control : Sample
        Y, the control
    min_variance : float, optional
        Relative variance floor; Var(Y) <= min_variance * (mean(Y)² + 1)
        is degenerate. Defaults to SETTINGS.control_variate.min_control_variance
    on_degenerate : DegeneratePolicy, optional
        RAISE or ZERO_COEFFICIENT. Defaults to
        SETTINGS.control_variate.degenerate_policy

    Returns
    -------
    float
        β*

    Raises
    ------
    DegenerateControlVariateError
        If the control is degenerate and the policy is RAISE
    ValueError
        If the samples have different lengths
    """
    if target.n_paths != control.n_paths:
        raise ValueError(
            f"CRITICAL: samples must have equal length ({target.n_paths} vs {control.n_paths})"
        )
    config = SETTINGS.control_variate
    if min_variance is None:
        min_variance = config.min_control_variance
    if on_degenerate is None:
        on_degenerate = config.degenerate_policy

    variance = control.variance()
    threshold = min_variance * (control.mean() ** 2 + 1.0)
    if variance <= threshold:
        if on_degenerate == DegeneratePolicy.ZERO_COEFFICIENT:
            logger.warning(
                "Control variate variance %.3e below %.3e: using beta = 0",
                variance, threshold,
            )
            return 0.0
        raise DegenerateControlVariateError(
            f"Control variate variance {variance:.3e} is below {threshold:.3e}; "
            f"optimal coefficient is undefined"
        )

    return target.covariance(control) / variance


def combine(
    target: Sample,
    control: Sample,
    analytic_expectation: float,
    coefficient: float,
) -> Sample:
    """
    Variance-reduced sample R = Z - β (Y - E[Y]).

    [T1] E[R] = E[Z] for any β, since E[Y - E[Y]] = 0.
    """
    if target.n_paths != control.n_paths:
        raise ValueError(
            f"CRITICAL: samples must have equal length ({target.n_paths} vs {control.n_paths})"
        )
    return target.sub(control.sub(analytic_expectation).mult(coefficient))


def build_control_variate(
    target: Sample,
    schedule: AveragingSchedule,
    spec: OptionSpec,
    parameters: ModelParameters,
    asset_value_at: AssetValueAccessor,
    evaluation_time: float = 0.0,
    on_degenerate: DegeneratePolicy | None = None,
) -> ControlVariateResult:
    """
    Simulated control, its analytic expectation and β* for one valuation.
    """
    control = sample_average_of_calls(schedule, spec, parameters, asset_value_at, evaluation_time)
    coefficient = optimal_coefficient(target, control, on_degenerate=on_degenerate)
    expectation = analytic_average_of_calls(parameters, schedule, spec, evaluation_time)

    return ControlVariateResult(
        simulated_sample=control,
        analytic_expectation=expectation,
        optimal_coefficient=coefficient,
        correlation=target.correlation(control),
    )
