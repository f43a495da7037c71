"""
Asian option with a Black-Scholes control variate.

Valuation is one linear pass:
1. Z = plain Asian payoff sample (AsianOption)
2. Capability dispatch on the provider's model
3. Black-Scholes: build the average-of-calls control and return
   R = Z - β* (Y - E[Y])
   Anything else: return Z unchanged, with a NOT_APPLIED diagnostic

The diagnostic travels with the result (value_with_diagnostics) and is also
logged; get_value() returns only the Sample.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from asian_pricing.config.settings import DegeneratePolicy
from asian_pricing.options.simulation.provider import AssetSimulationProvider
from asian_pricing.options.simulation.sample import Sample
from asian_pricing.products.asian import AsianOption
from asian_pricing.products.base import MonteCarloProduct
from asian_pricing.schedule import (
    AveragingSchedule,
    OptionSpec,
    validate_schedule,
)
from asian_pricing.variance_reduction.capability import (
    BlackScholesCapable,
    check_model_capability,
)
from asian_pricing.variance_reduction.control_variate import (
    ControlVariateResult,
    build_control_variate,
    combine,
)

logger = logging.getLogger(__name__)


class VarianceReductionStatus(Enum):
    """Whether the control variate was applied."""

    APPLIED = "applied"
    NOT_APPLIED = "not_applied"


@dataclass(frozen=True)
class ValuationDiagnostic:
    """
    Side-channel notice about how a valuation was performed.

    Attributes
    ----------
    status : VarianceReductionStatus
        APPLIED or NOT_APPLIED
    message : str
        Human-readable explanation
    model_name : str, optional
        Model name when the control variate was not applied
    """

    status: VarianceReductionStatus
    message: str
    model_name: str | None = None

    @property
    def variance_reduced(self) -> bool:
        """True when the control variate was applied."""
        return self.status == VarianceReductionStatus.APPLIED


@dataclass(frozen=True)
class ValuationResult:
    """
    Result of one valuation.

    Attributes
    ----------
    sample : Sample
        Per-path estimator; its mean is the price
    diagnostic : ValuationDiagnostic
        Whether variance reduction was applied
    plain_sample : Sample
        Uncontrolled Asian payoff sample Z
    control_variate : ControlVariateResult, optional
        Control details when variance reduction was applied
    """

    sample: Sample
    diagnostic: ValuationDiagnostic
    plain_sample: Sample
    control_variate: ControlVariateResult | None = None

    @property
    def price(self) -> float:
        """Monte Carlo price: mean of the estimator sample."""
        return self.sample.mean()

    @property
    def standard_error(self) -> float:
        """Standard error of the price."""
        return self.sample.standard_error()


class AsianOptionWithControlVariate(MonteCarloProduct):
    """
    Arithmetic-average Asian call valued with a control variate.

    The control variate is the average of the discounted payoffs of European
    calls with the same strike and maturities equal to the averaging dates.
    It is applied only when the provider's model is Black-Scholes; otherwise
    the plain Monte Carlo sample is returned.

    Parameters
    ----------
    spec : OptionSpec
        Maturity, strike and underlying index
    schedule : AveragingSchedule
        Averaging dates; the last one must be the maturity
    on_degenerate : DegeneratePolicy, optional
        Override of SETTINGS.control_variate.degenerate_policy

    Examples
    --------
    >>> spec = OptionSpec(maturity=2.0, strike=1.0)
    >>> schedule = AveragingSchedule.from_step(0.2, 0.2, 10)
    >>> option = AsianOptionWithControlVariate(spec, schedule)
    >>> result = option.value_with_diagnostics(0.0, simulation)
    >>> result.diagnostic.variance_reduced
    True
    """

    def __init__(
        self,
        spec: OptionSpec,
        schedule: AveragingSchedule,
        on_degenerate: DegeneratePolicy | None = None,
    ):
        validate_schedule(spec, schedule)
        self.spec = spec
        self.schedule = schedule
        self.on_degenerate = on_degenerate
        self._plain = AsianOption(spec, schedule)

    def value_with_diagnostics(
        self,
        evaluation_time: float,
        provider: AssetSimulationProvider,
    ) -> ValuationResult:
        """
        Value the option and report whether variance reduction was applied.

        Raises
        ------
        SimulationError
            Propagated unchanged from the provider
        DegenerateControlVariateError
            If the control has zero variance and the policy is RAISE
        """
        standard_payoff = self._plain.get_value(evaluation_time, provider)

        capability = check_model_capability(provider)
        if not isinstance(capability, BlackScholesCapable):
            message = (
                f"Model '{capability.model_name}' is not Black-Scholes: "
                f"standard Monte Carlo without control variate"
            )
            logger.warning(message)
            return ValuationResult(
                sample=standard_payoff,
                diagnostic=ValuationDiagnostic(
                    status=VarianceReductionStatus.NOT_APPLIED,
                    message=message,
                    model_name=capability.model_name,
                ),
                plain_sample=standard_payoff,
            )

        control_variate = build_control_variate(
            target=standard_payoff,
            schedule=self.schedule,
            spec=self.spec,
            parameters=capability.parameters,
            asset_value_at=provider.asset_value_at,
            evaluation_time=evaluation_time,
            on_degenerate=self.on_degenerate,
        )
        controlled = combine(
            standard_payoff,
            control_variate.simulated_sample,
            control_variate.analytic_expectation,
            control_variate.optimal_coefficient,
        )
        logger.debug(
            "Control variate applied: beta=%.6f, corr=%.4f, E[Y]=%.6f",
            control_variate.optimal_coefficient,
            control_variate.correlation,
            control_variate.analytic_expectation,
        )

        return ValuationResult(
            sample=controlled,
            diagnostic=ValuationDiagnostic(
                status=VarianceReductionStatus.APPLIED,
                message="Black-Scholes average-of-calls control variate applied",
            ),
            plain_sample=standard_payoff,
            control_variate=control_variate,
        )

    def get_value(self, evaluation_time: float, provider: AssetSimulationProvider) -> Sample:
        return self.value_with_diagnostics(evaluation_time, provider).sample
