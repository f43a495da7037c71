"""
Base class for Monte Carlo products.

All products implement get_value(): the per-path value discounted to the
evaluation time, as a Sample. price() summarizes that Sample.
"""

from abc import ABC, abstractmethod

from asian_pricing.config.settings import SETTINGS
from asian_pricing.options.simulation.monte_carlo import MCResult, summarize_sample
from asian_pricing.options.simulation.provider import AssetSimulationProvider
from asian_pricing.options.simulation.sample import Sample


class MonteCarloProduct(ABC):
    """
    Abstract base class for products valued against a simulation provider.

    Subclasses: EuropeanOption, AsianOption, AsianOptionWithControlVariate
    """

    @abstractmethod
    def get_value(self, evaluation_time: float, provider: AssetSimulationProvider) -> Sample:
        """
        Per-path value of the product discounted to evaluation_time.

        [T1] For a cash flow X at T: X * N(t) / N(T), so that the mean
        of the returned Sample is the Monte Carlo price at t.

        Parameters
        ----------
        evaluation_time : float
            Time at which the value is observed
        provider : AssetSimulationProvider
            Simulated model

        Returns
        -------
        Sample
            Discounted per-path values

        Raises
        ------
        SimulationError
            Propagated unchanged from the provider
        """
        pass

    def price(
        self,
        provider: AssetSimulationProvider,
        evaluation_time: float = 0.0,
    ) -> MCResult:
        """Price, standard error and confidence interval of get_value()."""
        sample = self.get_value(evaluation_time, provider)
        return summarize_sample(sample, SETTINGS.control_variate.confidence_z)


def discount_to(
    cash_flow: Sample,
    payment_time: float,
    evaluation_time: float,
    provider: AssetSimulationProvider,
) -> Sample:
    """[T1] Numeraire-relative discounting: X * N(t) / N(T)."""
    return cash_flow.div(provider.numeraire(payment_time)).mult(
        provider.numeraire(evaluation_time)
    )
