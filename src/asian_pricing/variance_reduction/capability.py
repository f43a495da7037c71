"""
Model capability dispatch.

Decides once per valuation whether a closed-form control variate exists
for the model behind a simulation provider. The decision is read from the
provider's model descriptor; the provider is not modified.
"""

from dataclasses import dataclass
from typing import Union

from asian_pricing.models import BlackScholesLike, ModelParameters, OtherModel
from asian_pricing.options.simulation.provider import AssetSimulationProvider


@dataclass(frozen=True)
class BlackScholesCapable:
    """Closed-form Black-Scholes prices are available for these parameters."""

    parameters: ModelParameters


@dataclass(frozen=True)
class Incapable:
    """No closed-form control variate for this model."""

    model_name: str


Capability = Union[BlackScholesCapable, Incapable]


def check_model_capability(provider: AssetSimulationProvider) -> Capability:
    """
    Classify the provider's model.

    Parameters
    ----------
    provider : AssetSimulationProvider
        Simulation whose model is inspected

    Returns
    -------
    BlackScholesCapable | Incapable
        Capable with a parameter snapshot, or Incapable with the model name
    """
    descriptor = provider.underlying_model_descriptor()
    if isinstance(descriptor, BlackScholesLike):
        return BlackScholesCapable(parameters=descriptor.parameters)
    if isinstance(descriptor, OtherModel):
        return Incapable(model_name=descriptor.name)
    raise TypeError(f"Unknown model descriptor: {type(descriptor).__name__}")
