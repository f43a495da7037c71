"""
Monte Carlo result summaries.

Turns a discounted per-path payoff Sample into a price, standard error
and confidence interval.

[T1] MC converges to the true price at rate 1/√N

See: Glasserman (2003) "Monte Carlo Methods in Financial Engineering"
"""

from dataclasses import dataclass

import numpy as np

from asian_pricing.options.simulation.sample import Sample


@dataclass(frozen=True)
class MCResult:
    """
    Monte Carlo pricing result.

    Attributes
    ----------
    price : float
        Option price (mean of the discounted per-path payoffs)
    standard_error : float
        Standard error of the estimate
    confidence_interval : tuple[float, float]
        Confidence interval around the price
    n_paths : int
        Number of paths used
    """

    price: float
    standard_error: float
    confidence_interval: tuple[float, float]
    n_paths: int

    @property
    def relative_error(self) -> float:
        """Relative standard error (SE / price)."""
        if abs(self.price) < 1e-10:
            return float("inf")
        return self.standard_error / abs(self.price)

    @property
    def ci_width(self) -> float:
        """Width of confidence interval."""
        return self.confidence_interval[1] - self.confidence_interval[0]


def summarize_sample(sample: Sample, confidence_z: float = 1.96) -> MCResult:
    """
    Compute price statistics from a discounted per-path payoff sample.

    Parameters
    ----------
    sample : Sample
        Discounted payoffs, one per path
    confidence_z : float, default 1.96
        z-score of the confidence interval (1.96 for 95%)

    Returns
    -------
    MCResult
        Complete MC result with statistics
    """
    if confidence_z <= 0:
        raise ValueError(f"CRITICAL: confidence_z must be > 0, got {confidence_z}")

    n_paths = sample.n_paths
    price = sample.mean()
    se = sample.std(ddof=1) / np.sqrt(n_paths) if n_paths > 1 else 0.0

    return MCResult(
        price=price,
        standard_error=se,
        confidence_interval=(price - confidence_z * se, price + confidence_z * se),
        n_paths=n_paths,
    )


def variance_reduction_ratio(plain: Sample, reduced: Sample) -> float:
    """
    Standard deviation ratio sd(plain) / sd(reduced).

    [T1] A ratio ρ means the reduced estimator reaches the plain
    estimator's accuracy with N/ρ² paths.

    Returns
    -------
    float
        Ratio > 1 when variance was reduced; inf if reduced is deterministic
    """
    if plain.n_paths != reduced.n_paths:
        raise ValueError(
            f"CRITICAL: samples must have equal length ({plain.n_paths} vs {reduced.n_paths})"
        )
    reduced_std = reduced.std()
    if reduced_std == 0.0:
        return float("inf")
    return plain.std() / reduced_std
