"""
Bachelier (normal model) option pricing.

[T1] With discounted dynamics S(t) e^{-rt} = S(0) + σ W(t), the call value is
a Bachelier call on forward S(0), strike K e^{-rT}, undiscounted:

  C = (S0 - K') N(d) + σ√T n(d),   K' = K e^{-rT},   d = (S0 - K') / (σ√T)

References
----------
[T1] Bachelier, L. (1900). Théorie de la spéculation.
"""

import numpy as np
from scipy import stats


def bachelier_call(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
) -> float:
    """
    Price European call option in the Bachelier model.

    Parameters
    ----------
    spot : float
        Current spot price
    strike : float
        Strike price
    rate : float
        Risk-free rate (decimal)
    volatility : float
        Normal volatility of the discounted asset
    time_to_expiry : float
        Time to expiry (years)

    Returns
    -------
    float
        Call option price
    """
    if volatility < 0:
        raise ValueError(f"CRITICAL: volatility must be >= 0, got {volatility}")
    if time_to_expiry < 0:
        raise ValueError(f"CRITICAL: time_to_expiry must be >= 0, got {time_to_expiry}")

    discounted_strike = strike * np.exp(-rate * time_to_expiry)
    moneyness = spot - discounted_strike
    std_dev = volatility * np.sqrt(time_to_expiry)

    if std_dev == 0:
        return max(moneyness, 0.0)

    d = moneyness / std_dev
    return float(moneyness * stats.norm.cdf(d) + std_dev * stats.norm.pdf(d))
