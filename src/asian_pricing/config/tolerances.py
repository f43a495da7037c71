"""
Centralized tolerance framework for Monte Carlo pricing.

All tolerances are derived from precision requirements, not ad hoc tuning.

Tolerance Tiers:
    Tier 1 (Analytical): Machine-precision achievable, deterministic results
    Tier 2 (Stochastic): CLT-derived bounds for Monte Carlo comparisons
    Tier 3 (Numerical Guards): Thresholds that switch behavior

References:
    [T1] Higham (2002) "Accuracy and Stability of Numerical Algorithms"
    [T1] Glasserman (2003) Ch. 4 - Control variates and MC error bounds
"""

from typing import Final

# =============================================================================
# Tier 1: Analytical Tolerances (Deterministic)
# =============================================================================

#: No-arbitrage bounds: option price in [0, S]
#: Tolerance: ~1e-10 allows for float64 accumulation errors
ANTI_PATTERN_TOLERANCE: Final[float] = 1e-10

#: Two times are the same date when closer than this (years).
#: 1e-9 years is ~0.03 seconds, far below any averaging granularity.
TIME_MATCH_TOLERANCE: Final[float] = 1e-9

#: Elementwise agreement of two samples that should be identical
SAMPLE_EQUALITY_TOLERANCE: Final[float] = 1e-12


# =============================================================================
# Tier 2: Stochastic Tolerances (CLT-Derived)
# =============================================================================

#: Relative agreement of plain and controlled Asian estimators at 200,000
#: paths. Their gap is ≈ the plain estimator's MC error: one SE is ~0.3%
#: of the price, so 2% leaves more than 6 SE of room
CONTROLLED_MEAN_RELATIVE_TOLERANCE: Final[float] = 0.02

#: Number of standard errors for statistical comparisons in tests
MC_CONFIDENCE_MULTIPLE: Final[float] = 4.0


# =============================================================================
# Tier 3: Numerical Guards
# =============================================================================

#: Control variance at or below this (relative to mean(Y)^2 + 1)
#: makes beta* = Cov/Var numerically meaningless
DEGENERATE_VARIANCE_TOLERANCE: Final[float] = 1e-14
