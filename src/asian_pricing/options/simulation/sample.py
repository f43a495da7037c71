"""
Per-path Monte Carlo sample.

A Sample is the realization of a random variable across all simulated
paths: one float per path. All arithmetic is elementwise and vectorized,
all statistics are reductions over the path axis.

[T1] Statistics use the population convention (divide by N) for both
variance and covariance, so Cov(Z, Y) / Var(Y) does not depend on the
convention.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

from asian_pricing.config.tolerances import SAMPLE_EQUALITY_TOLERANCE

Operand = Union["Sample", float, int, np.floating]


@dataclass(frozen=True, eq=False)
class Sample:
    """
    Immutable vector of per-path values.

    Attributes
    ----------
    values : np.ndarray
        One value per path, shape (n_paths,). Stored read-only.

    Examples
    --------
    >>> z = Sample.from_values([1.0, 2.0, 3.0])
    >>> (z - 1.0).floor(1.5).mean()
    1.6666666666666667
    """

    values: np.ndarray

    def __post_init__(self) -> None:
        """Validate and freeze the underlying array."""
        values = np.array(self.values, dtype=np.float64)
        if values.ndim != 1:
            raise ValueError(
                f"CRITICAL: Sample values must be 1-D, got shape {values.shape}"
            )
        if values.size == 0:
            raise ValueError("CRITICAL: Sample cannot be empty")
        values.flags.writeable = False
        object.__setattr__(self, "values", values)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_values(cls, values) -> Sample:
        """Create a Sample from any 1-D array-like."""
        return cls(values=np.asarray(values, dtype=np.float64))

    @classmethod
    def constant(cls, value: float, n_paths: int) -> Sample:
        """Create a Sample holding the same value on every path."""
        if n_paths <= 0:
            raise ValueError(f"CRITICAL: n_paths must be > 0, got {n_paths}")
        return cls(values=np.full(n_paths, float(value)))

    # -------------------------------------------------------------------------
    # Size
    # -------------------------------------------------------------------------

    @property
    def n_paths(self) -> int:
        """Number of paths."""
        return self.values.shape[0]

    def __len__(self) -> int:
        return self.n_paths

    def is_deterministic(self) -> bool:
        """True if every path carries the same value."""
        return bool(np.all(self.values == self.values[0]))

    # -------------------------------------------------------------------------
    # Elementwise arithmetic
    # -------------------------------------------------------------------------

    def _operand(self, other: Operand) -> np.ndarray | float:
        if isinstance(other, Sample):
            if other.n_paths != self.n_paths:
                raise ValueError(
                    f"CRITICAL: cannot combine samples of different length "
                    f"({self.n_paths} vs {other.n_paths})"
                )
            return other.values
        return float(other)

    def add(self, other: Operand) -> Sample:
        return Sample(self.values + self._operand(other))

    def sub(self, other: Operand) -> Sample:
        return Sample(self.values - self._operand(other))

    def mult(self, other: Operand) -> Sample:
        return Sample(self.values * self._operand(other))

    def div(self, other: Operand) -> Sample:
        return Sample(self.values / self._operand(other))

    def floor(self, level: float) -> Sample:
        """Elementwise max(value, level)."""
        return Sample(np.maximum(self.values, float(level)))

    def cap(self, level: float) -> Sample:
        """Elementwise min(value, level)."""
        return Sample(np.minimum(self.values, float(level)))

    def exp(self) -> Sample:
        return Sample(np.exp(self.values))

    def __add__(self, other: Operand) -> Sample:
        return self.add(other)

    def __radd__(self, other: Operand) -> Sample:
        return self.add(other)

    def __sub__(self, other: Operand) -> Sample:
        return self.sub(other)

    def __rsub__(self, other: Operand) -> Sample:
        return Sample(self._operand(other) - self.values)

    def __mul__(self, other: Operand) -> Sample:
        return self.mult(other)

    def __rmul__(self, other: Operand) -> Sample:
        return self.mult(other)

    def __truediv__(self, other: Operand) -> Sample:
        return self.div(other)

    def __neg__(self) -> Sample:
        return Sample(-self.values)

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def mean(self) -> float:
        """Monte Carlo expectation estimate."""
        return float(self.values.mean())

    def variance(self) -> float:
        """Population variance: E[(X - E[X])^2]."""
        return float(self.values.var())

    def std(self, ddof: int = 0) -> float:
        """Standard deviation (population by default)."""
        return float(self.values.std(ddof=ddof))

    def covariance(self, other: Operand) -> float:
        """
        Population covariance with another sample.

        [T1] Cov(X, Y) = E[(X - E[X]) (Y - E[Y])]
        """
        if not isinstance(other, Sample):
            return 0.0  # a constant does not covary
        other_values = self._operand(other)
        centered = self.values - self.values.mean()
        other_centered = other_values - other_values.mean()
        return float(np.mean(centered * other_centered))

    def correlation(self, other: Sample) -> float:
        """Pearson correlation; 0.0 if either sample is deterministic."""
        denominator = self.std() * other.std()
        if denominator == 0.0:
            return 0.0
        return self.covariance(other) / denominator

    def standard_error(self) -> float:
        """Standard error of the mean: std / √N."""
        return self.std() / np.sqrt(self.n_paths)

    def allclose(
        self, other: Sample, atol: float = 0.0, rtol: float = SAMPLE_EQUALITY_TOLERANCE
    ) -> bool:
        """Elementwise comparison within tolerance."""
        return bool(np.allclose(self.values, self._operand(other), atol=atol, rtol=rtol))
