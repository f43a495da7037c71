"""
Option terms and averaging schedules.

Immutable, validated on construction:
- AveragingSchedule: strictly increasing dates t_1 < ... < t_n, n >= 1
- OptionSpec: maturity, strike, underlying index

The pair is consistent when the last averaging date is the maturity;
validate_schedule() enforces this and every product calls it.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np

from asian_pricing.config.tolerances import TIME_MATCH_TOLERANCE


class ScheduleValidationError(ValueError):
    """Raised when option terms or an averaging schedule are invalid."""

    pass


@dataclass(frozen=True)
class OptionSpec:
    """
    Immutable option terms.

    Attributes
    ----------
    maturity : float
        Payment date T in years (> 0)
    strike : float
        Strike K (> 0)
    underlying_index : int
        Index of the asset in the simulation (>= 0)
    """

    maturity: float
    strike: float
    underlying_index: int = 0

    def __post_init__(self) -> None:
        """Validate terms."""
        if not np.isfinite(self.maturity) or self.maturity <= 0:
            raise ScheduleValidationError(
                f"CRITICAL: maturity must be finite and > 0, got {self.maturity}"
            )
        if not np.isfinite(self.strike) or self.strike <= 0:
            raise ScheduleValidationError(
                f"CRITICAL: strike must be finite and > 0, got {self.strike}"
            )
        if self.underlying_index < 0:
            raise ScheduleValidationError(
                f"CRITICAL: underlying_index must be >= 0, got {self.underlying_index}"
            )


@dataclass(frozen=True)
class AveragingSchedule:
    """
    Ordered averaging dates of an Asian payoff.

    Attributes
    ----------
    times : tuple[float, ...]
        Strictly increasing, non-negative averaging times

    Examples
    --------
    >>> schedule = AveragingSchedule.from_step(first=0.2, step=0.2, count=10)
    >>> schedule.n, round(schedule.last, 10)
    (10, 2.0)
    """

    times: tuple[float, ...]

    def __post_init__(self) -> None:
        """Validate and normalize times to a tuple of floats."""
        times = tuple(float(t) for t in self.times)
        if len(times) == 0:
            raise ScheduleValidationError("CRITICAL: averaging schedule cannot be empty")
        if not all(np.isfinite(t) for t in times):
            raise ScheduleValidationError(
                f"CRITICAL: averaging times must be finite, got {times}"
            )
        if times[0] < 0:
            raise ScheduleValidationError(
                f"CRITICAL: averaging times must be >= 0, got first time {times[0]}"
            )
        for earlier, later in zip(times, times[1:]):
            if later <= earlier:
                raise ScheduleValidationError(
                    f"CRITICAL: averaging times must be strictly increasing, "
                    f"got {earlier} followed by {later}"
                )
        object.__setattr__(self, "times", times)

    @classmethod
    def from_times(cls, times: Iterable[float]) -> "AveragingSchedule":
        return cls(times=tuple(times))

    @classmethod
    def from_step(cls, first: float, step: float, count: int) -> "AveragingSchedule":
        """
        Evenly spaced dates first, first + step, ..., first + (count - 1) * step.
        """
        if count < 1:
            raise ScheduleValidationError(f"CRITICAL: count must be >= 1, got {count}")
        if step <= 0:
            raise ScheduleValidationError(f"CRITICAL: step must be > 0, got {step}")
        return cls(times=tuple(first + i * step for i in range(count)))

    @property
    def n(self) -> int:
        """Number of averaging dates."""
        return len(self.times)

    @property
    def first(self) -> float:
        return self.times[0]

    @property
    def last(self) -> float:
        return self.times[-1]

    def as_array(self) -> np.ndarray:
        return np.array(self.times)

    def __len__(self) -> int:
        return self.n

    def __iter__(self) -> Iterator[float]:
        return iter(self.times)


def validate_schedule(spec: OptionSpec, schedule: AveragingSchedule) -> None:
    """
    Check that the last averaging date is the maturity.

    Raises
    ------
    ScheduleValidationError
        If |t_n - T| > TIME_MATCH_TOLERANCE
    """
    if abs(schedule.last - spec.maturity) > TIME_MATCH_TOLERANCE:
        raise ScheduleValidationError(
            f"CRITICAL: last averaging date {schedule.last} must equal "
            f"maturity {spec.maturity}"
        )
