"""Time-of-day arrival rate shaping and patient attribute sampling."""

from dataclasses import dataclass
from typing import Protocol, Tuple

from edintake.core.entities import Severity, severity_from_roll
from edintake.core.scenario import Scenario


MINUTES_PER_HOUR = 60

# Inclusive hour bands of the rate model
NIGHT_FIRST_HOUR, NIGHT_LAST_HOUR = 0, 6
PEAK_FIRST_HOUR, PEAK_LAST_HOUR = 18, 22

# Treatment durations are drawn from [TREATMENT_BASE + severity * step, max]
TREATMENT_BASE_MINUTES = 30
TREATMENT_SEVERITY_STEP = 10
TREATMENT_MAX_MINUTES = 120


class RandomSource(Protocol):
    """Subset of ``numpy.random.Generator`` used by the samplers.

    Any object exposing these two methods can drive arrivals, so tests can
    substitute a fixed-sequence stub for a seeded generator.
    """

    def exponential(self, scale: float = 1.0) -> float:
        ...

    def integers(self, low: int, high: int, endpoint: bool = False) -> int:
        ...


@dataclass
class ArrivalProfile:
    """Hour-of-day rate multipliers for the intake rate model.

    Hours are counted from the start of the run without wrapping, so hour 25
    is simply a standard hour rather than 01:00 on a second day.

    Attributes:
        night: Multiplier for hours 0-6.
        standard: Multiplier for every hour outside the night and peak bands.
        peak: Multiplier for the evening hours 18-22.
    """

    night: float = 2.0
    standard: float = 5.0
    peak: float = 8.0

    def __post_init__(self) -> None:
        if min(self.night, self.standard, self.peak) < 0:
            raise ValueError("Rate multipliers must be non-negative")

    def get_multiplier(self, hour: int) -> float:
        """Multiplier for an hour counted from the start of the run."""
        if NIGHT_FIRST_HOUR <= hour <= NIGHT_LAST_HOUR:
            return self.night
        if PEAK_FIRST_HOUR <= hour <= PEAK_LAST_HOUR:
            return self.peak
        return self.standard


def sample_interarrival(rng: RandomSource, rate_per_hour: float) -> float:
    """Sample an exponential inter-arrival gap with mean 60 / rate minutes.

    Returns ``inf`` when the rate is zero so no further arrival is scheduled.
    """
    if rate_per_hour <= 0:
        return float("inf")
    return float(rng.exponential(MINUTES_PER_HOUR / rate_per_hour))


def sample_severity(rng: RandomSource) -> Severity:
    """Draw a severity from a 1-10 roll skewed toward high urgency."""
    roll = int(rng.integers(1, 10, endpoint=True))
    return severity_from_roll(roll)


def sample_treatment_time(rng: RandomSource, severity: int) -> int:
    """Draw a treatment duration uniformly from [30 + severity*10, 120] minutes."""
    low = TREATMENT_BASE_MINUTES + int(severity) * TREATMENT_SEVERITY_STEP
    return int(rng.integers(low, TREATMENT_MAX_MINUTES, endpoint=True))


class ArrivalGenerator:
    """Stochastic source of arrival times and patient attributes.

    Holds one random stream per stochastic element so that arrivals,
    severities and treatment times can be tested independently.

    Attributes:
        base_rate: Base arrivals per hour before shaping.
        profile: Hour-of-day multiplier schedule.
        rng_arrivals: Stream for inter-arrival gaps.
        rng_severity: Stream for severity rolls.
        rng_treatment: Stream for treatment durations.
    """

    def __init__(
        self,
        base_rate: float,
        profile: ArrivalProfile,
        rng_arrivals: RandomSource,
        rng_severity: RandomSource,
        rng_treatment: RandomSource,
    ) -> None:
        self.base_rate = base_rate
        self.profile = profile
        self.rng_arrivals = rng_arrivals
        self.rng_severity = rng_severity
        self.rng_treatment = rng_treatment

    @classmethod
    def from_scenario(cls, scenario: Scenario) -> "ArrivalGenerator":
        """Build a generator from a Scenario's rates and RNG streams."""
        profile = ArrivalProfile(
            night=scenario.night_multiplier,
            standard=scenario.standard_multiplier,
            peak=scenario.peak_multiplier,
        )
        return cls(
            base_rate=scenario.base_arrival_rate,
            profile=profile,
            rng_arrivals=scenario.rng_arrivals,
            rng_severity=scenario.rng_severity,
            rng_treatment=scenario.rng_treatment,
        )

    def rate_at(self, current_time: float) -> float:
        """Shaped arrival rate (per hour) for the hour containing current_time."""
        hour = int(current_time) // MINUTES_PER_HOUR
        return self.base_rate * self.profile.get_multiplier(hour)

    def next_arrival_time(self, from_time: float, rate_per_hour: float) -> float:
        """Absolute time of the next arrival, truncated to a whole minute."""
        gap = sample_interarrival(self.rng_arrivals, rate_per_hour)
        if gap == float("inf"):
            return gap
        return from_time + int(gap)

    def draw_attributes(self) -> Tuple[Severity, int]:
        """Draw (severity, treatment_time) for a new patient."""
        severity = sample_severity(self.rng_severity)
        treatment_time = sample_treatment_time(self.rng_treatment, severity)
        return severity, treatment_time
