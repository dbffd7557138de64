"""Scenario configuration dataclass."""

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass
class Scenario:
    """Configuration for a single intake simulation run.

    Contains all parameters needed to run a simulation: the arrival
    horizon, pool sizes, arrival rate shaping and random seed.

    Attributes:
        run_length: Arrival horizon in minutes (default 1440 = 24 hours).
        n_clinicians: Number of clinicians in the pool.
        n_beds: Number of beds in the pool.
        base_arrival_rate: Base patient arrivals per hour, before shaping.
        night_multiplier: Rate multiplier for hours 0-6.
        standard_multiplier: Rate multiplier outside night and evening.
        peak_multiplier: Rate multiplier for hours 18-22.
        random_seed: Master seed for reproducibility.
        max_ticks: Optional upper bound on loop iterations.
    """

    # Horizon
    run_length: int = 1440  # 24 hours in minutes

    # Resources
    n_clinicians: int = 5
    n_beds: int = 10

    # Arrivals (patients per hour)
    base_arrival_rate: float = 5.0
    night_multiplier: float = 2.0
    standard_multiplier: float = 5.0
    peak_multiplier: float = 8.0

    # Reproducibility
    random_seed: int = 42

    # Loop guard (None = unbounded)
    max_ticks: Optional[int] = None

    # RNG streams (created in __post_init__ unless injected)
    rng_arrivals: Optional[np.random.Generator] = None
    rng_severity: Optional[np.random.Generator] = None
    rng_treatment: Optional[np.random.Generator] = None

    def __post_init__(self) -> None:
        """Validate parameters and initialize separate RNG streams."""
        self._validate()
        if self.rng_arrivals is None:
            self.rng_arrivals = np.random.default_rng(self.random_seed)
        if self.rng_severity is None:
            self.rng_severity = np.random.default_rng(self.random_seed + 1)
        if self.rng_treatment is None:
            self.rng_treatment = np.random.default_rng(self.random_seed + 2)

    def _validate(self) -> None:
        """Reject configurations the engine cannot run to completion."""
        if self.run_length < 0:
            raise ValueError("run_length must be non-negative")
        # An empty pool leaves every queued patient waiting forever
        if self.n_clinicians <= 0:
            raise ValueError(f"n_clinicians must be positive, got {self.n_clinicians}")
        if self.n_beds <= 0:
            raise ValueError(f"n_beds must be positive, got {self.n_beds}")
        if self.base_arrival_rate < 0:
            raise ValueError("Arrival rates must be non-negative")
        multipliers = (self.night_multiplier, self.standard_multiplier, self.peak_multiplier)
        if any(m < 0 for m in multipliers):
            raise ValueError("Rate multipliers must be non-negative")
        if self.max_ticks is not None and self.max_ticks <= 0:
            raise ValueError("max_ticks must be positive when set")

    @property
    def peak_rate(self) -> float:
        """Highest shaped arrival rate in patients per hour."""
        return self.base_arrival_rate * max(
            self.night_multiplier, self.standard_multiplier, self.peak_multiplier
        )
