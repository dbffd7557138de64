"""Core foundation layer: scenario configuration, arrivals, entities."""

from edintake.core.scenario import Scenario
from edintake.core.entities import Severity
from edintake.core.arrivals import (
    ArrivalProfile,
    ArrivalGenerator,
)

__all__ = [
    "Scenario",
    "Severity",
    "ArrivalProfile",
    "ArrivalGenerator",
]
