"""ED Intake - emergency department intake simulation.

A tick-driven discrete-event simulation of patients competing for
clinicians and beds under severity-then-arrival priority, built on SimPy.
"""

__version__ = "0.1.0"

from edintake.core.scenario import Scenario
from edintake.model.engine import run_simulation

__all__ = ["Scenario", "run_simulation", "__version__"]
