"""Model layer: patient, resource pools, waiting queue, engine."""

from edintake.model.patient import Patient
from edintake.model.resources import ResourcePool, ResourceUnit
from edintake.model.queue import WaitingQueue
from edintake.model.engine import SimulationState, run_engine, run_simulation

__all__ = [
    "Patient",
    "ResourcePool",
    "ResourceUnit",
    "WaitingQueue",
    "SimulationState",
    "run_engine",
    "run_simulation",
]
