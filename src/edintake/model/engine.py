"""Tick-driven intake simulation: clock, arrivals admission and allocation.

Each tick runs, in order:

1. refresh resource availability
2. admit arrivals due at or before the current minute
3. compute the next decision time
4. attempt one clinician + bed allocation for the queue head
5. advance time

Time advancement is delegated to a SimPy environment; the intake loop is a
single SimPy process that yields one timeout per tick.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, List, Optional

import simpy

from edintake.core.arrivals import ArrivalGenerator
from edintake.core.scenario import Scenario
from edintake.model.patient import Patient
from edintake.model.queue import WaitingQueue
from edintake.model.resources import ResourcePool
from edintake.results.collector import ResultsCollector

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """Mutable state of one run, passed explicitly to every step function.

    Attributes:
        horizon: Minute after which no new arrivals are admitted.
        clinicians: Clinician pool.
        beds: Bed pool.
        queue: Patients waiting for treatment.
        patients: Registry of every arrived patient, in arrival order.
        collector: Incremental metric accumulators.
        current_time: Current simulation minute.
        next_arrival_time: Scheduled next arrival (None until first scheduled).
        next_patient_id: Id given to the next arriving patient.
        ticks: Loop iterations executed.
        completed: False if the run was cut short by the tick guard.
    """

    horizon: int
    clinicians: ResourcePool
    beds: ResourcePool
    queue: WaitingQueue = field(default_factory=WaitingQueue)
    patients: List[Patient] = field(default_factory=list)
    collector: ResultsCollector = field(default_factory=ResultsCollector)
    current_time: int = 0
    next_arrival_time: Optional[float] = None
    next_patient_id: int = 1
    ticks: int = 0
    completed: bool = True

    @classmethod
    def from_scenario(cls, scenario: Scenario) -> "SimulationState":
        return cls(
            horizon=scenario.run_length,
            clinicians=ResourcePool("clinicians", scenario.n_clinicians),
            beds=ResourcePool("beds", scenario.n_beds),
        )

    @property
    def pools(self) -> List[ResourcePool]:
        return [self.clinicians, self.beds]

    @property
    def finished(self) -> bool:
        """True once the horizon is reached and the queue has drained."""
        return self.current_time >= self.horizon and not self.queue


def refresh_resources(state: SimulationState) -> None:
    """Re-establish ``available == (busy_until <= now)`` for both pools."""
    for pool in state.pools:
        pool.release(state.current_time)


def admit_arrivals(state: SimulationState, arrivals: ArrivalGenerator) -> List[Patient]:
    """Admit every arrival due at or before now and strictly before the horizon.

    The first arrival is scheduled at the unshaped base rate. Follow-on
    arrivals use the shaped rate for the hour of the current tick.

    Returns:
        Patients admitted this tick, in arrival order.
    """
    if state.next_arrival_time is None:
        state.next_arrival_time = arrivals.next_arrival_time(
            state.current_time, arrivals.base_rate
        )

    rate = arrivals.rate_at(state.current_time)
    admitted = []
    while state.next_arrival_time <= state.current_time and state.next_arrival_time < state.horizon:
        severity, treatment_time = arrivals.draw_attributes()
        patient = Patient(
            id=state.next_patient_id,
            arrival_time=int(state.next_arrival_time),
            severity=severity,
            treatment_time=treatment_time,
        )
        state.next_patient_id += 1
        state.queue.push(patient)
        state.patients.append(patient)
        state.collector.record_arrival()
        admitted.append(patient)
        logger.debug(
            f"t={state.current_time}: patient {patient.id} arrived "
            f"(severity={int(severity)}, treatment={treatment_time})"
        )
        state.next_arrival_time = arrivals.next_arrival_time(state.next_arrival_time, rate)
    return admitted


def next_decision_time(state: SimulationState) -> Optional[int]:
    """Earliest future time something can change, or None.

    Candidates are the horizon, the queue head's arrival time and every
    unit's ``busy_until``. Only candidates later than the current minute are
    considered.
    """
    candidates = [state.horizon]
    head = state.queue.peek()
    if head is not None:
        candidates.append(head.arrival_time)
    for pool in state.pools:
        candidates.extend(pool.next_free_times())

    future = [t for t in candidates if t > state.current_time]
    return min(future) if future else None


def advance_step(state: SimulationState, decision_time: Optional[int]) -> int:
    """Minutes to advance: one minute, or less if a decision falls sooner."""
    if decision_time is None:
        return 1
    return min(1, decision_time - state.current_time)


def attempt_allocation(state: SimulationState) -> Optional[Patient]:
    """Try to pair the queue head with one clinician and one bed.

    Only the head is examined. Nothing is reserved unless both a clinician
    and a bed are free at the assignment time.

    Returns:
        The patient that started treatment, or None.
    """
    patient = state.queue.peek()
    if patient is None:
        return None

    assign_time = max(state.current_time, patient.arrival_time)

    clinician = state.clinicians.find_available(assign_time)
    if clinician is None:
        return None
    bed = state.beds.find_available(assign_time)
    if bed is None:
        return None

    end_time = assign_time + patient.treatment_time
    state.clinicians.acquire(clinician, assign_time, end_time, patient.id)
    state.beds.acquire(bed, assign_time, end_time, patient.id)
    patient.start_treatment(assign_time, clinician.index, bed.index)
    state.queue.pop()

    state.collector.record_treatment(patient.wait_time, patient.treatment_time, patient.severity)
    logger.debug(
        f"t={assign_time}: patient {patient.id} -> clinician {clinician.index}, "
        f"bed {bed.index} until {end_time} (waited {patient.wait_time})"
    )
    return patient


def tick(state: SimulationState, arrivals: ArrivalGenerator) -> int:
    """Run one tick and return the number of minutes to advance."""
    refresh_resources(state)
    admit_arrivals(state, arrivals)
    decision_time = next_decision_time(state)
    attempt_allocation(state)
    state.ticks += 1
    return advance_step(state, decision_time)


def intake_process(
    env: simpy.Environment,
    state: SimulationState,
    arrivals: ArrivalGenerator,
    max_ticks: Optional[int] = None,
) -> Generator[simpy.Event, None, None]:
    """SimPy process driving ticks until the horizon passes and the queue drains.

    Args:
        env: SimPy environment supplying the clock.
        state: Simulation state to mutate.
        arrivals: Source of arrivals and patient attributes.
        max_ticks: Stop after this many ticks if set.

    Yields:
        SimPy timeout events, one per tick.
    """
    while not state.finished:
        if max_ticks is not None and state.ticks >= max_ticks:
            state.completed = False
            logger.warning(
                f"Stopped after {state.ticks} ticks at t={state.current_time} "
                f"with {len(state.queue)} patients still waiting"
            )
            return
        step = tick(state, arrivals)
        yield env.timeout(step)
        state.current_time = int(env.now)


def run_engine(
    state: SimulationState,
    arrivals: ArrivalGenerator,
    max_ticks: Optional[int] = None,
) -> SimulationState:
    """Run the intake loop on an existing state.

    Args:
        state: Initial state (pools, horizon, optionally pre-queued patients).
        arrivals: Source of arrivals and patient attributes.
        max_ticks: Optional tick guard.

    Returns:
        The same state, advanced to the end of the run.
    """
    env = simpy.Environment(initial_time=state.current_time)
    process = env.process(intake_process(env, state, arrivals, max_ticks))
    env.run(until=process)
    return state


def run_simulation(
    scenario: Scenario,
    arrivals: Optional[ArrivalGenerator] = None,
    max_ticks: Optional[int] = None,
) -> Dict[str, Any]:
    """Execute a single simulation run.

    Args:
        scenario: Scenario configuration with all parameters.
        arrivals: Arrival source; built from the scenario's RNG streams if None.
        max_ticks: Tick guard; falls back to ``scenario.max_ticks``.

    Returns:
        Dictionary containing the metrics from
        ``ResultsCollector.compute_metrics`` plus:
        - queue_remaining: Patients still waiting at the end
        - end_time: Simulation minute at which the run stopped
        - ticks: Loop iterations executed
        - completed: False if the tick guard stopped the run
        - patients: Patient registry
        - clinicians, beds: Resource pools (for booking audit)
    """
    if arrivals is None:
        arrivals = ArrivalGenerator.from_scenario(scenario)
    if max_ticks is None:
        max_ticks = scenario.max_ticks

    logger.info(
        f"Starting run: horizon={scenario.run_length}, clinicians={scenario.n_clinicians}, "
        f"beds={scenario.n_beds}, base_rate={scenario.base_arrival_rate}, seed={scenario.random_seed}"
    )

    state = SimulationState.from_scenario(scenario)
    run_engine(state, arrivals, max_ticks=max_ticks)

    results = state.collector.compute_metrics(
        scenario.run_length, scenario.n_clinicians, scenario.n_beds
    )
    results["queue_remaining"] = len(state.queue)
    results["end_time"] = state.current_time
    results["ticks"] = state.ticks
    results["completed"] = state.completed
    results["patients"] = state.patients
    results["clinicians"] = state.clinicians
    results["beds"] = state.beds

    logger.info(
        f"Run finished at t={state.current_time}: {results['patients_treated']}/"
        f"{results['total_patients']} treated, mean wait {results['mean_wait_time']:.2f} min"
    )
    return results
