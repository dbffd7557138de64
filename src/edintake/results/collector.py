"""Incremental metric accumulation during simulation runs."""

from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np

from edintake.core.entities import Severity


@dataclass
class ResultsCollector:
    """Collect and compute simulation metrics.

    This class accumulates counts and busy time while the simulation runs
    and reduces them to summary metrics after the run completes. Nothing
    here needs the patient registry.

    Attributes:
        arrivals: Total count of patient arrivals.
        treated: Count of patients assigned a clinician and bed.
        total_wait_time: Sum of wait times of treated patients (minutes).
        wait_times: Wait time of each treated patient, in treatment order.
        clinician_busy_minutes: Treatment minutes booked on clinicians.
        bed_busy_minutes: Treatment minutes booked on beds.
        treated_by_severity: Count of treated patients per severity.
    """

    arrivals: int = 0
    treated: int = 0
    total_wait_time: float = 0.0
    wait_times: List[float] = field(default_factory=list)
    clinician_busy_minutes: float = 0.0
    bed_busy_minutes: float = 0.0
    treated_by_severity: Dict[int, int] = field(
        default_factory=lambda: {int(s): 0 for s in Severity}
    )

    def record_arrival(self) -> None:
        """Record a patient arrival."""
        self.arrivals += 1

    def record_treatment(self, wait: float, treatment_time: float, severity: int) -> None:
        """Record a successful clinician and bed allocation.

        Args:
            wait: Minutes the patient waited.
            treatment_time: Minutes both units are occupied.
            severity: Severity of the treated patient.
        """
        self.treated += 1
        self.total_wait_time += wait
        self.wait_times.append(wait)
        self.clinician_busy_minutes += treatment_time
        self.bed_busy_minutes += treatment_time
        self.treated_by_severity[int(severity)] = self.treated_by_severity.get(int(severity), 0) + 1

    def compute_metrics(self, run_length: float, n_clinicians: int, n_beds: int) -> Dict:
        """Compute all KPIs from collected data.

        Utilisation is booked treatment minutes over pool capacity during the
        arrival horizon. Treatments that run past the horizon still count in
        full, so a pool draining a backlog can exceed 1.0.

        Args:
            run_length: Arrival horizon (minutes).
            n_clinicians: Clinician pool size.
            n_beds: Bed pool size.

        Returns:
            Dictionary containing:
            - total_patients, patients_treated: Counts
            - mean_wait_time, max_wait_time, p95_wait_time
            - util_clinicians, util_beds: Fraction of capacity booked
            - treated_by_severity: Counts keyed by severity value
        """
        if self.treated > 0:
            waits = np.array(self.wait_times)
            mean_wait = self.total_wait_time / self.treated
            max_wait = float(np.max(waits))
            p95_wait = float(np.percentile(waits, 95))
        else:
            mean_wait = max_wait = p95_wait = 0.0

        return {
            "total_patients": self.arrivals,
            "patients_treated": self.treated,
            "mean_wait_time": mean_wait,
            "max_wait_time": max_wait,
            "p95_wait_time": p95_wait,
            "util_clinicians": self._utilisation(self.clinician_busy_minutes, n_clinicians, run_length),
            "util_beds": self._utilisation(self.bed_busy_minutes, n_beds, run_length),
            "treated_by_severity": dict(self.treated_by_severity),
        }

    @staticmethod
    def _utilisation(busy_minutes: float, capacity: int, run_length: float) -> float:
        if capacity <= 0 or run_length <= 0:
            return 0.0
        return busy_minutes / (capacity * run_length)
