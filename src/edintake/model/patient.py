"""Patient entity definition."""

from dataclasses import dataclass
from typing import Optional

from edintake.core.entities import Severity


@dataclass
class Patient:
    """Patient entity tracking intake from arrival to treatment start.

    Attributes:
        id: Unique patient identifier (monotonically increasing).
        arrival_time: Simulation minute of arrival.
        severity: Severity class (1-5, higher = more urgent).
        treatment_time: Minutes of clinician and bed occupation required.
        wait_time: Minutes between arrival and treatment start.
        start_treatment_time: Minute treatment began (None until assigned).
        clinician_index: Index of the clinician assigned (None until assigned).
        bed_index: Index of the bed assigned (None until assigned).
    """

    id: int
    arrival_time: int
    severity: Severity
    treatment_time: int

    # Filled once at treatment assignment
    wait_time: int = 0
    start_treatment_time: Optional[int] = None
    clinician_index: Optional[int] = None
    bed_index: Optional[int] = None

    @property
    def is_treated(self) -> bool:
        """Whether the patient has been assigned a clinician and bed."""
        return self.start_treatment_time is not None

    @property
    def treatment_end(self) -> Optional[int]:
        """Minute treatment completes, if assigned."""
        if self.start_treatment_time is None:
            return None
        return self.start_treatment_time + self.treatment_time

    def start_treatment(self, start_time: int, clinician_index: int, bed_index: int) -> None:
        """Record treatment assignment.

        Args:
            start_time: Minute treatment begins.
            clinician_index: Index of the clinician unit.
            bed_index: Index of the bed unit.

        Raises:
            ValueError: If already assigned or start precedes arrival.
        """
        if self.is_treated:
            raise ValueError(f"Patient {self.id} already started treatment")
        if start_time < self.arrival_time:
            raise ValueError(
                f"Patient {self.id} cannot start at {start_time} before arrival {self.arrival_time}"
            )
        self.start_treatment_time = start_time
        self.wait_time = start_time - self.arrival_time
        self.clinician_index = clinician_index
        self.bed_index = bed_index
