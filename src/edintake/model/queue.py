"""Priority-ordered waiting room."""

import heapq
from typing import Iterator, List, Optional, Tuple

from edintake.model.patient import Patient


class WaitingQueue:
    """Patients not yet treated, ranked by severity then arrival.

    Ordering is a strict total order: higher severity first, then earlier
    arrival, then lower patient id. Sort keys are captured on push so later
    mutation of a patient cannot reorder the heap.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[int, int, int, Patient]] = []

    @staticmethod
    def _key(patient: Patient) -> Tuple[int, int, int]:
        return (-int(patient.severity), patient.arrival_time, patient.id)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[Patient]:
        """Iterate in dequeue order without modifying the queue."""
        return (entry[-1] for entry in sorted(self._heap))

    def push(self, patient: Patient) -> None:
        if patient.is_treated:
            raise ValueError(f"Patient {patient.id} has already been treated")
        heapq.heappush(self._heap, (*self._key(patient), patient))

    def peek(self) -> Optional[Patient]:
        """Highest-priority patient, or None when empty."""
        if not self._heap:
            return None
        return self._heap[0][-1]

    def pop(self) -> Patient:
        """Remove and return the highest-priority patient.

        Raises:
            IndexError: If the queue is empty.
        """
        if not self._heap:
            raise IndexError("pop from empty WaitingQueue")
        return heapq.heappop(self._heap)[-1]
