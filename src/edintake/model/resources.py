"""Finite pools of interchangeable renewable resources."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class ResourceUnit:
    """One clinician or bed.

    Attributes:
        index: Position within its pool.
        available: Whether the unit can be acquired.
        busy_until: Minute the unit becomes free (0 initially).
        bookings: (start, end, patient_id) for every acquisition.
    """

    index: int
    available: bool = True
    busy_until: int = 0
    bookings: List[Tuple[int, int, int]] = field(default_factory=list)


class ResourcePool:
    """Homogeneous set of resource units with exclusive acquisition.

    Units are scanned in index order, so selection among free units is
    deterministic.

    Attributes:
        name: Pool label used in logs and audit output (e.g. "clinicians").
        units: The units in the pool.
    """

    def __init__(self, name: str, size: int) -> None:
        if size < 0:
            raise ValueError(f"Pool size must be non-negative, got {size}")
        self.name = name
        self.units = [ResourceUnit(index=i) for i in range(size)]

    def __len__(self) -> int:
        return len(self.units)

    @property
    def n_available(self) -> int:
        return sum(1 for unit in self.units if unit.available)

    def release(self, current_time: int) -> None:
        """Mark every unit whose busy period has ended as available.

        Calling this repeatedly at the same time leaves the pool unchanged.
        """
        for unit in self.units:
            if unit.busy_until <= current_time:
                unit.available = True

    def find_available(self, at_time: int) -> Optional[ResourceUnit]:
        """Return the first unit usable at ``at_time``, or None."""
        for unit in self.units:
            if unit.available and at_time >= unit.busy_until:
                return unit
        return None

    def acquire(self, unit: ResourceUnit, start: int, until: int, patient_id: int) -> None:
        """Mark ``unit`` busy from ``start`` until ``until``.

        Raises:
            ValueError: If the unit is not part of this pool, is already held,
                or the interval is empty or overlaps its current booking.
        """
        if unit.index >= len(self.units) or self.units[unit.index] is not unit:
            raise ValueError(f"Unit {unit.index} does not belong to pool '{self.name}'")
        if not unit.available or start < unit.busy_until:
            raise ValueError(f"{self.name} unit {unit.index} is busy until {unit.busy_until}")
        if until < start:
            raise ValueError(f"Booking end {until} precedes start {start}")
        unit.available = False
        unit.busy_until = until
        unit.bookings.append((start, until, patient_id))

    def next_free_times(self) -> List[int]:
        """The ``busy_until`` of every unit in the pool."""
        return [unit.busy_until for unit in self.units]
