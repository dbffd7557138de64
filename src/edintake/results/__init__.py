"""Results layer: metric accumulation and registry audit export."""

from edintake.results.collector import ResultsCollector
from edintake.results.audit import (
    patients_to_dataframe,
    bookings_to_dataframe,
    find_overlapping_bookings,
)

__all__ = [
    "ResultsCollector",
    "patients_to_dataframe",
    "bookings_to_dataframe",
    "find_overlapping_bookings",
]
