"""Tabular export of the patient registry and unit bookings."""

from typing import Iterable, List

import pandas as pd

from edintake.model.patient import Patient
from edintake.model.resources import ResourcePool


PATIENT_COLUMNS = [
    "patient_id", "arrival_time", "severity", "treatment_time",
    "treated", "start_treatment_time", "wait_time", "clinician", "bed",
]

BOOKING_COLUMNS = ["pool", "unit", "start", "end", "patient_id"]


def patients_to_dataframe(patients: Iterable[Patient]) -> pd.DataFrame:
    """One row per patient in the registry, untreated patients included."""
    rows = [
        {
            "patient_id": p.id,
            "arrival_time": p.arrival_time,
            "severity": int(p.severity),
            "treatment_time": p.treatment_time,
            "treated": p.is_treated,
            "start_treatment_time": p.start_treatment_time,
            "wait_time": p.wait_time if p.is_treated else None,
            "clinician": p.clinician_index,
            "bed": p.bed_index,
        }
        for p in patients
    ]
    return pd.DataFrame(rows, columns=PATIENT_COLUMNS)


def bookings_to_dataframe(pools: List[ResourcePool]) -> pd.DataFrame:
    """One row per unit booking across the given pools, sorted by start."""
    rows = [
        {
            "pool": pool.name,
            "unit": unit.index,
            "start": start,
            "end": end,
            "patient_id": patient_id,
        }
        for pool in pools
        for unit in pool.units
        for start, end, patient_id in unit.bookings
    ]
    df = pd.DataFrame(rows, columns=BOOKING_COLUMNS)
    return df.sort_values(["pool", "unit", "start"]).reset_index(drop=True)


def find_overlapping_bookings(pools: List[ResourcePool]) -> pd.DataFrame:
    """Bookings that start before the previous booking on the same unit ends.

    An empty result means no unit was ever double-booked.
    """
    df = bookings_to_dataframe(pools)
    previous_end = df.groupby(["pool", "unit"])["end"].shift()
    return df[df["start"] < previous_end].reset_index(drop=True)
