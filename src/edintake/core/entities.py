"""Core entity definitions for the simulation.

This module contains enums and basic types that are used across
the codebase, placed here to avoid circular imports.
"""

from enum import IntEnum


class Severity(IntEnum):
    """Patient severity classes. Higher value = more urgent.

    Severity is the primary key of the waiting queue ordering and also
    shortens the range of possible treatment durations.
    """
    NON_URGENT = 1
    LESS_URGENT = 2
    URGENT = 3
    EMERGENT = 4
    CRITICAL = 5


def severity_from_roll(roll: int) -> Severity:
    """Collapse a 1-10 roll into a severity skewed toward high urgency.

    Args:
        roll: Integer draw in 1..10.

    Returns:
        Severity for the roll (7+ -> 5, 5+ -> 4, 3+ -> 3, 2 -> 2, else 1).
    """
    if roll >= 7:
        return Severity.CRITICAL
    if roll >= 5:
        return Severity.EMERGENT
    if roll >= 3:
        return Severity.URGENT
    if roll >= 2:
        return Severity.LESS_URGENT
    return Severity.NON_URGENT
