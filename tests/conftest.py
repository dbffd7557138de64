"""Pytest fixtures for ED Intake tests."""

import pytest


class FixedSequenceRNG:
    """Stand-in for ``numpy.random.Generator`` returning scripted draws.

    ``exponential`` returns the next scripted gap (ignoring scale) and
    ``integers`` the next scripted integer, checked against the bounds.
    Every scale passed to ``exponential`` is kept in ``scales``.
    """

    def __init__(self, exponentials=(), integers=()):
        self._exponentials = list(exponentials)
        self._integers = list(integers)
        self.scales = []

    def exponential(self, scale=1.0):
        self.scales.append(scale)
        return self._exponentials.pop(0)

    def integers(self, low, high, endpoint=False):
        value = self._integers.pop(0)
        upper = high if endpoint else high - 1
        assert low <= value <= upper, f"{value} outside [{low}, {upper}]"
        return value


@pytest.fixture
def default_seed() -> int:
    """Default random seed for reproducible tests."""
    return 42


@pytest.fixture
def short_run_length() -> int:
    """Short arrival horizon (minutes) for quick tests."""
    return 120


@pytest.fixture
def fixed_rng():
    """Factory for scripted random sources."""
    return FixedSequenceRNG
