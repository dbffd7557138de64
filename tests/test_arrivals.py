"""Tests for arrival rate shaping and patient attribute sampling."""

import numpy as np
import pytest

from edintake.core.arrivals import (
    ArrivalGenerator,
    ArrivalProfile,
    sample_interarrival,
    sample_severity,
    sample_treatment_time,
)
from edintake.core.entities import Severity, severity_from_roll
from edintake.core.scenario import Scenario


class TestArrivalProfile:
    """Test the hour-of-day multiplier bands."""

    def test_default_multipliers(self):
        profile = ArrivalProfile()
        assert (profile.night, profile.standard, profile.peak) == (2.0, 5.0, 8.0)

    @pytest.mark.parametrize("hour", [0, 3, 6])
    def test_night_hours(self, hour):
        assert ArrivalProfile().get_multiplier(hour) == 2.0

    @pytest.mark.parametrize("hour", [18, 20, 22])
    def test_evening_peak_hours(self, hour):
        assert ArrivalProfile().get_multiplier(hour) == 8.0

    @pytest.mark.parametrize("hour", [7, 12, 17, 23])
    def test_standard_hours(self, hour):
        assert ArrivalProfile().get_multiplier(hour) == 5.0

    @pytest.mark.parametrize("hour", [24, 25, 30, 42, 46])
    def test_no_wrap_past_first_day(self, hour):
        """Hours after the first day fall outside both bands."""
        assert ArrivalProfile().get_multiplier(hour) == 5.0

    def test_custom_multipliers(self):
        profile = ArrivalProfile(night=1.0, standard=3.0, peak=4.0)
        assert profile.get_multiplier(0) == 1.0
        assert profile.get_multiplier(10) == 3.0
        assert profile.get_multiplier(20) == 4.0

    def test_validation_negative_multiplier(self):
        with pytest.raises(ValueError, match="non-negative"):
            ArrivalProfile(night=-1.0)


class TestSeverity:
    """Test skewed severity draws."""

    def test_roll_mapping(self):
        """Rolls collapse to severities biased toward 5."""
        expected = {
            1: 1, 2: 2, 3: 3, 4: 3, 5: 4,
            6: 4, 7: 5, 8: 5, 9: 5, 10: 5,
        }
        for roll, severity in expected.items():
            assert severity_from_roll(roll) == severity

    def test_severity_is_enum(self):
        assert severity_from_roll(10) is Severity.CRITICAL

    def test_sample_distribution(self):
        """About 40% of patients are critical and 10% non-urgent."""
        rng = np.random.default_rng(42)
        draws = [sample_severity(rng) for _ in range(5000)]

        assert set(draws) <= set(Severity)
        assert 0.37 < draws.count(Severity.CRITICAL) / 5000 < 0.43
        assert 0.08 < draws.count(Severity.NON_URGENT) / 5000 < 0.12


class TestTreatmentTime:
    """Test treatment duration draws."""

    @pytest.mark.parametrize("severity", list(Severity))
    def test_bounds(self, severity):
        rng = np.random.default_rng(42)
        low = 30 + int(severity) * 10
        draws = [sample_treatment_time(rng, severity) for _ in range(500)]

        assert min(draws) >= low
        assert max(draws) <= 120
        assert all(isinstance(d, int) for d in draws)

    def test_upper_bound_reachable(self, fixed_rng):
        """The range is inclusive of 120."""
        rng = fixed_rng(integers=[120])
        assert sample_treatment_time(rng, Severity.CRITICAL) == 120


class TestInterarrival:
    """Test exponential inter-arrival gaps."""

    def test_mean_matches_rate(self):
        """Mean gap is 60 / rate minutes."""
        rng = np.random.default_rng(42)
        gaps = [sample_interarrival(rng, 6.0) for _ in range(5000)]

        assert abs(np.mean(gaps) - 10.0) / 10.0 < 0.05

    def test_zero_rate_never_arrives(self):
        rng = np.random.default_rng(42)
        assert sample_interarrival(rng, 0.0) == float("inf")


class TestArrivalGenerator:
    """Test the generator combining profile and streams."""

    def _generator(self, fixed_rng, exponentials=(), severities=(), treatments=()):
        return ArrivalGenerator(
            base_rate=5.0,
            profile=ArrivalProfile(),
            rng_arrivals=fixed_rng(exponentials=exponentials),
            rng_severity=fixed_rng(integers=severities),
            rng_treatment=fixed_rng(integers=treatments),
        )

    def test_rate_at_uses_hour_of_day(self, fixed_rng):
        gen = self._generator(fixed_rng)

        assert gen.rate_at(0) == 10.0
        assert gen.rate_at(12 * 60 + 30) == 25.0
        assert gen.rate_at(19 * 60) == 40.0

    def test_next_arrival_truncates_to_minute(self, fixed_rng):
        gen = self._generator(fixed_rng, exponentials=[7.9])
        assert gen.next_arrival_time(10, 5.0) == 17

    def test_next_arrival_zero_rate(self, fixed_rng):
        gen = self._generator(fixed_rng)
        assert gen.next_arrival_time(10, 0.0) == float("inf")

    def test_draw_attributes(self, fixed_rng):
        gen = self._generator(fixed_rng, severities=[5], treatments=[75])
        severity, treatment = gen.draw_attributes()

        assert severity == Severity.EMERGENT
        assert treatment == 75

    def test_from_scenario(self):
        scenario = Scenario(base_arrival_rate=3.0, peak_multiplier=4.0)
        gen = ArrivalGenerator.from_scenario(scenario)

        assert gen.rng_arrivals is scenario.rng_arrivals
        assert gen.rate_at(20 * 60) == 12.0

    def test_reproducibility(self):
        """Same seed produces the same arrival sequence."""
        gen1 = ArrivalGenerator.from_scenario(Scenario(random_seed=42))
        gen2 = ArrivalGenerator.from_scenario(Scenario(random_seed=42))

        times1 = [gen1.next_arrival_time(i * 10, 10.0) for i in range(20)]
        times2 = [gen2.next_arrival_time(i * 10, 10.0) for i in range(20)]

        assert times1 == times2

    def test_rate_at_does_not_wrap_after_first_day(self, fixed_rng):
        """Hours 24 onward use the standard rate, not the night or peak rate."""
        gen = self._generator(fixed_rng)

        assert gen.rate_at(25 * 60) == 25.0
        assert gen.rate_at(24 * 60 + 19 * 60) == 25.0
