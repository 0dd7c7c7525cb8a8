"""
=============================================================================
test_channel.py — Unit tests for channel.py
=============================================================================
Project:    Environmental Sensor Simulator
Date:       2026-10-19
=============================================================================
Tests verify:
  - Clock ticks: dt computation, ties, non-monotonic reads, rollover
  - Simulated hour wraparound
  - Each update policy (walk, varying walk, daylight, manual)
  - Boundedness under long random runs

Run with: pytest tests/test_channel.py -v
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import numpy as np
import pytest

from sensorsim.channel import EnvironmentChannel, SimulatedClock
from sensorsim.scenarios import (
    ClimateScenario,
    LightScenario,
    ScenarioProfile,
    climate_profiles,
    light_profile,
    manual_light,
)


# ============================================================
# TESTS: SIMULATED CLOCK
# ============================================================

class TestSimulatedClock:

    def test_dt_in_seconds(self):
        clock = SimulatedClock(start_ms=1_000)
        assert clock.tick(3_500) == pytest.approx(2.5)
        assert clock.last_update_ms == 3_500

    def test_tie_is_noop(self):
        clock = SimulatedClock(start_ms=1_000, time_scale=1.0, hour=5.0)
        assert clock.tick(1_000) == 0.0
        assert clock.hour == 5.0
        assert clock.last_update_ms == 1_000

    def test_backwards_read_does_not_move_timestamp(self):
        clock = SimulatedClock(start_ms=5_000)
        assert clock.tick(4_000) == 0.0
        assert clock.last_update_ms == 5_000
        assert clock.tick(6_000) == pytest.approx(1.0)

    def test_rollover(self):
        period = 2 ** 32
        clock = SimulatedClock(start_ms=period - 500, rollover_ms=period)
        assert clock.tick(500) == pytest.approx(1.0)
        assert clock.last_update_ms == 500

    def test_hour_advances_by_time_scale(self):
        clock = SimulatedClock(time_scale=0.5)
        clock.tick(10_000)
        assert clock.hour == pytest.approx(5.0)

    def test_hour_wraps_past_24(self):
        clock = SimulatedClock(time_scale=1.0, hour=23.0)
        clock.tick(2_000)
        assert clock.hour == pytest.approx(1.0)

    def test_zero_time_scale_freezes_day(self):
        clock = SimulatedClock(time_scale=0.0, hour=7.0)
        clock.tick(1_000_000)
        assert clock.hour == 7.0


# ============================================================
# TESTS: CHANNEL SEEDING
# ============================================================

class TestSeeding:

    def test_greenhouse_temperature_seed_in_range(self):
        temp, _ = climate_profiles(ClimateScenario.GREENHOUSE)
        for seed in range(50):
            ch = EnvironmentChannel(temp, seed=seed)
            assert 27.0 <= ch.read() <= 32.0

    def test_sunny_seed_is_exact(self):
        ch = EnvironmentChannel(light_profile(LightScenario.OUTDOOR_SUNNY), seed=0)
        assert ch.read() == 2000.0

    def test_manual_seed_within_bounds(self):
        ch = EnvironmentChannel(manual_light(100.0, 200.0), seed=5)
        assert 100.0 <= ch.read() < 200.0


# ============================================================
# TESTS: UPDATE POLICIES
# ============================================================

class TestPolicies:

    def test_advance_same_timestamp_is_idempotent(self):
        ch = EnvironmentChannel(manual_light(0.0, 1000.0), seed=1, start_ms=0)
        ch.advance(1_000)
        value, hour = ch.read(), ch.hour
        ch.advance(1_000)
        assert ch.read() == value
        assert ch.hour == hour

    def test_indoor_walk_bounded(self):
        temp, _ = climate_profiles("indoor_room")
        ch = EnvironmentChannel(temp, seed=3)
        for t in range(1, 5001):
            ch.advance(t * 1_000)
            assert 22.4 <= ch.read() <= 23.1

    def test_office_ac_uses_on_bounds_from_nine(self):
        temp, _ = climate_profiles(ClimateScenario.OFFICE_AC)
        clock = SimulatedClock(time_scale=0.0, hour=9.0)
        ch = EnvironmentChannel(temp, clock=clock, seed=4)
        ch.step(1.0)
        assert 21.2 <= ch.read() <= 22.0

    def test_office_ac_uses_off_bounds_before_nine(self):
        temp, _ = climate_profiles(ClimateScenario.OFFICE_AC)
        clock = SimulatedClock(time_scale=0.0, hour=8.999)
        ch = EnvironmentChannel(temp, clock=clock, seed=4)
        ch.step(1.0)
        assert 22.8 <= ch.read() <= 23.2

    def test_daylight_follows_curve_at_noon(self):
        profile = light_profile(LightScenario.OUTDOOR_SUNNY)
        clock = SimulatedClock(time_scale=0.0, hour=12.0)
        ch = EnvironmentChannel(profile, clock=clock, seed=6)
        ch.step(0.01)
        # noise std is 100 * dt = 1 lux; value clamps at the peak
        assert ch.read() == pytest.approx(100000.0, abs=10.0)
        assert ch.read() <= 100000.0

    def test_daylight_dark_at_midnight(self):
        profile = light_profile(LightScenario.OUTDOOR_SUNNY)
        clock = SimulatedClock(time_scale=0.0, hour=0.0)
        ch = EnvironmentChannel(profile, clock=clock, seed=6)
        ch.step(0.01)
        assert 0.0 <= ch.read() <= 10.0

    def test_cloudy_attenuates(self):
        profile = light_profile(LightScenario.OUTDOOR_CLOUDY)
        clock = SimulatedClock(time_scale=0.0, hour=12.0)
        ch = EnvironmentChannel(profile, clock=clock, seed=8)
        for _ in range(200):
            ch.step(0.001)
            assert 0.4 * 25000.0 - 5.0 <= ch.read() <= 0.8 * 25000.0 + 5.0

    def test_greenhouse_light_respects_floor(self):
        profile = light_profile(LightScenario.GREENHOUSE)
        clock = SimulatedClock(time_scale=0.0, hour=0.0)
        ch = EnvironmentChannel(profile, clock=clock, seed=2)
        ch.step(1.0)
        assert ch.read() >= 2000.0

    def test_manual_daily_cycle_is_rate_scaled(self):
        # No drift or noise: the only change is amplitude * cycle * dt.
        profile = ScenarioProfile(
            0.0, 100.0, daily_amplitude=2.0, time_scale=0.0, name="cycle-only",
        )
        clock = SimulatedClock(time_scale=0.0, hour=6.0)
        ch = EnvironmentChannel(profile, clock=clock, seed=1)
        start = ch.read()
        ch.step(0.5)
        assert ch.read() == pytest.approx(min(start + 1.0, 100.0))

    def test_inverted_bounds_pin_to_min(self):
        with pytest.warns(UserWarning):
            profile = ScenarioProfile(10.0, 0.0, drift_rate_per_sec=1.0, noise_std_per_sec=1.0)
        ch = EnvironmentChannel(profile, seed=1)
        for t in range(1, 20):
            ch.advance(t * 100)
            assert ch.read() == 10.0

    @pytest.mark.parametrize("scenario", list(LightScenario)[1:])
    def test_light_presets_bounded(self, scenario):
        profile = light_profile(scenario)
        ch = EnvironmentChannel(profile, seed=11)
        rng = np.random.default_rng(0)
        now = 0
        for _ in range(3000):
            now += int(rng.integers(1, 5_000))
            ch.advance(now)
            assert profile.min_bound <= ch.read() <= profile.max_bound
            assert 0.0 <= ch.hour < 24.0

    @pytest.mark.parametrize("scenario", list(ClimateScenario)[1:])
    def test_climate_presets_track_active_bounds(self, scenario):
        for profile in climate_profiles(scenario):
            clock = SimulatedClock(time_scale=0.01)
            ch = EnvironmentChannel(profile, clock=clock, seed=12)
            now = 0
            for _ in range(3000):
                now += 10_000
                ch.advance(now)
                lo, hi = ch.active_bounds()
                assert lo <= ch.read() <= hi
                assert profile.min_bound <= ch.read() <= profile.max_bound


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
