"""
=============================================================================
channel.py — Simulated day clock and per-quantity environment channel
=============================================================================
Project:    Environmental Sensor Simulator
Date:       2026-10-19
=============================================================================
The EnvironmentChannel is the stateful heart of the simulator.  It turns
elapsed wall-clock time into a bounded, noisy, optionally diurnal signal
for one physical quantity (temperature, humidity or illuminance).

Per tick:

  1. dt = (now_ms - last_update_ms) / 1000          (skip if dt <= 0)
  2. simulated hour += dt * time_scale, wrapped to [0, 24)
  3. dispatch on the profile kind:
       WALK          bounded random walk in fixed bounds
       VARYING_WALK  bounded random walk in hour-dependent bounds
       DAYLIGHT      daylight curve (× cloud factor) + Gaussian noise
       MANUAL        drift + noise + optional daily cycle, clamped last
  4. last_update_ms = now_ms

Steps 1, 2 and 4 belong to SimulatedClock so that two channels of one
sensor can share a single simulated day.

Not thread-safe: one owner, one control loop.
"""

from typing import Optional

from sensorsim.dynamics import (
    bounded_random_walk,
    clamp,
    daily_cycle,
    daylight_curve,
    wrap_hour,
)
from sensorsim.random_source import GaussianNoise, UniformDraw
from sensorsim.scenarios import ProfileKind, ScenarioProfile


# ============================================================
# SECTION 1: SIMULATED CLOCK
# ============================================================

class SimulatedClock:
    """
    Millisecond bookkeeping plus a simulated hour-of-day.

    Parameters
    ----------
    start_ms : int
        Clock reading at construction; the first tick measures from here.
    time_scale : float
        Simulated hours per real second.
    hour : float
        Starting hour-of-day.
    rollover_ms : int or None
        Period of the host counter (e.g. 2**32 for a 32-bit millisecond
        timer).  When set, a reading below the last one is treated as a
        wraparound.  When None, such readings are ignored like a tie.
    """

    def __init__(
        self,
        start_ms: int = 0,
        time_scale: float = 0.0,
        hour: float = 0.0,
        rollover_ms: Optional[int] = None,
    ):
        self.last_update_ms = int(start_ms)
        self.time_scale = time_scale
        self.hour = wrap_hour(hour)
        self.rollover_ms = rollover_ms

    def elapsed_seconds(self, now_ms: int) -> float:
        """Seconds since the last accepted tick, without mutating state."""
        delta = int(now_ms) - self.last_update_ms
        if delta < 0 and self.rollover_ms:
            delta %= self.rollover_ms
        return delta / 1000.0

    def tick(self, now_ms: int) -> float:
        """
        Advance to `now_ms`.

        Returns
        -------
        float
            Elapsed seconds, or 0.0 when the reading did not move forward
            (in which case nothing is mutated).
        """
        dt = self.elapsed_seconds(now_ms)
        if dt <= 0:
            return 0.0
        self.last_update_ms = int(now_ms)
        self.hour = wrap_hour(self.hour + dt * self.time_scale)
        return dt


# ============================================================
# SECTION 2: ENVIRONMENT CHANNEL
# ============================================================

class EnvironmentChannel:
    """
    One simulated physical quantity.

    Usage
    -----
    >>> ch = EnvironmentChannel(light_profile("outdoor_sunny"), seed=1)
    >>> ch.advance(now_ms=5_000)
    >>> lux = ch.read()
    """

    def __init__(
        self,
        profile: ScenarioProfile,
        clock: Optional[SimulatedClock] = None,
        draw: Optional[UniformDraw] = None,
        noise: Optional[GaussianNoise] = None,
        start_ms: int = 0,
        seed: Optional[int] = None,
    ):
        self.profile = profile
        self.clock = clock if clock is not None else SimulatedClock(
            start_ms=start_ms, time_scale=profile.time_scale
        )
        self.draw = draw if draw is not None else UniformDraw(seed=seed)
        self.noise = noise if noise is not None else GaussianNoise(self.draw)

        if profile.seed_value is not None:
            self.value = float(profile.seed_value)
        else:
            self.value = self.draw(*profile.initial_range())

    # ----------------------------------------------------------
    # 2a. Public API
    # ----------------------------------------------------------

    def advance(self, now_ms: int) -> float:
        """Tick the owned clock to `now_ms` and step; returns the value."""
        dt = self.clock.tick(now_ms)
        if dt > 0:
            self.step(dt)
        return self.value

    def step(self, dt: float) -> float:
        """
        Apply one update of `dt` seconds at the clock's current hour.

        Used directly by sensors whose channels share a clock that the
        sensor ticks once per update.
        """
        if dt <= 0:
            return self.value

        kind = self.profile.kind
        if kind is ProfileKind.WALK or kind is ProfileKind.VARYING_WALK:
            self._step_walk(dt)
        elif kind is ProfileKind.DAYLIGHT:
            self._step_daylight(dt)
        else:
            self._step_manual(dt)
        return self.value

    def read(self) -> float:
        return self.value

    @property
    def hour(self) -> float:
        return self.clock.hour

    def active_bounds(self) -> tuple:
        """Bounds in force at the current simulated hour."""
        return self.profile.bounds_at(self.clock.hour)

    # ----------------------------------------------------------
    # 2b. Update policies
    # ----------------------------------------------------------

    def _step_walk(self, dt: float) -> None:
        lo, hi = self.active_bounds()
        self.value = bounded_random_walk(
            self.draw, self.value, lo, hi, self.profile.drift_rate_per_sec, dt
        )

    def _step_daylight(self, dt: float) -> None:
        p = self.profile
        level = daylight_curve(self.clock.hour, p.daylight_peak)
        if p.cloud_factor is not None:
            level *= self.draw(*p.cloud_factor)
        level += self.noise(p.noise_std_per_sec * dt)
        self.value = clamp(level, p.min_bound, p.max_bound)

    def _step_manual(self, dt: float) -> None:
        p = self.profile
        step = abs(p.drift_rate_per_sec) * dt
        value = self.value + self.draw(-step, step)
        value += self.noise(p.noise_std_per_sec * dt)
        if p.daily_amplitude > 0:
            # per-second forcing rate, not an absolute offset
            value += p.daily_amplitude * daily_cycle(self.clock.hour, p.daily_phase) * dt
        self.value = clamp(value, p.min_bound, p.max_bound)
