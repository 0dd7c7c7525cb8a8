"""
=============================================================================
sensors.py — Drop-in simulated sensors built from environment channels
=============================================================================
Project:    Environmental Sensor Simulator
Date:       2026-10-19
=============================================================================
Two sensor models share one small contract, `update()` / `read()`:

  ThermoHygrometer  — temperature + relative humidity (DHT-style part),
                      two channels on one simulated day clock
  LightMeter        — illuminance in lux, one channel

Each sensor reads its clock once per `update()`.  The clock is an injected
callable returning milliseconds; pass `now_ms` to `update()` to drive the
model from synthetic timestamps instead.  Randomness comes from an
injected numpy Generator (or a `seed`), so runs are reproducible.

Behaviour is dt-normalised: calling update() more often gives a finer
trajectory, not a faster one, and two calls in the same millisecond are
a no-op.
"""

import time
from abc import ABC, abstractmethod
from typing import Callable, Optional, Union

import numpy as np

from sensorsim.channel import EnvironmentChannel, SimulatedClock
from sensorsim.random_source import GaussianNoise, UniformDraw
from sensorsim.scenarios import (
    CLIMATE_TIME_SCALE,
    LIGHT_TIME_SCALE,
    ClimateScenario,
    LightScenario,
    ScenarioProfile,
    climate_profiles,
    light_profile,
    manual_climate,
    manual_light,
    resolve_scenario,
)


def monotonic_ms() -> int:
    """Default clock: monotonic milliseconds."""
    return time.monotonic_ns() // 1_000_000


# ============================================================
# SECTION 1: SENSOR CONTRACT
# ============================================================

class BaseSensor(ABC):
    """
    Shared plumbing for the two simulated sensors.

    Subclasses own their channels and implement `update()` / `read()`.
    """

    def __init__(
        self,
        time_scale: float,
        clock: Optional[Callable[[], int]] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        start_hour: float = 0.0,
        rollover_ms: Optional[int] = None,
    ):
        self.clock_fn = clock if clock is not None else monotonic_ms
        # None when the caller injects its own generator
        self.seed = seed if rng is None else None
        self.draw = UniformDraw(rng=rng, seed=seed)
        self.noise = GaussianNoise(self.draw)
        self.sim_clock = SimulatedClock(
            start_ms=self.clock_fn(),
            time_scale=time_scale,
            hour=start_hour,
            rollover_ms=rollover_ms,
        )

    def _channel(self, profile: ScenarioProfile) -> EnvironmentChannel:
        return EnvironmentChannel(profile, clock=self.sim_clock, draw=self.draw, noise=self.noise)

    def _tick(self, now_ms: Optional[int]) -> float:
        if now_ms is None:
            now_ms = self.clock_fn()
        return self.sim_clock.tick(now_ms)

    @property
    def sim_hour(self) -> float:
        """Current simulated hour-of-day."""
        return self.sim_clock.hour

    @abstractmethod
    def update(self, now_ms: Optional[int] = None) -> None:
        ...

    @abstractmethod
    def read(self) -> float:
        ...


# ============================================================
# SECTION 2: THERMO-HYGROMETER
# ============================================================

class ThermoHygrometer(BaseSensor):
    """
    Simulated temperature (°C) + relative humidity (%) sensor.

    Usage
    -----
    >>> dht = ThermoHygrometer("greenhouse", seed=42)
    >>> dht.update()
    >>> dht.read(), dht.read_humidity()

    For full control use `ThermoHygrometer.manual(...)`.
    """

    def __init__(
        self,
        scenario: Optional[Union[ClimateScenario, str]] = None,
        clock: Optional[Callable[[], int]] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        start_hour: float = 0.0,
        rollover_ms: Optional[int] = None,
        profiles: Optional[tuple] = None,
    ):
        if scenario is None:
            scenario = ClimateScenario.MANUAL if profiles is not None else ClimateScenario.INDOOR_ROOM
        self.scenario = resolve_scenario(ClimateScenario, scenario)
        if profiles is None:
            profiles = climate_profiles(self.scenario)
        temp_profile, hum_profile = profiles

        super().__init__(
            time_scale=temp_profile.time_scale,
            clock=clock,
            rng=rng,
            seed=seed,
            start_hour=start_hour,
            rollover_ms=rollover_ms,
        )
        self.temperature = self._channel(temp_profile)
        self.humidity = self._channel(hum_profile)

    @classmethod
    def manual(
        cls,
        temp_min: float,
        temp_max: float,
        hum_min: float,
        hum_max: float,
        temp_step_per_sec: float = 0.05,
        hum_step_per_sec: float = 0.10,
        temp_noise_std_per_sec: float = 0.01,
        hum_noise_std_per_sec: float = 0.02,
        temp_daily_amp: float = 0.0,
        hum_daily_amp: float = 0.0,
        daily_phase: float = 0.0,
        time_scale: float = CLIMATE_TIME_SCALE,
        **kwargs,
    ) -> "ThermoHygrometer":
        """Fully configured sensor; extra kwargs go to the constructor."""
        profiles = manual_climate(
            temp_min, temp_max, hum_min, hum_max,
            temp_step_per_sec=temp_step_per_sec,
            hum_step_per_sec=hum_step_per_sec,
            temp_noise_std_per_sec=temp_noise_std_per_sec,
            hum_noise_std_per_sec=hum_noise_std_per_sec,
            temp_daily_amp=temp_daily_amp,
            hum_daily_amp=hum_daily_amp,
            daily_phase=daily_phase,
            time_scale=time_scale,
        )
        return cls(ClimateScenario.MANUAL, profiles=profiles, **kwargs)

    def update(self, now_ms: Optional[int] = None) -> None:
        dt = self._tick(now_ms)
        if dt <= 0:
            return
        self.temperature.step(dt)
        self.humidity.step(dt)

    def read(self) -> float:
        """Last computed temperature in °C."""
        return self.temperature.read()

    def read_humidity(self) -> float:
        """Last computed relative humidity in %."""
        return self.humidity.read()


# ============================================================
# SECTION 3: LIGHT METER
# ============================================================

class LightMeter(BaseSensor):
    """
    Simulated illuminance sensor (lux).

    Usage
    -----
    >>> meter = LightMeter(LightScenario.OUTDOOR_CLOUDY, seed=3)
    >>> meter.update(now_ms=1_000)
    >>> meter.read()
    """

    def __init__(
        self,
        scenario: Optional[Union[LightScenario, str]] = None,
        clock: Optional[Callable[[], int]] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        start_hour: float = 0.0,
        rollover_ms: Optional[int] = None,
        profile: Optional[ScenarioProfile] = None,
    ):
        if scenario is None:
            scenario = LightScenario.MANUAL if profile is not None else LightScenario.INDOOR_ROOM
        self.scenario = resolve_scenario(LightScenario, scenario)
        if profile is None:
            profile = light_profile(self.scenario)

        super().__init__(
            time_scale=profile.time_scale,
            clock=clock,
            rng=rng,
            seed=seed,
            start_hour=start_hour,
            rollover_ms=rollover_ms,
        )
        self.lux = self._channel(profile)

    @classmethod
    def manual(
        cls,
        lux_min: float,
        lux_max: float,
        drift_per_sec: float = 5.0,
        noise_std_per_sec: float = 1.0,
        daily_amp: float = 0.0,
        daily_phase: float = 0.0,
        time_scale: float = LIGHT_TIME_SCALE,
        **kwargs,
    ) -> "LightMeter":
        """Fully configured sensor; extra kwargs go to the constructor."""
        profile = manual_light(
            lux_min, lux_max,
            drift_per_sec=drift_per_sec,
            noise_std_per_sec=noise_std_per_sec,
            daily_amp=daily_amp,
            daily_phase=daily_phase,
            time_scale=time_scale,
        )
        return cls(LightScenario.MANUAL, profile=profile, **kwargs)

    def update(self, now_ms: Optional[int] = None) -> None:
        dt = self._tick(now_ms)
        if dt > 0:
            self.lux.step(dt)

    def read(self) -> float:
        """Last computed illuminance in lux."""
        return self.lux.read()
