"""
=============================================================================
scenarios.py — Scenario presets and per-channel profiles
=============================================================================
Project:    Environmental Sensor Simulator
Date:       2026-10-19
=============================================================================
A ScenarioProfile is the immutable parameter bundle that drives one
EnvironmentChannel: value bounds, drift and noise rates, the optional
daily cycle, the simulated-clock speed, and the update policy (`kind`).

Preset tables below fix the constants for each named environment.  These
numbers are the identity of a scenario; changing them changes what a
firmware test sees, so treat them as frozen.

  Climate (temperature + humidity): IndoorRoom, Greenhouse, OfficeAC
  Illuminance:                      OutdoorSunny, OutdoorCloudy,
                                    IndoorRoom, Greenhouse

Manual profiles are built from caller values with `manual_climate()`,
`manual_light()` or `ScenarioProfile.from_dict()`.
"""

import math
import warnings
from dataclasses import dataclass, fields
from enum import Enum
from typing import Callable, Optional, Union


# ============================================================
# SECTION 1: SCENARIO ENUMERATIONS
# ============================================================

class ProfileKind(Enum):
    """Per-tick update policy of a channel."""

    WALK = "walk"                  # bounded random walk inside fixed bounds
    VARYING_WALK = "varying_walk"  # bounds move with the simulated hour
    DAYLIGHT = "daylight"          # value set from the daylight curve each tick
    MANUAL = "manual"              # drift + noise + optional daily cycle


class ClimateScenario(Enum):
    MANUAL = "manual"
    INDOOR_ROOM = "indoor_room"
    GREENHOUSE = "greenhouse"
    OFFICE_AC = "office_ac"


class LightScenario(Enum):
    MANUAL = "manual"
    OUTDOOR_SUNNY = "outdoor_sunny"
    OUTDOOR_CLOUDY = "outdoor_cloudy"
    INDOOR_ROOM = "indoor_room"
    GREENHOUSE = "greenhouse"


def _normalise_name(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


def resolve_scenario(enum_cls, scenario: Union[Enum, str]):
    """
    Accept an enum member or a name like "OfficeAC", "office_ac", "office-ac".

    Raises
    ------
    ValueError
        If the name matches no member of `enum_cls`.
    """
    if isinstance(scenario, enum_cls):
        return scenario
    if isinstance(scenario, str):
        wanted = _normalise_name(scenario)
        for member in enum_cls:
            if _normalise_name(member.name) == wanted:
                return member
    valid = ", ".join(m.value for m in enum_cls)
    raise ValueError(f"Unknown {enum_cls.__name__} '{scenario}'. Valid: {valid}")


# ============================================================
# SECTION 2: PROFILE DATACLASS
# ============================================================

BoundsFn = Callable[[float], tuple]


@dataclass(frozen=True)
class ScenarioProfile:
    """
    Immutable parameters for one channel.

    Attributes
    ----------
    min_bound, max_bound : float
        Value range.  An inverted range is tolerated and pins every value
        to `min_bound`.
    drift_rate_per_sec : float
        Maximum random-walk step per second.
    noise_std_per_sec : float
        Gaussian noise std per second of elapsed time.
    daily_amplitude : float
        Manual-mode daily-cycle amplitude, applied as a per-second rate.
    daily_phase : float
        Daily-cycle phase shift in cycles (0–1).
    time_scale : float
        Simulated hours advanced per real second.  0 freezes the day.
    kind : ProfileKind
        Update policy.
    seed_range : tuple or None
        (lo, hi) for the initial uniform draw; defaults to the bounds.
    seed_value : float or None
        Exact initial value; wins over `seed_range`.
    bounds_fn : callable or None
        hour -> (lo, hi) for VARYING_WALK profiles.
    daylight_peak : float
        Curve peak for DAYLIGHT profiles.
    cloud_factor : tuple or None
        (lo, hi) attenuation drawn every tick for DAYLIGHT profiles.
    name : str
        Label carried into traces and reports.
    """

    min_bound: float
    max_bound: float
    drift_rate_per_sec: float = 0.0
    noise_std_per_sec: float = 0.0
    daily_amplitude: float = 0.0
    daily_phase: float = 0.0
    time_scale: float = 0.0
    kind: ProfileKind = ProfileKind.MANUAL
    seed_range: Optional[tuple] = None
    seed_value: Optional[float] = None
    bounds_fn: Optional[BoundsFn] = None
    daylight_peak: float = 0.0
    cloud_factor: Optional[tuple] = None
    name: str = "manual"

    def __post_init__(self):
        # Bad values are allowed through; callers get a warning, not an error.
        problems = []
        if self.min_bound > self.max_bound:
            problems.append(
                f"min_bound {self.min_bound} > max_bound {self.max_bound} "
                f"(values will pin to {self.min_bound})"
            )
        if self.drift_rate_per_sec < 0:
            problems.append(f"negative drift_rate_per_sec {self.drift_rate_per_sec}")
        if self.noise_std_per_sec < 0:
            problems.append(f"negative noise_std_per_sec {self.noise_std_per_sec} (noise disabled)")
        if self.daily_amplitude < 0:
            problems.append(f"negative daily_amplitude {self.daily_amplitude} (cycle disabled)")
        if self.time_scale < 0:
            problems.append(f"negative time_scale {self.time_scale}")
        for msg in problems:
            warnings.warn(f"ScenarioProfile '{self.name}': {msg}", stacklevel=3)

    def bounds_at(self, hour: float) -> tuple:
        """Active (lo, hi) bounds at a simulated hour."""
        if self.bounds_fn is not None:
            return self.bounds_fn(hour)
        return (self.min_bound, self.max_bound)

    def initial_range(self) -> tuple:
        """Range used for the construction-time uniform draw."""
        if self.seed_range is not None:
            return self.seed_range
        return (self.min_bound, self.max_bound)

    @classmethod
    def from_dict(cls, cfg: dict) -> "ScenarioProfile":
        """
        Build a manual profile from a plain dict.

        Only scalar fields are read (`min_bound`, `max_bound`,
        `drift_rate_per_sec`, `noise_std_per_sec`, `daily_amplitude`,
        `daily_phase`, `time_scale`, `name`); unknown keys raise.

        Raises
        ------
        ValueError
            On unknown keys or missing bounds.
        """
        allowed = {
            "min_bound", "max_bound", "drift_rate_per_sec", "noise_std_per_sec",
            "daily_amplitude", "daily_phase", "time_scale", "name",
        }
        unknown = set(cfg) - allowed
        if unknown:
            raise ValueError(f"Unknown profile keys: {sorted(unknown)}")
        if "min_bound" not in cfg or "max_bound" not in cfg:
            raise ValueError("Profile config needs both 'min_bound' and 'max_bound'.")
        values = {k: (v if k == "name" else float(v)) for k, v in cfg.items()}
        return cls(kind=ProfileKind.MANUAL, **values)

    def to_dict(self) -> dict:
        """Scalar fields as a JSON-friendly dict (callables dropped)."""
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if callable(value):
                continue
            if isinstance(value, Enum):
                value = value.value
            out[f.name] = value
        return out


# ============================================================
# SECTION 3: HOUR-DEPENDENT BOUNDS
# Greenhouse bounds swing with a gentle day factor; the office
# switches between AC-on and AC-off bands during working hours.
# ============================================================

AC_ON_HOUR = 9.0
AC_OFF_HOUR = 18.0


def office_ac_on(hour: float) -> bool:
    """AC runs for hour ∈ [9, 18)."""
    return AC_ON_HOUR <= hour < AC_OFF_HOUR


def _day_factor(hour: float) -> float:
    return math.sin(2.0 * math.pi * (hour / 24.0))


def greenhouse_temperature_bounds(hour: float) -> tuple:
    f = _day_factor(hour)
    return (27.0 + 0.4 * f, 32.0 + 0.4 * f)


def greenhouse_humidity_bounds(hour: float) -> tuple:
    f = _day_factor(hour)
    return (75.0 + 1.0 * f, 95.0 + 1.0 * f)


def office_temperature_bounds(hour: float) -> tuple:
    return (21.2, 22.0) if office_ac_on(hour) else (22.8, 23.2)


def office_humidity_bounds(hour: float) -> tuple:
    return (37.0, 41.0) if office_ac_on(hour) else (42.0, 47.0)


# ============================================================
# SECTION 4: PRESET TABLES
# ============================================================

CLIMATE_TIME_SCALE = 0.0001
LIGHT_TIME_SCALE = 0.02   # one simulated day ≈ 20 minutes of wall time

# scenario -> (temperature profile, humidity profile)
CLIMATE_PRESETS = {
    ClimateScenario.INDOOR_ROOM: (
        ScenarioProfile(
            22.4, 23.1, drift_rate_per_sec=0.02, time_scale=CLIMATE_TIME_SCALE,
            kind=ProfileKind.WALK, name="indoor_room/temperature",
        ),
        ScenarioProfile(
            47.0, 52.0, drift_rate_per_sec=0.05, time_scale=CLIMATE_TIME_SCALE,
            kind=ProfileKind.WALK, name="indoor_room/humidity",
        ),
    ),
    ClimateScenario.GREENHOUSE: (
        ScenarioProfile(
            26.6, 32.4, drift_rate_per_sec=0.05, time_scale=CLIMATE_TIME_SCALE,
            kind=ProfileKind.VARYING_WALK, seed_range=(27.0, 32.0),
            bounds_fn=greenhouse_temperature_bounds, name="greenhouse/temperature",
        ),
        ScenarioProfile(
            74.0, 96.0, drift_rate_per_sec=0.10, time_scale=CLIMATE_TIME_SCALE,
            kind=ProfileKind.VARYING_WALK, seed_range=(75.0, 95.0),
            bounds_fn=greenhouse_humidity_bounds, name="greenhouse/humidity",
        ),
    ),
    ClimateScenario.OFFICE_AC: (
        ScenarioProfile(
            21.2, 23.2, drift_rate_per_sec=0.03, time_scale=CLIMATE_TIME_SCALE,
            kind=ProfileKind.VARYING_WALK, seed_range=(21.0, 24.0),
            bounds_fn=office_temperature_bounds, name="office_ac/temperature",
        ),
        ScenarioProfile(
            37.0, 47.0, drift_rate_per_sec=0.08, time_scale=CLIMATE_TIME_SCALE,
            kind=ProfileKind.VARYING_WALK, seed_range=(35.0, 45.0),
            bounds_fn=office_humidity_bounds, name="office_ac/humidity",
        ),
    ),
}

LIGHT_PRESETS = {
    LightScenario.OUTDOOR_SUNNY: ScenarioProfile(
        0.0, 100000.0, noise_std_per_sec=100.0, time_scale=LIGHT_TIME_SCALE,
        kind=ProfileKind.DAYLIGHT, seed_value=2000.0, daylight_peak=100000.0,
        name="outdoor_sunny/lux",
    ),
    LightScenario.OUTDOOR_CLOUDY: ScenarioProfile(
        0.0, 25000.0, noise_std_per_sec=200.0, time_scale=LIGHT_TIME_SCALE,
        kind=ProfileKind.DAYLIGHT, seed_value=1500.0, daylight_peak=25000.0,
        cloud_factor=(0.4, 0.8), name="outdoor_cloudy/lux",
    ),
    LightScenario.INDOOR_ROOM: ScenarioProfile(
        50.0, 150.0, drift_rate_per_sec=3.0, time_scale=0.0,
        kind=ProfileKind.WALK, seed_value=90.0, name="indoor_room/lux",
    ),
    LightScenario.GREENHOUSE: ScenarioProfile(
        2000.0, 30000.0, noise_std_per_sec=150.0, time_scale=0.015,
        kind=ProfileKind.DAYLIGHT, seed_value=12000.0, daylight_peak=30000.0,
        name="greenhouse/lux",
    ),
}


def climate_profiles(scenario: Union[ClimateScenario, str]) -> tuple:
    """(temperature, humidity) profiles for a named climate preset."""
    scenario = resolve_scenario(ClimateScenario, scenario)
    if scenario is ClimateScenario.MANUAL:
        raise ValueError("MANUAL has no preset; use manual_climate() instead.")
    return CLIMATE_PRESETS[scenario]


def light_profile(scenario: Union[LightScenario, str]) -> ScenarioProfile:
    """Profile for a named illuminance preset."""
    scenario = resolve_scenario(LightScenario, scenario)
    if scenario is LightScenario.MANUAL:
        raise ValueError("MANUAL has no preset; use manual_light() instead.")
    return LIGHT_PRESETS[scenario]


# ============================================================
# SECTION 5: MANUAL PROFILE BUILDERS
# ============================================================

def manual_climate(
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
) -> tuple:
    """
    Build (temperature, humidity) manual profiles.

    Set a daily amplitude to 0 to disable that channel's daily cycle.
    """
    temperature = ScenarioProfile(
        temp_min, temp_max,
        drift_rate_per_sec=temp_step_per_sec,
        noise_std_per_sec=temp_noise_std_per_sec,
        daily_amplitude=temp_daily_amp,
        daily_phase=daily_phase,
        time_scale=time_scale,
        name="manual/temperature",
    )
    humidity = ScenarioProfile(
        hum_min, hum_max,
        drift_rate_per_sec=hum_step_per_sec,
        noise_std_per_sec=hum_noise_std_per_sec,
        daily_amplitude=hum_daily_amp,
        daily_phase=daily_phase,
        time_scale=time_scale,
        name="manual/humidity",
    )
    return temperature, humidity


def manual_light(
    lux_min: float,
    lux_max: float,
    drift_per_sec: float = 5.0,
    noise_std_per_sec: float = 1.0,
    daily_amp: float = 0.0,
    daily_phase: float = 0.0,
    time_scale: float = LIGHT_TIME_SCALE,
) -> ScenarioProfile:
    """Build a manual illuminance profile."""
    return ScenarioProfile(
        lux_min, lux_max,
        drift_rate_per_sec=drift_per_sec,
        noise_std_per_sec=noise_std_per_sec,
        daily_amplitude=daily_amp,
        daily_phase=daily_phase,
        time_scale=time_scale,
        name="manual/lux",
    )
