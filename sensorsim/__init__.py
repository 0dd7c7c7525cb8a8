"""
=============================================================================
__init__.py — Package initializer for sensorsim
=============================================================================
Project:    Environmental Sensor Simulator
Date:       2026-10-19
=============================================================================
Exposes the primary public API so host test rigs can import with:

    from sensorsim import ThermoHygrometer, LightMeter, ...
"""

from sensorsim.random_source import UniformDraw, GaussianNoise
from sensorsim.dynamics import bounded_random_walk, clamp, daily_cycle, daylight_curve, wrap_hour
from sensorsim.scenarios import (
    ClimateScenario,
    LightScenario,
    ProfileKind,
    ScenarioProfile,
)
from sensorsim.channel import EnvironmentChannel, SimulatedClock
from sensorsim.sensors import BaseSensor, LightMeter, ThermoHygrometer
from sensorsim.trace import TraceRecorder
from sensorsim.validator import ValidationReport

__all__ = [
    "UniformDraw",
    "GaussianNoise",
    "bounded_random_walk",
    "clamp",
    "daily_cycle",
    "daylight_curve",
    "wrap_hour",
    "ClimateScenario",
    "LightScenario",
    "ProfileKind",
    "ScenarioProfile",
    "EnvironmentChannel",
    "SimulatedClock",
    "BaseSensor",
    "LightMeter",
    "ThermoHygrometer",
    "TraceRecorder",
    "ValidationReport",
]
