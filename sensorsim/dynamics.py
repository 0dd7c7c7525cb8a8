"""
=============================================================================
dynamics.py — Bounded random walk and diurnal forcing primitives
=============================================================================
Project:    Environmental Sensor Simulator
Date:       2026-10-19
=============================================================================
Stateless building blocks shared by every channel:

  clamp                 — pin a value into [lo, hi]
  bounded_random_walk   — one dt-scaled uniform step, clamped
  daily_cycle           — symmetric sin() over the simulated day, [-1, 1]
  daylight_curve        — raised sine, 0 at midnight and `peak` at noon
  wrap_hour             — keep the simulated hour in [0, 24)

All time arguments are in seconds (dt) or hours-of-day (hour).
"""

import math

from sensorsim.random_source import UniformDraw


HOURS_PER_DAY = 24.0


# ============================================================
# SECTION 1: BOUNDING
# ============================================================

def clamp(x: float, lo: float, hi: float) -> float:
    """
    Pin `x` into [lo, hi].

    With an inverted range (lo > hi) every input maps to `lo`.
    """
    return max(lo, min(x, hi))


def bounded_random_walk(
    draw: UniformDraw,
    current: float,
    lo: float,
    hi: float,
    rate_per_sec: float,
    dt: float,
) -> float:
    """
    Take one random-walk step of at most `rate_per_sec * dt` and clamp.

    Parameters
    ----------
    draw : UniformDraw
        Uniform source for the step.
    current : float
        Value before the step.
    lo, hi : float
        Bounds applied after the step.
    rate_per_sec : float
        Maximum drift per second.  The sign is ignored.
    dt : float
        Elapsed seconds.  dt <= 0 returns `current` untouched.

    Returns
    -------
    float
        New value within [lo, hi].
    """
    if dt <= 0:
        return current
    step = abs(rate_per_sec) * dt
    return clamp(current + draw(-step, step), lo, hi)


# ============================================================
# SECTION 2: DIURNAL FORCING
# ============================================================

def wrap_hour(hour: float) -> float:
    """Wrap an hour-of-day into [0, 24)."""
    wrapped = hour % HOURS_PER_DAY
    # float modulo can land exactly on 24.0 for tiny negative inputs
    if wrapped >= HOURS_PER_DAY:
        wrapped = 0.0
    return wrapped


def daily_cycle(hour: float, phase: float = 0.0) -> float:
    """
    Symmetric daily cycle sin(2π (hour/24 + phase)), range [-1, 1].

    `phase` is a shift in whole cycles (0–1).
    """
    return math.sin(2.0 * math.pi * (hour / HOURS_PER_DAY + phase))


def daylight_curve(hour: float, peak: float) -> float:
    """
    Smooth daylight level for an hour of the day.

    Minimum (0) at midnight, maximum (`peak`) at noon, half-peak at
    06:00 and 18:00.  Continuous across the 0/24 wraparound.

    Parameters
    ----------
    hour : float
        Simulated hour-of-day in [0, 24).
    peak : float
        Value at solar noon.

    Returns
    -------
    float
        Value in [0, peak].
    """
    angle = 2.0 * math.pi * (hour / HOURS_PER_DAY) - math.pi / 2.0
    return peak * (math.sin(angle) + 1.0) * 0.5
