"""
=============================================================================
random_source.py — Uniform draws and Gaussian noise for the sensor models
=============================================================================
Project:    Environmental Sensor Simulator
Date:       2026-10-19
=============================================================================
Every stochastic term in the simulator is built from a single seedable
uniform source.  Two thin wrappers live here:

  UniformDraw    — uniform float in [a, b) from a numpy Generator
  GaussianNoise  — zero-mean normal noise via the Box-Muller transform

Both accept an injected `np.random.Generator` so tests can fix the seed
and assert exact sequences.  Quantisation of the underlying generator is
accepted as-is; no endpoint correction is attempted.
"""

from typing import Optional

import numpy as np


# ============================================================
# SECTION 1: UNIFORM DRAW
# ============================================================

def make_rng(
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
) -> np.random.Generator:
    """Return `rng` if given, otherwise a fresh generator seeded with `seed`."""
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


class UniformDraw:
    """
    Uniform float source over a caller-supplied range.

    Usage
    -----
    >>> draw = UniformDraw(np.random.default_rng(7))
    >>> x = draw(20.0, 30.0)
    """

    def __init__(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        self.rng = make_rng(rng, seed)

    def draw(self, a: float, b: float) -> float:
        """
        Draw one value uniformly from [a, b).

        Parameters
        ----------
        a, b : float
            Range endpoints.  `a == b` returns `a` without consuming entropy.

        Returns
        -------
        float
        """
        if a == b:
            return float(a)
        return float(a + (b - a) * self.rng.random())

    __call__ = draw

    def draw_open_unit(self) -> float:
        """Draw from (0, 1] — never exactly zero, so safe to feed into log()."""
        return float(1.0 - self.rng.random())


# ============================================================
# SECTION 2: GAUSSIAN NOISE (BOX-MULLER)
# ============================================================

class GaussianNoise:
    """
    Zero-mean Gaussian noise built from two uniform draws.

        n = std * sqrt(-2 ln u1) * cos(2π u2),   u1, u2 ∈ (0, 1]

    Only the cosine branch of the transform is used, so each sample costs
    two uniform draws.
    """

    def __init__(self, draw: Optional[UniformDraw] = None, seed: Optional[int] = None):
        self.draw = draw if draw is not None else UniformDraw(seed=seed)

    def sample(self, std: float) -> float:
        """
        Return one sample of Normal(0, std²).

        Parameters
        ----------
        std : float
            Standard deviation.  Non-positive values mean "no noise" and
            return exactly 0.0.

        Returns
        -------
        float
        """
        if std <= 0:
            return 0.0
        u1 = self.draw.draw_open_unit()
        u2 = self.draw.draw_open_unit()
        return float(std * np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2))

    __call__ = sample
