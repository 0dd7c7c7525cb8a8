"""
=============================================================================
validator.py — Statistical sanity checks for simulated sensor output
=============================================================================
Project:    Environmental Sensor Simulator
Date:       2026-10-19
=============================================================================
Checks that the simulator still produces what it promises:

  Noise statistics   — GaussianNoise sample mean/std, plus a KS-test
                       against Normal(0, std²)
  Bounds             — every recorded value inside the profile range
  Hour wraparound    — every simulated hour inside [0, 24)

Each check returns a plain dict with a boolean "pass" key.  A
ValidationReport collects them and renders a text summary.
"""

from typing import Optional

import numpy as np
from scipy import stats

from sensorsim.random_source import GaussianNoise


# ============================================================
# SECTION 1: VALIDATION RESULT CONTAINER
# ============================================================

class ValidationReport:
    """Accumulates check results; see `add()` and `summary()`."""

    def __init__(self):
        self.results: list[dict] = []

    def add(self, result: dict) -> dict:
        self.results.append(result)
        return result

    @property
    def passed_checks(self) -> int:
        return sum(1 for r in self.results if r["pass"])

    @property
    def total_checks(self) -> int:
        return len(self.results)

    @property
    def all_passed(self) -> bool:
        return self.passed_checks == self.total_checks

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines = ["=" * 60, "VALIDATION REPORT — Sensor Simulator", "=" * 60]
        for r in self.results:
            status = "PASS" if r["pass"] else "FAIL"
            detail = ", ".join(
                f"{k}={v:.4g}" if isinstance(v, float) else f"{k}={v}"
                for k, v in r.items()
                if k not in ("name", "pass")
            )
            lines.append(f"  [{status}]  {r['name']:<28}  {detail}")
        lines += [
            "",
            f"Overall: {self.passed_checks}/{self.total_checks} checks passed",
            "=" * 60,
        ]
        return "\n".join(lines)


# ============================================================
# SECTION 2: CHECKS
# ============================================================

def check_noise_statistics(
    noise: Optional[GaussianNoise] = None,
    n_samples: int = 10_000,
    std: float = 1.0,
    tolerance: float = 0.05,
) -> dict:
    """
    Sample `noise` and compare against Normal(0, std²).

    Parameters
    ----------
    noise : GaussianNoise or None
        Source under test.  A fresh unseeded one if None.
    n_samples : int
        Sample count.
    std : float
        Requested standard deviation.
    tolerance : float
        Allowed |mean| and |sample_std - std|, as a fraction of std.

    Returns
    -------
    dict with keys name, mean, std, ks_p_value, pass
    """
    noise = noise if noise is not None else GaussianNoise()
    samples = np.array([noise.sample(std) for _ in range(n_samples)])

    mean = float(samples.mean())
    sample_std = float(samples.std(ddof=1))
    ks = stats.kstest(samples, "norm", args=(0.0, std))

    return {
        "name": "gaussian_noise",
        "mean": mean,
        "std": sample_std,
        "ks_p_value": float(ks.pvalue),
        "pass": abs(mean) <= tolerance * std and abs(sample_std - std) <= tolerance * std,
    }


def check_bounds(values, lo: float, hi: float, name: str = "bounds") -> dict:
    """Every value in [lo, hi]."""
    arr = np.asarray(values, dtype=float)
    violations = int(np.count_nonzero((arr < lo) | (arr > hi)))
    return {
        "name": name,
        "min": float(arr.min()) if arr.size else float("nan"),
        "max": float(arr.max()) if arr.size else float("nan"),
        "violations": violations,
        "pass": violations == 0,
    }


def check_hour_wraparound(hours, name: str = "hour_wraparound") -> dict:
    """Every simulated hour in [0, 24)."""
    arr = np.asarray(hours, dtype=float)
    violations = int(np.count_nonzero((arr < 0.0) | (arr >= 24.0)))
    return {
        "name": name,
        "violations": violations,
        "pass": violations == 0,
    }
