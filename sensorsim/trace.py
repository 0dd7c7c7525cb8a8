"""
=============================================================================
trace.py — Record simulated sensor output as replayable traces
=============================================================================
Project:    Environmental Sensor Simulator
Date:       2026-10-19
=============================================================================
Firmware tests often want a fixed sequence of readings rather than a live
model.  `TraceRecorder` drives a sensor with synthetic timestamps at a
fixed interval and collects every reading into a pandas DataFrame:

  t_ms | sim_hour | temperature_c | humidity_pct     (ThermoHygrometer)
  t_ms | sim_hour | lux                              (LightMeter)

`save()` writes the trace as CSV next to a metadata JSON describing the
scenario, generator seed, sampling interval and channel profiles.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd
from tqdm import tqdm

from sensorsim.sensors import BaseSensor, LightMeter, ThermoHygrometer


OUTPUT_DIR = Path(__file__).parent.parent / "data" / "traces"


# ============================================================
# SECTION 1: TRACE RECORDER
# ============================================================

class TraceRecorder:
    """
    Sample a sensor at a fixed interval of synthetic time.

    Usage
    -----
    >>> dht = ThermoHygrometer("office_ac", clock=lambda: 0, seed=1)
    >>> rec = TraceRecorder(dht, interval_ms=1_000)
    >>> df = rec.record(duration_s=3600)
    >>> rec.save(df, "traces/")
    """

    def __init__(
        self,
        sensor: BaseSensor,
        interval_ms: int = 1_000,
        start_ms: Optional[int] = None,
        verbose: bool = False,
    ):
        """
        Parameters
        ----------
        sensor : BaseSensor
            ThermoHygrometer or LightMeter to drive.
        interval_ms : int
            Spacing between samples in milliseconds.
        start_ms : int or None
            First timestamp fed to the sensor.  Defaults to the sensor's
            last update time, so the first sample is one interval later.
        verbose : bool
            Print progress messages and show a progress bar.

        Raises
        ------
        ValueError
            If interval_ms is not positive.
        """
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.sensor = sensor
        self.interval_ms = int(interval_ms)
        self.now_ms = int(start_ms) if start_ms is not None else sensor.sim_clock.last_update_ms
        self.verbose = verbose

    def _log(self, msg: str) -> None:
        """Print message if verbose mode is on."""
        if self.verbose:
            print(f"[TraceRecorder] {msg}")

    def _sample(self) -> dict:
        row = {"t_ms": self.now_ms, "sim_hour": self.sensor.sim_hour}
        if isinstance(self.sensor, ThermoHygrometer):
            row["temperature_c"] = self.sensor.read()
            row["humidity_pct"] = self.sensor.read_humidity()
        else:
            row["lux"] = self.sensor.read()
        return row

    def record(self, duration_s: float) -> pd.DataFrame:
        """
        Advance the sensor for `duration_s` seconds, one row per interval.

        Returns
        -------
        pd.DataFrame
            One row per sample, in time order.

        Raises
        ------
        ValueError
            If duration_s is not positive or shorter than one interval.
        """
        if duration_s <= 0:
            raise ValueError(f"duration_s must be positive, got {duration_s}")

        n_samples = int(duration_s * 1000) // self.interval_ms
        if n_samples == 0:
            raise ValueError(
                f"duration_s {duration_s} is shorter than one interval ({self.interval_ms} ms)"
            )
        self._log(f"Recording {n_samples} samples at {self.interval_ms} ms…")

        rows = []
        for _ in tqdm(range(n_samples), desc="Recording trace", unit="sample",
                      disable=not self.verbose):
            self.now_ms += self.interval_ms
            self.sensor.update(now_ms=self.now_ms)
            rows.append(self._sample())

        df = pd.DataFrame(rows)
        self._log(f"Recorded {len(df)} samples")
        return df

    # ----------------------------------------------------------
    # 1a. Output persistence
    # ----------------------------------------------------------

    def metadata(self, df: pd.DataFrame) -> dict:
        """Describe the trace: scenario, seed, interval and channel profiles."""
        if isinstance(self.sensor, ThermoHygrometer):
            profiles = {
                "temperature": self.sensor.temperature.profile.to_dict(),
                "humidity": self.sensor.humidity.profile.to_dict(),
            }
        elif isinstance(self.sensor, LightMeter):
            profiles = {"lux": self.sensor.lux.profile.to_dict()}
        else:
            profiles = {}

        return {
            "sensor": type(self.sensor).__name__,
            "scenario": self.sensor.scenario.value,
            "seed": self.sensor.seed,
            "interval_ms": self.interval_ms,
            "n_samples": int(len(df)),
            "columns": list(df.columns),
            "profiles": profiles,
            "generation_date": datetime.now().isoformat(),
        }

    def save(
        self,
        df: pd.DataFrame,
        output_dir: Optional[Path] = None,
        stem: Optional[str] = None,
    ) -> tuple:
        """
        Save a trace as CSV + metadata JSON.

        Parameters
        ----------
        df : pd.DataFrame
            Trace from record().
        output_dir : Path or None
            Directory for output files.  Defaults to data/traces/.
        stem : str or None
            File name stem.  Defaults to "<sensor>_<scenario>".

        Returns
        -------
        (csv_path, json_path) : tuple of Paths
        """
        out_dir = Path(output_dir) if output_dir else OUTPUT_DIR
        out_dir.mkdir(parents=True, exist_ok=True)
        if stem is None:
            stem = f"{type(self.sensor).__name__.lower()}_{self.sensor.scenario.value}"

        csv_path = out_dir / f"{stem}.csv"
        df.to_csv(csv_path, index=False)
        self._log(f"CSV saved: {csv_path}  ({len(df)} rows)")

        json_path = out_dir / f"{stem}_metadata.json"
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(self.metadata(df), f, indent=2)
        self._log(f"Metadata JSON saved: {json_path}")

        return csv_path, json_path
