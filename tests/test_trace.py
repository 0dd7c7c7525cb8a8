"""
=============================================================================
test_trace.py — Unit tests for trace.py
=============================================================================
Project:    Environmental Sensor Simulator
Date:       2026-10-19
=============================================================================
Tests verify:
  - Trace shape and columns per sensor kind
  - Timestamps are evenly spaced
  - CSV + metadata JSON round through the filesystem
  - Invalid arguments are rejected

Run with: pytest tests/test_trace.py -v
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

import sensorsim.trace as trace_module
from sensorsim.scenarios import manual_light
from sensorsim.sensors import LightMeter, ThermoHygrometer
from sensorsim.trace import OUTPUT_DIR, TraceRecorder


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def dht():
    return ThermoHygrometer("greenhouse", clock=lambda: 0, seed=42)


@pytest.fixture
def meter():
    return LightMeter("outdoor_sunny", clock=lambda: 0, seed=42)


# ============================================================
# TESTS: RECORDING
# ============================================================

class TestRecord:

    def test_climate_columns(self, dht):
        df = TraceRecorder(dht, interval_ms=1_000).record(duration_s=60)
        assert list(df.columns) == ["t_ms", "sim_hour", "temperature_c", "humidity_pct"]
        assert len(df) == 60

    def test_light_columns(self, meter):
        df = TraceRecorder(meter, interval_ms=500).record(duration_s=10)
        assert list(df.columns) == ["t_ms", "sim_hour", "lux"]
        assert len(df) == 20

    def test_timestamps_evenly_spaced(self, meter):
        df = TraceRecorder(meter, interval_ms=250).record(duration_s=5)
        np.testing.assert_array_equal(np.diff(df["t_ms"].to_numpy()), 250)
        assert df["t_ms"].iloc[0] == 250

    def test_values_bounded(self, meter):
        df = TraceRecorder(meter, interval_ms=5_000).record(duration_s=3_600)
        assert df["lux"].between(0.0, 100_000.0).all()
        assert ((df["sim_hour"] >= 0) & (df["sim_hour"] < 24)).all()

    def test_continues_from_last_sample(self, dht):
        rec = TraceRecorder(dht, interval_ms=1_000)
        first = rec.record(duration_s=5)
        second = rec.record(duration_s=5)
        assert second["t_ms"].iloc[0] == first["t_ms"].iloc[-1] + 1_000

    def test_reproducible(self):
        a = ThermoHygrometer("office_ac", clock=lambda: 0, seed=7)
        b = ThermoHygrometer("office_ac", clock=lambda: 0, seed=7)
        pd.testing.assert_frame_equal(
            TraceRecorder(a).record(30), TraceRecorder(b).record(30)
        )

    @pytest.mark.parametrize("interval", [0, -10])
    def test_rejects_bad_interval(self, dht, interval):
        with pytest.raises(ValueError):
            TraceRecorder(dht, interval_ms=interval)

    def test_rejects_bad_duration(self, dht):
        with pytest.raises(ValueError):
            TraceRecorder(dht).record(0)

    def test_rejects_duration_shorter_than_interval(self, dht):
        with pytest.raises(ValueError, match="shorter than one interval"):
            TraceRecorder(dht, interval_ms=1_000).record(0.5)


# ============================================================
# TESTS: PERSISTENCE
# ============================================================

class TestSave:

    def test_writes_csv_and_metadata(self, dht, tmp_path):
        rec = TraceRecorder(dht, interval_ms=1_000)
        df = rec.record(duration_s=10)
        csv_path, json_path = rec.save(df, tmp_path)

        assert csv_path.name == "thermohygrometer_greenhouse.csv"
        loaded = pd.read_csv(csv_path)
        assert len(loaded) == 10

        with open(json_path, encoding="utf-8") as f:
            meta = json.load(f)
        assert meta["sensor"] == "ThermoHygrometer"
        assert meta["scenario"] == "greenhouse"
        assert meta["seed"] == 42
        assert meta["n_samples"] == 10
        assert meta["profiles"]["temperature"]["kind"] == "varying_walk"

    def test_seed_is_none_for_injected_generator(self, tmp_path):
        meter = LightMeter("indoor_room", clock=lambda: 0, rng=np.random.default_rng(3))
        rec = TraceRecorder(meter)
        _, json_path = rec.save(rec.record(2), tmp_path)
        with open(json_path, encoding="utf-8") as f:
            assert json.load(f)["seed"] is None

    def test_saved_seed_regenerates_trace(self, dht, tmp_path):
        rec = TraceRecorder(dht)
        df = rec.record(20)
        _, json_path = rec.save(df, tmp_path)
        with open(json_path, encoding="utf-8") as f:
            meta = json.load(f)
        again = ThermoHygrometer(meta["scenario"], clock=lambda: 0, seed=meta["seed"])
        pd.testing.assert_frame_equal(TraceRecorder(again).record(20), df)

    def test_manual_profile_labelled_manual(self, tmp_path):
        meter = LightMeter(profile=manual_light(0.0, 500.0), clock=lambda: 0, seed=1)
        rec = TraceRecorder(meter)
        csv_path, json_path = rec.save(rec.record(2), tmp_path)
        assert csv_path.name == "lightmeter_manual.csv"
        with open(json_path, encoding="utf-8") as f:
            assert json.load(f)["scenario"] == "manual"

    def test_default_output_dir_is_package_anchored(self):
        assert OUTPUT_DIR == Path(trace_module.__file__).parent.parent / "data" / "traces"

    def test_custom_stem(self, meter, tmp_path):
        rec = TraceRecorder(meter)
        csv_path, json_path = rec.save(rec.record(3), tmp_path, stem="bench")
        assert csv_path.name == "bench.csv"
        assert json_path.name == "bench_metadata.json"

    def test_verbose_logs(self, meter, tmp_path, capsys):
        rec = TraceRecorder(meter, verbose=True)
        rec.save(rec.record(2), tmp_path)
        assert "[TraceRecorder]" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
