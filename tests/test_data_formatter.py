import math

import pytest

from custom_components.fishing_forecast.data_formatter import DataFormatter


def test_empty_sample_gets_neutral_defaults():
    sample = DataFormatter.format_sample({})
    assert sample["temp"] == 12.0
    assert sample["apparent_temp"] == 12.0
    assert sample["humidity"] == 60.0
    assert sample["pressure"] == 1013.25
    assert sample["cloud_cover"] == 50.0
    assert sample["wind_speed"] == 10.0
    assert sample["wind_gusts"] == 10.0
    assert sample["visibility"] == 10000.0
    assert sample["timestamp"] == 0
    assert "wave_height" not in sample


def test_camel_case_and_iso_time():
    sample = DataFormatter.format_sample(
        {"time": "2025-07-01T06:00:00+00:00", "windSpeed": 20, "cloudCover": "75"}
    )
    assert sample["timestamp"] == 1751349600
    assert sample["wind_speed"] == 20.0
    assert sample["cloud_cover"] == 75.0


@pytest.mark.parametrize("bad", [None, "n/a", float("nan"), float("inf"), True])
def test_non_numeric_fields_fall_back(bad):
    sample = DataFormatter.format_sample({"temp": bad})
    assert sample["temp"] == 12.0


def test_samples_are_sorted():
    samples = DataFormatter.format_samples([{"timestamp": 900}, {"timestamp": 0}])
    assert [s["timestamp"] for s in samples] == [0, 900]


def test_unit_conversions():
    assert DataFormatter.kmh_to_ms(36) == pytest.approx(10.0)
    assert DataFormatter.kmh_to_knots(100) == pytest.approx(53.9957)
    assert DataFormatter.meters_to_feet(1) == pytest.approx(3.28084, rel=1e-4)
    assert DataFormatter.celsius_to_fahrenheit(100) == pytest.approx(212.0)
    assert DataFormatter.inhg_to_hpa(29.92) == pytest.approx(1013.2, abs=0.1)
    assert DataFormatter.kmh_to_ms("fast") is None


def test_tide_snapshot_normalization():
    assert DataFormatter.format_tide_snapshot(None) is None
    tide = DataFormatter.format_tide_snapshot(
        {"currentSpeed": -1.5, "tidalRange": 2.2, "waterLevels": [{"time": 60, "value": 1.1}, {"bad": 1}]}
    )
    assert tide["current_speed"] == 1.5
    assert tide["tidal_range"] == 2.2
    assert tide["is_rising"] is False
    assert tide["water_temperature"] is None
    assert tide["water_levels"] == [{"timestamp": 60, "height": 1.1}]
    assert tide["time_to_next_tide"] is None
    assert DataFormatter.format_tide_snapshot({"timeToNextTide": "45"})["time_to_next_tide"] == 45.0


def test_score_result_is_clamped():
    result = DataFormatter.format_score_result({"total": 12.3456, "breakdown": {"wind": "x"}})
    assert result["total"] == 10.0
    assert result["breakdown"]["wind"] == 5.0
    assert result["safety_warnings"] == []
    assert not math.isnan(DataFormatter.format_score_result({"total": float("nan")})["total"])
