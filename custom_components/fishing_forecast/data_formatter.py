"""Data formatting and normalization layer for Fishing Forecast.

Provides DataFormatter which converts raw provider payloads into the engine's
canonical shapes (plain dicts that conform to the TypedDicts in
data_schema.py), plus the unit conversions the scorers rely on.

Like the rest of the input side of the engine this module:
- Is defensive about missing/variant keys (snake_case, camelCase, Open-Meteo).
- Never raises on malformed input.
- Replaces unknown values with moderate defaults, not zero.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from homeassistant.util import dt as dt_util

from .const import DEFAULT_SAMPLE_VALUES, KMH_TO_KNOTS
from .data_schema import EnvironmentalSample, TideSnapshot, WaterLevel

_LOGGER = logging.getLogger(__name__)


def _safe_float(val: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """Safely convert val to float; return default (or None) on failure.

    Booleans, NaN and infinities are rejected so they never reach a curve.
    """
    if val is None or isinstance(val, bool):
        return default
    if isinstance(val, (int, float)):
        f = float(val)
    else:
        try:
            s = str(val).strip()
            if not s:
                return default
            f = float(s)
        except (TypeError, ValueError):
            return default
    if math.isnan(f) or math.isinf(f):
        return default
    return f


def _pick(raw: Dict[str, Any], keys: Sequence[str]) -> Any:
    """Return the first non-None value among candidate keys."""
    for k in keys:
        if raw.get(k) is not None:
            return raw.get(k)
    return None


def _to_timestamp(val: Any) -> Optional[int]:
    """Coerce epoch seconds, a datetime or an ISO string to epoch seconds."""
    if isinstance(val, datetime):
        return int(dt_util.as_utc(val).timestamp())
    if isinstance(val, str) and not _is_number_string(val):
        parsed = dt_util.parse_datetime(val.strip())
        if parsed is None:
            return None
        return int(dt_util.as_utc(parsed).timestamp())
    f = _safe_float(val, None)
    return int(f) if f is not None else None


def _is_number_string(val: str) -> bool:
    try:
        float(val)
    except ValueError:
        return False
    return True


# Accepted key spellings per canonical field
_SAMPLE_KEYS: Dict[str, Sequence[str]] = {
    "temp": ("temp", "temperature", "temperature_2m"),
    "apparent_temp": ("apparent_temp", "apparentTemp", "apparent_temperature"),
    "humidity": ("humidity", "relative_humidity_2m", "relativehumidity_2m"),
    "dew_point": ("dew_point", "dewPoint", "dew_point_2m", "dewpoint_2m"),
    "pressure": ("pressure", "pressure_msl", "surface_pressure"),
    "precipitation": ("precipitation", "precip"),
    "cloud_cover": ("cloud_cover", "cloudCover", "cloudcover"),
    "wind_speed": ("wind_speed", "windSpeed", "wind_speed_10m", "windspeed_10m"),
    "wind_direction": ("wind_direction", "windDirection", "wind_direction_10m", "winddirection_10m"),
    "wind_gusts": ("wind_gusts", "windGusts", "wind_gusts_10m", "windgusts_10m"),
    "visibility": ("visibility",),
    "sunshine_duration": ("sunshine_duration", "sunshineDuration"),
    "lightning_potential": ("lightning_potential", "lightningPotential"),
    "cape": ("cape",),
    "wave_height": ("wave_height", "waveHeight"),
}

_TIDE_KEYS: Dict[str, Sequence[str]] = {
    "current_height": ("current_height", "currentHeight", "height"),
    "tidal_range": ("tidal_range", "tidalRange"),
    "change_rate": ("change_rate", "changeRate"),
    "time_to_next_tide": ("time_to_next_tide", "timeToNextTide"),
    "current_speed": ("current_speed", "currentSpeed"),
    "current_direction": ("current_direction", "currentDirection"),
}


class DataFormatter:
    """Unit conversions and canonical dict builders used across the engine."""

    # -----------------
    # Unit conversion
    # -----------------
    @staticmethod
    def kmh_to_ms(value: Any) -> Optional[float]:
        v = _safe_float(value, None)
        return None if v is None else v / 3.6

    @staticmethod
    def ms_to_kmh(value: Any) -> Optional[float]:
        v = _safe_float(value, None)
        return None if v is None else v * 3.6

    @staticmethod
    def kmh_to_knots(value: Any) -> Optional[float]:
        v = _safe_float(value, None)
        return None if v is None else v * KMH_TO_KNOTS

    @staticmethod
    def knots_to_kmh(value: Any) -> Optional[float]:
        v = _safe_float(value, None)
        return None if v is None else v / KMH_TO_KNOTS

    @staticmethod
    def ms_to_knots(value: Any) -> Optional[float]:
        v = _safe_float(value, None)
        return None if v is None else v * 3.6 * KMH_TO_KNOTS

    @staticmethod
    def meters_to_feet(value: Any) -> Optional[float]:
        v = _safe_float(value, None)
        return None if v is None else v * 3.28084

    @staticmethod
    def feet_to_meters(value: Any) -> Optional[float]:
        v = _safe_float(value, None)
        return None if v is None else v / 3.28084

    @staticmethod
    def celsius_to_fahrenheit(value: Any) -> Optional[float]:
        v = _safe_float(value, None)
        return None if v is None else v * 9 / 5 + 32

    @staticmethod
    def fahrenheit_to_celsius(value: Any) -> Optional[float]:
        v = _safe_float(value, None)
        return None if v is None else (v - 32) * 5 / 9

    @staticmethod
    def inhg_to_hpa(value: Any) -> Optional[float]:
        v = _safe_float(value, None)
        return None if v is None else v * 33.8639

    # -----------------
    # Weather samples
    # -----------------
    @staticmethod
    def format_sample(raw_sample: Optional[Dict[str, Any]]) -> EnvironmentalSample:
        """Convert a raw weather sample into the canonical EnvironmentalSample.

        Every absent or non-numeric field is replaced by its neutral default
        from DEFAULT_SAMPLE_VALUES; apparent_temp falls back to temp and
        wind_gusts to wind_speed. wave_height is only present when supplied.
        """
        raw = raw_sample if isinstance(raw_sample, dict) else {}

        values: Dict[str, Optional[float]] = {
            field: _safe_float(_pick(raw, keys), None) for field, keys in _SAMPLE_KEYS.items()
        }

        sample: Dict[str, Any] = {
            "timestamp": _to_timestamp(_pick(raw, ("timestamp", "time", "dt"))) or 0,
        }
        for field, default in DEFAULT_SAMPLE_VALUES.items():
            val = values.get(field)
            sample[field] = default if val is None else val

        sample["apparent_temp"] = (
            values["apparent_temp"] if values["apparent_temp"] is not None else sample["temp"]
        )
        sample["wind_gusts"] = (
            values["wind_gusts"] if values["wind_gusts"] is not None else sample["wind_speed"]
        )
        if values["wave_height"] is not None:
            sample["wave_height"] = values["wave_height"]

        return sample  # type: ignore[return-value]

    @staticmethod
    def format_samples(raw_samples: Optional[List[Dict[str, Any]]]) -> List[EnvironmentalSample]:
        """Normalize a list of samples and order it by timestamp."""
        samples = [DataFormatter.format_sample(s) for s in (raw_samples or [])]
        return sorted(samples, key=lambda s: s["timestamp"])

    # -----------------
    # Tide
    # -----------------
    @staticmethod
    def format_water_levels(raw_levels: Any) -> List[WaterLevel]:
        """Keep only water-level points with a usable timestamp and height."""
        if not isinstance(raw_levels, (list, tuple)):
            return []
        levels: List[WaterLevel] = []
        for entry in raw_levels:
            if not isinstance(entry, dict):
                continue
            ts = _to_timestamp(_pick(entry, ("timestamp", "time", "eventDate")))
            height = _safe_float(_pick(entry, ("height", "value")), None)
            if ts is None or height is None:
                _LOGGER.debug("Skipping unusable water level entry: %r", entry)
                continue
            levels.append({"timestamp": ts, "height": height})
        levels.sort(key=lambda lv: lv["timestamp"])
        return levels

    @staticmethod
    def format_tide_snapshot(raw_tide: Optional[Dict[str, Any]]) -> Optional[TideSnapshot]:
        """Convert a raw tide payload into a TideSnapshot.

        Returns None when no snapshot was supplied. Numeric fields default to
        0 and is_rising to False; current_speed is stored as a magnitude.
        time_to_next_tide stays None when no turning point lies ahead.
        """
        if not isinstance(raw_tide, dict):
            return None

        tide: Dict[str, Any] = {
            field: _safe_float(_pick(raw_tide, keys), 0.0) for field, keys in _TIDE_KEYS.items()
        }
        tide["time_to_next_tide"] = _safe_float(_pick(raw_tide, _TIDE_KEYS["time_to_next_tide"]), None)
        tide["current_speed"] = abs(tide["current_speed"])
        tide["is_rising"] = bool(_pick(raw_tide, ("is_rising", "isRising")) or False)
        tide["water_temperature"] = _safe_float(
            _pick(raw_tide, ("water_temperature", "waterTemperature")), None
        )
        tide["water_levels"] = DataFormatter.format_water_levels(
            _pick(raw_tide, ("water_levels", "waterLevels", "waterLevelData"))
        )
        return tide  # type: ignore[return-value]

    # -----------------
    # Scores
    # -----------------
    @staticmethod
    def format_score_result(result: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Ensure a score result carries a clamped, rounded total and a breakdown."""
        if not isinstance(result, dict):
            result = {}
        total = _safe_float(result.get("total"), 5.0)
        formatted = dict(result)
        formatted["total"] = round(max(0.0, min(10.0, total)), 2)
        formatted["breakdown"] = {
            str(k): _safe_float(v, 5.0) for k, v in (result.get("breakdown") or {}).items()
        }
        formatted.setdefault("safety_warnings", [])
        return formatted
