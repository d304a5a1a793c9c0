"""Per-factor scoring curves for the general (enhanced) algorithm.

Each function maps one measurement to a 0-10 sub-score using continuous
piecewise curves centred on an optimal band. A missing measurement (None)
scores the neutral 5.0; out-of-range values simply run through the curve.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Optional, Sequence, Tuple

from homeassistant.util import dt as dt_util

from .const import (
    CURRENT_PREFERENCE_SLACK,
    CURRENT_PREFERENCE_STRONG,
    KMH_TO_KNOTS,
    NEUTRAL_SCORE,
)

_LOGGER = logging.getLogger(__name__)

OPTIMAL_PRESSURE = 1017.5


def _clamp(value: float, low: float = 0.0, high: float = 10.0) -> float:
    return max(low, min(high, value))


def _range(pair: Optional[Sequence[float]]) -> Optional[Tuple[float, float]]:
    """Return a (low, high) tuple from a two-item sequence, else None."""
    if not pair or len(pair) < 2:
        return None
    try:
        return float(pair[0]), float(pair[1])
    except (TypeError, ValueError):
        return None


def _local_hour(timestamp: float, tz=None) -> float:
    local = local_datetime(timestamp, tz)
    return local.hour + local.minute / 60


# ----------------------------
# Atmosphere
# ----------------------------
def calculate_pressure_score(pressure: Optional[float]) -> float:
    """Score barometric pressure (hPa) against the 1017.5 hPa optimum."""
    if pressure is None:
        return NEUTRAL_SCORE
    dev = abs(pressure - OPTIMAL_PRESSURE)
    if dev <= 2.5:
        return 10.0
    if dev <= 5:
        return 10 - (dev - 2.5) * 1.6
    if dev <= 10:
        return 8 - (dev - 5) * 1.2
    if dev <= 20:
        return 2 - (dev - 10) * 0.1
    return 1.0


def calculate_enhanced_wind_score(
    wind_speed: Optional[float],
    wind_gusts: Optional[float] = None,
    wind_direction: Optional[float] = None,
) -> float:
    """Score wind (m/s) from sustained speed, gusts and direction."""
    if wind_speed is None:
        return NEUTRAL_SCORE
    gusts = wind_gusts if wind_gusts is not None else wind_speed
    effective = max(wind_speed, 0.7 * gusts)

    if effective <= 2:
        score = 10.0
    elif effective <= 5:
        score = 10 - (effective - 2) * 0.5
    elif effective <= 8:
        score = 8.5 - (effective - 5) * (2.5 / 3)
    elif effective <= 12:
        score = 6 - (effective - 8) * 0.625
    elif effective <= 20:
        score = 3.5 - (effective - 12) * 0.375
    else:
        score = 0.5

    if wind_speed > 0:
        ratio = gusts / wind_speed
        if ratio > 3:
            score *= 0.7
        elif ratio > 2:
            score *= 0.8
        elif ratio > 1.5:
            score *= 0.9

    if wind_direction is not None:
        if 45 <= wind_direction <= 135:
            # Easterly, offshore on a west coast
            score *= 1.05
        elif 225 <= wind_direction <= 315:
            score *= 0.95

    return _clamp(score)


def calculate_temperature_score(temp: Optional[float]) -> float:
    """Score air temperature (°C); 10-14 is ideal."""
    if temp is None:
        return NEUTRAL_SCORE
    if 10 <= temp <= 14:
        return 10.0
    if temp < 10:
        score = 10 - (10 - temp) * (9.5 / 12)
    else:
        score = 10 - (temp - 14) * (9.5 / 16)
    return _clamp(score, 0.5)


def calculate_precipitation_score_from_mm(precipitation: Optional[float]) -> float:
    """Score precipitation intensity (mm/h)."""
    if precipitation is None:
        return NEUTRAL_SCORE
    p = max(0.0, precipitation)
    if p <= 0.1:
        return 10.0
    if p <= 0.5:
        return 10 - (p - 0.1) * 5
    if p <= 1:
        return 8 - (p - 0.5) * 2
    if p <= 2.5:
        return 7 - (p - 1) * 1.33
    if p <= 5:
        return 5 - (p - 2.5) * 1.2
    if p <= 10:
        return 2 - (p - 5) * 0.2
    return max(0.2, 1 - (p - 10) * 0.05)


def calculate_cloud_cover_score(cloud_cover: Optional[float]) -> float:
    if cloud_cover is None:
        return NEUTRAL_SCORE
    c = _clamp(cloud_cover, 0.0, 100.0)
    if 30 <= c <= 60:
        return 10.0
    if c < 30:
        return 10 - (30 - c) * 0.1
    return 10 - (c - 60) * 0.125


def calculate_visibility_score(visibility: Optional[float]) -> float:
    if visibility is None:
        return NEUTRAL_SCORE
    if visibility >= 10000:
        return 10.0
    if visibility >= 5000:
        return 9.0
    if visibility >= 2000:
        return 7.0
    if visibility >= 1000:
        return 5.0
    if visibility >= 500:
        return 3.0
    return 1.0


def calculate_sunshine_score(sunshine_duration: Optional[float]) -> float:
    """Score sunshine seconds within a 15-minute (900 s) sample."""
    if sunshine_duration is None:
        return NEUTRAL_SCORE
    pct = sunshine_duration / 900 * 100
    if pct >= 75:
        return 10.0
    if pct >= 50:
        return 9.0
    if pct >= 25:
        return 7.0
    if pct >= 10:
        return 6.0
    return 5.0


def calculate_lightning_score(lightning_potential: Optional[float]) -> float:
    if lightning_potential is None:
        return NEUTRAL_SCORE
    if lightning_potential <= 100:
        return 10.0
    if lightning_potential <= 500:
        return 8.0
    if lightning_potential <= 1000:
        return 6.0
    if lightning_potential <= 2000:
        return 3.0
    return 1.0


def calculate_atmospheric_stability_score(cape: Optional[float]) -> float:
    if cape is None:
        return NEUTRAL_SCORE
    if cape <= 500:
        return 10.0
    if cape <= 1000:
        return 8.0
    if cape <= 2000:
        return 6.0
    if cape <= 3000:
        return 4.0
    return 2.0


def calculate_comfort_score(
    apparent_temp: Optional[float],
    humidity: Optional[float],
    dew_point: Optional[float],
) -> float:
    """Angler comfort from feels-like temperature, humidity and dew point."""
    if apparent_temp is None:
        return NEUTRAL_SCORE

    diff = abs(apparent_temp - 12)
    if diff <= 3:
        base = 10
    elif diff <= 6:
        base = 8
    elif diff <= 10:
        base = 6
    elif diff <= 15:
        base = 4
    else:
        base = 2

    humidity_factor = 1.0
    if humidity is not None:
        if 40 <= humidity <= 70:
            humidity_factor = 1.0
        elif 30 <= humidity <= 80:
            humidity_factor = 0.9
        else:
            humidity_factor = 0.7

    dew_factor = 1.0
    if dew_point is not None:
        if dew_point <= 10:
            dew_factor = 1.0
        elif dew_point <= 15:
            dew_factor = 0.9
        elif dew_point <= 18:
            dew_factor = 0.8
        else:
            dew_factor = 0.6

    return float(min(10, round(base * humidity_factor * dew_factor)))


# ----------------------------
# Light
# ----------------------------
def calculate_time_of_day_score(
    timestamp: float,
    sunrise: Optional[float],
    sunset: Optional[float],
    tz=None,
) -> float:
    """Score the time of day relative to sunrise/sunset.

    Peaks within half an hour of sunrise/sunset and tapers to 8 at 1.5 h.
    Beyond that, the larger of a light-phase curve (lowest at solar noon and
    mid-night) and the morning/evening bumps is used.
    """
    if sunrise is None or sunset is None:
        return NEUTRAL_SCORE

    d = min(abs(timestamp - sunrise), abs(timestamp - sunset)) / 3600
    if d <= 0.5:
        return 10.0
    if d <= 1.5:
        return 10 - (d - 0.5) * 2

    day_length = sunset - sunrise
    if day_length > 0 and sunrise < timestamp < sunset:
        p = (timestamp - sunrise) / day_length
        phase_score = 4 + 2 * abs(math.cos(math.pi * p))
    else:
        night_length = 86400 - day_length if 0 < day_length < 86400 else 43200
        elapsed = timestamp - sunset if timestamp >= sunset else timestamp - sunset + 86400
        q = _clamp(elapsed / night_length, 0.0, 1.0)
        phase_score = 2 + 2 * abs(math.cos(math.pi * q))

    hour = _local_hour(timestamp, tz)
    bump = 0.0
    if 6 <= hour <= 9:
        bump = 6 + 2 * math.sin(math.pi * (hour - 6) / 3)
    elif 17 <= hour <= 20:
        bump = 6 + 2 * math.sin(math.pi * (hour - 17) / 3)

    return _clamp(max(phase_score, bump))


# ----------------------------
# Water
# ----------------------------
def calculate_water_temperature_score(
    water_temp: Optional[float],
    optimal_range: Optional[Sequence[float]] = None,
    tolerable_range: Optional[Sequence[float]] = None,
) -> float:
    """Score water temperature (°C), optionally against species ranges."""
    if water_temp is None:
        return NEUTRAL_SCORE

    optimal = _range(optimal_range)
    tolerable = _range(tolerable_range)
    if optimal and tolerable:
        lo, hi = optimal
        t_lo, t_hi = tolerable
        if lo <= water_temp <= hi:
            return 10.0
        if t_lo <= water_temp < lo:
            return 10 - (lo - water_temp) / max(lo - t_lo, 0.1) * 5
        if hi < water_temp <= t_hi:
            return 10 - (water_temp - hi) / max(t_hi - hi, 0.1) * 5
        dist = t_lo - water_temp if water_temp < t_lo else water_temp - t_hi
        return max(0.0, 5 - dist * 1.5)

    if 8 <= water_temp <= 14:
        return 10.0
    if water_temp < 8:
        return _clamp(10 - (8 - water_temp) * 1.25)
    return _clamp(10 - (water_temp - 14))


def calculate_current_speed_score(
    current_speed: Optional[float],
    optimal_range: Optional[Sequence[float]] = None,
) -> float:
    """Score tidal current speed (knots), optionally against a species range."""
    if current_speed is None:
        return NEUTRAL_SCORE
    s = abs(current_speed)

    optimal = _range(optimal_range)
    if optimal:
        lo, hi = optimal
        if lo <= s <= hi:
            return 10.0
        if s < lo:
            return _clamp(10 - ((lo - s) / max(lo, 0.1)) * 4)
        return max(0.5, 10 - (s - hi) * 3)

    if 0.5 <= s <= 2.0:
        return 10.0
    if s < 0.5:
        return 6 + (s / 0.5) * 4
    if s <= 3:
        return 10 - (s - 2) * 3
    if s <= 5:
        return 7 - (s - 3) * 2.5
    return max(0.5, 2 - (s - 5) * 0.5)


def calculate_current_direction_score(
    current_direction: Optional[float],
    wind_direction: Optional[float],
    wind_speed_kmh: Optional[float],
    current_speed: float = 0.0,
) -> float:
    """Score the interaction of wind and tidal current.

    Wind against current (more than 135° apart) builds steep chop; wind with
    current (under 45° apart) gives the smoothest water.
    """
    if current_direction is None or wind_direction is None or wind_speed_kmh is None:
        return NEUTRAL_SCORE

    diff = abs(wind_direction - current_direction) % 360
    if diff > 180:
        diff = 360 - diff
    wind_kn = wind_speed_kmh * KMH_TO_KNOTS
    energy = wind_kn * 0.7 + abs(current_speed) * 0.3

    if diff > 135:
        if wind_kn > 20 or energy > 25:
            return 2.0
        if wind_kn > 15 or energy > 18:
            return 4.0
        if wind_kn > 10 or energy > 12:
            return 6.0
        return 8.0
    if diff < 45 and wind_kn < 20:
        return 10.0
    if wind_kn > 25:
        return 5.0
    if wind_kn > 15:
        return 7.0
    return 9.0


def calculate_enhanced_tide_score(
    change_rate: Optional[float],
    tidal_range: Optional[float],
    time_to_next_tide: Optional[float],
    current_speed_preference: Optional[str] = None,
) -> float:
    """Score tidal movement, scaled by range and proximity to the turn."""
    if change_rate is None:
        return NEUTRAL_SCORE
    rate = abs(change_rate)

    if 0.3 <= rate <= 1.0:
        movement = 10.0
    elif rate < 0.3:
        movement = 5 + (rate / 0.3) * 5
    else:
        movement = max(5.0, 10 - (rate - 1) * 3)

    range_factor = 0.85
    if tidal_range is not None:
        if tidal_range >= 2:
            range_factor = 1.0
        elif tidal_range >= 1:
            range_factor = 0.95

    score = movement * range_factor
    minutes = abs(time_to_next_tide) if time_to_next_tide is not None else None

    if current_speed_preference == CURRENT_PREFERENCE_SLACK:
        if minutes is not None and minutes <= 60:
            score *= 1.1
    elif current_speed_preference == CURRENT_PREFERENCE_STRONG:
        if rate > 1:
            score *= 1.1
    elif minutes is not None and minutes <= 30:
        score *= 0.9

    return _clamp(score)


def local_datetime(timestamp: float, tz=None) -> datetime:
    """Convert epoch seconds to an aware datetime in ``tz``."""
    return dt_util.utc_from_timestamp(timestamp).astimezone(tz or dt_util.DEFAULT_TIME_ZONE)
