"""Astronomical helpers used by the scorers.

Everything here is closed-form math (no ephemeris): moon phase from the
Julian day number, illumination, meteorological seasons, spring/neap tide
classification, a simplified solar altitude and twilight classification.
Moon phase is a float in [0, 1) where 0 = new and 0.5 = full.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Iterable, Union

from homeassistant.util import dt as dt_util

from ..const import (
    SEASON_FALL,
    SEASON_SPRING,
    SEASON_SUMMER,
    SEASON_WINTER,
    TIDE_TYPE_NEAP,
    TIDE_TYPE_NORMAL,
    TIDE_TYPE_SPRING,
)

_LOGGER = logging.getLogger(__name__)

LUNAR_CYCLE_DAYS = 29.53059
# Julian day of the reference new moon (6 Jan 2000)
REFERENCE_NEW_MOON_JD = 2451550.1

DateLike = Union[date, datetime]


def _julian_day_number(year: int, month: int, day: int) -> int:
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045


def get_moon_phase(when: DateLike) -> float:
    """Return the moon phase for a calendar date (0 = new, 0.5 = full)."""
    jdn = _julian_day_number(when.year, when.month, when.day)
    phase = ((jdn - REFERENCE_NEW_MOON_JD) % LUNAR_CYCLE_DAYS) / LUNAR_CYCLE_DAYS
    if phase < 0:
        phase += 1.0
    return phase


def get_moon_illumination(phase: float) -> int:
    """Return the illuminated fraction of the moon as a 0-100 percentage."""
    return round((1 - math.cos(2 * math.pi * phase)) / 2 * 100)


def get_moon_phase_name(phase: float) -> str:
    if phase < 0.0625 or phase >= 0.9375:
        return "New Moon"
    if phase < 0.1875:
        return "Waxing Crescent"
    if phase < 0.3125:
        return "First Quarter"
    if phase < 0.4375:
        return "Waxing Gibbous"
    if phase < 0.5625:
        return "Full Moon"
    if phase < 0.6875:
        return "Waning Gibbous"
    if phase < 0.8125:
        return "Last Quarter"
    return "Waning Crescent"


def is_odd_year(when: DateLike) -> bool:
    """Pink salmon only run in odd years."""
    return when.year % 2 == 1


def get_season(when: DateLike) -> str:
    """Return the meteorological season for the northern hemisphere."""
    month = when.month
    if month in (3, 4, 5):
        return SEASON_SPRING
    if month in (6, 7, 8):
        return SEASON_SUMMER
    if month in (9, 10, 11):
        return SEASON_FALL
    return SEASON_WINTER


def get_seasonal_weight(month: int, peak_months: Iterable[int]) -> float:
    """Score a month against peak months, decaying 0.15 per month away (floor 0.3)."""
    peaks = list(peak_months)
    if not peaks:
        return 0.5
    if month in peaks:
        return 1.0
    distance = min(min(abs(month - p), 12 - abs(month - p)) for p in peaks)
    return max(0.3, 1.0 - distance * 0.15)


def get_slack_tide_score(current_speed: float) -> float:
    """Return 0-1 where 1 is perfect slack water."""
    speed = abs(current_speed)
    if speed <= 0.1:
        return 1.0
    if speed <= 0.2:
        return 0.9
    if speed <= 0.3:
        return 0.7
    if speed <= 0.5:
        return 0.5
    if speed <= 0.8:
        return 0.3
    if speed <= 1.0:
        return 0.2
    return 0.1


def get_tide_type(moon_phase: float) -> str:
    """Classify the tide as spring (new/full), neap (quarters) or normal."""
    if moon_phase <= 0.07 or moon_phase >= 0.93:
        return TIDE_TYPE_SPRING
    if 0.43 <= moon_phase <= 0.57:
        return TIDE_TYPE_SPRING
    if 0.18 <= moon_phase <= 0.32 or 0.68 <= moon_phase <= 0.82:
        return TIDE_TYPE_NEAP
    return TIDE_TYPE_NORMAL


def get_tide_strength(moon_phase: float) -> int:
    """Approximate tidal strength 0-100 from distance to the nearest spring tide."""
    try:
        phase = float(moon_phase) % 1.0
    except (TypeError, ValueError):
        return 50
    dist = min(phase, abs(phase - 0.5), 1.0 - phase)
    return int(round(max(0.0, 1.0 - dist / 0.25) * 100))


def get_solar_altitude(when: datetime, latitude: float, longitude: float) -> float:
    """Simplified solar altitude in degrees (negative below the horizon).

    ``when`` is converted to UTC; the hour angle is derived from UTC clock time
    shifted by longitude.
    """
    utc = dt_util.as_utc(when)
    julian_day = _julian_day_number(utc.year, utc.month, utc.day) + (utc.hour - 12) / 24
    century = (julian_day - 2451545) / 36525

    mean_anomaly = 357.52911 + century * (35999.05029 - 0.0001537 * century)
    equation_of_center = math.sin(math.radians(mean_anomaly)) * (
        1.914602 - century * (0.004817 + 0.000014 * century)
    )
    true_longitude = (
        280.46646 + century * (36000.76983 + century * 0.0003032) + equation_of_center
    ) % 360

    declination = math.asin(
        math.sin(math.radians(23.45)) * math.sin(math.radians(true_longitude))
    )
    hour_angle = math.radians((utc.hour + utc.minute / 60 - 12) * 15 + longitude)
    lat = math.radians(latitude)

    altitude = math.asin(
        math.sin(declination) * math.sin(lat)
        + math.cos(declination) * math.cos(lat) * math.cos(hour_angle)
    )
    return math.degrees(altitude)


def get_light_condition(solar_altitude: float) -> str:
    if solar_altitude >= 6:
        return "daylight"
    if solar_altitude >= 0:
        return "golden hour"
    if solar_altitude >= -6:
        return "civil twilight"
    if solar_altitude >= -12:
        return "nautical twilight"
    if solar_altitude >= -18:
        return "astronomical twilight"
    return "night"
