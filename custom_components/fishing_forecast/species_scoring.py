"""Species-specific fishing scoring algorithms.

Each species has its own factor set and weight table (weights sum to 1.0).
Factor scores are on a 0-1 scale and the total is
``sum(score * weight) * 10``. Safety cut-offs zero a single factor, flag the
result as unsafe and add a warning; they never cap the total, so anglers see
the actual conditions and make their own call.

Seasonal closures work through the seasonality factor (pink salmon in even
years, lingcod November-March, halibut December-February, spot prawn outside
May-June).
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Optional

from .base_scorer import BaseScorer
from .const import (
    ALGORITHM_SPECIES,
    KMH_TO_KNOTS,
    SPECIES_CHINOOK,
    SPECIES_CHUM,
    SPECIES_COHO,
    SPECIES_CRAB,
    SPECIES_HALIBUT,
    SPECIES_LINGCOD,
    SPECIES_PINK,
    SPECIES_ROCKFISH,
    SPECIES_SOCKEYE,
    SPECIES_SPOT_PRAWN,
)
from .data_schema import EnvironmentalSample, SpeciesProfile, TideSnapshot
from .helpers.astro import (
    get_moon_illumination,
    get_moon_phase,
    get_seasonal_weight,
    is_odd_year,
)
from .score import EnhancedScorer, register_scorer

_LOGGER = logging.getLogger(__name__)

MAX_WAVE_ESTIMATE = 5.0

SPECIES_ROUTE_ALIASES = {
    "spotprawn": SPECIES_SPOT_PRAWN,
    "spot-prawns": SPECIES_SPOT_PRAWN,
    "spotprawns": SPECIES_SPOT_PRAWN,
}


class SpeciesConditions:
    """Inputs of one species calculation, resolved to the units the curves use."""

    def __init__(
        self,
        sample: EnvironmentalSample,
        tide: Optional[TideSnapshot],
        local_time,
    ) -> None:
        self.timestamp = sample.get("timestamp", 0)
        self.local_time = local_time
        self.hour = local_time.hour
        self.month = local_time.month
        self.day = local_time.day
        self.moon_phase = get_moon_phase(local_time)

        self.air_temp = sample.get("temp", 10.0)
        self.pressure = sample.get("pressure", 1013.0)
        self.precipitation = max(0.0, sample.get("precipitation", 0.0))
        self.cloud_cover = sample.get("cloud_cover", 50.0)
        self.wind_kmh = max(0.0, sample.get("wind_speed", 0.0))
        self.wind_knots = self.wind_kmh * KMH_TO_KNOTS
        self.gust_kmh = max(self.wind_kmh, sample.get("wind_gusts") or 0.0)
        self.lightning = sample.get("lightning_potential") or 0.0

        wave_height = sample.get("wave_height")
        if wave_height is None:
            wave_height = min(self.wind_kmh / 3.6 * 0.1, MAX_WAVE_ESTIMATE)
        self.wave_height = wave_height

        self.has_tide = tide is not None
        tide = tide or {}
        self.current = abs(tide.get("current_speed") or 0.0)
        self.is_rising = bool(tide.get("is_rising"))
        self.minutes_to_turn = tide.get("time_to_next_tide")
        self.tidal_range = abs(tide.get("tidal_range") or 0.0)
        water_temp = tide.get("water_temperature")
        self.measured_water_temp = water_temp
        self.water_temp = water_temp if water_temp is not None else self.air_temp


class FactorSheet:
    """Collects weighted 0-1 factor scores and safety warnings."""

    def __init__(self, reports_safety: bool = True) -> None:
        self.factors: Dict[str, Dict[str, Any]] = {}
        self.safety_warnings: List[str] = []
        self.is_safe = True
        self.reports_safety = reports_safety
        self.details: Dict[str, Any] = {}

    def add(self, name: str, value: Any, weight: float, score: float) -> None:
        self.factors[name] = {"value": value, "weight": weight, "score": score}

    def unsafe(self, message: str) -> None:
        self.is_safe = False
        self.safety_warnings.append(message)

    def warn(self, message: str) -> None:
        self.safety_warnings.append(message)

    @property
    def total(self) -> float:
        return sum(f["score"] * f["weight"] for f in self.factors.values()) * 10

    def as_result(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "total": self.total,
            "breakdown": {k: round(f["score"] * 10, 2) for k, f in self.factors.items()},
            "factors": self.factors,
            "safety_warnings": list(self.safety_warnings),
        }
        if self.reports_safety:
            result["is_safe"] = self.is_safe
        result.update(self.details)
        return result


# ----------------------------
# Shared factor curves
# ----------------------------
def _wind_cutoff(sheet: FactorSheet, c: SpeciesConditions, weight: float, message: str) -> None:
    """Wind over 20 kn is unsafe; under 10 kn ideal (bottom fishing)."""
    if c.wind_knots > 20:
        score = 0.0
        sheet.unsafe(message)
    elif c.wind_knots < 10:
        score = 1.0
    elif c.wind_knots <= 15:
        score = 0.7
    else:
        score = 0.4
    sheet.add("wind", c.wind_kmh, weight, score)


def _trolling_wind(sheet: FactorSheet, c: SpeciesConditions, weight: float) -> None:
    """Wind over 20 kn is unsafe; a 5-15 kn chop is best for trolling."""
    if c.wind_knots > 20:
        score = 0.0
        sheet.unsafe("Unsafe: Wind speed >20 knots")
    elif 5 <= c.wind_knots <= 15:
        score = 1.0
    elif c.wind_knots < 5:
        score = 0.7
    else:
        score = 0.5
    sheet.add("wind", c.wind_kmh, weight, score)


def _wave_cutoff(
    sheet: FactorSheet,
    c: SpeciesConditions,
    weight: float,
    limit: float,
    message: str,
    bands=((1.0, 1.0), (1.5, 0.6)),
    otherwise: float = 0.3,
) -> None:
    """Waves above ``limit`` are unsafe; below that, first matching band wins.

    Each band is (upper bound, score); the first band bound is exclusive.
    """
    h = c.wave_height
    if h > limit:
        score = 0.0
        sheet.unsafe(message)
    elif h < bands[0][0]:
        score = bands[0][1]
    else:
        score = otherwise
        for bound, band_score in bands[1:]:
            if h <= bound:
                score = band_score
                break
    sheet.add("waveHeight", h, weight, score)


def _small_range_favoured(sheet: FactorSheet, c: SpeciesConditions, weight: float) -> None:
    """Neap tides give longer slack windows."""
    score = 0.5
    if c.has_tide:
        r = c.tidal_range
        if r <= 1.0:
            score = 1.0
        elif r <= 1.5:
            score = 0.8
        elif r <= 2.0:
            score = 0.6
        elif r <= 2.5:
            score = 0.4
        else:
            score = 0.2
    sheet.add("tidalRange", c.tidal_range, weight, score)


def _large_range_favoured(sheet: FactorSheet, c: SpeciesConditions, weight: float) -> None:
    score = 0.5
    if c.has_tide:
        r = c.tidal_range
        if r >= 2.5:
            score = 1.0
        elif r >= 2.0:
            score = 0.9
        elif r >= 1.5:
            score = 0.7
        elif r >= 1.0:
            score = 0.5
        else:
            score = 0.3
    sheet.add("tidalRange", c.tidal_range, weight, score)


def _band(value: float, optimal, acceptable, inside: float = 1.0, near: float = 0.7, outside: float = 0.3) -> float:
    """Score ``value`` 1/0.7/0.3 for optimal band, acceptable band, elsewhere."""
    if optimal[0] <= value <= optimal[1]:
        return inside
    if acceptable[0] <= value <= acceptable[1]:
        return near
    return outside


def _dawn_dusk_light(hour: int, dawn, dusk, shoulder: float, midday_hours, midday: float, night: float) -> float:
    if dawn[0] <= hour <= dawn[1] or dusk[0] <= hour <= dusk[1]:
        return 1.0
    if 9 <= hour <= 11 or 16 <= hour <= 17:
        return shoulder
    if midday_hours[0] <= hour <= midday_hours[1]:
        return midday
    return night


# ----------------------------
# Salmon
# ----------------------------
def score_chinook_salmon(c: SpeciesConditions) -> FactorSheet:
    sheet = FactorSheet()
    h = c.hour

    if 4 <= h <= 7 or 18 <= h <= 21:
        light = 1.0
    elif 8 <= h <= 10 or 16 <= h <= 17:
        light = 0.7
    elif 11 <= h <= 15:
        light = 0.4
    else:
        light = 0.0
        sheet.warn("Night fishing outside civil twilight - requires proper equipment")
    sheet.add("lightTime", h, 0.20, light)

    tidal = 0.5
    if c.has_tide:
        r = c.tidal_range
        if r >= 2.5:
            tidal = 1.0
        elif r >= 1.5:
            tidal = 0.8
        elif r >= 0.8:
            tidal = 0.6
        else:
            tidal = 0.4
        if r > 4.0:
            sheet.warn("Extreme tidal range - significant current risks")
    sheet.add("tidalRange", c.tidal_range, 0.15, tidal)

    cur = c.current
    if cur > 4.0:
        current = 0.0
        sheet.unsafe("Unsafe: Current speed >4 knots - significant boat control risk")
    elif 0.5 <= cur <= 2.0:
        current = 1.0
    elif 0.3 <= cur <= 3.0:
        current = 0.7
    elif cur < 0.3:
        current = 0.5
    else:
        current = 0.3
    sheet.add("currentFlow", cur, 0.15, current)

    m = c.month
    if m in (6, 7) or 2 <= m <= 4:
        # Summer migration and the winter feeder fishery
        season = 1.0
    elif m in (5, 8, 9):
        season = 0.8
    elif m in (10, 1):
        season = 0.5
    else:
        season = 0.3
    sheet.add("seasonality", m, 0.15, season)

    p = c.pressure
    if p < 1010:
        pressure = 1.0
    elif p <= 1013:
        pressure = 0.8
    elif p <= 1020:
        pressure = 0.5
    else:
        pressure = 0.0
    sheet.add("pressure", p, 0.10, pressure)

    moon = 1.0 if c.moon_phase <= 0.15 or c.moon_phase >= 0.85 else 0.5
    sheet.add("moonPhase", c.moon_phase, 0.05, moon)

    if c.air_temp < 5 or c.water_temp < 8:
        temp = 0.0
        sheet.unsafe("Unsafe: Air temp <5°C or water temp <8°C - hypothermia risk")
    else:
        temp = _band(c.water_temp, (10, 15), (8, 17))
    sheet.add("temperature", c.water_temp, 0.05, temp)

    _trolling_wind(sheet, c, 0.05)
    _wave_cutoff(sheet, c, 0.05, 2.0, "Unsafe: Wave height >2m")

    pr = c.precipitation
    if pr > 20:
        precip = 0.0
        sheet.unsafe("Unsafe: Heavy precipitation/potential thunderstorm")
    elif 0 < pr <= 5:
        precip = 1.0
    elif pr == 0:
        precip = 0.9
    elif pr <= 10:
        precip = 0.5
    else:
        precip = 0.2
    sheet.add("precipitation", pr, 0.05, precip)
    return sheet


def score_pink_salmon(c: SpeciesConditions) -> FactorSheet:
    sheet = FactorSheet()
    odd = is_odd_year(c.local_time)
    m, d = c.month, c.day

    if not odd:
        season = 0.0
    elif m == 8 or (m == 9 and d <= 15):
        season = 1.0
    elif (m == 7 and d >= 20) or (m == 9 and 15 < d <= 30):
        season = 0.8
    else:
        season = 0.0
    sheet.add("seasonality", 1 if odd else 0, 0.30, season)

    light = _dawn_dusk_light(c.hour, (5, 8), (18, 21), 0.7, (12, 15), 0.3, 0.2)
    sheet.add("lightTime", c.hour, 0.15, light)

    cur = c.current
    if cur > 4.0:
        current = 0.0
        sheet.unsafe("Unsafe: Current speed >4 knots")
    elif 1.0 <= cur <= 2.5:
        current = 1.0
    elif 0.5 <= cur <= 3.0:
        current = 0.7
    elif cur < 0.5:
        current = 0.4
    else:
        current = 0.3
    sheet.add("currentFlow", cur, 0.15, current)

    tidal = 0.5
    if c.has_tide:
        r = c.tidal_range
        if 1.2 <= r <= 2.5:
            tidal = 1.0
        elif 0.8 <= r < 1.2:
            tidal = 0.7
        elif 2.5 < r <= 3.5:
            tidal = 0.6
        else:
            tidal = 0.4
    sheet.add("tidalRange", c.tidal_range, 0.10, tidal)

    pr = c.precipitation
    if pr > 20:
        precip = 0.0
        sheet.unsafe("Unsafe: Heavy precipitation/potential thunderstorm")
    elif 0 < pr <= 5:
        precip = 1.0
    elif pr == 0:
        precip = 0.8
    elif pr <= 10:
        precip = 0.5
    else:
        precip = 0.3
    sheet.add("precipitation", pr, 0.10, precip)

    sheet.add("waterTemp", c.water_temp, 0.10, _band(c.water_temp, (11, 16), (9, 18)))
    _trolling_wind(sheet, c, 0.05)
    _wave_cutoff(sheet, c, 0.05, 2.0, "Unsafe: Wave height >2m")
    return sheet


def score_coho_salmon(c: SpeciesConditions) -> FactorSheet:
    sheet = FactorSheet()
    m = c.month

    if m == 9:
        season = 1.0
    elif m == 8:
        season = 0.9
    elif m == 10:
        season = 0.7
    elif m in (7, 11):
        season = 0.5
    else:
        season = 0.2
    sheet.add("seasonality", m, 0.25, season)

    light = _dawn_dusk_light(c.hour, (5, 8), (18, 21), 0.7, (12, 15), 0.2, 0.3)
    sheet.add("lightTime", c.hour, 0.20, light)

    cur = c.current
    if 1.5 <= cur <= 3.0:
        current = 1.0
    elif 1.0 <= cur < 1.5:
        current = 0.8
    elif 3.0 < cur <= 4.0:
        current = 0.5
    elif 0.5 <= cur < 1.0:
        current = 0.6
    elif cur < 0.5:
        current = 0.3
    else:
        current = 0.2
    sheet.add("currentFlow", cur, 0.20, current)

    _large_range_favoured(sheet, c, 0.10)

    pr = c.precipitation
    if 0 < pr <= 5:
        precip = 1.0
    elif pr == 0:
        precip = 0.7
    elif pr <= 10:
        precip = 0.5
    elif pr <= 20:
        precip = 0.3
    else:
        precip = 0.1
    sheet.add("precipitation", pr, 0.10, precip)

    if c.wind_knots > 20:
        wind = 0.0
        sheet.unsafe("Unsafe: Wind speed >20 knots")
    elif 5 <= c.wind_knots <= 15:
        wind = 1.0
    elif c.wind_knots < 5:
        # Glassy calm makes coho spooky
        wind = 0.6
    else:
        wind = 0.4
    sheet.add("wind", c.wind_kmh, 0.05, wind)

    _wave_cutoff(sheet, c, 0.05, 2.0, "Unsafe: Wave height >2m", bands=((1.5, 1.0),), otherwise=0.5)
    sheet.add("waterTemp", c.water_temp, 0.05, _band(c.water_temp, (11, 15), (9, 17)))
    return sheet


def score_sockeye_salmon(c: SpeciesConditions) -> FactorSheet:
    sheet = FactorSheet(reports_safety=False)
    sheet.add("seasonality", c.month, 0.30, get_seasonal_weight(c.month, (6, 7, 8)))

    current = 0.5
    if c.has_tide:
        current = _band(c.current, (0.5, 2.0), (0.3, 2.5), outside=0.4)
    sheet.add("currentFlow", c.current, 0.20, current)

    tidal = 0.5
    if c.has_tide:
        if c.tidal_range >= 2.0:
            tidal = 1.0
        elif c.tidal_range >= 1.2:
            tidal = 0.8
    sheet.add("tidalRange", c.tidal_range, 0.15, tidal)

    h = c.hour
    if 4 <= h <= 7:
        light = 0.9
    elif 18 <= h <= 21:
        light = 0.85
    elif 8 <= h <= 17:
        light = 0.6
    else:
        light = 0.3
    sheet.add("lightTime", h, 0.15, light)

    sheet.add("waterTemp", c.water_temp, 0.10, _band(c.water_temp, (8, 14), (6, 16)))
    sheet.add("pressure", c.pressure, 0.10, _band(c.pressure, (1009, 1014), (1006, 1017), outside=0.4))
    return sheet


def score_chum_salmon(c: SpeciesConditions) -> FactorSheet:
    sheet = FactorSheet(reports_safety=False)
    sheet.add("seasonality", c.month, 0.25, get_seasonal_weight(c.month, (9, 10, 11)))

    current = 0.5
    if c.has_tide:
        current = _band(c.current, (0.3, 1.5), (0.2, 2.0), outside=0.4)
    sheet.add("currentFlow", c.current, 0.20, current)

    tidal = 0.5
    if c.has_tide:
        if c.tidal_range >= 1.8:
            tidal = 1.0
        elif c.tidal_range >= 1.0:
            tidal = 0.7
    sheet.add("tidalRange", c.tidal_range, 0.20, tidal)

    h = c.hour
    if 5 <= h <= 8:
        light = 0.8
    elif 16 <= h <= 19:
        light = 0.75
    elif 9 <= h <= 15:
        light = 0.6
    else:
        light = 0.4
    sheet.add("lightTime", h, 0.10, light)

    sheet.add("waterTemp", c.water_temp, 0.10, _band(c.water_temp, (7, 13), (5, 15)))
    sheet.add("pressure", c.pressure, 0.10, _band(c.pressure, (1009, 1014), (1006, 1017), outside=0.4))
    # Chum are largely indifferent to rain
    sheet.add("precipitation", c.precipitation, 0.05, 0.8)
    return sheet


# ----------------------------
# Groundfish
# ----------------------------
def score_halibut(c: SpeciesConditions) -> FactorSheet:
    sheet = FactorSheet()

    tidal = 0.5
    if c.has_tide:
        r = c.tidal_range
        if r <= 1.0:
            tidal = 1.0
        elif r <= 1.5:
            tidal = 0.8
        elif r <= 2.0:
            tidal = 0.5
        elif r <= 2.5:
            tidal = 0.3
        else:
            tidal = 0.1
    sheet.add("tidalRange", c.tidal_range, 0.25, tidal)

    cur = c.current
    if 0.5 <= cur <= 2.0:
        current = 1.0
    elif 0.3 <= cur < 0.5:
        current = 0.6
    elif 2.0 < cur <= 2.5:
        current = 0.4
    elif cur < 0.3:
        current = 0.3
    else:
        current = 0.1
    sheet.add("currentFlow", cur, 0.25, current)

    m = c.month
    if m == 12 or m <= 2:
        season = 0.0
    elif 5 <= m <= 7:
        season = 1.0
    elif m in (4, 8):
        season = 0.8
    elif m in (3, 9):
        season = 0.6
    else:
        season = 0.4
    sheet.add("seasonality", m, 0.15, season)

    p = c.moon_phase
    if 0.20 <= p <= 0.30 or 0.70 <= p <= 0.80:
        moon = 1.0
    elif 0.15 <= p < 0.20 or 0.30 < p <= 0.35 or 0.65 <= p < 0.70 or 0.80 < p <= 0.85:
        moon = 0.7
    elif p <= 0.1 or p >= 0.9 or 0.45 <= p <= 0.55:
        moon = 0.1
    else:
        moon = 0.5
    sheet.add("moonPhase", p, 0.10, moon)

    _wind_cutoff(sheet, c, 0.10, "Unsafe: Wind speed >20 knots - difficult boat control during drift")
    _wave_cutoff(
        sheet, c, 0.10, 1.5, "Unsafe: Wave height >1.5m - unsafe for halibut drifting",
        bands=((1.0, 1.0),), otherwise=0.5,
    )
    sheet.add("lightTime", c.hour, 0.05, 0.8)
    return sheet


def score_lingcod(c: SpeciesConditions) -> FactorSheet:
    sheet = FactorSheet()

    cur = c.current
    if cur > 3.0:
        slack = 0.1
    elif cur <= 0.1:
        slack = 1.0
    elif cur <= 0.3:
        slack = 0.9
    elif cur <= 0.5:
        slack = 0.7
    elif cur <= 1.0:
        slack = 0.5
    elif cur <= 2.0:
        slack = 0.3
    else:
        slack = 0.2
    sheet.add("slackTide", cur, 0.30, slack)

    _large_range_favoured(sheet, c, 0.20)

    m = c.month
    season = 0.0 if (m >= 11 or m <= 3) else 1.0
    sheet.add("seasonality", m, 0.15, season)

    _wave_cutoff(sheet, c, 0.10, 2.0, "Unsafe: Wave height >2m - difficult to maintain position over structure")
    _wind_cutoff(sheet, c, 0.10, "Unsafe: Wind speed >20 knots - difficult drift control")

    pr = c.precipitation
    if 0 < pr <= 5:
        precip = 1.0
    elif pr == 0:
        precip = 0.8
    elif pr <= 10:
        precip = 0.6
    else:
        precip = 0.4
    sheet.add("precipitation", pr, 0.05, precip)

    h = c.hour
    if 5 <= h <= 8 or 18 <= h <= 21:
        light = 0.9
    elif 9 <= h <= 11 or 16 <= h <= 17:
        light = 0.7
    else:
        light = 0.6
    sheet.add("lightTime", h, 0.05, light)

    sheet.add("waterTemp", c.water_temp, 0.05, _band(c.water_temp, (8, 12), (6, 14), outside=0.4))
    return sheet


def score_rockfish(c: SpeciesConditions) -> FactorSheet:
    sheet = FactorSheet()

    cur = c.current
    if cur <= 0.1:
        slack = 1.0
    elif cur <= 0.3:
        slack = 0.95
    elif cur <= 0.5:
        slack = 0.85
    elif cur <= 1.0:
        slack = 0.6
    elif cur <= 1.5:
        slack = 0.3
    else:
        slack = 0.1
    sheet.add("slackTide", cur, 0.35, slack)

    _wind_cutoff(sheet, c, 0.20, "Unsafe: Wind speed >20 knots - cannot maintain position over structure")
    _wave_cutoff(
        sheet, c, 0.20, 1.5, "Unsafe: Wave height >1.5m - cannot stay over target structure",
        bands=((1.0, 1.0),), otherwise=0.5,
    )
    _small_range_favoured(sheet, c, 0.10)

    m = c.month
    if 3 <= m <= 5:
        # Spring closures for several rockfish species
        season = 0.3
    elif 6 <= m <= 9:
        season = 1.0
    elif 10 <= m <= 11:
        season = 0.6
    else:
        season = 0.4
    sheet.add("seasonality", m, 0.10, season)

    other = 0.8 if c.cloud_cover >= 50 else 0.7
    if 8 <= c.water_temp <= 14:
        other += 0.1
    sheet.add("otherFactors", c.cloud_cover, 0.05, min(other, 1.0))
    return sheet


# ----------------------------
# Shellfish
# ----------------------------
def score_crab(c: SpeciesConditions) -> FactorSheet:
    sheet = FactorSheet()

    cur = c.current
    if 0.3 <= cur <= 0.8:
        soak = 1.0
    elif 0.1 <= cur < 0.3:
        soak = 0.7
    elif 0.8 < cur <= 1.5:
        soak = 0.8
    elif cur < 0.1:
        soak = 0.4
    else:
        soak = 0.3
    sheet.add("soakTime", cur, 0.30, soak)

    m = c.month
    if m in (8, 9, 10):
        season = 1.0
    elif m == 11:
        season = 0.8
    elif m in (6, 7):
        # Molting, soft-shelled
        season = 0.3
    elif m in (5, 12):
        season = 0.6
    else:
        season = 0.5
    sheet.add("seasonality", m, 0.25, season)

    illumination = get_moon_illumination(c.moon_phase)
    sheet.add("moonPhase", c.moon_phase, 0.15, 1.0 - illumination / 100)

    kn = c.wind_knots
    wind = 1.0 if kn < 15 else 0.6 if kn <= 20 else 0.2
    sheet.add("wind", c.wind_kmh, 0.10, wind)

    _wave_cutoff(
        sheet, c, 0.10, 1.5, "Unsafe: Wave height >1.5m - hazardous to pull traps over gunwale",
        bands=((1.0, 1.0),), otherwise=0.5,
    )

    tidal = 0.5
    if c.has_tide:
        r = c.tidal_range
        if 1.5 <= r <= 2.5:
            tidal = 1.0
        elif 1.0 <= r < 1.5:
            tidal = 0.8
        elif 2.5 < r <= 3.5:
            tidal = 0.7
        elif r < 1.0:
            tidal = 0.5
        else:
            tidal = 0.3
    sheet.add("tidalRange", c.tidal_range, 0.10, tidal)
    return sheet


def score_spot_prawn(c: SpeciesConditions) -> FactorSheet:
    sheet = FactorSheet()

    season = 1.0 if c.month in (5, 6) else 0.0
    # 0.50 less the 0.05 given to darkness, so the weights still sum to 1
    sheet.add("seasonality", c.month, 0.45, season)

    cur = c.current
    if cur <= 0.1:
        slack = 1.0
    elif cur <= 0.2:
        slack = 0.9
    elif cur <= 0.3:
        slack = 0.6
    elif cur <= 0.5:
        slack = 0.3
    else:
        slack = 0.1
    sheet.add("slackTide", cur, 0.20, slack)

    _small_range_favoured(sheet, c, 0.10)

    if c.wind_knots > 15:
        wind = 0.0
        sheet.unsafe("Unsafe: Wind speed >15 knots - dangerous with long rope at extreme depth")
    elif c.wind_knots < 10:
        wind = 1.0
    else:
        wind = 0.5
    sheet.add("wind", c.wind_kmh, 0.10, wind)

    _wave_cutoff(
        sheet, c, 0.10, 1.5, "Unsafe: Wave height >1.5m - extremely hazardous with deep gear",
        bands=((1.0, 1.0),), otherwise=0.4,
    )

    # Prawns feed on the bottom in the dark; a bright moon slows traps
    illumination = get_moon_illumination(c.moon_phase)
    sheet.add("darkness", illumination, 0.05, 1.0 - illumination / 100)
    return sheet


SPECIES_ALGORITHMS: Dict[str, Callable[[SpeciesConditions], FactorSheet]] = {
    SPECIES_CHINOOK: score_chinook_salmon,
    SPECIES_PINK: score_pink_salmon,
    SPECIES_COHO: score_coho_salmon,
    SPECIES_SOCKEYE: score_sockeye_salmon,
    SPECIES_CHUM: score_chum_salmon,
    SPECIES_HALIBUT: score_halibut,
    SPECIES_LINGCOD: score_lingcod,
    SPECIES_ROCKFISH: score_rockfish,
    SPECIES_CRAB: score_crab,
    SPECIES_SPOT_PRAWN: score_spot_prawn,
}


def route_species(species: Optional[str]) -> Optional[str]:
    """Map a species name to the key of its algorithm, or None."""
    if not species:
        return None
    key = re.sub(r"\s+", "-", str(species).strip().lower())
    key = SPECIES_ROUTE_ALIASES.get(key, key)
    return key if key in SPECIES_ALGORITHMS else None


@register_scorer
class SpeciesScorer(BaseScorer):
    """Dispatches to a species algorithm, falling back to the enhanced model."""

    name = ALGORITHM_SPECIES
    version = 3

    def __init__(self, time_zone: Optional[Any] = None) -> None:
        super().__init__(time_zone=time_zone)
        self._fallback = EnhancedScorer(time_zone=self.time_zone)

    def _calculate_score(
        self,
        sample: EnvironmentalSample,
        sunrise: Optional[float],
        sunset: Optional[float],
        tide: Optional[TideSnapshot],
        profile: Optional[SpeciesProfile],
    ) -> Dict[str, Any]:
        species_id = route_species(profile.get("id")) if profile else None
        algorithm = SPECIES_ALGORITHMS.get(species_id) if species_id else None
        if algorithm is None:
            _LOGGER.debug("No species algorithm for %s; using enhanced model", profile and profile.get("id"))
            result = self._fallback._calculate_score(sample, sunrise, sunset, tide, profile)
            result["algorithm"] = self._fallback.name
            return result

        conditions = SpeciesConditions(sample, tide, self.local_time(sample["timestamp"]))
        sheet = algorithm(conditions)
        if sheet.safety_warnings:
            _LOGGER.debug("%s safety warnings: %s", species_id, "; ".join(sheet.safety_warnings))

        result = sheet.as_result()
        result["species"] = species_id
        return result
