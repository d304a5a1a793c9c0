"""Second-generation chinook salmon model.

Light is scored against the actual sunrise and sunset instead of fixed clock
hours, wind and waves are merged into one sea-state factor, and the weight
table switches between a feeder mode (December-May, resident fish following
bait) and a spawner mode (June-November, migrating fish working the tide).

Factors that need fishing-report text or a pressure history are not part of
this model; pressure is scored from its absolute value.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional, Tuple

from .const import ALGORITHM_SPECIES, ALGORITHM_SPECIES_V2, KMH_TO_KNOTS, SPECIES_CHINOOK
from .data_schema import EnvironmentalSample, SpeciesProfile, TideSnapshot
from .score import register_scorer
from .species_scoring import FactorSheet, SpeciesConditions, SpeciesScorer, route_species

_LOGGER = logging.getLogger(__name__)

MODE_FEEDER = "feeder"
MODE_SPAWNER = "spawner"

# Relative emphasis per mode; normalized to sum to 1 when applied
MODE_WEIGHTS: Dict[str, Dict[str, float]] = {
    MODE_FEEDER: {
        "lightTime": 0.22,
        "trollability": 0.13,
        "tidalCurrent": 0.12,
        "pressure": 0.10,
        "seaState": 0.05,
        "precipitation": 0.03,
        "waterTemp": 0.02,
    },
    MODE_SPAWNER: {
        "lightTime": 0.18,
        "tidalCurrent": 0.18,
        "trollability": 0.17,
        "pressure": 0.10,
        "seaState": 0.05,
        "precipitation": 0.03,
        "waterTemp": 0.02,
    },
}

MODE_ADVICE = {
    MODE_FEEDER: "FEEDER MODE (Dec-May): resident fish actively feeding, follow the bait",
    MODE_SPAWNER: "SPAWNER MODE (Jun-Nov): migrating fish staging for spawning runs, work tide changes",
}

CIVIL_TWILIGHT_MINUTES = 35
GOLDEN_HOUR_MINUTES = 60
EXTENDED_GOLDEN_MINUTES = 90

# Tidal range treated as "moderate" when no tide data is supplied
DEFAULT_TIDAL_RANGE = 3.0
DEFAULT_MINUTES_TO_SLACK = 180

LIGHTNING_UNSAFE_JKG = 1500
CURRENT_UNSAFE_KNOTS = 4.5
COLD_WATER_C = 6


def seasonal_mode(month: int) -> str:
    """Feeder from December to May, spawner otherwise."""
    return MODE_FEEDER if month == 12 or month <= 5 else MODE_SPAWNER


def dynamic_light_score(timestamp: float, sunrise: float, sunset: float) -> Tuple[float, str]:
    """Score light from minutes around sunrise/sunset; golden hours peak at 1.0."""
    from_sunrise = (timestamp - sunrise) / 60
    from_sunset = (timestamp - sunset) / 60
    to_sunrise = -from_sunrise
    to_sunset = -from_sunset

    if 0 < to_sunrise <= CIVIL_TWILIGHT_MINUTES:
        return 0.9, "civil_twilight_dawn"
    if 0 <= from_sunrise <= 30:
        return 1.0, "golden_hour_dawn"
    if 30 < from_sunrise <= GOLDEN_HOUR_MINUTES:
        return 0.9, "golden_hour_dawn_late"
    if GOLDEN_HOUR_MINUTES < from_sunrise <= EXTENDED_GOLDEN_MINUTES:
        return 0.75, "morning_early"
    if 0 < to_sunset <= 30:
        return 1.0, "golden_hour_dusk"
    if 30 < to_sunset <= GOLDEN_HOUR_MINUTES:
        return 0.9, "golden_hour_dusk_early"
    if GOLDEN_HOUR_MINUTES < to_sunset <= EXTENDED_GOLDEN_MINUTES:
        return 0.75, "afternoon_late"
    if 0 <= from_sunset <= CIVIL_TWILIGHT_MINUTES:
        return 0.85, "civil_twilight_dusk"
    if EXTENDED_GOLDEN_MINUTES < from_sunrise <= 240:
        return 0.5, "mid_morning"
    if EXTENDED_GOLDEN_MINUTES < to_sunset <= 240:
        return 0.5, "late_afternoon"
    if from_sunrise > 240 and to_sunset > 240:
        return 0.3, "midday"
    return 0.15, "night"


def estimate_sun_elevation(timestamp: float, sunrise: float, sunset: float, month: int) -> float:
    """Rough sun elevation (degrees) for BC latitudes from sunrise/sunset alone.

    Follows a half-sine through the day, peaking between about 17 degrees
    in December and 63 degrees in June, and bottoms out at -10 at night.
    """
    day_length = sunset - sunrise
    since_sunrise = timestamp - sunrise
    if since_sunrise < 0:
        return max(-10.0, since_sunrise / 3600 * 10)
    if day_length <= 0 or since_sunrise > day_length:
        return max(-10.0, -(timestamp - sunset) / 3600 * 10)

    progress = since_sunrise / day_length
    seasonal_max = 40 - 23 * math.cos(month * math.pi / 6)
    return math.sin(progress * math.pi) * seasonal_max


def depth_advice(sun_elevation: float, cloud_cover: float) -> Dict[str, Any]:
    """Trolling depth range for the light level; high sun pushes fish deep."""
    effective = sun_elevation * (1 - cloud_cover * 0.005)
    if effective < 10:
        low, high, deep = 40, 80, False
    elif effective < 25:
        low, high, deep = 60, 100, False
    elif effective < 40:
        low, high, deep = 80, 120, False
    elif effective < 55:
        low, high, deep = 100, 150, True
    else:
        low, high, deep = 120, 180, True

    # Overcast lifts the fish
    if cloud_cover > 70 and effective > 25:
        low, high, deep = low - 20, high - 20, False

    return {
        "min_depth_ft": low,
        "max_depth_ft": high,
        "is_deep_bite": deep,
        "sun_elevation": round(sun_elevation, 1),
    }


def trollability(
    tidal_range: float, minutes_to_slack: float, current: float
) -> Tuple[float, str, Optional[str]]:
    """Score how well gear holds depth; big exchanges far from slack blow lines back.

    Returns (score, blowback level, advice).
    """
    large_exchange = tidal_range > 3.5
    near_slack = minutes_to_slack <= 90

    if large_exchange and not near_slack:
        hours = minutes_to_slack / 60
        if hours > 4 or current > 3.5:
            return 0.2, "untrollable", "Blowback: peak tidal exchange, cannot hold depth; wait for slack"
        if hours > 3 or current > 2.5:
            return 0.35, "heavy", "Heavy blowback: add weight or wait for the current to ease"
        if hours > 2 or current > 1.5:
            return 0.55, "moderate", "Moderate blowback: use heavier gear or shorten lines"
        return 0.75, "light", None
    if large_exchange:
        return 1.0, "none", "Slack window during a large exchange: prime time for deep trolling"
    if tidal_range > 2.5 and minutes_to_slack > 150:
        return 0.8, "light", None
    return 1.0, "none", None


def _tidal_current(c: SpeciesConditions) -> float:
    if not c.has_tide:
        return 0.5
    cur = c.current
    if 0.5 <= cur <= 2.0:
        score = 1.0
    elif 0.3 <= cur < 0.5:
        score = 0.75
    elif cur < 0.3:
        score = 0.5
    elif cur <= 3.5:
        score = 0.4
    else:
        score = 0.1
    # Flood tide bonus
    if c.is_rising and score > 0.3:
        score = min(score + 0.1, 1.0)
    return score


def _sea_state(sheet: FactorSheet, c: SpeciesConditions, weight: float) -> None:
    """Wind and waves as one factor; either limit alone makes conditions unsafe."""
    wind = c.wind_knots
    gust = c.gust_kmh * KMH_TO_KNOTS
    wave = c.wave_height

    if wind > 25 or gust > 35:
        score = 0.0
        sheet.unsafe(f"Unsafe: Wind {round(wind)} knots (gusts {round(gust)})")
    elif wave > 2.0:
        score = 0.0
        sheet.unsafe(f"Unsafe: Wave height {wave:.1f}m")
    elif 0.3 <= wave <= 0.8 and 5 <= wind <= 15:
        # Salmon chop
        score = 1.0
    elif wave < 0.3 and wind < 5:
        score = 0.7
    elif wave <= 1.0 and wind <= 18:
        score = 0.8
    elif wave <= 1.5 and wind <= 22:
        score = 0.5
    else:
        score = 0.25
    sheet.add("seaState", c.wind_kmh, weight, score)


def _pressure(p: float) -> float:
    if p < 1008:
        return 0.9
    if p < 1013:
        return 0.7
    if p <= 1017:
        return 0.5
    if p <= 1022:
        return 0.4
    return 0.2


def _precipitation(pr: float) -> float:
    if pr <= 0.1:
        return 0.9
    if pr <= 2:
        # Light rain lowers the light and washes food in
        return 1.0
    if pr <= 5:
        return 0.7
    if pr <= 10:
        return 0.4
    return 0.2


def _water_temp(temp: Optional[float]) -> float:
    if temp is None:
        return 0.5
    if 9 <= temp <= 13:
        return 1.0
    if 7 <= temp <= 15:
        return 0.75
    if 5 <= temp <= 17:
        return 0.5
    return 0.2


def score_chinook_salmon_v2(c: SpeciesConditions, sunrise: float, sunset: float) -> FactorSheet:
    sheet = FactorSheet()
    mode = seasonal_mode(c.month)
    table = MODE_WEIGHTS[mode]
    scale = sum(table.values())

    def weight(name: str) -> float:
        return table[name] / scale

    advice = [MODE_ADVICE[mode]]

    light, condition = dynamic_light_score(c.timestamp, sunrise, sunset)
    sheet.add("lightTime", round((c.timestamp - sunrise) / 60), weight("lightTime"), light)

    sheet.add("tidalCurrent", c.current, weight("tidalCurrent"), _tidal_current(c))

    tidal_range = c.tidal_range if c.has_tide else DEFAULT_TIDAL_RANGE
    minutes = c.minutes_to_turn if c.minutes_to_turn is not None else DEFAULT_MINUTES_TO_SLACK
    troll, blowback, troll_advice = trollability(tidal_range, abs(minutes), c.current)
    sheet.add("trollability", tidal_range, weight("trollability"), troll)
    if troll_advice:
        advice.append(troll_advice)

    sheet.add("pressure", c.pressure, weight("pressure"), _pressure(c.pressure))
    _sea_state(sheet, c, weight("seaState"))
    sheet.add("precipitation", c.precipitation, weight("precipitation"), _precipitation(c.precipitation))
    sheet.add("waterTemp", c.measured_water_temp, weight("waterTemp"), _water_temp(c.measured_water_temp))

    if c.lightning > LIGHTNING_UNSAFE_JKG:
        sheet.unsafe(f"Unsafe: High lightning risk {c.lightning:.0f} J/kg")
    if c.current > CURRENT_UNSAFE_KNOTS:
        sheet.unsafe(f"Unsafe: Current speed {c.current:.1f} knots")
    if c.measured_water_temp is not None and c.measured_water_temp < COLD_WATER_C:
        sheet.warn(f"Cold water {c.measured_water_temp}°C - hypothermia risk")

    depth = depth_advice(
        estimate_sun_elevation(c.timestamp, sunrise, sunset, c.month), c.cloud_cover
    )
    if depth["is_deep_bite"]:
        advice.append(
            f"Deep bite: high sun pushes fish to {depth['min_depth_ft']}-{depth['max_depth_ft']}ft"
        )

    sheet.details = {
        "seasonal_mode": mode,
        "light_condition": condition,
        "blowback": blowback,
        "depth_advice": depth,
        "strategy_advice": advice,
    }
    return sheet


@register_scorer
class ChinookV2Scorer(SpeciesScorer):
    """Species scorer using the sunrise-aware chinook model.

    Chinook samples without sunrise/sunset, and every other species, are
    scored exactly as the first species strategy does.
    """

    name = ALGORITHM_SPECIES_V2
    version = 4

    def _calculate_score(
        self,
        sample: EnvironmentalSample,
        sunrise: Optional[float],
        sunset: Optional[float],
        tide: Optional[TideSnapshot],
        profile: Optional[SpeciesProfile],
    ) -> Dict[str, Any]:
        species_id = route_species(profile.get("id")) if profile else None
        if species_id != SPECIES_CHINOOK or sunrise is None or sunset is None:
            result = super()._calculate_score(sample, sunrise, sunset, tide, profile)
            result.setdefault("algorithm", ALGORITHM_SPECIES)
            return result

        conditions = SpeciesConditions(sample, tide, self.local_time(sample["timestamp"]))
        sheet = score_chinook_salmon_v2(conditions, sunrise, sunset)
        if sheet.safety_warnings:
            _LOGGER.debug("chinook v2 safety warnings: %s", "; ".join(sheet.safety_warnings))

        result = sheet.as_result()
        result["species"] = species_id
        return result
