"""General fishing scoring strategies and the strategy registry.

Two strategies live here:

* ``LegacyScorer`` (``legacy``, v1): the first-generation six-factor banded model.
* ``EnhancedScorer`` (``enhanced``, v2): sixteen continuous factor curves
  weighted by one of two tables, depending on whether a water-level series
  is available, with optional species profile adjustments.

Strategies are looked up by name through ``get_scorer``; the species
strategies register themselves from species_scoring.py and chinook_v2.py.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type

from .base_scorer import BaseScorer
from .const import (
    ACTIVITY_DAWN,
    ACTIVITY_DUSK,
    ACTIVITY_MIDDAY,
    ACTIVITY_NIGHT,
    ALGORITHM_ENHANCED,
    ALGORITHM_LEGACY,
    FACTOR_ATMOSPHERIC_STABILITY,
    FACTOR_CLOUD_COVER,
    FACTOR_COMFORT,
    FACTOR_CURRENT_DIRECTION,
    FACTOR_CURRENT_SPEED,
    FACTOR_LIGHTNING,
    FACTOR_PRECIPITATION,
    FACTOR_PRESSURE,
    FACTOR_SPECIES,
    FACTOR_SUNSHINE,
    FACTOR_TEMPERATURE,
    FACTOR_TIDE,
    FACTOR_TIME_OF_DAY,
    FACTOR_VISIBILITY,
    FACTOR_WATER_TEMPERATURE,
    FACTOR_WIND,
    KMH_TO_M_S,
    LEGACY_WEIGHTS,
    MAX_ADJUSTED_FACTOR,
    NEUTRAL_SCORE,
    WEIGHTS_WITH_TIDE,
    WEIGHTS_WITHOUT_TIDE,
)
from .data_schema import EnvironmentalSample, SpeciesProfile, TideSnapshot
from .exceptions import UnknownAlgorithmError
from .factors import (
    calculate_atmospheric_stability_score,
    calculate_cloud_cover_score,
    calculate_comfort_score,
    calculate_current_direction_score,
    calculate_current_speed_score,
    calculate_enhanced_tide_score,
    calculate_enhanced_wind_score,
    calculate_lightning_score,
    calculate_precipitation_score_from_mm,
    calculate_pressure_score,
    calculate_sunshine_score,
    calculate_temperature_score,
    calculate_time_of_day_score,
    calculate_visibility_score,
    calculate_water_temperature_score,
)
from .helpers.astro import get_season
from .tide_proxy import TideProxy, has_water_level_data

_LOGGER = logging.getLogger(__name__)

_SCORERS: Dict[str, Type[BaseScorer]] = {}


def register_scorer(cls: Type[BaseScorer]) -> Type[BaseScorer]:
    """Class decorator adding a strategy to the registry under ``cls.name``."""
    _SCORERS[cls.name] = cls
    return cls


def available_scorers() -> Dict[str, int]:
    """Return registered strategy names mapped to their versions."""
    return {name: cls.version for name, cls in _SCORERS.items()}


def get_scorer(name: str, time_zone: Optional[Any] = None, **kwargs: Any) -> BaseScorer:
    """Instantiate the strategy registered as ``name``.

    Raises UnknownAlgorithmError for names that are not registered.
    """
    cls = _SCORERS.get(name)
    if cls is None:
        raise UnknownAlgorithmError(name, _SCORERS)
    return cls(time_zone=time_zone, **kwargs)


@register_scorer
class LegacyScorer(BaseScorer):
    """Original six-factor banded model. Ignores tide and species."""

    name = ALGORITHM_LEGACY
    version = 1

    def _calculate_score(
        self,
        sample: EnvironmentalSample,
        sunrise: Optional[float],
        sunset: Optional[float],
        tide: Optional[TideSnapshot],
        profile: Optional[SpeciesProfile],
    ) -> Dict[str, Any]:
        breakdown = {
            FACTOR_PRESSURE: self._score_pressure(sample["pressure"]),
            FACTOR_WIND: self._score_wind(sample["wind_speed"] * KMH_TO_M_S, sample["wind_direction"]),
            FACTOR_TEMPERATURE: self._score_temperature(sample["temp"]),
            FACTOR_PRECIPITATION: self._score_precipitation(sample["precipitation"]),
            FACTOR_CLOUD_COVER: self._score_cloud(sample["cloud_cover"]),
            FACTOR_TIME_OF_DAY: self._score_time_of_day(sample["timestamp"], sunrise, sunset),
        }
        total = sum(breakdown[k] * w for k, w in LEGACY_WEIGHTS.items())
        return {
            "total": total,
            "breakdown": {k: round(v, 2) for k, v in breakdown.items()},
            "species": None,
        }

    def _score_pressure(self, pressure: float) -> float:
        if 1013 <= pressure <= 1023:
            return 10.0
        if 1008 <= pressure <= 1028:
            return 8.0
        if 1003 <= pressure <= 1033:
            return 6.0
        if 998 <= pressure <= 1038:
            return 4.0
        return 2.0

    def _score_wind(self, wind_speed: float, wind_direction: float) -> float:
        """Banded wind score (m/s) with a bonus for easterly (offshore) wind."""
        if wind_speed <= 2:
            score = 10.0
        elif wind_speed <= 5:
            score = 9.0
        elif wind_speed <= 8:
            score = 7.0
        elif wind_speed <= 12:
            score = 5.0
        elif wind_speed <= 15:
            score = 3.0
        else:
            score = 1.0
        if 45 <= wind_direction <= 135:
            score *= 1.1
        return min(score, 10.0)

    def _score_temperature(self, temp: float) -> float:
        if 8 <= temp <= 16:
            return 10.0
        if 5 <= temp <= 20:
            return 8.0
        if 2 <= temp <= 25:
            return 6.0
        if 0 <= temp <= 30:
            return 4.0
        return 2.0

    def _score_precipitation(self, precipitation: float) -> float:
        if precipitation <= 0.1:
            return 10.0
        if precipitation <= 0.5:
            return 8.0
        if precipitation <= 2.0:
            return 6.0
        if precipitation <= 5.0:
            return 4.0
        if precipitation <= 10.0:
            return 2.0
        return 1.0

    def _score_cloud(self, cloud_cover: float) -> float:
        if cloud_cover <= 25:
            return 8.0
        if cloud_cover <= 50:
            return 10.0
        if cloud_cover <= 75:
            return 7.0
        return 5.0

    def _score_time_of_day(
        self, timestamp: float, sunrise: Optional[float], sunset: Optional[float]
    ) -> float:
        """Hour-of-day bands around local sunrise and sunset."""
        hour = self.local_time(timestamp).hour
        if sunrise is not None and abs(hour - self.local_time(sunrise).hour) <= 1.5:
            return 10.0
        if sunset is not None and abs(hour - self.local_time(sunset).hour) <= 1.5:
            return 10.0
        if 5 <= hour <= 8 or 18 <= hour <= 21:
            return 8.0
        if 10 <= hour <= 16:
            return 6.0
        if hour >= 22 or hour <= 4:
            return 3.0
        return 5.0


@register_scorer
class EnhancedScorer(BaseScorer):
    """Sixteen-factor weighted model with optional species adjustments."""

    name = ALGORITHM_ENHANCED
    version = 2

    def _calculate_score(
        self,
        sample: EnvironmentalSample,
        sunrise: Optional[float],
        sunset: Optional[float],
        tide: Optional[TideSnapshot],
        profile: Optional[SpeciesProfile],
    ) -> Dict[str, Any]:
        has_tide = has_water_level_data(tide)
        weights = WEIGHTS_WITH_TIDE if has_tide else WEIGHTS_WITHOUT_TIDE
        breakdown = self._base_factors(sample, sunrise, sunset, tide if has_tide else None, profile)

        if profile:
            self._apply_profile(breakdown, sample, sunrise, sunset, profile)

        total = self._weighted_average(breakdown, weights)
        return {
            "total": total,
            "breakdown": {k: round(v, 2) for k, v in breakdown.items()},
            "species": profile.get("id") if profile else None,
        }

    def _base_factors(
        self,
        sample: EnvironmentalSample,
        sunrise: Optional[float],
        sunset: Optional[float],
        tide: Optional[TideSnapshot],
        profile: Optional[SpeciesProfile],
    ) -> Dict[str, float]:
        """Unadjusted 0-10 scores for all sixteen factors."""
        profile = profile or {}
        wind_ms = sample["wind_speed"] * KMH_TO_M_S
        gusts_ms = sample["wind_gusts"] * KMH_TO_M_S

        if tide:
            water_temp = tide.get("water_temperature")
            tide_score = calculate_enhanced_tide_score(
                tide.get("change_rate"),
                tide.get("tidal_range"),
                tide.get("time_to_next_tide"),
                profile.get("current_speed_preference"),
            )
            current_speed = tide.get("current_speed")
            current_direction = calculate_current_direction_score(
                tide.get("current_direction"),
                sample["wind_direction"],
                sample["wind_speed"],
                current_speed or 0.0,
            )
        else:
            water_temp = None
            tide_score = TideProxy.moon_tide_score(self.local_time(sample["timestamp"]))
            current_speed = None
            current_direction = NEUTRAL_SCORE

        return {
            FACTOR_PRESSURE: calculate_pressure_score(sample["pressure"]),
            FACTOR_WIND: calculate_enhanced_wind_score(wind_ms, gusts_ms, sample["wind_direction"]),
            FACTOR_TEMPERATURE: calculate_temperature_score(sample["temp"]),
            FACTOR_WATER_TEMPERATURE: calculate_water_temperature_score(
                water_temp,
                profile.get("optimal_water_temp_range"),
                profile.get("tolerable_water_temp_range"),
            ),
            FACTOR_PRECIPITATION: calculate_precipitation_score_from_mm(sample["precipitation"]),
            FACTOR_TIDE: tide_score,
            FACTOR_CURRENT_SPEED: calculate_current_speed_score(
                current_speed, profile.get("optimal_current_speed")
            ),
            FACTOR_CURRENT_DIRECTION: current_direction,
            FACTOR_CLOUD_COVER: calculate_cloud_cover_score(sample["cloud_cover"]),
            FACTOR_VISIBILITY: calculate_visibility_score(sample["visibility"]),
            FACTOR_SUNSHINE: calculate_sunshine_score(sample["sunshine_duration"]),
            FACTOR_LIGHTNING: calculate_lightning_score(sample["lightning_potential"]),
            FACTOR_ATMOSPHERIC_STABILITY: calculate_atmospheric_stability_score(sample["cape"]),
            FACTOR_COMFORT: calculate_comfort_score(
                sample["apparent_temp"], sample["humidity"], sample["dew_point"]
            ),
            FACTOR_TIME_OF_DAY: calculate_time_of_day_score(
                sample["timestamp"], sunrise, sunset, self.time_zone
            ),
            FACTOR_SPECIES: NEUTRAL_SCORE,
        }

    def _apply_profile(
        self,
        breakdown: Dict[str, float],
        sample: EnvironmentalSample,
        sunrise: Optional[float],
        sunset: Optional[float],
        profile: SpeciesProfile,
    ) -> None:
        """Scale factor scores by the species profile, capping each at 12."""
        temp = sample["temp"]
        optimal = profile.get("optimal_temp_range") or [10, 14]
        tolerable = profile.get("tolerable_temp_range") or [0, 25]
        if optimal[0] <= temp <= optimal[1]:
            breakdown[FACTOR_TEMPERATURE] *= 1.2
        elif not tolerable[0] <= temp <= tolerable[1]:
            breakdown[FACTOR_TEMPERATURE] *= 0.6

        breakdown[FACTOR_PRESSURE] *= profile.get("pressure_sensitivity", 1.0)
        breakdown[FACTOR_WIND] *= profile.get("wind_tolerance", 1.0)
        breakdown[FACTOR_TIDE] *= profile.get("tide_importance", 1.0)
        breakdown[FACTOR_PRECIPITATION] *= profile.get("precipitation_tolerance", 1.0)

        period = self._activity_period(sample["timestamp"], sunrise, sunset)
        if period:
            breakdown[FACTOR_TIME_OF_DAY] *= (profile.get("activity_multipliers") or {}).get(period, 1.0)

        if sample["cloud_cover"] >= 50:
            low_light = profile.get("low_light_preference", 1.0)
            breakdown[FACTOR_CLOUD_COVER] *= low_light
            breakdown[FACTOR_SUNSHINE] *= low_light

        season = get_season(self.local_time(sample["timestamp"]))
        breakdown[FACTOR_SPECIES] = NEUTRAL_SCORE * (profile.get("seasonal_peaks") or {}).get(season, 1.0)

        for key, value in breakdown.items():
            breakdown[key] = self._normalize_score(value, high=MAX_ADJUSTED_FACTOR)

    def _activity_period(
        self, timestamp: float, sunrise: Optional[float], sunset: Optional[float]
    ) -> Optional[str]:
        """Classify a sample as dawn, dusk, midday, night or None."""
        if sunrise is not None and abs(timestamp - sunrise) <= 3600:
            return ACTIVITY_DAWN
        if sunset is not None and abs(timestamp - sunset) <= 3600:
            return ACTIVITY_DUSK
        if 10 <= self.local_time(timestamp).hour < 15:
            return ACTIVITY_MIDDAY
        if sunrise is not None and sunset is not None and (timestamp < sunrise or timestamp > sunset):
            return ACTIVITY_NIGHT
        return None


