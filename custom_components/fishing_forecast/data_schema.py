"""Data structure definitions for the Fishing Forecast engine.

This module defines TypedDict classes for the plain dicts that flow between
the normalizer, the scorers and the temporal aggregator. None of them are
mutated after construction; the aggregator always builds new dicts.
"""

from typing import Any, TypedDict, Optional, Dict, List


class EnvironmentalSample(TypedDict, total=False):
    """One 15-minute weather sample."""
    timestamp: int  # epoch seconds
    temp: float  # Celsius
    apparent_temp: float  # Celsius
    humidity: float  # percentage (0-100)
    dew_point: float  # Celsius
    pressure: float  # hPa
    precipitation: float  # mm/h
    cloud_cover: float  # percentage (0-100)
    wind_speed: float  # km/h
    wind_direction: float  # degrees
    wind_gusts: float  # km/h
    visibility: float  # meters
    sunshine_duration: float  # seconds (max 900 per sample)
    lightning_potential: float  # J/kg
    cape: float  # J/kg
    wave_height: Optional[float]  # meters


class WaterLevel(TypedDict):
    """One point of a water-level series."""
    timestamp: int  # epoch seconds
    height: float  # meters


class TideSnapshot(TypedDict, total=False):
    """Tide conditions at one instant."""
    current_height: float  # meters
    tidal_range: float  # meters
    is_rising: bool
    change_rate: float  # m/hr
    time_to_next_tide: Optional[float]  # minutes; None past the last turning point
    current_speed: float  # knots (magnitude)
    current_direction: float  # degrees true
    water_temperature: Optional[float]  # Celsius
    water_levels: List[WaterLevel]


class SpeciesProfile(TypedDict, total=False):
    """Static species preferences loaded from species_profiles.json."""
    id: str
    name: str
    scientific_name: str
    category: str
    aliases: List[str]
    optimal_temp_range: List[float]  # [min, max] Celsius
    tolerable_temp_range: List[float]
    optimal_water_temp_range: List[float]
    tolerable_water_temp_range: List[float]
    pressure_sensitivity: float
    wind_tolerance: float
    tide_importance: float
    current_speed_preference: str  # slack, moderate, strong
    optimal_current_speed: List[float]  # [min, max] knots
    activity_multipliers: Dict[str, float]  # dawn, dusk, midday, night
    low_light_preference: float
    precipitation_tolerance: float
    seasonal_peaks: Dict[str, float]  # spring, summer, fall, winter


class FactorDetail(TypedDict):
    """Species algorithm factor (score on the 0-1 scale)."""
    value: Optional[float]
    weight: float
    score: float


class FishingScore(TypedDict, total=False):
    """Scoring result structure (0-10 scale)."""
    total: float  # 0-10, rounded to 2 decimals
    breakdown: Dict[str, float]  # factor name -> 0-10 sub-score
    is_safe: bool
    safety_warnings: List[str]
    factors: Dict[str, FactorDetail]
    algorithm: str
    species: Optional[str]
    seasonal_mode: str  # chinook v2 only: feeder or spawner
    strategy_advice: List[str]
    depth_advice: Dict[str, Any]


class MinuteScore(TypedDict):
    """Score for a single 15-minute sample."""
    timestamp: int
    time: str  # ISO local datetime
    score: FishingScore
    temp: float
    wind_speed: float
    precipitation: float


class PeriodForecast(TypedDict):
    """Forecast for one 2-hour block, rescored from averaged inputs."""
    start_time: int  # epoch seconds
    end_time: int  # epoch seconds
    score: FishingScore
    avg_temp: float
    wind_speed: float
    precipitation: float
    pressure: float


class SunTimes(TypedDict):
    """Sunrise/sunset for one local calendar day."""
    date: str  # YYYY-MM-DD
    sunrise: int  # epoch seconds
    sunset: int  # epoch seconds


class DailyForecast(TypedDict):
    """Daily forecast structure."""
    date: str  # ISO date string (YYYY-MM-DD)
    day_name: str  # Monday, Tuesday, etc.
    sunrise: int
    sunset: int
    minute_scores: List[MinuteScore]
    periods: List[PeriodForecast]
    best_window: Optional[PeriodForecast]
