"""Daily forecast aggregation for Fishing Forecast.

Samples are bucketed by local calendar day, every sample is scored, and
consecutive runs of eight 15-minute samples are merged into 2-hour blocks.
Blocks are scored from their averaged conditions, not from the mean of the
per-sample scores.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Union

from .base_scorer import BaseScorer
from .const import (
    DEFAULT_MAX_DAYS,
    MIN_SAMPLES_PER_BLOCK,
    SAMPLE_INTERVAL_SECONDS,
    SAMPLES_PER_BLOCK,
)
from .data_formatter import DataFormatter
from .data_schema import (
    DailyForecast,
    EnvironmentalSample,
    FishingScore,
    MinuteScore,
    PeriodForecast,
    SpeciesProfile,
    SunTimes,
    TideSnapshot,
)
from .factors import local_datetime
from .species_loader import SpeciesLoader
from .tide_proxy import TideProxy

# Registers the species strategies with the scorer registry
from . import chinook_v2, species_scoring  # noqa: F401

_LOGGER = logging.getLogger(__name__)

MEAN_FIELDS = (
    "temp",
    "apparent_temp",
    "humidity",
    "dew_point",
    "pressure",
    "cloud_cover",
    "wind_speed",
    "visibility",
    "sunshine_duration",
)
MAX_FIELDS = (
    "precipitation",
    "wind_gusts",
    "lightning_potential",
    "cape",
    "wave_height",
)

TideInput = Union[TideProxy, Dict[str, Any], None]


def average_block(samples: List[EnvironmentalSample]) -> EnvironmentalSample:
    """Merge a block of samples into one representative sample."""
    merged: Dict[str, Any] = {
        "timestamp": samples[0]["timestamp"],
        "wind_direction": samples[0].get("wind_direction", 0.0),
    }
    for field in MEAN_FIELDS:
        values = [s[field] for s in samples if s.get(field) is not None]
        if values:
            merged[field] = sum(values) / len(values)
    for field in MAX_FIELDS:
        values = [s[field] for s in samples if s.get(field) is not None]
        if values:
            merged[field] = max(values)
    return merged  # type: ignore[return-value]


def select_best_window(periods: List[PeriodForecast]) -> Optional[PeriodForecast]:
    """Highest scoring period; ties go to the earliest start."""
    best: Optional[PeriodForecast] = None
    for period in sorted(periods, key=lambda p: p["start_time"]):
        if best is None or period["score"]["total"] > best["score"]["total"]:
            best = period
    return best


class FishingForecastEngine:
    """Scores samples and builds daily forecasts for one configuration."""

    def __init__(
        self,
        scorer: BaseScorer,
        species_loader: Optional[SpeciesLoader] = None,
        species: Optional[str] = None,
        max_days: int = DEFAULT_MAX_DAYS,
    ) -> None:
        self.scorer = scorer
        self.species_loader = species_loader or SpeciesLoader()
        self.species = species
        self.max_days = max_days

    @property
    def time_zone(self) -> Any:
        """Zone used for day bucketing; always the scorer's zone."""
        return self.scorer.time_zone

    def resolve_profile(self, species: Optional[str] = None) -> Optional[SpeciesProfile]:
        query = species if species is not None else self.species
        if not query:
            return None
        profile = self.species_loader.resolve(query)
        if profile is None:
            _LOGGER.debug("Species '%s' not in catalog; using general scoring", query)
        return profile

    def score_sample(
        self,
        sample: Dict[str, Any],
        sunrise: Optional[float],
        sunset: Optional[float],
        tide: TideInput = None,
        species: Optional[str] = None,
    ) -> FishingScore:
        """Score a single sample."""
        profile = self.resolve_profile(species)
        timestamp = DataFormatter.format_sample(sample)["timestamp"]
        return self.scorer.calculate_score(
            sample, sunrise, sunset, self._tide_at(tide, timestamp), profile
        )

    def generate_daily_forecasts(
        self,
        samples: List[Dict[str, Any]],
        sun_times: List[SunTimes],
        tide: TideInput = None,
        species: Optional[str] = None,
    ) -> List[DailyForecast]:
        """Build up to ``max_days`` daily forecasts, skipping today's partial bucket.

        Args:
            samples: 15-minute samples in any order
            sun_times: sunrise/sunset per local date
            tide: a fixed tide snapshot, or a TideProxy giving one per sample
            species: species name overriding the configured one
        """
        profile = self.resolve_profile(species)
        normalized = DataFormatter.format_samples(samples)
        sun_by_date = {s["date"]: s for s in sun_times or []}

        days: "OrderedDict[str, List[EnvironmentalSample]]" = OrderedDict()
        for sample in normalized:
            day = local_datetime(sample["timestamp"], self.time_zone).date().isoformat()
            days.setdefault(day, []).append(sample)

        forecasts: List[DailyForecast] = []
        for date_key, day_samples in list(days.items())[1 : self.max_days + 1]:
            sun = sun_by_date.get(date_key)
            if sun is None:
                _LOGGER.debug("No sunrise/sunset for %s; skipping day", date_key)
                continue
            forecasts.append(self._build_day(date_key, day_samples, sun, tide, profile))

        _LOGGER.debug("Generated %d daily forecasts from %d samples", len(forecasts), len(normalized))
        return forecasts

    def _build_day(
        self,
        date_key: str,
        samples: List[EnvironmentalSample],
        sun: SunTimes,
        tide: TideInput,
        profile: Optional[SpeciesProfile],
    ) -> DailyForecast:
        sunrise, sunset = sun["sunrise"], sun["sunset"]

        minute_scores: List[MinuteScore] = []
        for sample in samples:
            score = self.scorer.calculate_score(
                sample, sunrise, sunset, self._tide_at(tide, sample["timestamp"]), profile
            )
            minute_scores.append(
                {
                    "timestamp": sample["timestamp"],
                    "time": local_datetime(sample["timestamp"], self.time_zone).isoformat(),
                    "score": score,
                    "temp": sample["temp"],
                    "wind_speed": sample["wind_speed"],
                    "precipitation": sample["precipitation"],
                }
            )

        periods: List[PeriodForecast] = []
        for start in range(0, len(samples), SAMPLES_PER_BLOCK):
            block = samples[start : start + SAMPLES_PER_BLOCK]
            if len(block) < MIN_SAMPLES_PER_BLOCK:
                continue
            merged = average_block(block)
            score = self.scorer.calculate_score(
                merged, sunrise, sunset, self._tide_at(tide, merged["timestamp"]), profile
            )
            periods.append(
                {
                    "start_time": block[0]["timestamp"],
                    "end_time": block[-1]["timestamp"] + SAMPLE_INTERVAL_SECONDS,
                    "score": score,
                    "avg_temp": merged["temp"],
                    "wind_speed": merged["wind_speed"],
                    "precipitation": merged["precipitation"],
                    "pressure": merged["pressure"],
                }
            )

        day_start = local_datetime(samples[0]["timestamp"], self.time_zone)
        return {
            "date": date_key,
            "day_name": day_start.strftime("%A"),
            "sunrise": sunrise,
            "sunset": sunset,
            "minute_scores": minute_scores,
            "periods": periods,
            "best_window": select_best_window(periods),
        }

    @staticmethod
    def _tide_at(tide: TideInput, timestamp: int) -> Optional[TideSnapshot]:
        if isinstance(tide, TideProxy):
            return tide.snapshot_at(timestamp)
        return tide  # type: ignore[return-value]
