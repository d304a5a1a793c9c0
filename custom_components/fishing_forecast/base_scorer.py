"""Base scorer abstract class for Fishing Forecast.

Every scoring strategy (legacy, enhanced, species) inherits from BaseScorer.
The base class normalizes inputs, finalizes the FishingScore (clamped and
rounded total, strategy name) and guarantees a numeric result even when a
strategy misbehaves, so downstream aggregation never sees an exception.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional
import logging
import math

from homeassistant.util import dt as dt_util

from .const import NEUTRAL_SCORE
from .data_formatter import DataFormatter
from .data_schema import EnvironmentalSample, FishingScore, SpeciesProfile, TideSnapshot

_LOGGER = logging.getLogger(__name__)


class BaseScorer(ABC):
    """Abstract base class for fishing condition scoring strategies.

    Concrete scorers implement ``_calculate_score`` returning a partial
    FishingScore (at least ``total`` and ``breakdown``). ``calculate_score``
    wraps it to normalize inputs, clamp the total and log details.
    """

    name: str = ""
    version: int = 0

    def __init__(self, time_zone: Optional[Any] = None) -> None:
        """Initialize base scorer.

        Args:
            time_zone: tzinfo used for local hours/dates (defaults to the
                Home Assistant default time zone)
        """
        self.time_zone = time_zone or dt_util.DEFAULT_TIME_ZONE

        _LOGGER.debug(
            "Initialized %s (%s v%d) in time zone %s",
            self.__class__.__name__,
            self.name,
            self.version,
            self.time_zone,
        )

    # ----------------------------
    # Abstract methods to override
    # ----------------------------
    @abstractmethod
    def _calculate_score(
        self,
        sample: EnvironmentalSample,
        sunrise: Optional[float],
        sunset: Optional[float],
        tide: Optional[TideSnapshot],
        profile: Optional[SpeciesProfile],
    ) -> Dict[str, Any]:
        """Compute the score for one normalized sample."""
        raise NotImplementedError

    # ----------------------------
    # Public API
    # ----------------------------
    def calculate_score(
        self,
        sample: Optional[Dict[str, Any]],
        sunrise: Optional[float],
        sunset: Optional[float],
        tide: Optional[Dict[str, Any]] = None,
        profile: Optional[SpeciesProfile] = None,
    ) -> FishingScore:
        """Score one sample; never raises on bad numeric input."""
        normalized = DataFormatter.format_sample(sample)
        tide_snapshot = DataFormatter.format_tide_snapshot(tide)

        try:
            result = self._calculate_score(normalized, sunrise, sunset, tide_snapshot, profile) or {}
        except Exception as exc:
            _LOGGER.exception("Unhandled error while calculating %s score: %s", self.name, exc)
            result = {"total": NEUTRAL_SCORE, "breakdown": {}}

        result["total"] = self._normalize_score(result.get("total"))
        result.setdefault("species", profile.get("id") if profile else None)
        result.setdefault("algorithm", self.name)
        formatted = DataFormatter.format_score_result(result)

        self._log_scoring_details(formatted["total"], formatted["breakdown"])
        return formatted  # type: ignore[return-value]

    # ----------------------------
    # Helpers
    # ----------------------------
    def local_time(self, timestamp: float) -> datetime:
        """Return the sample time as an aware datetime in the scorer's time zone."""
        return dt_util.utc_from_timestamp(timestamp).astimezone(self.time_zone)

    @staticmethod
    def _normalize_score(score: Any, high: float = 10.0) -> float:
        """Coerce a value into a finite 0..high float."""
        try:
            s = float(score)
        except (TypeError, ValueError):
            s = NEUTRAL_SCORE
        if math.isnan(s) or math.isinf(s):
            s = NEUTRAL_SCORE
        return max(0.0, min(high, s))

    def _weighted_average(self, scores: Dict[str, float], weights: Dict[str, float]) -> float:
        """Compute a weighted average of component scores.

        Zero weights are skipped; a missing component counts as neutral.
        """
        total_weight = 0.0
        weighted_sum = 0.0
        for key, w in weights.items():
            if w <= 0.0:
                continue
            total_weight += w
            weighted_sum += self._normalize_score(scores.get(key, NEUTRAL_SCORE), high=math.inf) * w

        if total_weight <= 0.0:
            return NEUTRAL_SCORE

        return weighted_sum / total_weight

    def _log_scoring_details(self, score: float, component_scores: Dict[str, float]) -> None:
        """Log detailed scoring information for debugging."""
        if not _LOGGER.isEnabledFor(logging.DEBUG):
            return
        _LOGGER.debug("%s score: %.2f/10", self.name, score)
        for component, component_score in component_scores.items():
            _LOGGER.debug("  %s: %.2f/10", component, component_score)
