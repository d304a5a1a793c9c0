"""Tide snapshot derivation and astronomical tide proxy.

A TideSnapshot either comes from a populated water-level series (observed or
predicted heights from a tide station) or, when no series is available, the
tide factor is estimated from the moon phase (spring/neap cycle).
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .const import TIDE_TYPE_NEAP, TIDE_TYPE_SPRING
from .data_formatter import DataFormatter
from .data_schema import TideSnapshot, WaterLevel
from .helpers.astro import get_moon_phase, get_tide_type

_LOGGER = logging.getLogger(__name__)

# Rough water-level-rate to current-speed factor (knots per m/hr)
CURRENT_SPEED_FACTOR = 2.5
SLACK_RATE_THRESHOLD = 0.05  # m/hr
FLOOD_DIRECTION = 45.0
EBB_DIRECTION = 225.0
RANGE_WINDOW_SECONDS = 12 * 3600

MOON_TIDE_SCORES = {
    TIDE_TYPE_SPRING: 8.0,
    TIDE_TYPE_NEAP: 5.0,
}
MOON_TIDE_SCORE_NORMAL = 6.5


def has_water_level_data(tide: Optional[Dict[str, Any]]) -> bool:
    """Return True only if the snapshot carries a populated water-level series.

    A snapshot object without a series counts as "no tide data" when choosing
    the weight table.
    """
    if not isinstance(tide, dict):
        return False
    levels = tide.get("water_levels")
    return isinstance(levels, (list, tuple)) and len(levels) > 0


def find_tide_extremes(levels: List[WaterLevel]) -> List[Dict[str, Any]]:
    """Locate high/low turning points in a time-ordered water-level series."""
    extremes: List[Dict[str, Any]] = []
    for i in range(1, len(levels) - 1):
        prev_h = levels[i - 1]["height"]
        cur_h = levels[i]["height"]
        next_h = levels[i + 1]["height"]
        if cur_h >= prev_h and cur_h > next_h:
            kind = "high"
        elif cur_h <= prev_h and cur_h < next_h:
            kind = "low"
        else:
            continue
        extremes.append({"timestamp": levels[i]["timestamp"], "height": cur_h, "type": kind})
    return extremes


def level_rate(levels: List[WaterLevel], timestamp: int) -> float:
    """Signed water-level slope (m/hr) over the segment holding ``timestamp``.

    Instants outside the series use the nearest end segment.
    """
    if len(levels) < 2:
        return 0.0
    index = next(
        (i for i, lv in enumerate(levels) if lv["timestamp"] >= timestamp), len(levels) - 1
    )
    index = max(index, 1)
    prev, nxt = levels[index - 1], levels[index]
    hours = (nxt["timestamp"] - prev["timestamp"]) / 3600
    if hours <= 0:
        return 0.0
    return (nxt["height"] - prev["height"]) / hours


def estimate_current(levels: List[WaterLevel], timestamp: int) -> Tuple[float, float, str]:
    """Estimate (speed knots, direction deg, flood|ebb|slack) from the level slope."""
    index = next((i for i, lv in enumerate(levels) if lv["timestamp"] >= timestamp), -1)
    if index <= 0 or index >= len(levels) - 1:
        return 0.0, 0.0, "slack"

    rate = level_rate(levels, timestamp)
    speed = abs(rate) * CURRENT_SPEED_FACTOR
    direction = FLOOD_DIRECTION if rate > 0 else EBB_DIRECTION
    if abs(rate) < SLACK_RATE_THRESHOLD:
        kind = "slack"
    else:
        kind = "flood" if rate > 0 else "ebb"
    return speed, direction, kind


class TideProxy:
    """Build tide snapshots for arbitrary instants from one water-level series."""

    def __init__(
        self,
        water_levels: Optional[List[Dict[str, Any]]] = None,
        water_temperature: Optional[float] = None,
    ) -> None:
        self.water_levels: List[WaterLevel] = DataFormatter.format_water_levels(water_levels or [])
        self.water_temperature = water_temperature
        self._extremes = find_tide_extremes(self.water_levels)
        _LOGGER.debug(
            "Initialized TideProxy with %d water levels and %d turning points",
            len(self.water_levels),
            len(self._extremes),
        )

    @property
    def has_data(self) -> bool:
        return bool(self.water_levels)

    def snapshot_at(self, timestamp: int) -> Optional[TideSnapshot]:
        """Derive a TideSnapshot at ``timestamp``; None without a usable series."""
        if not self.water_levels:
            return None

        levels = self.water_levels
        current = next((lv for lv in levels if lv["timestamp"] >= timestamp), levels[-1])

        next_idx = next(
            (i for i, ex in enumerate(self._extremes) if ex["timestamp"] > timestamp), None
        )
        if next_idx is None or not self._extremes:
            next_tide = prev_tide = None
        else:
            next_tide = self._extremes[next_idx]
            prev_tide = self._extremes[next_idx - 1] if next_idx > 0 else None

        slope = level_rate(levels, timestamp)
        time_to_next: Optional[float]
        if next_tide is not None:
            is_rising = next_tide["type"] == "high"
            time_to_next = (next_tide["timestamp"] - timestamp) / 60
        else:
            # Past the last turning point: no turn is known, not slack water
            is_rising = slope > 0
            time_to_next = None

        if next_tide is not None and prev_tide is not None:
            hours = (next_tide["timestamp"] - prev_tide["timestamp"]) / 3600
            change_rate = abs(next_tide["height"] - prev_tide["height"]) / hours if hours > 0 else 0.0
        else:
            change_rate = abs(slope)

        speed, direction, _kind = estimate_current(levels, timestamp)

        return {
            "current_height": current["height"],
            "tidal_range": self._tidal_range(timestamp),
            "is_rising": is_rising,
            "change_rate": change_rate,
            "time_to_next_tide": time_to_next,
            "current_speed": speed,
            "current_direction": direction,
            "water_temperature": self.water_temperature,
            "water_levels": levels,
        }

    def _tidal_range(self, timestamp: int) -> float:
        """Highest high minus lowest low within 12 hours either side."""
        window = [
            ex for ex in self._extremes
            if abs(ex["timestamp"] - timestamp) <= RANGE_WINDOW_SECONDS
        ]
        highs = [ex["height"] for ex in window if ex["type"] == "high"]
        lows = [ex["height"] for ex in window if ex["type"] == "low"]
        if highs and lows:
            return max(highs) - min(lows)
        heights = [lv["height"] for lv in self.water_levels]
        return max(heights) - min(heights)

    # ----------------------------
    # Astronomical fallback
    # ----------------------------
    @staticmethod
    def moon_tide_score(when: datetime) -> float:
        """Tide factor (0-10) estimated from the spring/neap cycle."""
        tide_type = get_tide_type(get_moon_phase(when))
        return MOON_TIDE_SCORES.get(tide_type, MOON_TIDE_SCORE_NORMAL)
