"""Exceptions raised by the Fishing Forecast engine.

Scoring itself never raises on bad numeric input; only configuration
problems surface as exceptions, and they do so at setup time.
"""


class FishingForecastError(Exception):
    """Base class for Fishing Forecast errors."""


class UnknownAlgorithmError(FishingForecastError, ValueError):
    """Raised when a scoring strategy name is not registered."""

    def __init__(self, name: str, available) -> None:
        self.name = name
        self.available = list(available)
        super().__init__(
            f"Unknown scoring algorithm '{name}'. Available: {', '.join(self.available)}"
        )


class SpeciesCatalogError(FishingForecastError, RuntimeError):
    """Raised when species_profiles.json is missing or structurally invalid."""
