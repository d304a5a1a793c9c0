from datetime import datetime, timezone

import pytest

from custom_components.fishing_forecast.data_formatter import DataFormatter
from custom_components.fishing_forecast.factors import local_datetime
from custom_components.fishing_forecast.species_loader import SpeciesLoader
from custom_components.fishing_forecast.species_scoring import SpeciesConditions


def ts(year, month, day, hour=0, minute=0):
    """Epoch seconds for a UTC wall-clock time."""
    return int(datetime(year, month, day, hour, minute, tzinfo=timezone.utc).timestamp())


def make_sample(timestamp, **overrides):
    sample = {
        "timestamp": timestamp,
        "temp": 12.0,
        "humidity": 60.0,
        "dew_point": 8.0,
        "pressure": 1017.0,
        "precipitation": 0.0,
        "cloud_cover": 40.0,
        "wind_speed": 8.0,
        "wind_direction": 90.0,
        "wind_gusts": 10.0,
        "visibility": 20000.0,
        "sunshine_duration": 600.0,
        "lightning_potential": 0.0,
        "cape": 0.0,
    }
    sample.update(overrides)
    return sample


def make_conditions(timestamp, tide=None, **overrides):
    """SpeciesConditions for a UTC sample, normalized the way the scorers do it."""
    sample = DataFormatter.format_sample(make_sample(timestamp, **overrides))
    return SpeciesConditions(
        sample, DataFormatter.format_tide_snapshot(tide), local_datetime(timestamp, timezone.utc)
    )


class DummyHass:
    def __init__(self):
        self.data = {}

    async def async_add_executor_job(self, func, *args):
        return func(*args)


@pytest.fixture
def utc():
    return timezone.utc


@pytest.fixture
def loader():
    species_loader = SpeciesLoader()
    species_loader.load_profiles()
    return species_loader


@pytest.fixture
def hass():
    return DummyHass()
