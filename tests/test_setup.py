from types import SimpleNamespace

import pytest
import voluptuous as vol

from custom_components.fishing_forecast import (
    ENGINE_CONFIG_SCHEMA,
    async_setup_entry,
    async_unload_entry,
)
from custom_components.fishing_forecast.const import DOMAIN
from custom_components.fishing_forecast.exceptions import UnknownAlgorithmError
from custom_components.fishing_forecast.forecast import FishingForecastEngine
from custom_components.fishing_forecast.score import get_scorer
from custom_components.fishing_forecast.species_scoring import SpeciesScorer


def test_schema_defaults():
    config = ENGINE_CONFIG_SCHEMA({})
    assert config["algorithm"] == "species"
    assert config["max_days"] == 14


@pytest.mark.parametrize(
    "options",
    [{"algorithm": "v2"}, {"max_days": 0}, {"max_days": 15}, {"species": 12}],
)
def test_schema_rejects_bad_options(options):
    with pytest.raises(vol.Invalid):
        ENGINE_CONFIG_SCHEMA(options)


def test_unknown_algorithm_error_lists_available():
    with pytest.raises(UnknownAlgorithmError, match="legacy"):
        get_scorer("bogus")


@pytest.mark.asyncio
async def test_setup_and_unload_entry(hass):
    entry = SimpleNamespace(
        entry_id="abc",
        data={"species": "Coho", "algorithm": "species", "time_zone": "America/Vancouver"},
        options={"max_days": 7},
    )
    assert await async_setup_entry(hass, entry)

    engine = hass.data[DOMAIN]["abc"]
    assert isinstance(engine, FishingForecastEngine)
    assert isinstance(engine.scorer, SpeciesScorer)
    assert engine.max_days == 7
    assert str(engine.time_zone) == "America/Vancouver"
    assert engine.resolve_profile()["id"] == "coho-salmon"

    assert await async_unload_entry(hass, entry)
    assert "abc" not in hass.data[DOMAIN]


@pytest.mark.asyncio
async def test_setup_rejects_invalid_options(hass):
    entry = SimpleNamespace(entry_id="bad", data={"algorithm": "nope"}, options={})
    with pytest.raises(vol.Invalid):
        await async_setup_entry(hass, entry)
    assert "bad" not in hass.data.get(DOMAIN, {})
