import json

import pytest

from custom_components.fishing_forecast.const import SPECIES_IDS
from custom_components.fishing_forecast.exceptions import SpeciesCatalogError
from custom_components.fishing_forecast.species_loader import (
    SpeciesLoader,
    normalize_species_key,
)


def test_catalog_contains_every_species(loader):
    assert loader.species_ids() == SPECIES_IDS
    assert loader.version == "1.0.0"


def test_normalize_species_key():
    assert normalize_species_key("  Spot   Prawn ") == "spot-prawn"
    assert normalize_species_key("Chinook_Salmon!") == "chinooksalmon"


@pytest.mark.parametrize(
    "query,expected",
    [
        ("chinook-salmon", "chinook-salmon"),
        ("Chinook Salmon", "chinook-salmon"),
        ("spotprawns", "spot-prawn"),
        ("Spot Prawns", "spot-prawn"),
        ("king salmon", "chinook-salmon"),
        ("Lingcod fishing", "lingcod"),
        ("halibu", "halibut"),
        ("rockfi", "rockfish"),
    ],
)
def test_resolve(loader, query, expected):
    profile = loader.resolve(query)
    assert profile is not None
    assert profile["id"] == expected


@pytest.mark.parametrize("query", [None, "", "   ", "tuna", "marlin"])
def test_resolve_miss_returns_none(loader, query):
    assert loader.resolve(query) is None


def test_resolve_is_pure(loader):
    assert loader.resolve("Coho") == loader.resolve("Coho")


def test_returned_profiles_are_copies(loader):
    profile = loader.get_species("crab")
    profile["name"] = "changed"
    assert loader.get_species("crab")["name"] == "Dungeness Crab"


def test_bad_json_raises(tmp_path):
    path = tmp_path / "species.json"
    path.write_text("{not json")
    with pytest.raises(SpeciesCatalogError):
        SpeciesLoader(path=str(path)).load_profiles()


def test_missing_fields_raise(tmp_path):
    path = tmp_path / "species.json"
    path.write_text(json.dumps({"species": {"cod": {"name": "Cod"}}}))
    with pytest.raises(SpeciesCatalogError, match="missing fields"):
        SpeciesLoader(path=str(path)).load_profiles()


def test_missing_file_raises(tmp_path):
    with pytest.raises(SpeciesCatalogError):
        SpeciesLoader(path=str(tmp_path / "nope.json")).load_profiles()


@pytest.mark.asyncio
async def test_async_load_uses_executor(hass):
    species_loader = SpeciesLoader(hass)
    await species_loader.async_load_profiles()
    assert "halibut" in species_loader.profiles
