import pytest

from custom_components.fishing_forecast.species_scoring import (
    SPECIES_ALGORITHMS,
    SpeciesScorer,
    route_species,
)

from .conftest import make_conditions as _conditions, make_sample, ts

SUNRISE = ts(2025, 7, 10, 5)
SUNSET = ts(2025, 7, 10, 21)


@pytest.mark.parametrize("species", sorted(SPECIES_ALGORITHMS))
def test_species_weights_sum_to_one(species):
    sheet = SPECIES_ALGORITHMS[species](_conditions(ts(2025, 7, 10, 12)))
    assert sum(f["weight"] for f in sheet.factors.values()) == pytest.approx(1.0, abs=0.001)
    assert 6 <= len(sheet.factors) <= 10
    for factor in sheet.factors.values():
        assert 0 <= factor["score"] <= 1


@pytest.mark.parametrize("species", sorted(SPECIES_ALGORITHMS))
def test_species_totals_in_range_with_extreme_weather(species):
    tide = {"current_speed": 9.0, "tidal_range": 6.0}
    conditions = _conditions(ts(2025, 1, 3, 2), tide, wind_speed=120.0, precipitation=40.0, temp=-5.0)
    total = SPECIES_ALGORITHMS[species](conditions).total
    assert 0 <= total <= 10


def test_chinook_strong_current_is_unsafe_but_still_scored(utc, loader):
    scorer = SpeciesScorer(time_zone=utc)
    tide = {"current_speed": 5.0, "tidal_range": 2.0, "water_temperature": 12.0}
    result = scorer.calculate_score(
        make_sample(ts(2025, 7, 10, 6)), SUNRISE, SUNSET, tide, loader.get_species("chinook-salmon")
    )
    assert result["factors"]["currentFlow"]["score"] == 0
    assert result["breakdown"]["currentFlow"] == 0
    assert result["is_safe"] is False
    assert any("Current speed >4 knots" in w for w in result["safety_warnings"])
    assert result["total"] > 0
    assert result["algorithm"] == "species"


def test_pink_salmon_closed_in_even_years():
    even = SPECIES_ALGORITHMS["pink-salmon"](_conditions(ts(2024, 8, 15, 12)))
    odd = SPECIES_ALGORITHMS["pink-salmon"](_conditions(ts(2025, 8, 15, 12)))
    assert even.factors["seasonality"]["score"] == 0
    assert odd.factors["seasonality"]["score"] == 1.0


@pytest.mark.parametrize(
    "species,month,expected",
    [
        ("lingcod", 12, 0.0),
        ("lingcod", 6, 1.0),
        ("halibut", 1, 0.0),
        ("halibut", 6, 1.0),
        ("spot-prawn", 5, 1.0),
        ("spot-prawn", 8, 0.0),
    ],
)
def test_seasonal_closures(species, month, expected):
    sheet = SPECIES_ALGORITHMS[species](_conditions(ts(2025, month, 10, 12)))
    assert sheet.factors["seasonality"]["score"] == expected


def test_wave_height_falls_back_to_wind_estimate():
    calm = _conditions(ts(2025, 7, 10, 12), wind_speed=36.0)
    assert calm.wave_height == pytest.approx(1.0)
    measured = _conditions(ts(2025, 7, 10, 12), wind_speed=36.0, wave_height=2.4)
    assert measured.wave_height == 2.4


def test_spot_prawn_wind_cutoff():
    sheet = SPECIES_ALGORITHMS["spot-prawn"](_conditions(ts(2025, 5, 10, 12), wind_speed=35.0))
    assert sheet.factors["wind"]["score"] == 0
    assert not sheet.is_safe


def test_sockeye_reports_no_safety_flag(utc, loader):
    result = SpeciesScorer(time_zone=utc).calculate_score(
        make_sample(ts(2025, 7, 10, 6)), SUNRISE, SUNSET, None, loader.get_species("sockeye-salmon")
    )
    assert "is_safe" not in result
    assert result["factors"]["currentFlow"]["score"] == 0.5


def test_route_species():
    assert route_species("Spot Prawn") == "spot-prawn"
    assert route_species("spotprawns") == "spot-prawn"
    assert route_species("tuna") is None
    assert route_species(None) is None


def test_falls_back_to_enhanced_without_profile(utc):
    result = SpeciesScorer(time_zone=utc).calculate_score(
        make_sample(ts(2025, 7, 10, 12)), SUNRISE, SUNSET
    )
    assert result["algorithm"] == "enhanced"
    assert len(result["breakdown"]) == 16


@pytest.mark.parametrize(
    "pressure, expected",
    [(1005.0, 1.0), (1010.0, 0.8), (1013.0, 0.8), (1013.5, 0.5), (1020.0, 0.5), (1020.5, 0.0)],
)
def test_chinook_pressure_bands_have_no_gap(pressure, expected):
    sheet = SPECIES_ALGORITHMS["chinook-salmon"](_conditions(ts(2025, 7, 10, 12), pressure=pressure))
    assert sheet.factors["pressure"]["score"] == expected


def test_spot_prawn_darkness_shares_the_season_weight():
    sheet = SPECIES_ALGORITHMS["spot-prawn"](_conditions(ts(2025, 5, 10, 23)))
    assert sheet.factors["seasonality"]["weight"] + sheet.factors["darkness"]["weight"] == pytest.approx(0.5)
    assert 0 <= sheet.factors["darkness"]["score"] <= 1
