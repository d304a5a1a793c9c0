import pytest

from custom_components.fishing_forecast.chinook_v2 import ChinookV2Scorer
from custom_components.fishing_forecast.const import WEIGHTS_WITH_TIDE
from custom_components.fishing_forecast.exceptions import UnknownAlgorithmError
from custom_components.fishing_forecast.factors import calculate_temperature_score
from custom_components.fishing_forecast.score import (
    EnhancedScorer,
    LegacyScorer,
    available_scorers,
    get_scorer,
)
from custom_components.fishing_forecast.species_scoring import SpeciesScorer

from .conftest import make_sample, ts

SUNRISE = ts(2025, 7, 10, 5)
SUNSET = ts(2025, 7, 10, 21)


def _tide(**overrides):
    tide = {
        "current_height": 2.0,
        "tidal_range": 2.5,
        "is_rising": True,
        "change_rate": 0.6,
        "time_to_next_tide": 120,
        "current_speed": 1.0,
        "current_direction": 90,
        "water_temperature": 12.0,
        "water_levels": [{"timestamp": ts(2025, 7, 10, 6), "height": 2.0}],
    }
    tide.update(overrides)
    return tide


def test_registry_lists_all_strategies():
    assert available_scorers() == {"legacy": 1, "enhanced": 2, "species": 3, "species_v2": 4}


def test_get_scorer_unknown_name(utc):
    with pytest.raises(UnknownAlgorithmError) as err:
        get_scorer("v9", time_zone=utc)
    assert "v9" in str(err.value)
    assert isinstance(err.value, ValueError)


def test_get_scorer_returns_instances(utc):
    assert isinstance(get_scorer("legacy", time_zone=utc), LegacyScorer)
    assert isinstance(get_scorer("enhanced", time_zone=utc), EnhancedScorer)
    assert isinstance(get_scorer("species", time_zone=utc), SpeciesScorer)
    assert isinstance(get_scorer("species_v2", time_zone=utc), ChinookV2Scorer)


def test_legacy_score_has_six_factors(utc):
    scorer = LegacyScorer(time_zone=utc)
    result = scorer.calculate_score(make_sample(ts(2025, 7, 10, 6)), SUNRISE, SUNSET)
    assert len(result["breakdown"]) == 6
    assert result["algorithm"] == "legacy"
    assert 0 <= result["total"] <= 10


def test_enhanced_without_tide_uses_tide_unaware_table(utc):
    scorer = EnhancedScorer(time_zone=utc)
    sample = make_sample(ts(2025, 7, 10, 12))
    without = scorer.calculate_score(sample, SUNRISE, SUNSET)
    empty_series = scorer.calculate_score(sample, SUNRISE, SUNSET, _tide(water_levels=[]))
    assert len(without["breakdown"]) == 16
    # A snapshot without a water-level series is treated as no tide data
    assert without["total"] == empty_series["total"]
    assert without["breakdown"]["current_direction"] == 5.0


def test_enhanced_with_tide_scores_every_factor(utc):
    scorer = EnhancedScorer(time_zone=utc)
    result = scorer.calculate_score(make_sample(ts(2025, 7, 10, 12)), SUNRISE, SUNSET, _tide())
    assert set(result["breakdown"]) == set(WEIGHTS_WITH_TIDE)
    assert result["breakdown"]["water_temperature"] == 10.0
    assert 0 <= result["total"] <= 10


def test_enhanced_profile_adjustments(utc, loader):
    scorer = EnhancedScorer(time_zone=utc)
    profile = loader.get_species("chinook-salmon")
    sample = make_sample(ts(2025, 7, 10, 5, 15))
    plain = scorer.calculate_score(sample, SUNRISE, SUNSET)
    adjusted = scorer.calculate_score(sample, SUNRISE, SUNSET, profile=profile)

    assert adjusted["species"] == "chinook-salmon"
    assert adjusted["breakdown"]["species"] == pytest.approx(5.0 * 1.3)
    # Dawn multiplier on a perfect time-of-day score, capped at 12
    assert adjusted["breakdown"]["time_of_day"] == pytest.approx(12.0)
    assert plain["breakdown"]["species"] == 5.0


def test_scoring_is_deterministic(utc, loader):
    scorer = SpeciesScorer(time_zone=utc)
    profile = loader.get_species("coho-salmon")
    sample = make_sample(ts(2025, 9, 2, 7))
    first = scorer.calculate_score(sample, SUNRISE, SUNSET, _tide(), profile)
    second = scorer.calculate_score(sample, SUNRISE, SUNSET, _tide(), profile)
    assert first == second


@pytest.mark.parametrize("bad", [None, {}, {"temp": "warm", "pressure": float("nan")}])
def test_malformed_samples_still_score(utc, bad):
    result = EnhancedScorer(time_zone=utc).calculate_score(bad, None, None)
    assert 0 <= result["total"] <= 10


def test_strategy_failure_returns_neutral(utc, caplog):
    class Broken(EnhancedScorer):
        def _calculate_score(self, *args):
            raise ZeroDivisionError("boom")

    result = Broken(time_zone=utc).calculate_score(make_sample(0), None, None)
    assert result["total"] == 5.0
    assert "boom" in caplog.text


@pytest.mark.parametrize(
    "temp, multiplier",
    [
        (12, 1.2),  # inside the optimal band
        (18, 1.0),  # tolerable but not optimal
        (25, 0.6),  # outside both bands
        (30, 0.6),
    ],
)
def test_enhanced_profile_temperature_bands(utc, loader, temp, multiplier):
    scorer = EnhancedScorer(time_zone=utc)
    profile = loader.get_species("chinook-salmon")
    sample = make_sample(ts(2025, 7, 10, 12), temp=temp)
    plain = scorer.calculate_score(sample, SUNRISE, SUNSET)
    adjusted = scorer.calculate_score(sample, SUNRISE, SUNSET, profile=profile)

    expected = min(12.0, calculate_temperature_score(temp) * multiplier)
    assert adjusted["breakdown"]["temperature"] == pytest.approx(round(expected, 2))
    assert plain["breakdown"]["temperature"] == pytest.approx(round(calculate_temperature_score(temp), 2))
