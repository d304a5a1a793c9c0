import pytest

from custom_components.fishing_forecast.chinook_v2 import (
    MODE_WEIGHTS,
    ChinookV2Scorer,
    depth_advice,
    dynamic_light_score,
    estimate_sun_elevation,
    score_chinook_salmon_v2,
    seasonal_mode,
    trollability,
)
from custom_components.fishing_forecast.score import get_scorer

from .conftest import make_conditions as _conditions, make_sample, ts

SUNRISE = ts(2025, 7, 10, 5)
SUNSET = ts(2025, 7, 10, 21)


@pytest.mark.parametrize(
    "month, mode",
    [(12, "feeder"), (1, "feeder"), (5, "feeder"), (6, "spawner"), (9, "spawner"), (11, "spawner")],
)
def test_seasonal_mode(month, mode):
    assert seasonal_mode(month) == mode


@pytest.mark.parametrize(
    "offset_minutes, score, condition",
    [
        (-20, 0.9, "civil_twilight_dawn"),
        (15, 1.0, "golden_hour_dawn"),
        (45, 0.9, "golden_hour_dawn_late"),
        (75, 0.75, "morning_early"),
        (180, 0.5, "mid_morning"),
        (480, 0.3, "midday"),
        (16 * 60 - 200, 0.5, "late_afternoon"),
        (16 * 60 - 75, 0.75, "afternoon_late"),
        (16 * 60 - 45, 0.9, "golden_hour_dusk_early"),
        (16 * 60 - 15, 1.0, "golden_hour_dusk"),
        (16 * 60 + 20, 0.85, "civil_twilight_dusk"),
        (18 * 60, 0.15, "night"),
        (-120, 0.15, "night"),
    ],
)
def test_dynamic_light_follows_sun_times(offset_minutes, score, condition):
    assert dynamic_light_score(SUNRISE + offset_minutes * 60, SUNRISE, SUNSET) == (score, condition)


def test_estimate_sun_elevation():
    assert estimate_sun_elevation(SUNRISE + 8 * 3600, SUNRISE, SUNSET, 6) == pytest.approx(63.0)
    assert estimate_sun_elevation(SUNRISE + 8 * 3600, SUNRISE, SUNSET, 12) == pytest.approx(17.0)
    assert estimate_sun_elevation(SUNRISE - 1800, SUNRISE, SUNSET, 7) == pytest.approx(-5.0)


def test_depth_advice_bands():
    assert depth_advice(5, 0)["min_depth_ft"] == 40
    high_sun = depth_advice(60, 0)
    assert (high_sun["min_depth_ft"], high_sun["max_depth_ft"], high_sun["is_deep_bite"]) == (120, 180, True)
    overcast = depth_advice(60, 80)
    assert (overcast["min_depth_ft"], overcast["max_depth_ft"], overcast["is_deep_bite"]) == (60, 100, False)


@pytest.mark.parametrize(
    "tidal_range, minutes, current, score, level",
    [
        (4.0, 300, 0.0, 0.2, "untrollable"),
        (4.0, 200, 0.0, 0.35, "heavy"),
        (4.0, 150, 0.0, 0.55, "moderate"),
        (4.0, 100, 0.0, 0.75, "light"),
        (4.0, 100, 3.0, 0.35, "heavy"),
        (4.0, 60, 0.0, 1.0, "none"),
        (3.0, 200, 0.0, 0.8, "light"),
        (1.0, 200, 0.0, 1.0, "none"),
    ],
)
def test_trollability(tidal_range, minutes, current, score, level):
    result = trollability(tidal_range, minutes, current)
    assert result[:2] == (score, level)


@pytest.mark.parametrize("mode", sorted(MODE_WEIGHTS))
def test_mode_weights_are_normalized(mode):
    month = 1 if mode == "feeder" else 7
    sheet = score_chinook_salmon_v2(_conditions(ts(2025, month, 10, 12)), SUNRISE, SUNSET)
    assert sum(f["weight"] for f in sheet.factors.values()) == pytest.approx(1.0)
    assert set(sheet.factors) == set(MODE_WEIGHTS[mode])
    assert sheet.details["seasonal_mode"] == mode


def test_feeder_mode_weights_light_more_than_spawner():
    feeder = score_chinook_salmon_v2(_conditions(ts(2025, 1, 10, 12)), SUNRISE, SUNSET)
    spawner = score_chinook_salmon_v2(_conditions(ts(2025, 7, 10, 12)), SUNRISE, SUNSET)
    assert feeder.factors["lightTime"]["weight"] > spawner.factors["lightTime"]["weight"]
    assert feeder.factors["tidalCurrent"]["weight"] < spawner.factors["tidalCurrent"]["weight"]


def test_sea_state_merges_wind_and_waves():
    def sea(**overrides):
        sheet = score_chinook_salmon_v2(_conditions(ts(2025, 7, 10, 12), **overrides), SUNRISE, SUNSET)
        return sheet.factors["seaState"]["score"], sheet.is_safe

    assert sea() == (0.7, True)
    assert sea(wind_speed=20.0, wave_height=0.5) == (1.0, True)
    assert sea(wind_speed=20.0, wave_height=1.2) == (0.5, True)
    assert sea(wind_speed=20.0, wind_gusts=70.0) == (0.0, False)
    assert sea(wind_speed=20.0, wave_height=2.5) == (0.0, False)


def test_tide_drives_current_and_water_temperature():
    tide = {
        "current_speed": 1.0,
        "tidal_range": 2.0,
        "is_rising": True,
        "time_to_next_tide": 60,
        "water_temperature": 11.0,
    }
    sheet = score_chinook_salmon_v2(_conditions(ts(2025, 7, 10, 12), tide), SUNRISE, SUNSET)
    assert sheet.factors["tidalCurrent"]["score"] == 1.0
    assert sheet.factors["trollability"]["score"] == 1.0
    assert sheet.factors["waterTemp"]["score"] == 1.0

    slack = dict(tide, current_speed=0.1, is_rising=True)
    sheet = score_chinook_salmon_v2(_conditions(ts(2025, 7, 10, 12), slack), SUNRISE, SUNSET)
    assert sheet.factors["tidalCurrent"]["score"] == pytest.approx(0.6)


def test_hazards_flag_without_capping():
    tide = {"current_speed": 5.0, "tidal_range": 2.0, "water_temperature": 5.0}
    sheet = score_chinook_salmon_v2(
        _conditions(ts(2025, 7, 10, 12), tide, lightning_potential=2000.0), SUNRISE, SUNSET
    )
    assert sheet.is_safe is False
    assert any("lightning" in w for w in sheet.safety_warnings)
    assert any("Current speed" in w for w in sheet.safety_warnings)
    assert any("Cold water" in w for w in sheet.safety_warnings)
    assert sheet.total > 0


def test_scorer_uses_v2_for_chinook_with_sun_times(utc, loader):
    scorer = get_scorer("species_v2", time_zone=utc)
    assert isinstance(scorer, ChinookV2Scorer)

    result = scorer.calculate_score(
        make_sample(SUNRISE + 900), SUNRISE, SUNSET, profile=loader.get_species("chinook-salmon")
    )
    # light 1.0, no tide (current 0.5, trollability 0.8), pressure 0.5,
    # calm sea 0.7, dry 0.9, unknown water temperature 0.5
    expected = (0.18 * 1.0 + 0.18 * 0.5 + 0.17 * 0.8 + 0.10 * 0.5 + 0.05 * 0.7 + 0.03 * 0.9 + 0.02 * 0.5) / 0.73
    assert result["total"] == pytest.approx(round(expected * 10, 2))
    assert result["algorithm"] == "species_v2"
    assert result["species"] == "chinook-salmon"
    assert result["seasonal_mode"] == "spawner"
    assert result["light_condition"] == "golden_hour_dawn"
    assert result["strategy_advice"][0].startswith("SPAWNER MODE")
    assert result["is_safe"] is True


def test_scorer_without_sun_times_uses_first_chinook_model(utc, loader):
    scorer = ChinookV2Scorer(time_zone=utc)
    result = scorer.calculate_score(
        make_sample(SUNRISE + 900), None, None, profile=loader.get_species("chinook-salmon")
    )
    assert result["algorithm"] == "species"
    assert "currentFlow" in result["factors"]
    assert "seasonal_mode" not in result


def test_scorer_other_species_and_fallback(utc, loader):
    scorer = ChinookV2Scorer(time_zone=utc)
    coho = scorer.calculate_score(
        make_sample(SUNRISE + 900), SUNRISE, SUNSET, profile=loader.get_species("coho-salmon")
    )
    assert coho["algorithm"] == "species"
    assert coho["species"] == "coho-salmon"

    general = scorer.calculate_score(make_sample(SUNRISE + 900), SUNRISE, SUNSET)
    assert general["algorithm"] == "enhanced"
