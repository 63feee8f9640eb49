from __future__ import annotations

import random
from datetime import UTC, date, datetime, timedelta

import pytest

from agrisync.errors import MalformedInputError
from agrisync.knowledge_base import KnowledgeBase
from agrisync.models.enums import ClimateZoneEnum, SeasonEnum, WeatherIconEnum
from agrisync.schemas.region import Region
from agrisync.services.weather_service import (
    ADVICE_DROUGHT,
    ADVICE_FAVORABLE,
    ADVICE_FROST,
    ADVICE_FUNGAL,
    ADVICE_HEAT,
    ADVICE_HEAVY_RAIN,
    WeatherService,
    farming_advice,
    icon_for_condition,
    season_for_month,
)

NASHIK = Region(state="Maharashtra", district="Nashik")


@pytest.mark.parametrize(
    ("month", "season"),
    [
        (12, SeasonEnum.winter),
        (1, SeasonEnum.winter),
        (2, SeasonEnum.winter),
        (3, SeasonEnum.summer),
        (5, SeasonEnum.summer),
        (6, SeasonEnum.monsoon),
        (9, SeasonEnum.monsoon),
        (10, SeasonEnum.autumn),
        (11, SeasonEnum.autumn),
    ],
)
def test_season_for_month(month: int, season: SeasonEnum) -> None:
    assert season_for_month(month) == season


@pytest.mark.parametrize(
    ("state", "zone"),
    [
        ("Punjab", ClimateZoneEnum.north),
        ("Uttarakhand", ClimateZoneEnum.north),
        ("Kerala", ClimateZoneEnum.south),
        ("Maharashtra", ClimateZoneEnum.west),
        ("West Bengal", ClimateZoneEnum.east),
        ("Madhya Pradesh", ClimateZoneEnum.central),
        (None, ClimateZoneEnum.central),
    ],
)
def test_zone_for_state(weather_service: WeatherService, state: str | None, zone: ClimateZoneEnum) -> None:
    assert weather_service.zone_for_state(state) == zone


def test_samples_stay_within_pattern(knowledge_base: KnowledgeBase, weather_service: WeatherService) -> None:
    pattern = weather_service.pattern_for(ClimateZoneEnum.central, SeasonEnum.summer)
    low_mm, high_mm = knowledge_base.weather.rainfall_buckets[pattern.rainfall]

    for _ in range(1000):
        snapshot = weather_service.sample(ClimateZoneEnum.central, SeasonEnum.summer)
        assert pattern.temperature_range[0] <= snapshot.temperature_c <= pattern.temperature_range[1]
        assert pattern.humidity_range[0] <= snapshot.humidity_percent <= pattern.humidity_range[1]
        assert low_mm <= snapshot.rainfall_mm <= high_mm
        assert snapshot.temperature_c - 2 <= snapshot.feels_like_c <= snapshot.temperature_c + 3
        assert snapshot.condition in pattern.conditions


def test_fixed_seed_is_reproducible(knowledge_base: KnowledgeBase) -> None:
    clock = lambda: datetime(2024, 7, 1, tzinfo=UTC)  # noqa: E731
    first = WeatherService(knowledge_base, rng=random.Random(7), clock=clock)
    second = WeatherService(knowledge_base, rng=random.Random(7), clock=clock)

    assert first.get_current_weather(NASHIK) == second.get_current_weather(NASHIK)
    assert first.get_forecast(NASHIK, days=3) == second.get_forecast(NASHIK, days=3)


def test_current_weather_uses_region_zone_and_clock_season(weather_service: WeatherService) -> None:
    snapshot = weather_service.get_current_weather(NASHIK)

    assert snapshot.zone == ClimateZoneEnum.west
    assert snapshot.season == SeasonEnum.winter
    assert snapshot.icon == icon_for_condition(snapshot.condition)


def test_forecast_days(weather_service: WeatherService) -> None:
    forecast = weather_service.get_forecast(NASHIK)

    assert len(forecast) == 7
    assert forecast[0].date == date(2024, 1, 22)
    assert [day.date for day in forecast] == [date(2024, 1, 22) + timedelta(days=i) for i in range(7)]
    assert forecast[0].day == "Mon"


@pytest.mark.parametrize("days", [0, -3])
def test_forecast_rejects_non_positive_days(weather_service: WeatherService, days: int) -> None:
    with pytest.raises(MalformedInputError):
        weather_service.get_forecast(NASHIK, days=days)


@pytest.mark.parametrize(
    ("condition", "icon"),
    [
        ("Light Rain", WeatherIconEnum.rainy),
        ("Partly Cloudy", WeatherIconEnum.cloudy),
        ("Thunderstorm", WeatherIconEnum.thunderstorm),
        ("Foggy", WeatherIconEnum.cloudy),
        ("Sunny", WeatherIconEnum.sunny),
        ("light rain", WeatherIconEnum.sunny),
    ],
)
def test_icon_for_condition(condition: str, icon: WeatherIconEnum) -> None:
    assert icon_for_condition(condition) == icon


@pytest.mark.parametrize(
    ("temperature", "humidity", "rainfall", "advice"),
    [
        (20, 50, 60, ADVICE_HEAVY_RAIN),
        (10, 90, 60, ADVICE_HEAVY_RAIN),
        (40, 90, 0, ADVICE_HEAT),
        (10, 90, 10, ADVICE_FROST),
        (25, 85, 10, ADVICE_FUNGAL),
        (33, 50, 2, ADVICE_DROUGHT),
        (25, 50, 10, ADVICE_FAVORABLE),
    ],
)
def test_farming_advice_first_rule_wins(temperature: float, humidity: float, rainfall: float, advice: str) -> None:
    assert farming_advice(temperature, humidity, rainfall) == advice
