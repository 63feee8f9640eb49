"""Offline weather synthesizer. Plausible weather from climate zone and season.

Values are sampled uniformly from the (zone, season) pattern table, so every
sample stays within the declared ranges. Randomness comes from an injected
``random.Random`` so callers can pin a seed.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta

from agrisync.config import get_settings
from agrisync.errors import MalformedInputError
from agrisync.knowledge_base import KnowledgeBase
from agrisync.models.enums import ClimateZoneEnum, SeasonEnum, WeatherIconEnum
from agrisync.models.knowledge import WeatherPattern
from agrisync.schemas.region import Region
from agrisync.schemas.weather import ForecastDay, WeatherSnapshot

# Substring -> icon, first match wins (case-sensitive on the condition label).
_ICON_RULES: tuple[tuple[str, WeatherIconEnum], ...] = (
	("Rain", WeatherIconEnum.rainy),
	("Cloud", WeatherIconEnum.cloudy),
	("Thunder", WeatherIconEnum.thunderstorm),
	("Fog", WeatherIconEnum.cloudy),
)

_FEELS_LIKE_OFFSET = (-2, 3)

ADVICE_HEAVY_RAIN = "Heavy rainfall expected. Ensure proper drainage in fields. Delay fertilizer application."
ADVICE_HEAT = "Very hot weather. Increase irrigation frequency. Provide shade for sensitive crops."
ADVICE_FROST = "Cool weather. Protect crops from frost. Good time for winter crop sowing."
ADVICE_FUNGAL = "High humidity. Monitor for fungal diseases. Ensure good air circulation."
ADVICE_DROUGHT = "Dry and hot conditions. Ensure adequate irrigation. Mulch to retain moisture."
ADVICE_FAVORABLE = "Weather conditions are favorable for farming activities."


def season_for_month(month: int) -> SeasonEnum:
	if month == 12 or month <= 2:
		return SeasonEnum.winter
	if 3 <= month <= 5:
		return SeasonEnum.summer
	if 6 <= month <= 9:
		return SeasonEnum.monsoon
	return SeasonEnum.autumn


def icon_for_condition(condition: str) -> WeatherIconEnum:
	for token, icon in _ICON_RULES:
		if token in condition:
			return icon
	return WeatherIconEnum.sunny


def farming_advice(temperature_c: float, humidity_percent: float, rainfall_mm: float) -> str:
	"""Ordered threshold rules; only the first match is returned."""
	if rainfall_mm > 50:
		return ADVICE_HEAVY_RAIN
	if temperature_c > 38:
		return ADVICE_HEAT
	if temperature_c < 15:
		return ADVICE_FROST
	if humidity_percent > 80:
		return ADVICE_FUNGAL
	if rainfall_mm < 5 and temperature_c > 30:
		return ADVICE_DROUGHT
	return ADVICE_FAVORABLE


def default_rng() -> random.Random:
	return random.Random(get_settings().weather_seed)


class WeatherService:
	def __init__(
		self,
		knowledge_base: KnowledgeBase,
		rng: random.Random | None = None,
		clock: Callable[[], datetime] | None = None,
	):
		self.knowledge_base = knowledge_base
		self.rng = rng or default_rng()
		self.clock = clock or (lambda: datetime.now(UTC))

	def zone_for_state(self, state: str | None) -> ClimateZoneEnum:
		state_upper = (state or "").upper()
		for zone, keywords in self.knowledge_base.weather.zone_keywords.items():
			if any(keyword in state_upper for keyword in keywords):
				return zone
		return ClimateZoneEnum.central

	def current_season(self) -> SeasonEnum:
		return season_for_month(self.clock().month)

	def pattern_for(self, zone: ClimateZoneEnum, season: SeasonEnum) -> WeatherPattern:
		return self.knowledge_base.weather.patterns[zone][season]

	def sample(self, zone: ClimateZoneEnum, season: SeasonEnum) -> WeatherSnapshot:
		pattern = self.pattern_for(zone, season)
		temperature = self.rng.randint(*pattern.temperature_range)
		feels_like = temperature + self.rng.randint(*_FEELS_LIKE_OFFSET)
		rainfall = self.rng.randint(*self.knowledge_base.weather.rainfall_buckets[pattern.rainfall])
		humidity = self.rng.randint(*pattern.humidity_range)
		condition = self.rng.choice(pattern.conditions)

		return WeatherSnapshot(
			temperature_c=temperature,
			feels_like_c=feels_like,
			condition=condition,
			humidity_percent=humidity,
			rainfall_mm=rainfall,
			icon=icon_for_condition(condition),
			season=season,
			zone=zone,
			last_updated=self.clock(),
		)

	def get_current_weather(self, region: Region | None) -> WeatherSnapshot:
		zone = self.zone_for_state(region.state if region else None)
		return self.sample(zone, self.current_season())

	def get_forecast(self, region: Region | None, days: int = 7) -> list[ForecastDay]:
		if days < 1:
			raise MalformedInputError(f"days must be >= 1, got {days}")

		zone = self.zone_for_state(region.state if region else None)
		now = self.clock()
		pattern = self.pattern_for(zone, season_for_month(now.month))
		rainfall_range = self.knowledge_base.weather.rainfall_buckets[pattern.rainfall]
		start: date = now.date()

		forecast: list[ForecastDay] = []
		for offset in range(days):
			day = start + timedelta(days=offset)
			temperature = self.rng.randint(*pattern.temperature_range)
			condition = self.rng.choice(pattern.conditions)
			rainfall = self.rng.randint(*rainfall_range)
			humidity = self.rng.randint(*pattern.humidity_range)
			forecast.append(
				ForecastDay(
					date=day,
					day=day.strftime("%a"),
					temperature_c=temperature,
					condition=condition,
					humidity_percent=humidity,
					rainfall_mm=rainfall,
					icon=icon_for_condition(condition),
				)
			)
		return forecast

	def get_farming_advice(self, snapshot: WeatherSnapshot) -> str:
		return farming_advice(snapshot.temperature_c, snapshot.humidity_percent, snapshot.rainfall_mm)
