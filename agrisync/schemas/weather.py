"""Pydantic schemas for synthesized weather."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from agrisync.models.enums import ClimateZoneEnum, SeasonEnum, WeatherIconEnum
from agrisync.schemas.region import Region


class WeatherSnapshot(BaseModel):
	temperature_c: float
	feels_like_c: float
	condition: str
	humidity_percent: float = Field(ge=0, le=100)
	rainfall_mm: float = Field(ge=0)
	icon: WeatherIconEnum
	season: SeasonEnum
	zone: ClimateZoneEnum
	last_updated: dt.datetime


class ForecastDay(BaseModel):
	date: dt.date
	day: str
	temperature_c: float
	condition: str
	humidity_percent: float = Field(ge=0, le=100)
	rainfall_mm: float = Field(ge=0)
	icon: WeatherIconEnum


class CurrentWeatherResponse(BaseModel):
	region: Region
	weather: WeatherSnapshot
	advice: str


class ForecastResponse(BaseModel):
	region: Region
	days: list[ForecastDay] = Field(default_factory=list)


class FarmingAdviceRequest(BaseModel):
	temperature_c: float
	humidity_percent: float = Field(ge=0, le=100)
	rainfall_mm: float = Field(ge=0)


class FarmingAdviceResponse(BaseModel):
	advice: str
