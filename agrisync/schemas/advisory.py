"""Pydantic schemas for the 48-hour advisory engine."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from agrisync.models.enums import AdvisoryTypeEnum, SeverityEnum
from agrisync.models.knowledge import SoilProfile
from agrisync.schemas.region import Coordinates, Region
from agrisync.schemas.weather import WeatherSnapshot


class Advisory(BaseModel):
	id: uuid.UUID
	type: AdvisoryTypeEnum
	severity: SeverityEnum
	message: str
	crop_name: str
	timestamp: datetime


class RegisteredCrop(BaseModel):
	"""A farmer's crop registration as supplied by the caller."""

	name: str = Field(min_length=1, max_length=100)
	sowing_date: date
	region: Region | None = None


class CropAdvisoryResponse(BaseModel):
	crop_name: str
	days_since_sowing: int
	region: Region
	soil: SoilProfile
	weather: WeatherSnapshot
	advisories: list[Advisory] = Field(default_factory=list)


class PortfolioInsightsRequest(BaseModel):
	crops: list[RegisteredCrop] = Field(default_factory=list, max_length=100)
	coordinates: Coordinates | None = None
	district: str | None = None

	@model_validator(mode="after")
	def _validate_district(self) -> "PortfolioInsightsRequest":
		if self.district is not None and self.coordinates is None:
			raise ValueError("district hint requires coordinates")
		return self


class PortfolioInsightsResponse(BaseModel):
	region: Region
	generated_at: datetime
	items: list[Advisory] = Field(default_factory=list)
