"""Pydantic schemas for region resolution."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from agrisync.models.enums import RegionSourceEnum


class Coordinates(BaseModel):
	latitude: float = Field(ge=-90, le=90)
	longitude: float = Field(ge=-180, le=180)


class Region(BaseModel):
	state: str = Field(min_length=1)
	district: str = Field(min_length=1)
	coordinates: Coordinates | None = None
	source: RegionSourceEnum = RegionSourceEnum.default


class ManualLocationRequest(BaseModel):
	model_config = ConfigDict(str_strip_whitespace=True)

	state: str = Field(min_length=1, max_length=100)
	district: str = Field(min_length=1, max_length=100)


class ManualLocationResponse(BaseModel):
	ok: bool


class LocationSourceResponse(BaseModel):
	source: RegionSourceEnum
