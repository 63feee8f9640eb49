"""Pydantic schemas for soil classification endpoints."""

from __future__ import annotations

from pydantic import BaseModel

from agrisync.models.knowledge import FertilizerPlan, SoilProfile
from agrisync.schemas.region import Region


class SoilSuitability(BaseModel):
	soil_type_name: str
	crop_name: str
	suitable: bool
	amendments: list[str]
	fertilizer_plan: FertilizerPlan


class SoilProfileResponse(BaseModel):
	region: Region
	crop_name: str | None = None
	profile: SoilProfile


class SoilTypeListRead(BaseModel):
	items: list[str]
