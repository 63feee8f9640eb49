"""Pydantic schemas for crop timeline, harvest and growth-stage endpoints."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from agrisync.models.enums import HarvestTypeEnum, TaskCategoryEnum, TemporalStatusEnum
from agrisync.models.knowledge import CropDefinition


class TimelineEntry(BaseModel):
	day_offset: int
	task_name: str
	category: TaskCategoryEnum
	description: str
	absolute_date: date
	days_since_sowing: int
	days_until: int
	status: TemporalStatusEnum


class SingleHarvestInfo(BaseModel):
	harvest_type: Literal[HarvestTypeEnum.single] = HarvestTypeEnum.single
	harvest_date: date
	days_to_harvest: int
	is_ready: bool


class ContinuousHarvestInfo(BaseModel):
	harvest_type: Literal[HarvestTypeEnum.continuous] = HarvestTypeEnum.continuous
	first_harvest_date: date
	last_harvest_date: date
	days_to_first_harvest: int
	days_to_last_harvest: int
	is_harvest_window: bool
	plucking_frequency_days: int


HarvestInfo = Annotated[
	SingleHarvestInfo | ContinuousHarvestInfo,
	Field(discriminator="harvest_type"),
]


class GrowthStageStatus(BaseModel):
	stage_name: str
	icon_tag: str
	day_range_start: int
	day_range_end: int
	days_since_sowing: int
	progress_percent: int = Field(ge=0, le=100)


class CropListRead(BaseModel):
	items: list[str]


class CropRead(BaseModel):
	crop: CropDefinition


class TimelineResponse(BaseModel):
	crop_name: str
	sowing_date: date
	items: list[TimelineEntry] = Field(default_factory=list)


class HarvestResponse(BaseModel):
	crop_name: str
	sowing_date: date
	harvest: HarvestInfo


class StageResponse(BaseModel):
	crop_name: str
	sowing_date: date
	stage: GrowthStageStatus | None = None
