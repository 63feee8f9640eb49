"""Static knowledge-base models for crop schedules, soils, weather, diseases and assistant answers.

Every record is frozen after load. ``CropDefinition`` validates the schedule
invariants the timeline calculator relies on::

    treatment_schedule sorted ascending by day_offset
    day_offset <= duration_days
    continuous crops: first_harvest_day <= last_harvest_day <= duration_days
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from agrisync.models.enums import (
    ClimateZoneEnum,
    DiseaseTypeEnum,
    HarvestTypeEnum,
    LanguageEnum,
    NutrientLevelEnum,
    RainfallBucketEnum,
    SeasonEnum,
    TaskCategoryEnum,
)

_FROZEN = ConfigDict(frozen=True)
_PERCENT_RANGE = re.compile(r"(\d+(?:\.\d+)?)")


# ── Crops ───────────────────────────────────────────────────────────────────


class GrowthStage(BaseModel):
    model_config = _FROZEN

    stage_name: str = Field(min_length=1)
    day_range_start: int = Field(ge=0)
    day_range_end: int = Field(ge=0)
    icon_tag: str

    @model_validator(mode="after")
    def _validate_range(self) -> "GrowthStage":
        if self.day_range_end < self.day_range_start:
            raise ValueError(f"stage {self.stage_name!r} ends before it starts")
        return self


class ScheduleItem(BaseModel):
    model_config = _FROZEN

    day_offset: int = Field(ge=0)
    task_name: str = Field(min_length=1)
    category: TaskCategoryEnum
    description: str = ""


class CropDefinition(BaseModel):
    """Per-crop schedule definition (duration, stages, treatments, harvest)."""

    model_config = _FROZEN

    name: str = Field(min_length=1)
    duration_days: int = Field(gt=0)
    harvest_type: HarvestTypeEnum
    first_harvest_day: int | None = Field(default=None, ge=0)
    last_harvest_day: int | None = Field(default=None, ge=0)
    plucking_frequency_days: int | None = Field(default=None, gt=0)
    growth_stages: tuple[GrowthStage, ...] = ()
    treatment_schedule: tuple[ScheduleItem, ...] = ()

    @model_validator(mode="after")
    def _validate_schedule(self) -> "CropDefinition":
        offsets = [item.day_offset for item in self.treatment_schedule]
        if offsets != sorted(offsets):
            raise ValueError(f"{self.name}: treatment_schedule must be sorted by day_offset")
        if offsets and offsets[-1] > self.duration_days:
            raise ValueError(f"{self.name}: day_offset {offsets[-1]} exceeds duration_days {self.duration_days}")

        if self.harvest_type == HarvestTypeEnum.continuous:
            if (
                self.first_harvest_day is None
                or self.last_harvest_day is None
                or self.plucking_frequency_days is None
            ):
                raise ValueError(
                    f"{self.name}: continuous crops need first_harvest_day, "
                    "last_harvest_day and plucking_frequency_days"
                )
            if not self.first_harvest_day <= self.last_harvest_day <= self.duration_days:
                raise ValueError(f"{self.name}: harvest window must lie within the crop duration")
        return self


# ── Soils ───────────────────────────────────────────────────────────────────


class FertilizerPlan(BaseModel):
    model_config = _FROZEN

    npk_ratio: str
    organic_dose: str
    timing: str


class SoilProfile(BaseModel):
    """Chemical/physical profile and management guidance for one soil type."""

    model_config = _FROZEN

    soil_type_name: str
    ph: str
    nitrogen: NutrientLevelEnum
    phosphorus: NutrientLevelEnum
    potassium: NutrientLevelEnum
    moisture_percent_range: str
    texture: str
    color: str = ""
    best_crops: tuple[str, ...] = ()
    characteristics: tuple[str, ...] = ()
    amendments: tuple[str, ...] = ()
    fertilizer_plan: FertilizerPlan

    @computed_field
    @property
    def moisture_floor_percent(self) -> float | None:
        """Lower bound of ``moisture_percent_range`` ("55-65%" -> 55.0)."""
        match = _PERCENT_RANGE.search(self.moisture_percent_range)
        if match is None:
            return None
        return float(match.group(1))

    def grows(self, crop_name: str) -> bool:
        needle = crop_name.strip().casefold()
        return any(crop.casefold() == needle for crop in self.best_crops)


class DistrictSoil(BaseModel):
    """District entry with optional per-crop refinements."""

    model_config = _FROZEN

    default: str
    crops: dict[str, str] = Field(default_factory=dict)


class StateSoilMap(BaseModel):
    model_config = _FROZEN

    default: str | None = None
    districts: dict[str, str | DistrictSoil] = Field(default_factory=dict)


# ── Regions ─────────────────────────────────────────────────────────────────


class StateBounds(BaseModel):
    """Axis-aligned latitude/longitude rectangle approximating a state."""

    model_config = _FROZEN

    state: str
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    def contains(self, latitude: float, longitude: float) -> bool:
        return (
            self.lat_min <= latitude <= self.lat_max
            and self.lon_min <= longitude <= self.lon_max
        )


# ── Weather ─────────────────────────────────────────────────────────────────


class WeatherPattern(BaseModel):
    model_config = _FROZEN

    temperature_range: tuple[int, int]
    rainfall: RainfallBucketEnum
    humidity_range: tuple[int, int]
    conditions: tuple[str, ...] = Field(min_length=1)


class WeatherTables(BaseModel):
    model_config = _FROZEN

    zone_keywords: dict[ClimateZoneEnum, tuple[str, ...]]
    rainfall_buckets: dict[RainfallBucketEnum, tuple[int, int]]
    patterns: dict[ClimateZoneEnum, dict[SeasonEnum, WeatherPattern]]

    @model_validator(mode="after")
    def _validate_coverage(self) -> "WeatherTables":
        for zone in ClimateZoneEnum:
            seasons = self.patterns.get(zone)
            if seasons is None or set(seasons) != set(SeasonEnum):
                raise ValueError(f"weather patterns missing for zone {zone.value!r}")
            for pattern in seasons.values():
                if pattern.rainfall not in self.rainfall_buckets:
                    raise ValueError(f"unknown rainfall bucket {pattern.rainfall.value!r}")
        return self


# ── Diseases ────────────────────────────────────────────────────────────────


class Treatment(BaseModel):
    model_config = _FROZEN

    organic: str
    chemical: str
    preventive: str


class DiseaseRecord(BaseModel):
    model_config = _FROZEN

    id: str
    name: str
    type: DiseaseTypeEnum
    symptoms: tuple[str, ...] = ()
    treatment: Treatment
    season: str | None = None


class EmergencyContact(BaseModel):
    model_config = _FROZEN

    key: str
    name: str
    number: str | None = None
    description: str


# ── Assistant ───────────────────────────────────────────────────────────────


class AssistantCrop(BaseModel):
    """Canned answers for one crop, keyed by language then topic."""

    model_config = _FROZEN

    keywords: tuple[str, ...] = Field(min_length=1)
    answers: dict[LanguageEnum, dict[str, str]]
    overview_topics: tuple[str, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _validate_english(self) -> "AssistantCrop":
        english = self.answers.get(LanguageEnum.en, {})
        missing = [topic for topic in self.overview_topics if topic not in english]
        if missing:
            raise ValueError(f"overview topics without an English answer: {missing}")
        return self


class QuickAction(BaseModel):
    model_config = _FROZEN

    id: int
    labels: dict[LanguageEnum, str]
    query: str = Field(min_length=1)


class AssistantTables(BaseModel):
    """Keyword tables for the offline assistant. Dict order is match precedence."""

    model_config = _FROZEN

    topic_keywords: dict[str, tuple[str, ...]]
    crops: dict[str, AssistantCrop]
    general: dict[LanguageEnum, dict[str, str]] = Field(default_factory=dict)
    fallback: dict[LanguageEnum, str]
    quick_actions: tuple[QuickAction, ...] = ()

    @model_validator(mode="after")
    def _validate_topics(self) -> "AssistantTables":
        if LanguageEnum.en not in self.fallback:
            raise ValueError("assistant fallback needs an English answer")
        used = {topic for answers in self.general.values() for topic in answers}
        for crop in self.crops.values():
            used.update(crop.overview_topics)
            used.update(topic for answers in crop.answers.values() for topic in answers)
        unknown = sorted(used - set(self.topic_keywords))
        if unknown:
            raise ValueError(f"assistant answers reference undeclared topics: {unknown}")
        for action in self.quick_actions:
            if LanguageEnum.en not in action.labels:
                raise ValueError(f"quick action {action.id} needs an English label")
        return self
