"""Enumerations shared by the knowledge-base models and API schemas.

Values match the lowercase tokens used in the JSON data files under
``agrisync/data``.
"""

from enum import StrEnum

# ── Crop knowledge enums ────────────────────────────────────────────────────


class HarvestTypeEnum(StrEnum):
    """Whether a crop is harvested once or plucked repeatedly over a window."""

    single = "single"
    continuous = "continuous"


class TaskCategoryEnum(StrEnum):
    """Category of a scheduled treatment task."""

    planting = "planting"
    watering = "watering"
    fertilizer = "fertilizer"
    treatment = "treatment"
    monitoring = "monitoring"
    harvest = "harvest"


class TemporalStatusEnum(StrEnum):
    """Position of a scheduled task relative to today."""

    past = "past"
    today = "today"
    future = "future"


# ── Region / soil / weather enums ───────────────────────────────────────────


class RegionSourceEnum(StrEnum):
    """Provenance of a resolved region, in priority order."""

    manual = "manual"
    gps = "gps"
    cached = "cached"
    default = "default"


class NutrientLevelEnum(StrEnum):
    very_low = "very_low"
    low = "low"
    medium = "medium"
    high = "high"


class SeasonEnum(StrEnum):
    winter = "winter"
    summer = "summer"
    monsoon = "monsoon"
    autumn = "autumn"


class ClimateZoneEnum(StrEnum):
    """Coarse climatic macro-region derived from the state name."""

    north = "north"
    south = "south"
    east = "east"
    west = "west"
    central = "central"


class RainfallBucketEnum(StrEnum):
    very_low = "very_low"
    low = "low"
    medium = "medium"
    high = "high"
    very_high = "very_high"


class WeatherIconEnum(StrEnum):
    sunny = "sunny"
    rainy = "rainy"
    cloudy = "cloudy"
    thunderstorm = "thunderstorm"


# ── Diagnosis / advisory enums ──────────────────────────────────────────────


class DiseaseTypeEnum(StrEnum):
    disease = "disease"
    pest = "pest"
    deficiency = "deficiency"


class AdvisoryTypeEnum(StrEnum):
    irrigation = "irrigation"
    fertilizer = "fertilizer"
    pest = "pest"
    weather = "weather"


class SeverityEnum(StrEnum):
    low = "low"
    medium = "medium"
    high = "high"


# ── Assistant enums ─────────────────────────────────────────────────────────


class LanguageEnum(StrEnum):
    """Answer language for the offline assistant; missing entries fall back to English."""

    en = "en"
    hi = "hi"
    mr = "mr"
