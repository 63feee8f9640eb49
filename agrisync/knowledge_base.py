"""Static knowledge base: loads and indexes the JSON data tables once per process."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from agrisync.config import get_settings
from agrisync.errors import KnowledgeBaseError, UnknownCropError
from agrisync.models.knowledge import (
	AssistantTables,
	CropDefinition,
	DiseaseRecord,
	EmergencyContact,
	SoilProfile,
	StateBounds,
	StateSoilMap,
	WeatherTables,
)

_logger = logging.getLogger("agrisync.knowledge_base")

GENERAL_BUCKET = "general"

_CROPS = TypeAdapter(list[CropDefinition])
_DISEASES = TypeAdapter(dict[str, list[DiseaseRecord]])
_TIPS = TypeAdapter(dict[str, list[str]])
_CONTACTS = TypeAdapter(list[EmergencyContact])
_SOILS = TypeAdapter(list[SoilProfile])
_SOIL_MAP = TypeAdapter(dict[str, StateSoilMap])
_BOUNDS = TypeAdapter(list[StateBounds])


def _normalize(name: str) -> str:
	return name.strip().casefold()


@dataclass(frozen=True, slots=True)
class KnowledgeBase:
	"""Read-only, indexed view over every static table the services consume."""

	crops: dict[str, CropDefinition]
	diseases: dict[str, tuple[DiseaseRecord, ...]]
	preventive_tips: dict[str, tuple[str, ...]]
	emergency_contacts: tuple[EmergencyContact, ...]
	soil_types: dict[str, SoilProfile]
	default_soil_type: str
	regional_soil_map: dict[str, StateSoilMap]
	state_bounds: tuple[StateBounds, ...]
	weather: WeatherTables
	assistant: AssistantTables
	_crop_index: dict[str, str] = field(default_factory=dict, repr=False)

	def __post_init__(self) -> None:
		self._crop_index.update({_normalize(name): name for name in self.crops})

	def crop_names(self) -> list[str]:
		return list(self.crops)

	def has_crop(self, crop_name: str) -> bool:
		return _normalize(crop_name) in self._crop_index

	def get_crop(self, crop_name: str) -> CropDefinition:
		"""Case-insensitive crop lookup; raises ``UnknownCropError`` when absent."""
		key = self._crop_index.get(_normalize(crop_name))
		if key is None:
			raise UnknownCropError(crop_name)
		return self.crops[key]

	def diseases_for(self, crop_name: str) -> list[DiseaseRecord]:
		"""Crop-specific records followed by the shared general bucket."""
		crop_records = self.diseases.get(_normalize(crop_name), ())
		return [*crop_records, *self.diseases.get(GENERAL_BUCKET, ())]

	def has_disease_bucket(self, crop_name: str) -> bool:
		key = _normalize(crop_name)
		return key != GENERAL_BUCKET and key in self.diseases


def _data_root() -> Path | None:
	settings = get_settings()
	if settings.data_dir:
		return Path(settings.data_dir)
	return None


def _read_json(filename: str) -> dict[str, Any]:
	root = _data_root()
	try:
		if root is not None:
			text = (root / filename).read_text(encoding="utf-8")
		else:
			text = resources.files("agrisync.data").joinpath(filename).read_text(encoding="utf-8")
		payload = json.loads(text)
	except (OSError, json.JSONDecodeError) as exc:
		raise KnowledgeBaseError(f"failed to read {filename}: {exc}") from exc
	if not isinstance(payload, dict):
		raise KnowledgeBaseError(f"{filename} must contain a JSON object")
	return payload


def build_knowledge_base(
	crops_payload: dict[str, Any],
	diseases_payload: dict[str, Any],
	soils_payload: dict[str, Any],
	regions_payload: dict[str, Any],
	weather_payload: dict[str, Any],
	assistant_payload: dict[str, Any],
) -> KnowledgeBase:
	"""Validate raw table payloads into an indexed ``KnowledgeBase``."""
	try:
		crops = _CROPS.validate_python(crops_payload.get("crops", []))
		diseases = _DISEASES.validate_python(diseases_payload.get("diseases", {}))
		tips = _TIPS.validate_python(diseases_payload.get("preventive_tips", {}))
		contacts = _CONTACTS.validate_python(diseases_payload.get("emergency_contacts", []))
		soils = _SOILS.validate_python(soils_payload.get("soil_types", []))
		soil_map = _SOIL_MAP.validate_python(soils_payload.get("regional_soil_map", {}))
		bounds = _BOUNDS.validate_python(regions_payload.get("state_bounds", []))
		weather = WeatherTables.model_validate(weather_payload)
		assistant = AssistantTables.model_validate(assistant_payload)
	except ValidationError as exc:
		raise KnowledgeBaseError(f"invalid knowledge base data: {exc}") from exc

	soil_types = {soil.soil_type_name: soil for soil in soils}
	default_soil = str(soils_payload.get("default_soil_type") or "")
	if default_soil not in soil_types:
		raise KnowledgeBaseError(f"default soil type {default_soil!r} is not defined")

	for state, state_map in soil_map.items():
		referenced = [state_map.default] if state_map.default else []
		for entry in state_map.districts.values():
			if isinstance(entry, str):
				referenced.append(entry)
			else:
				referenced.extend([entry.default, *entry.crops.values()])
		unknown = sorted({name for name in referenced if name not in soil_types})
		if unknown:
			raise KnowledgeBaseError(f"{state}: unknown soil types {unknown}")

	names = [crop.name for crop in crops]
	if len({_normalize(name) for name in names}) != len(names):
		raise KnowledgeBaseError("duplicate crop names in crops table")
	unknown_crops = sorted(name for name in assistant.crops if name not in names)
	if unknown_crops:
		raise KnowledgeBaseError(f"assistant answers for unknown crops {unknown_crops}")

	return KnowledgeBase(
		crops={crop.name: crop for crop in crops},
		diseases={_normalize(key): tuple(records) for key, records in diseases.items()},
		preventive_tips={_normalize(key): tuple(items) for key, items in tips.items()},
		emergency_contacts=tuple(contacts),
		soil_types=soil_types,
		default_soil_type=default_soil,
		regional_soil_map=soil_map,
		state_bounds=tuple(bounds),
		weather=weather,
		assistant=assistant,
	)


@lru_cache
def get_knowledge_base() -> KnowledgeBase:
	"""Load every data table once (cached after first call)."""
	start = time.perf_counter()
	knowledge_base = build_knowledge_base(
		_read_json("crops.json"),
		_read_json("diseases.json"),
		_read_json("soils.json"),
		_read_json("regions.json"),
		_read_json("weather.json"),
		_read_json("assistant.json"),
	)
	_logger.info(
		"knowledge_base_loaded",
		extra={
			"crops": len(knowledge_base.crops),
			"disease_buckets": len(knowledge_base.diseases),
			"soil_types": len(knowledge_base.soil_types),
			"duration_ms": round((time.perf_counter() - start) * 1000.0, 2),
		},
	)
	return knowledge_base
