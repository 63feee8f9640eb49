"""Soil classifier: region (and optionally crop) to soil profile."""

from __future__ import annotations

import logging

from agrisync.knowledge_base import KnowledgeBase
from agrisync.models.knowledge import DistrictSoil, SoilProfile
from agrisync.schemas.region import Region
from agrisync.schemas.soil import SoilSuitability

_logger = logging.getLogger("agrisync.soil")


def _find_key(mapping: dict[str, object], name: str) -> str | None:
	needle = name.strip().casefold()
	for key in mapping:
		if key.casefold() == needle:
			return key
	return None


class SoilService:
	"""Lookup chain: district (crop-refined) -> state default -> global default."""

	def __init__(self, knowledge_base: KnowledgeBase):
		self.knowledge_base = knowledge_base

	def get_soil_profile(self, region: Region | None, crop_name: str | None = None) -> SoilProfile:
		soil_type = self.resolve_soil_type(region, crop_name)
		return self.get_soil_details(soil_type)

	def resolve_soil_type(self, region: Region | None, crop_name: str | None = None) -> str:
		default = self.knowledge_base.default_soil_type
		if region is None:
			return default

		soil_map = self.knowledge_base.regional_soil_map
		state_key = _find_key(soil_map, region.state)
		if state_key is None:
			return default
		state_map = soil_map[state_key]

		district_key = _find_key(state_map.districts, region.district)
		if district_key is not None:
			entry = state_map.districts[district_key]
			if isinstance(entry, str):
				return entry
			return self._refine_by_crop(entry, crop_name)

		return state_map.default or default

	def get_soil_details(self, soil_type: str) -> SoilProfile:
		"""Profile for ``soil_type``; unknown names degrade to the default soil."""
		soil_types = self.knowledge_base.soil_types
		key = _find_key(soil_types, soil_type) if soil_type else None
		if key is None:
			_logger.info("soil_type_defaulted", extra={"requested": soil_type})
			return soil_types[self.knowledge_base.default_soil_type]
		return soil_types[key]

	def list_soil_types(self) -> list[str]:
		return list(self.knowledge_base.soil_types)

	def get_suitability(self, soil_type: str, crop_name: str) -> SoilSuitability:
		profile = self.get_soil_details(soil_type)
		return SoilSuitability(
			soil_type_name=profile.soil_type_name,
			crop_name=crop_name,
			suitable=profile.grows(crop_name),
			amendments=list(profile.amendments),
			fertilizer_plan=profile.fertilizer_plan,
		)

	@staticmethod
	def _refine_by_crop(entry: DistrictSoil, crop_name: str | None) -> str:
		if crop_name:
			crop_key = _find_key(entry.crops, crop_name)
			if crop_key is not None:
				return entry.crops[crop_key]
		return entry.default
