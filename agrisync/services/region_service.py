"""Region resolver: manual override > live GPS > cached GPS > default.

``resolve_region`` never raises. Every collaborator call is a single awaited
request bounded by ``location_timeout_seconds``; a failure or timeout marks that
source unavailable and resolution falls through to the next tier.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any, TypeVar

from pydantic import ValidationError

from agrisync.config import Settings, get_settings
from agrisync.errors import LocationUnavailable
from agrisync.knowledge_base import KnowledgeBase
from agrisync.models.enums import RegionSourceEnum
from agrisync.schemas.region import Coordinates, Region
from agrisync.services.location import LocationProvider, ReverseGeocoder
from agrisync.services.stores import KeyValueStore

MANUAL_LOCATION_KEY = "manual-location"
CACHED_LOCATION_KEY = "last-gps-location"

_logger = logging.getLogger("agrisync.region")

T = TypeVar("T")


def derive_district(state: str) -> str:
	"""Placeholder district when geocoding is unavailable: first token of the state."""
	tokens = state.split()
	return tokens[0] if tokens else state


class RegionResolver:
	def __init__(
		self,
		knowledge_base: KnowledgeBase,
		store: KeyValueStore,
		location_provider: LocationProvider | None = None,
		reverse_geocoder: ReverseGeocoder | None = None,
		settings: Settings | None = None,
	):
		self.knowledge_base = knowledge_base
		self.store = store
		self.location_provider = location_provider
		self.reverse_geocoder = reverse_geocoder
		self.settings = settings or get_settings()

	async def resolve_region(self) -> Region:
		manual = await self._read_stored_region(MANUAL_LOCATION_KEY)
		if manual is not None:
			return manual.model_copy(update={"source": RegionSourceEnum.manual})

		detected = await self._detect_from_gps()
		if detected is not None:
			await self._cache_gps_region(detected)
			return detected

		cached = await self._read_stored_region(CACHED_LOCATION_KEY)
		if cached is not None:
			return cached.model_copy(update={"source": RegionSourceEnum.cached})

		return self.default_region()

	def default_region(self) -> Region:
		return Region(
			state=self.settings.default_state,
			district=self.settings.default_district,
			coordinates=Coordinates(
				latitude=self.settings.default_latitude,
				longitude=self.settings.default_longitude,
			),
			source=RegionSourceEnum.default,
		)

	def classify_state(self, latitude: float, longitude: float) -> str:
		"""First state box containing the point, in table order; fallback state otherwise."""
		for bounds in self.knowledge_base.state_bounds:
			if bounds.contains(latitude, longitude):
				return bounds.state
		return self.settings.fallback_state

	async def map_coordinates_to_region(self, latitude: float, longitude: float) -> Region:
		coordinates = Coordinates(latitude=latitude, longitude=longitude)
		state = self.classify_state(latitude, longitude)

		district: str | None = None
		if self.reverse_geocoder is not None:
			try:
				district = await self._call(
					"reverse_geocode",
					lambda: self.reverse_geocoder.reverse_geocode(coordinates),
				)
			except LocationUnavailable:
				district = None

		return Region(
			state=state,
			district=district or derive_district(state),
			coordinates=coordinates,
			source=RegionSourceEnum.gps,
		)

	async def set_manual_location(self, state: str, district: str) -> bool:
		if not state.strip() or not district.strip():
			return False
		payload = {
			"state": state.strip(),
			"district": district.strip(),
			"set_at": datetime.now(UTC).isoformat(),
		}
		try:
			await self._call("store_set", lambda: self.store.set(MANUAL_LOCATION_KEY, json.dumps(payload)))
		except LocationUnavailable:
			return False
		return True

	async def clear_manual_location(self) -> bool:
		try:
			await self._call("store_remove", lambda: self.store.remove(MANUAL_LOCATION_KEY))
		except LocationUnavailable:
			return False
		return True

	async def get_location_source(self) -> RegionSourceEnum:
		if await self._read_stored_region(MANUAL_LOCATION_KEY) is not None:
			return RegionSourceEnum.manual

		if self.location_provider is not None:
			try:
				if await self._call("provider_available", self.location_provider.is_available):
					return RegionSourceEnum.gps
			except LocationUnavailable:
				pass

		if await self._read_stored_region(CACHED_LOCATION_KEY) is not None:
			return RegionSourceEnum.cached
		return RegionSourceEnum.default

	async def _detect_from_gps(self) -> Region | None:
		if self.location_provider is None:
			return None
		try:
			coordinates = await self._call(
				"get_current_coordinates",
				self.location_provider.get_current_coordinates,
			)
		except LocationUnavailable:
			return None
		if coordinates is None:
			return None
		try:
			return await self.map_coordinates_to_region(coordinates.latitude, coordinates.longitude)
		except ValidationError as exc:
			_logger.warning(
				"region_source_unavailable",
				extra={"operation": "map_coordinates", "error": str(exc)},
			)
			return None

	async def _cache_gps_region(self, region: Region) -> None:
		payload: dict[str, Any] = region.model_dump(mode="json", exclude={"source"})
		payload["timestamp"] = datetime.now(UTC).isoformat()
		try:
			await self._call("store_set", lambda: self.store.set(CACHED_LOCATION_KEY, json.dumps(payload)))
		except LocationUnavailable:
			# The live fix is still returned; only future fallback is lost.
			pass

	async def _read_stored_region(self, key: str) -> Region | None:
		try:
			raw = await self._call("store_get", lambda: self.store.get(key))
		except LocationUnavailable:
			return None
		if not raw:
			return None
		try:
			return Region.model_validate(json.loads(raw))
		except (json.JSONDecodeError, ValidationError) as exc:
			_logger.warning(
				"region_source_unavailable",
				extra={"operation": "decode", "key": key, "error": str(exc)},
			)
			return None

	async def _call(self, operation: str, factory: Callable[[], Awaitable[T]]) -> T:
		try:
			return await asyncio.wait_for(factory(), timeout=self.settings.location_timeout_seconds)
		except Exception as exc:
			_logger.warning(
				"region_source_unavailable",
				extra={"operation": operation, "error": repr(exc)},
			)
			raise LocationUnavailable(f"{operation} failed: {exc!r}") from exc
