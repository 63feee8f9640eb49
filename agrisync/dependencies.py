"""FastAPI dependency providers for the advisory services."""

from __future__ import annotations

import random

from fastapi import Depends, Query, Request

from agrisync.config import get_settings
from agrisync.knowledge_base import KnowledgeBase, get_knowledge_base
from agrisync.models.enums import RegionSourceEnum
from agrisync.schemas.region import Coordinates, Region
from agrisync.services.advisory_service import AdvisoryService
from agrisync.services.assistant_service import AssistantService
from agrisync.services.diagnosis_service import DiagnosisService
from agrisync.services.location import StaticLocationProvider, StaticReverseGeocoder
from agrisync.services.region_service import RegionResolver, derive_district
from agrisync.services.soil_service import SoilService
from agrisync.services.stores import InMemoryKeyValueStore, KeyValueStore
from agrisync.services.timeline_service import TimelineService
from agrisync.services.weather_service import WeatherService, default_rng


def get_kv_store(request: Request) -> KeyValueStore:
	"""Store created at startup; a process-local store when the app has none yet."""
	store = getattr(request.app.state, "kv_store", None)
	if store is None:
		store = InMemoryKeyValueStore()
		request.app.state.kv_store = store
	return store


def get_weather_rng(request: Request) -> random.Random:
	rng = getattr(request.app.state, "weather_rng", None)
	if rng is None:
		rng = default_rng()
		request.app.state.weather_rng = rng
	return rng


def get_timeline_service(knowledge_base: KnowledgeBase = Depends(get_knowledge_base)) -> TimelineService:
	return TimelineService(knowledge_base)


def get_soil_service(knowledge_base: KnowledgeBase = Depends(get_knowledge_base)) -> SoilService:
	return SoilService(knowledge_base)


def get_weather_service(
	knowledge_base: KnowledgeBase = Depends(get_knowledge_base),
	rng: random.Random = Depends(get_weather_rng),
) -> WeatherService:
	return WeatherService(knowledge_base, rng=rng)


def get_diagnosis_service(knowledge_base: KnowledgeBase = Depends(get_knowledge_base)) -> DiagnosisService:
	return DiagnosisService(knowledge_base)


def get_advisory_service(
	knowledge_base: KnowledgeBase = Depends(get_knowledge_base),
	soil_service: SoilService = Depends(get_soil_service),
	weather_service: WeatherService = Depends(get_weather_service),
) -> AdvisoryService:
	return AdvisoryService(knowledge_base, soil_service, weather_service)


def build_region_resolver(
	knowledge_base: KnowledgeBase,
	store: KeyValueStore,
	coordinates: Coordinates | None = None,
	district: str | None = None,
) -> RegionResolver:
	"""Resolver whose GPS tier serves the fix the device sent, if any."""
	return RegionResolver(
		knowledge_base,
		store,
		location_provider=StaticLocationProvider(coordinates),
		reverse_geocoder=StaticReverseGeocoder(district) if district else None,
		settings=get_settings(),
	)


def get_region_resolver(
	latitude: float | None = Query(default=None, ge=-90, le=90),
	longitude: float | None = Query(default=None, ge=-180, le=180),
	district: str | None = Query(default=None, max_length=100),
	knowledge_base: KnowledgeBase = Depends(get_knowledge_base),
	store: KeyValueStore = Depends(get_kv_store),
) -> RegionResolver:
	coordinates = None
	if latitude is not None and longitude is not None:
		coordinates = Coordinates(latitude=latitude, longitude=longitude)
	return build_region_resolver(knowledge_base, store, coordinates, district)


async def get_request_region(
	state: str | None = Query(default=None, max_length=100),
	district: str | None = Query(default=None, max_length=100),
	resolver: RegionResolver = Depends(get_region_resolver),
) -> Region:
	"""Explicit ``state``/``district`` query wins; otherwise resolve the device region."""
	if state and state.strip():
		cleaned = state.strip()
		return Region(
			state=cleaned,
			district=(district or "").strip() or derive_district(cleaned),
			source=RegionSourceEnum.manual,
		)
	return await resolver.resolve_region()


def get_assistant_service(knowledge_base: KnowledgeBase = Depends(get_knowledge_base)) -> AssistantService:
	return AssistantService(knowledge_base)
