"""Shared pytest fixtures: knowledge base, collaborators, async test client."""

from __future__ import annotations

import random
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from agrisync.config import Settings
from agrisync.knowledge_base import KnowledgeBase, get_knowledge_base
from agrisync.main import app
from agrisync.services.soil_service import SoilService
from agrisync.services.stores import InMemoryKeyValueStore
from agrisync.services.weather_service import WeatherService
from tests.fakes import FakeRedis

FIXED_NOW = datetime(2024, 1, 22, 9, 30, tzinfo=UTC)


@pytest.fixture(scope="session")
def knowledge_base() -> KnowledgeBase:
	return get_knowledge_base()


@pytest.fixture
def settings() -> Settings:
	return Settings(location_timeout_seconds=0.2)


@pytest.fixture
def fake_redis() -> FakeRedis:
	return FakeRedis()


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
	return InMemoryKeyValueStore()


@pytest.fixture
def fixed_clock() -> Any:
	return lambda: FIXED_NOW


@pytest.fixture
def seeded_rng() -> random.Random:
	return random.Random(1234)


@pytest.fixture
def soil_service(knowledge_base: KnowledgeBase) -> SoilService:
	return SoilService(knowledge_base)


@pytest.fixture
def weather_service(knowledge_base: KnowledgeBase, seeded_rng: random.Random, fixed_clock: Any) -> WeatherService:
	return WeatherService(knowledge_base, rng=seeded_rng, clock=fixed_clock)


@pytest.fixture
async def client(memory_store: InMemoryKeyValueStore) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and in-memory collaborators."""
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan
	app.state.kv_store = memory_store
	app.state.weather_rng = random.Random(99)

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()
	del app.state.kv_store
	del app.state.weather_rng
