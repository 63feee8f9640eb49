"""Key-value store collaborators used for manual and cached region overrides."""

from __future__ import annotations

from typing import Protocol

from redis.asyncio import Redis


class KeyValueStore(Protocol):
	async def get(self, key: str) -> str | None: ...

	async def set(self, key: str, value: str) -> None: ...

	async def remove(self, key: str) -> None: ...


class InMemoryKeyValueStore:
	"""Process-local store; used when no Redis URL is configured and in tests."""

	def __init__(self, initial: dict[str, str] | None = None) -> None:
		self._data: dict[str, str] = dict(initial or {})

	async def get(self, key: str) -> str | None:
		return self._data.get(key)

	async def set(self, key: str, value: str) -> None:
		self._data[key] = value

	async def remove(self, key: str) -> None:
		self._data.pop(key, None)


class RedisKeyValueStore:
	"""Redis-backed store; keys are namespaced with ``prefix``."""

	def __init__(self, redis_client: Redis, prefix: str = "agrisync:") -> None:
		self.redis_client = redis_client
		self.prefix = prefix

	def _key(self, key: str) -> str:
		return f"{self.prefix}{key}"

	async def get(self, key: str) -> str | None:
		value = await self.redis_client.get(self._key(key))
		if value is None:
			return None
		if isinstance(value, bytes):
			return value.decode("utf-8")
		return str(value)

	async def set(self, key: str, value: str) -> None:
		await self.redis_client.set(self._key(key), value)

	async def remove(self, key: str) -> None:
		await self.redis_client.delete(self._key(key))
