"""Location collaborators: device coordinates and reverse geocoding.

The core never talks to a positioning service itself. Callers inject a
``LocationProvider`` (typically built from coordinates the device sent with the
request) and, optionally, a ``ReverseGeocoder`` for the district name.
"""

from __future__ import annotations

from typing import Protocol

from agrisync.schemas.region import Coordinates


class LocationProvider(Protocol):
	async def get_current_coordinates(self) -> Coordinates | None:
		"""Current fix, or ``None`` when no fix is available."""
		...

	async def is_available(self) -> bool: ...


class ReverseGeocoder(Protocol):
	async def reverse_geocode(self, coordinates: Coordinates) -> str | None:
		"""District name for ``coordinates``, or ``None`` when unknown."""
		...


class StaticLocationProvider:
	"""Serves a fix captured by the device; unavailable when none was sent."""

	def __init__(self, coordinates: Coordinates | None = None) -> None:
		self.coordinates = coordinates

	async def get_current_coordinates(self) -> Coordinates | None:
		return self.coordinates

	async def is_available(self) -> bool:
		return self.coordinates is not None


class StaticReverseGeocoder:
	"""Returns a district the device already geocoded on its side."""

	def __init__(self, district: str | None = None) -> None:
		self.district = district

	async def reverse_geocode(self, coordinates: Coordinates) -> str | None:
		if self.district is None or not self.district.strip():
			return None
		return self.district.strip()
