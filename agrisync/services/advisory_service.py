"""48-hour advisory rule engine.

Rules are independent; any number may fire per crop. Output order follows
rule evaluation order (irrigation, fertilizer, pest), not severity.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, date, datetime

from agrisync.config import Settings, get_settings
from agrisync.errors import MalformedInputError
from agrisync.knowledge_base import KnowledgeBase
from agrisync.models.enums import AdvisoryTypeEnum, SeverityEnum
from agrisync.models.knowledge import SoilProfile
from agrisync.schemas.advisory import Advisory, CropAdvisoryResponse, RegisteredCrop
from agrisync.schemas.region import Region
from agrisync.schemas.weather import WeatherSnapshot
from agrisync.services.soil_service import SoilService
from agrisync.services.timeline_service import DateInput, days_between, parse_sowing_date
from agrisync.services.weather_service import WeatherService

_logger = logging.getLogger("agrisync.advisory")

IRRIGATION_MESSAGE = "Soil moisture is low. Irrigate immediately."
FERTILIZER_MESSAGE = "Apply first dose of Nitrogen (Urea)."
PEST_MESSAGE = "High humidity detected. Watch out for Fungal Blight."
HEATWAVE_MESSAGE = "Heatwave alert! Protect young saplings from direct sun."
GENERAL_CROP = "General"


class AdvisoryService:
	def __init__(
		self,
		knowledge_base: KnowledgeBase,
		soil_service: SoilService,
		weather_service: WeatherService,
		settings: Settings | None = None,
		clock: Callable[[], datetime] | None = None,
	):
		self.knowledge_base = knowledge_base
		self.soil_service = soil_service
		self.weather_service = weather_service
		self.settings = settings or get_settings()
		self.clock = clock or (lambda: datetime.now(UTC))

	def generate_advisory(
		self,
		crop_name: str,
		soil: SoilProfile,
		weather: WeatherSnapshot,
		days_since_sowing: int,
	) -> list[Advisory]:
		if not crop_name or not crop_name.strip():
			raise MalformedInputError("crop_name must not be blank")

		advisories: list[Advisory] = []

		moisture_floor = soil.moisture_floor_percent
		if (
			weather.rainfall_mm < self.settings.irrigation_rainfall_threshold_mm
			and moisture_floor is not None
			and moisture_floor < self.settings.irrigation_moisture_threshold
		):
			advisories.append(
				self._advisory(AdvisoryTypeEnum.irrigation, SeverityEnum.high, IRRIGATION_MESSAGE, crop_name)
			)

		if self.settings.fertilizer_window_start_day < days_since_sowing < self.settings.fertilizer_window_end_day:
			advisories.append(
				self._advisory(AdvisoryTypeEnum.fertilizer, SeverityEnum.medium, FERTILIZER_MESSAGE, crop_name)
			)

		if (
			weather.humidity_percent > self.settings.pest_humidity_threshold
			and weather.temperature_c > self.settings.pest_temperature_threshold_c
		):
			advisories.append(self._advisory(AdvisoryTypeEnum.pest, SeverityEnum.medium, PEST_MESSAGE, crop_name))

		return advisories

	def build_crop_advisory(
		self,
		crop_name: str,
		sowing_date: DateInput,
		region: Region,
		today: date | None = None,
	) -> CropAdvisoryResponse:
		crop = self.knowledge_base.get_crop(crop_name)
		sown = parse_sowing_date(sowing_date)
		elapsed = days_between(sown, today or self.clock().date())

		soil = self.soil_service.get_soil_profile(region, crop.name)
		weather = self.weather_service.get_current_weather(region)
		return CropAdvisoryResponse(
			crop_name=crop.name,
			days_since_sowing=elapsed,
			region=region,
			soil=soil,
			weather=weather,
			advisories=self.generate_advisory(crop.name, soil, weather, elapsed),
		)

	def generate_portfolio_insights(
		self,
		crops: list[RegisteredCrop],
		region: Region,
		today: date | None = None,
	) -> list[Advisory]:
		today = today or self.clock().date()

		advisories: list[Advisory] = []
		for registered in crops:
			crop = self.knowledge_base.get_crop(registered.name)
			crop_region = registered.region or region
			soil = self.soil_service.get_soil_profile(crop_region, crop.name)
			weather = self.weather_service.get_current_weather(crop_region)
			elapsed = days_between(registered.sowing_date, today)
			advisories.extend(self.generate_advisory(crop.name, soil, weather, elapsed))

		shared_weather = self.weather_service.get_current_weather(region)
		if shared_weather.temperature_c > self.settings.heatwave_threshold_c:
			advisories.append(
				self._advisory(AdvisoryTypeEnum.weather, SeverityEnum.high, HEATWAVE_MESSAGE, GENERAL_CROP)
			)

		_logger.info(
			"portfolio_insights_generated",
			extra={
				"crops": len(crops),
				"advisories": len(advisories),
				"state": region.state,
				"district": region.district,
			},
		)
		return advisories

	def _advisory(
		self,
		advisory_type: AdvisoryTypeEnum,
		severity: SeverityEnum,
		message: str,
		crop_name: str,
	) -> Advisory:
		return Advisory(
			id=uuid.uuid4(),
			type=advisory_type,
			severity=severity,
			message=message,
			crop_name=crop_name,
			timestamp=self.clock(),
		)
