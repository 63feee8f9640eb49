"""Crop timeline and harvest calculator; projects static schedules onto a sowing date."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta

from agrisync.errors import MalformedInputError
from agrisync.knowledge_base import KnowledgeBase
from agrisync.models.enums import HarvestTypeEnum, TemporalStatusEnum
from agrisync.models.knowledge import CropDefinition
from agrisync.schemas.timeline import (
	ContinuousHarvestInfo,
	GrowthStageStatus,
	HarvestInfo,
	SingleHarvestInfo,
	TimelineEntry,
)

DateInput = date | datetime | str


def parse_sowing_date(value: DateInput) -> date:
	"""Coerce a date, datetime or ISO-8601 string to a calendar date."""
	if isinstance(value, datetime):
		return value.date()
	if isinstance(value, date):
		return value
	if not isinstance(value, str) or not value.strip():
		raise MalformedInputError(f"invalid sowing date: {value!r}")

	text = value.strip()
	try:
		return date.fromisoformat(text)
	except ValueError:
		pass
	try:
		return datetime.fromisoformat(text).date()
	except ValueError as exc:
		raise MalformedInputError(f"invalid sowing date: {value!r}") from exc


def days_between(sowing_date: date, today: date) -> int:
	"""Whole calendar days elapsed since sowing; negative for future sowing."""
	return (today - sowing_date).days


def _status(day_offset: int, days_since_sowing: int) -> TemporalStatusEnum:
	if day_offset == days_since_sowing:
		return TemporalStatusEnum.today
	if day_offset < days_since_sowing:
		return TemporalStatusEnum.past
	return TemporalStatusEnum.future


class TimelineService:
	"""Timeline, upcoming-task, harvest and growth-stage calculations."""

	def __init__(self, knowledge_base: KnowledgeBase, clock: Callable[[], datetime] | None = None):
		self.knowledge_base = knowledge_base
		self.clock = clock or (lambda: datetime.now(UTC))

	def list_crops(self) -> list[str]:
		return self.knowledge_base.crop_names()

	def get_crop(self, crop_name: str) -> CropDefinition:
		return self.knowledge_base.get_crop(crop_name)

	def compute_timeline(
		self,
		crop_name: str,
		sowing_date: DateInput,
		today: date | None = None,
	) -> list[TimelineEntry]:
		crop = self.knowledge_base.get_crop(crop_name)
		sown = parse_sowing_date(sowing_date)
		elapsed = days_between(sown, today or self.clock().date())

		return [
			TimelineEntry(
				day_offset=item.day_offset,
				task_name=item.task_name,
				category=item.category,
				description=item.description,
				absolute_date=sown + timedelta(days=item.day_offset),
				days_since_sowing=elapsed,
				days_until=item.day_offset - elapsed,
				status=_status(item.day_offset, elapsed),
			)
			for item in crop.treatment_schedule
		]

	def get_upcoming_tasks(
		self,
		crop_name: str,
		sowing_date: DateInput,
		limit: int = 3,
		today: date | None = None,
	) -> list[TimelineEntry]:
		"""First ``limit`` today/future tasks, in schedule order."""
		if limit < 0:
			raise MalformedInputError(f"limit must be >= 0, got {limit}")
		timeline = self.compute_timeline(crop_name, sowing_date, today=today)
		upcoming = [entry for entry in timeline if entry.status != TemporalStatusEnum.past]
		return upcoming[:limit]

	def compute_harvest_info(
		self,
		crop_name: str,
		sowing_date: DateInput,
		today: date | None = None,
	) -> HarvestInfo:
		crop = self.knowledge_base.get_crop(crop_name)
		sown = parse_sowing_date(sowing_date)
		elapsed = days_between(sown, today or self.clock().date())

		if crop.harvest_type == HarvestTypeEnum.continuous:
			assert crop.first_harvest_day is not None
			assert crop.last_harvest_day is not None
			assert crop.plucking_frequency_days is not None
			return ContinuousHarvestInfo(
				first_harvest_date=sown + timedelta(days=crop.first_harvest_day),
				last_harvest_date=sown + timedelta(days=crop.last_harvest_day),
				days_to_first_harvest=crop.first_harvest_day - elapsed,
				days_to_last_harvest=crop.last_harvest_day - elapsed,
				is_harvest_window=crop.first_harvest_day <= elapsed <= crop.last_harvest_day,
				plucking_frequency_days=crop.plucking_frequency_days,
			)

		days_to_harvest = crop.duration_days - elapsed
		return SingleHarvestInfo(
			harvest_date=sown + timedelta(days=crop.duration_days),
			days_to_harvest=days_to_harvest,
			is_ready=days_to_harvest <= 0,
		)

	def get_current_stage(
		self,
		crop_name: str,
		sowing_date: DateInput,
		today: date | None = None,
	) -> GrowthStageStatus | None:
		"""Growth stage containing today; ``None`` before sowing or without stages."""
		crop = self.knowledge_base.get_crop(crop_name)
		sown = parse_sowing_date(sowing_date)
		elapsed = days_between(sown, today or self.clock().date())
		if elapsed < 0 or not crop.growth_stages:
			return None

		# Ranges are half-open except the last, which also absorbs overrun.
		stage = crop.growth_stages[-1]
		for candidate in crop.growth_stages[:-1]:
			if candidate.day_range_start <= elapsed < candidate.day_range_end:
				stage = candidate
				break

		progress = min(100, round(100 * elapsed / crop.duration_days))
		return GrowthStageStatus(
			stage_name=stage.stage_name,
			icon_tag=stage.icon_tag,
			day_range_start=stage.day_range_start,
			day_range_end=stage.day_range_end,
			days_since_sowing=elapsed,
			progress_percent=progress,
		)
