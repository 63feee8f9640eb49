"""Crop catalogue, timeline, harvest and growth-stage routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from agrisync.dependencies import get_timeline_service
from agrisync.schemas.timeline import (
	CropListRead,
	CropRead,
	HarvestResponse,
	StageResponse,
	TimelineResponse,
)
from agrisync.services.timeline_service import TimelineService, parse_sowing_date

router = APIRouter(prefix="/crops", tags=["crops"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="crop timeline failure")


@router.get("", response_model=CropListRead)
async def list_crops(service: TimelineService = Depends(get_timeline_service)) -> CropListRead:
	return CropListRead(items=service.list_crops())


@router.get("/{crop_name}", response_model=CropRead)
async def get_crop(crop_name: str, service: TimelineService = Depends(get_timeline_service)) -> CropRead:
	try:
		return CropRead(crop=service.get_crop(crop_name))
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/{crop_name}/timeline", response_model=TimelineResponse)
async def get_timeline(
	crop_name: str,
	sowing_date: str = Query(min_length=1),
	service: TimelineService = Depends(get_timeline_service),
) -> TimelineResponse:
	try:
		crop = service.get_crop(crop_name)
		items = service.compute_timeline(crop.name, sowing_date)
		return TimelineResponse(crop_name=crop.name, sowing_date=parse_sowing_date(sowing_date), items=items)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/{crop_name}/upcoming", response_model=TimelineResponse)
async def get_upcoming_tasks(
	crop_name: str,
	sowing_date: str = Query(min_length=1),
	limit: int = Query(default=3),
	service: TimelineService = Depends(get_timeline_service),
) -> TimelineResponse:
	try:
		crop = service.get_crop(crop_name)
		items = service.get_upcoming_tasks(crop.name, sowing_date, limit=limit)
		return TimelineResponse(crop_name=crop.name, sowing_date=parse_sowing_date(sowing_date), items=items)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/{crop_name}/harvest", response_model=HarvestResponse)
async def get_harvest_info(
	crop_name: str,
	sowing_date: str = Query(min_length=1),
	service: TimelineService = Depends(get_timeline_service),
) -> HarvestResponse:
	try:
		crop = service.get_crop(crop_name)
		harvest = service.compute_harvest_info(crop.name, sowing_date)
		return HarvestResponse(crop_name=crop.name, sowing_date=parse_sowing_date(sowing_date), harvest=harvest)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/{crop_name}/stage", response_model=StageResponse)
async def get_current_stage(
	crop_name: str,
	sowing_date: str = Query(min_length=1),
	service: TimelineService = Depends(get_timeline_service),
) -> StageResponse:
	try:
		crop = service.get_crop(crop_name)
		stage = service.get_current_stage(crop.name, sowing_date)
		return StageResponse(crop_name=crop.name, sowing_date=parse_sowing_date(sowing_date), stage=stage)
	except Exception as exc:
		raise _map_error(exc) from exc
