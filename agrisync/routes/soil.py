"""Soil classification routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from agrisync.dependencies import get_request_region, get_soil_service
from agrisync.models.knowledge import SoilProfile
from agrisync.schemas.region import Region
from agrisync.schemas.soil import SoilProfileResponse, SoilSuitability, SoilTypeListRead
from agrisync.services.soil_service import SoilService

router = APIRouter(prefix="/soil", tags=["soil"])


@router.get("", response_model=SoilProfileResponse)
async def get_soil_profile(
	crop: str | None = Query(default=None, max_length=100),
	region: Region = Depends(get_request_region),
	service: SoilService = Depends(get_soil_service),
) -> SoilProfileResponse:
	return SoilProfileResponse(region=region, crop_name=crop, profile=service.get_soil_profile(region, crop))


@router.get("/types", response_model=SoilTypeListRead)
async def list_soil_types(service: SoilService = Depends(get_soil_service)) -> SoilTypeListRead:
	return SoilTypeListRead(items=service.list_soil_types())


@router.get("/types/{soil_type}", response_model=SoilProfile)
async def get_soil_details(soil_type: str, service: SoilService = Depends(get_soil_service)) -> SoilProfile:
	return service.get_soil_details(soil_type)


@router.get("/types/{soil_type}/suitability", response_model=SoilSuitability)
async def get_suitability(
	soil_type: str,
	crop: str = Query(min_length=1, max_length=100),
	service: SoilService = Depends(get_soil_service),
) -> SoilSuitability:
	if not crop.strip():
		raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="crop must not be blank")
	return service.get_suitability(soil_type, crop.strip())
