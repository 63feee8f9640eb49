"""Region resolution and manual location override routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from agrisync.dependencies import get_region_resolver
from agrisync.schemas.region import (
	LocationSourceResponse,
	ManualLocationRequest,
	ManualLocationResponse,
	Region,
)
from agrisync.services.region_service import RegionResolver

router = APIRouter(prefix="/region", tags=["region"])


@router.get("", response_model=Region)
async def resolve_region(resolver: RegionResolver = Depends(get_region_resolver)) -> Region:
	return await resolver.resolve_region()


@router.get("/source", response_model=LocationSourceResponse)
async def get_location_source(resolver: RegionResolver = Depends(get_region_resolver)) -> LocationSourceResponse:
	return LocationSourceResponse(source=await resolver.get_location_source())


@router.put("/manual", response_model=ManualLocationResponse)
async def set_manual_location(
	payload: ManualLocationRequest,
	resolver: RegionResolver = Depends(get_region_resolver),
) -> ManualLocationResponse:
	if not await resolver.set_manual_location(payload.state, payload.district):
		raise HTTPException(
			status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
			detail="manual location could not be stored",
		)
	return ManualLocationResponse(ok=True)


@router.delete("/manual", response_model=ManualLocationResponse)
async def clear_manual_location(resolver: RegionResolver = Depends(get_region_resolver)) -> ManualLocationResponse:
	return ManualLocationResponse(ok=await resolver.clear_manual_location())
