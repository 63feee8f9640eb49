"""48-hour advisory routes."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status

from agrisync.dependencies import (
	build_region_resolver,
	get_advisory_service,
	get_kv_store,
	get_request_region,
)
from agrisync.knowledge_base import KnowledgeBase, get_knowledge_base
from agrisync.schemas.advisory import (
	CropAdvisoryResponse,
	PortfolioInsightsRequest,
	PortfolioInsightsResponse,
)
from agrisync.schemas.region import Region
from agrisync.services.advisory_service import AdvisoryService
from agrisync.services.stores import KeyValueStore

router = APIRouter(prefix="/advisory", tags=["advisory"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="advisory failure")


@router.post("/insights", response_model=PortfolioInsightsResponse)
async def generate_portfolio_insights(
	payload: PortfolioInsightsRequest,
	knowledge_base: KnowledgeBase = Depends(get_knowledge_base),
	store: KeyValueStore = Depends(get_kv_store),
	service: AdvisoryService = Depends(get_advisory_service),
) -> PortfolioInsightsResponse:
	resolver = build_region_resolver(knowledge_base, store, payload.coordinates, payload.district)
	region = await resolver.resolve_region()
	try:
		items = service.generate_portfolio_insights(payload.crops, region)
	except Exception as exc:
		raise _map_error(exc) from exc
	return PortfolioInsightsResponse(region=region, generated_at=datetime.now(UTC), items=items)


@router.post("/{crop_name}", response_model=CropAdvisoryResponse)
async def build_crop_advisory(
	crop_name: str,
	sowing_date: str = Query(min_length=1),
	region: Region = Depends(get_request_region),
	service: AdvisoryService = Depends(get_advisory_service),
) -> CropAdvisoryResponse:
	try:
		return service.build_crop_advisory(crop_name, sowing_date, region)
	except Exception as exc:
		raise _map_error(exc) from exc
