"""Synthesized weather and farming advice routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from agrisync.dependencies import get_request_region, get_weather_service
from agrisync.schemas.region import Region
from agrisync.schemas.weather import (
	CurrentWeatherResponse,
	FarmingAdviceRequest,
	FarmingAdviceResponse,
	ForecastResponse,
)
from agrisync.services.weather_service import WeatherService, farming_advice

router = APIRouter(prefix="/weather", tags=["weather"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="weather failure")


@router.get("/current", response_model=CurrentWeatherResponse)
async def get_current_weather(
	region: Region = Depends(get_request_region),
	service: WeatherService = Depends(get_weather_service),
) -> CurrentWeatherResponse:
	snapshot = service.get_current_weather(region)
	return CurrentWeatherResponse(region=region, weather=snapshot, advice=service.get_farming_advice(snapshot))


@router.get("/forecast", response_model=ForecastResponse)
async def get_forecast(
	days: int = Query(default=7, le=30),
	region: Region = Depends(get_request_region),
	service: WeatherService = Depends(get_weather_service),
) -> ForecastResponse:
	try:
		return ForecastResponse(region=region, days=service.get_forecast(region, days=days))
	except Exception as exc:
		raise _map_error(exc) from exc


@router.post("/advice", response_model=FarmingAdviceResponse)
async def get_farming_advice(payload: FarmingAdviceRequest) -> FarmingAdviceResponse:
	return FarmingAdviceResponse(
		advice=farming_advice(payload.temperature_c, payload.humidity_percent, payload.rainfall_mm)
	)
