"""Symptom diagnosis, disease lookup and advisory-contact routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from agrisync.dependencies import get_diagnosis_service
from agrisync.models.enums import DiseaseTypeEnum
from agrisync.models.knowledge import DiseaseRecord
from agrisync.schemas.diagnosis import (
	DiagnosisRequest,
	DiagnosisResponse,
	DiseaseListRead,
	EmergencyContactsRead,
	PreventiveTipsRead,
	SymptomListRead,
)
from agrisync.schemas.timeline import CropListRead
from agrisync.services.diagnosis_service import DiagnosisService, normalize_symptoms

router = APIRouter(prefix="/diagnosis", tags=["diagnosis"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="diagnosis failure")


@router.get("/crops", response_model=CropListRead)
async def get_available_crops(service: DiagnosisService = Depends(get_diagnosis_service)) -> CropListRead:
	return CropListRead(items=service.get_available_crops())


@router.get("/contacts", response_model=EmergencyContactsRead)
async def get_emergency_contacts(
	service: DiagnosisService = Depends(get_diagnosis_service),
) -> EmergencyContactsRead:
	return EmergencyContactsRead(items=service.get_emergency_contacts())


@router.get("/diseases/{disease_id}", response_model=DiseaseRecord)
async def get_disease(
	disease_id: str,
	service: DiagnosisService = Depends(get_diagnosis_service),
) -> DiseaseRecord:
	record = service.get_disease_by_id(disease_id)
	if record is None:
		raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown disease: {disease_id!r}")
	return record


@router.get("/{crop_name}/symptoms", response_model=SymptomListRead)
async def get_common_symptoms(
	crop_name: str,
	service: DiagnosisService = Depends(get_diagnosis_service),
) -> SymptomListRead:
	try:
		return SymptomListRead(crop_name=crop_name, items=service.get_common_symptoms(crop_name))
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/{crop_name}/tips", response_model=PreventiveTipsRead)
async def get_preventive_tips(
	crop_name: str,
	service: DiagnosisService = Depends(get_diagnosis_service),
) -> PreventiveTipsRead:
	return PreventiveTipsRead(crop_name=crop_name, items=service.get_preventive_tips(crop_name))


@router.get("/{crop_name}/diseases", response_model=DiseaseListRead)
async def get_diseases(
	crop_name: str,
	disease_type: DiseaseTypeEnum = Query(alias="type"),
	service: DiagnosisService = Depends(get_diagnosis_service),
) -> DiseaseListRead:
	try:
		return DiseaseListRead(items=service.get_diseases_by_type(crop_name, disease_type))
	except Exception as exc:
		raise _map_error(exc) from exc


@router.post("/{crop_name}", response_model=DiagnosisResponse)
async def diagnose(
	crop_name: str,
	payload: DiagnosisRequest,
	service: DiagnosisService = Depends(get_diagnosis_service),
) -> DiagnosisResponse:
	try:
		results = service.diagnose_by_symptoms(crop_name, payload.symptoms)
	except Exception as exc:
		raise _map_error(exc) from exc
	return DiagnosisResponse(
		crop_name=crop_name,
		symptoms=normalize_symptoms(payload.symptoms),
		results=results,
	)
