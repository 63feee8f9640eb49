"""Pydantic schemas for symptom-based diagnosis."""

from __future__ import annotations

from pydantic import BaseModel, Field

from agrisync.models.knowledge import DiseaseRecord, EmergencyContact


class DiagnosisResult(DiseaseRecord):
	match_count: int = Field(ge=0)
	match_percentage: int = Field(ge=0, le=100)


class DiagnosisRequest(BaseModel):
	symptoms: list[str] = Field(default_factory=list, max_length=50)


class DiagnosisResponse(BaseModel):
	crop_name: str
	symptoms: list[str]
	results: list[DiagnosisResult] = Field(default_factory=list)


class SymptomListRead(BaseModel):
	crop_name: str
	items: list[str]


class DiseaseListRead(BaseModel):
	items: list[DiseaseRecord]


class PreventiveTipsRead(BaseModel):
	crop_name: str
	items: list[str]


class EmergencyContactsRead(BaseModel):
	items: list[EmergencyContact]
