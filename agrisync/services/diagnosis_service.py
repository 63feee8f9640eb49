"""Symptom-based diagnosis with a Jaccard-like score.

A selected symptom matches a declared symptom when, case-insensitively, one
string contains the other or the word set of one contains the word set of the
other. Each selected symptom counts at most once per candidate::

    union = |selected| + |candidate.symptoms| - match_count
    match_percentage = round_half_up(100 * match_count / union)

Several selected symptoms may hit the same declared symptom, which can push
the ratio past 1. The score is therefore capped at 99 unless every selected
symptom and every declared symptom found a partner.
"""

from __future__ import annotations

import logging
import math

from agrisync.errors import MalformedInputError, UnknownCropError
from agrisync.knowledge_base import GENERAL_BUCKET, KnowledgeBase
from agrisync.models.enums import DiseaseTypeEnum
from agrisync.models.knowledge import DiseaseRecord, EmergencyContact
from agrisync.schemas.diagnosis import DiagnosisResult

_logger = logging.getLogger("agrisync.diagnosis")


def _words(text: str) -> frozenset[str]:
	return frozenset(text.split())


def symptoms_overlap(selected: str, declared: str) -> bool:
	left = selected.strip().casefold()
	right = declared.strip().casefold()
	if not left or not right:
		return False
	if left in right or right in left:
		return True
	left_words, right_words = _words(left), _words(right)
	return left_words <= right_words or right_words <= left_words


def match_percentage(match_count: int, selected_count: int, declared_count: int, covered_count: int) -> int:
	"""Half-up score; 100 only when every selected and every declared symptom matched."""
	union = selected_count + declared_count - match_count
	if union <= 0:
		return 0
	score = math.floor(100 * match_count / union + 0.5)
	if match_count < selected_count or covered_count < declared_count:
		return min(99, score)
	return min(100, score)


def normalize_symptoms(symptoms: list[str] | set[str] | tuple[str, ...]) -> list[str]:
	"""Strip blanks and drop case-insensitive duplicates, keeping first spelling."""
	seen: set[str] = set()
	unique: list[str] = []
	for symptom in symptoms:
		cleaned = symptom.strip()
		key = cleaned.casefold()
		if not cleaned or key in seen:
			continue
		seen.add(key)
		unique.append(cleaned)
	return unique


class DiagnosisService:
	def __init__(self, knowledge_base: KnowledgeBase):
		self.knowledge_base = knowledge_base

	def diagnose_by_symptoms(
		self,
		crop_name: str,
		symptoms: list[str] | set[str] | tuple[str, ...],
	) -> list[DiagnosisResult]:
		candidates = self._candidates(crop_name)
		selected = normalize_symptoms(symptoms)
		if not selected:
			return []

		results: list[DiagnosisResult] = []
		for record in candidates:
			match_count = sum(
				1
				for symptom in selected
				if any(symptoms_overlap(symptom, declared) for declared in record.symptoms)
			)
			covered_count = sum(
				1
				for declared in record.symptoms
				if any(symptoms_overlap(symptom, declared) for symptom in selected)
			)
			percentage = match_percentage(match_count, len(selected), len(record.symptoms), covered_count)
			if percentage == 0:
				continue
			results.append(
				DiagnosisResult(
					**record.model_dump(),
					match_count=match_count,
					match_percentage=percentage,
				)
			)

		# sorted() is stable, ties keep table order
		results = sorted(results, key=lambda result: result.match_percentage, reverse=True)
		_logger.info(
			"diagnosis_completed",
			extra={
				"crop_name": crop_name,
				"symptoms": len(selected),
				"candidates": len(candidates),
				"matches": len(results),
			},
		)
		return results

	def get_common_symptoms(self, crop_name: str) -> list[str]:
		symptoms = {symptom for record in self._candidates(crop_name) for symptom in record.symptoms}
		return sorted(symptoms)

	def get_available_crops(self) -> list[str]:
		"""Crops with a disease table, in knowledge-base order."""
		names = [name for name in self.knowledge_base.crop_names() if self.knowledge_base.has_disease_bucket(name)]
		listed = {name.casefold() for name in names}
		extra = [
			bucket.capitalize()
			for bucket in self.knowledge_base.diseases
			if bucket != GENERAL_BUCKET and bucket not in listed
		]
		return [*names, *extra]

	def get_disease_by_id(self, disease_id: str) -> DiseaseRecord | None:
		for records in self.knowledge_base.diseases.values():
			for record in records:
				if record.id == disease_id:
					return record
		return None

	def get_diseases_by_type(self, crop_name: str, disease_type: DiseaseTypeEnum) -> list[DiseaseRecord]:
		return [record for record in self._candidates(crop_name) if record.type == disease_type]

	def get_preventive_tips(self, crop_name: str) -> list[str]:
		key = crop_name.strip().casefold()
		tips = self.knowledge_base.preventive_tips
		return list(tips.get(key) or tips.get(GENERAL_BUCKET, ()))

	def get_emergency_contacts(self) -> list[EmergencyContact]:
		return list(self.knowledge_base.emergency_contacts)

	def _candidates(self, crop_name: str) -> list[DiseaseRecord]:
		if not crop_name or not crop_name.strip():
			raise MalformedInputError("crop_name must not be blank")
		if not (self.knowledge_base.has_crop(crop_name) or self.knowledge_base.has_disease_bucket(crop_name)):
			raise UnknownCropError(crop_name)
		return self.knowledge_base.diseases_for(crop_name)
