"""Offline farming assistant: keyword matching over canned answers.

A question is matched to a crop first and then to a topic. Crop answers win
over general answers, and a crop without the asked topic answers with its
overview. Entries missing in the requested language fall back to English.
"""

from __future__ import annotations

import logging

from agrisync.errors import MalformedInputError
from agrisync.knowledge_base import KnowledgeBase
from agrisync.models.enums import LanguageEnum
from agrisync.models.knowledge import AssistantCrop
from agrisync.schemas.assistant import AskResponse, QuickActionRead

_logger = logging.getLogger("agrisync.assistant")


class AssistantService:
	def __init__(self, knowledge_base: KnowledgeBase):
		self.tables = knowledge_base.assistant

	def classify_topic(self, question: str) -> str | None:
		normalized = question.casefold()
		for topic, keywords in self.tables.topic_keywords.items():
			if any(keyword in normalized for keyword in keywords):
				return topic
		return None

	def match_crop(self, question: str) -> str | None:
		normalized = question.casefold()
		for crop_name, crop in self.tables.crops.items():
			if any(keyword in normalized for keyword in crop.keywords):
				return crop_name
		return None

	def ask(self, question: str, language: LanguageEnum = LanguageEnum.en) -> AskResponse:
		if not question or not question.strip():
			raise MalformedInputError("question must not be blank")

		crop_name = self.match_crop(question)
		topic = self.classify_topic(question)
		answer: str | None = None

		if crop_name is not None:
			crop = self.tables.crops[crop_name]
			if topic is not None:
				answer = self._localized(crop.answers, topic, language)
			if answer is None:
				topic = None
				answer = self._overview(crop, language)
		elif topic is not None:
			answer = self._localized(self.tables.general, topic, language)
			if answer is None:
				topic = None

		answered = answer is not None
		if answer is None:
			answer = self.tables.fallback.get(language) or self.tables.fallback[LanguageEnum.en]

		_logger.info(
			"assistant_answered",
			extra={
				"language": language.value,
				"crop_name": crop_name,
				"topic": topic,
				"answered": answered,
			},
		)
		return AskResponse(
			question=question,
			language=language,
			crop_name=crop_name,
			topic=topic,
			answer=answer,
			answered=answered,
		)

	def get_quick_actions(self, language: LanguageEnum = LanguageEnum.en) -> list[QuickActionRead]:
		return [
			QuickActionRead(
				id=action.id,
				label=action.labels.get(language) or action.labels[LanguageEnum.en],
				query=action.query,
			)
			for action in self.tables.quick_actions
		]

	def _overview(self, crop: AssistantCrop, language: LanguageEnum) -> str:
		# overview topics always have an English answer
		return " ".join(self._localized(crop.answers, topic, language) or "" for topic in crop.overview_topics)

	@staticmethod
	def _localized(
		answers: dict[LanguageEnum, dict[str, str]],
		topic: str,
		language: LanguageEnum,
	) -> str | None:
		localized = answers.get(language, {}).get(topic)
		if localized is None:
			localized = answers.get(LanguageEnum.en, {}).get(topic)
		return localized
