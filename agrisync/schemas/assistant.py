"""Pydantic schemas for the offline assistant endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from agrisync.models.enums import LanguageEnum


class AskRequest(BaseModel):
	model_config = ConfigDict(str_strip_whitespace=True)

	question: str = Field(min_length=1, max_length=2000)
	language: LanguageEnum = LanguageEnum.en


class AskResponse(BaseModel):
	question: str
	language: LanguageEnum
	crop_name: str | None = None
	topic: str | None = None
	answer: str
	answered: bool


class QuickActionRead(BaseModel):
	id: int
	label: str
	query: str


class QuickActionListRead(BaseModel):
	items: list[QuickActionRead] = Field(default_factory=list)
