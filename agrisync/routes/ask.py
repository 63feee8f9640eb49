"""Offline assistant routes: keyword Q&A and suggested questions."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from agrisync.dependencies import get_assistant_service
from agrisync.models.enums import LanguageEnum
from agrisync.schemas.assistant import AskRequest, AskResponse, QuickActionListRead
from agrisync.services.assistant_service import AssistantService

router = APIRouter(prefix="/ask", tags=["ask"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="ask failure")


@router.post("", response_model=AskResponse)
async def ask(
	payload: AskRequest,
	service: AssistantService = Depends(get_assistant_service),
) -> AskResponse:
	try:
		return service.ask(payload.question, payload.language)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/quick-actions", response_model=QuickActionListRead)
async def get_quick_actions(
	language: LanguageEnum = Query(default=LanguageEnum.en),
	service: AssistantService = Depends(get_assistant_service),
) -> QuickActionListRead:
	return QuickActionListRead(items=service.get_quick_actions(language))
