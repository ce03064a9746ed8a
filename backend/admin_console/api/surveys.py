"""Surveys API routes, including survey-to-event links."""

from __future__ import annotations

from typing import Any, Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from admin_console.api import envelope
from admin_console.api.deps import get_relations_repo, get_surveys_repo, list_query
from admin_console.domain.query import ListQuery
from admin_console.domain.relations.repo import RelationsRepository
from admin_console.domain.relations.schemas import SurveyEventRequest
from admin_console.domain.surveys.models import Survey, SurveyWithEvents
from admin_console.domain.surveys.repo import SurveysRepository
from admin_console.domain.surveys.schemas import SurveyCreateRequest, SurveyUpdateRequest

router = APIRouter(prefix="/api/surveys", tags=["surveys"])


@router.get("", response_model=envelope.PaginatedResponse[SurveyWithEvents])
async def list_surveys_endpoint(
	query: ListQuery = Depends(list_query),
	status_filter: Optional[Literal["all", "active", "inactive", "completed"]] = Query(default=None, alias="status"),
	repo: SurveysRepository = Depends(get_surveys_repo),
) -> Any:
	query.filters = {"status": status_filter}
	return envelope.paginated(await repo.list_surveys(query))


@router.post("/event", response_model=envelope.ApiResponse[None])
async def add_survey_to_event_endpoint(
	payload: SurveyEventRequest,
	repo: RelationsRepository = Depends(get_relations_repo),
) -> Any:
	await repo.add_survey_to_event(payload.survey_id, payload.event_id, payload.file_final)
	return envelope.ok(message="Survey added to event successfully")


@router.delete("/event", response_model=envelope.ApiResponse[None])
async def remove_survey_from_event_endpoint(
	payload: SurveyEventRequest,
	repo: RelationsRepository = Depends(get_relations_repo),
) -> Any:
	await repo.remove_survey_from_event(payload.survey_id, payload.event_id)
	return envelope.ok(message="Survey removed from event successfully")


@router.get("/{survey_id}", response_model=envelope.ApiResponse[SurveyWithEvents])
async def get_survey_endpoint(survey_id: UUID, repo: SurveysRepository = Depends(get_surveys_repo)) -> Any:
	return envelope.ok(await repo.get_survey(survey_id))


@router.post("", response_model=envelope.ApiResponse[Survey], status_code=status.HTTP_201_CREATED)
async def create_survey_endpoint(payload: SurveyCreateRequest, repo: SurveysRepository = Depends(get_surveys_repo)) -> Any:
	survey = await repo.create_survey(
		name=payload.name,
		form=payload.form.model_dump(),
		set_point=payload.set_point,
		status=payload.status,
	)
	return envelope.ok(survey, message="Survey created successfully")


@router.put("/{survey_id}", response_model=envelope.ApiResponse[Survey])
async def update_survey_endpoint(
	survey_id: UUID,
	payload: SurveyUpdateRequest,
	repo: SurveysRepository = Depends(get_surveys_repo),
) -> Any:
	survey = await repo.update_survey(survey_id, payload.changes())
	return envelope.ok(survey, message="Survey updated successfully")


@router.delete("/{survey_id}", response_model=envelope.ApiResponse[None])
async def delete_survey_endpoint(survey_id: UUID, repo: SurveysRepository = Depends(get_surveys_repo)) -> Any:
	await repo.delete_survey(survey_id)
	return envelope.ok(message="Survey deleted successfully")
