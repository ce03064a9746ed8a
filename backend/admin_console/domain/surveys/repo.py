"""asyncpg repository for console surveys."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional
from uuid import UUID

from pydantic import BaseModel

from admin_console.domain.common.repository import Repository
from admin_console.domain.exceptions import NotFoundError, ValidationError, storage_errors
from admin_console.domain.query import Column, ListQuery, Page, WhereBuilder, build_assignments
from admin_console.domain.surveys.models import Survey, SurveyWithEvents

SURVEY_COLUMNS = "s.uuid, s.name, s.form, s.set_point, s.status, s.created_at, s.updated_at"
RETURNING = "RETURNING uuid, name, form, set_point, status, created_at, updated_at"

SELECT_WITH_EVENTS = f"""
	SELECT {SURVEY_COLUMNS},
		COALESCE(
			json_agg(json_build_object(
				'uuid', e.uuid, 'name', e.name, 'description', e.description,
				'time_start', e.time_start, 'time_end', e.time_end, 'status', e.status
			)) FILTER (WHERE e.uuid IS NOT NULL),
			'[]'
		) AS events
	FROM surveys s
	LEFT JOIN relation_event_survey res ON s.uuid = res.survey_id
	LEFT JOIN events e ON res.event_id = e.uuid
"""


def encode_form(form: Any) -> str:
	if isinstance(form, BaseModel):
		form = form.model_dump()
	return json.dumps(form)


UPDATABLE = {
	"name": Column("name"),
	"form": Column("form", cast="jsonb", encode=encode_form),
	"set_point": Column("set_point"),
	"status": Column("status"),
}


class SurveysRepository(Repository):
	entity = "survey"

	async def list_surveys(self, query: ListQuery) -> Page[SurveyWithEvents]:
		where = WhereBuilder().search(query.search, "s.name", "s.set_point")
		status = query.filters.get("status")
		if status and status != "all":
			where.equals("s.status", status)
		with storage_errors("Failed to fetch surveys"):
			return await self._paginate(
				select_sql=SELECT_WITH_EVENTS,
				count_sql="SELECT COUNT(*) FROM surveys s",
				group_by="s.uuid",
				order_by="s.created_at DESC",
				where=where,
				query=query,
				build=SurveyWithEvents.from_record,
			)

	async def get_survey(self, survey_id: UUID) -> SurveyWithEvents:
		with storage_errors("Failed to fetch survey", survey_id=str(survey_id)):
			record = await self._fetchrow(f"{SELECT_WITH_EVENTS} WHERE s.uuid = $1 GROUP BY s.uuid", survey_id)
		if record is None:
			raise NotFoundError("Survey not found")
		return SurveyWithEvents.from_record(record)

	async def create_survey(
		self,
		*,
		name: str,
		form: Any,
		set_point: Optional[str] = None,
		status: str = "active",
	) -> Survey:
		with storage_errors("Failed to create survey"):
			record = await self._fetchrow(
				f"""
				INSERT INTO surveys (name, form, set_point, status)
				VALUES ($1, $2::jsonb, $3, $4)
				{RETURNING}
				""",
				name,
				encode_form(form),
				set_point,
				status,
			)
		self._mutated("create")
		return Survey.from_record(record)

	async def update_survey(self, survey_id: UUID, changes: Mapping[str, Any]) -> Survey:
		if not changes:
			raise ValidationError("No fields to update")
		params: list[Any] = []
		assignments = build_assignments(UPDATABLE, changes, params)
		params.append(survey_id)
		with storage_errors("Failed to update survey", survey_id=str(survey_id)):
			record = await self._fetchrow(
				f"""
				UPDATE surveys SET {", ".join(assignments)}, updated_at = NOW()
				WHERE uuid = ${len(params)}
				{RETURNING}
				""",
				*params,
			)
		if record is None:
			raise NotFoundError("Survey not found")
		self._mutated("update")
		return Survey.from_record(record)

	async def delete_survey(self, survey_id: UUID) -> None:
		with storage_errors("Failed to delete survey", survey_id=str(survey_id)):
			deleted = await self._fetchval("DELETE FROM surveys WHERE uuid = $1 RETURNING uuid", survey_id)
		if deleted is None:
			raise NotFoundError("Survey not found")
		self._mutated("delete")
