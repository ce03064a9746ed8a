"""asyncpg repository for console events."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional
from uuid import UUID

from admin_console.domain.common.models import as_utc
from admin_console.domain.common.repository import Repository
from admin_console.domain.events.models import Event, EventWithGroups
from admin_console.domain.events.schemas import TIME_ORDER_MESSAGE
from admin_console.domain.exceptions import NotFoundError, ValidationError, storage_errors
from admin_console.domain.query import Column, ListQuery, Page, WhereBuilder, build_assignments

EVENT_COLUMNS = "e.uuid, e.name, e.description, e.time_start, e.time_end, e.status, e.created_at, e.updated_at"
RETURNING = "RETURNING uuid, name, description, time_start, time_end, status, created_at, updated_at"

SELECT_WITH_GROUPS = f"""
	SELECT {EVENT_COLUMNS},
		COALESCE(
			json_agg(json_build_object('uuid', g.uuid, 'name', g.name, 'description', g.description))
				FILTER (WHERE g.uuid IS NOT NULL),
			'[]'
		) AS groups
	FROM events e
	LEFT JOIN relation_group_event rge ON e.uuid = rge.event_id
	LEFT JOIN groups g ON rge.group_id = g.uuid
"""

UPDATABLE = {
	"name": Column("name"),
	"description": Column("description"),
	"time_start": Column("time_start", encode=as_utc),
	"time_end": Column("time_end", encode=as_utc),
	"status": Column("status"),
}


def _check_order(time_start: Optional[datetime], time_end: Optional[datetime]) -> None:
	if time_start is None or time_end is None:
		return
	if as_utc(time_end) <= as_utc(time_start):
		raise ValidationError(TIME_ORDER_MESSAGE)


class EventsRepository(Repository):
	entity = "event"

	async def list_events(self, query: ListQuery) -> Page[EventWithGroups]:
		where = WhereBuilder().search(query.search, "e.name", "e.description")
		status = query.filters.get("status")
		if status and status != "all":
			where.equals("e.status", status)
		with storage_errors("Failed to fetch events"):
			return await self._paginate(
				select_sql=SELECT_WITH_GROUPS,
				count_sql="SELECT COUNT(*) FROM events e",
				group_by="e.uuid",
				order_by="e.time_start DESC",
				where=where,
				query=query,
				build=EventWithGroups.from_record,
			)

	async def get_event(self, event_id: UUID) -> EventWithGroups:
		with storage_errors("Failed to fetch event", event_id=str(event_id)):
			record = await self._fetchrow(f"{SELECT_WITH_GROUPS} WHERE e.uuid = $1 GROUP BY e.uuid", event_id)
		if record is None:
			raise NotFoundError("Event not found")
		return EventWithGroups.from_record(record)

	async def create_event(
		self,
		*,
		name: str,
		time_start: datetime,
		time_end: datetime,
		description: Optional[str] = None,
		status: str = "scheduled",
	) -> Event:
		_check_order(time_start, time_end)
		with storage_errors("Failed to create event"):
			record = await self._fetchrow(
				f"""
				INSERT INTO events (name, description, time_start, time_end, status)
				VALUES ($1, $2, $3, $4, $5)
				{RETURNING}
				""",
				name,
				description,
				as_utc(time_start),
				as_utc(time_end),
				status,
			)
		self._mutated("create")
		return Event.model_validate(dict(record))

	async def update_event(self, event_id: UUID, changes: Mapping[str, Any]) -> Event:
		if not changes:
			raise ValidationError("No fields to update")
		_check_order(changes.get("time_start"), changes.get("time_end"))
		params: list[Any] = []
		assignments = build_assignments(UPDATABLE, changes, params)
		params.append(event_id)
		predicate = f"uuid = ${len(params)}"
		# A lone boundary is checked against the stored one inside the same statement.
		if "time_start" in changes and "time_end" not in changes:
			params.append(as_utc(changes["time_start"]))
			predicate += f" AND time_end > ${len(params)}"
		elif "time_end" in changes and "time_start" not in changes:
			params.append(as_utc(changes["time_end"]))
			predicate += f" AND time_start < ${len(params)}"
		with storage_errors("Failed to update event", event_id=str(event_id)):
			record = await self._fetchrow(
				f"""
				UPDATE events SET {", ".join(assignments)}, updated_at = NOW()
				WHERE {predicate}
				{RETURNING}
				""",
				*params,
			)
			if record is None:
				if await self._exists("events", event_id):
					raise ValidationError(TIME_ORDER_MESSAGE)
				raise NotFoundError("Event not found")
		self._mutated("update")
		return Event.model_validate(dict(record))

	async def delete_event(self, event_id: UUID) -> None:
		with storage_errors("Failed to delete event", event_id=str(event_id)):
			deleted = await self._fetchval("DELETE FROM events WHERE uuid = $1 RETURNING uuid", event_id)
		if deleted is None:
			raise NotFoundError("Event not found")
		self._mutated("delete")
