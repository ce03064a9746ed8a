"""Events API routes, including event-to-group links."""

from __future__ import annotations

from typing import Any, Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from admin_console.api import envelope
from admin_console.api.deps import get_events_repo, get_relations_repo, list_query
from admin_console.domain.events.models import Event, EventWithGroups
from admin_console.domain.events.repo import EventsRepository
from admin_console.domain.events.schemas import EventCreateRequest, EventUpdateRequest
from admin_console.domain.query import ListQuery
from admin_console.domain.relations.repo import RelationsRepository
from admin_console.domain.relations.schemas import EventGroupRequest

router = APIRouter(prefix="/api/events", tags=["events"])

StatusFilter = Literal["all", "scheduled", "active", "completed", "cancelled"]


@router.get("", response_model=envelope.PaginatedResponse[EventWithGroups])
async def list_events_endpoint(
	query: ListQuery = Depends(list_query),
	status_filter: Optional[StatusFilter] = Query(default=None, alias="status"),
	repo: EventsRepository = Depends(get_events_repo),
) -> Any:
	query.filters = {"status": status_filter}
	return envelope.paginated(await repo.list_events(query))


@router.post("/group", response_model=envelope.ApiResponse[None])
async def add_event_to_group_endpoint(
	payload: EventGroupRequest,
	repo: RelationsRepository = Depends(get_relations_repo),
) -> Any:
	await repo.add_event_to_group(payload.event_id, payload.group_id)
	return envelope.ok(message="Event added to group successfully")


@router.delete("/group", response_model=envelope.ApiResponse[None])
async def remove_event_from_group_endpoint(
	payload: EventGroupRequest,
	repo: RelationsRepository = Depends(get_relations_repo),
) -> Any:
	await repo.remove_event_from_group(payload.event_id, payload.group_id)
	return envelope.ok(message="Event removed from group successfully")


@router.get("/{event_id}", response_model=envelope.ApiResponse[EventWithGroups])
async def get_event_endpoint(event_id: UUID, repo: EventsRepository = Depends(get_events_repo)) -> Any:
	return envelope.ok(await repo.get_event(event_id))


@router.post("", response_model=envelope.ApiResponse[Event], status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(payload: EventCreateRequest, repo: EventsRepository = Depends(get_events_repo)) -> Any:
	event = await repo.create_event(
		name=payload.name,
		description=payload.description,
		time_start=payload.time_start,
		time_end=payload.time_end,
		status=payload.status,
	)
	return envelope.ok(event, message="Event created successfully")


@router.put("/{event_id}", response_model=envelope.ApiResponse[Event])
async def update_event_endpoint(
	event_id: UUID,
	payload: EventUpdateRequest,
	repo: EventsRepository = Depends(get_events_repo),
) -> Any:
	event = await repo.update_event(event_id, payload.changes())
	return envelope.ok(event, message="Event updated successfully")


@router.delete("/{event_id}", response_model=envelope.ApiResponse[None])
async def delete_event_endpoint(event_id: UUID, repo: EventsRepository = Depends(get_events_repo)) -> Any:
	await repo.delete_event(event_id)
	return envelope.ok(message="Event deleted successfully")
