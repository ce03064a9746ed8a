"""Groups API routes."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, status

from admin_console.api import envelope
from admin_console.api.deps import get_groups_repo, list_query
from admin_console.domain.groups.models import Group, GroupWithMembers
from admin_console.domain.groups.repo import GroupsRepository
from admin_console.domain.groups.schemas import GroupCreateRequest, GroupUpdateRequest
from admin_console.domain.query import ListQuery

router = APIRouter(prefix="/api/groups", tags=["groups"])


@router.get("", response_model=envelope.PaginatedResponse[GroupWithMembers])
async def list_groups_endpoint(
	query: ListQuery = Depends(list_query),
	repo: GroupsRepository = Depends(get_groups_repo),
) -> Any:
	return envelope.paginated(await repo.list_groups(query))


@router.get("/{group_id}", response_model=envelope.ApiResponse[GroupWithMembers])
async def get_group_endpoint(group_id: UUID, repo: GroupsRepository = Depends(get_groups_repo)) -> Any:
	return envelope.ok(await repo.get_group(group_id))


@router.post("", response_model=envelope.ApiResponse[Group], status_code=status.HTTP_201_CREATED)
async def create_group_endpoint(payload: GroupCreateRequest, repo: GroupsRepository = Depends(get_groups_repo)) -> Any:
	group = await repo.create_group(name=payload.name, description=payload.description)
	return envelope.ok(group, message="Group created successfully")


@router.put("/{group_id}", response_model=envelope.ApiResponse[Group])
async def update_group_endpoint(
	group_id: UUID,
	payload: GroupUpdateRequest,
	repo: GroupsRepository = Depends(get_groups_repo),
) -> Any:
	group = await repo.update_group(group_id, payload.changes())
	return envelope.ok(group, message="Group updated successfully")


@router.delete("/{group_id}", response_model=envelope.ApiResponse[None])
async def delete_group_endpoint(group_id: UUID, repo: GroupsRepository = Depends(get_groups_repo)) -> Any:
	await repo.delete_group(group_id)
	return envelope.ok(message="Group deleted successfully")
