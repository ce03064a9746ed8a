"""Users API routes."""

from __future__ import annotations

from typing import Any, Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from admin_console.api import envelope
from admin_console.api.deps import get_relations_repo, get_users_repo, list_query
from admin_console.domain.query import ListQuery
from admin_console.domain.relations.repo import RelationsRepository
from admin_console.domain.relations.schemas import UserGroupRequest
from admin_console.domain.users.models import User, UserWithGroups
from admin_console.domain.users.repo import UsersRepository
from admin_console.domain.users.schemas import UserCreateRequest, UserUpdateRequest

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=envelope.PaginatedResponse[UserWithGroups])
async def list_users_endpoint(
	query: ListQuery = Depends(list_query),
	role: Optional[Literal["all", "admin", "moderator", "user"]] = Query(default=None),
	status_filter: Optional[Literal["all", "active", "inactive"]] = Query(default=None, alias="status"),
	repo: UsersRepository = Depends(get_users_repo),
) -> Any:
	query.filters = {"role": role, "status": status_filter}
	return envelope.paginated(await repo.list_users(query))


@router.post("/group", response_model=envelope.ApiResponse[None])
async def add_user_to_group_endpoint(
	payload: UserGroupRequest,
	repo: RelationsRepository = Depends(get_relations_repo),
) -> Any:
	await repo.add_user_to_group(payload.user_id, payload.group_id)
	return envelope.ok(message="User added to group successfully")


@router.delete("/group", response_model=envelope.ApiResponse[None])
async def remove_user_from_group_endpoint(
	payload: UserGroupRequest,
	repo: RelationsRepository = Depends(get_relations_repo),
) -> Any:
	await repo.remove_user_from_group(payload.user_id, payload.group_id)
	return envelope.ok(message="User removed from group successfully")


@router.get("/{user_id}", response_model=envelope.ApiResponse[UserWithGroups])
async def get_user_endpoint(user_id: UUID, repo: UsersRepository = Depends(get_users_repo)) -> Any:
	return envelope.ok(await repo.get_user(user_id))


@router.post("", response_model=envelope.ApiResponse[User], status_code=status.HTTP_201_CREATED)
async def create_user_endpoint(payload: UserCreateRequest, repo: UsersRepository = Depends(get_users_repo)) -> Any:
	user = await repo.create_user(
		username=payload.username,
		email=payload.email,
		password=payload.password,
		role=payload.role,
		status=payload.status,
	)
	return envelope.ok(user, message="User created successfully")


@router.put("/{user_id}", response_model=envelope.ApiResponse[User])
async def update_user_endpoint(
	user_id: UUID,
	payload: UserUpdateRequest,
	repo: UsersRepository = Depends(get_users_repo),
) -> Any:
	user = await repo.update_user(user_id, payload.changes())
	return envelope.ok(user, message="User updated successfully")


@router.delete("/{user_id}", response_model=envelope.ApiResponse[None])
async def delete_user_endpoint(user_id: UUID, repo: UsersRepository = Depends(get_users_repo)) -> Any:
	await repo.delete_user(user_id)
	return envelope.ok(message="User deleted successfully")
