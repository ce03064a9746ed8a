"""asyncpg repository for console users."""

from __future__ import annotations

from typing import Any, Mapping
from uuid import UUID

from admin_console.domain.common.repository import Repository
from admin_console.domain.exceptions import NotFoundError, ValidationError, storage_errors
from admin_console.domain.query import Column, ListQuery, Page, WhereBuilder, build_assignments
from admin_console.domain.users.models import User, UserWithGroups
from admin_console.infra.password import hash_password

UNIQUE_MESSAGES = {
	"users_username_key": "Username already exists",
	"users_email_key": "Email already exists",
}

USER_COLUMNS = "u.uuid, u.username, u.email, u.role, u.status, u.created_at, u.updated_at"

SELECT_WITH_GROUPS = f"""
	SELECT {USER_COLUMNS},
		COALESCE(
			json_agg(json_build_object('uuid', g.uuid, 'name', g.name, 'description', g.description))
				FILTER (WHERE g.uuid IS NOT NULL),
			'[]'
		) AS groups
	FROM users u
	LEFT JOIN relation_group_user rgu ON u.uuid = rgu.user_id
	LEFT JOIN groups g ON rgu.group_id = g.uuid
"""

UPDATABLE = {
	"username": Column("username"),
	"email": Column("email"),
	"role": Column("role"),
	"status": Column("status"),
	"password": Column("password", encode=hash_password),
}

STATUS_FILTERS = {"active": True, "inactive": False}


class UsersRepository(Repository):
	entity = "user"

	async def list_users(self, query: ListQuery) -> Page[UserWithGroups]:
		where = WhereBuilder().search(query.search, "u.username", "u.email")
		role = query.filters.get("role")
		if role and role != "all":
			where.equals("u.role", role)
		status = query.filters.get("status")
		if status and status != "all":
			where.equals("u.status", STATUS_FILTERS.get(status))
		with storage_errors("Failed to fetch users"):
			return await self._paginate(
				select_sql=SELECT_WITH_GROUPS,
				count_sql="SELECT COUNT(*) FROM users u",
				group_by="u.uuid",
				order_by="u.created_at DESC",
				where=where,
				query=query,
				build=UserWithGroups.from_record,
			)

	async def get_user(self, user_id: UUID) -> UserWithGroups:
		with storage_errors("Failed to fetch user", user_id=str(user_id)):
			record = await self._fetchrow(f"{SELECT_WITH_GROUPS} WHERE u.uuid = $1 GROUP BY u.uuid", user_id)
		if record is None:
			raise NotFoundError("User not found")
		return UserWithGroups.from_record(record)

	async def create_user(
		self,
		*,
		username: str,
		email: str,
		password: str,
		role: str = "user",
		status: bool = True,
	) -> User:
		hashed = hash_password(password)
		with storage_errors("Failed to create user", unique_messages=UNIQUE_MESSAGES):
			record = await self._fetchrow(
				"""
				INSERT INTO users (username, email, role, password, status)
				VALUES ($1, $2, $3, $4, $5)
				RETURNING uuid, username, email, role, status, created_at, updated_at
				""",
				username,
				email,
				role,
				hashed,
				status,
			)
		self._mutated("create")
		return User.model_validate(dict(record))

	async def update_user(self, user_id: UUID, changes: Mapping[str, Any]) -> User:
		if not changes:
			raise ValidationError("No fields to update")
		params: list[Any] = []
		assignments = build_assignments(UPDATABLE, changes, params)
		params.append(user_id)
		with storage_errors("Failed to update user", unique_messages=UNIQUE_MESSAGES, user_id=str(user_id)):
			record = await self._fetchrow(
				f"""
				UPDATE users SET {", ".join(assignments)}, updated_at = NOW()
				WHERE uuid = ${len(params)}
				RETURNING uuid, username, email, role, status, created_at, updated_at
				""",
				*params,
			)
		if record is None:
			raise NotFoundError("User not found")
		self._mutated("update")
		return User.model_validate(dict(record))

	async def delete_user(self, user_id: UUID) -> None:
		with storage_errors("Failed to delete user", user_id=str(user_id)):
			deleted = await self._fetchval("DELETE FROM users WHERE uuid = $1 RETURNING uuid", user_id)
		if deleted is None:
			raise NotFoundError("User not found")
		self._mutated("delete")
