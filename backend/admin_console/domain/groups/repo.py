"""asyncpg repository for console groups."""

from __future__ import annotations

from typing import Any, Mapping, Optional
from uuid import UUID

from admin_console.domain.common.repository import Repository
from admin_console.domain.exceptions import NotFoundError, ValidationError, storage_errors
from admin_console.domain.groups.models import Group, GroupWithMembers
from admin_console.domain.query import Column, ListQuery, Page, WhereBuilder, build_assignments

UNIQUE_MESSAGES = {"groups_name_key": "Group name already exists"}

GROUP_COLUMNS = "g.uuid, g.name, g.description, g.created_at, g.updated_at"

SELECT_WITH_USERS = f"""
	SELECT {GROUP_COLUMNS},
		COALESCE(
			json_agg(json_build_object(
				'uuid', u.uuid, 'username', u.username, 'email', u.email, 'role', u.role, 'status', u.status
			)) FILTER (WHERE u.uuid IS NOT NULL),
			'[]'
		) AS users
	FROM groups g
	LEFT JOIN relation_group_user rgu ON g.uuid = rgu.group_id
	LEFT JOIN users u ON rgu.user_id = u.uuid
"""

# Two independent aggregates; subqueries keep the join from multiplying rows.
SELECT_DETAIL = f"""
	SELECT {GROUP_COLUMNS},
		COALESCE((
			SELECT json_agg(json_build_object(
				'uuid', u.uuid, 'username', u.username, 'email', u.email, 'role', u.role, 'status', u.status
			) ORDER BY u.username)
			FROM relation_group_user rgu
			JOIN users u ON rgu.user_id = u.uuid
			WHERE rgu.group_id = g.uuid
		), '[]') AS users,
		COALESCE((
			SELECT json_agg(json_build_object(
				'uuid', e.uuid, 'name', e.name, 'description', e.description,
				'time_start', e.time_start, 'time_end', e.time_end, 'status', e.status
			) ORDER BY e.time_start DESC)
			FROM relation_group_event rge
			JOIN events e ON rge.event_id = e.uuid
			WHERE rge.group_id = g.uuid
		), '[]') AS events
	FROM groups g
	WHERE g.uuid = $1
"""

UPDATABLE = {
	"name": Column("name"),
	"description": Column("description"),
}


class GroupsRepository(Repository):
	entity = "group"

	async def list_groups(self, query: ListQuery) -> Page[GroupWithMembers]:
		where = WhereBuilder().search(query.search, "g.name", "g.description")
		with storage_errors("Failed to fetch groups"):
			return await self._paginate(
				select_sql=SELECT_WITH_USERS,
				count_sql="SELECT COUNT(*) FROM groups g",
				group_by="g.uuid",
				order_by="g.created_at DESC",
				where=where,
				query=query,
				build=GroupWithMembers.from_record,
			)

	async def get_group(self, group_id: UUID) -> GroupWithMembers:
		with storage_errors("Failed to fetch group", group_id=str(group_id)):
			record = await self._fetchrow(SELECT_DETAIL, group_id)
		if record is None:
			raise NotFoundError("Group not found")
		return GroupWithMembers.from_record(record)

	async def create_group(self, *, name: str, description: Optional[str] = None) -> Group:
		with storage_errors("Failed to create group", unique_messages=UNIQUE_MESSAGES):
			record = await self._fetchrow(
				"""
				INSERT INTO groups (name, description)
				VALUES ($1, $2)
				RETURNING uuid, name, description, created_at, updated_at
				""",
				name,
				description,
			)
		self._mutated("create")
		return Group.model_validate(dict(record))

	async def update_group(self, group_id: UUID, changes: Mapping[str, Any]) -> Group:
		if not changes:
			raise ValidationError("No fields to update")
		params: list[Any] = []
		assignments = build_assignments(UPDATABLE, changes, params)
		params.append(group_id)
		with storage_errors("Failed to update group", unique_messages=UNIQUE_MESSAGES, group_id=str(group_id)):
			record = await self._fetchrow(
				f"""
				UPDATE groups SET {", ".join(assignments)}, updated_at = NOW()
				WHERE uuid = ${len(params)}
				RETURNING uuid, name, description, created_at, updated_at
				""",
				*params,
			)
		if record is None:
			raise NotFoundError("Group not found")
		self._mutated("update")
		return Group.model_validate(dict(record))

	async def delete_group(self, group_id: UUID) -> None:
		with storage_errors("Failed to delete group", group_id=str(group_id)):
			deleted = await self._fetchval("DELETE FROM groups WHERE uuid = $1 RETURNING uuid", group_id)
		if deleted is None:
			raise NotFoundError("Group not found")
		self._mutated("delete")
