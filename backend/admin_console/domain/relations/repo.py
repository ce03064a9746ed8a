"""Join-table maintenance between users, groups, events and surveys."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from admin_console.domain.common.repository import Repository
from admin_console.domain.exceptions import ValidationError, storage_errors


def _require(message: str, *ids: Optional[UUID]) -> None:
	if any(value is None for value in ids):
		raise ValidationError(message)


class RelationsRepository(Repository):
	"""Adds are idempotent (``ON CONFLICT DO NOTHING``); removes are unconditional."""

	entity = "relation"

	async def add_user_to_group(self, user_id: Optional[UUID], group_id: Optional[UUID]) -> None:
		_require("User ID and Group ID are required", user_id, group_id)
		with storage_errors(
			"Failed to add user to group",
			missing_reference="User or group not found",
			user_id=str(user_id),
			group_id=str(group_id),
		):
			await self._execute(
				"""
				INSERT INTO relation_group_user (group_id, user_id)
				VALUES ($1, $2)
				ON CONFLICT (group_id, user_id) DO NOTHING
				""",
				group_id,
				user_id,
			)
		self._mutated("add_user_to_group")

	async def remove_user_from_group(self, user_id: Optional[UUID], group_id: Optional[UUID]) -> None:
		_require("User ID and Group ID are required", user_id, group_id)
		with storage_errors("Failed to remove user from group", user_id=str(user_id), group_id=str(group_id)):
			await self._execute(
				"DELETE FROM relation_group_user WHERE group_id = $1 AND user_id = $2",
				group_id,
				user_id,
			)
		self._mutated("remove_user_from_group")

	async def add_event_to_group(self, event_id: Optional[UUID], group_id: Optional[UUID]) -> None:
		_require("Event ID and Group ID are required", event_id, group_id)
		with storage_errors(
			"Failed to add event to group",
			missing_reference="Event or group not found",
			event_id=str(event_id),
			group_id=str(group_id),
		):
			await self._execute(
				"""
				INSERT INTO relation_group_event (group_id, event_id)
				VALUES ($1, $2)
				ON CONFLICT (group_id, event_id) DO NOTHING
				""",
				group_id,
				event_id,
			)
		self._mutated("add_event_to_group")

	async def remove_event_from_group(self, event_id: Optional[UUID], group_id: Optional[UUID]) -> None:
		_require("Event ID and Group ID are required", event_id, group_id)
		with storage_errors("Failed to remove event from group", event_id=str(event_id), group_id=str(group_id)):
			await self._execute(
				"DELETE FROM relation_group_event WHERE group_id = $1 AND event_id = $2",
				group_id,
				event_id,
			)
		self._mutated("remove_event_from_group")

	async def add_survey_to_event(
		self,
		survey_id: Optional[UUID],
		event_id: Optional[UUID],
		file_final: Optional[str] = None,
	) -> None:
		_require("Survey ID and Event ID are required", survey_id, event_id)
		with storage_errors(
			"Failed to add survey to event",
			missing_reference="Survey or event not found",
			survey_id=str(survey_id),
			event_id=str(event_id),
		):
			await self._execute(
				"""
				INSERT INTO relation_event_survey (event_id, survey_id, file_final)
				VALUES ($1, $2, $3)
				ON CONFLICT (event_id, survey_id) DO NOTHING
				""",
				event_id,
				survey_id,
				file_final,
			)
		self._mutated("add_survey_to_event")

	async def remove_survey_from_event(self, survey_id: Optional[UUID], event_id: Optional[UUID]) -> None:
		_require("Survey ID and Event ID are required", survey_id, event_id)
		with storage_errors("Failed to remove survey from event", survey_id=str(survey_id), event_id=str(event_id)):
			await self._execute(
				"DELETE FROM relation_event_survey WHERE event_id = $1 AND survey_id = $2",
				event_id,
				survey_id,
			)
		self._mutated("remove_survey_from_event")
