"""Domain models for console groups."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import Field

from admin_console.domain.common.models import Entity, EventSummary, UserSummary, decode_json


class Group(Entity):
	name: str
	description: Optional[str] = None


class GroupWithMembers(Group):
	"""A group with its members; ``events`` is only populated on single reads."""

	users: list[UserSummary] = Field(default_factory=list)
	events: list[EventSummary] = Field(default_factory=list)

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "GroupWithMembers":
		data = dict(record)
		data["users"] = decode_json(data.get("users"), default=[])
		data["events"] = decode_json(data.get("events"), default=[])
		return cls.model_validate(data)
