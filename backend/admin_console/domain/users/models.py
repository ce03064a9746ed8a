"""Domain models for console users."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import Field

from admin_console.domain.common.models import Entity, GroupSummary, UserRole, decode_json


class User(Entity):
	"""A user row as exposed by the API; the password hash never leaves storage."""

	username: str
	email: str
	role: UserRole
	status: bool


class UserWithGroups(User):
	groups: list[GroupSummary] = Field(default_factory=list)

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "UserWithGroups":
		data = dict(record)
		data.pop("password", None)
		data["groups"] = decode_json(data.get("groups"), default=[])
		return cls.model_validate(data)
