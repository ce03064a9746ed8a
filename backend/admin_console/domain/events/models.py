"""Domain models for console events."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import Field

from admin_console.domain.common.models import Entity, EventStatus, GroupSummary, decode_json


class Event(Entity):
	name: str
	description: Optional[str] = None
	time_start: datetime
	time_end: datetime
	status: EventStatus


class EventWithGroups(Event):
	groups: list[GroupSummary] = Field(default_factory=list)

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "EventWithGroups":
		data = dict(record)
		data["groups"] = decode_json(data.get("groups"), default=[])
		return cls.model_validate(data)
