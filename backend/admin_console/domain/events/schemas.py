"""Pydantic request schemas for the events API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from admin_console.domain.common.models import EventStatus, OptionalText, as_utc

TIME_ORDER_MESSAGE = "End time must be after start time"


class EventCreateRequest(BaseModel):
	name: str = Field(..., min_length=1, max_length=30)
	description: OptionalText = None
	time_start: datetime
	time_end: datetime
	status: EventStatus = EventStatus.SCHEDULED

	model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)

	@field_validator("time_start", "time_end")
	def _utc(cls, value: datetime) -> datetime:
		return as_utc(value)

	@model_validator(mode="after")
	def _ordered(self) -> "EventCreateRequest":
		if self.time_end <= self.time_start:
			raise ValueError(TIME_ORDER_MESSAGE)
		return self


class EventUpdateRequest(BaseModel):
	name: Optional[str] = Field(default=None, min_length=1, max_length=30)
	description: OptionalText = None
	time_start: Optional[datetime] = None
	time_end: Optional[datetime] = None
	status: Optional[EventStatus] = None

	model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)

	@field_validator("name", "time_start", "time_end", "status")
	def _not_null(cls, value: Any, info):  # type: ignore[override]
		if value is None:
			raise ValueError(f"{info.field_name} cannot be null")
		return value

	@field_validator("time_start", "time_end")
	def _utc(cls, value: datetime) -> datetime:
		return as_utc(value)

	@model_validator(mode="after")
	def _ordered(self) -> "EventUpdateRequest":
		if self.time_start is not None and self.time_end is not None and self.time_end <= self.time_start:
			raise ValueError(TIME_ORDER_MESSAGE)
		return self

	def changes(self) -> dict[str, Any]:
		return self.model_dump(exclude_unset=True)
