"""Request bodies for linking and unlinking entities."""

from __future__ import annotations

from typing import ClassVar, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from admin_console.domain.common.models import OptionalText


class _RelationRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	required_message: ClassVar[str] = ""

	def _missing(self, *values: Optional[UUID]) -> None:
		if any(value is None for value in values):
			raise ValueError(self.required_message)


class UserGroupRequest(_RelationRequest):
	user_id: Optional[UUID] = Field(default=None, alias="userId")
	group_id: Optional[UUID] = Field(default=None, alias="groupId")

	required_message: ClassVar[str] = "User ID and Group ID are required"

	@model_validator(mode="after")
	def _present(self) -> "UserGroupRequest":
		self._missing(self.user_id, self.group_id)
		return self


class EventGroupRequest(_RelationRequest):
	event_id: Optional[UUID] = Field(default=None, alias="eventId")
	group_id: Optional[UUID] = Field(default=None, alias="groupId")

	required_message: ClassVar[str] = "Event ID and Group ID are required"

	@model_validator(mode="after")
	def _present(self) -> "EventGroupRequest":
		self._missing(self.event_id, self.group_id)
		return self


class SurveyEventRequest(_RelationRequest):
	survey_id: Optional[UUID] = Field(default=None, alias="surveyId")
	event_id: Optional[UUID] = Field(default=None, alias="eventId")
	file_final: OptionalText = Field(default=None, max_length=225)

	required_message: ClassVar[str] = "Survey ID and Event ID are required"

	@model_validator(mode="after")
	def _present(self) -> "SurveyEventRequest":
		self._missing(self.survey_id, self.event_id)
		return self
