"""Domain models for console surveys and their form definitions."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from admin_console.domain.common.models import Entity, EventSummary, SurveyStatus, decode_json


class FieldType(str, Enum):
	TEXT = "text"
	TEXTAREA = "textarea"
	EMAIL = "email"
	NUMBER = "number"
	DATE = "date"
	SELECT = "select"
	RADIO = "radio"
	CHECKBOX = "checkbox"
	RATING = "rating"


CHOICE_TYPES = frozenset({FieldType.SELECT, FieldType.RADIO, FieldType.CHECKBOX})


class FormField(BaseModel):
	id: str = Field(..., min_length=1)
	type: FieldType
	label: str = Field(..., min_length=1)
	required: bool = False
	options: Optional[list[str]] = None

	model_config = ConfigDict(use_enum_values=True, extra="forbid")

	@model_validator(mode="after")
	def _choices_have_options(self) -> "FormField":
		if FieldType(self.type) in CHOICE_TYPES and not self.options:
			raise ValueError(f"Field '{self.id}' of type {self.type} needs at least one option")
		return self


class SurveyForm(BaseModel):
	"""The JSON form a survey renders; stored as jsonb."""

	title: Optional[str] = None
	description: Optional[str] = None
	fields: list[FormField] = Field(default_factory=list)

	model_config = ConfigDict(extra="forbid")

	@model_validator(mode="after")
	def _unique_ids(self) -> "SurveyForm":
		seen: set[str] = set()
		for field in self.fields:
			if field.id in seen:
				raise ValueError(f"Duplicate form field id '{field.id}'")
			seen.add(field.id)
		return self


class Survey(Entity):
	name: str
	form: dict[str, Any]
	set_point: Optional[str] = None
	status: SurveyStatus

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "Survey":
		data = dict(record)
		data["form"] = decode_json(data.get("form"), default={})
		return cls.model_validate(data)


class SurveyWithEvents(Survey):
	events: list[EventSummary] = Field(default_factory=list)

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "SurveyWithEvents":
		data = dict(record)
		data["form"] = decode_json(data.get("form"), default={})
		data["events"] = decode_json(data.get("events"), default=[])
		return cls.model_validate(data)
