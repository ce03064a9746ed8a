"""Pydantic request schemas for the surveys API."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from admin_console.domain.common.models import OptionalText, SurveyStatus
from admin_console.domain.surveys.models import SurveyForm

FORM_MESSAGE = "Form must be a valid JSON object"


def _require_object(value: Any) -> Any:
	if not isinstance(value, (dict, SurveyForm)):
		raise ValueError(FORM_MESSAGE)
	return value


class SurveyCreateRequest(BaseModel):
	name: str = Field(..., min_length=1, max_length=30)
	form: SurveyForm
	set_point: OptionalText = None
	status: SurveyStatus = SurveyStatus.ACTIVE

	model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)

	@field_validator("form", mode="before")
	def _form_object(cls, value: Any) -> Any:
		return _require_object(value)


class SurveyUpdateRequest(BaseModel):
	name: Optional[str] = Field(default=None, min_length=1, max_length=30)
	form: Optional[SurveyForm] = None
	set_point: OptionalText = None
	status: Optional[SurveyStatus] = None

	model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)

	@field_validator("form", mode="before")
	def _form_object(cls, value: Any) -> Any:
		return _require_object(value)

	@field_validator("name", "status")
	def _not_null(cls, value: Any, info):  # type: ignore[override]
		if value is None:
			raise ValueError(f"{info.field_name} cannot be null")
		return value

	def changes(self) -> dict[str, Any]:
		data = self.model_dump(exclude_unset=True)
		if self.form is not None and "form" in data:
			data["form"] = self.form.model_dump()
		return data
