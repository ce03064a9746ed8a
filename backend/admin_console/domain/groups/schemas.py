"""Pydantic request schemas for the groups API."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from admin_console.domain.common.models import OptionalText


class GroupCreateRequest(BaseModel):
	name: str = Field(..., min_length=1, max_length=30)
	description: OptionalText = None

	model_config = ConfigDict(str_strip_whitespace=True)


class GroupUpdateRequest(BaseModel):
	name: Optional[str] = Field(default=None, min_length=1, max_length=30)
	description: OptionalText = None

	model_config = ConfigDict(str_strip_whitespace=True)

	@field_validator("name")
	def _name_not_null(cls, value: Optional[str]) -> str:
		if value is None:
			raise ValueError("name cannot be null")
		return value

	def changes(self) -> dict[str, Any]:
		return self.model_dump(exclude_unset=True)
