"""Pydantic request schemas for the users API."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from admin_console.domain.common.models import UserRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreateRequest(BaseModel):
	username: str = Field(..., min_length=1, max_length=30)
	email: str = Field(..., max_length=100, pattern=EMAIL_PATTERN)
	role: UserRole = UserRole.USER
	password: str = Field(..., min_length=6, max_length=255)
	status: bool = True

	model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)


class UserUpdateRequest(BaseModel):
	username: Optional[str] = Field(default=None, min_length=1, max_length=30)
	email: Optional[str] = Field(default=None, max_length=100, pattern=EMAIL_PATTERN)
	role: Optional[UserRole] = None
	status: Optional[bool] = None
	password: Optional[str] = Field(default=None, min_length=6, max_length=255)

	model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)

	@field_validator("username", "email", "role", "status", "password")
	def _not_null(cls, value: Any, info):  # type: ignore[override]
		if value is None:
			raise ValueError(f"{info.field_name} cannot be null")
		return value

	def changes(self) -> dict[str, Any]:
		return self.model_dump(exclude_unset=True)
