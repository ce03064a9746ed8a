"""Enumerations and related-entity summaries shared across console domains."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Optional
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict


class UserRole(str, Enum):
	ADMIN = "admin"
	MODERATOR = "moderator"
	USER = "user"


class EventStatus(str, Enum):
	SCHEDULED = "scheduled"
	ACTIVE = "active"
	COMPLETED = "completed"
	CANCELLED = "cancelled"


class SurveyStatus(str, Enum):
	ACTIVE = "active"
	INACTIVE = "inactive"
	COMPLETED = "completed"


class UserSummary(BaseModel):
	uuid: UUID
	username: str
	email: str
	role: UserRole
	status: bool


class GroupSummary(BaseModel):
	uuid: UUID
	name: str
	description: Optional[str] = None


class EventSummary(BaseModel):
	uuid: UUID
	name: str
	description: Optional[str] = None
	time_start: datetime
	time_end: datetime
	status: EventStatus


class Entity(BaseModel):
	"""Columns every base table carries."""

	uuid: UUID
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)


def decode_json(value: Any, default: Any = None) -> Any:
	"""asyncpg hands json/jsonb back as text unless a codec is registered."""
	if value is None:
		return default
	if isinstance(value, (str, bytes)):
		return json.loads(value)
	return value


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
	"""Treat naive datetimes as UTC so comparisons and storage agree."""
	if value is not None and value.tzinfo is None:
		return value.replace(tzinfo=timezone.utc)
	return value


def blank_to_none(value: Any) -> Any:
	if isinstance(value, str) and not value.strip():
		return None
	return value


# Optional free text; blank input is stored as NULL.
OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]
