"""Uniform response envelopes for the console API."""

from __future__ import annotations

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

from admin_console.domain.query import Page

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
	"""``{success, data?, error?, message?}`` with absent keys omitted."""

	success: bool = True
	data: Optional[T] = None
	error: Optional[str] = None
	message: Optional[str] = None

	@model_serializer(mode="wrap")
	def _omit_absent(self, handler) -> dict[str, Any]:
		payload = handler(self)
		return {key: value for key, value in payload.items() if value is not None}


class Pagination(BaseModel):
	page: int
	limit: int
	total: int
	total_pages: int

	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginatedResponse(BaseModel, Generic[T]):
	success: bool = True
	data: List[T] = Field(default_factory=list)
	pagination: Pagination


def ok(data: Any = None, *, message: Optional[str] = None) -> ApiResponse[Any]:
	return ApiResponse[Any](success=True, data=data, message=message)


def fail(error: str) -> ApiResponse[Any]:
	return ApiResponse[Any](success=False, error=error)


def paginated(page: Page[Any]) -> PaginatedResponse[Any]:
	return PaginatedResponse[Any](
		success=True,
		data=list(page.items),
		pagination=Pagination(
			page=page.page,
			limit=page.limit,
			total=page.total,
			total_pages=page.total_pages,
		),
	)
