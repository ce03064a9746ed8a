"""Domain exceptions and storage error translation for the console repositories."""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from typing import Iterator, Mapping, Optional

import asyncpg
from fastapi import status

from admin_console.obs import metrics

logger = logging.getLogger(__name__)


class ConsoleError(Exception):
	"""Base class for errors surfaced to API callers."""

	status_code: int = status.HTTP_400_BAD_REQUEST
	detail: str = "console_error"

	def __init__(self, detail: str | None = None) -> None:
		super().__init__(detail or self.detail)
		if detail:
			self.detail = detail


class ValidationError(ConsoleError):
	"""Missing or malformed input the schema layer could not catch."""

	status_code = status.HTTP_400_BAD_REQUEST
	detail = "Validation failed"


class ConflictError(ConsoleError):
	"""A uniqueness constraint rejected the write."""

	status_code = status.HTTP_400_BAD_REQUEST
	detail = "Resource already exists"


class NotFoundError(ConsoleError):
	"""The targeted row does not exist."""

	status_code = status.HTTP_404_NOT_FOUND
	detail = "Not found"


class StorageError(ConsoleError):
	"""Unexpected database failure; the detail stays generic."""

	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
	detail = "Internal server error"


@contextmanager
def storage_errors(
	failure: str,
	*,
	unique_messages: Optional[Mapping[str, str]] = None,
	missing_reference: Optional[str] = None,
	**context: object,
) -> Iterator[None]:
	"""Translate asyncpg failures raised inside the block into console errors.

	``unique_messages`` maps constraint names to the message reported for a
	uniqueness conflict. ``missing_reference`` is reported as not-found when a
	foreign key rejects the write.
	"""
	try:
		yield
	except ConsoleError:
		raise
	except asyncpg.UniqueViolationError as exc:  # type: ignore[attr-defined]
		constraint = getattr(exc, "constraint_name", None) or ""
		message = (unique_messages or {}).get(constraint)
		metrics.inc_storage_error("unique")
		logger.info("unique_violation", extra={"constraint": constraint, "operation": failure})
		raise ConflictError(message or failure) from exc
	except asyncpg.ForeignKeyViolationError as exc:  # type: ignore[attr-defined]
		metrics.inc_storage_error("foreign_key")
		if missing_reference is None:
			logger.exception(failure, extra=dict(context))
			raise StorageError(failure) from exc
		raise NotFoundError(missing_reference) from exc
	except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as exc:
		metrics.inc_storage_error("database")
		logger.exception(failure, extra=dict(context))
		raise StorageError(failure) from exc
