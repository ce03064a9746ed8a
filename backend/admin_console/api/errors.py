"""Global error handlers rendering failures as the response envelope."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from admin_console.api.envelope import fail
from admin_console.api.request_id import get_request_id
from admin_console.domain.exceptions import ConsoleError

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header"}
_VALUE_ERROR_PREFIXES = ("Value error, ", "Assertion failed, ")


def _field_name(loc: Sequence[Any]) -> str:
	parts = [str(part) for part in loc if str(part) not in _LOCATION_PREFIXES]
	return ".".join(parts)


def readable_message(errors: Sequence[Mapping[str, Any]]) -> str:
	"""Reduce pydantic validation errors to the first human readable message."""
	if not errors:
		return "Invalid request"
	error = errors[0]
	loc = error.get("loc") or ()
	field = _field_name(loc)
	kind = error.get("type", "")
	message = str(error.get("msg", "Invalid request"))
	for prefix in _VALUE_ERROR_PREFIXES:
		if message.startswith(prefix):
			message = message[len(prefix):]
	if kind == "missing":
		return f"{field} is required" if field else "Request body is required"
	if kind == "json_invalid":
		return "Request body must be valid JSON"
	if kind == "uuid_parsing":
		return f"Invalid {field or 'id'}"
	if kind in {"value_error", "assertion_error"} or not field:
		return message
	return f"{field}: {message}"


def _envelope(status_code: int, error: str, request: Request) -> JSONResponse:
	response = JSONResponse(status_code=status_code, content=fail(error).model_dump())
	response.headers["X-Request-Id"] = get_request_id(request)
	return response


def install_error_handlers(app: FastAPI) -> None:
	@app.exception_handler(ConsoleError)
	async def console_error_handler(request: Request, exc: ConsoleError):  # type: ignore[override]
		log = logger.error if exc.status_code >= 500 else logger.info
		log("console_error", extra={"status": exc.status_code, "detail": exc.detail, "path": request.url.path})
		return _envelope(exc.status_code, exc.detail, request)

	@app.exception_handler(RequestValidationError)
	async def validation_exc_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
		message = readable_message(exc.errors())
		logger.info("request_invalid", extra={"detail": message, "path": request.url.path})
		return _envelope(status.HTTP_400_BAD_REQUEST, message, request)

	@app.exception_handler(StarletteHTTPException)
	async def http_exc_handler(request: Request, exc: StarletteHTTPException):  # type: ignore[override]
		return _envelope(exc.status_code, str(exc.detail), request)

	@app.exception_handler(Exception)
	async def unhandled_exc_handler(request: Request, exc: Exception):  # type: ignore[override]
		logger.exception("unhandled_error", extra={"path": request.url.path})
		return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", request)
