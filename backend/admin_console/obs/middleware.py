"""ASGI middleware for request ids, metrics and request logging."""

from __future__ import annotations

import time
from typing import Optional
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from admin_console.api.request_id import REQUEST_ID_ATTR
from admin_console.obs import logging as obs_logging
from admin_console.obs import metrics
from admin_console.settings import settings


def _route_template(request: Request) -> str:
	route = request.scope.get("route")
	if route and getattr(route, "path", None):
		return route.path  # type: ignore[return-value]
	return request.url.path


def _with_request_id(response: Response, request_id: str) -> Response:
	if "X-Request-Id" not in response.headers:
		response.headers["X-Request-Id"] = request_id
	return response


class ObservabilityMiddleware(BaseHTTPMiddleware):
	"""Tag every request with an ``X-Request-Id``; when enabled, also record metrics and logs."""

	def __init__(self, app, *, enabled: bool = True) -> None:
		super().__init__(app)
		self._enabled = enabled
		self._logger = obs_logging.get_logger("admin_console.http")

	async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
		request_id = getattr(request.state, REQUEST_ID_ATTR, None) or request.headers.get("X-Request-Id") or str(uuid4())
		setattr(request.state, REQUEST_ID_ATTR, request_id)
		if not settings.obs_enabled or not self._enabled:
			return _with_request_id(await call_next(request), request_id)

		client = request.client
		client_ip = client.host if client else None
		tokens = obs_logging.bind_context(
			request_id=request_id,
			route=request.url.path,
			client_ip=client_ip,
		)
		start = time.perf_counter()
		status_code = 500
		response: Optional[Response] = None
		try:
			response = await call_next(request)
			status_code = response.status_code
		except Exception:
			self._logger.exception(
				"http_request_error",
				extra={"method": request.method, "path": request.url.path},
			)
			raise
		finally:
			elapsed_seconds = time.perf_counter() - start
			route_template = _route_template(request)
			metrics.observe_request(route_template, request.method, status_code, elapsed_seconds)
			self._logger.info(
				"http_request",
				extra={
					"status": status_code,
					"method": request.method,
					"latency_ms": round(elapsed_seconds * 1000, 3),
					"route_template": route_template,
				},
			)
			obs_logging.reset_context(tokens)

		return _with_request_id(response, request_id)


def install(app, *, enabled: bool = True) -> None:
	app.add_middleware(ObservabilityMiddleware, enabled=enabled)
