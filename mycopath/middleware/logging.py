"""Structured logging setup and request ID propagation."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from mycopath.config import LogFormat, get_settings
from mycopath.middleware.rate_limit import client_ip

_configured = False

# Probe endpoints are logged at debug so they do not drown the access log.
_QUIET_PATHS = frozenset({"/health"})


def _add_service(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
	event_dict.setdefault("service", "mycopath")
	return event_dict


def configure_structured_logging() -> None:
	"""Configure stdlib + structlog once per process."""
	global _configured
	if _configured:
		return

	settings = get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

	processors: list[Any] = [
		structlog.contextvars.merge_contextvars,
		structlog.processors.add_log_level,
		structlog.processors.TimeStamper(fmt="iso", utc=True),
		_add_service,
		structlog.processors.format_exc_info,
	]

	if settings.log_format == LogFormat.json:
		logging.basicConfig(level=log_level, format="%(message)s")
		processors.append(structlog.processors.JSONRenderer())
	else:
		logging.basicConfig(level=log_level)
		processors.append(structlog.dev.ConsoleRenderer())

	structlog.configure(
		processors=processors,
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.PrintLoggerFactory(),
		cache_logger_on_first_use=True,
	)
	_configured = True


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Bind request context for every log line and emit one access record per request."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
		request.state.request_id = request_id

		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(
			request_id=request_id,
			method=request.method,
			path=request.url.path,
		)

		logger = structlog.get_logger("mycopath.request")
		start = time.perf_counter()

		try:
			response = await call_next(request)
		except Exception:
			logger.exception(
				"http_request_failed",
				client_ip=client_ip(request),
				duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
			)
			raise

		response.headers["x-request-id"] = request_id
		duration_ms = round((time.perf_counter() - start) * 1000.0, 2)
		if request.url.path in _QUIET_PATHS:
			log = logger.debug
		elif response.status_code >= 500:
			log = logger.error
		elif response.status_code >= 400:
			log = logger.warning
		else:
			log = logger.info
		log(
			"http_request",
			status_code=response.status_code,
			client_ip=client_ip(request),
			duration_ms=duration_ms,
		)
		return response
