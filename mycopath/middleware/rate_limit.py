"""Redis-backed rate limiting for the login and registration endpoints."""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from mycopath.config import get_settings


def client_ip(request: Request) -> str:
	forwarded = request.headers.get("x-forwarded-for")
	if forwarded:
		return forwarded.split(",")[0].strip()
	if request.client is not None:
		return request.client.host
	return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
	"""Fixed-window per-IP limiter backed by Redis atomic counters."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		if request.method != "POST":
			return await call_next(request)

		quota = self._quota_for(request.url.path)
		if quota is None:
			return await call_next(request)

		redis_client = getattr(request.app.state, "redis", None)
		if redis_client is None:
			return await call_next(request)

		settings = get_settings()
		window = settings.rate_limit_window_seconds
		endpoint = request.url.path.rsplit("/", 1)[-1]
		key = f"ratelimit:auth:{endpoint}:{client_ip(request)}"
		current = await redis_client.incr(key)
		if current == 1:
			await redis_client.expire(key, window)

		if current > quota:
			return JSONResponse(
				status_code=429,
				content={
					"detail": {
						"error": "rate_limited",
						"message": "Too many attempts, please try again later",
						"quota": quota,
						"window_seconds": window,
					}
				},
			)

		return await call_next(request)

	@staticmethod
	def _quota_for(path: str) -> int | None:
		settings = get_settings()
		if path == "/api/auth/login":
			return settings.rate_limit_login_per_window
		if path == "/api/auth/register":
			return settings.rate_limit_register_per_window
		return None
