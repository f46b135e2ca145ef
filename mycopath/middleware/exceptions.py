"""Exception handlers and service-error mapping for consistent error responses."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from mycopath.auth.jwt import AuthError

logger = structlog.get_logger("mycopath.errors")


def map_service_error(exc: Exception) -> HTTPException:
	"""Translate a service-layer exception into the HTTP error clients see.

	``LookupError`` is a missing row, ``ValueError`` a rejected input,
	``PermissionError`` a rule the caller's role may not perform.  Anything
	else is logged with its traceback and surfaced as a generic 500.
	"""
	if isinstance(exc, HTTPException):
		return exc
	if isinstance(exc, AuthError):
		return HTTPException(
			status_code=exc.status_code,
			detail={"error": exc.code, "message": exc.detail},
		)
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, PermissionError):
		return HTTPException(
			status_code=status.HTTP_403_FORBIDDEN,
			detail={"error": "forbidden", "message": str(exc)},
		)
	if isinstance(exc, IntegrityError):
		logger.warning("integrity_error", error=str(exc.orig))
		return HTTPException(
			status_code=status.HTTP_409_CONFLICT,
			detail="A record with this value already exists",
		)
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	logger.error("unhandled_service_error", error=str(exc), exc_info=exc)
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail="Internal server error",
	)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
	logger.info("request_validation_failed", error_count=len(exc.errors()))
	return JSONResponse(
		status_code=status.HTTP_400_BAD_REQUEST,
		content={"message": "Validation failed", "errors": jsonable_encoder(exc.errors())},
	)


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
	logger.warning("integrity_error", error=str(exc.orig))
	return JSONResponse(
		status_code=status.HTTP_409_CONFLICT,
		content={"detail": "A record with this value already exists"},
	)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
	logger.error("unhandled_exception", error=str(exc), exc_info=exc)
	return JSONResponse(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		content={"detail": "Internal server error"},
	)


def register_exception_handlers(app: FastAPI) -> None:
	app.add_exception_handler(RequestValidationError, validation_exception_handler)
	app.add_exception_handler(IntegrityError, integrity_exception_handler)
	app.add_exception_handler(Exception, general_exception_handler)
