"""Shared field types and response envelopes."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator


def blank_to_none(value: Any) -> Any:
	"""Form inputs send ``""`` for untouched fields; treat those as missing."""
	if isinstance(value, str) and not value.strip():
		return None
	return value


# Numeric-looking strings ("2.5") are accepted by pydantic's lax float mode.
FormFloat = Annotated[float | None, BeforeValidator(blank_to_none)]
FormNumber = Annotated[float, BeforeValidator(blank_to_none)]
FormInt = Annotated[int | None, BeforeValidator(blank_to_none)]
FormDate = Annotated[date | None, BeforeValidator(blank_to_none)]
FormText = Annotated[str | None, BeforeValidator(blank_to_none)]


class MessageResponse(BaseModel):
	message: str
