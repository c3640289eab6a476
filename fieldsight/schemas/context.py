"""Pydantic schemas for the read-only field context view (never persisted)."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ContextTimeWindow(BaseModel):
	start: datetime
	end: datetime


class FieldContext(BaseModel):
	"""Descriptive facts about the signals in a window; never feeds inference."""

	field_id: str
	source: str
	time_window: ContextTimeWindow
	fetched_at: datetime
	data: dict[str, str]
