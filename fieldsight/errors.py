"""Error taxonomy shared by the engine, repositories, and routes.

Validation and lookup failures subclass the builtin ``ValueError`` /
``LookupError`` so route-level error mapping can stay type based.
"""

from __future__ import annotations


class FieldSightError(Exception):
	"""Base class for all typed engine failures."""


class ValidationError(FieldSightError, ValueError):
	"""Blank or malformed identifiers / windows, rejected before any work."""


class NotFoundError(FieldSightError, LookupError):
	"""Unknown field or season."""


class ConflictError(FieldSightError):
	"""Duplicate insight insert for an existing (field_id, season_id)."""


class SerializationError(FieldSightError):
	"""Insight evidence cannot be represented as JSON."""


class StorageError(FieldSightError, RuntimeError):
	"""Generic storage I/O failure, wrapped with the query context."""


def require_identifier(value: str | None, name: str) -> str:
	"""Return the stripped identifier or raise ``ValidationError`` when blank."""
	if value is None or not isinstance(value, str) or not value.strip():
		raise ValidationError(f"{name} is required and must be a non-empty string")
	return value.strip()
