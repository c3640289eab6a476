"""Repository interfaces and their SQLAlchemy implementations."""

from fieldsight.repositories.base import (
	AlreadyExists,
	FieldRepository,
	InsertResult,
	Inserted,
	InsightRepository,
	SeasonRepository,
	SignalRepository,
	SignalSet,
)
from fieldsight.repositories.sql import (
	SqlFieldRepository,
	SqlInsightRepository,
	SqlSeasonRepository,
	SqlSignalRepository,
)

__all__ = [
	"AlreadyExists",
	"FieldRepository",
	"InsertResult",
	"Inserted",
	"InsightRepository",
	"SeasonRepository",
	"SignalRepository",
	"SignalSet",
	"SqlFieldRepository",
	"SqlInsightRepository",
	"SqlSeasonRepository",
	"SqlSignalRepository",
]
