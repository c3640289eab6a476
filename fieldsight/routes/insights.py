"""Insight routes, the primary get-or-generate entrypoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fieldsight.database import get_db
from fieldsight.errors import SerializationError, StorageError
from fieldsight.schemas.insights import InsightRead
from fieldsight.services.insight_service import InsightService

router = APIRouter(prefix="/insights", tags=["insights"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	if isinstance(exc, SerializationError):
		return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="insight serialization failure")
	if isinstance(exc, StorageError):
		return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="insight storage failure")
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="insight failure")


@router.get("", response_model=InsightRead)
async def get_or_generate_insight(
	field_id: str = Query(...),
	season_id: str = Query(...),
	db: AsyncSession = Depends(get_db),
) -> InsightRead:
	service = InsightService.from_session(db)
	try:
		return await service.get_or_generate_insight(field_id, season_id)
	except Exception as exc:
		raise _map_error(exc) from exc
