"""Read-only field context routes: descriptive signal facts for a window."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fieldsight.database import get_db
from fieldsight.schemas.context import FieldContext
from fieldsight.schemas.inference import WindowQuery
from fieldsight.services.inference_service import InferenceService

router = APIRouter(prefix="/context", tags=["context"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to fetch context data")


@router.get("/{field_id}", response_model=FieldContext)
async def get_field_context(
	field_id: str,
	window_start: datetime = Query(...),
	window_end: datetime = Query(...),
	db: AsyncSession = Depends(get_db),
) -> FieldContext:
	service = InferenceService.from_session(db)
	try:
		query = WindowQuery(field_id=field_id, window_start=window_start, window_end=window_end)
		return await service.get_context(query)
	except Exception as exc:
		raise _map_error(exc) from exc
