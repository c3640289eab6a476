"""Legacy inference routes (computed on the fly, not stored)."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fieldsight.database import get_db
from fieldsight.schemas.inference import InferenceResponse, WindowQuery
from fieldsight.services.inference_service import InferenceService

router = APIRouter(prefix="/inference", tags=["inference"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="inference failure")


@router.get("", response_model=InferenceResponse)
async def get_inference(
	field_id: str = Query(...),
	season_id: str | None = Query(default=None),
	window_start: datetime | None = Query(default=None),
	window_end: datetime | None = Query(default=None),
	db: AsyncSession = Depends(get_db),
) -> InferenceResponse:
	service = InferenceService.from_session(db)
	try:
		query = WindowQuery(
			field_id=field_id,
			season_id=season_id,
			window_start=window_start,
			window_end=window_end,
		)
		return await service.get_inference(query)
	except Exception as exc:
		raise _map_error(exc) from exc
