"""Event series routes."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from app.api.deps import CurrentUser, DBSession
from app.models import Series
from app.schemas.series import SeriesCreate, SeriesResponse, SeriesUpdate
from app.services.series_service import SeriesService

router = APIRouter(prefix="/series", tags=["series"])


@router.get("", response_model=list[SeriesResponse])
async def list_series(current_user: CurrentUser, db: DBSession) -> list[Series]:
    """List the current user's series."""
    return await SeriesService(db).list_for_user(current_user.id)


@router.post("", response_model=SeriesResponse, status_code=status.HTTP_201_CREATED)
async def create_series(data: SeriesCreate, current_user: CurrentUser, db: DBSession) -> Series:
    """Create a series."""
    return await SeriesService(db).create(data, current_user.id)


@router.get("/{series_id}", response_model=SeriesResponse)
async def get_series(series_id: UUID, current_user: CurrentUser, db: DBSession) -> Series:
    """Get a series."""
    series = await SeriesService(db).get_by_id(series_id, current_user.id)
    if not series:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Series not found")
    return series


@router.put("/{series_id}", response_model=SeriesResponse)
async def update_series(
    series_id: UUID,
    data: SeriesUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> Series:
    """Update a series."""
    series = await SeriesService(db).update(series_id, data, current_user.id)
    if not series:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Series not found")
    return series


@router.delete("/{series_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_series(series_id: UUID, current_user: CurrentUser, db: DBSession) -> None:
    """Delete a series and its documents."""
    deleted = await SeriesService(db).delete(series_id, current_user.id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Series not found")
