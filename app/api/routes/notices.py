"""Event notice board routes."""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import CurrentUser, DBSession
from app.models import Notice
from app.schemas.notice import NoticeCreate, NoticeReorderRequest, NoticeResponse
from app.schemas.reorder import NoticeSequenceUpdate
from app.services.notice_service import NoticeService
from app.services.ordering import OrderValidationError, ScopeNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notices", tags=["notices"])


@router.get("", response_model=list[NoticeResponse])
async def list_notices(event_id: UUID, current_user: CurrentUser, db: DBSession) -> list[Notice]:
    """List an event's notices in board order."""
    try:
        return await NoticeService(db).list_for_event(event_id, current_user.id)
    except ScopeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=NoticeResponse, status_code=status.HTTP_201_CREATED)
async def create_notice(data: NoticeCreate, current_user: CurrentUser, db: DBSession) -> Notice:
    """Create a notice at the end of the event's board."""
    try:
        return await NoticeService(db).create(data, current_user.id)
    except ScopeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/reorder")
async def reorder_notices(
    data: NoticeReorderRequest,
    current_user: CurrentUser,
    db: DBSession,
) -> dict:
    """Apply explicit sequences to all notices of an event."""
    try:
        await NoticeService(db).reorder(data, current_user.id)
    except ScopeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except OrderValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(f"Error reordering notices: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to reorder notices",
        )

    return {"message": "Notices reordered successfully"}


@router.put("/{notice_id}", response_model=NoticeResponse)
async def move_notice(
    notice_id: UUID,
    data: NoticeSequenceUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> Notice:
    """Move a notice to a new index on its board."""
    try:
        notice = await NoticeService(db).move(notice_id, data.sequence, current_user.id)
    except OrderValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(f"Error updating notice: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update notice",
        )

    if not notice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notice not found")
    return notice


@router.delete("/{notice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notice(notice_id: UUID, current_user: CurrentUser, db: DBSession) -> None:
    """Delete a notice."""
    deleted = await NoticeService(db).delete(notice_id, current_user.id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notice not found")
