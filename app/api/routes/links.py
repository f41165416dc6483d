"""Profile link routes."""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import CurrentUser, DBSession
from app.config import settings
from app.models import Link
from app.schemas.link import LinkCreate, LinkResponse, LinkUpdate
from app.schemas.reorder import LinkOrderRequest, LinkOrderResponse, LinkOrderUpdate
from app.services.link_service import LinkService
from app.services.ordering import OrderValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/links", tags=["links"])


@router.get("", response_model=list[LinkResponse])
async def list_links(current_user: CurrentUser, db: DBSession) -> list[Link]:
    """List the current user's links in display order."""
    service = LinkService(db)
    return await service.list_for_user(current_user.id)


@router.post("", response_model=LinkResponse, status_code=status.HTTP_201_CREATED)
async def create_link(data: LinkCreate, current_user: CurrentUser, db: DBSession) -> Link:
    """Create a link at the end of the list."""
    service = LinkService(db)
    return await service.create(data, current_user.id)


@router.put("/order", response_model=LinkOrderResponse)
async def update_link_order(
    data: LinkOrderRequest,
    current_user: CurrentUser,
    db: DBSession,
) -> LinkOrderResponse:
    """Persist a new link order.

    Each entry's ``order`` is used when given, its array index otherwise.
    The batch is applied atomically and must leave positions ``0..N-1``.
    """
    service = LinkService(db)

    try:
        links = await service.reorder(data, current_user.id)
    except OrderValidationError as e:
        detail = {"success": False, "message": str(e)}
        if e.invalid_ids:
            detail["invalid_ids"] = e.invalid_ids
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    except SQLAlchemyError as e:
        logger.error(f"Error in link order update: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "success": False,
                "message": "Database operation failed",
                "error": str(e) if settings.is_development else "Database error occurred",
            },
        )

    if not links:
        return LinkOrderResponse(success=True, message="No links to update", updates=[])

    return LinkOrderResponse(
        success=True,
        message="Link order updated successfully",
        updates=[LinkOrderUpdate.model_validate(link) for link in links],
    )


@router.put("/{link_id}", response_model=LinkResponse)
async def update_link(
    link_id: UUID,
    data: LinkUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> Link:
    """Update a link."""
    service = LinkService(db)

    try:
        link = await service.update(link_id, data, current_user.id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not link:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Link not found or access denied",
        )

    return link


@router.delete("/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_link(link_id: UUID, current_user: CurrentUser, db: DBSession) -> None:
    """Delete a link."""
    service = LinkService(db)
    deleted = await service.delete(link_id, current_user.id)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Link not found or access denied",
        )
