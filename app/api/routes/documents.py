"""Event and series document routes."""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import CurrentUser, DBSession
from app.models import Document
from app.schemas.document import DocumentCreate, DocumentResponse
from app.schemas.reorder import DocumentOrderUpdate
from app.services.document_service import DocumentService
from app.services.ordering import OrderValidationError, ScopeNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=list[DocumentResponse])
async def list_documents(
    current_user: CurrentUser,
    db: DBSession,
    event_id: UUID | None = None,
    series_id: UUID | None = None,
) -> list[Document]:
    """List documents of an event (with its series' documents) or of a series."""
    service = DocumentService(db)

    if (event_id is None) == (series_id is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either event_id or series_id must be provided",
        )

    try:
        if event_id is not None:
            return await service.list_for_event(event_id, current_user.id)
        return await service.list_for_series(series_id, current_user.id)
    except ScopeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    data: DocumentCreate,
    current_user: CurrentUser,
    db: DBSession,
) -> Document:
    """Create a document at the end of its event or series."""
    try:
        return await DocumentService(db).create(data, current_user.id)
    except ScopeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{document_id}", response_model=DocumentResponse)
async def move_document(
    document_id: UUID,
    data: DocumentOrderUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> Document:
    """Move a document to a new index within its event or series."""
    try:
        document = await DocumentService(db).move(document_id, data.order, current_user.id)
    except OrderValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(f"Error updating document: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating document",
        )

    if not document:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    return document


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(document_id: UUID, current_user: CurrentUser, db: DBSession) -> None:
    """Delete a document."""
    deleted = await DocumentService(db).delete(document_id, current_user.id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
