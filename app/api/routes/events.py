"""Club event routes."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from app.api.deps import CurrentUser, DBSession
from app.models import Event
from app.schemas.event import EventCreate, EventResponse, EventUpdate
from app.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=list[EventResponse])
async def list_events(current_user: CurrentUser, db: DBSession) -> list[Event]:
    """List the current user's events by start date."""
    return await EventService(db).list_for_user(current_user.id)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(data: EventCreate, current_user: CurrentUser, db: DBSession) -> Event:
    """Create an event."""
    try:
        return await EventService(db).create(data, current_user.id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/search", response_model=list[EventResponse])
async def search_events(
    current_user: CurrentUser,
    db: DBSession,
    q: str = Query("", max_length=100),
) -> list[Event]:
    """Search the current user's events by text, boat class or series title."""
    query = q.strip()
    if len(query) < 2:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query must be at least 2 characters",
        )
    return await EventService(db).search(current_user.id, query)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: UUID, current_user: CurrentUser, db: DBSession) -> Event:
    """Get an event."""
    event = await EventService(db).get_by_id(event_id, current_user.id)
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID,
    data: EventUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> Event:
    """Update an event."""
    try:
        event = await EventService(db).update(event_id, data, current_user.id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: UUID, current_user: CurrentUser, db: DBSession) -> None:
    """Delete an event with everything attached to it."""
    deleted = await EventService(db).delete(event_id, current_user.id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
