"""Race result routes."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from app.api.deps import CurrentUser, DBSession
from app.models import Event, EventResult
from app.schemas.result import EventResultResponse, EventResults, ResultLink, ResultsReplace
from app.services.result_service import ResultService

router = APIRouter(tags=["results"])


def to_event_results(event: Event, results: list[EventResult]) -> EventResults:
    """Shape an event and its results for the results page."""
    return EventResults(
        id=event.id,
        name=event.title,
        date=str(event.start_date.year),
        results=[
            ResultLink(
                id=item.id,
                url=item.document_url,
                date_range=item.date_range,
                boat_class=item.boat_class,
            )
            for item in results
        ],
    )


@router.get("/events/{event_id}/results", response_model=list[EventResultResponse])
async def list_event_results(
    event_id: UUID, current_user: CurrentUser, db: DBSession
) -> list[EventResult]:
    """Results of an event, latest date range first."""
    results = await ResultService(db).list_for_event(event_id, current_user.id)
    if results is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return results


@router.put("/events/{event_id}/results", response_model=list[EventResultResponse])
async def replace_event_results(
    event_id: UUID,
    data: ResultsReplace,
    current_user: CurrentUser,
    db: DBSession,
) -> list[EventResult]:
    """Replace every result of an event."""
    results = await ResultService(db).replace_for_event(event_id, data, current_user.id)
    if results is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return results


@router.get("/results", response_model=list[EventResults])
async def list_results(
    current_user: CurrentUser,
    db: DBSession,
    search: str | None = Query(None, max_length=100),
) -> list[EventResults]:
    """The current user's events that have results, newest first."""
    rows = await ResultService(db).events_with_results(current_user.id, search)
    return [to_event_results(event, results) for event, results in rows]
