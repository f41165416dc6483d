"""Public profile routes (no authentication required)."""

from fastapi import APIRouter, HTTPException, Query, status

from app.api.deps import DBSession
from app.api.routes.results import to_event_results
from app.models import Link
from app.schemas.event import PublicEventResponse
from app.schemas.link import LinkPublicResponse
from app.schemas.result import EventResults
from app.services.event_service import EventService
from app.services.link_service import LinkService
from app.services.result_service import ResultService

router = APIRouter(prefix="/public", tags=["public"])


def user_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found",
    )


@router.get("/{username}/links", response_model=list[LinkPublicResponse])
async def get_public_links(username: str, db: DBSession) -> list[Link]:
    """Public links of a profile in display order."""
    service = LinkService(db)
    links = await service.list_public(username)

    if links is None:
        raise user_not_found()

    return links


@router.get("/{username}/events", response_model=list[PublicEventResponse])
async def get_public_events(username: str, db: DBSession) -> list[PublicEventResponse]:
    """Calendar of a profile with each event's notices and documents."""
    events = await EventService(db).list_public(username)
    if events is None:
        raise user_not_found()
    return events


@router.get("/{username}/results", response_model=list[EventResults])
async def get_public_results(
    username: str,
    db: DBSession,
    search: str | None = Query(None, max_length=100),
) -> list[EventResults]:
    """Results page of a profile."""
    rows = await ResultService(db).public_results(username, search)
    if rows is None:
        raise user_not_found()
    return [to_event_results(event, results) for event, results in rows]
