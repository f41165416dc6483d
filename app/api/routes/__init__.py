from app.api.routes.auth import router as auth_router
from app.api.routes.profile import router as profile_router
from app.api.routes.links import router as links_router
from app.api.routes.public import router as public_router
from app.api.routes.series import router as series_router
from app.api.routes.events import router as events_router
from app.api.routes.notices import router as notices_router
from app.api.routes.documents import router as documents_router
from app.api.routes.results import router as results_router
from app.api.routes.timeline import router as timeline_router

__all__ = [
    "auth_router",
    # Profile
    "profile_router",
    "links_router",
    "public_router",
    # Club calendar
    "series_router",
    "events_router",
    "notices_router",
    "documents_router",
    # Racing
    "results_router",
    "timeline_router",
]
