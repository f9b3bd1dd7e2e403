"""Route modules package."""

from inspectweb.api.routes.dashboard import router as dashboard_router
from inspectweb.api.routes.sessions import router as sessions_pages_router

__all__ = ["dashboard_router", "sessions_pages_router"]
