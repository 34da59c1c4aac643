"""API routers for the JSON Feed service."""

from jsonfeed.api.routes_fetch import router as fetch_router
from jsonfeed.api.routes_health import router as health_router
from jsonfeed.api.routes_validate import router as validate_router

__all__ = [
    "fetch_router",
    "health_router",
    "validate_router",
]
