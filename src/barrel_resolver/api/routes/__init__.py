"""API route modules."""

from barrel_resolver.api.routes.barrels import router as barrels_router
from barrel_resolver.api.routes.health import router as health_router

__all__ = [
    "barrels_router",
    "health_router",
]
