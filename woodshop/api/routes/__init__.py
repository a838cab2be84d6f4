"""API routes module."""

from woodshop.api.routes.gallery import router as gallery_router
from woodshop.api.routes.health import router as health_router

__all__ = ["gallery_router", "health_router"]
