"""API routes."""

from .auth_routes import router as auth_router
from .folders import router as folders_router
from .photos import router as photos_router

__all__ = [
    "auth_router",
    "folders_router",
    "photos_router",
]
