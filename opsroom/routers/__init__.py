"""API routers package.

This package contains all FastAPI routers for the application.
Each router handles a specific domain of the API.
"""

from .access import router as access_router
from .messages import router as messages_router
from .notes import router as notes_router
from .profiles import router as profiles_router
from .rooms import router as rooms_router

__all__ = [
    "access_router",
    "messages_router",
    "notes_router",
    "profiles_router",
    "rooms_router",
]
