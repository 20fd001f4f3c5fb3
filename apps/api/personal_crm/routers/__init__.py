"""API routers."""

from personal_crm.routers.calls import router as calls_router
from personal_crm.routers.gifts import router as gifts_router

__all__ = [
    "calls_router",
    "gifts_router",
]
