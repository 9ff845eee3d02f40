"""Admin HTTP surface."""

from .routers import router as admin_router, public_router

__all__ = ["admin_router", "public_router"]
