"""HTTP routers."""

from .chapters import router as chapters_router
from .health import router as health_router

__all__ = ["chapters_router", "health_router"]
