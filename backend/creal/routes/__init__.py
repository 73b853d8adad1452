"""
Routes module - contains all API route handlers
"""

from .messages import router as messages_router
from .health import router as health_router

__all__ = [
    "messages_router",
    "health_router",
]
