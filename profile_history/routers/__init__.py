"""
API routers for profile history endpoints.
"""

from . import apps_router, health_router, history_router

__all__ = ["history_router", "apps_router", "health_router"]
