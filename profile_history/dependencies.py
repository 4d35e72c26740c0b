"""
Shared dependencies for the application.

Provides dependency injection functions used across routers.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .repositories.kv_store import IKeyValueStore
    from .services.history_service import ProfileHistoryService

# Global instances (set by main app)
_history_service: Optional["ProfileHistoryService"] = None
_store: Optional["IKeyValueStore"] = None


def set_history_service(service: Optional["ProfileHistoryService"]) -> None:
    """
    Set the global history service instance.

    Called by main app during startup.
    """
    global _history_service
    _history_service = service


async def get_history_service() -> "ProfileHistoryService":
    """
    Get history service instance for dependency injection.

    Used by all routers that need the history service.
    """
    if _history_service is None:
        raise RuntimeError("History service not initialized")
    return _history_service


def set_store(store: Optional["IKeyValueStore"]) -> None:
    global _store
    _store = store


async def get_store() -> "IKeyValueStore":
    """Get the key-value store backing the service (used by readiness checks)."""
    if _store is None:
        raise RuntimeError("Key-value store not initialized")
    return _store
