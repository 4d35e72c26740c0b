"""
Pure query helpers over usage history lists.

Filtering, recency ordering and truncation used by both the history
and starred views.
"""

from typing import Iterable, List, Optional

from .entities import UsageHistoryItem
from .exceptions import ValidationException


def filter_by_app(items: Iterable[UsageHistoryItem], app: str) -> List[UsageHistoryItem]:
    """
    Keep items opened on the given app.

    An item matches when its app value equals the filter (case-insensitive)
    or its display name contains the filter.
    """
    app_lower = app.lower()
    return [
        item
        for item in items
        if item.app.lower() == app_lower or app_lower in item.app_name.lower()
    ]


def sort_by_recency(items: Iterable[UsageHistoryItem]) -> List[UsageHistoryItem]:
    """Newest first; ties keep their stored order."""
    return sorted(items, key=lambda item: item.timestamp, reverse=True)


def validate_limit(limit: Optional[int]) -> None:
    if limit is not None and limit < 0:
        raise ValidationException("limit", limit, "Limit cannot be negative")


def recent(
    items: Iterable[UsageHistoryItem],
    app: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[UsageHistoryItem]:
    """
    Filter by app, order newest first and truncate.

    Args:
        items: History items in any order
        app: Optional app value or name fragment
        limit: Maximum number of items, None for all

    Returns:
        Matching items, most recent first

    Raises:
        ValidationException: If limit is negative
    """
    validate_limit(limit)

    selected = filter_by_app(items, app) if app else list(items)
    ordered = sort_by_recency(selected)
    return ordered if limit is None else ordered[:limit]
