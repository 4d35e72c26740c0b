"""
History command handler.

Single entry point for the launcher's history command: lists recent or
starred profiles and stars or unstars pairs. Every failure is mapped to
a fallback result instead of propagating.
"""

from dataclasses import dataclass, field
from typing import List, Literal, Optional

import structlog
from pydantic import BaseModel, Field

from ..domain.entities import UsageHistoryItem, strip_handle_prefix
from ..domain.queries import filter_by_app, recent
from .history_service import DEFAULT_QUERY_LIMIT, ProfileHistoryService

logger = structlog.get_logger(__name__)

FALLBACK_MESSAGE = "Unable to retrieve profile history at this time."

HistoryAction = Literal["list", "star", "unstar", "list_starred"]


class HistoryToolArgs(BaseModel):
    """Arguments for the history command."""

    action: HistoryAction = Field(
        default="list",
        description="list history, star/unstar a pair, or list starred items",
    )
    profile: Optional[str] = Field(None, description="Profile for star/unstar actions")
    app: Optional[str] = Field(None, description="Only show profiles opened on this app")
    limit: int = Field(
        default=DEFAULT_QUERY_LIMIT,
        ge=0,
        description="Maximum number of history items to return",
    )


@dataclass
class HistoryToolResult:
    """Outcome of a history command."""

    success: bool
    message: str
    items: List[UsageHistoryItem] = field(default_factory=list)


class HistoryTool:
    """Runs history commands against the profile history service."""

    def __init__(self, service: ProfileHistoryService):
        self.service = service

    async def run(self, args: Optional[HistoryToolArgs] = None) -> HistoryToolResult:
        """
        Execute a history command.

        Args:
            args: Command arguments (defaults to listing recent profiles)

        Returns:
            Result with a status message and any matching items
        """
        args = args or HistoryToolArgs()

        try:
            if args.action in ("star", "unstar"):
                return await self._toggle(args)
            if args.action == "list_starred":
                return await self._list_starred(args)
            return await self._list(args)
        except Exception as e:
            logger.error(
                "History command failed",
                action=args.action,
                error=str(e),
                exc_info=True,
            )
            return HistoryToolResult(success=False, message=FALLBACK_MESSAGE)

    async def _toggle(self, args: HistoryToolArgs) -> HistoryToolResult:
        profile = strip_handle_prefix((args.profile or "").strip())
        if not profile or not args.app:
            return HistoryToolResult(
                success=False, message="To star or unstar, provide both profile and app."
            )

        app = await self.service.resolve_app(args.app)
        if app is None:
            return HistoryToolResult(
                success=False, message=f'App "{args.app}" is not available.'
            )

        label = f"@{profile} on {app.name}"
        is_starred = await self.service.is_starred(profile, app.value)

        if args.action == "star" and is_starred:
            return HistoryToolResult(success=True, message=f"{label} is already starred.")
        if args.action == "unstar" and not is_starred:
            return HistoryToolResult(
                success=True, message=f"{label} is not currently starred."
            )

        await self.service.toggle_star(profile, app.value)
        verb = "Starred" if args.action == "star" else "Unstarred"
        return HistoryToolResult(success=True, message=f"{verb} {label}.")

    async def _list_starred(self, args: HistoryToolArgs) -> HistoryToolResult:
        items = await self.service.get_starred_profiles(app=args.app, limit=args.limit)
        suffix = f" on {args.app}" if args.app else ""

        if not items:
            return HistoryToolResult(
                success=True, message=f"No starred profiles found{suffix}."
            )

        return HistoryToolResult(
            success=True, message=f"Starred profiles{suffix}:", items=items
        )

    async def _list(self, args: HistoryToolArgs) -> HistoryToolResult:
        history = await self.service.get_usage_history()
        if not history:
            return HistoryToolResult(success=True, message="No profile history found.")

        if args.app and not filter_by_app(history, args.app):
            return HistoryToolResult(
                success=True, message=f"No profiles were recently opened on {args.app}."
            )

        items = recent(history, app=args.app, limit=args.limit)
        suffix = f" on {args.app}" if args.app else ""
        return HistoryToolResult(
            success=True, message=f"Recently opened profiles{suffix}:", items=items
        )
