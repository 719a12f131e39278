# =============================================================================
# core/services/stats_service.py - Derived Statistics
# =============================================================================
# Computes download/review aggregates at read time. Nothing here is stored
# or cached: every call goes back to the database.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from core.models.stats import AdminStats, ToolStats
from core.models.tool import ToolWithStats

logger = logging.getLogger(__name__)


def average(ratings: list[int]) -> float:
    """Arithmetic mean of the ratings, 0 when there are none."""
    if not ratings:
        return 0
    return sum(ratings) / len(ratings)


class StatsService:
    """
    Service for stat assembly.

    For a list of N tools this issues 2N queries (one download count and one
    ratings fetch per tool). Fine at directory scale.
    """

    @staticmethod
    def tool_stats(tool_id: str | UUID) -> ToolStats:
        """
        Compute the statistics for one tool.

        Args:
            tool_id: The tool UUID

        Returns:
            ToolStats with download_count, average_rating and review_count
        """
        download_count = SupabaseClient.count_downloads(tool_id)
        ratings = SupabaseClient.fetch_ratings(tool_id)

        return ToolStats(
            download_count=download_count,
            average_rating=average(ratings),
            review_count=len(ratings),
        )

    @staticmethod
    def assemble(tool: dict[str, Any]) -> ToolWithStats:
        """
        Merge a tool row (with its download_buttons) and its statistics.

        Buttons are returned sorted by their display order.
        """
        stats = StatsService.tool_stats(tool["id"])

        buttons = sorted(
            tool.get("download_buttons") or [],
            key=lambda b: b.get("order", 0),
        )

        return ToolWithStats(
            **{**tool, "download_buttons": buttons},
            **stats.model_dump(),
        )

    @staticmethod
    def assemble_many(tools: list[dict[str, Any]]) -> list[ToolWithStats]:
        """Assemble statistics for every tool, keeping the input order."""
        return [StatsService.assemble(tool) for tool in tools]

    @staticmethod
    def admin_stats() -> AdminStats:
        """
        Catalog-wide totals for the admin dashboard.

        The average is taken over every review, not over per-tool averages.
        """
        ratings = SupabaseClient.fetch_ratings()

        stats = AdminStats(
            total_tools=SupabaseClient.count_tools(),
            total_downloads=SupabaseClient.count_downloads(),
            total_reviews=SupabaseClient.count_reviews(),
            average_rating=average(ratings),
        )
        logger.debug(f"Admin stats: {stats.model_dump()}")
        return stats
