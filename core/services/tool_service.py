# =============================================================================
# core/services/tool_service.py - Tool Catalog Business Logic
# =============================================================================
# Handles tool reads (always with stats) and the admin write path.
#
# A tool update is two steps: update the tools row, then replace the
# button set (delete all, reinsert). They are not atomic; if the second
# step fails the tool is left without buttons until the admin retries.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.tool import DownloadButtonCreate, ToolCreate, ToolUpdate, ToolWithStats
from core.services.stats_service import StatsService
from app.exceptions import SlugConflictError, ToolNotFoundError

logger = logging.getLogger(__name__)


def button_rows(tool_id: str | UUID, buttons: list[DownloadButtonCreate]) -> list[dict[str, Any]]:
    """Build download_buttons rows numbered by their position in the list."""
    return [
        {
            "tool_id": str(tool_id),
            "label": button.label,
            "url": button.url,
            "order": index,
        }
        for index, button in enumerate(buttons)
    ]


class ToolService:
    """
    Service for tool catalog operations.

    Provides a clean interface between API routes and database.
    """

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    def list_tools(limit: int | None = None) -> list[ToolWithStats]:
        """
        List tools with buttons and stats, newest first.

        Args:
            limit: Maximum number of tools (None for all)
        """
        tools = SupabaseClient.fetch_tools(limit=limit)
        return StatsService.assemble_many(tools)

    @staticmethod
    def get_tool_by_slug(slug: str) -> ToolWithStats:
        """
        Get one tool by slug.

        Raises:
            ToolNotFoundError: If no tool has this slug
        """
        tool = SupabaseClient.fetch_tool_by_slug(slug)

        if not tool:
            raise ToolNotFoundError(slug)

        return StatsService.assemble(tool)

    # -------------------------------------------------------------------------
    # Admin Writes
    # -------------------------------------------------------------------------

    @staticmethod
    def create_tool(payload: ToolCreate) -> ToolWithStats:
        """
        Create a tool, then its download buttons.

        Returns:
            The new tool with its buttons (stats are all zero)

        Raises:
            SlugConflictError: If the slug is taken
        """
        try:
            tool = SupabaseClient.insert_tool(payload.to_row())
        except SupabaseClientError as e:
            if e.is_unique_violation:
                raise SlugConflictError(payload.slug)
            raise

        buttons = SupabaseClient.insert_buttons(button_rows(tool["id"], payload.download_buttons))

        logger.info(f"Created tool: {tool['id']} ({payload.slug}) with {len(buttons)} buttons")

        return ToolWithStats(**{**tool, "download_buttons": buttons})

    @staticmethod
    def update_tool(tool_id: str | UUID, payload: ToolUpdate) -> ToolWithStats:
        """
        Update a tool and replace its whole button set.

        Existing buttons are deleted and the payload's list is reinserted
        with order = list index. An empty list leaves the tool with no buttons.

        Raises:
            ToolNotFoundError: If no tool has this ID
            SlugConflictError: If the new slug belongs to another tool
        """
        tool_id_str = str(tool_id)

        row = payload.to_row()
        row["updated_at"] = datetime.now(timezone.utc).isoformat()

        try:
            tool = SupabaseClient.update_tool(tool_id_str, row)
        except SupabaseClientError as e:
            if e.is_unique_violation:
                raise SlugConflictError(payload.slug)
            raise

        if not tool:
            raise ToolNotFoundError(tool_id_str)

        SupabaseClient.delete_buttons(tool_id_str)
        buttons = SupabaseClient.insert_buttons(button_rows(tool_id_str, payload.download_buttons))

        logger.info(f"Updated tool: {tool_id_str}, replaced buttons ({len(buttons)})")

        stats = StatsService.tool_stats(tool_id_str)
        return ToolWithStats(
            **{**tool, "download_buttons": buttons},
            **stats.model_dump(),
        )

    @staticmethod
    def delete_tool(tool_id: str | UUID) -> None:
        """
        Delete a tool. Buttons, downloads and reviews cascade.

        Raises:
            ToolNotFoundError: If no tool has this ID
        """
        tool_id_str = str(tool_id)

        if not SupabaseClient.delete_tool(tool_id_str):
            raise ToolNotFoundError(tool_id_str)

        logger.info(f"Deleted tool: {tool_id_str}")
