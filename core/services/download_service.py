# =============================================================================
# core/services/download_service.py - Download Tracking
# =============================================================================
# Download rows are an append-only log: inserted here, never updated or
# deleted (except by the tool delete cascade).
# =============================================================================

import logging
from uuid import UUID

from lib.supabase_client import SupabaseClient
from core.models.download import DownloadCreate

logger = logging.getLogger(__name__)


class DownloadService:
    """Service for recording download events."""

    @staticmethod
    def record_download(user_id: str | UUID, payload: DownloadCreate) -> None:
        """Record that the user clicked a tool's download button."""
        SupabaseClient.insert_download({
            "user_id": str(user_id),
            "tool_id": str(payload.tool_id),
            "button_label": payload.button_label,
        })

        logger.info(f"Download recorded: tool {payload.tool_id} via '{payload.button_label}'")
