# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .stats_service import StatsService
from .tool_service import ToolService
from .review_service import ReviewService
from .download_service import DownloadService
from .user_service import UserService

__all__ = [
    "StatsService",
    "ToolService",
    "ReviewService",
    "DownloadService",
    "UserService",
]
