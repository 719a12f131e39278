# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: URL field types and the generic success response
# - user.py: Mirrored user schemas
# - tool.py: Tool and download button schemas
# - review.py: Review schemas
# - download.py: Download tracking schemas
# - stats.py: Derived statistics schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .common import OptionalUrlStr, SuccessResponse, UrlStr

from .user import UserCreate, UserProfile

from .tool import (
    DownloadButton,
    DownloadButtonCreate,
    Tool,
    ToolCreate,
    ToolUpdate,
    ToolWithStats,
    ToolWrite,
)

from .review import Reviewer, ReviewCreate, ReviewWithUser

from .download import DownloadCreate

from .stats import AdminLoginResponse, AdminStats, ToolStats

__all__ = [
    # Common
    "OptionalUrlStr",
    "SuccessResponse",
    "UrlStr",
    # User
    "UserCreate",
    "UserProfile",
    # Tool
    "DownloadButton",
    "DownloadButtonCreate",
    "Tool",
    "ToolCreate",
    "ToolUpdate",
    "ToolWithStats",
    "ToolWrite",
    # Review
    "Reviewer",
    "ReviewCreate",
    "ReviewWithUser",
    # Download
    "DownloadCreate",
    # Stats
    "AdminLoginResponse",
    "AdminStats",
    "ToolStats",
]
