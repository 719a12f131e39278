# =============================================================================
# core/models/stats.py - Statistics Schemas
# =============================================================================
# - ToolStats: per-tool aggregates merged into ToolWithStats
# - AdminStats: dashboard totals for GET /api/admin/stats
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class ToolStats(BaseModel):
    """Derived statistics for one tool."""

    download_count: int = Field(default=0, ge=0)
    average_rating: float = Field(default=0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)


class AdminStats(BaseModel):
    """
    Catalog-wide totals for the admin dashboard.

    Serialized in camelCase, which is what the admin panel reads.

    Example:
        {"totalTools": 12, "totalDownloads": 340, "totalReviews": 25, "averageRating": 4.2}
    """

    model_config = ConfigDict(populate_by_name=True)

    total_tools: int = Field(default=0, ge=0, alias="totalTools")
    total_downloads: int = Field(default=0, ge=0, alias="totalDownloads")
    total_reviews: int = Field(default=0, ge=0, alias="totalReviews")
    average_rating: float = Field(default=0, ge=0, le=5, alias="averageRating")


class AdminLoginResponse(BaseModel):
    """Echo returned by GET /api/admin/test-login."""

    ok: bool = True
    admin: str | None = Field(default=None, description="Email of the admin")
    message: str = "Admin authentication successful"
