# =============================================================================
# app/routers/tools.py - Public Tool Catalog Endpoints
# =============================================================================
# Endpoints:
# - GET /tools: All tools with stats, newest first
# - GET /tools/featured: Newest tools with stats (FEATURED_TOOLS_LIMIT)
# - GET /tools/{slug}: One tool with stats
#
# No authentication required.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path

from app.config import settings
from core.models.tool import ToolWithStats
from core.services.tool_service import ToolService

router = APIRouter()


@router.get("", response_model=list[ToolWithStats])
def list_tools():
    """
    List every tool with its download buttons and statistics.
    """
    return ToolService.list_tools()


# Declared before /{slug} so "featured" isn't read as a slug
@router.get("/featured", response_model=list[ToolWithStats])
def featured_tools():
    """
    List the newest tools for the home page.
    """
    return ToolService.list_tools(limit=settings.FEATURED_TOOLS_LIMIT)


@router.get("/{slug}", response_model=ToolWithStats)
def get_tool(
    slug: Annotated[str, Path(description="Tool slug")],
):
    """
    Get one tool by slug.

    Raises:
        404: If no tool has this slug
    """
    return ToolService.get_tool_by_slug(slug)
