# =============================================================================
# app/routers/admin.py - Admin Catalog Endpoints
# =============================================================================
# Every endpoint here requires an admin (get_current_admin):
# - GET /test-login: Echo the admin identity
# - GET /tools: All tools with stats
# - GET /stats: Catalog-wide totals
# - POST /tools: Create a tool and its buttons
# - PUT /tools/{tool_id}: Update a tool, replace its buttons
# - DELETE /tools/{tool_id}: Delete a tool (cascades)
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status

from app.auth import get_current_admin
from app.dependencies import CurrentAdmin
from core.models.common import SuccessResponse
from core.models.stats import AdminLoginResponse, AdminStats
from core.models.tool import ToolCreate, ToolUpdate, ToolWithStats
from core.services.stats_service import StatsService
from core.services.tool_service import ToolService

router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("/test-login", response_model=AdminLoginResponse)
def test_login(
    admin: CurrentAdmin,
):
    """
    Confirm the token belongs to an admin. Useful for diagnostics.
    """
    return AdminLoginResponse(admin=admin.email)


@router.get("/tools", response_model=list[ToolWithStats])
def admin_list_tools():
    """
    List every tool with stats for the admin table.
    """
    return ToolService.list_tools()


@router.get("/stats", response_model=AdminStats)
def admin_stats():
    """
    Totals of tools, downloads and reviews, plus the mean of all ratings.
    """
    return StatsService.admin_stats()


@router.post("/tools", response_model=ToolWithStats, status_code=status.HTTP_201_CREATED)
def create_tool(tool: ToolCreate):
    """
    Create a tool, then its download buttons.

    Button rows with an empty label or URL are dropped; the rest are
    stored in list order.

    Raises:
        400: Validation failure or duplicate slug
    """
    return ToolService.create_tool(tool)


@router.put("/tools/{tool_id}", response_model=ToolWithStats)
def update_tool(
    tool_id: Annotated[UUID, Path(description="Tool UUID")],
    tool: ToolUpdate,
):
    """
    Update a tool and replace its entire button set.

    Raises:
        400: Validation failure or duplicate slug
        404: Tool not found
    """
    return ToolService.update_tool(tool_id, tool)


@router.delete("/tools/{tool_id}", response_model=SuccessResponse)
def delete_tool(
    tool_id: Annotated[UUID, Path(description="Tool UUID")],
):
    """
    Delete a tool. Its buttons, downloads and reviews are deleted with it.

    Raises:
        404: Tool not found
    """
    ToolService.delete_tool(tool_id)
    return SuccessResponse()
