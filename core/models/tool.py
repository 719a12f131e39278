# =============================================================================
# core/models/tool.py - Tool and Download Button Schemas
# =============================================================================
# These models define the API contract for the tool catalog:
# - ToolCreate / ToolUpdate: admin write payloads (tool fields + buttons)
# - DownloadButtonCreate: one labeled outbound link in a write payload
# - DownloadButton: a stored button row
# - ToolWithStats: a tool as returned to clients, with its buttons and the
#   derived download/review statistics
# =============================================================================

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .common import OptionalUrlStr, UrlStr


# =============================================================================
# Download Buttons
# =============================================================================

class DownloadButtonCreate(BaseModel):
    """
    A download button in an admin write payload.

    Any `order` the caller sends is ignored: buttons are stored in list
    order, numbered 0..n-1.
    """

    label: str = Field(..., min_length=1, examples=["Download (Windows)"])
    url: UrlStr = Field(..., examples=["https://github.com/example/tool/releases"])


class DownloadButton(BaseModel):
    """A stored download_buttons row."""

    id: UUID
    tool_id: UUID
    label: str
    url: str
    order: int = 0


# =============================================================================
# Tool Write Payloads
# =============================================================================

class ToolWrite(BaseModel):
    """
    Fields shared by tool create and update payloads.

    The button list is accepted as `downloadButtons` (what the admin panel
    sends) or `download_buttons`.
    """

    title: str = Field(..., min_length=1, examples=["Steam Achievement Manager"])

    slug: str = Field(
        ...,
        min_length=1,
        description="URL key; must be unique across tools",
        examples=["steam-achievement-manager"],
    )

    short_desc: str = Field(
        ...,
        min_length=10,
        description="One-line summary shown on tool cards",
    )

    description_markdown: str = Field(
        ...,
        min_length=20,
        description="Full markdown description shown on the detail page",
    )

    images: list[UrlStr] = Field(default_factory=list)

    tags: list[str] = Field(default_factory=list)

    donation_url: OptionalUrlStr = None

    telegram_url: OptionalUrlStr = Field(
        default=None,
        description="Community link (Telegram/Discord)",
    )

    download_buttons: list[DownloadButtonCreate] = Field(
        default_factory=list,
        validation_alias=AliasChoices("downloadButtons", "download_buttons"),
    )

    @field_validator("download_buttons", mode="before")
    @classmethod
    def drop_blank_buttons(cls, value: Any) -> Any:
        """Drop rows the admin form left empty (no label or no URL)."""
        if not isinstance(value, list):
            return value
        kept = []
        for button in value:
            if isinstance(button, dict):
                label = str(button.get("label") or "").strip()
                url = str(button.get("url") or "").strip()
                if not label or not url:
                    continue
            kept.append(button)
        return kept

    def to_row(self) -> dict[str, Any]:
        """Columns for the tools table (buttons are written separately)."""
        return self.model_dump(exclude={"download_buttons"})


class ToolCreate(ToolWrite):
    """Payload for POST /api/admin/tools."""


class ToolUpdate(ToolWrite):
    """Payload for PUT /api/admin/tools/{id}. Replaces the tool and all its buttons."""


# =============================================================================
# Tool Responses
# =============================================================================

class Tool(BaseModel):
    """A stored tools row."""

    id: UUID
    title: str
    slug: str
    short_desc: str
    description_markdown: str
    images: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    donation_url: str | None = None
    telegram_url: str | None = None
    created_at: datetime
    updated_at: datetime


class ToolWithStats(Tool):
    """
    A tool with its download buttons and derived statistics.

    Returned by every tool read endpoint. The statistics are computed per
    request and never stored.

    Example:
        {
            "id": "...",
            "title": "X",
            "slug": "x",
            "download_buttons": [{"label": "Main", "url": "https://e.com/f", "order": 0, ...}],
            "download_count": 0,
            "average_rating": 0,
            "review_count": 0
        }
    """

    download_buttons: list[DownloadButton] = Field(default_factory=list)

    download_count: int = Field(default=0, ge=0)

    average_rating: float = Field(default=0, ge=0, le=5)

    review_count: int = Field(default=0, ge=0)
